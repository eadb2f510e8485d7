"""Tests for the lift curve and drag polar."""

from __future__ import annotations

import math

import pytest

from rcdesign.aerodynamics import (
    CD0_TOTAL,
    CL_MAX,
    aspect_ratio,
    drag_coefficient,
    induced_drag_factor,
    lift_coefficient,
    oswald_efficiency,
)
from rcdesign.airfoils import AIRFOILS

NON_DELTA = ["flat-bottom", "semi-symmetrical", "symmetrical"]


# ---------------------------------------------------------------------------
# Lift
# ---------------------------------------------------------------------------


class TestLiftCoefficient:
    def test_zero_lift_angle_gives_zero(self) -> None:
        for name in NON_DELTA:
            zero = AIRFOILS[name].zero_lift_angle
            assert lift_coefficient(zero, name, 0.0) == pytest.approx(0.0, abs=1e-12)

    def test_thin_airfoil_slope(self) -> None:
        """Semi-symmetrical at 5 deg: 7 deg effective."""
        expected = 2.0 * math.pi * math.radians(7.0)
        assert lift_coefficient(5.0, "semi-symmetrical", 0.0) == pytest.approx(expected)

    def test_sweep_cosine_correction(self) -> None:
        straight = lift_coefficient(4.0, "symmetrical", 0.0)
        swept = lift_coefficient(4.0, "symmetrical", 30.0)
        assert swept == pytest.approx(straight * math.cos(math.radians(30.0)))

    def test_delta_ignores_input_sweep(self) -> None:
        assert lift_coefficient(5.0, "delta", 0.0) == lift_coefficient(5.0, "delta", 50.0)
        expected = 2.0 * math.pi * math.radians(5.0) * math.cos(math.radians(35.0))
        assert lift_coefficient(5.0, "delta", 0.0) == pytest.approx(expected)

    @pytest.mark.parametrize("airfoil", NON_DELTA)
    def test_non_decreasing_up_to_stall(self, airfoil: str) -> None:
        stall = AIRFOILS[airfoil].stall_angle
        aoas = [-10.0 + 0.5 * i for i in range(int((stall + 10.0) / 0.5) + 1)]
        values = [lift_coefficient(a, airfoil, 0.0) for a in aoas]
        assert all(b >= a for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("airfoil", NON_DELTA)
    def test_non_increasing_past_stall(self, airfoil: str) -> None:
        stall = AIRFOILS[airfoil].stall_angle
        aoas = [stall + 0.5 * i for i in range(1, 40)]
        values = [lift_coefficient(a, airfoil, 0.0) for a in aoas]
        assert all(b <= a for a, b in zip(values, values[1:]))

    def test_clamped_to_cl_max(self) -> None:
        # Flat-bottom at 14 deg: 18 deg effective -> 1.97 unclamped
        assert lift_coefficient(14.0, "flat-bottom", 0.0) == CL_MAX

    def test_never_exceeds_cl_max(self) -> None:
        for name in AIRFOILS:
            for aoa in range(-20, 40):
                assert lift_coefficient(float(aoa), name, 0.0) <= CL_MAX

    def test_attenuation_floors_at_zero(self) -> None:
        """Ten degrees past stall the lift is gone, and stays gone."""
        for name in NON_DELTA:
            stall = AIRFOILS[name].stall_angle
            assert lift_coefficient(stall + 10.0, name, 0.0) == pytest.approx(0.0, abs=1e-12)
            assert lift_coefficient(stall + 25.0, name, 0.0) == pytest.approx(0.0, abs=1e-12)

    def test_negative_lift_not_clamped(self) -> None:
        assert lift_coefficient(-10.0, "symmetrical", 0.0) < 0.0

    def test_unknown_airfoil_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported airfoil"):
            lift_coefficient(5.0, "naca-9999", 0.0)


# ---------------------------------------------------------------------------
# Drag
# ---------------------------------------------------------------------------


class TestDragCoefficient:
    def test_parasite_drag_sum(self) -> None:
        assert CD0_TOTAL == pytest.approx(0.016)

    def test_zero_lift_is_parasite_only(self) -> None:
        assert drag_coefficient(0.0, "symmetrical", 0.2, 1.0, "none") == pytest.approx(0.016)

    def test_induced_drag(self) -> None:
        cl = 0.5
        ar = 1.0 ** 2 / 0.2
        expected = 0.016 + cl ** 2 / (math.pi * ar * 0.8)
        assert drag_coefficient(cl, "semi-symmetrical", 0.2, 1.0, "none") == pytest.approx(expected)

    def test_winglets_reduce_induced_drag(self) -> None:
        plain = drag_coefficient(0.8, "symmetrical", 0.2, 1.0, "none")
        winglets = drag_coefficient(0.8, "symmetrical", 0.2, 1.0, "standard")
        assert winglets < plain

    def test_winglets_ignored_on_delta(self) -> None:
        plain = drag_coefficient(0.8, "delta", 0.5, 1.0, "none")
        winglets = drag_coefficient(0.8, "delta", 0.5, 1.0, "standard")
        assert winglets == plain

    def test_degenerate_area_has_no_induced_term(self) -> None:
        assert drag_coefficient(1.0, "symmetrical", 0.0, 1.0, "none") == pytest.approx(0.016)
        assert induced_drag_factor(1.0, -1.0, "symmetrical", "none") == 0.0


class TestHelpers:
    def test_aspect_ratio(self) -> None:
        assert aspect_ratio(1.0, 0.2) == pytest.approx(5.0)
        assert aspect_ratio(1.0, 0.0) == 0.0

    def test_oswald_efficiency(self) -> None:
        assert oswald_efficiency("symmetrical", "none") == 0.8
        assert oswald_efficiency("symmetrical", "standard") == 0.85
        assert oswald_efficiency("symmetrical", True) == 0.85
        assert oswald_efficiency("delta", "standard") == 0.8
