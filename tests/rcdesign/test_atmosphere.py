"""Tests for the ISA troposphere density model."""

from __future__ import annotations

import math

import pytest

from rcdesign.atmosphere import P0_PA, air_density, pressure_at


class TestPressure:
    def test_sea_level_pressure(self) -> None:
        assert pressure_at(0.0) == pytest.approx(P0_PA)

    def test_pressure_drops_with_altitude(self) -> None:
        assert pressure_at(1000.0) < pressure_at(0.0)
        # Standard atmosphere: ~89.9 kPa at 1 km
        assert pressure_at(1000.0) == pytest.approx(89875.0, rel=1e-3)


class TestAirDensity:
    def test_sea_level_standard_day(self) -> None:
        assert air_density(15.0, 0.0) == pytest.approx(1.225, abs=0.001)

    def test_colder_air_is_denser(self) -> None:
        assert air_density(-10.0, 0.0) > air_density(15.0, 0.0)

    def test_density_drops_with_altitude(self) -> None:
        assert air_density(15.0, 2000.0) < air_density(15.0, 0.0)

    def test_extreme_altitude_gives_nan_without_raising(self) -> None:
        """Above the pressure-formula singularity the base goes negative."""
        rho = air_density(15.0, 60000.0)
        assert math.isnan(rho)

    def test_absolute_zero_gives_infinity_without_raising(self) -> None:
        rho = air_density(-273.15, 0.0)
        assert math.isinf(rho)

    def test_below_absolute_zero_is_negative(self) -> None:
        assert air_density(-300.0, 0.0) < 0.0
