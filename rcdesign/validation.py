"""Validation rules — compute non-blocking warnings for a design.

Implements:
  - W01 angle of attack beyond the airfoil's stall angle
  - W02 thrust-to-weight below 1 (cannot climb vertically / hand-launch risk)
  - W03 aspect ratio above 12 (flexible, fragile wing)
  - W04 ailerons do not fit inside the half span
  - W05 non-physical air density (altitude/temperature out of model range)
  - W06 winglets on a delta wing (ignored by geometry and drag)

All warnings are level="warn" and never block a recompute.  Hard limits are
enforced by the DesignParameters field constraints instead.
"""

from __future__ import annotations

import math

from rcdesign.aerodynamics import aspect_ratio
from rcdesign.airfoils import get_airfoil
from rcdesign.models import DesignParameters, PerformanceResult, ValidationWarning
from rcdesign.performance import compute_performance, wing_area

_MAX_ASPECT_RATIO: float = 12.0


def _check_w01(design: DesignParameters, out: list[ValidationWarning]) -> None:
    """W01: angle of attack above the stall angle."""
    stall = get_airfoil(design.airfoil).stall_angle
    if design.angle_of_attack > stall:
        out.append(
            ValidationWarning(
                id="W01",
                message=(
                    f"Angle of attack {design.angle_of_attack:.1f} deg is past the "
                    f"{design.airfoil} stall angle ({stall:.0f} deg), lift is reduced"
                ),
                fields=["angle_of_attack", "airfoil"],
            )
        )


def _check_w02(perf: PerformanceResult, out: list[ValidationWarning]) -> None:
    """W02: thrust-to-weight below 1."""
    twr = perf.thrust_to_weight
    if isinstance(twr, float) and twr < 1.0:
        out.append(
            ValidationWarning(
                id="W02",
                message=f"Thrust-to-weight ratio {twr:.2f} is below 1",
                fields=["prop_diameter", "prop_pitch", "motor_rpm", "total_weight"],
            )
        )


def _check_w03(design: DesignParameters, out: list[ValidationWarning]) -> None:
    """W03: aspect ratio above 12."""
    area = wing_area(design.wing_span, design.wing_chord, design.taper_ratio, design.is_delta)
    ar = aspect_ratio(design.wing_span, area)
    if ar > _MAX_ASPECT_RATIO:
        out.append(
            ValidationWarning(
                id="W03",
                message=f"Very high aspect ratio ({ar:.1f}), wing may flex or break",
                fields=["wing_span", "wing_chord", "taper_ratio"],
            )
        )


def _check_w04(design: DesignParameters, out: list[ValidationWarning]) -> None:
    """W04: aileron length + tip inset exceed the half span."""
    if not design.aileron_enable or design.is_delta:
        return
    if design.aileron_length + design.aileron_position > design.wing_span / 2.0:
        out.append(
            ValidationWarning(
                id="W04",
                message="Ailerons extend past the wing root",
                fields=["aileron_length", "aileron_position", "wing_span"],
            )
        )


def _check_w05(perf: PerformanceResult, out: list[ValidationWarning]) -> None:
    """W05: density is NaN, infinite or non-positive."""
    rho = perf.air_density
    if not math.isfinite(rho) or rho <= 0.0:
        out.append(
            ValidationWarning(
                id="W05",
                message="Altitude/temperature outside the atmosphere model, forces are meaningless",
                fields=["altitude", "temperature"],
            )
        )


def _check_w06(design: DesignParameters, out: list[ValidationWarning]) -> None:
    """W06: winglets selected on a delta wing."""
    if design.is_delta and design.winglet_type != "none":
        out.append(
            ValidationWarning(
                id="W06",
                message="Winglets are ignored on a delta wing",
                fields=["winglet_type", "airfoil"],
            )
        )


def compute_warnings(
    design: DesignParameters,
    performance: PerformanceResult | None = None,
) -> list[ValidationWarning]:
    """Run every check and return the warnings in id order.

    *performance* may be passed in when the caller already computed it.
    """
    design = design.in_meters()
    perf = performance if performance is not None else compute_performance(design)

    out: list[ValidationWarning] = []
    _check_w01(design, out)
    _check_w02(perf, out)
    _check_w03(design, out)
    _check_w04(design, out)
    _check_w05(perf, out)
    _check_w06(design, out)
    return out
