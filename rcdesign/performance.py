"""Performance calculator — forces, static thrust, thrust-to-weight.

Pure math module, no geometry.  Safe to call on every parameter change.

**Formulas:**
1. wing_area        = span * (root_chord + tip_chord) / 2     (trapezoid)
                      0.5 * span * root_chord                  (delta)
2. v                = airspeed_kmh / 3.6
3. rho              = atmosphere.air_density(temperature, altitude)
4. Cl, Cd           = aerodynamics.lift_coefficient / drag_coefficient
5. F                = 0.5 * C * rho * v^2 * wing_area
6. static_thrust    = 0.1 * pitch_m * rho * (rpm / 60)^2 * diameter_m^3
7. thrust_to_weight = static_thrust / (total_weight_g / 1000 * 9.81),
                      "N/A" when the weight is zero

The thrust constant (0.1) is an empirical actuator-disk simplification with
no cited derivation; it is kept as-is for compatibility.
"""

from __future__ import annotations

from rcdesign.aerodynamics import aspect_ratio, drag_coefficient, lift_coefficient
from rcdesign.airfoils import get_airfoil
from rcdesign.atmosphere import air_density
from rcdesign.models import (
    NOT_APPLICABLE,
    AeroCoefficients,
    AoaSweepPoint,
    DerivedValues,
    DesignParameters,
    PerformanceResult,
    SpeedSweepPoint,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

INCH_TO_M: float = 0.0254
KMH_TO_MS: float = 1.0 / 3.6
G_ACCEL: float = 9.81
THRUST_CONSTANT: float = 0.1

AOA_SWEEP_RANGE: tuple[int, int] = (-10, 20)     # deg, inclusive, 1 deg steps
SPEED_SWEEP_MAX_MS: int = 50                     # m/s, 2 m/s steps

# Wing material densities (kg/m^3) for the wing weight readout.
MATERIAL_DENSITIES: dict[str, float] = {
    "foam": 45.0,      # EPO foam
    "balsa": 160.0,
    "plastic": 1050.0,  # ABS
}


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


def wing_area(span: float, root_chord: float, taper_ratio: float, is_delta: bool = False) -> float:
    """Planform area: triangle for a delta wing, trapezoid otherwise."""
    if is_delta:
        return 0.5 * span * root_chord
    tip_chord = root_chord * taper_ratio
    return span * (root_chord + tip_chord) / 2.0


def dynamic_force(coefficient: float, density: float, velocity_ms: float, area: float) -> float:
    """F = 0.5 * C * rho * v^2 * A."""
    return 0.5 * coefficient * density * velocity_ms ** 2 * area


def static_thrust(pitch_in: float, diameter_in: float, rpm: float, density: float) -> float:
    """Empirical static thrust (N) for a propeller given in inches."""
    pitch_m = pitch_in * INCH_TO_M
    diameter_m = diameter_in * INCH_TO_M
    return THRUST_CONSTANT * pitch_m * density * (rpm / 60.0) ** 2 * diameter_m ** 3


def thrust_to_weight(thrust_n: float, total_weight_g: float) -> float | str:
    """Static thrust over weight, or "N/A" for a zero (or unset) weight."""
    if not total_weight_g:
        return NOT_APPLICABLE
    return thrust_n / (total_weight_g / 1000.0 * G_ACCEL)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_coefficients(params: DesignParameters) -> AeroCoefficients:
    """Lift and drag coefficients at the current angle of attack."""
    p = params.in_meters()
    area = wing_area(p.wing_span, p.wing_chord, p.taper_ratio, p.is_delta)
    cl = lift_coefficient(p.angle_of_attack, p.airfoil, p.sweep_angle)
    cd = drag_coefficient(cl, p.airfoil, area, p.wing_span, p.winglet_type)
    return AeroCoefficients(lift_coefficient=cl, drag_coefficient=cd)


def compute_performance(params: DesignParameters) -> PerformanceResult:
    """Forces, static thrust and thrust-to-weight at the current condition."""
    p = params.in_meters()
    area = wing_area(p.wing_span, p.wing_chord, p.taper_ratio, p.is_delta)
    velocity = p.airspeed * KMH_TO_MS
    density = air_density(p.temperature, p.altitude)

    coefficients = compute_coefficients(p)
    thrust = static_thrust(p.prop_pitch, p.prop_diameter, p.motor_rpm, density)

    return PerformanceResult(
        air_density=density,
        wing_area=area,
        lift_force=dynamic_force(coefficients.lift_coefficient, density, velocity, area),
        drag_force=dynamic_force(coefficients.drag_coefficient, density, velocity, area),
        static_thrust=thrust,
        thrust_to_weight=thrust_to_weight(thrust, p.total_weight),
    )


def aoa_sweep(params: DesignParameters) -> list[AoaSweepPoint]:
    """Cl, Cd, lift and drag from -10 to 20 deg angle of attack in 1 deg steps.

    Everything except the angle of attack is taken from *params*.
    """
    p = params.in_meters()
    area = wing_area(p.wing_span, p.wing_chord, p.taper_ratio, p.is_delta)
    velocity = p.airspeed * KMH_TO_MS
    density = air_density(p.temperature, p.altitude)

    start, stop = AOA_SWEEP_RANGE
    points: list[AoaSweepPoint] = []
    for aoa in range(start, stop + 1):
        cl = lift_coefficient(float(aoa), p.airfoil, p.sweep_angle)
        cd = drag_coefficient(cl, p.airfoil, area, p.wing_span, p.winglet_type)
        points.append(
            AoaSweepPoint(
                angle_of_attack=float(aoa),
                lift_coefficient=cl,
                drag_coefficient=cd,
                lift_force=dynamic_force(cl, density, velocity, area),
                drag_force=dynamic_force(cd, density, velocity, area),
            )
        )
    return points


def speed_sweep(params: DesignParameters) -> list[SpeedSweepPoint]:
    """Lift and drag from 0 to 50 m/s in 2 m/s steps at the current aoa."""
    p = params.in_meters()
    area = wing_area(p.wing_span, p.wing_chord, p.taper_ratio, p.is_delta)
    density = air_density(p.temperature, p.altitude)
    coefficients = compute_coefficients(p)

    return [
        SpeedSweepPoint(
            airspeed=float(speed),
            lift_force=dynamic_force(coefficients.lift_coefficient, density, speed, area),
            drag_force=dynamic_force(coefficients.drag_coefficient, density, speed, area),
        )
        for speed in range(0, SPEED_SWEEP_MAX_MS + 1, 2)
    ]


def compute_derived_values(params: DesignParameters) -> DerivedValues:
    """Readouts: tip chord, AR, MAC, wing loading, wing weight, stall angle.

    MAC uses the taper formula ``(2/3) * c_root * (1 + l + l^2) / (1 + l)``
    (l = 0 for a delta).  Wing weight treats the wing as a slab of the
    airfoil's thickness over the mean chord, filled with the wing material.
    """
    p = params.in_meters()
    profile = get_airfoil(p.airfoil)
    area = wing_area(p.wing_span, p.wing_chord, p.taper_ratio, p.is_delta)

    lam = 0.0 if p.is_delta else p.taper_ratio
    tip_chord = p.wing_chord * lam
    mac = (2.0 / 3.0) * p.wing_chord * (1.0 + lam + lam ** 2) / (1.0 + lam)

    area_dm2 = area * 100.0
    wing_loading = p.total_weight / area_dm2 if area_dm2 > 0 else 0.0

    mean_chord = area / p.wing_span if p.wing_span > 0 else 0.0
    wing_volume = area * profile.thickness_ratio * mean_chord
    wing_weight_g = wing_volume * MATERIAL_DENSITIES[p.wing_material] * 1000.0

    return DerivedValues(
        tip_chord=tip_chord,
        aspect_ratio=aspect_ratio(p.wing_span, area),
        mean_aero_chord=mac,
        wing_loading=wing_loading,
        wing_weight_g=wing_weight_g,
        stall_angle=profile.stall_angle,
    )
