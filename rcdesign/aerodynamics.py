"""Aerodynamic coefficient model — lift curve with stall softening, drag polar.

Pure math module.  Called from performance.compute_performance() and the
angle-of-attack sweep.

Lift (thin-airfoil theory with a sweep-cosine correction):
  alpha_eff = aoa - zero_lift_angle
  Cl        = 2*pi * radians(alpha_eff) * cos(radians(sweep))
  Delta wings ignore the input sweep and use a fixed 35 deg.
  Post-stall (aoa > stall_angle): Cl *= max(0, 1 - (aoa - stall_angle) / 10)
  Cl        = min(Cl, 1.4)

Drag (parasite build-up plus induced drag):
  Cd0 = wing 0.008 + fuselage 0.005 + tail 0.003
  AR  = span^2 / wing_area
  e   = 0.85 with standard winglets on a non-delta wing, else 0.8
  Cd  = Cd0 + Cl^2 / (pi * AR * e)

The stall slope (1/10 per degree) is an unvalidated heuristic kept for
numeric compatibility with existing designs.
"""

from __future__ import annotations

import math

from rcdesign.airfoils import get_airfoil

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CL_MAX: float = 1.4
DELTA_EFFECTIVE_SWEEP_DEG: float = 35.0
STALL_SOFTENING_DEG: float = 10.0   # Cl reaches zero this far past stall

CD0_WING: float = 0.008
CD0_FUSELAGE: float = 0.005
CD0_TAIL: float = 0.003
CD0_TOTAL: float = CD0_WING + CD0_FUSELAGE + CD0_TAIL

OSWALD_DEFAULT: float = 0.8
OSWALD_WINGLETS: float = 0.85


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def lift_coefficient(aoa_deg: float, airfoil: str, sweep_deg: float) -> float:
    """Lift coefficient at *aoa_deg* for an airfoil family and sweep angle."""
    profile = get_airfoil(airfoil)

    if profile.name == "delta":
        sweep_deg = DELTA_EFFECTIVE_SWEEP_DEG

    effective_aoa = aoa_deg - profile.zero_lift_angle
    cl = 2.0 * math.pi * math.radians(effective_aoa) * math.cos(math.radians(sweep_deg))

    if aoa_deg > profile.stall_angle:
        cl *= _stall_attenuation(aoa_deg, profile.stall_angle)

    return min(cl, CL_MAX)


def drag_coefficient(
    cl: float,
    airfoil: str,
    wing_area: float,
    span: float,
    winglet: str | bool,
) -> float:
    """Total drag coefficient: parasite build-up plus induced drag.

    *winglet* is a winglet type ("none" / "standard") or a plain flag.
    A degenerate wing (area <= 0) contributes no induced drag.
    """
    k = induced_drag_factor(span, wing_area, airfoil, winglet)
    return CD0_TOTAL + k * cl ** 2


def aspect_ratio(span: float, wing_area: float) -> float:
    """AR = span^2 / area, or 0.0 for a degenerate area."""
    if wing_area <= 0.0:
        return 0.0
    return span ** 2 / wing_area


def oswald_efficiency(airfoil: str, winglet: str | bool) -> float:
    """Oswald span efficiency; standard winglets only help non-delta wings."""
    has_winglets = winglet == "standard" if isinstance(winglet, str) else bool(winglet)
    if has_winglets and get_airfoil(airfoil).name != "delta":
        return OSWALD_WINGLETS
    return OSWALD_DEFAULT


def induced_drag_factor(span: float, wing_area: float, airfoil: str, winglet: str | bool) -> float:
    """k = 1 / (pi * AR * e), or 0.0 for a degenerate wing."""
    ar = aspect_ratio(span, wing_area)
    if ar <= 0.0:
        return 0.0
    return 1.0 / (math.pi * ar * oswald_efficiency(airfoil, winglet))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _stall_attenuation(aoa_deg: float, stall_deg: float) -> float:
    """Linear post-stall lift factor, floored at zero."""
    return max(0.0, 1.0 - (aoa_deg - stall_deg) / STALL_SOFTENING_DEG)
