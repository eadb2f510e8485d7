"""Airfoil families — constant table and profile outline generator.

Each family maps to one immutable AirfoilProfile record:

  - zero_lift_angle  -- angle of attack (deg) at which Cl = 0
  - stall_angle      -- angle of attack (deg) above which lift is attenuated
  - thickness_ratio  -- maximum thickness / chord
  - upper_control,
    lower_control    -- control points of the two quadratic Bezier segments
                        that form the outline.  x is a chord fraction, y a
                        multiple of the thickness ratio.

A quadratic Bezier from (0, 0) to (1, 0) peaks at half its control ordinate,
so the upper and lower peaks of every family add up to the thickness ratio.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from rcdesign.models import AirfoilType

# ---------------------------------------------------------------------------
# Constant table
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AirfoilProfile:
    """Constants for one airfoil family."""

    name: AirfoilType
    zero_lift_angle: float
    stall_angle: float
    thickness_ratio: float
    upper_control: tuple[float, float]
    lower_control: tuple[float, float]


AIRFOILS: dict[str, AirfoilProfile] = {
    "flat-bottom": AirfoilProfile(
        name="flat-bottom",
        zero_lift_angle=-4.0,
        stall_angle=14.0,
        thickness_ratio=0.12,
        upper_control=(0.30, 2.0),
        lower_control=(0.50, 0.0),
    ),
    "semi-symmetrical": AirfoilProfile(
        name="semi-symmetrical",
        zero_lift_angle=-2.0,
        stall_angle=15.0,
        thickness_ratio=0.12,
        upper_control=(0.30, 1.3),
        lower_control=(0.30, -0.7),
    ),
    "symmetrical": AirfoilProfile(
        name="symmetrical",
        zero_lift_angle=0.0,
        stall_angle=16.0,
        thickness_ratio=0.12,
        upper_control=(0.30, 1.0),
        lower_control=(0.30, -1.0),
    ),
    "delta": AirfoilProfile(
        name="delta",
        zero_lift_angle=0.0,
        stall_angle=20.0,
        thickness_ratio=0.06,
        upper_control=(0.50, 1.0),
        lower_control=(0.50, -1.0),
    ),
}

SUPPORTED_AIRFOILS: list[str] = list(AIRFOILS)


def get_airfoil(name: str) -> AirfoilProfile:
    """Look up an airfoil family.

    Raises:
        ValueError: If *name* is not a known family.
    """
    try:
        return AIRFOILS[name]
    except KeyError:
        raise ValueError(
            f"Unsupported airfoil '{name}'. "
            f"Supported: {', '.join(SUPPORTED_AIRFOILS)}"
        ) from None


# ---------------------------------------------------------------------------
# Profile outline
# ---------------------------------------------------------------------------


def profile_points(
    airfoil: str,
    chord: float,
    thickness_ratio: float | None = None,
    num_points: int = 15,
) -> NDArray[np.float64]:
    """Closed 2D outline of an airfoil section, shape (2 * num_points, 2).

    Order: upper surface LE -> TE (num_points + 1 points), then lower surface
    TE -> LE without repeating either end point.  The outline is centred on
    mid-chord and flipped so the leading edge sits at x = +chord / 2 (the
    airframe's +X axis points at the nose).

    Args:
        airfoil:         Family name (see AIRFOILS).
        chord:           Section chord length.
        thickness_ratio: Override of the family's thickness ratio (tail
                         surfaces and winglets use 8%).
        num_points:      Segments per surface.

    Returns:
        float64 array of (x, y) pairs.
    """
    profile = get_airfoil(airfoil)
    t = profile.thickness_ratio if thickness_ratio is None else thickness_ratio

    s = np.linspace(0.0, 1.0, num_points + 1)
    upper = _quadratic_bezier(profile.upper_control, s)
    # Lower surface runs TE -> LE; drop both end points (shared with upper).
    lower = _quadratic_bezier(profile.lower_control, s)[-2:0:-1]

    outline = np.concatenate([upper, lower])
    xs = chord / 2.0 - outline[:, 0] * chord
    ys = outline[:, 1] * t * chord

    # Centre vertically between the upper and lower peaks.
    ys = ys - (ys.max() + ys.min()) / 2.0
    return np.column_stack([xs, ys])


def _quadratic_bezier(control: tuple[float, float], s: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quadratic Bezier from (0, 0) through *control* to (1, 0), sampled at s."""
    cx, cy = control
    w1 = 2.0 * (1.0 - s) * s
    x = w1 * cx + s * s
    y = w1 * cy
    return np.column_stack([x, y])
