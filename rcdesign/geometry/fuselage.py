"""Fuselage geometry builder.

Two shapes:
  - boxy:   rectangular prism with a square cross-section
  - lofted: body of revolution built by spinning a 5-control-point radius
            profile (nose taper, max-width station, tail taper) about X

The fuselage is centred on the origin with the nose at x = +length / 2.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from rcdesign.geometry.mesh import MeshData, box

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Radius profile as (x / length, r / max_radius), nose first.  The max-width
# station sits 10% of the length aft of centre.
_PROFILE_CONTROL_POINTS: tuple[tuple[float, float], ...] = (
    (0.50, 0.15),    # nose tip
    (0.30, 0.75),    # nose taper
    (-0.10, 1.00),   # max width
    (-0.35, 0.55),   # tail taper
    (-0.50, 0.20),   # tail tip
)
_SAMPLES_PER_SEGMENT: int = 6
_RADIAL_SEGMENTS: int = 16


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_fuselage(length: float, diameter: float, shape: str) -> MeshData:
    """Build the fuselage for the selected shape.

    Args:
        length:   Nose-to-tail length.
        diameter: Maximum width (box side, or lofted body max diameter).
        shape:    "boxy" or "lofted".

    Raises:
        ValueError: If shape is not one of the two supported types.
    """
    if shape == "boxy":
        return box((length, diameter, diameter))
    elif shape == "lofted":
        return _build_lofted(length, diameter / 2.0)
    else:
        raise ValueError(f"Unsupported fuselage shape: '{shape}'. Expected 'boxy' or 'lofted'.")


def fuselage_profile(length: float, max_radius: float) -> NDArray[np.float64]:
    """Sampled (x, r) profile of the lofted body, nose first."""
    control = np.array(_PROFILE_CONTROL_POINTS, dtype=np.float64)
    control[:, 0] *= length
    control[:, 1] *= max_radius
    return _catmull_rom(control, _SAMPLES_PER_SEGMENT)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_lofted(length: float, max_radius: float) -> MeshData:
    """Spin the radius profile about X and close both ends with fans."""
    profile = fuselage_profile(length, max_radius)
    n_rings = profile.shape[0]
    seg = _RADIAL_SEGMENTS

    angles = np.linspace(0.0, 2.0 * math.pi, seg, endpoint=False)
    cos_a, sin_a = np.cos(angles), np.sin(angles)

    rings = np.empty((n_rings * seg, 3), dtype=np.float64)
    for k, (x, r) in enumerate(profile):
        rings[k * seg:(k + 1) * seg] = np.column_stack([np.full(seg, x), r * cos_a, r * sin_a])

    nose_center = n_rings * seg
    tail_center = nose_center + 1
    ends = np.array([[profile[0, 0], 0.0, 0.0], [profile[-1, 0], 0.0, 0.0]])
    vertices = np.concatenate([rings, ends])

    faces: list[tuple[int, int, int]] = []
    for k in range(n_rings - 1):
        a = k * seg
        b = (k + 1) * seg
        for j in range(seg):
            jn = (j + 1) % seg
            faces.append((a + j, b + j, a + jn))
            faces.append((a + jn, b + j, b + jn))

    last = (n_rings - 1) * seg
    for j in range(seg):
        jn = (j + 1) % seg
        faces.append((nose_center, j, jn))
        faces.append((tail_center, last + jn, last + j))

    return MeshData.from_arrays(vertices, faces)


def _catmull_rom(points: NDArray[np.float64], samples: int) -> NDArray[np.float64]:
    """Uniform Catmull-Rom spline through *points* (end points repeated)."""
    padded = np.concatenate([points[:1], points, points[-1:]])
    t = np.linspace(0.0, 1.0, samples, endpoint=False)[:, None]

    out = []
    for i in range(points.shape[0] - 1):
        p0, p1, p2, p3 = padded[i], padded[i + 1], padded[i + 2], padded[i + 3]
        out.append(
            0.5 * (
                2.0 * p1
                + (-p0 + p2) * t
                + (2.0 * p0 - 5.0 * p1 + 4.0 * p2 - p3) * t ** 2
                + (-p0 + 3.0 * p1 - 3.0 * p2 + p3) * t ** 3
            )
        )
    out.append(points[-1:])
    return np.concatenate(out)
