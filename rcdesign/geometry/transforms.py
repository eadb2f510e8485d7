"""Vertex-buffer transform passes.

Generators emit canonical geometry; these passes post-process vertex arrays
and always return new arrays (inputs are never modified).  Callers rebuild
meshes with ``MeshData.with_vertices()`` so normals follow the new shape.

Pass order for a wing:
  1. apply_sweep   -- inside the wing generator
  2. apply_taper   -- in the assembly stage (engine.assemble_airframe)
  3. winglets / ailerons are attached afterwards and are never tapered

Axis convention: X chordwise (+X forward), Y thickness (up), Z spanwise.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray


def apply_sweep(vertices: ArrayLike, sweep_deg: float) -> NDArray[np.float64]:
    """Shear chordwise X aft in proportion to spanwise |Z|.

    x' = x - |z| * tan(sweep).  Positive sweep moves the tips aft.
    A sweep of 0 deg leaves every coordinate unchanged.
    """
    out = np.array(vertices, dtype=np.float64)
    if sweep_deg == 0.0:
        return out
    out[:, 0] -= np.abs(out[:, 2]) * math.tan(math.radians(sweep_deg))
    return out


def apply_taper(vertices: ArrayLike, taper_ratio: float) -> NDArray[np.float64]:
    """Scale in-plane X/Y by a factor running from 1.0 at the root to the
    taper ratio at the tip, using each vertex's normalised span position
    |z| / max|z|.  Z is left untouched.
    """
    out = np.array(vertices, dtype=np.float64)
    if out.shape[0] == 0:
        return out

    half_span = np.abs(out[:, 2]).max()
    if half_span <= 0.0:
        return out

    eta = np.abs(out[:, 2]) / half_span
    factor = 1.0 + (taper_ratio - 1.0) * eta
    out[:, 0] *= factor
    out[:, 1] *= factor
    return out


def center_on_centroid(vertices: ArrayLike) -> NDArray[np.float64]:
    """Translate so the vertex centroid sits at the origin."""
    out = np.array(vertices, dtype=np.float64)
    if out.shape[0] == 0:
        return out
    return out - out.mean(axis=0)


def translate(vertices: ArrayLike, offset: tuple[float, float, float]) -> NDArray[np.float64]:
    return np.array(vertices, dtype=np.float64) + np.asarray(offset, dtype=np.float64)


def rotate_x(vertices: ArrayLike, angle_deg: float) -> NDArray[np.float64]:
    """Rotate about the X (thrust) axis; +angle turns +Y towards +Z."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    rot = np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])
    return np.array(vertices, dtype=np.float64) @ rot.T


def rotate_z(vertices: ArrayLike, angle_deg: float) -> NDArray[np.float64]:
    """Rotate about the Z (span) axis; +angle turns +X towards +Y."""
    a = math.radians(angle_deg)
    c, s = math.cos(a), math.sin(a)
    rot = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
    return np.array(vertices, dtype=np.float64) @ rot.T


def mirror_z(vertices: ArrayLike) -> NDArray[np.float64]:
    """Reflect across the XY plane (starboard <-> port).

    Face winding must be reversed by the caller to keep normals outward.
    """
    out = np.array(vertices, dtype=np.float64)
    out[:, 2] = -out[:, 2]
    return out
