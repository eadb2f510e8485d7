"""Propeller geometry builder -- hub cylinder plus radial blade boxes.

The thrust axis is X.  Blades are spaced evenly about it; each blade runs
from the axis out to half the propeller diameter.  Geometry only: blade
pitch feeds the thrust estimate, not the mesh, and spinning is a renderer
concern.
"""

from __future__ import annotations

from rcdesign.geometry import transforms
from rcdesign.geometry.mesh import MeshData, box, cylinder_x, merge_meshes

# Proportions relative to the diameter.
_HUB_RADIUS_FRAC: float = 0.06
_HUB_LENGTH_FRAC: float = 0.08
_BLADE_WIDTH_FRAC: float = 0.08
_BLADE_THICKNESS_FRAC: float = 0.02


def build_propeller(diameter: float, blade_count: int) -> MeshData:
    """Build a propeller of *diameter* (metres) with *blade_count* blades.

    Centred on the origin; blade i is rotated ``360 * i / blade_count`` deg
    about X from the +Y direction.
    """
    hub = cylinder_x(_HUB_RADIUS_FRAC * diameter, _HUB_LENGTH_FRAC * diameter)

    blade_length = diameter / 2.0
    blade = box(
        (_BLADE_THICKNESS_FRAC * diameter, blade_length, _BLADE_WIDTH_FRAC * diameter),
        center=(0.0, blade_length / 2.0, 0.0),
    )

    parts = [hub]
    for i in range(max(blade_count, 0)):
        angle = 360.0 * i / blade_count
        parts.append(blade.with_vertices(transforms.rotate_x(blade.vertices, angle)))

    return merge_meshes(parts)


def hub_length(diameter: float) -> float:
    return _HUB_LENGTH_FRAC * diameter
