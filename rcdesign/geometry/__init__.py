"""Geometry engine -- public API re-exports.

Usage::

    from rcdesign.geometry import assemble_airframe, MeshData
"""

from __future__ import annotations

from rcdesign.geometry.engine import (
    assemble_airframe,
    build_airframe_parts,
    component_ranges,
)
from rcdesign.geometry.mesh import MeshData, merge_meshes

__all__ = [
    "MeshData",
    "assemble_airframe",
    "build_airframe_parts",
    "component_ranges",
    "merge_meshes",
]
