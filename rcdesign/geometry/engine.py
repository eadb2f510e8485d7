"""Geometry engine -- airframe assembly and component grouping.

This module ties together all component builders and the transform stage:

- ``build_airframe_parts()`` -- every named part, transformed and positioned
- ``assemble_airframe()``    -- parts grouped into the four renderer
                                components: wing, fuselage, tail, propeller
- ``component_ranges()``     -- per-component face ranges in a merged mesh
- ``get_geometry_limiter()`` -- shared CapacityLimiter for worker threads

Aircraft coordinate system: origin at the fuselage centre, +X toward the
nose, +Y up, +Z starboard.  All dimensions in metres.
"""

from __future__ import annotations

import logging
import os

import anyio

from rcdesign.geometry import transforms
from rcdesign.geometry.fuselage import build_fuselage
from rcdesign.geometry.mesh import MeshData, merge_meshes
from rcdesign.geometry.propeller import build_propeller, hub_length
from rcdesign.geometry.tail import build_tail
from rcdesign.geometry.wing import (
    build_ailerons,
    build_delta_wing,
    build_wing,
    build_winglets,
)
from rcdesign.models import DesignParameters

logger = logging.getLogger("rcdesign.geometry")

INCH_TO_M: float = 0.0254

# Concurrent geometry jobs across all connections.
GEOMETRY_WORKERS: int = int(os.environ.get("RCDESIGN_GEOMETRY_WORKERS", "4"))

_geometry_limiter: anyio.CapacityLimiter | None = None

# Renderer components, in publish order.
COMPONENTS: tuple[str, ...] = ("wing", "fuselage", "tail", "propeller")

# Wing vertical offset as a fraction of the fuselage diameter.
_WING_Y_FRACTION: dict[str, float] = {
    "high": 0.5,
    "mid": 0.0,
    "low": -0.5,
}

# Gap between the fuselage nose and the propeller hub, fraction of diameter.
_SPINNER_GAP_FRAC: float = 0.05


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _compute_wing_mount(params: DesignParameters) -> tuple[float, float]:
    """Compute the (wing_x, wing_y) mount position of the wing centroid.

    X: the wing sits ``cg_fraction`` of the fuselage length aft of the nose.
    Y: per wing_position (high/mid/low) on the fuselage diameter.
    """
    length = params.fuselage_length
    wing_x = length / 2.0 - params.cg_fraction * length
    wing_y = params.fuselage_diameter * _WING_Y_FRACTION.get(params.wing_position, 0.0)
    return wing_x, wing_y


def _compute_tail_x(params: DesignParameters) -> float:
    """Tail origin X: half an h-stab chord ahead of the fuselage end.

    The h-stab is centred on its vertex centroid, so its trailing edge sits
    slightly aft of the fuselage end.
    """
    return -params.fuselage_length / 2.0 + params.h_stab_chord / 2.0


def _moved(mesh: MeshData, offset: tuple[float, float, float]) -> MeshData:
    """Translation keeps the shape, so normals are carried over."""
    return MeshData(
        vertices=transforms.translate(mesh.vertices, offset).astype("float32"),
        normals=mesh.normals,
        faces=mesh.faces,
    )


def _component_category(name: str) -> str:
    """Map a part name to its renderer component."""
    if name.startswith(("wing", "winglet", "aileron")):
        return "wing"
    if name.startswith(("h_stab", "v_stab", "v_tail")):
        return "tail"
    return name


# ---------------------------------------------------------------------------
# Public API: Assembly
# ---------------------------------------------------------------------------


def build_main_wing(params: DesignParameters) -> dict[str, MeshData]:
    """Build the main wing and its attachments, not yet positioned.

    **Steps:**
    1. Delta airfoil -> fixed delta solid (no taper, winglets or ailerons).
    2. Otherwise build_wing() with sweep applied at generation time.
    3. Taper pass over the wing vertex buffer (normals recomputed).
    4. Winglets and ailerons built against the tapered wing; never tapered.
    """
    if params.is_delta:
        return {"wing": build_delta_wing(params.wing_span, params.wing_chord)}

    wing = build_wing(params.wing_span, params.wing_chord, params.airfoil, params.sweep_angle)
    wing = wing.with_vertices(transforms.apply_taper(wing.vertices, params.taper_ratio))

    parts: dict[str, MeshData] = {"wing": wing}
    if params.winglet_type == "standard":
        parts.update(build_winglets(wing, params.winglet_height, params.winglet_cant_angle))
    if params.aileron_enable:
        parts.update(
            build_ailerons(
                wing,
                params.aileron_length,
                params.aileron_width,
                params.aileron_position,
            )
        )
    return parts


def build_airframe_parts(params: DesignParameters) -> dict[str, MeshData]:
    """Build every airframe part in its final position.

    Lengths are converted to metres first (params.in_meters()).

    Returns:
        Dict with keys "wing", optional "winglet_left"/"winglet_right" and
        "aileron_left"/"aileron_right", "fuselage", the tail keys returned by
        build_tail(), and "propeller".
    """
    p = params.in_meters()
    parts: dict[str, MeshData] = {}

    # 1. Wing + attachments at the mount position
    wing_x, wing_y = _compute_wing_mount(p)
    for name, mesh in build_main_wing(p).items():
        parts[name] = _moved(mesh, (wing_x, wing_y, 0.0))

    # 2. Fuselage (already centred on the origin)
    parts["fuselage"] = build_fuselage(p.fuselage_length, p.fuselage_diameter, p.fuselage_shape)

    # 3. Tail surfaces at the aft end
    tail_x = _compute_tail_x(p)
    tail = build_tail(p.tail_type, p.h_stab_span, p.h_stab_chord, p.v_stab_height, p.v_stab_chord)
    for name, mesh in tail.items():
        parts[name] = _moved(mesh, (tail_x, 0.0, 0.0))

    # 4. Propeller ahead of the nose
    prop_diameter_m = p.prop_diameter * INCH_TO_M
    prop_x = (
        p.fuselage_length / 2.0
        + hub_length(prop_diameter_m) / 2.0
        + _SPINNER_GAP_FRAC * prop_diameter_m
    )
    parts["propeller"] = _moved(build_propeller(prop_diameter_m, p.prop_blades), (prop_x, 0.0, 0.0))

    return parts


def assemble_airframe(params: DesignParameters) -> dict[str, MeshData]:
    """Assemble the airframe into the four renderer components.

    Returns:
        {"wing": ..., "fuselage": ..., "tail": ..., "propeller": ...}
        Winglets and ailerons are merged into "wing"; every tail surface
        into "tail".
    """
    grouped: dict[str, list[MeshData]] = {name: [] for name in COMPONENTS}
    for name, mesh in build_airframe_parts(params).items():
        grouped[_component_category(name)].append(mesh)

    components = {name: merge_meshes(meshes) for name, meshes in grouped.items()}
    logger.debug(
        "Assembled airframe: %s",
        ", ".join(f"{n}={m.face_count} faces" for n, m in components.items()),
    )
    return components


def component_ranges(components: dict[str, MeshData]) -> dict[str, list[int]]:
    """[start_face, end_face) of each component once merged in dict order."""
    ranges: dict[str, list[int]] = {}
    face_offset = 0
    for name, mesh in components.items():
        ranges[name] = [face_offset, face_offset + mesh.face_count]
        face_offset += mesh.face_count
    return ranges


def get_geometry_limiter() -> anyio.CapacityLimiter:
    """Shared limiter for worker-thread geometry jobs.

    Created on first use so it binds to the running event loop.
    """
    global _geometry_limiter
    if _geometry_limiter is None:
        _geometry_limiter = anyio.CapacityLimiter(max(GEOMETRY_WORKERS, 1))
    return _geometry_limiter
