"""Wing geometry builder -- airfoil sections extruded along the span.

Every lifting surface in the airframe comes from here:

  - build_wing()       full-span main wing, swept, centred on its centroid
  - build_panel()      one-sided panel (root at z=0), reused for the tail
                       surfaces and winglets
  - build_delta_wing() fixed 6-vertex delta solid, no camber
  - build_winglets()   canted tip plates attached after taper
  - build_ailerons()   trailing-edge boxes attached after taper

Section layout: each spanwise station holds one closed airfoil outline of
``2 * num_points`` vertices (see airfoils.profile_points), so vertex
``station * points_per_section + j`` is point j of that station.  Station 0
is the most negative Z.  The stage-2 taper pass (transforms.apply_taper) and
the tip/aileron helpers below rely on that ordering.
"""

from __future__ import annotations

import os

import numpy as np
from numpy.typing import NDArray

from rcdesign.airfoils import profile_points
from rcdesign.geometry import transforms
from rcdesign.geometry.mesh import MeshData, box

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Spanwise stations per half wing.  Can be overridden via RCDESIGN_WING_SEGMENTS.
WING_SEGMENTS: int = int(os.environ.get("RCDESIGN_WING_SEGMENTS", "10"))
PROFILE_POINTS: int = 15           # points per surface (upper / lower)

DELTA_THICKNESS_RATIO: float = 0.06

WINGLET_SWEEP_DEG: float = 30.0
WINGLET_THICKNESS_RATIO: float = 0.08
WINGLET_AIRFOIL: str = "symmetrical"

AILERON_THICKNESS_FRACTION: float = 0.5


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_wing(
    span: float,
    chord: float,
    airfoil: str,
    sweep_deg: float = 0.0,
    thickness_ratio: float | None = None,
    segments: int = WING_SEGMENTS,
    num_points: int = PROFILE_POINTS,
) -> MeshData:
    """Build a full-span wing from tip (-span/2) to tip (+span/2).

    **Construction:**
    1. Airfoil outline for the family (chord along X, LE at +X).
    2. Extrude: one copy of the outline per station along Z.
    3. Sweep: shear X by ``|z| * tan(sweep)`` (tips move aft).
    4. Centre on the vertex centroid.

    Taper is NOT applied here; the assembly stage runs apply_taper() on the
    result so that attachments built later stay untapered.
    """
    stations = np.linspace(-span / 2.0, span / 2.0, 2 * segments + 1)
    vertices, faces = _extrude_sections(chord, airfoil, thickness_ratio, stations, num_points)
    vertices = transforms.apply_sweep(vertices, sweep_deg)
    vertices = transforms.center_on_centroid(vertices)
    return MeshData.from_arrays(vertices, faces)


def build_panel(
    span: float,
    chord: float,
    airfoil: str,
    sweep_deg: float = 0.0,
    thickness_ratio: float | None = None,
    segments: int = WING_SEGMENTS,
    num_points: int = PROFILE_POINTS,
) -> MeshData:
    """Build a one-sided panel from the root (z=0) to the tip (z=span).

    Same section recipe and sweep shear as build_wing(), but not centred:
    the root mid-chord stays at the origin so callers can hinge the panel
    there (fin, V-tail half, winglet).
    """
    stations = np.linspace(0.0, span, segments + 1)
    vertices, faces = _extrude_sections(chord, airfoil, thickness_ratio, stations, num_points)
    vertices = transforms.apply_sweep(vertices, sweep_deg)
    return MeshData.from_arrays(vertices, faces)


def build_delta_wing(span: float, root_chord: float) -> MeshData:
    """Fixed 6-vertex delta wing: a thin triangular slab.

    Apex at x = +2/3 root chord, trailing edge at x = -1/3 root chord, so the
    planform centroid is the origin.  Thickness = 6% of the root chord.
    Faces: top and bottom skins, two leading-edge quads, trailing-edge quad.
    """
    half_t = DELTA_THICKNESS_RATIO * root_chord / 2.0
    apex_x = 2.0 * root_chord / 3.0
    te_x = -root_chord / 3.0
    half_span = span / 2.0

    vertices = [
        (apex_x, half_t, 0.0),         # 0 apex top
        (te_x, half_t, half_span),     # 1 right tip top
        (te_x, half_t, -half_span),    # 2 left tip top
        (apex_x, -half_t, 0.0),        # 3 apex bottom
        (te_x, -half_t, half_span),    # 4 right tip bottom
        (te_x, -half_t, -half_span),   # 5 left tip bottom
    ]
    faces = [
        (0, 2, 1),               # top skin
        (3, 4, 5),               # bottom skin
        (0, 4, 3), (0, 1, 4),    # right leading edge
        (0, 3, 5), (0, 5, 2),    # left leading edge
        (1, 5, 4), (1, 2, 5),    # trailing edge
    ]
    return MeshData.from_arrays(vertices, faces)


def build_winglets(
    wing: MeshData,
    height: float,
    cant_deg: float = 0.0,
    num_points: int = PROFILE_POINTS,
) -> dict[str, MeshData]:
    """Stand a winglet on each tip of an (already tapered) wing.

    Each winglet is a symmetrical panel with its own fixed 30 deg sweep and
    8% thickness, chord equal to the local tip chord.  ``cant_deg`` leans it
    outboard from vertical.  Winglets are built after taper, so they are
    never scaled by it.

    Returns:
        {"winglet_left": ..., "winglet_right": ...}
    """
    sections = _sections(wing, num_points)
    result: dict[str, MeshData] = {}

    for name, section in (("winglet_left", sections[0]), ("winglet_right", sections[-1])):
        x_max, x_min = section[:, 0].max(), section[:, 0].min()
        tip_chord = float(x_max - x_min)
        panel = build_panel(
            height,
            tip_chord,
            WINGLET_AIRFOIL,
            sweep_deg=WINGLET_SWEEP_DEG,
            thickness_ratio=WINGLET_THICKNESS_RATIO,
            num_points=num_points,
        )
        verts = transforms.rotate_x(panel.vertices, -90.0 + cant_deg)
        faces = panel.faces
        if name == "winglet_left":
            verts = transforms.mirror_z(verts)
            faces = faces[:, ::-1]
        anchor = ((x_max + x_min) / 2.0, section[:, 1].mean(), section[0, 2])
        result[name] = MeshData.from_arrays(transforms.translate(verts, anchor), faces)

    return result


def build_ailerons(
    wing: MeshData,
    length: float,
    width: float,
    position: float,
    num_points: int = PROFILE_POINTS,
) -> dict[str, MeshData]:
    """Place an aileron box on the trailing edge of each wing half.

    The aileron spans ``length`` with its outer end ``position`` in from the
    tip, covers the aft ``width`` of the local chord and is half as thick as
    the local section.  Local trailing edge, thickness and height are read
    from the (swept, tapered) wing mesh, so the boxes follow the planform.

    Returns:
        {"aileron_left": ..., "aileron_right": ...}
    """
    sections = _sections(wing, num_points)
    station_z = sections[:, 0, 2]
    te_x = sections[:, :, 0].min(axis=1)
    thickness = sections[:, :, 1].max(axis=1) - sections[:, :, 1].min(axis=1)
    mid_y = (sections[:, :, 1].max(axis=1) + sections[:, :, 1].min(axis=1)) / 2.0

    half_span = float(station_z.max())
    result: dict[str, MeshData] = {}
    for name, sign in (("aileron_left", -1.0), ("aileron_right", 1.0)):
        z_center = sign * (half_span - position - length / 2.0)
        x_te = float(np.interp(z_center, station_z, te_x))
        t = float(np.interp(z_center, station_z, thickness))
        y = float(np.interp(z_center, station_z, mid_y))
        result[name] = box(
            (width, AILERON_THICKNESS_FRACTION * t, length),
            center=(x_te + width / 2.0, y, z_center),
        )
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _extrude_sections(
    chord: float,
    airfoil: str,
    thickness_ratio: float | None,
    stations: NDArray[np.float64],
    num_points: int,
) -> tuple[NDArray[np.float64], NDArray[np.uint32]]:
    """Copy one airfoil outline to every station and skin it with triangles.

    Side quads join point j of station i to point j of station i+1; both end
    stations are closed with a triangle fan from the leading-edge point.
    Winding is outward (CCW seen from outside).
    """
    outline = profile_points(airfoil, chord, thickness_ratio, num_points)
    p = outline.shape[0]
    n = stations.shape[0]

    vertices = np.empty((n * p, 3), dtype=np.float64)
    for i, z in enumerate(stations):
        block = vertices[i * p:(i + 1) * p]
        block[:, 0] = outline[:, 0]
        block[:, 1] = outline[:, 1]
        block[:, 2] = z

    faces: list[tuple[int, int, int]] = []
    for i in range(n - 1):
        for j in range(p):
            p1 = i * p + j
            p2 = i * p + (j + 1) % p
            p3 = (i + 1) * p + j
            p4 = (i + 1) * p + (j + 1) % p
            faces.append((p1, p4, p3))
            faces.append((p1, p2, p4))

    root = 0
    tip = (n - 1) * p
    for j in range(1, p - 1):
        faces.append((root, root + j + 1, root + j))
        faces.append((tip, tip + j, tip + j + 1))

    return vertices, np.asarray(faces, dtype=np.uint32)


def _sections(wing: MeshData, num_points: int) -> NDArray[np.float32]:
    """View a wing's vertices as (stations, points_per_section, 3)."""
    p = 2 * num_points
    return wing.vertices.reshape(-1, p, 3)
