"""Tail surface geometry builder -- reuses the wing generator.

Supports three tail configurations:
  - conventional: horizontal stab on the centreline + vertical fin
  - t-tail:       h-stab mounted at the fin tip
  - v-tail:       two canted panels at a fixed 40 deg dihedral

Every surface is a symmetrical-profile mini-wing at 8% thickness.  Surfaces
are built around the tail origin (h-stab mid-chord at x = 0); the assembly
stage moves the whole set to the aft end of the fuselage.
"""

from __future__ import annotations

import math

from rcdesign.geometry import transforms
from rcdesign.geometry.mesh import MeshData
from rcdesign.geometry.wing import build_panel, build_wing

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TAIL_AIRFOIL: str = "symmetrical"
TAIL_THICKNESS_RATIO: float = 0.08
H_STAB_SWEEP_DEG: float = 0.0
FIN_SWEEP_DEG: float = 10.0
V_TAIL_DIHEDRAL_DEG: float = 40.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_tail(
    tail_type: str,
    h_stab_span: float,
    h_stab_chord: float,
    v_stab_height: float,
    v_stab_chord: float,
) -> dict[str, MeshData]:
    """Build all tail surfaces for the selected tail type.

    **Tail types and returned components:**

    - **"conventional"**: {"h_stab", "v_stab"}
    - **"t-tail"**: same keys; h-stab raised to the fin tip.
    - **"v-tail"**: {"v_tail_left", "v_tail_right"}; each panel length is
      ``h_stab_span / (2 * cos(40 deg))`` so the pair spans the nominal
      h-stab span in plan view.  Chord is h_stab_chord.

    Raises:
        ValueError: If tail_type is not one of the three supported types.
    """
    if tail_type == "conventional":
        return {
            "h_stab": _build_h_stab(h_stab_span, h_stab_chord, mount_y=0.0),
            "v_stab": _build_fin(v_stab_height, v_stab_chord),
        }
    elif tail_type == "t-tail":
        return {
            "h_stab": _build_h_stab(h_stab_span, h_stab_chord, mount_y=v_stab_height),
            "v_stab": _build_fin(v_stab_height, v_stab_chord),
        }
    elif tail_type == "v-tail":
        return _build_v_tail(h_stab_span, h_stab_chord)
    else:
        raise ValueError(
            f"Unsupported tail_type: '{tail_type}'. "
            f"Expected 'conventional', 't-tail', or 'v-tail'."
        )


def v_tail_panel_span(h_stab_span: float) -> float:
    """Length of one V-tail panel for a nominal h-stab span."""
    return h_stab_span / (2.0 * math.cos(math.radians(V_TAIL_DIHEDRAL_DEG)))


# ---------------------------------------------------------------------------
# Component builders
# ---------------------------------------------------------------------------


def _build_h_stab(span: float, chord: float, mount_y: float) -> MeshData:
    """Full-span horizontal stabiliser, mid-chord at (0, mount_y, 0)."""
    stab = build_wing(
        span,
        chord,
        TAIL_AIRFOIL,
        sweep_deg=H_STAB_SWEEP_DEG,
        thickness_ratio=TAIL_THICKNESS_RATIO,
    )
    return stab.with_vertices(transforms.translate(stab.vertices, (0.0, mount_y, 0.0)))


def _build_fin(height: float, chord: float) -> MeshData:
    """Vertical fin: a panel stood up so its span runs +Y from y = 0."""
    panel = build_panel(
        height,
        chord,
        TAIL_AIRFOIL,
        sweep_deg=FIN_SWEEP_DEG,
        thickness_ratio=TAIL_THICKNESS_RATIO,
    )
    return panel.with_vertices(transforms.rotate_x(panel.vertices, -90.0))


def _build_v_tail(h_stab_span: float, chord: float) -> dict[str, MeshData]:
    """Two panels hinged on the centreline, canted up by the V dihedral."""
    panel = build_panel(
        v_tail_panel_span(h_stab_span),
        chord,
        TAIL_AIRFOIL,
        sweep_deg=FIN_SWEEP_DEG,
        thickness_ratio=TAIL_THICKNESS_RATIO,
    )
    right = transforms.rotate_x(panel.vertices, -V_TAIL_DIHEDRAL_DEG)
    left = transforms.mirror_z(right)

    return {
        "v_tail_left": MeshData.from_arrays(left, panel.faces[:, ::-1]),
        "v_tail_right": MeshData.from_arrays(right, panel.faces),
    }
