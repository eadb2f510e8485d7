"""Mesh container and primitive builders.

MeshData is a pure numpy dataclass: vertex positions, per-vertex normals and
triangle indices.  Every generator returns a fresh MeshData; nothing mutates
one after construction.  Transform passes produce a new mesh through
``with_vertices()``, which recomputes normals from the moved vertices.

Airframe frame: +X forward (nose), +Y up, +Z starboard.  Units are metres.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


# ---------------------------------------------------------------------------
# MeshData
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MeshData:
    """Triangle mesh for WebSocket binary transport and in-process consumers.

    Layout in the binary frame:
      - vertices: N x 3 float32 array of (x, y, z) positions
      - normals:  N x 3 float32 array of (nx, ny, nz) per-vertex normals
      - faces:    M x 3 uint32 array of triangle vertex indices

    Attributes:
        vertices: Shape (N, 3), dtype float32.  Vertex positions in metres.
        normals:  Shape (N, 3), dtype float32.  Unit-length per-vertex normals.
        faces:    Shape (M, 3), dtype uint32.  Triangle indices into vertices/normals.
    """

    vertices: NDArray[np.float32]   # shape (N, 3)
    normals: NDArray[np.float32]    # shape (N, 3)
    faces: NDArray[np.uint32]       # shape (M, 3)

    @classmethod
    def from_arrays(cls, vertices: ArrayLike, faces: ArrayLike) -> MeshData:
        """Build a mesh from raw positions and indices, computing normals."""
        verts = np.asarray(vertices, dtype=np.float32).reshape(-1, 3)
        tris = np.asarray(faces, dtype=np.uint32).reshape(-1, 3)
        return cls(vertices=verts, normals=compute_vertex_normals(verts, tris), faces=tris)

    @classmethod
    def empty(cls) -> MeshData:
        return cls(
            vertices=np.zeros((0, 3), dtype=np.float32),
            normals=np.zeros((0, 3), dtype=np.float32),
            faces=np.zeros((0, 3), dtype=np.uint32),
        )

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return self.vertices.shape[0]

    @property
    def face_count(self) -> int:
        """Number of triangular faces."""
        return self.faces.shape[0]

    def with_vertices(self, vertices: ArrayLike) -> MeshData:
        """Same topology, new positions; normals are recomputed."""
        return MeshData.from_arrays(vertices, self.faces)

    def centroid(self) -> NDArray[np.float64]:
        """Mean vertex position (origin for an empty mesh)."""
        if self.vertex_count == 0:
            return np.zeros(3)
        return self.vertices.astype(np.float64).mean(axis=0)

    def bounds(self) -> tuple[NDArray[np.float32], NDArray[np.float32]]:
        """(min_xyz, max_xyz) axis-aligned bounding box."""
        return self.vertices.min(axis=0), self.vertices.max(axis=0)

    def to_binary_frame(self) -> bytes:
        """Pack into the WebSocket binary frame format.

        Returns a bytes object with layout:
          [msg_type: uint32][vertex_count: uint32][face_count: uint32]
          [vertices: N*12 bytes][normals: N*12 bytes][faces: M*12 bytes]

        The JSON trailer (coefficients, performance, warnings) is NOT included
        here; the WebSocket handler appends it separately.
        """
        header = struct.pack("<III", 0x01, self.vertex_count, self.face_count)

        vert_bytes = self.vertices.astype("<f4").tobytes()
        norm_bytes = self.normals.astype("<f4").tobytes()
        face_bytes = self.faces.astype("<u4").tobytes()

        return header + vert_bytes + norm_bytes + face_bytes


def merge_meshes(meshes: list[MeshData]) -> MeshData:
    """Concatenate meshes into one, offsetting face indices.

    Normals are carried over unchanged so that separate parts keep their own
    shading instead of being averaged across the seams.
    """
    parts = [m for m in meshes if m.vertex_count > 0]
    if not parts:
        return MeshData.empty()

    all_faces = []
    offset = 0
    for mesh in parts:
        all_faces.append(mesh.faces + np.uint32(offset))
        offset += mesh.vertex_count

    return MeshData(
        vertices=np.concatenate([m.vertices for m in parts]),
        normals=np.concatenate([m.normals for m in parts]),
        faces=np.concatenate(all_faces).astype(np.uint32),
    )


def compute_vertex_normals(
    vertices: NDArray[np.float32],
    faces: NDArray[np.uint32],
) -> NDArray[np.float32]:
    """Compute per-vertex normals by averaging adjacent face normals.

    Uses area-weighted averaging: each face's contribution to a vertex normal
    is proportional to the face area (implicit in the cross product magnitude).
    """
    normals = np.zeros_like(vertices)

    if faces.shape[0] == 0:
        return normals

    v0 = vertices[faces[:, 0]]
    v1 = vertices[faces[:, 1]]
    v2 = vertices[faces[:, 2]]

    # Face normals (not normalised -- magnitude = 2 * area)
    face_normals = np.cross(v1 - v0, v2 - v0)

    for i in range(3):
        np.add.at(normals, faces[:, i], face_normals)

    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    lengths = np.maximum(lengths, 1e-10)  # degenerate geometry keeps zero normals
    return (normals / lengths).astype(np.float32)


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

# Corner order: bit 0 -> x, bit 1 -> y, bit 2 -> z (0 = min side, 1 = max side).
_BOX_FACES = np.array(
    [
        [0, 2, 1], [1, 2, 3],   # -Z
        [4, 5, 6], [5, 7, 6],   # +Z
        [0, 1, 4], [1, 5, 4],   # -Y
        [2, 6, 3], [3, 6, 7],   # +Y
        [0, 4, 2], [2, 4, 6],   # -X
        [1, 3, 5], [3, 7, 5],   # +X
    ],
    dtype=np.uint32,
)


def box(size: tuple[float, float, float], center: tuple[float, float, float] = (0.0, 0.0, 0.0)) -> MeshData:
    """Axis-aligned box: 8 vertices, 12 outward-wound triangles."""
    sx, sy, sz = size
    cx, cy, cz = center
    corners = [
        (
            cx + (sx / 2.0 if i & 1 else -sx / 2.0),
            cy + (sy / 2.0 if i & 2 else -sy / 2.0),
            cz + (sz / 2.0 if i & 4 else -sz / 2.0),
        )
        for i in range(8)
    ]
    return MeshData.from_arrays(corners, _BOX_FACES)


def cylinder_x(radius: float, length: float, segments: int = 16) -> MeshData:
    """Closed cylinder along the X axis, centred on the origin."""
    angles = np.linspace(0.0, 2.0 * math.pi, segments, endpoint=False)
    ring_y = radius * np.cos(angles)
    ring_z = radius * np.sin(angles)

    front = np.column_stack([np.full(segments, length / 2.0), ring_y, ring_z])
    back = np.column_stack([np.full(segments, -length / 2.0), ring_y, ring_z])
    caps = np.array([[length / 2.0, 0.0, 0.0], [-length / 2.0, 0.0, 0.0]])
    vertices = np.concatenate([front, back, caps])

    front_center = 2 * segments
    back_center = front_center + 1
    faces: list[tuple[int, int, int]] = []
    for j in range(segments):
        k = (j + 1) % segments
        faces.append((j, segments + j, k))
        faces.append((k, segments + j, segments + k))
        faces.append((front_center, j, k))
        faces.append((back_center, segments + k, segments + j))

    return MeshData.from_arrays(vertices, faces)
