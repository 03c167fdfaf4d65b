"""
Mesh Accumulator & Ring Stitching
=================================
Append-only buffer of vertices, normals and triangular faces for one
generation run, plus the routine that triangulates the band between two
consecutive rings.

Why is this file needed?
------------------------
1. Indexing: every generator appends into the same buffer, so vertex indices
   are global, 1-based and stable. A face may only reference vertices that
   already exist.
2. Alignment: normals are stored 1:1 with vertices; the OBJ writer reuses a
   vertex index as its normal index.
3. Topology: all ring-based segments share one stitching routine, so winding
   and face counts are identical everywhere.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, TYPE_CHECKING

import numpy as np

from bodyscribe.exceptions import MeshIntegrityError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Vertex = Tuple[float, float, float]
Normal = Tuple[float, float, float]
Face = Tuple[int, int, int]


@dataclass(frozen=True)
class MeshStats:
    """Running counts of a mesh buffer."""
    num_vertices: int
    num_normals: int
    num_faces: int


class MeshAccumulator:
    """
    Vertices, normals and faces of one generated body.

    Created at the start of a generation call, filled by the segment
    generators in a fixed order and consumed by the serializer.
    """

    def __init__(self) -> None:
        self.vertices: List[Vertex] = []
        self.normals: List[Normal] = []
        self.faces: List[Face] = []

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(vertices={len(self.vertices)}, "
                f"normals={len(self.normals)}, faces={len(self.faces)})")

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def stats(self) -> MeshStats:
        return MeshStats(
            num_vertices=len(self.vertices),
            num_normals=len(self.normals),
            num_faces=len(self.faces),
        )

    def add_vertex(self, position: Sequence[float], normal: Sequence[float]) -> int:
        """
        Append one vertex with its normal.

        Returns:
            The 1-based index of the new vertex.
        """
        self.vertices.append((float(position[0]), float(position[1]), float(position[2])))
        self.normals.append((float(normal[0]), float(normal[1]), float(normal[2])))
        return len(self.vertices)

    def add_vertices(
        self,
        positions: npt.NDArray[np.float64],
        normals: npt.NDArray[np.float64]
    ) -> int:
        """
        Append a block of vertices (e.g. one ring) with their normals.

        Args:
            positions: (N, 3) array of coordinates.
            normals: (N, 3) array of normals, aligned with `positions`.

        Returns:
            0-based offset of the first appended vertex.

        Raises:
            MeshIntegrityError: If the two arrays do not have the same shape (N, 3).
        """
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        normals = np.asarray(normals, dtype=np.float64).reshape(-1, 3)
        if positions.shape != normals.shape:
            raise MeshIntegrityError(
                f"Got {positions.shape[0]} positions but {normals.shape[0]} normals."
            )

        start = len(self.vertices)
        self.vertices.extend(map(tuple, positions.tolist()))
        self.normals.extend(map(tuple, normals.tolist()))
        return start

    def add_face(self, a: int, b: int, c: int) -> None:
        """
        Append a triangle of 1-based vertex indices.

        Raises:
            MeshIntegrityError: If an index does not refer to an existing vertex.
        """
        count = len(self.vertices)
        for index in (a, b, c):
            if not 1 <= index <= count:
                raise MeshIntegrityError(
                    f"Face ({a}, {b}, {c}) references vertex {index}, "
                    f"valid range is [1, {count}]."
                )
        self.faces.append((int(a), int(b), int(c)))

    def add_faces(self, faces: Iterable[Sequence[int]]) -> None:
        for a, b, c in faces:
            self.add_face(a, b, c)

    def check_integrity(self) -> None:
        """
        Raises:
            MeshIntegrityError: If normals are not aligned with vertices or a face
                index is out of range.
        """
        if len(self.vertices) != len(self.normals):
            raise MeshIntegrityError(
                f"{len(self.vertices)} vertices but {len(self.normals)} normals."
            )
        count = len(self.vertices)
        for face in self.faces:
            if min(face) < 1 or max(face) > count:
                raise MeshIntegrityError(f"Face {face} is out of range [1, {count}].")

    def as_arrays(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.int64]]:
        """
        Returns:
            (vertices (N, 3), normals (N, 3), faces (M, 3) with 1-based indices).
        """
        vertices = np.array(self.vertices, dtype=np.float64).reshape(-1, 3)
        normals = np.array(self.normals, dtype=np.float64).reshape(-1, 3)
        faces = np.array(self.faces, dtype=np.int64).reshape(-1, 3)
        return vertices, normals, faces

    @classmethod
    def from_arrays(
        cls,
        vertices: Sequence[Sequence[float]],
        normals: Sequence[Sequence[float]],
        faces: Sequence[Sequence[int]]
    ) -> MeshAccumulator:
        """Rebuild a buffer, e.g. from a parsed OBJ document."""
        mesh = cls()
        if len(vertices) != len(normals):
            raise MeshIntegrityError(f"{len(vertices)} vertices but {len(normals)} normals.")
        for position, normal in zip(vertices, normals):
            mesh.add_vertex(position, normal)
        mesh.add_faces(faces)
        return mesh


def triangles_per_ring_pair(horizontal_steps: int) -> int:
    """Faces emitted between two rings: the main span plus the wraparound quad."""
    return 2 * (horizontal_steps - 1) + 2


def stitch_rings(
    mesh: MeshAccumulator,
    ring_start: int,
    horizontal_steps: int,
    mirrored: bool = False
) -> int:
    """
    Triangulate the band between a ring and the ring appended just before it.

    For every vertex `a` of the ring two triangles are emitted,
    (current, above, above_right) and (current, above_right, right); the last
    vertex wraps around to the first one, closing the circumference. Rings run
    downward with the angle increasing from +X toward +Z, which makes this
    winding face outward. Geometry mirrored about the X = 0 plane flips
    handedness, so `mirrored=True` reverses every triangle to keep it outward.

    Args:
        mesh: Buffer that already holds both rings.
        ring_start: 0-based offset of the ring's first vertex.
        horizontal_steps: Vertices per ring (same for both rings).
        mirrored: Whether the rings were mirrored about the sagittal plane.

    Returns:
        Number of faces appended.

    Raises:
        MeshIntegrityError: If either ring is not fully present in the buffer.
    """
    previous_start = ring_start - horizontal_steps
    if previous_start < 0 or ring_start + horizontal_steps > mesh.vertex_count:
        raise MeshIntegrityError(
            f"Cannot stitch ring at offset {ring_start} with {horizontal_steps} vertices "
            f"(buffer holds {mesh.vertex_count})."
        )

    for a in range(horizontal_steps):
        # 1-based OBJ indices
        current = ring_start + a + 1
        right = ring_start + (a + 1) % horizontal_steps + 1
        above = current - horizontal_steps
        above_right = right - horizontal_steps

        if mirrored:
            mesh.add_face(current, above_right, above)
            mesh.add_face(current, right, above_right)
        else:
            mesh.add_face(current, above, above_right)
            mesh.add_face(current, above_right, right)

    return triangles_per_ring_pair(horizontal_steps)
