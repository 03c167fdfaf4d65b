from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from bodyscribe.generators.base import SIDE_SIGNS, SegmentGenerator
from bodyscribe.generators.limbs import LegPairGenerator
from bodyscribe.model import circumference_to_radius
from bodyscribe.model.mesh import MeshAccumulator, MeshStats

if TYPE_CHECKING:
    from bodyscribe.model.landmarks import LandmarkTable
    from bodyscribe.model.measurements import BodyParameters

# Box corners: 0-3 top (at ankle height), 4-7 bottom (on the floor).
# Within each group: back-inner, back-outer, front-outer, front-inner.
FOOT_CORNERS = np.array([
    [-1.0, 1.0, 0.0],
    [1.0, 1.0, 0.0],
    [1.0, 1.0, 1.0],
    [-1.0, 1.0, 1.0],
    [-1.0, 0.0, 0.0],
    [1.0, 0.0, 0.0],
    [1.0, 0.0, 1.0],
    [-1.0, 0.0, 1.0],
], dtype=np.float64)

# Outward-facing triangles, 0-based corner indices
FOOT_FACES: tuple[tuple[int, int, int], ...] = (
    (0, 2, 1), (0, 3, 2),  # top
    (4, 5, 6), (4, 6, 7),  # bottom
    (0, 5, 4), (0, 1, 5),  # back
    (1, 6, 5), (1, 2, 6),  # outer side
    (2, 7, 6), (2, 3, 7),  # front
    (3, 4, 7), (3, 0, 4),  # inner side
)


class FootPairGenerator(SegmentGenerator):
    """
    Feet as simple boxes: ankle-wide, ankle-high, and a fixed fraction of
    body height long, extending forward (+Z) under each leg axis.

    Not ring based and not connected to the leg surfaces.
    """
    NAME = "Feet"
    LENGTH_FACTOR = 0.15

    def corners(self, sign: int, body: BodyParameters, landmarks: LandmarkTable) -> np.ndarray:
        """(8, 3) corner coordinates of one foot; `sign` is -1 for left, +1 for right."""
        half_width = circumference_to_radius(body.ankle)
        foot_length = body.height * self.LENGTH_FACTOR
        center_x = LegPairGenerator.hip_offset(body)

        local = np.column_stack([
            center_x + FOOT_CORNERS[:, 0] * half_width,
            landmarks.foot + FOOT_CORNERS[:, 1] * (landmarks.ankle - landmarks.foot),
            FOOT_CORNERS[:, 2] * foot_length,
        ])
        local[:, 0] *= sign
        return local

    def generate(
        self,
        mesh: MeshAccumulator,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> MeshStats:
        start = mesh.stats()
        normals = np.zeros((8, 3), dtype=np.float64)
        normals[:4, 1] = 1.0
        normals[4:, 1] = -1.0

        for sign in SIDE_SIGNS:
            base = mesh.add_vertices(self.corners(sign, body, landmarks), normals)
            for a, b, c in FOOT_FACES:
                if sign < 0:
                    # Mirrored box: reverse to keep faces outward
                    b, c = c, b
                mesh.add_face(base + a + 1, base + b + 1, base + c + 1)

        return self._report(mesh, start)
