from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from bodyscribe.config import HEAD_RESOLUTION
from bodyscribe.generators.base import RingSegmentGenerator
from bodyscribe.model import circumference_to_radius
from bodyscribe.model.mesh import MeshAccumulator, MeshStats

if TYPE_CHECKING:
    from bodyscribe.model.landmarks import LandmarkTable
    from bodyscribe.model.measurements import BodyParameters


class HeadGenerator(RingSegmentGenerator):
    """
    Head built from two passes sharing one ring size.

    1. Dome: latitude rings of a sphere cap whose pole sits at head-top height.
       The radius is the neck radius enlarged by `RADIUS_FACTOR`.
    2. Face: an oval cylinder from head-base down toward neck height, widening
       sideways as it descends.

    The first face ring is stitched to the last dome ring, so the head is one
    continuous stack of rings.
    """
    NAME = "Head"
    # Dome ring 0 is `resolution` copies of the pole vertex, so the first band
    # holds `resolution` zero-area triangles; this keeps the uniform ring count.
    RADIUS_FACTOR = 1.1
    FACE_DEPTH_FACTOR = 0.9

    def __init__(self, resolution: int = HEAD_RESOLUTION) -> None:
        """
        Args:
            resolution: Vertices per ring. The dome gets ceil(resolution / 2)
                rings and the face ceil(resolution / 3) rings.
        """
        self.resolution = resolution
        self.dome_rings = math.ceil(resolution / 2)
        self.face_rings = math.ceil(resolution / 3)
        super().__init__(
            vertical_steps=self.dome_rings + self.face_rings,
            horizontal_steps=resolution
        )

    def generate(
        self,
        mesh: MeshAccumulator,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> MeshStats:
        start = mesh.stats()
        head_radius = circumference_to_radius(body.neck) * self.RADIUS_FACTOR
        center_y = landmarks.head_top - head_radius
        cos_a = np.cos(self.angles)
        sin_a = np.sin(self.angles)

        # Dome: theta runs from the pole toward (not reaching) the equator
        for lat in range(self.dome_rings):
            theta = (lat / (self.resolution / 2)) * np.pi / 2
            y = center_y + np.cos(theta) * head_radius
            ring_radius = np.sin(theta) * head_radius

            x = cos_a * ring_radius
            z = sin_a * ring_radius
            positions = np.column_stack([x, np.full_like(x, y), z])
            normals = np.column_stack([x, np.full_like(x, y - center_y), z]) / head_radius
            self.append_ring(mesh, positions, normals, connect=lat > 0)

        # Face: its first ring also closes the gap to the dome rim
        face_height = landmarks.head_base - landmarks.neck
        for h in range(self.face_rings):
            fraction = h / (self.resolution / 3)
            y = landmarks.head_base - fraction * face_height
            x_radius = head_radius * (0.8 + 0.2 * fraction)
            z_radius = head_radius * self.FACE_DEPTH_FACTOR

            x = cos_a * x_radius
            z = sin_a * z_radius
            positions = np.column_stack([x, np.full_like(x, y), z])
            normals = np.column_stack([x / x_radius, np.zeros_like(x), z / z_radius])
            self.append_ring(mesh, positions, normals, connect=True)

        return self._report(mesh, start)
