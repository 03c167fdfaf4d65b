from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from bodyscribe.config import TORSO_HORIZONTAL_STEPS, TORSO_VERTICAL_STEPS
from bodyscribe.generators.base import RingSegmentGenerator
from bodyscribe.model import circumference_to_radius
from bodyscribe.model.mesh import MeshAccumulator, MeshStats

if TYPE_CHECKING:
    from bodyscribe.model.landmarks import LandmarkTable
    from bodyscribe.model.measurements import BodyParameters


class TorsoGenerator(RingSegmentGenerator):
    """
    Torso from neck height down to hip height.

    Cross-sections are ellipses whose semi-axes blend between neighbouring
    landmarks over four sub-ranges:

    - neck -> shoulder: neck radius widening to half the shoulder width
    - shoulder -> chest: shoulder half-width to chest radius
    - chest -> waist
    - waist -> hip

    Sides are widened by up to 10 %, the chest bulges forward and the hips
    bulge backward.
    """
    NAME = "Torso"

    NECK_DEPTH = 0.8
    CHEST_DEPTH = 0.8
    WAIST_DEPTH = 0.75
    HIP_DEPTH = 0.85

    SIDE_WIDENING = 0.1
    CHEST_BULGE = 0.15
    HIP_BULGE = 0.2

    def __init__(
        self,
        vertical_steps: int = TORSO_VERTICAL_STEPS,
        horizontal_steps: int = TORSO_HORIZONTAL_STEPS
    ) -> None:
        super().__init__(vertical_steps, horizontal_steps)

    def cross_section(
        self,
        y: float,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> tuple[float, float]:
        """
        Lateral and depth radius of the torso at height `y`.

        Returns:
            (x_radius, z_radius)
        """
        top = landmarks.neck
        bottom = landmarks.hip
        neck_radius = circumference_to_radius(body.neck)
        shoulder_offset = body.shoulders / 2
        chest_radius = circumference_to_radius(body.chest)
        waist_radius = circumference_to_radius(body.waist)
        hip_radius = circumference_to_radius(body.hips)

        if y > landmarks.shoulder:
            blend = (y - landmarks.shoulder) / (top - landmarks.shoulder)
            x_radius = blend * neck_radius + (1 - blend) * shoulder_offset
            z_radius = neck_radius * self.NECK_DEPTH
        elif y > landmarks.chest:
            blend = (y - landmarks.chest) / (landmarks.shoulder - landmarks.chest)
            x_radius = blend * shoulder_offset + (1 - blend) * chest_radius
            z_radius = blend * neck_radius * self.NECK_DEPTH + (1 - blend) * chest_radius * self.CHEST_DEPTH
        elif y > landmarks.waist:
            blend = (y - landmarks.waist) / (landmarks.chest - landmarks.waist)
            x_radius = blend * chest_radius + (1 - blend) * waist_radius
            z_radius = blend * chest_radius * self.CHEST_DEPTH + (1 - blend) * waist_radius * self.WAIST_DEPTH
        else:
            blend = (y - bottom) / (landmarks.waist - bottom)
            x_radius = blend * waist_radius + (1 - blend) * hip_radius
            z_radius = blend * waist_radius * self.WAIST_DEPTH + (1 - blend) * hip_radius * self.HIP_DEPTH

        return x_radius, z_radius

    def generate(
        self,
        mesh: MeshAccumulator,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> MeshStats:
        start = mesh.stats()
        top = landmarks.neck
        bottom = landmarks.hip
        cos_a = np.cos(self.angles)
        sin_a = np.sin(self.angles)

        for h in range(self.vertical_steps):
            y = top - self.ring_fraction(h) * (top - bottom)
            x_radius, z_radius = self.cross_section(y, body, landmarks)

            adjusted_x = x_radius * (1 + self.SIDE_WIDENING * np.abs(sin_a))
            if landmarks.chest < y < landmarks.shoulder:
                adjusted_z = z_radius * (1 + self.CHEST_BULGE * cos_a)
            elif bottom < y < landmarks.waist:
                adjusted_z = z_radius * (1 + self.HIP_BULGE * np.cos(self.angles + np.pi))
            else:
                adjusted_z = np.full_like(cos_a, z_radius)

            x = cos_a * adjusted_x
            z = sin_a * adjusted_z
            positions = np.column_stack([x, np.full_like(x, y), z])
            normals = np.column_stack([x / adjusted_x, np.zeros_like(x), z / adjusted_z])
            self.append_ring(mesh, positions, normals, connect=h > 0)

        return self._report(mesh, start)
