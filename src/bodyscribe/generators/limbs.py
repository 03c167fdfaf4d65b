"""
Paired limb generators (arms and legs).

Each limb is built in a local frame on the right side (+X) of the body and
mirrored for the left side, so the two limbs of a pair are exact mirror
images about the sagittal plane. Limbs are separate surfaces: they start at
the torso's outline but are not welded to it.
"""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bodyscribe.config import LIMB_HORIZONTAL_STEPS, LIMB_VERTICAL_STEPS
from bodyscribe.generators.base import SIDE_SIGNS, RingSegmentGenerator
from bodyscribe.model import circumference_to_radius
from bodyscribe.model.mesh import MeshAccumulator, MeshStats

if TYPE_CHECKING:
    import numpy.typing as npt
    from bodyscribe.model.landmarks import LandmarkTable
    from bodyscribe.model.measurements import BodyParameters


@dataclass(frozen=True)
class LimbRing:
    """One cross-section of a right-side limb."""
    y: float
    radius: float
    center_x: float
    z_offset: float = 0.0


def blend(start: float, end: float, t: float) -> float:
    """Linear interpolation from `start` (t=0) to `end` (t=1)."""
    return start * (1 - t) + end * t


class LimbPairGenerator(RingSegmentGenerator):
    """
    Base class for a left/right pair of ring-based limbs.
    """
    NAME = "Limb pair"

    def __init__(
        self,
        vertical_steps: int = LIMB_VERTICAL_STEPS,
        horizontal_steps: int = LIMB_HORIZONTAL_STEPS
    ) -> None:
        super().__init__(vertical_steps, horizontal_steps)

    @abstractmethod
    def ring_at(self, t: float, body: BodyParameters, landmarks: LandmarkTable) -> LimbRing:
        """Cross-section of the right limb at normalized position `t` (0 = top)."""
        pass

    @abstractmethod
    def radius_modulation(self, angles: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Factor applied to the ring radius at each angle."""
        pass

    def generate(
        self,
        mesh: MeshAccumulator,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> MeshStats:
        start = mesh.stats()
        cos_a = np.cos(self.angles)
        sin_a = np.sin(self.angles)
        modulation = self.radius_modulation(self.angles)

        for sign in SIDE_SIGNS:
            for h in range(self.vertical_steps):
                ring = self.ring_at(self.ring_fraction(h), body, landmarks)
                adjusted = ring.radius * modulation

                x = sign * (ring.center_x + cos_a * adjusted)
                z = ring.z_offset + sin_a * adjusted
                positions = np.column_stack([x, np.full_like(x, ring.y), z])
                normals = np.column_stack([sign * cos_a, np.zeros_like(x), sin_a])
                self.append_ring(mesh, positions, normals, connect=h > 0, mirrored=sign < 0)

        return self._report(mesh, start)


class ArmPairGenerator(LimbPairGenerator):
    """
    Arms hanging from shoulder height, three quarters of it long.

    The radius blends bicep -> forearm over the upper 40 % and
    forearm -> wrist below the elbow. The upper arm angles slightly outward,
    the forearm bends back toward the body and sits a little forward.
    """
    NAME = "Arms"
    LENGTH_FACTOR = 0.75
    ELBOW = 0.4
    START_INSET = 0.95
    OUTWARD_ANGLE = 0.1
    FOREARM_BEND = 0.1
    FOREARM_FORWARD = 0.05

    def ring_at(self, t: float, body: BodyParameters, landmarks: LandmarkTable) -> LimbRing:
        arm_length = landmarks.shoulder * self.LENGTH_FACTOR
        shoulder_offset = body.shoulders / 2
        start_x = shoulder_offset * self.START_INSET
        end_x = shoulder_offset + self.OUTWARD_ANGLE

        bicep_radius = circumference_to_radius(body.bicep)
        forearm_radius = circumference_to_radius(body.forearm)
        wrist_radius = circumference_to_radius(body.wrist)

        y = landmarks.shoulder - t * arm_length
        if t < self.ELBOW:
            radius = blend(bicep_radius, forearm_radius, t / self.ELBOW)
            center_x = start_x + t * (end_x - start_x) * self.ELBOW
            z_offset = 0.0
        else:
            radius = blend(forearm_radius, wrist_radius, (t - self.ELBOW) / (1 - self.ELBOW))
            center_x = end_x - (t - self.ELBOW) * self.FOREARM_BEND
            z_offset = self.FOREARM_FORWARD

        return LimbRing(y=y, radius=radius, center_x=center_x, z_offset=z_offset)

    def radius_modulation(self, angles: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        # Thicker toward the back, thinner toward the front
        return 1 + 0.1 * np.cos(angles + np.pi / 2)


class LegPairGenerator(LimbPairGenerator):
    """
    Legs from hip height down to ankle height.

    The radius blends thigh -> calf above the knee and calf -> ankle below it.
    The shin curves slightly forward between knee and ankle.
    """
    NAME = "Legs"
    HIP_SPACING = 0.4
    SHIN_CURVE = 0.02

    @classmethod
    def hip_offset(cls, body: BodyParameters) -> float:
        """Lateral distance of each leg axis from the body center."""
        return circumference_to_radius(body.hips) * cls.HIP_SPACING

    def ring_at(self, t: float, body: BodyParameters, landmarks: LandmarkTable) -> LimbRing:
        hip = landmarks.hip
        knee = landmarks.knee
        ankle = landmarks.ankle

        thigh_radius = circumference_to_radius(body.thigh)
        calf_radius = circumference_to_radius(body.calf)
        ankle_radius = circumference_to_radius(body.ankle)

        y = hip - t * (hip - ankle)
        if y > knee:
            radius = blend(calf_radius, thigh_radius, (y - knee) / (hip - knee))
            z_offset = 0.0
        else:
            shin = (y - ankle) / (knee - ankle)
            radius = blend(ankle_radius, calf_radius, shin)
            z_offset = self.SHIN_CURVE * np.sin(shin * np.pi)

        return LimbRing(y=y, radius=radius, center_x=self.hip_offset(body), z_offset=float(z_offset))

    def radius_modulation(self, angles: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        return 1 + 0.1 * np.cos(angles)
