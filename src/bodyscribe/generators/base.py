from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from bodyscribe.config import (
    HEAD_RESOLUTION, LIMB_HORIZONTAL_STEPS, LIMB_VERTICAL_STEPS,
    TORSO_HORIZONTAL_STEPS, TORSO_VERTICAL_STEPS,
)
from bodyscribe.exceptions import DegenerateResolutionError
from bodyscribe.model.mesh import MeshAccumulator, MeshStats, stitch_rings

if TYPE_CHECKING:
    import numpy.typing as npt
    from bodyscribe.model.landmarks import LandmarkTable
    from bodyscribe.model.measurements import BodyParameters

logger = logging.getLogger(__name__)

# Left (-1) and right (+1) limb of a pair
SIDE_SIGNS: tuple[int, int] = (-1, 1)


def validate_resolution(segment: str, vertical_steps: int, horizontal_steps: int) -> None:
    """
    Raises:
        DegenerateResolutionError: If fewer than 2 rings or fewer than 3 vertices per ring.
    """
    if vertical_steps < 2 or horizontal_steps < 3:
        raise DegenerateResolutionError(segment, vertical_steps, horizontal_steps)


@dataclass(frozen=True)
class ResolutionSettings:
    """Ring counts and vertices per ring for every segment."""
    head: int = HEAD_RESOLUTION
    torso_vertical: int = TORSO_VERTICAL_STEPS
    torso_horizontal: int = TORSO_HORIZONTAL_STEPS
    limb_vertical: int = LIMB_VERTICAL_STEPS
    limb_horizontal: int = LIMB_HORIZONTAL_STEPS

    def __post_init__(self) -> None:
        # The head needs >= 3 vertices per ring, which also yields >= 2 dome rings
        validate_resolution("Head", 2, self.head)
        validate_resolution("Torso", self.torso_vertical, self.torso_horizontal)
        validate_resolution("Limbs", self.limb_vertical, self.limb_horizontal)


def ring_angles(horizontal_steps: int) -> npt.NDArray[np.float64]:
    """Evenly spaced angles 2*pi*a/H for a in [0, H)."""
    return 2 * np.pi * np.arange(horizontal_steps, dtype=np.float64) / horizontal_steps


def unit_vectors(vectors: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """Normalize rows to unit length; zero rows stay zero."""
    vectors = np.asarray(vectors, dtype=np.float64).reshape(-1, 3)
    lengths = np.linalg.norm(vectors, axis=1, keepdims=True)
    return np.divide(vectors, lengths, out=np.zeros_like(vectors), where=lengths > 0.0)


class SegmentGenerator(ABC):
    """
    Abstract base class for body segments.

    A generator appends its vertices, normals and faces to a shared
    MeshAccumulator and reports the running counts afterwards.
    """
    NAME: str = "Segment"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    @abstractmethod
    def generate(
        self,
        mesh: MeshAccumulator,
        body: BodyParameters,
        landmarks: LandmarkTable
    ) -> MeshStats:
        """
        Append this segment to the mesh.

        Args:
            mesh: Shared buffer of the current generation run.
            body: Normalized measurements.
            landmarks: Landmark heights of the figure.

        Returns:
            Counts of the buffer after this segment was appended.
        """
        pass

    def _report(self, mesh: MeshAccumulator, start: MeshStats) -> MeshStats:
        stats = mesh.stats()
        logger.debug(
            f"{self.NAME}: +{stats.num_vertices - start.num_vertices} vertices, "
            f"+{stats.num_faces - start.num_faces} faces."
        )
        return stats


class RingSegmentGenerator(SegmentGenerator):
    """
    Base class for segments built from stacked rings of equal size.
    """

    def __init__(self, vertical_steps: int, horizontal_steps: int) -> None:
        """
        Args:
            vertical_steps: Number of rings.
            horizontal_steps: Vertices per ring.

        Raises:
            DegenerateResolutionError: If the resolution cannot form a surface.
        """
        validate_resolution(self.NAME, vertical_steps, horizontal_steps)
        self.vertical_steps = vertical_steps
        self.horizontal_steps = horizontal_steps
        self.angles = ring_angles(horizontal_steps)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.vertical_steps}x{self.horizontal_steps})"

    def ring_fraction(self, h: int) -> float:
        """Normalized position t = h / (V - 1) of ring `h` within the segment."""
        return h / (self.vertical_steps - 1)

    def append_ring(
        self,
        mesh: MeshAccumulator,
        positions: npt.NDArray[np.float64],
        normals: npt.NDArray[np.float64],
        connect: bool,
        mirrored: bool = False
    ) -> int:
        """
        Append one ring and, if `connect`, stitch it to the previous ring.

        Returns:
            0-based offset of the ring's first vertex.
        """
        ring_start = mesh.add_vertices(positions, unit_vectors(normals))
        if connect:
            stitch_rings(mesh, ring_start, self.horizontal_steps, mirrored=mirrored)
        return ring_start
