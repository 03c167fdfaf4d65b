"""
Body Model Builder
==================
Runs the whole pipeline for one Measurement Set:
normalize -> landmarks -> segment generators -> OBJ document.

Why is this file needed?
------------------------
1. Ordering: the generators share one mesh buffer and stitch against its
   running vertex count, so they must always run in the same order
   (head, torso, arms, legs, feet).
2. Isolation: every call creates its own buffer, so concurrent calls from
   separate threads never share state.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from bodyscribe.generators import (
    ArmPairGenerator, FootPairGenerator, HeadGenerator, LegPairGenerator,
    ResolutionSettings, SegmentGenerator, TorsoGenerator,
)
from bodyscribe.io.obj import ObjSerializer
from bodyscribe.model.landmarks import compute_landmarks
from bodyscribe.model.measurements import BodyParameters, MeasurementSet, normalize_measurements
from bodyscribe.model.mesh import MeshAccumulator

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BodyModelBuilder:
    def __init__(self, resolution: Optional[ResolutionSettings] = None) -> None:
        """
        Args:
            resolution: Ring resolution per segment; defaults from `config`.
        """
        self.resolution = resolution or ResolutionSettings()
        self.generators: List[SegmentGenerator] = [
            HeadGenerator(self.resolution.head),
            TorsoGenerator(self.resolution.torso_vertical, self.resolution.torso_horizontal),
            ArmPairGenerator(self.resolution.limb_vertical, self.resolution.limb_horizontal),
            LegPairGenerator(self.resolution.limb_vertical, self.resolution.limb_horizontal),
            FootPairGenerator(),
        ]

    def build_mesh(self, body: BodyParameters) -> MeshAccumulator:
        """Run every generator, in order, into a fresh mesh buffer."""
        landmarks = compute_landmarks(body.height)
        mesh = MeshAccumulator()
        for generator in self.generators:
            generator.generate(mesh, body, landmarks)
        mesh.check_integrity()

        stats = mesh.stats()
        logger.info(f"Generated body mesh: {stats.num_vertices} vertices, {stats.num_faces} faces.")
        return mesh

    def generate(self, measurements: MeasurementSet, clock: Optional[Clock] = None) -> str:
        """
        Convert a Measurement Set into an OBJ document.

        Args:
            measurements: Field name -> raw value. Invalid or missing fields
                fall back to defaults.
            clock: Source of the header timestamp; defaults to the current UTC time.

        Returns:
            The complete OBJ document.
        """
        body = normalize_measurements(measurements)
        mesh = self.build_mesh(body)
        return ObjSerializer.serialize(mesh, measurements, generated_at=(clock or utc_now)())


def generate_body_model(
    measurements: MeasurementSet,
    resolution: Optional[ResolutionSettings] = None,
    clock: Optional[Clock] = None
) -> str:
    """Generate the OBJ document for a Measurement Set with a one-off builder."""
    return BodyModelBuilder(resolution).generate(measurements, clock=clock)
