from bodyscribe.generators.base import (
    ResolutionSettings, RingSegmentGenerator, SegmentGenerator, validate_resolution
)
from bodyscribe.generators.feet import FootPairGenerator
from bodyscribe.generators.head import HeadGenerator
from bodyscribe.generators.limbs import ArmPairGenerator, LegPairGenerator
from bodyscribe.generators.torso import TorsoGenerator

__all__ = [
    "ResolutionSettings",
    "SegmentGenerator",
    "RingSegmentGenerator",
    "validate_resolution",
    "HeadGenerator",
    "TorsoGenerator",
    "ArmPairGenerator",
    "LegPairGenerator",
    "FootPairGenerator",
]
