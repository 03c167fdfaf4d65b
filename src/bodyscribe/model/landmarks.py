"""Body landmarks: vertical positions as fixed fractions of overall height."""
from __future__ import annotations

from dataclasses import astuple, dataclass, fields

# Ordered from head top to sole; fractions strictly decrease
LANDMARK_FRACTIONS: tuple[tuple[str, float], ...] = (
    ("head_top", 0.995),
    ("head_base", 0.87),
    ("neck", 0.83),
    ("shoulder", 0.81),
    ("chest", 0.72),
    ("waist", 0.62),
    ("hip", 0.53),
    ("inseam", 0.45),
    ("knee", 0.28),
    ("ankle", 0.02),
    ("foot", 0.0),
)


@dataclass(frozen=True)
class LandmarkTable:
    """Landmark heights in centimeters above the floor."""
    head_top: float
    head_base: float
    neck: float
    shoulder: float
    chest: float
    waist: float
    hip: float
    inseam: float
    knee: float
    ankle: float
    foot: float

    def as_ordered(self) -> list[tuple[str, float]]:
        """(name, height) pairs from head top down to the foot."""
        return [(f.name, value) for f, value in zip(fields(self), astuple(self))]


def compute_landmarks(height: float) -> LandmarkTable:
    """
    Derive all landmark heights for a figure of the given height.

    Args:
        height: Overall body height, expected positive.

    Returns:
        LandmarkTable with `fraction * height` for every landmark.
    """
    return LandmarkTable(**{name: fraction * height for name, fraction in LANDMARK_FRACTIONS})
