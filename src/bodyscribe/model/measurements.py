"""
Measurement Normalizer
======================
Converts a raw Measurement Set (form strings or numbers) into a fully
populated `BodyParameters` record.

Why is this file needed?
------------------------
1. Robustness: callers may hand over empty strings, units ("180 cm") or
   garbage. Every consumed field falls back to a documented default, so the
   generator never fails on bad input.
2. Derived values: the proportional scale and the BMI based volume factor
   are computed once, here.

Classes:
    BodyParameters: Numeric measurements in centimeters (weight in kg).
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional

from bodyscribe.config import MEASUREMENT_DEFAULTS, REFERENCE_BMI, REFERENCE_HEIGHT_CM

logger = logging.getLogger(__name__)

# Field name -> raw value, as submitted by the measurement form
MeasurementSet = Mapping[str, Any]

REQUIRED_MEASUREMENT_FIELDS: tuple[str, ...] = ("height", "weight", "chest", "waist", "hips")

KNOWN_MEASUREMENT_FIELDS: tuple[str, ...] = (
    # Basic
    "height", "weight",
    # Torso
    "chest", "waist", "hips", "shoulders", "neck",
    # Arms
    "bicep", "forearm", "wrist",
    # Legs
    "inseam", "thigh", "calf", "ankle",
    # Advanced (optional, reported in the header only)
    "headCircumference", "neckToWaist", "shoulderToElbow", "elbowToWrist",
    "waistToKnee", "kneeToAnkle", "footLength",
)

# Leading decimal number, the rest of the string is ignored ("180 cm" -> 180)
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> Optional[float]:
    """
    Parse the leading number of a raw measurement value.

    Args:
        value: String or number as submitted.

    Returns:
        The finite number, or None if nothing numeric could be read.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value).strip())
        if match is None:
            return None
        number = float(match.group(0))

    if not math.isfinite(number):
        return None
    return number


def parse_measurement(value: Any) -> Optional[float]:
    """Parse a measurement, accepting only finite positive numbers."""
    number = parse_number(value)
    if number is None or number <= 0.0:
        return None
    return number


def is_reportable(value: Any) -> bool:
    """Whether a raw value is written into the OBJ header comments."""
    number = parse_number(value)
    return number is not None and number != 0.0


def missing_required_fields(measurements: MeasurementSet) -> List[str]:
    """Names of required fields that are absent or not a positive number."""
    return [
        name for name in REQUIRED_MEASUREMENT_FIELDS
        if parse_measurement(measurements.get(name)) is None
    ]


@dataclass(frozen=True)
class BodyParameters:
    """Normalized measurements, all in centimeters except weight (kg)."""
    height: float
    weight: float
    chest: float
    waist: float
    hips: float
    shoulders: float
    neck: float
    bicep: float
    forearm: float
    wrist: float
    thigh: float
    calf: float
    ankle: float
    inseam: float

    @property
    def scale(self) -> float:
        """Height relative to the reference figure."""
        return self.height / REFERENCE_HEIGHT_CM

    @property
    def bmi(self) -> float:
        # Chained division saturates to inf/0.0 instead of raising for extreme heights
        height_m = self.height / 100
        return self.weight / height_m / height_m

    @property
    def volume_adjustment(self) -> float:
        """
        BMI relative to the reference BMI.

        Informational only: no generator applies it to any radius.
        """
        return self.bmi / REFERENCE_BMI

    @classmethod
    def defaults(cls) -> BodyParameters:
        return cls(**MEASUREMENT_DEFAULTS)


def normalize_measurements(measurements: MeasurementSet) -> BodyParameters:
    """
    Build BodyParameters from a Measurement Set.

    Fields that are absent, empty, non-numeric, non-finite or not positive are
    replaced by their default from `MEASUREMENT_DEFAULTS`. Extra fields are
    ignored here (the serializer still reports them).

    Args:
        measurements: Mapping of field name to raw value.

    Returns:
        Fully populated BodyParameters.
    """
    values = {}
    for f in fields(BodyParameters):
        parsed = parse_measurement(measurements.get(f.name))
        if parsed is None:
            parsed = MEASUREMENT_DEFAULTS[f.name]
            logger.debug(f"Measurement '{f.name}' missing or invalid, using default {parsed}.")
        values[f.name] = parsed

    body = BodyParameters(**values)
    logger.debug(
        f"Normalized body: height={body.height}, scale={body.scale:.3f}, "
        f"BMI={body.bmi:.1f}, volume factor={body.volume_adjustment:.3f}"
    )
    return body
