"""
Configuration & Global Constants
================================
This module serves as the central registry for the generator's global constants.

Why is this file needed?
------------------------
1. Single source: the reference height, the fallback measurements and the
   mesh resolutions are read by the normalizer, the generators and the CLI
   from one place instead of being repeated as literals.
2. Output: it fixes the generator name written into the OBJ header and the
   default file name used when a model is saved to disk.

Exports:
    REFERENCE_HEIGHT_CM (float): Height all proportions are scaled against.
    REFERENCE_BMI (float): BMI considered "average" for the volume factor.
    MEASUREMENT_DEFAULTS (dict): Fallback value for every consumed field.
    GENERATOR_NAME (str): First header line of every OBJ document.
    DEFAULT_OUTPUT_FILENAME (str): File name used when no path is given.
"""
from typing import Dict

REFERENCE_HEIGHT_CM: float = 175.0
REFERENCE_BMI: float = 22.0

# Centimeters, except weight (kilograms)
MEASUREMENT_DEFAULTS: Dict[str, float] = {
    "height": 175.0,
    "weight": 70.0,
    "chest": 95.0,
    "waist": 80.0,
    "hips": 92.0,
    "shoulders": 45.0,
    "neck": 38.0,
    "bicep": 32.0,
    "forearm": 28.0,
    "wrist": 17.0,
    "thigh": 55.0,
    "calf": 37.0,
    "ankle": 23.0,
    "inseam": 80.0,
}

# Mesh resolution (rings x vertices per ring)
HEAD_RESOLUTION: int = 30
TORSO_VERTICAL_STEPS: int = 30
TORSO_HORIZONTAL_STEPS: int = 36
LIMB_VERTICAL_STEPS: int = 16
LIMB_HORIZONTAL_STEPS: int = 16

# Output
GENERATOR_NAME: str = "BodyScribe 3D Model Generator"
DEFAULT_OUTPUT_FILENAME: str = "body-model.obj"
