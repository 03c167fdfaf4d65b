"""
BodyScribe
==========
Parametric human body mesh generator: body measurements in, Wavefront OBJ out.
"""
from bodyscribe.builder import BodyModelBuilder, generate_body_model
from bodyscribe.generators import ResolutionSettings
from bodyscribe.model.measurements import BodyParameters, normalize_measurements

__all__ = [
    "BodyModelBuilder",
    "BodyParameters",
    "ResolutionSettings",
    "generate_body_model",
    "normalize_measurements",
]
