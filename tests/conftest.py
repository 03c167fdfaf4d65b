import logging
from datetime import datetime, timezone

import pytest

from bodyscribe.generators import ResolutionSettings
from bodyscribe.model.landmarks import compute_landmarks
from bodyscribe.model.measurements import BodyParameters


@pytest.fixture
def measurements():
    """Required fields as the form submits them, everything else left to defaults."""
    return {"height": "175", "weight": "70", "chest": "95", "waist": "80", "hips": "92"}


@pytest.fixture
def frozen_clock():
    moment = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def small_resolution():
    return ResolutionSettings(
        head=6,
        torso_vertical=4,
        torso_horizontal=8,
        limb_vertical=3,
        limb_horizontal=6,
    )


@pytest.fixture
def body():
    return BodyParameters.defaults()


@pytest.fixture
def landmarks(body):
    return compute_landmarks(body.height)


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo `setup_logging` calls made by the CLI tests."""
    yield
    for name in ("bodyscribe", "py.warnings"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
    logging.getLogger("bodyscribe").setLevel(logging.NOTSET)
    logging.getLogger("py.warnings").propagate = True
    logging.captureWarnings(False)
