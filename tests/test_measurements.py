import logging
import math

import pytest

from bodyscribe.config import MEASUREMENT_DEFAULTS
from bodyscribe.model.measurements import (
    KNOWN_MEASUREMENT_FIELDS, REQUIRED_MEASUREMENT_FIELDS, BodyParameters, is_reportable,
    missing_required_fields, normalize_measurements, parse_measurement, parse_number,
)


@pytest.mark.parametrize("raw, expected", [
    ("95", 95.0),
    (" 95.5 ", 95.5),
    ("180 cm", 180.0),
    ("1e2", 100.0),
    (".5", 0.5),
    ("-3", -3.0),
    (72, 72.0),
    (72.25, 72.25),
])
def test_parse_number_reads_leading_number(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "cm 180", True, math.nan, math.inf, "inf"])
def test_parse_number_rejects_non_numeric(raw):
    assert parse_number(raw) is None


@pytest.mark.parametrize("raw", ["0", "-5", 0, -1.5, ""])
def test_parse_measurement_rejects_non_positive(raw):
    assert parse_measurement(raw) is None


def test_empty_set_uses_all_defaults():
    assert normalize_measurements({}) == BodyParameters.defaults()


def test_empty_chest_equals_default_chest(measurements):
    empty = normalize_measurements({**measurements, "chest": ""})
    explicit = normalize_measurements({**measurements, "chest": "95"})

    assert empty == explicit
    assert empty.chest == MEASUREMENT_DEFAULTS["chest"]


@pytest.mark.parametrize("bad", ["", "abc", "0", "-80", "nan", None])
def test_invalid_values_fall_back(bad):
    body = normalize_measurements({"waist": bad})

    assert body.waist == MEASUREMENT_DEFAULTS["waist"]


def test_valid_values_are_used():
    body = normalize_measurements({"height": "182.5", "neck": 40, "ankle": "24 cm"})

    assert body.height == 182.5
    assert body.neck == 40.0
    assert body.ankle == 24.0


def test_extra_fields_are_ignored():
    body = normalize_measurements({"footLength": "26", "favouriteColour": "blue"})

    assert body == BodyParameters.defaults()


def test_derived_values():
    body = normalize_measurements({"height": "175", "weight": "70"})

    assert body.scale == pytest.approx(1.0)
    assert body.bmi == pytest.approx(70 / 1.75 ** 2)
    assert body.volume_adjustment == pytest.approx(body.bmi / 22)


def test_default_substitution_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="bodyscribe")

    normalize_measurements({"chest": ""})

    assert any("'chest'" in record.getMessage() for record in caplog.records)
    assert all(record.levelno < logging.WARNING for record in caplog.records)


def test_missing_required_fields():
    assert missing_required_fields({"height": "180", "weight": "0", "hips": "90"}) == [
        "weight", "chest", "waist"
    ]
    assert missing_required_fields(dict.fromkeys(REQUIRED_MEASUREMENT_FIELDS, "1")) == []


def test_required_fields_are_known():
    assert set(REQUIRED_MEASUREMENT_FIELDS) <= set(KNOWN_MEASUREMENT_FIELDS)
    assert set(MEASUREMENT_DEFAULTS) <= set(KNOWN_MEASUREMENT_FIELDS)


@pytest.mark.parametrize("raw, reportable", [
    ("95", True), ("-3", True), ("0", False), ("", False), ("abc", False), (None, False),
])
def test_is_reportable(raw, reportable):
    assert is_reportable(raw) is reportable


@pytest.mark.parametrize("height", ["1e300", "1e-200"])
def test_extreme_heights_do_not_fail(height, caplog):
    caplog.set_level(logging.DEBUG, logger="bodyscribe")

    body = normalize_measurements({"height": height})

    assert body.height == float(height)
    assert body.bmi >= 0.0
    assert body.volume_adjustment >= 0.0


@pytest.mark.parametrize("height", ["1e300", "1e-200"])
def test_extreme_heights_still_generate(height, frozen_clock, small_resolution):
    from bodyscribe import generate_body_model

    document = generate_body_model({"height": height}, resolution=small_resolution, clock=frozen_clock)

    assert f"# height: {height}" in document.splitlines()
    assert sum(line.startswith("f ") for line in document.splitlines()) == 4 * 12 + 3 * 16 + 96 + 24
