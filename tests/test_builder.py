from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from bodyscribe import BodyModelBuilder, ResolutionSettings, generate_body_model, normalize_measurements
from bodyscribe.io import ObjSerializer


def _records(document, prefix):
    return [line for line in document.splitlines() if line.startswith(prefix)]


def test_generator_order():
    builder = BodyModelBuilder()

    assert [generator.NAME for generator in builder.generators] == [
        "Head", "Torso", "Arms", "Legs", "Feet"
    ]


def test_default_document_counts(measurements, frozen_clock):
    document = generate_body_model(measurements, clock=frozen_clock)

    # head 25x30, torso 30x36, arms and legs 2x16x16 each, feet 2x8
    assert len(_records(document, "v ")) == 750 + 1080 + 512 + 512 + 16
    assert len(_records(document, "vn ")) == 2870
    assert len(_records(document, "f ")) == 1440 + 2088 + 960 + 960 + 24
    assert "# Date: 2024-05-01T12:00:00.000Z" in document.splitlines()


def test_all_face_indices_in_range(measurements, frozen_clock):
    document = generate_body_model(measurements, clock=frozen_clock)
    vertex_count = len(_records(document, "v "))

    indices = [
        int(token.split("/")[0])
        for line in _records(document, "f ")
        for token in line.split()[1:]
    ]
    assert min(indices) == 1
    assert max(indices) <= vertex_count


def test_face_triplets_repeat_the_vertex_index(measurements, frozen_clock):
    document = generate_body_model(measurements, clock=frozen_clock)

    for line in _records(document, "f ")[:50]:
        for token in line.split()[1:]:
            position, texture, normal = token.split("/")
            assert position == texture == normal


def test_generation_is_deterministic(measurements, frozen_clock):
    first = generate_body_model(measurements, clock=frozen_clock)
    second = generate_body_model(measurements, clock=frozen_clock)

    assert first == second


def test_concurrent_generation(measurements, frozen_clock, small_resolution):
    builder = BodyModelBuilder(small_resolution)
    expected = builder.generate(measurements, clock=frozen_clock)

    with ThreadPoolExecutor(max_workers=4) as pool:
        documents = list(pool.map(lambda _: builder.generate(measurements, clock=frozen_clock), range(8)))

    assert all(document == expected for document in documents)


def test_empty_chest_uses_default_geometry(measurements):
    builder = BodyModelBuilder()

    empty = builder.build_mesh(normalize_measurements({**measurements, "chest": ""}))
    explicit = builder.build_mesh(normalize_measurements({**measurements, "chest": "95"}))

    assert empty.vertices == explicit.vertices
    assert empty.faces == explicit.faces


def test_empty_chest_is_not_reported(measurements, frozen_clock):
    document = generate_body_model({**measurements, "chest": ""}, clock=frozen_clock)
    lines = document.splitlines()

    assert "# height: 175" in lines
    assert not any(line.startswith("# chest:") for line in lines)


def test_empty_measurement_set_still_generates(frozen_clock):
    document = generate_body_model({}, clock=frozen_clock)

    assert len(_records(document, "v ")) == 2870
    assert "# Measurement data used:" in document


def test_measurements_change_geometry(measurements):
    builder = BodyModelBuilder()

    base = builder.build_mesh(normalize_measurements(measurements))
    tall = builder.build_mesh(normalize_measurements({**measurements, "height": "200"}))

    assert tall.vertex_count == base.vertex_count
    assert max(y for _, y, _ in tall.vertices) > max(y for _, y, _ in base.vertices)


def test_mesh_stays_within_body_height(measurements):
    mesh = BodyModelBuilder().build_mesh(normalize_measurements(measurements))
    vertices, _, _ = mesh.as_arrays()

    assert vertices[:, 1].min() == pytest.approx(0.0)
    assert vertices[:, 1].max() == pytest.approx(175 * 0.995)


def test_custom_resolution(measurements, frozen_clock, small_resolution):
    document = generate_body_model(measurements, resolution=small_resolution, clock=frozen_clock)

    # head 6: 3 dome + 2 face rings; torso 4x8; limbs 3x6
    vertices = 5 * 6 + 4 * 8 + 2 * (2 * 3 * 6) + 16
    faces = 4 * 12 + 3 * 16 + 2 * (2 * 2 * 12) + 24
    assert len(_records(document, "v ")) == vertices
    assert len(_records(document, "f ")) == faces


def test_document_parses_back(measurements, frozen_clock, small_resolution):
    builder = BodyModelBuilder(small_resolution)
    mesh = builder.build_mesh(normalize_measurements(measurements))

    parsed = ObjSerializer.parse(builder.generate(measurements, clock=frozen_clock))

    np.testing.assert_allclose(parsed.as_arrays()[0], mesh.as_arrays()[0], atol=1e-6)
    assert parsed.faces == mesh.faces


def test_default_resolution_settings():
    assert BodyModelBuilder().resolution == ResolutionSettings(30, 30, 36, 16, 16)
