"""Tests for HDF5 field output."""

import h5py
import numpy as np
import pytest

from sonicfield import __version__
from sonicfield.analysis import analyze_coverage
from sonicfield.io.hdf5 import FieldResultReader, FieldResultWriter
from sonicfield.sampling import FieldRequest, SamplingPlane, run_to_completion

PLANE = SamplingPlane("top_down", resolution=1.0)


@pytest.fixture
def result(room, point_source, deployment):
    return run_to_completion(PLANE, room, point_source, deployment)


def test_hdf5_writer_structure(tmp_path, room, point_source, deployment, result):
    """Writer creates the expected groups and attributes."""
    output_path = tmp_path / "field.h5"
    request = FieldRequest.capture(room, point_source, deployment)

    with FieldResultWriter(output_path) as writer:
        writer.write(result, request=request, runtime_seconds=0.5)

    assert output_path.exists()
    with h5py.File(output_path, "r") as f:
        for group in ("metadata", "plane", "fields", "room", "deployment"):
            assert group in f
        assert "coverage" not in f

        assert f["metadata"].attrs["sonicfield_version"] == __version__
        assert f["metadata"].attrs["generation"] == result.generation
        assert f["metadata"].attrs["runtime_seconds"] == pytest.approx(0.5)
        assert "created_at" in f["metadata"].attrs

        assert f["plane"].attrs["kind"] == "top_down"
        assert list(f["plane"].attrs["shape"]) == [20, 15]
        assert f["fields/spl"].attrs["units"] == "dB"

        assert f["room"].attrs["width"] == pytest.approx(room.width)
        assert f["deployment"].attrs["profile"] == point_source.id
        assert f["deployment"].attrs["deployment_mode"] == "single_center"
        assert not f["deployment"].attrs["center_fill_enabled"]


def test_hdf5_round_trip(tmp_path, room, point_source, deployment, result):
    """Reader returns the written field and coverage metrics."""
    output_path = tmp_path / "field.h5"
    analysis = analyze_coverage(room, point_source, deployment)

    writer = FieldResultWriter(output_path)
    writer.write(result, request=FieldRequest.capture(room, point_source, deployment),
                 coverage=analysis)

    with FieldResultReader(output_path) as reader:
        spl = reader.load_spl()
        distance = reader.load_nearest_distance()
        coverage = reader.load_coverage()
        metadata = reader.get_metadata()

    # Stored as float32
    np.testing.assert_allclose(spl, result.spl, atol=1e-4)
    np.testing.assert_allclose(distance, result.nearest_distance, atol=1e-5)

    assert coverage["coverage_percentage"] == pytest.approx(analysis.coverage_percentage)
    assert bool(coverage["has_ceiling_reflection"]) == analysis.has_ceiling_reflection

    np.testing.assert_allclose(metadata["plane"]["u_coords"], result.u_coords)
    np.testing.assert_allclose(metadata["plane"]["v_coords"], result.v_coords)
    assert metadata["room"]["depth"] == pytest.approx(room.depth)


def test_hdf5_empty_field(tmp_path, room, deployment):
    """An empty field is stored as NaN without request metadata."""
    output_path = tmp_path / "empty.h5"
    empty = run_to_completion(PLANE, room, None, deployment)

    with FieldResultWriter(output_path, compression=None) as writer:
        writer.write(empty)

    with FieldResultReader(output_path) as reader:
        assert np.all(np.isnan(reader.load_spl()))
        assert reader.load_coverage() is None
        metadata = reader.get_metadata()

    assert bool(metadata["metadata"]["is_empty"])
    assert "room" not in metadata


def test_reader_missing_fields(tmp_path):
    output_path = tmp_path / "bare.h5"
    with h5py.File(output_path, "w") as f:
        f.create_group("metadata")

    with FieldResultReader(output_path) as reader:
        with pytest.raises(ValueError, match="No SPL field"):
            reader.load_spl()
        with pytest.raises(ValueError, match="No distance field"):
            reader.load_nearest_distance()
