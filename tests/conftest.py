"""Shared fixtures for the sonicfield test suite."""

import pytest

from sonicfield.sources import (
    AcousticSourceProfile,
    DeploymentConfiguration,
    RoomDimensions,
    SourceType,
)


class FakeClock:
    """Clock that advances a fixed step every time it is read.

    Makes slice budgets deterministic: with a 1 ms step and a 4 ms budget a
    slice computes exactly four cells.
    """

    def __init__(self, step: float = 0.001, start: float = 0.0):
        self.step = step
        self.time = start

    def __call__(self) -> float:
        self.time += self.step
        return self.time


@pytest.fixture
def room():
    return RoomDimensions(width=15.0, depth=20.0, height=6.0)


@pytest.fixture
def point_source():
    """Simple 130 dB point source with 90° x 60° coverage."""
    return AcousticSourceProfile(
        id="test-point",
        brand="Test",
        model="Point 130",
        type=SourceType.POINT_SOURCE,
        max_spl=130.0,
        horz_dispersion=90.0,
        vert_dispersion=60.0,
        center_fill_capable=True,
    )


@pytest.fixture
def line_array():
    """Line array element, 0.3 m pitch, coupling 0.9."""
    return AcousticSourceProfile(
        id="test-line",
        brand="Test",
        model="Line 130",
        type=SourceType.LINE_ARRAY,
        max_spl=130.0,
        horz_dispersion=100.0,
        vert_dispersion=10.0,
        coupling_coefficient=0.9,
        arrayable=True,
        max_array_size=16,
        element_pitch=0.3,
    )


@pytest.fixture
def deployment(point_source):
    """Single source at ear height, no tilt or aim."""
    return DeploymentConfiguration(speaker_id=point_source.id, trim_height=1.4)


@pytest.fixture
def fake_clock():
    return FakeClock()
