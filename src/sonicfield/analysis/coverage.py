"""Coverage metrics for a deployment in a room.

The analyzer is cheap and eager: it evaluates the combined field at a few
representative listener positions and on a coarse 10 × 10 floor grid, so it
can be recomputed on every parameter change without the incremental sampler.

Representative positions (ear height 1.4 m, room centerline):
    center stage: mid-depth
    front row:    3 m from the stage
    back row:     1 m from the back wall

Coverage is the share of grid points whose level sits in an asymmetric band
around the center-stage level: down to -10 dB and up to +6 dB.

Typical usage:
    >>> from sonicfield.analysis import analyze_coverage
    >>> from sonicfield.sources import DeploymentConfiguration, RoomDimensions, get_profile
    >>> room = RoomDimensions(width=15, depth=20, height=6)
    >>> profile = get_profile("jbl-srx835p")
    >>> deployment = DeploymentConfiguration(speaker_id=profile.id, trim_height=3.0, tilt_angle=5.0)
    >>> analysis = analyze_coverage(room, profile, deployment)
    >>> analysis.front_to_back_ratio > 0
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from sonicfield.core.combiner import active_sources, combine_placements
from sonicfield.core.geometry import Point3D
from sonicfield.core.propagation import PropagationSettings
from sonicfield.sources.base import (
    AcousticSourceProfile,
    DeploymentConfiguration,
    RoomDimensions,
)

if TYPE_CHECKING:
    from sonicfield.sampling.scheduler import FieldResult

# Average seated ear height (meters)
LISTENER_HEIGHT = 1.4
FRONT_ROW_DISTANCE = 3.0
BACK_ROW_INSET = 1.0
# Usable floor starts this far from the stage
STAGE_INSET = 2.0
COVERAGE_GRID_SIZE = 10
# (below, above) the center-stage level, in dB
COVERAGE_BAND = (-10.0, 6.0)
# Mechanical tilt range of the rigging (degrees, positive = down)
TILT_RANGE = (-15.0, 45.0)


@dataclass(frozen=True)
class CoverageAnalysis:
    """Summary metrics for one deployment.

    Attributes:
        center_stage_spl: Level at mid-depth on the centerline (dB)
        front_row_spl: Level 3 m from the stage (dB)
        back_row_spl: Level 1 m from the back wall (dB)
        front_to_back_ratio: front - back in dB; positive means the front is louder
        has_ceiling_reflection: Upper coverage edge hits the ceiling inside the room
        coverage_percentage: Share of the audience grid inside the coverage band (0-100)
    """

    center_stage_spl: float
    front_row_spl: float
    back_row_spl: float
    front_to_back_ratio: float
    has_ceiling_reflection: bool
    coverage_percentage: float


def check_ceiling_intersection(
    speaker_height: float,
    tilt_angle: float,
    vert_dispersion: float,
    ceiling_height: float,
    depth: float,
) -> bool:
    """Check whether the top of the vertical coverage cone strikes the ceiling.

    Args:
        speaker_height: Height of the source in meters
        tilt_angle: Downward tilt in degrees
        vert_dispersion: Full vertical coverage angle in degrees
        ceiling_height: Ceiling height in meters
        depth: Room depth in meters

    Returns:
        True if the upper edge points upward and meets the ceiling strictly
        between the source and the back wall
    """
    top_angle = tilt_angle - vert_dispersion / 2.0
    if top_angle >= 0:
        return False

    rise_per_meter = math.tan(math.radians(abs(top_angle)))
    intersection = (ceiling_height - speaker_height) / rise_per_meter
    return 0 < intersection < depth


def coverage_points(room: RoomDimensions, size: int = COVERAGE_GRID_SIZE) -> list[Point3D]:
    """Cell centers of the coarse audience grid used for coverage."""
    usable_depth = room.depth - STAGE_INSET
    return [
        Point3D(
            room.width * (xi + 0.5) / size,
            LISTENER_HEIGHT,
            usable_depth * (zi + 0.5) / size + STAGE_INSET,
        )
        for xi in range(size)
        for zi in range(size)
    ]


def in_coverage_band(
    spl: float, reference_spl: float, band: tuple[float, float] = COVERAGE_BAND
) -> bool:
    low, high = band
    return reference_spl + low <= spl <= reference_spl + high


def analyze_coverage(
    room: RoomDimensions,
    profile: AcousticSourceProfile | None,
    deployment: DeploymentConfiguration,
    center_fill_profile: AcousticSourceProfile | None = None,
    *,
    settings: PropagationSettings | None = None,
) -> CoverageAnalysis | None:
    """Analyze coverage of a deployment.

    Args:
        room: Room dimensions
        profile: Main loudspeaker, or None when nothing is selected
        deployment: Deployment configuration
        center_fill_profile: Resolved center-fill model, if any
        settings: Line-array heuristics

    Returns:
        CoverageAnalysis, or None when there is no active source
    """
    placements = active_sources(room.width, deployment, profile, center_fill_profile)
    if not placements:
        return None

    def level_at(x: float, z: float) -> float:
        return combine_placements(Point3D(x, LISTENER_HEIGHT, z), placements, settings).total_spl

    center_x = room.width / 2.0
    center_stage = level_at(center_x, room.depth / 2.0)
    front_row = level_at(center_x, FRONT_ROW_DISTANCE)
    back_row = level_at(center_x, room.depth - BACK_ROW_INSET)

    has_reflection = check_ceiling_intersection(
        deployment.trim_height,
        deployment.tilt_angle,
        profile.vert_dispersion,
        room.height,
        room.depth,
    )

    points = coverage_points(room)
    covered = sum(
        1
        for p in points
        if in_coverage_band(combine_placements(p, placements, settings).total_spl, center_stage)
    )

    return CoverageAnalysis(
        center_stage_spl=center_stage,
        front_row_spl=front_row,
        back_row_spl=back_row,
        front_to_back_ratio=front_row - back_row,
        has_ceiling_reflection=has_reflection,
        coverage_percentage=covered / len(points) * 100.0,
    )


def coverage_from_field(
    result: FieldResult,
    reference_spl: float,
    band: tuple[float, float] = COVERAGE_BAND,
) -> float:
    """Coverage percentage over every computed cell of a field result.

    Args:
        result: Completed field result from the sampler
        reference_spl: Level the band is centered on (usually center stage)
        band: (below, above) offsets in dB

    Returns:
        Percentage (0-100), or nan when the result holds no computed cells
    """
    spl = np.asarray(result.spl, dtype=np.float64)
    computed = np.isfinite(spl)
    if not computed.any():
        return math.nan

    low, high = band
    inside = (spl >= reference_spl + low) & (spl <= reference_spl + high) & computed
    return float(inside.sum()) / float(computed.sum()) * 100.0


def _round_half_up(value: float) -> float:
    # round() would send .5 to the even neighbour
    return float(math.floor(value + 0.5))


def suggest_tilt(room: RoomDimensions, trim_height: float) -> float:
    """Tilt (whole degrees) aiming the source axis at mid-depth ear height.

    The result is clamped to TILT_RANGE.
    """
    drop = trim_height - LISTENER_HEIGHT
    tilt = _round_half_up(math.degrees(math.atan2(drop, room.depth / 2.0)))
    low, high = TILT_RANGE
    return min(max(tilt, low), high)


def suggest_trim_height(room: RoomDimensions) -> float:
    """Rule-of-thumb trim height: 65% of the ceiling, to the nearest 0.5 m."""
    return _round_half_up(room.height * 0.65 * 2.0) / 2.0
