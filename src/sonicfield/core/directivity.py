"""Off-axis attenuation from published coverage angles.

Loudspeaker coverage is specified as the full angle between the -6 dB
points. Inside that cone the response rolls off quadratically, reaching
exactly -6 dB at the edge; outside it falls 2 dB per degree down to a
-40 dB floor. Both branches meet at -6 dB, so the curve is continuous.

Horizontal and vertical attenuations are combined asymmetrically: the worse
plane counts in full and the better plane at half weight, so a listener who
is off-axis in only one plane is not penalised twice.

Example:
    >>> off_axis_attenuation(0.0, 90.0)
    0.0
    >>> off_axis_attenuation(45.0, 90.0)
    -6.0
    >>> off_axis_attenuation(50.0, 90.0)
    -16.0
"""

from __future__ import annotations

EDGE_ATTENUATION_DB = -6.0
ROLLOFF_DB_PER_DEGREE = 2.0
ATTENUATION_FLOOR_DB = -40.0


def off_axis_attenuation(angle: float, coverage_angle: float) -> float:
    """Attenuation at ``angle`` degrees off-axis.

    Args:
        angle: Off-axis angle in degrees (sign ignored)
        coverage_angle: Full -6 dB coverage angle in degrees

    Returns:
        Attenuation in dB (<= 0). 0 when no coverage data is available.
    """
    if coverage_angle <= 0:
        return 0.0

    abs_angle = abs(angle)
    half_coverage = coverage_angle / 2.0

    if abs_angle <= half_coverage:
        ratio = abs_angle / half_coverage
        return EDGE_ATTENUATION_DB * ratio * ratio

    beyond = abs_angle - half_coverage
    return max(EDGE_ATTENUATION_DB - ROLLOFF_DB_PER_DEGREE * beyond, ATTENUATION_FLOOR_DB)


def combined_attenuation(
    horz_angle: float,
    vert_angle: float,
    horz_dispersion: float,
    vert_dispersion: float,
) -> float:
    """Combine horizontal and vertical off-axis attenuation.

    Args:
        horz_angle: Horizontal off-axis angle in degrees
        vert_angle: Vertical off-axis angle in degrees
        horz_dispersion: Horizontal coverage angle in degrees
        vert_dispersion: Vertical coverage angle in degrees

    Returns:
        min(h, v) + 0.5 * max(h, v), in dB
    """
    horz = off_axis_attenuation(horz_angle, horz_dispersion)
    vert = off_axis_attenuation(vert_angle, vert_dispersion)
    return min(horz, vert) + 0.5 * max(horz, vert)
