"""Coverage metrics derived from the combined field."""

from sonicfield.analysis.coverage import (
    COVERAGE_BAND,
    COVERAGE_GRID_SIZE,
    LISTENER_HEIGHT,
    CoverageAnalysis,
    analyze_coverage,
    check_ceiling_intersection,
    coverage_from_field,
    coverage_points,
    in_coverage_band,
    suggest_tilt,
    suggest_trim_height,
)

__all__ = [
    "CoverageAnalysis",
    "analyze_coverage",
    "check_ceiling_intersection",
    "coverage_from_field",
    "coverage_points",
    "in_coverage_band",
    "suggest_tilt",
    "suggest_trim_height",
    "COVERAGE_BAND",
    "COVERAGE_GRID_SIZE",
    "LISTENER_HEIGHT",
]
