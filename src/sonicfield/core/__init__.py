"""Point evaluation physics: geometry, decay, directivity and combination."""

from .combiner import (
    FieldSample,
    SourceContribution,
    SourcePlacement,
    active_sources,
    combine,
    combine_placements,
    energy_sum_db,
)
from .directivity import (
    ATTENUATION_FLOOR_DB,
    EDGE_ATTENUATION_DB,
    ROLLOFF_DB_PER_DEGREE,
    combined_attenuation,
    off_axis_attenuation,
)
from .geometry import (
    Point2D,
    Point3D,
    distance_2d,
    distance_3d,
    horizontal_angle,
    vertical_angle,
    wrap_degrees,
)
from .point import SPLResult, base_spl, evaluate, reference_spl, uses_line_array_model
from .propagation import (
    DEFAULT_SETTINGS,
    REFERENCE_WAVELENGTH,
    PropagationSettings,
    array_gain,
    cylindrical_loss,
    inverse_square,
    transition_distance,
)

__all__ = [
    # Geometry
    "Point2D",
    "Point3D",
    "distance_2d",
    "distance_3d",
    "horizontal_angle",
    "vertical_angle",
    "wrap_degrees",
    # Propagation
    "PropagationSettings",
    "DEFAULT_SETTINGS",
    "REFERENCE_WAVELENGTH",
    "inverse_square",
    "cylindrical_loss",
    "array_gain",
    "transition_distance",
    # Directivity
    "off_axis_attenuation",
    "combined_attenuation",
    "EDGE_ATTENUATION_DB",
    "ROLLOFF_DB_PER_DEGREE",
    "ATTENUATION_FLOOR_DB",
    # Point model
    "SPLResult",
    "evaluate",
    "base_spl",
    "reference_spl",
    "uses_line_array_model",
    # Combiner
    "FieldSample",
    "SourceContribution",
    "SourcePlacement",
    "active_sources",
    "combine",
    "combine_placements",
    "energy_sum_db",
]
