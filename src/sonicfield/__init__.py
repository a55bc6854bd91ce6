"""
Sonicfield - SPL field computation for loudspeaker deployments.

Main exports:
- evaluate: Point SPL from one source (spherical or line-array regime)
- combine: Incoherent energy sum over every active source
- analyze_coverage: Front/back balance, ceiling check, coverage percentage
- FieldSampler: Incremental, cancellable plane sampler driven by a frame host
- run_to_completion: Headless sampling of a whole plane
- get_profile: Built-in loudspeaker catalog lookup
"""

__version__ = "0.1.0"

from sonicfield.analysis import CoverageAnalysis, analyze_coverage
from sonicfield.core import (
    FieldSample,
    Point2D,
    Point3D,
    PropagationSettings,
    SPLResult,
    combine,
    evaluate,
    off_axis_attenuation,
)
from sonicfield.sampling import (
    FieldResult,
    FieldSampler,
    ImmediateFrameHost,
    JobCoordinator,
    ManualFrameHost,
    SamplerSettings,
    SamplingPlane,
    run_to_completion,
)
from sonicfield.sources import (
    AcousticSourceProfile,
    CenterFillConfig,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
    SourceType,
    get_profile,
    list_profiles,
)

__all__ = [
    "__version__",
    # Sources
    "AcousticSourceProfile",
    "CenterFillConfig",
    "DeploymentConfiguration",
    "DeploymentMode",
    "RoomDimensions",
    "SourceType",
    "get_profile",
    "list_profiles",
    # Physics
    "Point2D",
    "Point3D",
    "PropagationSettings",
    "SPLResult",
    "FieldSample",
    "evaluate",
    "combine",
    "off_axis_attenuation",
    # Analysis
    "CoverageAnalysis",
    "analyze_coverage",
    # Sampling
    "SamplingPlane",
    "SamplerSettings",
    "FieldSampler",
    "FieldResult",
    "JobCoordinator",
    "ImmediateFrameHost",
    "ManualFrameHost",
    "run_to_completion",
]
