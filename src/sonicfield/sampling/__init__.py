"""Incremental, cancellable field sampling over rendering planes."""

from .hosts import DEFAULT_FRAME_INTERVAL, FrameHost, ImmediateFrameHost, ManualFrameHost
from .plane import PLANE_KINDS, PlaneGrid, SamplingPlane
from .scheduler import (
    FieldRequest,
    FieldResult,
    FieldSampler,
    GenerationToken,
    JobCoordinator,
    JobState,
    SamplerSettings,
    SamplingJob,
    run_to_completion,
)

__all__ = [
    # Hosts
    "FrameHost",
    "ImmediateFrameHost",
    "ManualFrameHost",
    "DEFAULT_FRAME_INTERVAL",
    # Planes
    "SamplingPlane",
    "PlaneGrid",
    "PLANE_KINDS",
    # Scheduling
    "GenerationToken",
    "JobCoordinator",
    "JobState",
    "FieldRequest",
    "FieldResult",
    "SamplingJob",
    "SamplerSettings",
    "FieldSampler",
    "run_to_completion",
]
