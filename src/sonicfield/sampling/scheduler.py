"""Incremental, cancellable field sampling under a per-frame time budget.

Recomputing the full field on every slider move would block the host's
rendering thread, so the sampler spreads the work across frames:

1. ``request()`` issues a new generation token from the surface's
   JobCoordinator. Any job holding an older token is now stale.
2. Requests are debounced: the job is only created once the parameters have
   been quiet for ``debounce_ms``, so a burst of changes starts one job.
3. The job walks the grid in row-major order, one cell at a time. After each
   cell the elapsed slice time is compared with ``slice_budget_ms``; when
   exceeded the job asks the host for another frame and resumes from its
   saved cursor.
4. At the start of every slice (and before every emitted cell) the job
   compares its token with the coordinator. A stale job stops immediately
   and emits nothing further, so results always appear in submission order.
5. A finished job reports through ``on_complete`` exactly once. A superseded
   job never does; that is not an error.

Everything runs on the host's thread. There are no locks: the generation
token is the only cancellation mechanism. Each rendering surface owns its
own coordinator, so two planes of the same room never cancel each other.

Example:
    >>> from sonicfield.sampling import FieldSampler, ManualFrameHost, SamplingPlane
    >>> from sonicfield.sources import DeploymentConfiguration, RoomDimensions, get_profile
    >>> host = ManualFrameHost()
    >>> results = []
    >>> sampler = FieldSampler(SamplingPlane("top_down", resolution=1.0), host,
    ...                        on_complete=results.append)
    >>> profile = get_profile("jbl-srx835p")
    >>> token = sampler.request(RoomDimensions(10, 12, 4), profile,
    ...                         DeploymentConfiguration(speaker_id=profile.id, trim_height=2.5))
    >>> host.run_until_idle() > 0
    True
    >>> results[0].shape
    (12, 10)
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import partial

import numpy as np
from numpy.typing import NDArray

from sonicfield.core.combiner import FieldSample, active_sources, combine_placements
from sonicfield.core.propagation import PropagationSettings
from sonicfield.sources.base import (
    AcousticSourceProfile,
    DeploymentConfiguration,
    RoomDimensions,
)

from .hosts import FrameHost, ImmediateFrameHost
from .plane import PlaneGrid, SamplingPlane

CellCallback = Callable[[int, int, FieldSample], None]


# =============================================================================
# Generation Tokens
# =============================================================================


class JobCoordinator:
    """Issues generation tokens for one rendering surface.

    The coordinator holds the latest issued generation. A token is current
    only while no newer generation has been issued or invalidated.

    Example:
        >>> coordinator = JobCoordinator()
        >>> first = coordinator.issue()
        >>> second = coordinator.issue()
        >>> first.is_current(), second.is_current()
        (False, True)
    """

    def __init__(self):
        self._latest = 0

    @property
    def latest(self) -> int:
        """Latest generation issued (or invalidated)."""
        return self._latest

    def issue(self) -> GenerationToken:
        """Start a new generation and return its token."""
        self._latest += 1
        return GenerationToken(self._latest, self)

    def invalidate(self) -> None:
        """Make every outstanding token stale without issuing a new one."""
        self._latest += 1


@dataclass(frozen=True)
class GenerationToken:
    """Cancellation token captured by a sampling job."""

    generation: int
    coordinator: JobCoordinator = field(repr=False, compare=False)

    def is_current(self) -> bool:
        return self.coordinator.latest == self.generation


# =============================================================================
# Requests, Jobs and Results
# =============================================================================


@dataclass(frozen=True)
class SamplerSettings:
    """Timing configuration of a field sampler.

    Args:
        slice_budget_ms: Work allowed per frame before yielding (milliseconds)
        debounce_ms: Quiet period before a request starts a job (milliseconds)
    """

    slice_budget_ms: float = 12.0
    debounce_ms: float = 50.0

    def __post_init__(self):
        if self.slice_budget_ms <= 0:
            raise ValueError(f"slice_budget_ms must be positive, got {self.slice_budget_ms}")
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {self.debounce_ms}")


@dataclass(frozen=True)
class FieldRequest:
    """Value snapshot of everything a job computes against.

    Inputs are copied on capture so later changes to the caller's state
    cannot leak into a running job.
    """

    room: RoomDimensions
    profile: AcousticSourceProfile | None
    deployment: DeploymentConfiguration
    center_fill_profile: AcousticSourceProfile | None = None
    propagation: PropagationSettings | None = None

    @classmethod
    def capture(
        cls,
        room: RoomDimensions,
        profile: AcousticSourceProfile | None,
        deployment: DeploymentConfiguration,
        center_fill_profile: AcousticSourceProfile | None = None,
        propagation: PropagationSettings | None = None,
    ) -> FieldRequest:
        return cls(
            room=replace(room),
            profile=None if profile is None else replace(profile),
            deployment=replace(deployment, center_fill=replace(deployment.center_fill)),
            center_fill_profile=(
                None if center_fill_profile is None else replace(center_fill_profile)
            ),
            propagation=None if propagation is None else replace(propagation),
        )


@dataclass(eq=False)
class FieldResult:
    """Completed field over one sampling plane.

    Attributes:
        plane: Plane the field was sampled on
        generation: Generation of the job that produced it
        u_coords: Column axis coordinates (meters)
        v_coords: Row axis coordinates (meters)
        spl: Total SPL per cell in dB, shape (rows, cols)
        nearest_distance: Distance to the nearest source per cell (meters)
        is_empty: True when no source was active; arrays are all NaN
    """

    plane: SamplingPlane
    generation: int
    u_coords: NDArray[np.float64] = field(repr=False)
    v_coords: NDArray[np.float64] = field(repr=False)
    spl: NDArray[np.float64] = field(repr=False)
    nearest_distance: NDArray[np.float64] = field(repr=False)
    is_empty: bool = False

    @property
    def shape(self) -> tuple[int, int]:
        return self.spl.shape

    @property
    def max_spl(self) -> float:
        if self.is_empty:
            return math.nan
        return float(np.nanmax(self.spl))

    @property
    def min_spl(self) -> float:
        if self.is_empty:
            return math.nan
        return float(np.nanmin(self.spl))

    def probe(self, u: float, v: float) -> float:
        """SPL of the cell nearest to plane coordinates (u, v)."""
        col = int(np.abs(self.u_coords - u).argmin())
        row = int(np.abs(self.v_coords - v).argmin())
        return float(self.spl[row, col])


class JobState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    CANCELLED = "cancelled"


class SamplingJob:
    """One pass over a plane grid for one request.

    The job owns its output arrays and a row-major cursor. It never touches
    the sampler or the host; the sampler drives it slice by slice.

    Args:
        token: Generation token captured at request time
        request: Value snapshot of the inputs
        grid: Plane grid for the request's room
    """

    def __init__(self, token: GenerationToken, request: FieldRequest, grid: PlaneGrid):
        self.token = token
        self.request = request
        self.grid = grid
        self.state = JobState.PENDING
        self.row = 0
        self.col = 0
        self.cells_done = 0
        self.slices = 0

        self._placements = active_sources(
            request.room.width,
            request.deployment,
            request.profile,
            request.center_fill_profile,
        )
        self.spl = np.full(grid.shape, np.nan, dtype=np.float64)
        self.nearest_distance = np.full(grid.shape, np.nan, dtype=np.float64)

    @property
    def generation(self) -> int:
        return self.token.generation

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.row, self.col)

    @property
    def has_no_source(self) -> bool:
        return not self._placements

    @property
    def exhausted(self) -> bool:
        """Whether the cursor has moved past the last cell."""
        return self.has_no_source or self.row >= self.grid.shape[0]

    def is_current(self) -> bool:
        return self.token.is_current()

    def advance(self) -> tuple[int, int, FieldSample]:
        """Compute the cell under the cursor and move the cursor on."""
        row, col = self.row, self.col
        sample = combine_placements(
            self.grid.point_at(row, col),
            self._placements,
            self.request.propagation,
        )
        self.spl[row, col] = sample.total_spl
        self.nearest_distance[row, col] = sample.nearest_distance
        self.cells_done += 1

        self.col += 1
        if self.col >= self.grid.shape[1]:
            self.col = 0
            self.row += 1
        return row, col, sample

    def result(self) -> FieldResult:
        return FieldResult(
            plane=self.grid.plane,
            generation=self.generation,
            u_coords=self.grid.u_coords,
            v_coords=self.grid.v_coords,
            spl=self.spl,
            nearest_distance=self.nearest_distance,
            is_empty=self.has_no_source,
        )


# =============================================================================
# Sampler
# =============================================================================


class FieldSampler:
    """Incremental field sampler for one rendering surface.

    Args:
        plane: Plane to sample
        host: Frame host providing ``request_frame`` and ``now``
        on_cell: Called as ``on_cell(row, col, sample)`` for every computed
            cell of a current job (progressive rendering)
        on_complete: Called with the FieldResult when a job finishes
        settings: Slice budget and debounce delay
        coordinator: Generation coordinator (default: a private one)
    """

    def __init__(
        self,
        plane: SamplingPlane,
        host: FrameHost,
        *,
        on_cell: CellCallback | None = None,
        on_complete: Callable[[FieldResult], None] | None = None,
        settings: SamplerSettings | None = None,
        coordinator: JobCoordinator | None = None,
    ):
        self.plane = plane
        self.host = host
        self.on_cell = on_cell
        self.on_complete = on_complete
        self.settings = settings or SamplerSettings()
        self.coordinator = coordinator or JobCoordinator()

        self._pending: tuple[GenerationToken, FieldRequest] | None = None
        self._debounce_deadline = 0.0
        self._poll_armed = False
        self._current: SamplingJob | None = None
        self._latest_result: FieldResult | None = None

    @property
    def current_job(self) -> SamplingJob | None:
        return self._current

    @property
    def latest_result(self) -> FieldResult | None:
        """Result of the most recent completed job."""
        return self._latest_result

    @property
    def is_busy(self) -> bool:
        """Whether a request is waiting or a current job is unfinished."""
        if self._pending is not None:
            return True
        job = self._current
        return (
            job is not None
            and job.state in (JobState.PENDING, JobState.RUNNING)
            and job.is_current()
        )

    def request(
        self,
        room: RoomDimensions,
        profile: AcousticSourceProfile | None,
        deployment: DeploymentConfiguration,
        center_fill_profile: AcousticSourceProfile | None = None,
        *,
        propagation: PropagationSettings | None = None,
    ) -> GenerationToken:
        """Request a recomputation for new parameters.

        Cancels any running job (at its next slice) and schedules a new one
        after the debounce delay.

        Returns:
            Token of the new generation
        """
        token = self.coordinator.issue()
        snapshot = FieldRequest.capture(room, profile, deployment, center_fill_profile, propagation)
        self._pending = (token, snapshot)
        self._debounce_deadline = self.host.now() + self.settings.debounce_ms / 1000.0

        if not self._poll_armed:
            self._poll_armed = True
            self.host.request_frame(self._poll_debounce)
        return token

    def cancel(self) -> None:
        """Abandon any pending request and running job."""
        self.coordinator.invalidate()
        self._pending = None

    def _poll_debounce(self) -> None:
        self._poll_armed = False
        if self._pending is None:
            return

        token, snapshot = self._pending
        if not token.is_current():
            self._pending = None
            return

        synchronous = getattr(self.host, "synchronous", False)
        if not synchronous and self.host.now() < self._debounce_deadline:
            self._poll_armed = True
            self.host.request_frame(self._poll_debounce)
            return

        self._pending = None
        job = SamplingJob(token, snapshot, self.plane.grid_for(snapshot.room))
        self._current = job
        self._run_slice(job)

    def _run_slice(self, job: SamplingJob) -> None:
        if not job.is_current():
            job.state = JobState.CANCELLED
            return

        job.state = JobState.RUNNING
        job.slices += 1
        budget = self.settings.slice_budget_ms / 1000.0
        start = self.host.now()

        while not job.exhausted:
            if not job.is_current():
                job.state = JobState.CANCELLED
                return

            row, col, sample = job.advance()
            if self.on_cell is not None:
                self.on_cell(row, col, sample)

            if not job.exhausted and self.host.now() - start >= budget:
                self.host.request_frame(partial(self._run_slice, job))
                return

        self._finish(job)

    def _finish(self, job: SamplingJob) -> None:
        # on_cell of the last cell may have issued a newer request
        if not job.is_current():
            job.state = JobState.CANCELLED
            return

        job.state = JobState.COMPLETE
        result = job.result()
        self._latest_result = result
        if self.on_complete is not None:
            self.on_complete(result)


def run_to_completion(
    plane: SamplingPlane,
    room: RoomDimensions,
    profile: AcousticSourceProfile | None,
    deployment: DeploymentConfiguration,
    center_fill_profile: AcousticSourceProfile | None = None,
    *,
    on_cell: CellCallback | None = None,
    settings: SamplerSettings | None = None,
    propagation: PropagationSettings | None = None,
) -> FieldResult:
    """Sample a whole plane synchronously (headless use).

    Runs the incremental sampler on an ImmediateFrameHost with no debounce,
    so slices still honour the budget but frames follow each other at once.

    Returns:
        The completed FieldResult
    """
    results: list[FieldResult] = []
    sampler = FieldSampler(
        plane,
        ImmediateFrameHost(),
        on_cell=on_cell,
        on_complete=results.append,
        settings=replace(settings or SamplerSettings(), debounce_ms=0.0),
    )
    sampler.request(room, profile, deployment, center_fill_profile, propagation=propagation)
    return results[-1]
