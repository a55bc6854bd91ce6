"""Multi-source combination of per-source SPL into one field value.

Active sources are derived from the deployment mode:

- Single center: one cluster at the stage center
- Stereo L/R: two arrays at ±spread/2 from the center, each toed in by the
  deployment's horizontal aim (mirrored between sides)
- Center fill: an optional extra source at the stage center with its own
  profile and level trim

Contributions are summed as incoherent energy:

    L_total = 10·log₁₀(Σ 10^(Lᵢ/10))

This is an approximation for uncorrelated program material from separate
enclosures. It ignores comb filtering and any phase interaction between
sources, so two equal sources always add exactly 3.01 dB.

Example:
    >>> from sonicfield.core import Point3D, combine
    >>> from sonicfield.sources import DeploymentConfiguration, DeploymentMode, get_profile
    >>> profile = get_profile("jbl-vrx932lap")
    >>> deployment = DeploymentConfiguration(
    ...     speaker_id=profile.id, quantity=4, trim_height=4.0, tilt_angle=8.0,
    ...     deployment_mode=DeploymentMode.STEREO_LR, array_spread=8.0,
    ... )
    >>> sample = combine(Point3D(7.5, 1.4, 10.0), 15.0, profile, deployment)
    >>> len(sample.contributions)
    2
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from sonicfield.sources.base import (
    AcousticSourceProfile,
    DeploymentConfiguration,
    DeploymentMode,
)

from .geometry import Point3D
from .point import SPLResult, evaluate
from .propagation import PropagationSettings


@dataclass(frozen=True)
class SourcePlacement:
    """One active source in the room.

    Attributes:
        label: "center", "left", "right" or "center_fill"
        position: Acoustic center in meters
        profile: Loudspeaker model
        deployment: Deployment with this source's own aim/tilt/quantity
        gain_db: Level trim applied before summation
    """

    label: str
    position: Point3D
    profile: AcousticSourceProfile
    deployment: DeploymentConfiguration
    gain_db: float = 0.0


@dataclass(frozen=True)
class SourceContribution:
    """Per-source breakdown of a field sample."""

    label: str
    position: Point3D
    result: SPLResult
    gain_db: float = 0.0

    @property
    def level(self) -> float:
        """Contribution level after gain (dB)."""
        return self.result.spl + self.gain_db


@dataclass(frozen=True)
class FieldSample:
    """Combined field value at one point.

    Attributes:
        total_spl: Energy-summed SPL in dB (-inf when no source is active)
        nearest_distance: Distance to the closest active source in meters
        contributions: Per-source breakdown in placement order
    """

    total_spl: float
    nearest_distance: float
    contributions: tuple[SourceContribution, ...] = ()

    @classmethod
    def empty(cls) -> FieldSample:
        """Sample for a configuration with no active source."""
        return cls(total_spl=-math.inf, nearest_distance=math.inf)

    @property
    def is_empty(self) -> bool:
        return not self.contributions


def energy_sum_db(levels: Iterable[float]) -> float:
    """Incoherent sum of levels in dB; -inf for an empty sequence."""
    total = sum(10.0 ** (level / 10.0) for level in levels)
    if total <= 0:
        return -math.inf
    return 10.0 * math.log10(total)


def active_sources(
    room_width: float,
    deployment: DeploymentConfiguration,
    profile: AcousticSourceProfile | None,
    center_fill_profile: AcousticSourceProfile | None = None,
) -> list[SourcePlacement]:
    """Enumerate the sources a deployment puts in the room.

    Args:
        room_width: Room width in meters
        deployment: Deployment configuration (never modified)
        profile: Main loudspeaker, or None if nothing is selected
        center_fill_profile: Resolved center-fill model, if any

    Returns:
        Placements in a stable order (main sources first, center fill last).
        Empty when ``profile`` is None.
    """
    if profile is None:
        return []

    center_x = room_width / 2.0
    height = deployment.trim_height
    placements: list[SourcePlacement] = []

    if deployment.deployment_mode is DeploymentMode.STEREO_LR:
        half_spread = deployment.array_spread / 2.0
        aim = deployment.horizontal_aim
        placements.append(SourcePlacement(
            label="left",
            position=Point3D(center_x - half_spread, height, 0.0),
            profile=profile,
            deployment=replace(deployment, horizontal_aim=aim),
        ))
        placements.append(SourcePlacement(
            label="right",
            position=Point3D(center_x + half_spread, height, 0.0),
            profile=profile,
            deployment=replace(deployment, horizontal_aim=-aim),
        ))
    else:
        placements.append(SourcePlacement(
            label="center",
            position=Point3D(center_x, height, 0.0),
            profile=profile,
            deployment=deployment,
        ))

    fill = deployment.center_fill
    if fill.enabled and center_fill_profile is not None:
        placements.append(SourcePlacement(
            label="center_fill",
            position=Point3D(center_x, fill.height, 0.0),
            profile=center_fill_profile,
            deployment=DeploymentConfiguration(
                speaker_id=center_fill_profile.id,
                quantity=1,
                trim_height=fill.height,
            ),
            gain_db=fill.gain_db,
        ))

    return placements


def combine_placements(
    point: Point3D,
    placements: list[SourcePlacement],
    settings: PropagationSettings | None = None,
) -> FieldSample:
    """Energy-sum a precomputed list of placements at ``point``."""
    if not placements:
        return FieldSample.empty()

    contributions = tuple(
        SourceContribution(
            label=placement.label,
            position=placement.position,
            result=evaluate(
                point,
                placement.position,
                placement.profile,
                placement.deployment,
                settings=settings,
            ),
            gain_db=placement.gain_db,
        )
        for placement in placements
    )

    if len(contributions) == 1 and contributions[0].gain_db == 0:
        # Single source passes through untouched
        total = contributions[0].result.spl
    else:
        total = energy_sum_db(c.level for c in contributions)

    return FieldSample(
        total_spl=total,
        nearest_distance=min(c.result.distance for c in contributions),
        contributions=contributions,
    )


def combine(
    point: Point3D,
    room_width: float,
    profile: AcousticSourceProfile | None,
    deployment: DeploymentConfiguration,
    center_fill_profile: AcousticSourceProfile | None = None,
    *,
    settings: PropagationSettings | None = None,
) -> FieldSample:
    """Combined SPL at ``point`` from every active source.

    Args:
        point: Listener position in meters
        room_width: Room width in meters (sources are centered on it)
        profile: Main loudspeaker, or None if nothing is selected
        deployment: Deployment configuration
        center_fill_profile: Resolved center-fill model, if any
        settings: Line-array heuristics passed to the point model

    Returns:
        FieldSample; ``FieldSample.empty()`` when no source is active
    """
    placements = active_sources(room_width, deployment, profile, center_fill_profile)
    return combine_placements(point, placements, settings)
