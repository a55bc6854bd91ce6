"""SPL at a single point from a single loudspeaker source.

Combines three effects:
- Distance decay: spherical for point sources, cylindrical-to-spherical for
  line arrays with more than one element
- Array gain: 10·log₁₀(N)·coupling for stacked line-array elements
- Off-axis attenuation from the model's coverage angles

Example:
    >>> from sonicfield.core import Point3D, evaluate
    >>> from sonicfield.sources import DeploymentConfiguration, get_profile
    >>> profile = get_profile("jbl-srx835p")
    >>> deployment = DeploymentConfiguration(speaker_id=profile.id, trim_height=1.4)
    >>> result = evaluate(Point3D(7.5, 1.4, 10.0), Point3D(7.5, 1.4, 0.0), profile, deployment)
    >>> round(result.spl, 1)
    116.0
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

from sonicfield.sources.base import AcousticSourceProfile, DeploymentConfiguration

from .directivity import combined_attenuation
from .geometry import Point3D, distance_3d, horizontal_angle, vertical_angle
from .propagation import (
    DEFAULT_SETTINGS,
    PropagationSettings,
    array_gain,
    cylindrical_loss,
    inverse_square,
)


@dataclass(frozen=True)
class SPLResult:
    """Result of evaluating one source at one point.

    Attributes:
        spl: SPL in dB including off-axis attenuation
        distance: Source-to-point distance in meters
        horz_angle: Horizontal off-axis angle in degrees
        vert_angle: Vertical off-axis angle in degrees
        attenuation: Combined off-axis attenuation in dB
        in_coverage: Whether the point lies inside both -6 dB half angles
    """

    spl: float
    distance: float
    horz_angle: float
    vert_angle: float
    attenuation: float
    in_coverage: bool


def uses_line_array_model(profile: AcousticSourceProfile, quantity: int) -> bool:
    """Whether a deployment of ``quantity`` elements is modelled as a line source."""
    return profile.is_line_array_source and quantity > 1


def reference_spl(profile: AcousticSourceProfile, deployment: DeploymentConfiguration) -> float:
    """Unattenuated 1 m level of the deployed source, array gain included."""
    if uses_line_array_model(profile, deployment.quantity):
        return profile.max_spl + array_gain(deployment.quantity, profile.coupling_coefficient)
    return profile.max_spl


def base_spl(
    distance: float,
    profile: AcousticSourceProfile,
    deployment: DeploymentConfiguration,
    settings: PropagationSettings = DEFAULT_SETTINGS,
) -> float:
    """On-axis SPL at ``distance`` for the deployed source (dB)."""
    if uses_line_array_model(profile, deployment.quantity):
        pitch = profile.element_pitch if profile.element_pitch > 0 else settings.element_pitch
        return cylindrical_loss(
            distance,
            reference_spl(profile, deployment),
            deployment.quantity * pitch,
            profile.coupling_coefficient,
            wavelength=settings.reference_wavelength,
        )
    return inverse_square(distance, profile.max_spl)


def evaluate(
    point: Point3D,
    source_position: Point3D,
    profile: AcousticSourceProfile,
    deployment: DeploymentConfiguration,
    *,
    settings: PropagationSettings | None = None,
) -> SPLResult:
    """Evaluate SPL at ``point`` for one source.

    Args:
        point: Listener position (x, y, z) in meters
        source_position: Acoustic center of the source (x, y, z) in meters
        profile: Loudspeaker model constants
        deployment: Quantity, tilt and aim of the source
        settings: Line-array heuristics (element pitch, reference wavelength)

    Returns:
        SPLResult with level, distance, off-axis angles and coverage flag
    """
    settings = settings or DEFAULT_SETTINGS
    dist = distance_3d(point, source_position)

    horz = horizontal_angle(source_position.floor(), point.floor(), deployment.horizontal_aim)
    floor_distance = math.hypot(point.x - source_position.x, point.z - source_position.z)
    vert = vertical_angle(source_position.y, point.y, floor_distance, deployment.tilt_angle)

    if dist <= 0:
        warnings.warn(
            "Point coincides with the source; using the 1 m reference level",
            UserWarning,
            stacklevel=2,
        )
        level = reference_spl(profile, deployment)
    else:
        level = base_spl(dist, profile, deployment, settings)

    attenuation = combined_attenuation(
        horz, vert, profile.horz_dispersion, profile.vert_dispersion
    )
    in_coverage = (
        horz <= profile.horz_dispersion / 2.0 and vert <= profile.vert_dispersion / 2.0
    )

    return SPLResult(
        spl=level + attenuation,
        distance=dist,
        horz_angle=horz,
        vert_angle=vert,
        attenuation=attenuation,
        in_coverage=in_coverage,
    )
