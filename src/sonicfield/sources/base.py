"""Data model for loudspeaker sources, deployments and rooms.

Source profiles are immutable per-model constants pulled from the catalog.
Deployments and rooms describe one placement of a profile in a rectangular
venue. All three are frozen dataclasses: the field engine only ever reads
them, and a caller that wants a variant builds one with
``dataclasses.replace``.

Coordinate convention (meters):
    x: across the room width, 0 at the left wall
    y: height above the floor
    z: depth, 0 at the stage edge, ``depth`` at the back wall

Example:
    >>> from sonicfield.sources import (
    ...     DeploymentConfiguration, DeploymentMode, RoomDimensions, get_profile,
    ... )
    >>> room = RoomDimensions(width=15, depth=20, height=6)
    >>> profile = get_profile("jbl-vrx932lap")
    >>> deployment = DeploymentConfiguration(
    ...     speaker_id=profile.id,
    ...     quantity=4,
    ...     trim_height=4.0,
    ...     tilt_angle=8.0,
    ...     deployment_mode=DeploymentMode.STEREO_LR,
    ...     array_spread=8.0,
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Approximate vertical size of one arrayed element (meters)
DEFAULT_ELEMENT_PITCH = 0.3


class SourceType(Enum):
    """Loudspeaker families with distinct propagation behaviour.

    POINT_SOURCE: Conventional cabinet, spherical spreading.
    LINE_ARRAY: Arrayable element, cylindrical near field when stacked.
    COLUMN: Column speaker, modelled as a point source.
    SUBWOOFER: Low-frequency reinforcement, usually omnidirectional.
    """

    POINT_SOURCE = "point_source"
    LINE_ARRAY = "line_array"
    COLUMN = "column"
    SUBWOOFER = "subwoofer"


class DeploymentMode(Enum):
    """How the main sources are placed across the stage."""

    SINGLE_CENTER = "single_center"
    STEREO_LR = "stereo_lr"


@dataclass(frozen=True)
class AcousticSourceProfile:
    """Acoustic constants for one loudspeaker model.

    Args:
        id: Catalog identifier (lowercase, hyphenated)
        brand: Manufacturer name
        model: Model name/number
        type: Loudspeaker family
        max_spl: Maximum SPL in dB at 1 m
        horz_dispersion: Horizontal -6 dB full coverage angle in degrees
        vert_dispersion: Vertical -6 dB full coverage angle in degrees
        coupling_coefficient: Array coupling efficiency (0-1)
        arrayable: Whether the model can be flown/stacked as an array
        max_array_size: Largest supported array (elements)
        element_pitch: Vertical size of one element in meters
        center_fill_capable: Whether the model is suitable as a center/front fill

    Example:
        >>> profile = AcousticSourceProfile(
        ...     id="generic-12",
        ...     brand="Generic",
        ...     model="12in 2-way",
        ...     type=SourceType.POINT_SOURCE,
        ...     max_spl=130.0,
        ...     horz_dispersion=90.0,
        ...     vert_dispersion=60.0,
        ... )
        >>> profile.is_line_array_source
        False
    """

    id: str
    brand: str
    model: str
    type: SourceType
    max_spl: float
    horz_dispersion: float
    vert_dispersion: float
    coupling_coefficient: float = 0.0
    arrayable: bool = False
    max_array_size: int = 1
    element_pitch: float = DEFAULT_ELEMENT_PITCH
    center_fill_capable: bool = False

    @property
    def is_line_array_source(self) -> bool:
        """Whether stacked elements of this model form a line source."""
        return self.type is SourceType.LINE_ARRAY and self.arrayable

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


@dataclass(frozen=True)
class CenterFillConfig:
    """Auxiliary source filling the gap between widely spaced L/R arrays.

    Args:
        enabled: Whether the center fill contributes to the field
        profile_id: Catalog id of the fill loudspeaker
        gain_db: Level trim applied before energy summation
        height: Mounting height in meters (on the stage lip)
    """

    enabled: bool = False
    profile_id: str = ""
    gain_db: float = 0.0
    height: float = 1.2


@dataclass(frozen=True)
class DeploymentConfiguration:
    """One placement of a loudspeaker model in the room.

    Args:
        speaker_id: Catalog id of the main loudspeaker
        quantity: Number of elements (per side in stereo mode)
        trim_height: Height of the acoustic center above the floor (m)
        tilt_angle: Downward tilt in degrees (positive = down)
        horizontal_aim: Horizontal aim in degrees; in stereo mode the toe-in
            applied symmetrically to both sides
        deployment_mode: Single center cluster or left/right pair
        array_spread: Distance between L/R arrays in meters (stereo only)
        center_fill: Optional center-fill configuration
    """

    speaker_id: str
    quantity: int = 1
    trim_height: float = 4.0
    tilt_angle: float = 0.0
    horizontal_aim: float = 0.0
    deployment_mode: DeploymentMode = DeploymentMode.SINGLE_CENTER
    array_spread: float = 0.0
    center_fill: CenterFillConfig = field(default_factory=CenterFillConfig)


# Room presets (width, depth, height) in meters
ROOM_PRESETS: dict[str, tuple[float, float, float]] = {
    "small": (10.0, 12.0, 4.0),
    "medium": (15.0, 25.0, 6.0),
    "large": (25.0, 40.0, 10.0),
    "outdoor": (40.0, 60.0, 20.0),
}


@dataclass(frozen=True)
class RoomDimensions:
    """Rectangular room, stage along the z = 0 wall.

    Args:
        width: Room width in meters
        depth: Distance from stage to back wall in meters
        height: Ceiling height in meters
    """

    width: float = 15.0
    depth: float = 20.0
    height: float = 6.0

    @classmethod
    def from_preset(cls, name: str) -> RoomDimensions:
        """Build a room from a named preset.

        Args:
            name: One of "small", "medium", "large", "outdoor"

        Raises:
            KeyError: If the preset is unknown
        """
        try:
            width, depth, height = ROOM_PRESETS[name]
        except KeyError:
            raise KeyError(
                f"Unknown room preset '{name}'. Available: {list(ROOM_PRESETS)}"
            ) from None
        return cls(width=width, depth=depth, height=height)

    @property
    def floor_area(self) -> float:
        return self.width * self.depth

    @property
    def volume(self) -> float:
        return self.width * self.depth * self.height
