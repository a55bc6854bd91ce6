"""Loudspeaker profiles, deployments and rooms.

Example:
    >>> from sonicfield.sources import get_profile, list_profiles, SourceType
    >>> [p.id for p in list_profiles(SourceType.COLUMN)]
    ['ev-evolve-50m']
"""

from .base import (
    DEFAULT_ELEMENT_PITCH,
    ROOM_PRESETS,
    AcousticSourceProfile,
    CenterFillConfig,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
    SourceType,
)
from .library import (
    SPEAKERS,
    center_fill_profiles,
    get_profile,
    list_profiles,
    main_profiles,
    require_profile,
    subwoofer_profiles,
)

__all__ = [
    # Data model
    "AcousticSourceProfile",
    "CenterFillConfig",
    "DeploymentConfiguration",
    "DeploymentMode",
    "RoomDimensions",
    "SourceType",
    "DEFAULT_ELEMENT_PITCH",
    "ROOM_PRESETS",
    # Catalog
    "SPEAKERS",
    "get_profile",
    "require_profile",
    "list_profiles",
    "main_profiles",
    "subwoofer_profiles",
    "center_fill_profiles",
]
