"""Built-in loudspeaker catalog.

A small library of common touring and install loudspeakers with the
published figures the field engine needs. Profiles are grouped by family:

- Line arrays: arrayable elements modelled with a cylindrical near field
- Point sources: conventional cabinets, also usable as center fill
- Columns: install columns, modelled as point sources
- Subwoofers: omnidirectional low-frequency units

Lookup never raises for the engine's benefit: an unknown id resolves to
``None`` and callers treat that as "no source selected".

    >>> from sonicfield.sources import get_profile
    >>> get_profile("meyer-lina").vert_dispersion
    10.0
    >>> get_profile("does-not-exist") is None
    True

Figures are manufacturer datasheet values (max SPL @ 1 m, -6 dB coverage).
"""

from __future__ import annotations

from .base import AcousticSourceProfile, SourceType

# =============================================================================
# Line Arrays
# =============================================================================

JBL_VRX932LAP = AcousticSourceProfile(
    id="jbl-vrx932lap",
    brand="JBL Professional",
    model="VRX932LAP",
    type=SourceType.LINE_ARRAY,
    max_spl=131.0,
    horz_dispersion=100.0,
    vert_dispersion=15.0,
    coupling_coefficient=0.82,
    arrayable=True,
    max_array_size=6,
    element_pitch=0.343,
)
"""Constant-curvature 12" line array for portable PA."""

MEYER_LINA = AcousticSourceProfile(
    id="meyer-lina",
    brand="Meyer Sound",
    model="LINA",
    type=SourceType.LINE_ARRAY,
    max_spl=133.0,
    horz_dispersion=110.0,
    vert_dispersion=10.0,
    coupling_coefficient=0.92,
    arrayable=True,
    max_array_size=16,
    element_pitch=0.216,
)
"""Ultra-compact linear line array (LEOPARD family)."""

DB_Y8 = AcousticSourceProfile(
    id="db-y8",
    brand="d&b audiotechnik",
    model="Y8",
    type=SourceType.LINE_ARRAY,
    max_spl=139.0,
    horz_dispersion=80.0,
    vert_dispersion=14.0,
    coupling_coefficient=0.94,
    arrayable=True,
    max_array_size=24,
    element_pitch=0.23,
)
"""Y-Series long-throw line array."""

LACOUSTICS_KARA_II = AcousticSourceProfile(
    id="lacoustics-kara-ii",
    brand="L-Acoustics",
    model="KARA II",
    type=SourceType.LINE_ARRAY,
    max_spl=142.0,
    horz_dispersion=110.0,
    vert_dispersion=10.0,
    coupling_coefficient=0.95,
    arrayable=True,
    max_array_size=24,
)
"""Modular WST line source."""

QSC_KLA12 = AcousticSourceProfile(
    id="qsc-kla12",
    brand="QSC",
    model="KLA12",
    type=SourceType.LINE_ARRAY,
    max_spl=131.0,
    horz_dispersion=90.0,
    vert_dispersion=18.0,
    coupling_coefficient=0.84,
    arrayable=True,
    max_array_size=8,
)
"""Powered 12" articulated array."""

# =============================================================================
# Point Sources
# =============================================================================

JBL_SRX835P = AcousticSourceProfile(
    id="jbl-srx835p",
    brand="JBL Professional",
    model="SRX835P",
    type=SourceType.POINT_SOURCE,
    max_spl=136.0,
    horz_dispersion=75.0,
    vert_dispersion=50.0,
    coupling_coefficient=0.6,
    center_fill_capable=True,
)
"""15" 3-way powered point source."""

EV_ETX_12P = AcousticSourceProfile(
    id="ev-etx-12p",
    brand="Electro-Voice",
    model="ETX-12P",
    type=SourceType.POINT_SOURCE,
    max_spl=135.0,
    horz_dispersion=90.0,
    vert_dispersion=60.0,
    coupling_coefficient=0.6,
    center_fill_capable=True,
)
"""12" 2-way powered point source."""

MEYER_ULTRA_X40 = AcousticSourceProfile(
    id="meyer-ultra-x40",
    brand="Meyer Sound",
    model="ULTRA-X40",
    type=SourceType.POINT_SOURCE,
    max_spl=138.0,
    horz_dispersion=110.0,
    vert_dispersion=50.0,
    coupling_coefficient=0.65,
    center_fill_capable=True,
)
"""Compact wide-coverage point source."""

# =============================================================================
# Columns
# =============================================================================

EV_EVOLVE_50M = AcousticSourceProfile(
    id="ev-evolve-50m",
    brand="Electro-Voice",
    model="EVOLVE 50M",
    type=SourceType.COLUMN,
    max_spl=127.0,
    horz_dispersion=120.0,
    vert_dispersion=40.0,
    coupling_coefficient=0.88,
    center_fill_capable=True,
)
"""Portable column system."""

# =============================================================================
# Subwoofers
# =============================================================================

JBL_VRX918SP = AcousticSourceProfile(
    id="jbl-vrx918sp",
    brand="JBL Professional",
    model="VRX918SP",
    type=SourceType.SUBWOOFER,
    max_spl=134.0,
    horz_dispersion=360.0,
    vert_dispersion=360.0,
    coupling_coefficient=0.9,
    arrayable=True,
    max_array_size=4,
)
"""Flyable 18" subwoofer for VRX932LAP."""

LACOUSTICS_KS28 = AcousticSourceProfile(
    id="lacoustics-ks28",
    brand="L-Acoustics",
    model="KS28",
    type=SourceType.SUBWOOFER,
    max_spl=143.0,
    horz_dispersion=360.0,
    vert_dispersion=360.0,
    coupling_coefficient=0.96,
    arrayable=True,
    max_array_size=12,
)
"""Dual 18" reference subwoofer."""


# =============================================================================
# Catalog Index
# =============================================================================

SPEAKERS: dict[str, AcousticSourceProfile] = {
    profile.id: profile
    for profile in (
        JBL_VRX932LAP,
        MEYER_LINA,
        DB_Y8,
        LACOUSTICS_KARA_II,
        QSC_KLA12,
        JBL_SRX835P,
        EV_ETX_12P,
        MEYER_ULTRA_X40,
        EV_EVOLVE_50M,
        JBL_VRX918SP,
        LACOUSTICS_KS28,
    )
}


def get_profile(profile_id: str | None) -> AcousticSourceProfile | None:
    """Look up a profile by catalog id.

    Args:
        profile_id: Catalog id (case-insensitive); empty or None allowed

    Returns:
        The profile, or None if the id is empty or unknown
    """
    if not profile_id:
        return None
    return SPEAKERS.get(profile_id.lower())


def require_profile(profile_id: str) -> AcousticSourceProfile:
    """Look up a profile, raising if it does not exist.

    Raises:
        KeyError: If the id is unknown
    """
    profile = get_profile(profile_id)
    if profile is None:
        raise KeyError(
            f"Speaker '{profile_id}' not found. Use list_profiles() to see available models."
        )
    return profile


def list_profiles(source_type: SourceType | None = None) -> list[AcousticSourceProfile]:
    """List catalog profiles, optionally filtered by family."""
    if source_type is None:
        return list(SPEAKERS.values())
    return [p for p in SPEAKERS.values() if p.type is source_type]


def main_profiles() -> list[AcousticSourceProfile]:
    """All profiles except subwoofers."""
    return [p for p in SPEAKERS.values() if p.type is not SourceType.SUBWOOFER]


def subwoofer_profiles() -> list[AcousticSourceProfile]:
    return list_profiles(SourceType.SUBWOOFER)


def center_fill_profiles() -> list[AcousticSourceProfile]:
    """Profiles suitable for center/front fill duty."""
    return [p for p in SPEAKERS.values() if p.center_fill_capable]
