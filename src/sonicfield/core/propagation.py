"""Distance decay models for point sources and line arrays.

Physics:
    Point source (spherical spreading, I ∝ 1/r²):
        SPL(d) = SPL₁ - 20·log₁₀(d)                    6 dB per doubling

    Line source (cylindrical spreading, I ∝ 1/r), near field only:
        SPL(d) = SPL_eff - 10·log₁₀(d)                 3 dB per doubling

    A finite line of length L behaves cylindrically out to the transition
    distance d_t ≈ L²/λ and spherically beyond it. The far-field branch is
    anchored at the near-field level at d_t so the curve is continuous:

        SPL(d) = SPL_eff - 10·log₁₀(d_t) - 20·log₁₀(d / d_t)     d ≥ d_t

    The transition distance is evaluated at a single reference wavelength
    (~1 kHz); there is no frequency-dependent behaviour.

Example:
    >>> inverse_square(10.0, 130.0)
    110.0
    >>> transition_distance(2.4, REFERENCE_WAVELENGTH)  # doctest: +ELLIPSIS
    16.79...
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

from sonicfield.sources.base import DEFAULT_ELEMENT_PITCH

# Wavelength of ~1 kHz in air at 20°C (meters)
REFERENCE_WAVELENGTH = 0.343


@dataclass(frozen=True)
class PropagationSettings:
    """Heuristic constants of the line-array model.

    Neither value is derived from profile data. Profiles may carry their own
    element pitch, which takes precedence over ``element_pitch`` here.

    Args:
        element_pitch: Default vertical size of one element in meters
        reference_wavelength: Wavelength used for the transition distance (m)
    """

    element_pitch: float = DEFAULT_ELEMENT_PITCH
    reference_wavelength: float = REFERENCE_WAVELENGTH


DEFAULT_SETTINGS = PropagationSettings()


def inverse_square(distance: float, max_spl: float) -> float:
    """SPL at ``distance`` for a spherically spreading source.

    Args:
        distance: Distance from the source in meters
        max_spl: SPL at 1 m in dB

    Returns:
        SPL in dB. For non-positive distances the 1 m reference is returned
        and a warning is issued.
    """
    if distance <= 0:
        warnings.warn(
            f"Distance must be greater than 0 (got {distance}); using the 1 m reference level",
            UserWarning,
            stacklevel=2,
        )
        return max_spl
    return max_spl - 20.0 * math.log10(distance)


def array_gain(quantity: int, coupling: float) -> float:
    """Level gain from stacking ``quantity`` coupled elements (dB)."""
    if quantity <= 1:
        return 0.0
    return 10.0 * math.log10(quantity) * coupling


def transition_distance(line_length: float, wavelength: float = REFERENCE_WAVELENGTH) -> float:
    """Near/far field boundary of a line source, L²/λ (meters)."""
    return line_length * line_length / wavelength


def cylindrical_loss(
    distance: float,
    max_spl: float,
    line_length: float,
    coupling: float = 0.9,
    wavelength: float = REFERENCE_WAVELENGTH,
) -> float:
    """SPL at ``distance`` from a line array.

    Args:
        distance: Distance from the array in meters
        max_spl: Reference SPL at 1 m for the whole array (dB)
        line_length: Total array length in meters
        coupling: Element coupling efficiency (0-1)
        wavelength: Reference wavelength for the transition distance

    Returns:
        SPL in dB, continuous across the transition distance
    """
    if distance <= 0:
        return max_spl
    if line_length <= 0 or coupling <= 0:
        # No coherent line; fall back to spherical spreading
        return inverse_square(distance, max_spl)

    d_t = transition_distance(line_length, wavelength)
    effective_spl = max_spl + 20.0 * math.log10(coupling)

    if distance <= d_t:
        return effective_spl - 10.0 * math.log10(distance)

    spl_at_transition = effective_spl - 10.0 * math.log10(d_t)
    return spl_at_transition - 20.0 * math.log10(distance / d_t)
