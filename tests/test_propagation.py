"""Tests for point-source and line-array distance decay.

Tests verify:
- Inverse-square law (6.02 dB per doubling, monotonic decay)
- Array gain and transition distance
- Continuity of the line-array model at the transition distance
- Degenerate inputs fall back instead of raising
"""

import math

import numpy as np
import pytest

from sonicfield.core.propagation import (
    DEFAULT_SETTINGS,
    REFERENCE_WAVELENGTH,
    PropagationSettings,
    array_gain,
    cylindrical_loss,
    inverse_square,
    transition_distance,
)

# =============================================================================
# Inverse Square
# =============================================================================


class TestInverseSquare:
    def test_reference_at_one_meter(self):
        assert inverse_square(1.0, 130.0) == pytest.approx(130.0)

    def test_ten_meters(self):
        assert inverse_square(10.0, 130.0) == pytest.approx(110.0)

    @pytest.mark.parametrize("distance", [0.5, 1.0, 3.7, 10.0, 42.0])
    def test_doubling_loses_6_02_db(self, distance):
        drop = inverse_square(distance, 120.0) - inverse_square(2 * distance, 120.0)
        assert drop == pytest.approx(20.0 * math.log10(2.0), abs=1e-9)

    def test_monotonic_decay(self):
        distances = np.linspace(0.1, 100.0, 200)
        levels = [inverse_square(d, 130.0) for d in distances]
        assert np.all(np.diff(levels) < 0)

    @pytest.mark.parametrize("distance", [0.0, -1.0])
    def test_non_positive_distance_warns_and_returns_reference(self, distance):
        with pytest.warns(UserWarning, match="greater than 0"):
            assert inverse_square(distance, 130.0) == 130.0


# =============================================================================
# Line Array Helpers
# =============================================================================


class TestArrayGain:
    def test_single_element_has_no_gain(self):
        assert array_gain(1, 0.9) == 0.0

    def test_gain_scales_with_coupling(self):
        assert array_gain(8, 1.0) == pytest.approx(10.0 * math.log10(8))
        assert array_gain(8, 0.5) == pytest.approx(5.0 * math.log10(8))


class TestTransitionDistance:
    def test_length_squared_over_wavelength(self):
        assert transition_distance(2.4) == pytest.approx(2.4**2 / REFERENCE_WAVELENGTH)

    def test_custom_wavelength(self):
        assert transition_distance(1.0, 0.5) == pytest.approx(2.0)


# =============================================================================
# Cylindrical Loss
# =============================================================================


class TestCylindricalLoss:
    LENGTH = 2.4
    COUPLING = 0.9

    def near(self, d, max_spl=130.0):
        effective = max_spl + 20.0 * math.log10(self.COUPLING)
        return effective - 10.0 * math.log10(d)

    def test_near_field_is_3db_per_doubling(self):
        d_t = transition_distance(self.LENGTH)
        d = d_t / 4.0
        drop = cylindrical_loss(d, 130.0, self.LENGTH, self.COUPLING) - cylindrical_loss(
            2 * d, 130.0, self.LENGTH, self.COUPLING
        )
        assert drop == pytest.approx(10.0 * math.log10(2.0))

    def test_far_field_is_6db_per_doubling(self):
        d = 2.0 * transition_distance(self.LENGTH)
        drop = cylindrical_loss(d, 130.0, self.LENGTH, self.COUPLING) - cylindrical_loss(
            2 * d, 130.0, self.LENGTH, self.COUPLING
        )
        assert drop == pytest.approx(20.0 * math.log10(2.0))

    def test_near_field_matches_formula(self):
        assert cylindrical_loss(3.0, 130.0, self.LENGTH, self.COUPLING) == pytest.approx(
            self.near(3.0)
        )

    def test_continuous_at_transition(self):
        """Both branches agree at the transition distance."""
        d_t = transition_distance(self.LENGTH)
        near_value = self.near(d_t)
        far_value = self.near(d_t) - 20.0 * math.log10(d_t / d_t)
        assert abs(near_value - far_value) < 1e-6

        below = cylindrical_loss(d_t * (1 - 1e-9), 130.0, self.LENGTH, self.COUPLING)
        above = cylindrical_loss(d_t * (1 + 1e-9), 130.0, self.LENGTH, self.COUPLING)
        assert abs(below - above) < 1e-6

    def test_monotonic_across_both_regimes(self):
        d_t = transition_distance(self.LENGTH)
        distances = np.linspace(0.5, 4 * d_t, 300)
        levels = [cylindrical_loss(d, 130.0, self.LENGTH, self.COUPLING) for d in distances]
        assert np.all(np.diff(levels) < 0)

    def test_non_positive_distance_returns_reference(self):
        assert cylindrical_loss(0.0, 130.0, self.LENGTH, self.COUPLING) == 130.0

    @pytest.mark.parametrize("length, coupling", [(0.0, 0.9), (2.4, 0.0)])
    def test_degenerate_line_falls_back_to_inverse_square(self, length, coupling):
        assert cylindrical_loss(10.0, 130.0, length, coupling) == pytest.approx(110.0)


class TestPropagationSettings:
    def test_defaults(self):
        assert DEFAULT_SETTINGS.element_pitch == pytest.approx(0.3)
        assert DEFAULT_SETTINGS.reference_wavelength == pytest.approx(0.343)

    def test_settings_are_immutable(self):
        settings = PropagationSettings(element_pitch=0.2)
        with pytest.raises(AttributeError):
            settings.element_pitch = 0.5
