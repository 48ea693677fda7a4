"""Tests for the pressure transfer function."""

import numpy as np
import pytest

from oceanwaves.exceptions import InvalidInputError
from oceanwaves.transfer import PressureTransfer, correction_gain, cosh_ratio
from oceanwaves.types import CorrectionConfig
from oceanwaves.utils import wavenumber


class TestCoshRatio:
    """Tests for the overflow-safe cosh ratio."""

    def test_matches_direct_formula(self):
        """Agrees with cosh(kz)/cosh(kd) where that is finite."""
        k = np.array([0.01, 0.1, 0.5, 1.0])
        np.testing.assert_allclose(
            cosh_ratio(k, 0.5, 10.0), np.cosh(k * 0.5) / np.cosh(k * 10.0), rtol=1e-12
        )

    def test_large_argument(self):
        """Very short waves in deep water give a tiny finite ratio."""
        H = cosh_ratio(np.array([100.0]), 0.0, 100.0)
        assert np.all(np.isfinite(H))
        assert H[0] < 1e-100

    def test_zero_wavenumber(self):
        """k = 0 gives no attenuation."""
        np.testing.assert_allclose(cosh_ratio(np.array([0.0]), 1.0, 10.0), 1.0)


class TestPressureTransfer:
    """Tests for pressure transfer function."""

    def test_surface_unity(self):
        """At surface (z=d), pressure transfer is 1."""
        tf = PressureTransfer()
        np.testing.assert_allclose(tf(np.array([0.1, 0.3]), 10.0, 10.0), 1.0)

    def test_decreases_with_frequency(self):
        """Shorter waves are attenuated more."""
        tf = PressureTransfer(max_gain=1e6)
        H = tf(np.array([0.05, 0.1, 0.2, 0.3]), 10.0, 0.5)
        assert np.all(np.diff(H) < 0)

    def test_floor(self):
        """Attenuation never drops below 1 / max_gain."""
        tf = PressureTransfer(max_gain=5.0)
        H = tf(np.linspace(0.01, 2.0, 50), 20.0, 0.0)
        assert H.min() == pytest.approx(0.2)

    def test_negative_frequencies(self):
        """Negative FFT frequencies use their absolute value."""
        tf = PressureTransfer()
        np.testing.assert_allclose(tf(-0.2, 10.0, 1.0), tf(0.2, 10.0, 1.0))

    def test_invalid_max_gain(self):
        """max_gain below 1 raises."""
        with pytest.raises(InvalidInputError):
            PressureTransfer(max_gain=0.5)

    def test_gain_band(self):
        """gain() inverts the attenuation only inside the given band."""
        tf = PressureTransfer()
        freq = np.array([0.05, 0.15, 0.3])
        gain = tf.gain(freq, 5.0, 0.5, band=(0.1, 0.2))
        assert gain[0] == 1.0
        assert gain[1] == pytest.approx(1.0 / tf(0.15, 5.0, 0.5)[0])
        assert gain[2] == 1.0

    def test_gain_requires_band(self):
        """There is no implicit all-frequency band."""
        with pytest.raises(TypeError):
            PressureTransfer().gain(np.array([0.1]), 5.0, 0.5)


class TestCorrectionGain:
    """Tests for the gain applied by pr_corr."""

    def test_inverse_of_attenuation_in_band(self):
        """In band, gain is cosh(kh)/cosh(kz)."""
        freq = np.array([0.1, 0.2])
        k = wavenumber(freq, 8.0)
        gain = correction_gain(freq, 8.0, 1.0)
        np.testing.assert_allclose(gain, np.cosh(k * 8.0) / np.cosh(k * 1.0), rtol=1e-10)

    def test_unity_outside_band(self):
        """Frequencies outside the band are left alone."""
        gain = correction_gain(np.array([0.0, 0.01, 0.049, 0.34, 1.0, -0.5]), 5.0, 0.2)
        np.testing.assert_array_equal(gain, 1.0)

    def test_band_edges_included(self):
        """Band limits are inclusive."""
        gain = correction_gain(np.array([0.05, 0.33, -0.33]), 5.0, 0.2)
        assert np.all(gain > 1.0)

    def test_saturation(self):
        """Gain never exceeds max_gain."""
        config = CorrectionConfig(max_gain=2.0)
        gain = correction_gain(np.linspace(-0.5, 0.5, 101), 30.0, 0.0, config)
        assert gain.max() == pytest.approx(2.0)
        assert gain.min() >= 1.0

    def test_custom_band(self):
        """A custom band moves the corrected range."""
        config = CorrectionConfig(min_frequency=0.1, max_frequency=0.2)
        gain = correction_gain(np.array([0.08, 0.15, 0.25]), 10.0, 0.5, config)
        assert gain[0] == 1.0
        assert gain[1] > 1.0
        assert gain[2] == 1.0
