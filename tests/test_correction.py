"""Tests for the pressure attenuation correction."""

import numpy as np
import pytest

from oceanwaves.correction import pr_corr
from oceanwaves.exceptions import InvalidInputError
from oceanwaves.synthetic import make_pressure_record, make_wave_record
from oceanwaves.types import CorrectionConfig
from oceanwaves.utils import detrend


FS = 4.0
DEPTH = 10.0
ZPT = 0.5


@pytest.fixture
def sinusoid_elevation():
    """8 s sinusoid, 0.5 m amplitude, integer number of cycles."""
    t = np.arange(7200) / FS
    return 0.5 * np.sin(2 * np.pi * t / 8.0)


class TestPrCorr:
    """Tests for pr_corr."""

    def test_recovers_attenuated_sinusoid(self, sinusoid_elevation):
        """Correction undoes the attenuation of an in-band wave."""
        pressure = make_pressure_record(sinusoid_elevation, FS, DEPTH, ZPT)
        assert pressure.std() < 0.8 * sinusoid_elevation.std()

        corrected = pr_corr(pressure, FS, ZPT)

        np.testing.assert_allclose(corrected - DEPTH, sinusoid_elevation, atol=0.01)

    def test_recovers_random_sea(self):
        """Variance of an in-band random sea is restored."""
        # Shallow enough that no in-band gain saturates
        depth = 3.0
        eta = make_wave_record(8192, FS, hsig=0.5, tp=8.0, depth=depth, seed=3)
        # Keep the test sea inside the correction band
        spectrum = np.fft.rfft(eta)
        freqs = np.fft.rfftfreq(len(eta), 1 / FS)
        spectrum[(freqs < 0.06) | (freqs > 0.3)] = 0.0
        eta = np.fft.irfft(spectrum, n=len(eta))

        corrected = pr_corr(make_pressure_record(eta, FS, depth, ZPT), FS, ZPT)

        np.testing.assert_allclose(corrected.std(), eta.std(), rtol=0.01)

    def test_mean_preserved(self):
        """Output mean equals input mean."""
        np.random.seed(42)
        data = 3.0 + 0.3 * np.random.randn(2048)
        corrected = pr_corr(data, FS, 0.2)
        np.testing.assert_allclose(corrected.mean(), data.mean(), atol=1e-10)

    def test_amplifies_in_band(self):
        """Corrected record has at least the variance of the input."""
        np.random.seed(1)
        data = 3.0 + 0.1 * np.random.randn(4096)
        corrected = pr_corr(data, FS, 0.2)
        assert corrected.std() > data.std()

    def test_out_of_band_unchanged(self):
        """Spectral content outside the band is not modified."""
        np.random.seed(7)
        data = 5.0 + 0.2 * np.random.randn(4096)

        residual = pr_corr(data, FS, 1.0) - data

        freqs = np.fft.fftfreq(len(data), 1 / FS)
        spectrum = np.fft.fft(residual)
        out_of_band = (np.abs(freqs) < 0.05) | (np.abs(freqs) > 0.33)
        np.testing.assert_allclose(np.abs(spectrum[out_of_band]), 0.0, atol=1e-8)

    def test_sensor_at_surface_is_identity(self):
        """With zpt equal to the mean depth nothing is corrected."""
        t = np.arange(2000) / FS
        data = 2.0 + 0.001 * np.sin(2 * np.pi * 0.1 * t)
        corrected = pr_corr(data, FS, data.mean())
        np.testing.assert_allclose(corrected, data, atol=1e-12)

    def test_input_not_modified(self):
        """Input array is left untouched."""
        data = 4.0 + np.sin(np.arange(512) / 3.0)
        original = data.copy()
        pr_corr(data, FS, 0.5)
        np.testing.assert_array_equal(data, original)

    def test_gain_limit(self):
        """Correction gain is bounded by max_gain."""
        np.random.seed(3)
        # Trend-free fluctuations, so the fitted line is the constant 20 m
        fluctuation = detrend(0.1 * np.random.randn(4096))
        config = CorrectionConfig(max_gain=1.5)

        corrected = pr_corr(20.0 + fluctuation, FS, 0.0, config)

        original = np.fft.fft(fluctuation)
        amplified = np.fft.fft(corrected - 20.0)
        significant = np.abs(original) > 1e-6
        ratio = np.abs(amplified[significant]) / np.abs(original[significant])
        assert ratio.max() == pytest.approx(1.5, rel=1e-6)
        assert ratio.min() == pytest.approx(1.0, abs=1e-6)

    @pytest.mark.parametrize(
        "data, zpt",
        [
            (np.full(100, -1.0), 0.0),  # negative mean depth
            (np.zeros(100), 0.0),  # zero mean depth
            (np.full(100, 2.0), 3.0),  # sensor above water
            (np.full(100, 2.0), -0.1),  # negative sensor height
            (np.array([2.0]), 0.5),  # too short
        ],
    )
    def test_invalid_input(self, data, zpt):
        """Invalid depth, sensor height or record length raises."""
        with pytest.raises(InvalidInputError):
            pr_corr(data, FS, zpt)

    def test_invalid_fs(self):
        """Non-positive fs raises."""
        with pytest.raises(InvalidInputError):
            pr_corr(np.full(100, 2.0), 0.0, 0.5)
