"""Tests for utility functions."""

import numpy as np
import pytest
from scipy.optimize import brentq

from oceanwaves.exceptions import InvalidInputError
from oceanwaves.utils import (
    G,
    as_series,
    check_sampling_frequency,
    detrend,
    frequency_to_angular,
    linear_trend,
    wavenumber,
)


def exact_wavenumber(freq, depth):
    """Solve sigma^2 = g k tanh(k d) numerically."""
    sigma = 2 * np.pi * freq
    return brentq(lambda k: G * k * np.tanh(k * depth) - sigma**2, 1e-8, 100.0)


class TestAsSeries:
    """Tests for input validation."""

    def test_returns_copy(self):
        """Input array is not aliased."""
        data = np.array([1.0, 2.0, 3.0])
        series = as_series(data)
        series[0] = 99.0
        assert data[0] == 1.0

    def test_list_input(self):
        """Lists are converted to float arrays."""
        series = as_series([1, 2, 3])
        assert series.dtype == np.float64

    def test_too_short(self):
        """Fewer samples than required raises."""
        with pytest.raises(InvalidInputError):
            as_series([1.0])

    def test_two_dimensional(self):
        """2-D input raises."""
        with pytest.raises(InvalidInputError):
            as_series(np.ones((3, 3)))

    def test_non_finite(self):
        """NaN samples raise."""
        with pytest.raises(InvalidInputError):
            as_series([1.0, np.nan, 2.0])

    def test_invalid_fs(self):
        """Non-positive sampling frequency raises."""
        for fs in (0.0, -1.0, np.nan):
            with pytest.raises(InvalidInputError):
                check_sampling_frequency(fs)


class TestDetrend:
    """Tests for linear detrending."""

    def test_removes_line(self):
        """A pure straight line detrends to zero."""
        data = 3.0 + 0.25 * np.arange(100)
        np.testing.assert_allclose(detrend(data), 0.0, atol=1e-10)

    def test_residual_has_no_trend(self):
        """Residuals have zero mean and zero slope."""
        np.random.seed(42)
        data = 10.0 + 0.01 * np.arange(500) + np.random.randn(500)

        residuals = detrend(data)
        intercept, slope = linear_trend(residuals)

        assert abs(slope) < 1e-12
        assert abs(intercept) < 1e-9
        assert abs(residuals.mean()) < 1e-10

    def test_linear_trend_values(self):
        """Fitted line matches numpy polyfit."""
        np.random.seed(0)
        data = 2.0 - 0.5 * np.arange(50) + 0.1 * np.random.randn(50)

        intercept, slope = linear_trend(data)
        expected_slope, expected_intercept = np.polyfit(np.arange(50), data, 1)

        np.testing.assert_allclose(slope, expected_slope, rtol=1e-10)
        np.testing.assert_allclose(intercept, expected_intercept, rtol=1e-10)

    def test_return_trend(self):
        """Residuals plus trend reproduce the input."""
        data = np.array([1.0, 4.0, 2.0, 5.0, 3.0])
        residuals, trend = detrend(data, return_trend=True)
        np.testing.assert_allclose(residuals + trend, data)

    def test_two_samples(self):
        """Two samples are fitted exactly."""
        np.testing.assert_allclose(detrend([1.0, 5.0]), 0.0, atol=1e-12)

    def test_single_sample(self):
        """One sample raises."""
        with pytest.raises(InvalidInputError):
            detrend([1.0])

    def test_input_not_modified(self):
        """Input array is left untouched."""
        data = np.arange(10, dtype=float)
        original = data.copy()
        detrend(data)
        np.testing.assert_array_equal(data, original)


class TestWavenumber:
    """Tests for wavenumber calculation."""

    def test_matches_exact_solution(self):
        """Hunt's approximation is close to the exact dispersion solution."""
        freqs = np.array([0.03, 0.05, 0.1, 0.2, 0.33, 0.5])
        for depth in (0.5, 2.0, 10.0, 50.0):
            k = wavenumber(freqs, depth)
            expected = [exact_wavenumber(f, depth) for f in freqs]
            np.testing.assert_allclose(k, expected, rtol=2e-3)

    def test_deep_water_limit(self):
        """In deep water, k ~ sigma^2 / g."""
        freq = np.array([0.2, 0.3, 0.5])
        k = wavenumber(freq, 1000.0)
        np.testing.assert_allclose(k, (2 * np.pi * freq) ** 2 / G, rtol=1e-3)

    def test_shallow_water_limit(self):
        """In shallow water, k ~ sigma / sqrt(g*d)."""
        freq = np.array([0.01, 0.02])
        depth = 1.0
        k = wavenumber(freq, depth)
        np.testing.assert_allclose(k, 2 * np.pi * freq / np.sqrt(G * depth), rtol=0.01)

    def test_non_positive_frequency(self):
        """Zero and negative frequencies give k = 0."""
        k = wavenumber(np.array([0.0, -0.1, 0.1]), 10.0)
        assert k[0] == 0.0
        assert k[1] == 0.0
        assert k[2] > 0.0

    def test_scalar_input(self):
        """Test with scalar input."""
        k = wavenumber(0.1, 10.0)
        assert isinstance(k, np.ndarray)
        assert k.shape == (1,)

    @pytest.mark.parametrize("depth", [0.0, -1.0])
    def test_invalid_depth(self, depth):
        """Non-positive depth raises."""
        with pytest.raises(InvalidInputError):
            wavenumber(0.1, depth)


class TestFrequencyConversion:
    """Tests for frequency/angular frequency conversion."""

    def test_to_angular(self):
        """Hz to rad/s."""
        freq = np.array([1.0, 2.0, 0.5])
        np.testing.assert_allclose(frequency_to_angular(freq), 2 * np.pi * freq)
        np.testing.assert_allclose(frequency_to_angular(0.25), np.pi / 2)
