"""Utility functions for oceanwaves.

This module provides core mathematical utilities used throughout the package:
- Input validation of elevation records
- Linear detrending
- Wavenumber calculation (dispersion relation)
- Frequency conversions
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidInputError

# Gravitational acceleration (m/s^2)
G = 9.81

# Coefficients of Hunt's (1979) approximation to the dispersion relation,
# multiplying y, y^2, y^4 and y^5 (there is no y^3 term)
HUNT_COEFFICIENTS = (0.6522, 0.4622, 0.0864, 0.0675)


def as_series(data: ArrayLike, min_length: int = 2) -> NDArray[np.floating]:
    """Convert an elevation record to a new 1-D float array.

    Args:
        data: Surface elevation samples (list, ndarray, Series, DataArray).
        min_length: Minimum number of samples required.

    Returns:
        Copy of the data as a float64 array.

    Raises:
        InvalidInputError: If the data is not 1-D, too short or not finite.
    """
    series = np.array(data, dtype=np.float64)
    if series.ndim != 1:
        raise InvalidInputError(f"Series must be 1-D, got shape {series.shape}")
    if len(series) < min_length:
        raise InvalidInputError(
            f"At least {min_length} samples required, got {len(series)}"
        )
    if not np.all(np.isfinite(series)):
        raise InvalidInputError("Series contains NaN or infinite values")
    return series


def check_sampling_frequency(fs: float) -> float:
    """Validate a sampling frequency and return it as float."""
    if not np.isfinite(fs) or fs <= 0:
        raise InvalidInputError(f"Sampling frequency must be positive, got {fs}")
    return float(fs)


def linear_trend(data: ArrayLike) -> tuple[float, float]:
    """Least-squares straight line fitted against sample index.

    Args:
        data: Input samples (at least 2).

    Returns:
        Tuple of (intercept, slope), intercept being the value at index 0.
    """
    series = as_series(data)
    n = len(series)
    t = np.arange(n, dtype=np.float64)
    t_mean = (n - 1) / 2.0
    y_mean = series.mean()
    # sum((t - t_mean)^2) = n (n^2 - 1) / 12, nonzero for n >= 2
    sxx = n * (n**2 - 1) / 12.0
    slope = np.sum((t - t_mean) * (series - y_mean)) / sxx
    intercept = y_mean - slope * t_mean
    return float(intercept), float(slope)


def detrend(
    data: ArrayLike,
    return_trend: bool = False,
) -> NDArray[np.floating] | tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Remove the least-squares linear trend from a height series.

    The residuals represent deviations of surface height from the mean
    surface height over the record.

    Args:
        data: Input samples [n_samples], at least 2.
        return_trend: Also return the fitted line.

    Returns:
        Detrended samples (new array). If return_trend is True, a tuple of
        (residuals, fitted line) whose sum reproduces the input.
    """
    series = as_series(data)
    intercept, slope = linear_trend(series)
    trend = intercept + slope * np.arange(len(series), dtype=np.float64)
    residuals = series - trend
    if return_trend:
        return residuals, trend
    return residuals


def wavenumber(
    freq: ArrayLike,
    depth: float,
    g: float = G,
) -> NDArray[np.floating]:
    """Calculate wavenumber from frequency using the dispersion relation.

    Approximates the solution of sigma^2 = g * k * tanh(k * d) with the
    explicit rational approximation of Hunt (1979), no iteration:

        y = sigma^2 d / g
        c^2 = g d / (y + 1 / (1 + 0.6522 y + 0.4622 y^2 + 0.0864 y^4 + 0.0675 y^5))
        k = sigma / c

    Args:
        freq: Frequency in Hz (scalar or array). Non-positive frequencies
            return k = 0.
        depth: Water depth in meters.
        g: Gravitational acceleration.

    Returns:
        Wavenumber k in rad/m (at least 1-D, same shape as freq).

    Raises:
        InvalidInputError: If depth is not positive.
    """
    if not np.isfinite(depth) or depth <= 0:
        raise InvalidInputError(f"Water depth must be positive, got {depth}")

    freq = np.atleast_1d(np.asarray(freq, dtype=np.float64))
    k = np.zeros_like(freq)
    positive = freq > 0
    if not np.any(positive):
        return k

    sigma = frequency_to_angular(freq[positive])
    y = sigma**2 * depth / g
    c1, c2, c4, c5 = HUNT_COEFFICIENTS
    d = y + 1.0 / (1.0 + c1 * y + c2 * y**2 + c4 * y**4 + c5 * y**5)
    k[positive] = sigma * np.sqrt(d / (g * depth))
    return k


def frequency_to_angular(freq: NDArray[np.floating] | float) -> NDArray[np.floating]:
    """Convert frequency in Hz to angular frequency in rad/s.

    Args:
        freq: Frequency in Hz.

    Returns:
        Angular frequency in rad/s.
    """
    return 2.0 * np.pi * np.asarray(freq)
