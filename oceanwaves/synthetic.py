"""Synthetic wave records.

This module provides functions for:
- Generating random-phase surface elevation records from a JONSWAP (or TMA)
  frequency spectrum
- Generating the pressure-derived depth record a bed-mounted logger would
  measure under a given surface elevation record
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import fft

from .exceptions import InvalidInputError
from .transfer import cosh_ratio
from .utils import G, as_series, check_sampling_frequency, frequency_to_angular, wavenumber


def make_wave_record(
    n_samples: int,
    fs: float,
    hsig: float = 1.0,
    tp: float = 10.0,
    depth: float | None = None,
    gamma: float = 3.3,
    mean_level: float = 0.0,
    noise_level: float = 0.0,
    seed: int | None = None,
) -> NDArray[np.floating]:
    """Generate a synthetic surface elevation record.

    Components on the FFT frequency grid get amplitudes from a JONSWAP
    spectrum and uniformly random phases. The record is scaled so that
    4 * std equals hsig before noise is added.

    Args:
        n_samples: Number of samples.
        fs: Sampling frequency in Hz.
        hsig: Target significant wave height in meters.
        tp: Peak period in seconds.
        depth: Water depth in meters. If given, the TMA depth limitation is
            applied to the spectrum.
        gamma: JONSWAP peak enhancement factor.
        mean_level: Constant added to the record (e.g. mean water depth).
        noise_level: Standard deviation of Gaussian noise to add.
        seed: Random seed for reproducibility.

    Returns:
        Surface elevation [n_samples].

    Example:
        >>> eta = make_wave_record(7200, fs=4, hsig=1.5, tp=8, seed=1)
    """
    fs = check_sampling_frequency(fs)
    if n_samples < 4:
        raise InvalidInputError(f"At least 4 samples required, got {n_samples}")
    if tp <= 0 or hsig < 0:
        raise InvalidInputError(f"tp must be positive and hsig non-negative, got {tp}, {hsig}")

    rng = np.random.default_rng(seed)

    freqs = fft.rfftfreq(n_samples, d=1.0 / fs)
    df = freqs[1] - freqs[0]

    S = np.zeros_like(freqs)
    S[1:] = jonswap_spectrum(freqs[1:], 1.0 / tp, gamma=gamma, depth=depth)
    if n_samples % 2 == 0:
        # Nyquist component has no free phase
        S[-1] = 0.0

    amplitudes = np.sqrt(2.0 * S * df)
    phases = rng.uniform(0, 2 * np.pi, len(freqs))
    coefficients = 0.5 * n_samples * amplitudes * np.exp(1j * phases)
    eta = fft.irfft(coefficients, n=n_samples)

    std = eta.std()
    if std > 0:
        eta = eta * hsig / (4.0 * std)

    if noise_level > 0:
        eta = eta + rng.normal(0, noise_level, n_samples)

    return eta + mean_level


def make_pressure_record(
    elevation: ArrayLike,
    fs: float,
    depth: float,
    zpt: float,
) -> NDArray[np.floating]:
    """Pressure-derived water depth record under a surface elevation record.

    Each Fourier component of the elevation is attenuated by
    cosh(k * zpt) / cosh(k * depth) and the mean depth is added, giving the
    hydrostatic depth record of a logger zpt meters above the bed.

    Args:
        elevation: Surface elevation about the mean water level [n_samples].
        fs: Sampling frequency in Hz.
        depth: Mean water depth in meters.
        zpt: Sensor height above the bed in meters.

    Returns:
        Water depth record in meters [n_samples].
    """
    fs = check_sampling_frequency(fs)
    if not 0 <= zpt <= depth:
        raise InvalidInputError(f"zpt must be in [0, depth], got {zpt}")

    eta = as_series(elevation)
    freqs = fft.rfftfreq(len(eta), d=1.0 / fs)
    k = wavenumber(freqs, depth)

    attenuated = fft.irfft(fft.rfft(eta) * cosh_ratio(k, zpt, depth), n=len(eta))
    return attenuated + depth


def jonswap_spectrum(
    freqs: NDArray[np.floating],
    fp: float,
    gamma: float = 3.3,
    depth: float | None = None,
) -> NDArray[np.floating]:
    """Calculate JONSWAP (or TMA) frequency spectrum.

    TMA spectrum (Bouws et al., 1985) is a depth-limited modification
    of the JONSWAP spectrum.

    Args:
        freqs: Frequency array in Hz (positive).
        fp: Peak frequency in Hz.
        gamma: Peak enhancement factor (default 3.3 for JONSWAP).
        depth: Water depth in meters; None for deep water.

    Returns:
        Spectral density at each frequency.
    """
    # Phillips constant
    alpha = 0.0081

    sigma = np.where(freqs <= fp, 0.07, 0.09)

    # Peak enhancement
    r = np.exp(-0.5 * ((freqs / fp - 1) / sigma) ** 2)
    enhancement = gamma**r

    # PM-type spectrum
    with np.errstate(over="ignore"):
        S = alpha * G**2 / (2 * np.pi) ** 4 / freqs**5
        S = S * np.exp(-1.25 * (fp / freqs) ** 4)
    S = S * enhancement

    if depth is not None:
        # Kitaigorodskii shape factor
        omega_h = frequency_to_angular(freqs) * np.sqrt(depth / G)
        phi = np.where(
            omega_h <= 1,
            0.5 * omega_h**2,
            np.where(omega_h < 2, 1 - 0.5 * (2 - omega_h) ** 2, 1.0),
        )
        S = S * phi

    return np.nan_to_num(S, nan=0.0, posinf=0.0, neginf=0.0)
