"""Wave statistics from spectral analysis.

Computes the power spectrum of a detrended surface elevation record and
derives significant wave height, peak period, average periods and spectral
width parameters from its moments.

Based on the MATLAB wave routines of Urs Neumeier (after code by Travis
Mason, Magali Lecouturier and Urs Neumeier).
"""

import logging

import numpy as np
from numpy.typing import ArrayLike

from .estimators import get_estimator
from .exceptions import ComputationError
from .plotting import SpectrumPlotter
from .types import (
    EstimatorConfig,
    EstimatorKind,
    SpectralConfig,
    SpectralMoments,
    SpectrumEstimate,
    WaveStatsSPResult,
)
from .utils import as_series, check_sampling_frequency, detrend

logger = logging.getLogger(__name__)

# Radicands this close below zero are floating point noise
_ROUNDOFF = 1e-12


def spectral_moments(
    spectrum: SpectrumEstimate,
    config: SpectralConfig | None = None,
    fmax: float | None = None,
) -> SpectralMoments:
    """Calculate spectral moments m_-2 .. m_4.

    m_k = sum(f^k * S(f)) * df over the bins from the lowest positive
    frequency up to the integration limit. For a spectrum, m_0 is the
    variance of the data.

    Args:
        spectrum: One-sided spectrum without the zero frequency bin.
        config: Integration settings; the upper limit is
            config.integration_limit (0.495 Hz by default).
        fmax: Explicit upper limit in Hz, overriding config. Use np.inf to
            integrate the full spectrum.

    Returns:
        The seven moments.

    Raises:
        ComputationError: If no bin falls inside the integration window or a
            moment is not finite.
    """
    if fmax is None:
        fmax = (config if config is not None else SpectralConfig()).integration_limit

    in_window = (spectrum.frequency >= 0) & (spectrum.frequency <= fmax)
    if not np.any(in_window):
        if spectrum.n_freqs:
            found = f"lowest bin {spectrum.frequency.min():.3f} Hz"
        else:
            found = "spectrum is empty"
        raise ComputationError(f"No spectral bins between 0 and {fmax:.3f} Hz ({found})")

    # The window is contiguous: from the first bin to the last one below fmax
    integmin = int(np.argmax(in_window))
    integmax = int(np.nonzero(in_window)[0][-1])
    freqs = spectrum.frequency[integmin : integmax + 1]
    density = spectrum.density[integmin : integmax + 1]

    values = tuple(
        float(np.sum(freqs**order * density) * spectrum.df)
        for order in SpectralMoments.ORDERS
    )
    if not all(np.isfinite(values)):
        raise ComputationError(f"Non-finite spectral moments: {values}")
    return SpectralMoments(values=values)


def wave_stats_sp(
    data: ArrayLike,
    fs: float,
    estimator: EstimatorConfig | EstimatorKind | str | None = None,
    config: SpectralConfig | None = None,
    plotter: SpectrumPlotter | None = None,
) -> WaveStatsSPResult:
    """Calculate ocean wave parameters using spectral analysis.

    Args:
        data: Surface heights forming a time series, typically in meters.
        fs: Sampling frequency in Hz.
        estimator: Spectrum estimator. A WelchConfig or PeriodogramConfig, or
            an EstimatorKind ("welch", "periodogram") to use that estimator
            with its defaults (4 segments; Daniell kernel (9, 9, 9)). Defaults
            to Welch.
        config: Moment integration settings. Defaults to SpectralConfig().
        plotter: Optional sink receiving the spectrum and peak period.

    Returns:
        WaveStatsSPResult with mean depth h, Hm0, Tp, m0, T_0_1, T_0_2 and
        the spectral width parameters EPS2 and EPS4.

    Raises:
        InvalidInputError: For non-positive fs, a bad estimator or a record
            too short for the estimator.
        ComputationError: If the moments or derived statistics are
            degenerate (empty integration window, zero variance, ...).

    Example:
        >>> from oceanwaves import wave_stats_sp
        >>> stats = wave_stats_sp(elevation, fs=4, estimator="periodogram")
        >>> print(f"Hm0: {stats.hm0:.2f} m, Tp: {stats.tp:.1f} s")
    """
    fs = check_sampling_frequency(fs)
    series = as_series(data)
    method = get_estimator(estimator)

    # Mean water depth
    h = float(series.mean())

    spectrum = method.estimate(detrend(series), fs)
    moments = spectral_moments(spectrum, config)

    # Peak period, from the frequency at the maximum of the spectrum
    tp = 1.0 / spectrum.peak_frequency

    m0 = moments[0]
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio2 = np.float64(moments[0]) * moments[2] / moments[1] ** 2
        ratio4 = np.float64(moments[2]) ** 2 / (moments[0] * moments[4])
        result = WaveStatsSPResult(
            h=h,
            hm0=float(4.0 * np.sqrt(m0)),
            tp=tp,
            m0=m0,
            t_0_1=float(np.float64(moments[0]) / moments[1]),
            t_0_2=float(np.sqrt(np.float64(moments[0]) / moments[2])),
            eps2=_checked_sqrt(ratio2 - 1.0, "EPS2"),
            eps4=_checked_sqrt(1.0 - ratio4, "EPS4"),
        )

    _check_finite(result)
    logger.debug(
        "wave_stats_sp (%s): %d bins, df=%.5f Hz, Hm0=%.3f Tp=%.2f",
        method.name,
        spectrum.n_freqs,
        spectrum.df,
        result.hm0,
        result.tp,
    )

    if plotter is not None:
        plotter.plot_spectrum(spectrum, tp)

    return result


def _checked_sqrt(value: float, name: str) -> float:
    """Square root that rejects negative arguments beyond round-off."""
    if not np.isfinite(value):
        raise ComputationError(f"{name} is not finite")
    if value < 0:
        if value < -_ROUNDOFF:
            raise ComputationError(f"{name} has negative radicand {value}")
        value = 0.0
    return float(np.sqrt(value))


def _check_finite(result: WaveStatsSPResult) -> None:
    """Raise if any statistic is NaN or infinite."""
    bad = [name for name, value in vars(result).items() if not np.isfinite(value)]
    if bad:
        raise ComputationError(f"Non-finite spectral statistics: {', '.join(bad)}")
