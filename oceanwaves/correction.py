"""Depth-attenuation correction of pressure-derived surface elevation.

A pressure logger on the bed sees the dynamic pressure of surface waves
attenuated with depth, more so for short waves. `pr_corr` restores the
surface elevation signal by amplifying each Fourier component of the record
with the inverse of the pressure transfer function.
"""

import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import fft

from .exceptions import InvalidInputError
from .transfer import correction_gain
from .types import CorrectionConfig
from .utils import as_series, check_sampling_frequency, detrend

logger = logging.getLogger(__name__)


def pr_corr(
    data: ArrayLike,
    fs: float,
    zpt: float,
    config: CorrectionConfig | None = None,
) -> NDArray[np.floating]:
    """Correct a pressure-derived water depth record for depth attenuation.

    Steps:

    1. Take the record mean as the working water depth h
    2. Remove the linear trend
    3. Transform the residuals with a full FFT
    4. Multiply every bin with min_frequency <= |f| <= max_frequency by
       cosh(k h) / cosh(k zpt), saturated at max_gain
    5. Inverse transform and add the trend back

    Args:
        data: Water depth record in meters, e.g. the output of an external
            pressure-to-depth conversion.
        fs: Sampling frequency in Hz.
        zpt: Height of the pressure sensor above the bed in meters.
        config: Correction band and gain saturation. If None, uses
            CorrectionConfig() (0.05 - 0.33 Hz, gain at most 5).

    Returns:
        Corrected water depth record, same length and mean as the input.

    Raises:
        InvalidInputError: For non-positive fs, negative zpt, a sensor above
            the mean water level, non-positive depth or a too short record.

    Example:
        >>> from oceanwaves import pr_corr
        >>> corrected = pr_corr(depth_record, fs=4, zpt=0.1)
    """
    if config is None:
        config = CorrectionConfig()

    fs = check_sampling_frequency(fs)
    if not np.isfinite(zpt) or zpt < 0:
        raise InvalidInputError(f"Sensor height zpt must be non-negative, got {zpt}")

    series = as_series(data)
    h = float(series.mean())
    if h <= 0:
        raise InvalidInputError(f"Mean water depth must be positive, got {h}")
    if zpt > h:
        raise InvalidInputError(
            f"Sensor height zpt ({zpt} m) exceeds mean water depth ({h:.3f} m)"
        )

    residuals, trend = detrend(series, return_trend=True)

    spectrum = fft.fft(residuals)
    freqs = fft.fftfreq(len(residuals), d=1.0 / fs)

    gain = correction_gain(freqs, h, zpt, config)
    logger.debug(
        "pr_corr: n=%d fs=%.3f h=%.3f zpt=%.3f band=%s, %d bins corrected, max gain %.3f",
        len(series),
        fs,
        h,
        zpt,
        config.limits,
        int(np.count_nonzero(gain != 1.0)),
        float(gain.max()),
    )

    corrected = np.real(fft.ifft(spectrum * gain))
    return corrected + trend
