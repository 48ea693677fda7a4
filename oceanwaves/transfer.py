"""Pressure transfer function.

Dynamic pressure measured at height z above the bed is attenuated relative to
the surface elevation by

    K(f) = cosh(k * z) / cosh(k * d)

with k the wavenumber at frequency f and d the water depth. The correction
applied to a pressure-derived record is the inverse of K, limited to a band of
frequencies and saturated at a maximum gain so that high frequencies, where K
becomes very small, are not blown up.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidInputError
from .types import DEFAULT_MAX_GAIN, CorrectionConfig
from .utils import G, wavenumber


def cosh_ratio(
    k: NDArray[np.floating],
    z: float,
    depth: float,
) -> NDArray[np.floating]:
    """Evaluate cosh(k * z) / cosh(k * depth) without overflow.

    Written as exp(k (z - d)) * (1 + exp(-2 k z)) / (1 + exp(-2 k d)) so that
    large k * d returns a small number instead of inf / inf.
    """
    k = np.asarray(k, dtype=np.float64)
    return np.exp(k * (z - depth)) * (1.0 + np.exp(-2.0 * k * z)) / (
        1.0 + np.exp(-2.0 * k * depth)
    )


class PressureTransfer:
    """Transfer function for pressure measurements.

    H(f) = cosh(k*z) / cosh(k*d)

    with a minimum cutoff of 1 / max_gain to prevent excessive amplification
    when the record is corrected.
    """

    def __init__(self, max_gain: float = DEFAULT_MAX_GAIN, g: float = G):
        """Initialize pressure transfer function.

        Args:
            max_gain: Largest correction multiplier; the attenuation factor
                is not allowed below 1 / max_gain.
            g: Gravitational acceleration.
        """
        if not max_gain >= 1.0:
            raise InvalidInputError(f"max_gain must be at least 1, got {max_gain}")
        self.max_gain = max_gain
        self.min_cutoff = 1.0 / max_gain
        self.g = g

    def __call__(
        self,
        freq: ArrayLike,
        depth: float,
        z: float,
    ) -> NDArray[np.floating]:
        """Attenuation factor H(f) of the pressure signal.

        Args:
            freq: Frequency in Hz (absolute value is used).
            depth: Water depth in meters.
            z: Sensor elevation from seabed in meters.

        Returns:
            Attenuation factor in (0, 1], floored at min_cutoff.
        """
        freq = np.abs(np.atleast_1d(np.asarray(freq, dtype=np.float64)))
        k = wavenumber(freq, depth, g=self.g)
        H = cosh_ratio(k, z, depth)
        return np.maximum(H, self.min_cutoff)

    def gain(
        self,
        freq: ArrayLike,
        depth: float,
        z: float,
        band: tuple[float, float],
    ) -> NDArray[np.floating]:
        """Correction multiplier 1 / H(f), equal to 1 outside the band.

        Args:
            freq: Frequency in Hz; may contain negative FFT frequencies.
            depth: Water depth in meters.
            z: Sensor elevation from seabed in meters.
            band: (min, max) frequency in Hz of the corrected band, inclusive.

        Returns:
            Gain in [1, max_gain] for each frequency.
        """
        freq = np.abs(np.atleast_1d(np.asarray(freq, dtype=np.float64)))
        gain = np.ones_like(freq)
        in_band = (freq >= band[0]) & (freq <= band[1])
        if np.any(in_band):
            gain[in_band] = 1.0 / self(freq[in_band], depth, z)
        return gain


def correction_gain(
    freq: ArrayLike,
    depth: float,
    zpt: float,
    config: CorrectionConfig | None = None,
) -> NDArray[np.floating]:
    """Gain applied by pr_corr to each frequency bin.

    Args:
        freq: Bin frequencies in Hz.
        depth: Mean water depth in meters.
        zpt: Sensor height above the bed in meters.
        config: Correction band and saturation. Defaults to CorrectionConfig().

    Returns:
        Gain for each bin; 1 outside the correction band.
    """
    if config is None:
        config = CorrectionConfig()
    transfer = PressureTransfer(max_gain=config.max_gain)
    return transfer.gain(freq, depth, zpt, band=config.limits)
