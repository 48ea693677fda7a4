"""Smoothed periodogram.

Follows the conventions of R's ``spec.pgram``: split cosine bell taper, zero
padding to a fast FFT length, raw periodogram |X|^2 / (N0 fs), and circular
smoothing with a Daniell kernel. The returned density is one-sided (factor 2)
and corrected for the variance removed by the taper.
"""

import numpy as np
from numpy.typing import NDArray
from scipy import fft, ndimage

from ..exceptions import InvalidInputError
from ..types import PeriodogramConfig
from .base import SpectralEstimatorBase


def split_cosine_bell(n: int, taper: float) -> NDArray[np.floating]:
    """Split cosine bell taper weights.

    The first and last floor(n * taper) samples are tapered by a half cosine
    bell; the rest are 1.

    Args:
        n: Number of samples.
        taper: Proportion tapered at each end, in [0, 0.5].

    Returns:
        Taper weights [n].
    """
    weights = np.ones(n)
    m = int(np.floor(n * taper))
    if m == 0:
        return weights
    bell = 0.5 * (1.0 - np.cos(np.pi * np.arange(1, 2 * m, 2) / (2 * m)))
    weights[:m] = bell
    weights[n - m :] = bell[::-1]
    return weights


def taper_variance_factor(taper: float) -> float:
    """Fraction of the variance kept by the split cosine bell (u2)."""
    return 1.0 - (5.0 / 8.0) * taper * 2.0


class SmoothedPeriodogram(SpectralEstimatorBase):
    """Tapered periodogram smoothed with a Daniell kernel."""

    def __init__(self, config: PeriodogramConfig | None = None):
        """Initialize estimator.

        Args:
            config: Kernel, taper and padding. Defaults to PeriodogramConfig().
        """
        self.config = config if config is not None else PeriodogramConfig()

    def _estimate(
        self,
        data: NDArray[np.floating],
        fs: float,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        n0 = len(data)
        n = fft.next_fast_len(n0, real=True) if self.config.pad else n0

        weights = self.config.kernel.weights
        if len(weights) > n:
            raise InvalidInputError(
                f"Record of {n0} samples is shorter than the smoothing kernel "
                f"({len(weights)} points)"
            )

        x = data * split_cosine_bell(n0, self.config.taper)
        xfft = fft.fft(x, n=n)
        pgram = np.abs(xfft) ** 2 / (n0 * fs)
        # Zero frequency carries no information after detrending
        pgram[0] = 0.5 * (pgram[1] + pgram[n - 1])

        pgram = ndimage.convolve1d(pgram, weights, mode="wrap")

        n_spec = n // 2
        freqs = np.arange(1, n_spec + 1) * fs / n
        density = 2.0 * pgram[1 : n_spec + 1] / taper_variance_factor(self.config.taper)
        return freqs, density
