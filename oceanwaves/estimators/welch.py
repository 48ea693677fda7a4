"""Segment-averaged power spectral density (Welch's method).

Segments of length 2 N / (segments + 1) overlap by half, so that `segments`
of them cover the record. Each segment is windowed, and the periodograms are
averaged with the window power corrected for.
"""

import numpy as np
from numpy.typing import NDArray
from scipy import signal

from ..exceptions import InvalidInputError
from ..types import WelchConfig
from .base import SpectralEstimatorBase

# Shortest segment that still yields two positive-frequency bins
MIN_SEGMENT_LENGTH = 4


def welch_window(n: int) -> NDArray[np.floating]:
    """Parabolic Welch window of length n.

    w[i] = 1 - ((i - (n - 1) / 2) / ((n + 1) / 2))^2, which stays positive at
    the end points.
    """
    i = np.arange(n, dtype=np.float64)
    return 1.0 - ((i - (n - 1) / 2.0) / ((n + 1) / 2.0)) ** 2


class Welch(SpectralEstimatorBase):
    """Welch-type averaged periodogram."""

    def __init__(self, config: WelchConfig | None = None):
        """Initialize estimator.

        Args:
            config: Segment count and window. Defaults to WelchConfig().
        """
        self.config = config if config is not None else WelchConfig()

    def segment_length(self, n_samples: int) -> int:
        """Number of samples per segment for a record of n_samples."""
        return int(2 * n_samples / (self.config.segments + 1))

    def _estimate(
        self,
        data: NDArray[np.floating],
        fs: float,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        nperseg = self.segment_length(len(data))
        if nperseg < MIN_SEGMENT_LENGTH:
            raise InvalidInputError(
                f"Record of {len(data)} samples is too short for "
                f"{self.config.segments} segments ({nperseg} samples each)"
            )

        if self.config.window == "welch":
            window = welch_window(nperseg)
        else:
            window = self.config.window

        # Data is detrended by the caller; segments are not re-detrended
        freqs, density = signal.welch(
            data,
            fs=fs,
            window=window,
            nperseg=nperseg,
            noverlap=nperseg // 2,
            detrend=False,
            return_onesided=True,
            scaling="density",
            average="mean",
        )
        return freqs, density
