"""Base class for power spectral density estimators."""

from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray

from ..exceptions import InvalidInputError
from ..types import SpectrumEstimate


class SpectralEstimatorBase(ABC):
    """Abstract base class for one-sided spectrum estimators.

    All estimators take a detrended elevation record and its sampling
    frequency and produce a SpectrumEstimate without the zero-frequency bin.

    Subclasses must implement the `_estimate` method.
    """

    # Smallest number of positive-frequency bins that defines a bin spacing
    min_bins = 2

    def estimate(
        self,
        data: NDArray[np.floating],
        fs: float,
    ) -> SpectrumEstimate:
        """Estimate the variance density spectrum of a detrended record.

        Args:
            data: Detrended elevation samples [n_samples].
            fs: Sampling frequency in Hz.

        Returns:
            One-sided spectrum, zero frequency excluded.
        """
        freqs, density = self._estimate(np.asarray(data, dtype=np.float64), fs)

        # Remove the zero-frequency entry
        keep = freqs > 0
        freqs = freqs[keep]
        density = density[keep]

        if len(freqs) < self.min_bins:
            raise InvalidInputError(
                f"{self.name}: record of {len(data)} samples gives only "
                f"{len(freqs)} frequency bins"
            )

        return SpectrumEstimate(
            frequency=freqs,
            density=density,
            df=float(freqs[1] - freqs[0]),
        )

    @abstractmethod
    def _estimate(
        self,
        data: NDArray[np.floating],
        fs: float,
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return (frequency, one-sided density), zero frequency included or not."""
        pass

    @property
    def name(self) -> str:
        """Return the estimator name."""
        return self.__class__.__name__
