"""Type definitions and data structures for oceanwaves.

This module defines the value objects passed between the analysis routines:
- Configuration (CorrectionConfig, SpectralConfig, estimator configs)
- SpectrumEstimate and SpectralMoments produced by the spectral analysis
- WaveRecord produced by the zero-crossing segmentation
- The two immutable result records
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray
from scipy import signal

from .exceptions import InvalidInputError

# Frequency band (Hz) over which the pressure correction is applied
DEFAULT_CORRECTION_LIMITS = (0.05, 0.33)
# Half-widths of the default Daniell smoother used with the periodogram
DEFAULT_KERNEL_WIDTHS = (9, 9, 9)
# Number of averaging segments used with the Welch estimator
DEFAULT_SEGMENTS = 4
# Largest correction multiplier applied to any frequency bin
DEFAULT_MAX_GAIN = 5.0


class EstimatorKind(str, Enum):
    """Power spectral density estimators available to wave_stats_sp."""

    WELCH = "welch"  # Segment-averaged, windowed PSD
    PERIODOGRAM = "periodogram"  # Tapered, kernel-smoothed periodogram


@dataclass(frozen=True)
class SmoothingKernel:
    """Daniell smoothing kernel for the periodogram.

    The kernel is the convolution of Daniell (moving average) kernels with
    the given half-widths, as with R's ``kernel("daniell", c(9, 9, 9))``.

    Attributes:
        widths: Half-width m of each component kernel (2m + 1 points each).
        modified: Use modified Daniell kernels, whose end points carry half
            weight.
    """

    widths: tuple[int, ...] = DEFAULT_KERNEL_WIDTHS
    modified: bool = False

    def __post_init__(self) -> None:
        """Validate kernel widths."""
        if len(self.widths) == 0:
            raise InvalidInputError("Kernel needs at least one width")
        if any(int(m) != m or m < 1 for m in self.widths):
            raise InvalidInputError(
                f"Kernel widths must be positive integers, got {self.widths}"
            )

    @property
    def half_width(self) -> int:
        """Half-width of the combined kernel."""
        return int(sum(self.widths))

    @property
    def weights(self) -> NDArray[np.floating]:
        """Full symmetric kernel coefficients (length 2 * half_width + 1)."""
        coef = np.array([1.0])
        for m in self.widths:
            m = int(m)
            component = np.ones(2 * m + 1)
            if self.modified:
                component[0] = component[-1] = 0.5
            coef = np.convolve(coef, component / component.sum())
        return coef


@dataclass(frozen=True)
class WelchConfig:
    """Configuration for the segment-averaged (Welch) estimator.

    Attributes:
        segments: Nominal number of 50%-overlapping segments averaged.
        window: Window applied to each segment. "welch" is the parabolic
            Welch window; any scipy.signal window name is also accepted.
    """

    kind: ClassVar[EstimatorKind] = EstimatorKind.WELCH

    segments: int = DEFAULT_SEGMENTS
    window: str = "welch"

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.segments < 1:
            raise InvalidInputError(f"segments must be at least 1, got {self.segments}")
        if self.window != "welch":
            try:
                signal.get_window(self.window, 8)
            except (ValueError, TypeError):
                raise InvalidInputError(f"Unknown window '{self.window}'") from None


@dataclass(frozen=True)
class PeriodogramConfig:
    """Configuration for the smoothed periodogram estimator.

    Attributes:
        kernel: Smoothing kernel applied circularly to the raw periodogram.
        taper: Proportion tapered at each end by a split cosine bell.
        pad: Zero-pad to the next fast FFT length.
    """

    kind: ClassVar[EstimatorKind] = EstimatorKind.PERIODOGRAM

    kernel: SmoothingKernel = field(default_factory=SmoothingKernel)
    taper: float = 0.1
    pad: bool = True

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not isinstance(self.kernel, SmoothingKernel):
            raise InvalidInputError(
                f"kernel must be a SmoothingKernel, got {type(self.kernel).__name__}"
            )
        if not 0.0 <= self.taper <= 0.5:
            raise InvalidInputError(f"taper must be in [0, 0.5], got {self.taper}")


EstimatorConfig = WelchConfig | PeriodogramConfig


@dataclass(frozen=True)
class CorrectionConfig:
    """Configuration of the pressure attenuation correction.

    Attributes:
        min_frequency: Lowest corrected frequency in Hz (0.05 Hz = 20 s).
        max_frequency: Highest corrected frequency in Hz (0.33 Hz = ~3 s).
        max_gain: Saturation value of the correction multiplier.
    """

    min_frequency: float = DEFAULT_CORRECTION_LIMITS[0]
    max_frequency: float = DEFAULT_CORRECTION_LIMITS[1]
    max_gain: float = DEFAULT_MAX_GAIN

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.min_frequency < 0:
            raise InvalidInputError(
                f"min_frequency must be non-negative, got {self.min_frequency}"
            )
        if self.min_frequency >= self.max_frequency:
            raise InvalidInputError(
                f"min_frequency ({self.min_frequency}) must be less than "
                f"max_frequency ({self.max_frequency})"
            )
        if not self.max_gain >= 1.0:
            raise InvalidInputError(f"max_gain must be at least 1, got {self.max_gain}")

    @property
    def limits(self) -> tuple[float, float]:
        """Correction band as (min_frequency, max_frequency)."""
        return (self.min_frequency, self.max_frequency)


@dataclass(frozen=True)
class SpectralConfig:
    """Configuration of the spectral moment integration.

    Moments are integrated from the lowest positive bin up to
    ``max_frequency * integration_factor`` (0.495 Hz by default).
    """

    max_frequency: float = DEFAULT_CORRECTION_LIMITS[1]
    integration_factor: float = 1.5

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.max_frequency <= 0:
            raise InvalidInputError(
                f"max_frequency must be positive, got {self.max_frequency}"
            )
        if self.integration_factor <= 0:
            raise InvalidInputError(
                f"integration_factor must be positive, got {self.integration_factor}"
            )

    @property
    def integration_limit(self) -> float:
        """Upper frequency limit of the moment integration in Hz."""
        return self.max_frequency * self.integration_factor


@dataclass(frozen=True, eq=False)
class SpectrumEstimate:
    """One-sided variance density spectrum, zero frequency excluded.

    Attributes:
        frequency: Ascending bin frequencies in Hz.
        density: Variance density in m^2/Hz; sum(density) * df ~ variance.
        df: Bin spacing in Hz.
    """

    frequency: NDArray[np.floating]
    density: NDArray[np.floating]
    df: float

    def __post_init__(self) -> None:
        """Validate array shapes."""
        if self.frequency.shape != self.density.shape:
            raise InvalidInputError(
                f"frequency {self.frequency.shape} and density "
                f"{self.density.shape} must have the same shape"
            )

    @property
    def n_freqs(self) -> int:
        """Number of frequency bins."""
        return len(self.frequency)

    @property
    def peak_frequency(self) -> float:
        """Frequency of the bin with maximum density."""
        return float(self.frequency[np.argmax(self.density)])


@dataclass(frozen=True)
class SpectralMoments:
    """Spectral moments m_k for k = -2 .. 4.

    Index with the exponent: ``moments[0]`` is m0, ``moments[-1]`` is m_-1.
    """

    values: tuple[float, ...]

    ORDERS: ClassVar[tuple[int, ...]] = (-2, -1, 0, 1, 2, 3, 4)

    def __post_init__(self) -> None:
        """Validate number of moments."""
        if len(self.values) != len(self.ORDERS):
            raise InvalidInputError(
                f"Expected {len(self.ORDERS)} moments, got {len(self.values)}"
            )

    def __getitem__(self, order: int) -> float:
        if order not in self.ORDERS:
            raise KeyError(f"No moment of order {order}")
        return self.values[order - self.ORDERS[0]]


@dataclass(frozen=True)
class WaveRecord:
    """One wave delimited by two consecutive down-crossings.

    Attributes:
        start: Index of the sample preceding the opening down-crossing.
        end: Index of the sample preceding the closing down-crossing.
        crest: Maximum elevation within the wave.
        trough: Minimum elevation within the wave.
        period: Wave period in seconds.
    """

    start: int
    end: int
    crest: float
    trough: float
    period: float

    @property
    def height(self) -> float:
        """Crest to trough wave height."""
        return self.crest - self.trough


@dataclass(frozen=True)
class WaveStatsSPResult:
    """Wave statistics from spectral analysis.

    Attributes:
        h: Mean water depth (mean of the input record).
        hm0: Significant wave height 4 * sqrt(m0).
        tp: Peak period in seconds.
        m0: Zeroth spectral moment (variance estimate).
        t_0_1: Average period m0/m1 (NDBC APD convention).
        t_0_2: Average period sqrt(m0/m2) (Scripps APD convention).
        eps2: Spectral width parameter sqrt(m0*m2/m1^2 - 1).
        eps4: Spectral width parameter sqrt(1 - m2^2/(m0*m4)).
    """

    h: float
    hm0: float
    tp: float
    m0: float
    t_0_1: float
    t_0_2: float
    eps2: float
    eps4: float


@dataclass(frozen=True)
class WaveStatsZCResult:
    """Wave statistics from zero-crossing analysis.

    Attributes:
        hsig: Mean height of the highest third of the waves.
        hmean: Mean height of all waves.
        h10: Mean height of the highest tenth of the waves.
        hmax: Maximum wave height.
        tmean: Mean period of all waves in seconds.
        tsig: Mean period of the highest third of the waves in seconds.
    """

    hsig: float
    hmean: float
    h10: float
    hmax: float
    tmean: float
    tsig: float
