"""Wave statistics from zero-crossing analysis.

The detrended record is split into individual waves at its down-crossings,
the points where the elevation goes from >= 0 to < 0, with residuals at
round-off level treated as zero. Each wave runs from one
down-crossing to the next; the incomplete waves before the first and after
the last crossing are discarded.
"""

import logging
import math
from enum import Enum
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidInputError
from .plotting import WavePlotter
from .types import WaveRecord, WaveStatsZCResult
from .utils import as_series, check_sampling_frequency, detrend

logger = logging.getLogger(__name__)

# Detrended samples closer to zero than this, relative to the record
# magnitude, are round-off and never open a wave
_ROUNDOFF = 1e-9


class ScanState(Enum):
    """States of the wave segmentation scan."""

    SEEKING_FIRST_CROSSING = "seeking"
    IN_WAVE = "in_wave"


def find_down_crossings(data: ArrayLike, tol: float = 0.0) -> NDArray[np.intp]:
    """Indices i where data[i] >= -tol and data[i + 1] < -tol.

    Args:
        data: Detrended elevation samples.
        tol: Non-negative zero band. Samples in [-tol, 0) count as
            non-negative, so residuals of that size never cross.

    Returns:
        Ascending crossing indices (index of the last non-negative sample).
    """
    x = np.asarray(data, dtype=np.float64)
    return np.nonzero((x[:-1] >= -tol) & (x[1:] < -tol))[0]


def segment_waves(data: ArrayLike, fs: float, tol: float = 0.0) -> list[WaveRecord]:
    """Split a detrended record into waves between down-crossings.

    A wave opened at crossing s and closed at crossing e consists of samples
    s + 1 .. e, i.e. it starts with the first negative sample and ends with
    the last non-negative sample before the next crossing.

    Args:
        data: Detrended elevation samples.
        fs: Sampling frequency in Hz.
        tol: Zero band passed to find_down_crossings.

    Returns:
        Waves in record order; empty if fewer than two crossings exist.
    """
    fs = check_sampling_frequency(fs)
    x = np.asarray(data, dtype=np.float64)

    waves = []
    state = ScanState.SEEKING_FIRST_CROSSING
    start = -1
    for crossing in find_down_crossings(x, tol):
        if state is ScanState.SEEKING_FIRST_CROSSING:
            state = ScanState.IN_WAVE
        else:
            segment = x[start + 1 : crossing + 1]
            waves.append(
                WaveRecord(
                    start=int(start),
                    end=int(crossing),
                    crest=float(segment.max()),
                    trough=float(segment.min()),
                    period=(crossing - start) / fs,
                )
            )
        start = crossing
    # A wave still open at the end of the record is incomplete and dropped
    return waves


def wave_stats_zc(
    data: ArrayLike,
    fs: float,
    threshold: float | None = None,
    plotter: WavePlotter | None = None,
) -> WaveStatsZCResult:
    """Calculate wave statistics using the down-crossing method.

    Waves are ranked by height; the highest third holds ceil(n / 3) waves and
    the highest tenth ceil(n / 10), so both are never empty.

    Args:
        data: Surface heights forming a time series, typically in meters.
        fs: Sampling frequency in Hz.
        threshold: Minimum wave height in the units of data. Smaller waves
            are left out of the statistics but are not merged with their
            neighbours. None keeps all waves.
        plotter: Optional sink receiving the retained waves.

    Returns:
        WaveStatsZCResult with Hsig, Hmean, H10, Hmax, Tmean and Tsig.

    Raises:
        InvalidInputError: For non-positive fs, a negative threshold, or if no
            complete wave (above threshold) is found.

    Example:
        >>> from oceanwaves import wave_stats_zc
        >>> stats = wave_stats_zc(elevation, fs=4)
        >>> print(f"Hsig: {stats.hsig:.2f} m, Tmean: {stats.tmean:.1f} s")
    """
    fs = check_sampling_frequency(fs)
    if threshold is not None and (not np.isfinite(threshold) or threshold < 0):
        raise InvalidInputError(f"Wave threshold must not be negative, got {threshold}")

    series = as_series(data, min_length=3)
    # Detrending a straight line leaves residuals scaled by the record magnitude
    tol = _ROUNDOFF * max(float(np.abs(series).max()), 1.0)
    waves = segment_waves(detrend(series), fs, tol)
    if not waves:
        raise InvalidInputError("No complete wave found: fewer than two down-crossings")

    if threshold is not None:
        retained = [wave for wave in waves if wave.height >= threshold]
        logger.debug(
            "wave_stats_zc: %d of %d waves below threshold %.3f",
            len(waves) - len(retained),
            len(waves),
            threshold,
        )
        if not retained:
            raise InvalidInputError(
                f"All {len(waves)} waves are lower than the threshold {threshold}"
            )
        waves = retained

    result = _aggregate(waves)
    logger.debug(
        "wave_stats_zc: %d waves, Hsig=%.3f Tmean=%.2f", len(waves), result.hsig, result.tmean
    )

    if plotter is not None:
        plotter.plot_waves(waves)

    return result


def _aggregate(waves: Sequence[WaveRecord]) -> WaveStatsZCResult:
    """Statistics of a non-empty list of waves."""
    heights = np.array([wave.height for wave in waves])
    periods = np.array([wave.period for wave in waves])

    # Sort by height, highest first; ties keep record order
    order = np.argsort(-heights, kind="stable")
    heights = heights[order]
    periods = periods[order]

    n = len(heights)
    n3 = math.ceil(n / 3)
    n10 = math.ceil(n / 10)

    return WaveStatsZCResult(
        hsig=float(heights[:n3].mean()),
        hmean=float(heights.mean()),
        h10=float(heights[:n10].mean()),
        hmax=float(heights[0]),
        tmean=float(periods.mean()),
        tsig=float(periods[:n3].mean()),
    )
