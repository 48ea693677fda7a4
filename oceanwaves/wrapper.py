"""High-level wrapper function for burst wave statistics.

This module provides the `wavestats` function that accepts a pandas Series or
an xarray DataArray of water surface (or pressure-derived depth) samples and
returns an xarray Dataset of spectral and zero-crossing statistics over
multiple time windows.
"""

import logging

import numpy as np
import pandas as pd
import xarray as xr
from numpy.typing import NDArray

from .correction import pr_corr
from .estimators import get_estimator
from .exceptions import ComputationError, InvalidInputError
from .spectral import wave_stats_sp
from .types import (
    CorrectionConfig,
    EstimatorConfig,
    EstimatorKind,
    SpectralConfig,
    WaveStatsSPResult,
    WaveStatsZCResult,
)
from .utils import check_sampling_frequency
from .zerocross import wave_stats_zc

logger = logging.getLogger(__name__)

# Verbosity level to logging level of the package logger
VERBOSE_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

# Output variable attributes
VARIABLE_ATTRS = {
    "h": {"units": "m", "long_name": "Mean water depth"},
    "hm0": {
        "units": "m",
        "long_name": "Spectral significant wave height",
        "standard_name": "sea_surface_wave_significant_height",
    },
    "tp": {
        "units": "s",
        "long_name": "Peak period",
        "standard_name": "sea_surface_wave_period_at_variance_spectral_density_maximum",
    },
    "m0": {"units": "m^2", "long_name": "Zeroth spectral moment"},
    "t_0_1": {
        "units": "s",
        "long_name": "Mean period m0/m1",
        "standard_name": "sea_surface_wave_mean_period_from_variance_spectral_density_first_frequency_moment",
    },
    "t_0_2": {
        "units": "s",
        "long_name": "Mean period sqrt(m0/m2)",
        "standard_name": "sea_surface_wave_mean_period_from_variance_spectral_density_second_frequency_moment",
    },
    "eps2": {"units": "1", "long_name": "Spectral width parameter EPS2"},
    "eps4": {"units": "1", "long_name": "Spectral width parameter EPS4"},
    "hsig": {"units": "m", "long_name": "Mean height of the highest third of waves"},
    "hmean": {"units": "m", "long_name": "Mean wave height"},
    "h10": {"units": "m", "long_name": "Mean height of the highest tenth of waves"},
    "hmax": {"units": "m", "long_name": "Maximum wave height"},
    "tmean": {"units": "s", "long_name": "Mean zero down-crossing period"},
    "tsig": {"units": "s", "long_name": "Mean period of the highest third of waves"},
}

SP_VARIABLES = ("h", "hm0", "tp", "m0", "t_0_1", "t_0_2", "eps2", "eps4")
ZC_VARIABLES = ("hsig", "hmean", "h10", "hmax", "tmean", "tsig")


def wavestats(
    data: pd.Series | xr.DataArray,
    fs: float | None = None,
    window_length: float | None = None,
    window_overlap: float = 0.0,
    zpt: float | None = None,
    estimator: EstimatorConfig | EstimatorKind | str | None = None,
    correction: CorrectionConfig | None = None,
    spectral: SpectralConfig | None = None,
    threshold: float | None = None,
    time_var: str = "time",
    verbose: int | None = None,
) -> xr.Dataset:
    """Calculate wave statistics from a record over multiple windows.

    Each analysis window is optionally corrected for pressure attenuation
    and then analysed with both the spectral and the zero-crossing method.

    Parameters
    ----------
    data : pd.Series or xr.DataArray
        Water surface elevation or pressure-derived water depth in meters.
        For a Series, the index must be a DatetimeIndex. For a DataArray,
        it must be one-dimensional along a datetime `time_var` coordinate.
    fs : float, optional
        Sampling frequency in Hz. If None, inferred from the median sampling
        interval. Irregularly sampled data is linearly resampled to fs.
    window_length : float, optional
        Analysis window length in seconds. Defaults to the whole record.
    window_overlap : float, default 0
        Overlap between consecutive windows in seconds.
    zpt : float, optional
        Height of the pressure sensor above the bed in meters. If given,
        each window is corrected with `pr_corr` before analysis, and data
        must be the pressure-derived water depth.
    estimator : WelchConfig, PeriodogramConfig or str, optional
        Spectrum estimator for the spectral statistics. Defaults to Welch.
    correction : CorrectionConfig, optional
        Pressure correction band and gain limit.
    spectral : SpectralConfig, optional
        Spectral moment integration settings.
    threshold : float, optional
        Minimum wave height for the zero-crossing statistics.
    time_var : str, default 'time'
        Name of the time coordinate of a DataArray.
    verbose : int, optional
        Verbosity level (0=warnings, 1=run summary, 2=per-window detail).
        If given, sets the level of the package logger for the duration of
        the call; the previous level is restored on return.

    Returns
    -------
    xr.Dataset
        Dataset with dimension time (window centre times) and variables
        h, hm0, tp, m0, t_0_1, t_0_2, eps2, eps4 (spectral) and hsig, hmean,
        h10, hmax, tmean, tsig (zero-crossing). Spectral statistics of a
        window whose spectrum is degenerate are NaN.

    Raises
    ------
    InvalidInputError
        If the input format or any parameter is invalid.
    TypeError
        If data is not a Series or DataArray.

    Examples
    --------
    >>> import pandas as pd
    >>> from oceanwaves import make_wave_record, wavestats
    >>>
    >>> time = pd.date_range('2024-01-01', periods=14400, freq='250ms')
    >>> series = pd.Series(make_wave_record(14400, fs=4, hsig=1.2, tp=9), index=time)
    >>> result = wavestats(series, window_length=1800)
    >>> result['hm0'].values
    """
    package_logger = logging.getLogger(__package__)
    previous_level = package_logger.level
    if verbose is not None:
        package_logger.setLevel(VERBOSE_LEVELS.get(min(max(verbose, 0), 2)))
    try:
        return _analyse_windows(
            data,
            fs,
            window_length,
            window_overlap,
            zpt,
            estimator,
            correction,
            spectral,
            threshold,
            time_var,
        )
    finally:
        package_logger.setLevel(previous_level)


def _analyse_windows(
    data: pd.Series | xr.DataArray,
    fs: float | None,
    window_length: float | None,
    window_overlap: float,
    zpt: float | None,
    estimator: EstimatorConfig | EstimatorKind | str | None,
    correction: CorrectionConfig | None,
    spectral: SpectralConfig | None,
    threshold: float | None,
    time_var: str,
) -> xr.Dataset:
    """Window the record and collect statistics; arguments as for wavestats."""
    if fs is not None:
        fs = check_sampling_frequency(fs)

    if isinstance(data, pd.Series):
        values, time_index, sampling_freq = _process_series(data, fs)
    elif isinstance(data, xr.DataArray):
        values, time_index, sampling_freq = _process_dataarray(data, time_var, fs)
    else:
        raise TypeError(f"data must be pandas Series or xarray DataArray, got {type(data)}")

    if window_length is None:
        window_length = len(values) / sampling_freq

    if window_length <= 0:
        raise InvalidInputError(f"window_length must be positive, got {window_length}")
    if not 0 <= window_overlap < window_length:
        raise InvalidInputError(
            f"window_overlap ({window_overlap}s) must be non-negative and less than "
            f"window_length ({window_length}s)"
        )

    # Validate estimator up front
    method = get_estimator(estimator)

    # Calculate window parameters
    window_samples = int(round(window_length * sampling_freq))
    overlap_samples = int(round(window_overlap * sampling_freq))
    step_samples = window_samples - overlap_samples

    if window_samples > len(values):
        raise InvalidInputError(
            f"Window length ({window_length}s = {window_samples} samples) "
            f"exceeds data length ({len(values)} samples)"
        )
    if step_samples < 1:
        raise InvalidInputError("window_overlap leaves no step between windows")

    n_windows = 1 + (len(values) - window_samples) // step_samples

    logger.info(
        "wavestats: %s estimator, fs=%.3f Hz, window %.1f s (overlap %.1f s), "
        "%d windows, pressure correction %s",
        method.name,
        sampling_freq,
        window_length,
        window_overlap,
        n_windows,
        "off" if zpt is None else f"at zpt={zpt} m",
    )

    sp_results = []
    zc_results = []
    window_times = []

    for i in range(n_windows):
        start_idx = i * step_samples
        end_idx = start_idx + window_samples
        window = values[start_idx:end_idx]

        # Window center time
        window_time = time_index[start_idx + window_samples // 2]
        window_times.append(window_time)
        logger.debug("Processing window %d/%d: %s", i + 1, n_windows, window_time)

        if zpt is not None:
            window = pr_corr(window, sampling_freq, zpt, correction)

        try:
            sp = wave_stats_sp(window, sampling_freq, estimator, spectral)
        except ComputationError as err:
            logger.warning("Spectral statistics undefined for window at %s: %s", window_time, err)
            sp = None
        sp_results.append(sp)
        zc_results.append(wave_stats_zc(window, sampling_freq, threshold))

    output = _build_output_dataset(sp_results, zc_results, window_times)
    output.attrs.update(
        {
            "source": "oceanwaves",
            "estimator": method.name,
            "sampling_frequency": sampling_freq,
            "window_length": float(window_length),
            "window_overlap": float(window_overlap),
        }
    )
    if zpt is not None:
        output.attrs["zpt"] = float(zpt)

    logger.info("wavestats: analysis complete, %d windows", n_windows)
    return output


def _resample(
    values: NDArray, time_index: pd.DatetimeIndex, fs: float | None
) -> tuple[NDArray, pd.DatetimeIndex, float]:
    """Resample to a regular time grid if needed.

    Returns:
        Tuple of (data array, time index, sampling frequency)
    """
    if len(time_index) < 2:
        raise InvalidInputError("At least 2 samples required")
    if not time_index.is_monotonic_increasing:
        raise InvalidInputError("Time index must be increasing")

    # Infer sampling frequency from time index
    time_diff = time_index.to_series().diff()
    inferred_fs = 1.0 / time_diff.median().total_seconds()

    # Determine target sampling frequency
    target_fs = fs if fs is not None else inferred_fs

    # Check if resampling is needed
    time_diff_std = time_diff.std().total_seconds()
    needs_resampling = time_diff_std > 1e-6 or (fs is not None and abs(inferred_fs - fs) > 0.01)

    if not needs_resampling:
        return values, time_index, inferred_fs

    logger.info("Resampling %d samples to %.3f Hz", len(values), target_fs)
    new_index = pd.date_range(
        start=time_index[0], end=time_index[-1], freq=pd.Timedelta(seconds=1.0 / target_fs)
    )
    series = pd.Series(values, index=time_index)
    resampled = (
        series.reindex(time_index.union(new_index))
        .interpolate(method="time")
        .reindex(new_index)
    )
    return resampled.to_numpy(dtype=np.float64), new_index, target_fs


def _process_series(
    series: pd.Series, fs: float | None
) -> tuple[NDArray, pd.DatetimeIndex, float]:
    """Process pandas Series input."""
    # Validate index is DatetimeIndex
    if not isinstance(series.index, pd.DatetimeIndex):
        raise InvalidInputError(f"Series index must be DatetimeIndex, got {type(series.index)}")

    return _resample(series.to_numpy(dtype=np.float64), series.index, fs)


def _process_dataarray(
    da: xr.DataArray, time_var: str, fs: float | None
) -> tuple[NDArray, pd.DatetimeIndex, float]:
    """Process xarray DataArray input."""
    if time_var not in da.coords:
        raise InvalidInputError(f"Time coordinate '{time_var}' not found in DataArray")
    if da.dims != (time_var,):
        raise InvalidInputError(
            f"DataArray must be one-dimensional along '{time_var}', got dims {da.dims}"
        )

    # Get time coordinate
    time_coord = da[time_var]

    # Validate time is datetime-like
    if not np.issubdtype(time_coord.dtype, np.datetime64):
        raise InvalidInputError(
            f"Time variable '{time_var}' must be datetime type, got {time_coord.dtype}"
        )

    time_index = pd.DatetimeIndex(time_coord.values)
    return _resample(np.asarray(da.values, dtype=np.float64), time_index, fs)


def _build_output_dataset(
    sp_results: list[WaveStatsSPResult | None],
    zc_results: list[WaveStatsZCResult],
    window_times: list,
) -> xr.Dataset:
    """Build output Dataset with one entry per window.

    Returns:
        xarray Dataset with dimension time
    """
    data_vars = {}
    for name in SP_VARIABLES:
        data_vars[name] = (
            ["time"],
            np.array([np.nan if sp is None else getattr(sp, name) for sp in sp_results]),
        )
    for name in ZC_VARIABLES:
        data_vars[name] = (["time"], np.array([getattr(zc, name) for zc in zc_results]))

    # Convert times to numpy datetime64
    time_values = np.array(window_times, dtype="datetime64[ns]")

    ds = xr.Dataset(data_vars, coords={"time": time_values})

    # Add variable attributes
    for name, attrs in VARIABLE_ATTRS.items():
        ds[name].attrs = dict(attrs)
    ds["time"].attrs = {"long_name": "Window centre time"}

    return ds
