"""oceanwaves - wave statistics from surface elevation and pressure records.

A Python package for computing ocean wave statistics from time series of
water surface elevation or pressure-derived water depth, as measured by
bed-mounted pressure loggers. Adapted from the MATLAB wave routines of
Urs Neumeier.

Main Functions
--------------
wavestats : High-level wrapper for analysis of a Series/DataArray over multiple windows
wave_stats_sp : Spectral wave statistics (Hm0, Tp, mean periods, spectral width)
wave_stats_zc : Zero-crossing wave statistics (Hsig, Hmean, H1/10, Hmax, periods)
pr_corr : Correct a pressure-derived depth record for depth attenuation

Data Structures
---------------
WaveStatsSPResult : Spectral statistics of one record
WaveStatsZCResult : Zero-crossing statistics of one record
SpectrumEstimate : One-sided power spectral density
SpectralMoments : Spectral moments m_-2 .. m_4
WaveRecord : Individual wave found by the zero-crossing analysis

Configuration
-------------
EstimatorKind : Enum of spectrum estimators (WELCH, PERIODOGRAM)
WelchConfig, PeriodogramConfig, SmoothingKernel : Estimator settings
CorrectionConfig : Pressure correction band and gain limit
SpectralConfig : Moment integration limits

Synthetic Records
-----------------
make_wave_record : Random-phase JONSWAP/TMA surface elevation
make_pressure_record : Pressure-derived depth record under a given elevation

Example (High-level API)
------------------------
>>> import pandas as pd
>>> from oceanwaves import wavestats
>>>
>>> # Pressure-derived depth with datetime index
>>> depth = pd.read_csv('logger.csv', index_col='time', parse_dates=True)['depth']
>>>
>>> # Statistics of 30 minute bursts, sensor 0.4 m above the bed
>>> result = wavestats(depth, window_length=1800, zpt=0.4)
>>> print(f"Hm0: {result.hm0.values}")

Example (Low-level API)
-----------------------
>>> from oceanwaves import pr_corr, wave_stats_sp, wave_stats_zc
>>>
>>> elevation = pr_corr(depth_record, fs=4, zpt=0.4)
>>> sp = wave_stats_sp(elevation, fs=4, estimator="periodogram")
>>> zc = wave_stats_zc(elevation, fs=4)
>>> print(f"Hm0: {sp.hm0:.2f} m, Hsig: {zc.hsig:.2f} m")

References
----------
Hunt, J.N. (1979) "Direct solution of wave dispersion equation", Journal of
    the Waterway, Port, Coastal and Ocean Division, 105, 457-459.
Tucker, M.J. and Pitt, E.G. (2001) Waves in Ocean Engineering. Elsevier.
"""

import logging

__version__ = "0.1.0"

# High-level wrapper
from .wrapper import wavestats

# Core analysis functions
from .correction import pr_corr
from .spectral import spectral_moments, wave_stats_sp
from .zerocross import wave_stats_zc

# Data structures
from .types import (
    CorrectionConfig,
    EstimatorKind,
    PeriodogramConfig,
    SmoothingKernel,
    SpectralConfig,
    SpectralMoments,
    SpectrumEstimate,
    WaveRecord,
    WaveStatsSPResult,
    WaveStatsZCResult,
    WelchConfig,
)

# Errors
from .exceptions import ComputationError, InvalidInputError

# Synthetic records
from .synthetic import make_pressure_record, make_wave_record

# Utility functions
from .utils import detrend, linear_trend, wavenumber

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # High-level wrapper
    "wavestats",
    # Core functions
    "pr_corr",
    "wave_stats_sp",
    "wave_stats_zc",
    "spectral_moments",
    # Data structures
    "WaveStatsSPResult",
    "WaveStatsZCResult",
    "SpectrumEstimate",
    "SpectralMoments",
    "WaveRecord",
    # Configuration
    "EstimatorKind",
    "WelchConfig",
    "PeriodogramConfig",
    "SmoothingKernel",
    "CorrectionConfig",
    "SpectralConfig",
    # Errors
    "InvalidInputError",
    "ComputationError",
    # Synthetic records
    "make_wave_record",
    "make_pressure_record",
    # Utility functions
    "detrend",
    "linear_trend",
    "wavenumber",
]
