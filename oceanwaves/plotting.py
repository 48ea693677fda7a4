"""Interfaces for optional plotting of analysis results.

Rendering is not part of this package. An analysis accepts any object with
the matching method as ``plotter=`` and hands it the intermediate results
after the statistics have been computed; the plotter never affects them.
"""

from typing import Protocol, Sequence, runtime_checkable

from .types import SpectrumEstimate, WaveRecord


@runtime_checkable
class SpectrumPlotter(Protocol):
    """Receives the spectrum estimated by wave_stats_sp."""

    def plot_spectrum(self, spectrum: SpectrumEstimate, tp: float) -> None:
        """Render the spectrum with a marker at the peak period tp."""
        ...


@runtime_checkable
class WavePlotter(Protocol):
    """Receives the individual waves found by wave_stats_zc."""

    def plot_waves(self, waves: Sequence[WaveRecord]) -> None:
        """Render histograms of wave heights and periods."""
        ...
