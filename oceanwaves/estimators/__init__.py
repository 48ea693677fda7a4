"""Power spectral density estimators.

This package provides the two one-sided spectrum estimators used by the
spectral wave statistics:

- Welch: segment-averaged, windowed periodogram
- SmoothedPeriodogram: tapered periodogram smoothed with a Daniell kernel
"""

from ..exceptions import InvalidInputError
from ..types import (
    EstimatorConfig,
    EstimatorKind,
    PeriodogramConfig,
    WelchConfig,
)
from .base import SpectralEstimatorBase
from .periodogram import SmoothedPeriodogram
from .welch import Welch

# Mapping from estimator kind to class
ESTIMATOR_CLASSES: dict[EstimatorKind, type[SpectralEstimatorBase]] = {
    EstimatorKind.WELCH: Welch,
    EstimatorKind.PERIODOGRAM: SmoothedPeriodogram,
}

# Default configuration of each estimator kind
DEFAULT_CONFIGS: dict[EstimatorKind, type[EstimatorConfig]] = {
    EstimatorKind.WELCH: WelchConfig,
    EstimatorKind.PERIODOGRAM: PeriodogramConfig,
}


def get_estimator(
    estimator: EstimatorConfig | EstimatorKind | str | None = None,
) -> SpectralEstimatorBase:
    """Get the spectrum estimator for a configuration or kind.

    Args:
        estimator: Estimator configuration, or an EstimatorKind (or its
            string value) to use that kind with default settings. None
            selects the Welch estimator.

    Returns:
        Estimator instance.

    Raises:
        InvalidInputError: If the estimator is not recognised.
    """
    if estimator is None:
        estimator = EstimatorKind.WELCH

    if isinstance(estimator, (WelchConfig, PeriodogramConfig)):
        config = estimator
    else:
        try:
            kind = EstimatorKind(estimator.lower() if isinstance(estimator, str) else estimator)
        except ValueError:
            raise InvalidInputError(
                f"Unknown estimator '{estimator}'. Must be one of: "
                f"{[k.value for k in EstimatorKind]}"
            ) from None
        config = DEFAULT_CONFIGS[kind]()

    return ESTIMATOR_CLASSES[config.kind](config)


__all__ = [
    "SpectralEstimatorBase",
    "Welch",
    "SmoothedPeriodogram",
    "ESTIMATOR_CLASSES",
    "get_estimator",
]
