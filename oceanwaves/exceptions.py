"""Exceptions raised by the wave statistics routines."""


class InvalidInputError(ValueError):
    """Raised for bad parameters or data (non-positive fs, short series, ...)."""


class ComputationError(ArithmeticError):
    """Raised when a statistic cannot be computed from otherwise valid input.

    Examples are an empty spectral integration window or moments that are not
    finite. Analyses raise this instead of returning NaN.
    """
