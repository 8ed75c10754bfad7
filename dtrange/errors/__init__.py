"""
Expose public exceptions & warnings
"""

from dtrange._config.config import OptionError


class ComputeError(ValueError):
    """
    Base class for errors raised while generating a range of temporal values.

    Generation either returns a complete result or raises a single
    ``ComputeError``; no partial sequence is ever returned.
    """


class InvalidIntervalError(ComputeError):
    """
    Error raised when the interval between consecutive values of a range
    is not strictly positive.

    This covers negative and zero durations, fixed durations that vanish
    once expressed in the requested time unit, and calendar durations
    passed where only a fixed duration is meaningful (``time_range``).

    Examples
    --------
    >>> dtrange.date_range("2021-01-01", "2021-01-02", "0d")
    Traceback (most recent call last):
       ...
    InvalidIntervalError: `interval` must be positive
    """


class OutOfBoundsDatetime(ComputeError):
    """
    Error raised when an instant, or an interval scaled by a step count,
    falls outside the range representable for the requested time unit.
    """


class TimezoneResolutionError(ComputeError):
    """
    Error raised when a time zone cannot resolve a wall time.

    Raised for unknown time zone identifiers, and for local times that are
    ambiguous or non-existent because of a daylight-saving transition. The
    underlying backend exception is chained as ``__cause__``.
    """


class PerformanceWarning(Warning):
    """
    Warning raised when there is a possible performance impact.
    """


class AbstractMethodError(NotImplementedError):
    """
    Raise this error instead of NotImplementedError for abstract methods.
    """

    def __init__(self, class_instance, methodtype="method"):
        types = {"method", "classmethod", "staticmethod", "property"}
        if methodtype not in types:
            raise ValueError(
                f"methodtype must be one of {types}, got {methodtype} instead."
            )
        self.methodtype = methodtype
        self.class_instance = class_instance

    def __str__(self) -> str:
        if self.methodtype == "classmethod":
            name = self.class_instance.__name__
        else:
            name = type(self.class_instance).__name__
        return f"This {self.methodtype} must be defined in the concrete class {name}"


__all__ = [
    "AbstractMethodError",
    "ComputeError",
    "InvalidIntervalError",
    "OptionError",
    "OutOfBoundsDatetime",
    "PerformanceWarning",
    "TimezoneResolutionError",
]
