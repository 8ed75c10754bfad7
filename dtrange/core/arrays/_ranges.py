"""
Helper functions to generate range-like data for DatetimeArray and TimeArray.
"""
from typing import Optional
import warnings

import numpy as np

from dtrange._config import get_option
from dtrange._typing import ClosedLike, Resolver, TimeUnitLike, TimezoneId
from dtrange.core.dtypes.dtypes import ClosedWindow, TimeUnit
from dtrange.errors import ComputeError, InvalidIntervalError, PerformanceWarning
from dtrange.tseries.conversion import check_int64_bounds
from dtrange.tseries.offsets import Duration, apply_offset
from dtrange.tseries.timezones import get_resolver

_MAX_PREALLOCATE = 1 << 16


def generate_range(
    start: int,
    end: int,
    interval: Duration,
    closed: ClosedLike,
    unit: TimeUnitLike,
    tz: TimezoneId = None,
    resolver: Optional[Resolver] = None,
) -> np.ndarray:
    """
    Generate the epoch integers from `start` to `end` spaced by `interval`.

    Parameters
    ----------
    start : int
        First point of the range, in `unit`.
    end : int
        Last point of the range, in `unit`.
    interval : Duration
        Describes the space between values; must be positive.
    closed : ClosedWindow or {"both", "left", "right", "none"}
        Which of `start` and `end` are included when they fall on the range.
    unit : TimeUnit or {"ns", "us", "ms"}
        Scale of `start`, `end` and of the produced values.
    tz : str, optional
        Time zone resolving calendar components of `interval`.
    resolver : TimezoneResolver, optional

    Returns
    -------
    ndarray[np.int64]
        Strictly ascending. Empty when ``start > end``.

    Raises
    ------
    InvalidIntervalError
        If `interval` is negative or zero.
    OutOfBoundsDatetime
    TimezoneResolutionError
    """
    if start > end:
        return np.array([], dtype=np.int64)

    if interval.negative or interval.is_zero():
        raise InvalidIntervalError("`interval` must be positive")

    closed = ClosedWindow.from_value(closed)
    unit = TimeUnit.from_value(unit)
    check_int64_bounds(start, "start")
    check_int64_bounds(end, "end")

    if interval.is_fixed:
        stride = interval.fixed_in(unit)
        if stride == 0:
            raise InvalidIntervalError(
                f"`interval` {interval} is smaller than one {unit.value}"
            )
        return generate_regular_range(start, end, stride, closed)

    if tz is not None and resolver is None:
        resolver = get_resolver()
    return generate_calendar_range(start, end, interval, closed, unit, tz, resolver)


def generate_regular_range(
    start: int, end: int, stride: int, closed: ClosedWindow
) -> np.ndarray:
    """
    Generate the arithmetic progression from `start` to `end` with a fixed
    `stride`, trimmed according to `closed`.

    Parameters
    ----------
    start : int
    end : int
    stride : int
        Positive step, in the same unit as `start` and `end`.
    closed : ClosedWindow

    Returns
    -------
    ndarray[np.int64]
    """
    b = start if closed.left_closed else start + stride
    if closed.right_closed:
        count = (end - b) // stride + 1 if b <= end else 0
    else:
        count = (end - b - 1) // stride + 1 if b < end else 0

    if count == 0:
        return np.array([], dtype=np.int64)

    # numpy derives the length of an arange in float64, which can fall one
    # short for large strides, so stop a whole stride past the last value
    # and cut to the exact count
    e = b + count * stride
    with np.errstate(over="raise"):
        try:
            values = np.arange(b, e, stride, dtype=np.int64)[:count]
        except (FloatingPointError, OverflowError):
            # e is past the int64 bound
            values = np.fromiter(range(b, e, stride), dtype=np.int64, count=count)
    return values


def _estimate_size(start: int, end: int, interval: Duration, unit: TimeUnit) -> int:
    # months count as 28 days, so this tends to overshoot
    return (end - start) // interval.duration_in(unit) + 1


def generate_calendar_range(
    start: int,
    end: int,
    interval: Duration,
    closed: ClosedWindow,
    unit: TimeUnit,
    tz: TimezoneId,
    resolver: Optional[Resolver],
) -> np.ndarray:
    """
    Generate a range by repeatedly applying a calendar `interval` to `start`.

    The i-th candidate is ``start + interval * i``; it is computed from
    `start` rather than from the previous candidate so that month-end
    clamping does not accumulate (Jan 31, Feb 28, Mar 31, ...).
    """
    size = _estimate_size(start, end, interval, unit)
    threshold = get_option("range.performance_warning_threshold")
    if threshold is not None and size > threshold:
        warnings.warn(
            f"Generating about {size} values with the calendar interval "
            f"{interval} is not vectorized",
            PerformanceWarning,
            stacklevel=4,
        )

    # the hint only sizes the first buffer, which grows as needed
    out = np.empty(min(size, _MAX_PREALLOCATE), dtype=np.int64)
    n = 0

    i = 0 if closed.left_closed else 1
    inclusive = closed.right_closed

    t = apply_offset(start, interval, i, unit, tz, resolver)
    while t <= end if inclusive else t < end:
        if n and t <= out[n - 1]:
            raise ComputeError(
                f"interval {interval} did not increment {out[n - 1]} (got {t})"
            )
        if n == len(out):
            grown = np.empty(2 * len(out) + 1, dtype=np.int64)
            grown[:n] = out
            out = grown
        out[n] = t
        n += 1
        i += 1
        t = apply_offset(start, interval, i, unit, tz, resolver)

    return out[:n].copy()
