"""
Conversions between calendar values and epoch integers.
"""
from datetime import datetime, time, timedelta

import numpy as np

from dtrange.core.dtypes.dtypes import TimeUnit
from dtrange.errors import OutOfBoundsDatetime

EPOCH = datetime(1970, 1, 1)

_I64_MIN = int(np.iinfo(np.int64).min)
_I64_MAX = int(np.iinfo(np.int64).max)

_NS_PER_US = 1_000
_NS_PER_SECOND = 1_000_000_000
NS_PER_DAY = 86_400 * _NS_PER_SECOND


def in_nanoseconds_window(dt: datetime) -> bool:
    """
    Coarse check that `dt` is near the span of int64 nanoseconds since the
    epoch, roughly 1677 to 2262.

    The window is wider than that span and only rejects
    endpoints that are far off. Values inside the window but outside the
    int64 range still fail in `check_int64_bounds`.
    """
    return 1386 <= dt.year <= 2554


def check_int64_bounds(value: int, what: str = "timestamp") -> int:
    """
    Raise OutOfBoundsDatetime if `value` does not fit in an int64.
    """
    if not _I64_MIN <= value <= _I64_MAX:
        raise OutOfBoundsDatetime(f"{what} {value} is out of bounds for int64")
    return value


def datetime_to_epoch(dt: datetime, unit: TimeUnit) -> int:
    """
    Convert a naive datetime to an integer count of `unit` since the epoch.

    Sub-unit precision is floored, which only matters for milliseconds.
    """
    delta = dt - EPOCH
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return check_int64_bounds(micros * _NS_PER_US // unit.nanos)


def epoch_to_datetime(value: int, unit: TimeUnit) -> datetime:
    """
    Convert an epoch integer to a naive datetime, flooring to microseconds.

    Raises
    ------
    OutOfBoundsDatetime
        If the instant is outside the years supported by ``datetime``.
    """
    micros = value * unit.nanos // _NS_PER_US
    try:
        return EPOCH + timedelta(microseconds=micros)
    except OverflowError as err:
        raise OutOfBoundsDatetime(
            f"{value} ({unit.value}) cannot be represented as a datetime"
        ) from err


def sub_microsecond_remainder(value: int, unit: TimeUnit) -> int:
    """
    The part of `value` lost by `epoch_to_datetime`.

    Only nanosecond values carry precision below one microsecond.
    """
    if unit is TimeUnit.NANOSECONDS:
        return value % _NS_PER_US
    return 0


def time_to_nanos(t: time) -> int:
    # nanoseconds since midnight
    seconds = t.hour * 3_600 + t.minute * 60 + t.second
    return seconds * _NS_PER_SECOND + t.microsecond * _NS_PER_US


def nanos_to_time(value: int) -> time:
    if not 0 <= value < NS_PER_DAY:
        raise ValueError(f"{value} is not a valid time of day in nanoseconds")
    seconds, nanos = divmod(value, _NS_PER_SECOND)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return time(hour, minute, second, nanos // _NS_PER_US)
