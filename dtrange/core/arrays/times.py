from datetime import time
from typing import Optional

import numpy as np

from dtrange._typing import (
    ClosedLike,
    IntervalConvertibleTypes,
    TimeConvertibleTypes,
)
from dtrange.core.arrays._ranges import generate_range
from dtrange.core.arrays.datetimelike import DatetimeLikeArrayMixin
from dtrange.core.dtypes.dtypes import ClosedWindow, IsSorted, TimeUnit
from dtrange.core.tools.times import to_time
from dtrange.errors import InvalidIntervalError
from dtrange.tseries.conversion import NS_PER_DAY, nanos_to_time, time_to_nanos
from dtrange.tseries.frequencies import to_duration
from dtrange.tseries.offsets import Duration
from dtrange.util._validators import validate_endpoints

_TIME_DTYPE = np.dtype("m8[ns]")


class TimeArray(DatetimeLikeArrayMixin):
    """
    Column of times of day stored as nanoseconds since midnight.
    """

    def _box_func(self, x: int) -> time:
        return nanos_to_time(x)

    def _with_values(self, values: np.ndarray, is_sorted: IsSorted):
        return type(self)(values, name=self._name, is_sorted=is_sorted)

    @property
    def dtype(self) -> np.dtype:
        return _TIME_DTYPE

    @property
    def unit(self) -> TimeUnit:
        return TimeUnit.NANOSECONDS

    @property
    def tz(self) -> None:
        return None

    def to_numpy(self) -> np.ndarray:
        """
        Return the values as ``timedelta64[ns]`` since midnight.
        """
        return self._values.view(_TIME_DTYPE).copy()


def time_range_impl(
    name: str,
    start: int,
    end: int,
    interval: Duration,
    closed: ClosedWindow,
) -> TimeArray:
    values = generate_range(start, end, interval, closed, TimeUnit.NANOSECONDS)
    out = TimeArray(values, name=name)
    out.set_sorted_flag(IsSorted.ASCENDING)
    return out


def time_range(
    start: Optional[TimeConvertibleTypes] = None,
    end: Optional[TimeConvertibleTypes] = None,
    interval: IntervalConvertibleTypes = "1h",
    closed: Optional[ClosedLike] = None,
    name: str = "",
) -> TimeArray:
    """
    Return a fixed frequency TimeArray.

    Parameters
    ----------
    start : time or str, optional
        Left bound, midnight when omitted.
    end : time or str, optional
        Right bound, the last nanosecond of the day when omitted.
    interval : str, Duration, timedelta or numpy.timedelta64, default "1h"
        Must be a fixed duration; days, weeks and months are rejected.
    closed : {"both", "left", "right", "none"}, optional
        Which bounds to include, defaults to the ``range.closed`` option.
    name : str, default ""

    Returns
    -------
    TimeArray
        Flagged as sorted ascending.

    Raises
    ------
    InvalidIntervalError
        If `interval` is not a positive fixed duration.

    Examples
    --------
    >>> [str(t) for t in dtrange.time_range("09:00", "10:00", "20m")]
    ['09:00:00', '09:20:00', '09:40:00', '10:00:00']
    """
    interval = to_duration(interval)
    if not interval.is_fixed:
        raise InvalidIntervalError(
            f"invalid interval {interval} for a time range, "
            "days, weeks and months are not supported"
        )
    closed = validate_endpoints(closed)

    start = 0 if start is None else time_to_nanos(to_time(start))
    end = NS_PER_DAY - 1 if end is None else time_to_nanos(to_time(end))
    return time_range_impl(name, start, end, interval, closed)
