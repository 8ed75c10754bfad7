from datetime import datetime
from typing import Optional, Union

import numpy as np

from dtrange._typing import (
    ClosedLike,
    DatetimeConvertibleTypes,
    IntervalConvertibleTypes,
    Resolver,
    TimeUnitLike,
    TimezoneId,
)
from dtrange.core.arrays._ranges import generate_range
from dtrange.core.arrays.datetimelike import DatetimeLikeArrayMixin
from dtrange.core.dtypes.dtypes import (
    ClosedWindow,
    DatetimeDtype,
    IsSorted,
    TimeUnit,
)
from dtrange.core.tools.datetimes import to_epoch
from dtrange.tseries.conversion import epoch_to_datetime
from dtrange.tseries.frequencies import to_duration
from dtrange.tseries.offsets import Duration
from dtrange.tseries.timezones import get_resolver, localize_value
from dtrange.util._validators import validate_endpoints, validate_time_unit


class DatetimeArray(DatetimeLikeArrayMixin):
    """
    Column of datetime values stored as epoch integers.

    Parameters
    ----------
    values : array-like of int
        Epoch integers in the unit of `dtype`.
    dtype : DatetimeDtype or str, default "datetime64[ns]"
    name : str, default ""
    is_sorted : IsSorted, default IsSorted.NOT
    resolver : TimezoneResolver, optional
        Used to box tz-aware values; defaults to the configured backend.

    Attributes
    ----------
    None

    Methods
    -------
    None
    """

    def __init__(
        self,
        values,
        dtype: Union[DatetimeDtype, str] = "datetime64[ns]",
        name: str = "",
        is_sorted: IsSorted = IsSorted.NOT,
        resolver: Optional[Resolver] = None,
    ):
        if isinstance(dtype, str):
            dtype = DatetimeDtype.construct_from_string(dtype)
        if not isinstance(dtype, DatetimeDtype):
            raise TypeError(f"dtype must be a DatetimeDtype, got {dtype!r}")
        super().__init__(values, name=name, is_sorted=is_sorted)
        self._dtype = dtype
        self._resolver = resolver

    def _box_func(self, x: int) -> datetime:
        if self.tz is None:
            return epoch_to_datetime(x, self.unit)
        resolver = self._resolver or get_resolver()
        return localize_value(x, self.unit, self.tz, resolver)

    def _with_values(self, values: np.ndarray, is_sorted: IsSorted):
        return type(self)(
            values,
            dtype=self._dtype,
            name=self._name,
            is_sorted=is_sorted,
            resolver=self._resolver,
        )

    @property
    def dtype(self) -> DatetimeDtype:
        """
        The dtype for the DatetimeArray.

        Returns
        -------
        DatetimeDtype
            Carrying the time unit and, for tz-aware values, the time zone.
        """
        return self._dtype

    @property
    def unit(self) -> TimeUnit:
        return self._dtype.unit

    @property
    def tz(self) -> Optional[str]:
        """
        Return the time zone identifier, or None for tz-naive values.
        """
        return self._dtype.tz

    def to_numpy(self) -> np.ndarray:
        """
        Return the values as ``datetime64`` of the array's unit, in UTC.
        """
        return self._values.view(self._dtype.base).copy()

    def to_pydatetime(self) -> np.ndarray:
        """
        Return an ndarray of datetime.datetime objects.
        """
        return np.array(list(self), dtype=object)


def datetime_range_impl(
    name: str,
    start: int,
    end: int,
    interval: Duration,
    closed: ClosedWindow,
    tu: TimeUnit,
    tz: TimezoneId = None,
    resolver: Optional[Resolver] = None,
) -> DatetimeArray:
    """
    Build a DatetimeArray from epoch integer endpoints.

    The result is flagged as sorted ascending without being checked.
    """
    values = generate_range(start, end, interval, closed, tu, tz, resolver)
    out = DatetimeArray(
        values, dtype=DatetimeDtype(tu, tz), name=name, resolver=resolver
    )
    out.set_sorted_flag(IsSorted.ASCENDING)
    return out


def date_range(
    start: DatetimeConvertibleTypes,
    end: DatetimeConvertibleTypes,
    interval: IntervalConvertibleTypes = "1d",
    closed: Optional[ClosedLike] = None,
    time_unit: Optional[TimeUnitLike] = None,
    time_zone: TimezoneId = None,
    name: str = "",
    resolver: Optional[Resolver] = None,
) -> DatetimeArray:
    """
    Return a fixed frequency DatetimeArray.

    Parameters
    ----------
    start : datetime, date, numpy.datetime64 or str
        Left bound for generating dates.
    end : datetime, date, numpy.datetime64 or str
        Right bound for generating dates.
    interval : str, Duration, timedelta, timedelta64 or relativedelta, default "1d"
        Space between consecutive values, e.g. ``"1mo"`` or ``"6h30m"``.
        See :func:`dtrange.tseries.frequencies.to_duration`.
    closed : {"both", "left", "right", "none"}, optional
        Which bounds to include, defaults to the ``range.closed`` option.
    time_unit : {"ns", "us", "ms"}, optional
        Defaults to the ``range.time_unit`` option.
    time_zone : str, optional
        Time zone of the result. Naive bounds are interpreted as wall time in
        it; tz-aware bounds require it.
    name : str, default ""
        Name of the resulting column.
    resolver : TimezoneResolver, optional
        Defaults to the resolver selected by the ``timezone.backend`` option.

    Returns
    -------
    DatetimeArray
        Flagged as sorted ascending.

    See Also
    --------
    time_range : Return a fixed frequency TimeArray.

    Notes
    -----
    Calendar intervals (days, weeks, months) are applied in local time, so
    a range of days across a daylight-saving transition keeps the wall time
    and is not evenly spaced in absolute time. Month steps that land past the
    end of a month are clamped to its last day.

    Examples
    --------
    >>> arr = dtrange.date_range("2021-01-31", "2021-04-30", "1mo")
    >>> [str(x.date()) for x in arr]
    ['2021-01-31', '2021-02-28', '2021-03-31', '2021-04-30']
    """
    interval = to_duration(interval)
    closed = validate_endpoints(closed)
    tu = validate_time_unit(time_unit)
    if time_zone is not None and resolver is None:
        resolver = get_resolver()

    start = to_epoch(start, tu, time_zone, resolver)
    end = to_epoch(end, tu, time_zone, resolver)
    return datetime_range_impl(
        name, start, end, interval, closed, tu, time_zone, resolver
    )
