from datetime import date, datetime, timezone

from dateutil.parser import ParserError, parse as du_parse
import numpy as np

from dtrange._typing import DatetimeConvertibleTypes, Resolver, TimezoneId
from dtrange.core.dtypes.dtypes import TimeUnit
from dtrange.errors import OutOfBoundsDatetime
from dtrange.tseries.conversion import datetime_to_epoch, in_nanoseconds_window
from dtrange.tseries.timezones import get_resolver

_fine_datetime64_units = {"ns", "ps", "fs", "as"}


def to_datetime(arg: DatetimeConvertibleTypes) -> datetime:
    """
    Convert a scalar endpoint to a ``datetime``.

    Parameters
    ----------
    arg : datetime, date, numpy.datetime64 or str
        Strings are parsed with ``dateutil.parser.parse``.

    Returns
    -------
    datetime
        Naive unless `arg` carries a time zone.
    """
    if isinstance(arg, datetime):
        return arg
    elif isinstance(arg, date):
        return datetime(arg.year, arg.month, arg.day)
    elif isinstance(arg, np.datetime64):
        if np.isnat(arg):
            raise ValueError("Neither `start` nor `end` can be NaT")
        result = arg.astype("M8[us]").item()
        if not isinstance(result, datetime):
            raise OutOfBoundsDatetime(f"{arg} cannot be represented as a datetime")
        return result
    elif isinstance(arg, str):
        try:
            return du_parse(arg)
        except (ParserError, OverflowError) as err:
            msg = f"could not convert string to datetime: {repr(arg)}"
            raise ValueError(msg) from err
    raise TypeError(
        f"Cannot convert {type(arg).__name__} to a datetime, expected datetime, "
        "date, numpy.datetime64 or str"
    )


def to_epoch(
    arg: DatetimeConvertibleTypes,
    unit: TimeUnit,
    tz: TimezoneId = None,
    resolver: Resolver = None,
) -> int:
    """
    Convert a scalar endpoint to an epoch integer in `unit`.

    Naive endpoints are read as wall time in `tz` when given, otherwise as
    UTC. Aware endpoints denote an absolute instant and require `tz`.

    Raises
    ------
    OutOfBoundsDatetime
        If the result does not fit an int64 in `unit`. In nanoseconds, years
        outside 1386 to 2554 are rejected before converting.
    TimezoneResolutionError
        If a naive endpoint is ambiguous or non-existent in `tz`.
    ValueError
        If `arg` is tz-aware and `tz` is None.
    """
    if (
        isinstance(arg, np.datetime64)
        and not np.isnat(arg)
        and np.datetime_data(arg.dtype)[0] in _fine_datetime64_units
        and tz is None
    ):
        # keep sub-microsecond precision
        nanos = int(arg.astype("M8[ns]").astype(np.int64))
        return nanos // unit.nanos

    dt = to_datetime(arg)

    if dt.tzinfo is not None:
        if tz is None:
            raise ValueError(
                f"Endpoint {dt} is tz-aware, pass time_zone to generate a "
                "tz-aware range"
            )
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
        aware = True
    else:
        aware = False

    if unit is TimeUnit.NANOSECONDS and not in_nanoseconds_window(dt):
        raise OutOfBoundsDatetime(
            f"Out of bounds nanosecond timestamp: {dt}, use time_unit='us' or 'ms'"
        )

    if tz is None or aware:
        return datetime_to_epoch(dt, unit)

    if resolver is None:
        resolver = get_resolver()
    return resolver.localize(dt, unit, tz)
