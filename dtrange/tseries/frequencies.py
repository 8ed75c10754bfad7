"""
Parsing of interval specifications into Duration objects.
"""
from datetime import timedelta
import re

from dateutil.relativedelta import relativedelta
import numpy as np

from dtrange._typing import IntervalConvertibleTypes
from dtrange.tseries.offsets import Duration

_ONE_MICRO = 1000
_ONE_MILLI = _ONE_MICRO * 1000
_ONE_SECOND = _ONE_MILLI * 1000
_ONE_MINUTE = 60 * _ONE_SECOND
_ONE_HOUR = 60 * _ONE_MINUTE
_ONE_DAY = 24 * _ONE_HOUR

# suffix -> (Duration field, multiplier)
_unit_map = {
    "ns": ("nanoseconds", 1),
    "us": ("nanoseconds", _ONE_MICRO),
    "ms": ("nanoseconds", _ONE_MILLI),
    "s": ("nanoseconds", _ONE_SECOND),
    "m": ("nanoseconds", _ONE_MINUTE),
    "h": ("nanoseconds", _ONE_HOUR),
    "d": ("days", 1),
    "w": ("weeks", 1),
    "mo": ("months", 1),
    "q": ("months", 3),
    "y": ("months", 12),
}

# two-letter suffixes must be tried before their one-letter prefixes
_component_pattern = re.compile(r"(\d+)(ns|us|ms|mo|s|m|h|d|w|q|y)")
_duration_pattern = re.compile(r"-?(?:\d+(?:ns|us|ms|mo|s|m|h|d|w|q|y))+")

_timedelta64_months = {"Y": 12, "M": 1}


def _parse_string(freq: str) -> Duration:
    text = freq.strip().lower()
    if not _duration_pattern.fullmatch(text):
        raise ValueError(f"Invalid interval specification: {repr(freq)}")

    components = {"weeks": 0, "months": 0, "days": 0, "nanoseconds": 0}
    for count, suffix in _component_pattern.findall(text):
        field, multiplier = _unit_map[suffix]
        components[field] += int(count) * multiplier
    return Duration(negative=text.startswith("-"), **components)


def _from_nanos(nanos: int) -> Duration:
    return Duration(nanoseconds=abs(nanos), negative=nanos < 0)


def _from_timedelta64(freq: np.timedelta64) -> Duration:
    if np.isnat(freq):
        raise ValueError("Cannot convert NaT to an interval")
    unit, count = np.datetime_data(freq.dtype)
    value = int(freq.astype(np.int64))
    if unit in _timedelta64_months:
        months = value * count * _timedelta64_months[unit]
        return Duration(months=abs(months), negative=months < 0)
    return _from_nanos(int(freq.astype("m8[ns]").astype(np.int64)))


def _from_relativedelta(freq: relativedelta) -> Duration:
    absolute = [
        freq.year,
        freq.month,
        freq.day,
        freq.weekday,
        freq.hour,
        freq.minute,
        freq.second,
        freq.microsecond,
    ]
    if any(x is not None for x in absolute):
        raise ValueError(
            "relativedelta with absolute fields cannot be used as an interval"
        )

    freq = freq.normalized()
    months = freq.years * 12 + freq.months
    # relativedelta folds weeks into days
    days = freq.days
    nanos = (
        freq.hours * _ONE_HOUR
        + freq.minutes * _ONE_MINUTE
        + freq.seconds * _ONE_SECOND
        + freq.microseconds * _ONE_MICRO
    )
    signs = {x > 0 for x in (months, days, nanos) if x != 0}
    if len(signs) > 1:
        raise ValueError(
            f"relativedelta with mixed signs cannot be used as an interval: {freq}"
        )
    return Duration(
        months=abs(months),
        days=abs(days),
        nanoseconds=abs(nanos),
        negative=signs == {False},
    )


def to_duration(freq: IntervalConvertibleTypes) -> Duration:
    """
    Return a Duration object from a string or an interval-like object.

    Parameters
    ----------
    freq : str, Duration, datetime.timedelta, numpy.timedelta64 or relativedelta
        A string is made of an optional leading ``-`` followed by one or more
        ``<integer><unit>`` pairs, with units:

        - ``ns``, ``us``, ``ms``, ``s``, ``m``, ``h``: fixed durations
        - ``d``: calendar day
        - ``w``: calendar week
        - ``mo``: calendar month
        - ``q``: calendar quarter (3 months)
        - ``y``: calendar year (12 months)

        ``timedelta`` and ``timedelta64`` values are fixed durations, except
        ``timedelta64`` in years or months.

    Returns
    -------
    Duration

    Raises
    ------
    ValueError
        If `freq` cannot be interpreted as an interval.

    Examples
    --------
    >>> to_duration("1mo2d")
    Duration('1mo2d')
    >>> to_duration("90m")
    Duration('1h30m')
    >>> to_duration(timedelta(days=-1))
    Duration('-24h')
    """
    if isinstance(freq, Duration):
        return freq

    if isinstance(freq, str):
        return _parse_string(freq)
    elif isinstance(freq, timedelta):
        micros = (freq.days * 86_400 + freq.seconds) * 1_000_000 + freq.microseconds
        return _from_nanos(micros * _ONE_MICRO)
    elif isinstance(freq, np.timedelta64):
        return _from_timedelta64(freq)
    elif isinstance(freq, relativedelta):
        return _from_relativedelta(freq)

    raise ValueError(f"Invalid interval: {repr(freq)}")
