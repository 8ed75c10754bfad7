from datetime import timedelta

from dateutil.relativedelta import relativedelta
import numpy as np
import pytest

from dtrange.tseries.frequencies import to_duration
from dtrange.tseries.offsets import Duration

SECOND = 10 ** 9
HOUR = 3_600 * SECOND


@pytest.mark.parametrize(
    "freq, expected",
    [
        ("1ns", Duration(nanoseconds=1)),
        ("250us", Duration(nanoseconds=250_000)),
        ("5ms", Duration(nanoseconds=5_000_000)),
        ("30s", Duration(nanoseconds=30 * SECOND)),
        ("90m", Duration(nanoseconds=90 * 60 * SECOND)),
        ("6h", Duration(nanoseconds=6 * HOUR)),
        ("1d", Duration(days=1)),
        ("2w", Duration(weeks=2)),
        ("1mo", Duration(months=1)),
        ("1q", Duration(months=3)),
        ("2y", Duration(months=24)),
        ("1y2mo3w4d5h", Duration(months=14, weeks=3, days=4, nanoseconds=5 * HOUR)),
        ("1h30m", Duration(nanoseconds=HOUR + 30 * 60 * SECOND)),
        ("1m1ms", Duration(nanoseconds=60 * SECOND + 1_000_000)),
        ("1d1d", Duration(days=2)),
        ("-3h", Duration(nanoseconds=3 * HOUR, negative=True)),
        ("-1mo", Duration(months=1, negative=True)),
        ("0d", Duration()),
        (" 1D ", Duration(days=1)),
    ],
)
def test_to_duration_string(freq, expected):
    assert to_duration(freq) == expected


@pytest.mark.parametrize(
    "freq",
    ["", "-", "d", "1", "1.5h", "1 h", "1x", "h1", "1h-1m", "--1h", "1min"],
)
def test_to_duration_invalid_string(freq):
    with pytest.raises(ValueError, match="Invalid interval specification"):
        to_duration(freq)


@pytest.mark.parametrize(
    "freq, expected",
    [
        (timedelta(hours=1), Duration(nanoseconds=HOUR)),
        (timedelta(days=1), Duration(nanoseconds=24 * HOUR)),
        (timedelta(microseconds=3), Duration(nanoseconds=3_000)),
        (timedelta(days=-1), Duration(nanoseconds=24 * HOUR, negative=True)),
        (timedelta(0), Duration()),
    ],
)
def test_to_duration_timedelta(freq, expected):
    # timedeltas are fixed, a day is always 24 hours
    result = to_duration(freq)
    assert result == expected
    assert result.is_fixed


@pytest.mark.parametrize(
    "freq, expected",
    [
        (np.timedelta64(5, "ns"), Duration(nanoseconds=5)),
        (np.timedelta64(2, "h"), Duration(nanoseconds=2 * HOUR)),
        (np.timedelta64(1, "D"), Duration(nanoseconds=24 * HOUR)),
        (np.timedelta64(-1, "s"), Duration(nanoseconds=SECOND, negative=True)),
        (np.timedelta64(3, "M"), Duration(months=3)),
        (np.timedelta64(1, "Y"), Duration(months=12)),
    ],
)
def test_to_duration_timedelta64(freq, expected):
    assert to_duration(freq) == expected


def test_to_duration_timedelta64_nat():
    with pytest.raises(ValueError, match="NaT"):
        to_duration(np.timedelta64("NaT"))


@pytest.mark.parametrize(
    "freq, expected",
    [
        (relativedelta(months=1), Duration(months=1)),
        (relativedelta(years=1, months=2), Duration(months=14)),
        (relativedelta(weeks=2), Duration(days=14)),
        (relativedelta(days=1, hours=2), Duration(days=1, nanoseconds=2 * HOUR)),
        (relativedelta(minutes=90), Duration(nanoseconds=90 * 60 * SECOND)),
        (relativedelta(months=-1), Duration(months=1, negative=True)),
    ],
)
def test_to_duration_relativedelta(freq, expected):
    assert to_duration(freq) == expected


@pytest.mark.parametrize(
    "freq, msg",
    [
        (relativedelta(day=31), "absolute fields"),
        (relativedelta(month=1, months=1), "absolute fields"),
        (relativedelta(months=1, days=-1), "mixed signs"),
    ],
)
def test_to_duration_relativedelta_invalid(freq, msg):
    with pytest.raises(ValueError, match=msg):
        to_duration(freq)


def test_to_duration_passthrough():
    d = Duration(days=1)
    assert to_duration(d) is d


@pytest.mark.parametrize("freq", [1, 1.5, None, [1, "d"]])
def test_to_duration_invalid_type(freq):
    with pytest.raises(ValueError, match="Invalid interval"):
        to_duration(freq)
