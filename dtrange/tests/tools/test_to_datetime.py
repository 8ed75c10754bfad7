from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from dtrange import TimeUnit
import dtrange._testing as tm
from dtrange.core.tools.datetimes import to_datetime, to_epoch
from dtrange.errors import OutOfBoundsDatetime, TimezoneResolutionError

NS = TimeUnit.NANOSECONDS
US = TimeUnit.MICROSECONDS
MS = TimeUnit.MILLISECONDS


class TestToDatetime:
    @pytest.mark.parametrize(
        "arg",
        [
            datetime(2021, 3, 1, 12),
            np.datetime64("2021-03-01T12:00"),
            np.datetime64("2021-03-01T12:00:00.000000000"),
            "2021-03-01 12:00",
            "2021-03-01T12:00:00",
            "March 1 2021 12:00",
        ],
    )
    def test_scalars(self, arg):
        assert to_datetime(arg) == datetime(2021, 3, 1, 12)

    def test_date(self):
        assert to_datetime(date(2021, 3, 1)) == datetime(2021, 3, 1)

    def test_aware_string(self):
        result = to_datetime("2021-03-01 12:00+02:00")
        assert result.utcoffset() == timedelta(hours=2)

    def test_nat(self):
        with pytest.raises(ValueError, match="NaT"):
            to_datetime(np.datetime64("NaT"))

    def test_out_of_datetime_bounds(self):
        with pytest.raises(OutOfBoundsDatetime, match="cannot be represented"):
            to_datetime(np.datetime64(10 ** 7, "D"))

    def test_unparsable(self):
        with pytest.raises(ValueError, match="could not convert string"):
            to_datetime("not a date")

    def test_invalid_type(self):
        with pytest.raises(TypeError, match="Cannot convert float"):
            to_datetime(1.5)


class TestToEpoch:
    @pytest.mark.parametrize(
        "unit, expected",
        [(NS, 86_400 * 10 ** 9), (US, 86_400 * 10 ** 6), (MS, 86_400_000)],
    )
    def test_units(self, unit, expected):
        assert to_epoch("1970-01-02", unit) == expected

    @pytest.mark.parametrize(
        "arg, msg",
        [
            # far off years are rejected up front
            ("1300-01-01", "Out of bounds nanosecond timestamp"),
            ("2600-01-01", "Out of bounds nanosecond timestamp"),
            # close ones only fail the int64 check
            ("1600-01-01", "out of bounds for int64"),
            ("2300-01-01", "out of bounds for int64"),
        ],
    )
    def test_out_of_nanosecond_bounds(self, arg, msg):
        with pytest.raises(OutOfBoundsDatetime, match=msg):
            to_epoch(arg, NS)
        assert to_epoch(arg, US) // 1_000 == to_epoch(arg, MS)

    def test_pre_epoch(self):
        assert to_epoch(datetime(1969, 12, 31, 23, 59, 59, 999999), MS) == -1

    def test_fine_datetime64(self):
        arg = np.datetime64("2021-01-01T00:00:00.123456789")
        assert to_epoch(arg, NS) % 10 ** 9 == 123_456_789
        assert to_epoch(arg, US) % 10 ** 6 == 123_456

    def test_nanosecond_window(self):
        msg = "Out of bounds nanosecond timestamp"
        with pytest.raises(OutOfBoundsDatetime, match=msg):
            to_epoch("1385-12-31", NS)
        with pytest.raises(OutOfBoundsDatetime, match=msg):
            to_epoch(datetime(2555, 1, 1), NS)
        assert to_epoch("1385-12-31", US) < 0

    def test_wall_time(self):
        resolver = tm.FixedOffsetResolver({"Minus5": timedelta(hours=-5)})
        result = to_epoch("2021-01-01", NS, "Minus5", resolver)
        assert result == to_epoch("2021-01-01 05:00", NS)

    def test_aware(self):
        arg = datetime(2021, 1, 1, 5, tzinfo=timezone(timedelta(hours=5)))
        resolver = tm.FixedOffsetResolver({"Minus5": timedelta(hours=-5)})
        # an aware endpoint is an absolute instant
        assert to_epoch(arg, NS, "Minus5", resolver) == to_epoch("2021-01-01", NS)

    def test_aware_without_time_zone(self):
        arg = datetime(2021, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(ValueError, match="is tz-aware"):
            to_epoch(arg, NS)

    def test_default_resolver(self):
        result = to_epoch("2021-07-01", NS, "Europe/Amsterdam")
        assert result == to_epoch("2021-06-30 22:00", NS)

    def test_nonexistent(self):
        with pytest.raises(TimezoneResolutionError, match="non-existent"):
            to_epoch("2021-03-14 02:30", NS, "US/Eastern")
