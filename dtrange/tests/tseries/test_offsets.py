"""
Tests of Duration and apply_offset
"""
from datetime import datetime, timedelta

import numpy as np
import pytest

from dtrange import TimeUnit
import dtrange._testing as tm
from dtrange.errors import OutOfBoundsDatetime, TimezoneResolutionError
from dtrange.tseries.conversion import datetime_to_epoch, epoch_to_datetime
from dtrange.tseries.offsets import Duration, apply_offset

NS = TimeUnit.NANOSECONDS
US = TimeUnit.MICROSECONDS
MS = TimeUnit.MILLISECONDS


def epoch(*args, unit=NS):
    return datetime_to_epoch(datetime(*args), unit)


class TestDuration:
    def test_components(self):
        d = Duration(weeks=1, months=2, days=3, nanoseconds=4)
        assert (d.weeks, d.months, d.days, d.nanoseconds) == (1, 2, 3, 4)
        assert not d.negative
        assert not d.is_fixed
        assert not d.is_zero()

    def test_fixed(self):
        d = Duration(nanoseconds=5)
        assert d.is_fixed
        assert Duration().is_zero()
        assert Duration(negative=True).is_zero()

    @pytest.mark.parametrize("field", ["weeks", "months", "days", "nanoseconds"])
    def test_negative_component(self, field):
        with pytest.raises(ValueError, match="must be non-negative"):
            Duration(**{field: -1})

    @pytest.mark.parametrize("value", [1.5, "1", True])
    def test_non_integer_component(self, value):
        with pytest.raises(TypeError, match="must be an integer"):
            Duration(days=value)

    def test_duration_in(self):
        d = Duration(months=1, weeks=1, days=1, nanoseconds=1_500_000)
        day = 86_400 * 10 ** 9
        assert d.duration_ns() == 36 * day + 1_500_000
        assert d.duration_us() == 36 * day // 1_000 + 1_500
        assert d.duration_ms() == 36 * day // 1_000_000 + 1
        assert d.duration_in(MS) == d.duration_ms()

    def test_fixed_in_truncates(self):
        d = Duration(nanoseconds=1_500)
        assert d.fixed_in(NS) == 1_500
        assert d.fixed_in(US) == 1
        assert d.fixed_in(MS) == 0

    def test_mul(self):
        d = Duration(months=1, days=2, nanoseconds=3)
        assert d * 3 == Duration(months=3, days=6, nanoseconds=9)
        assert 3 * d == d * 3
        assert d * -1 == -d
        assert (d * -1).negative
        assert not (-d * -2).negative
        assert (d * 0).is_zero()

    def test_mul_invalid(self):
        with pytest.raises(TypeError):
            Duration(days=1) * 1.5

    def test_eq(self):
        assert Duration(months=1, days=2) == "1mo2d"
        assert Duration(months=12) == "1y"
        assert Duration(days=1) != "24h"
        assert Duration(days=1) != "not an interval"
        assert Duration() == Duration(negative=True)
        assert hash(Duration()) == hash(Duration(negative=True))
        assert hash(Duration(days=1)) == hash(Duration.parse("1d"))

    @pytest.mark.parametrize(
        "duration, expected",
        [
            (Duration(months=1, days=2), "1mo2d"),
            (Duration(weeks=2), "2w"),
            (Duration(nanoseconds=5_400 * 10 ** 9), "1h30m"),
            (Duration(nanoseconds=1_001_001), "1ms1us1ns"),
            (Duration(days=1, negative=True), "-1d"),
            (Duration(), "0ns"),
        ],
    )
    def test_freqstr(self, duration, expected):
        assert duration.freqstr == expected
        assert str(duration) == expected
        assert repr(duration) == f"Duration('{expected}')"


class TestApplyOffset:
    def test_fixed_scaled_then_truncated(self):
        # the interval is scaled before conversion to the unit
        interval = Duration(nanoseconds=1_500)
        assert apply_offset(0, interval, 2, US) == 3
        assert apply_offset(0, interval, 1, US) == 1

    @pytest.mark.parametrize(
        "step, expected",
        [
            (0, datetime(2021, 1, 31)),
            (1, datetime(2021, 2, 28)),
            (2, datetime(2021, 3, 31)),
            (3, datetime(2021, 4, 30)),
            (13, datetime(2022, 2, 28)),
            (-2, datetime(2020, 11, 30)),
        ],
    )
    def test_month_end(self, step, expected, unit):
        start = epoch(2021, 1, 31, unit=unit)
        result = apply_offset(start, Duration(months=1), step, unit)
        assert epoch_to_datetime(result, unit) == expected

    def test_leap_year(self):
        start = epoch(2020, 2, 29)
        assert epoch_to_datetime(
            apply_offset(start, Duration(months=12), 1, NS), NS
        ) == datetime(2021, 2, 28)
        assert epoch_to_datetime(
            apply_offset(start, Duration(months=12), 4, NS), NS
        ) == datetime(2024, 2, 29)

    def test_months_before_days(self):
        # Jan 31 + 1 month is Feb 28, then + 1 day is Mar 1
        start = epoch(2021, 1, 31)
        result = apply_offset(start, Duration(months=1, days=1), 1, NS)
        assert epoch_to_datetime(result, NS) == datetime(2021, 3, 1)

    def test_weeks_and_fixed(self):
        start = epoch(2021, 1, 1)
        interval = Duration(weeks=1, days=1, nanoseconds=3_600 * 10 ** 9)
        result = apply_offset(start, interval, 2, NS)
        assert epoch_to_datetime(result, NS) == datetime(2021, 1, 17, 2)

    def test_negative_interval(self):
        start = epoch(2021, 3, 31)
        result = apply_offset(start, -Duration(months=1), 1, NS)
        assert epoch_to_datetime(result, NS) == datetime(2021, 2, 28)

    def test_keeps_sub_microsecond(self):
        start = epoch(2021, 1, 31) + 789
        result = apply_offset(start, Duration(months=1), 1, NS)
        assert result == epoch(2021, 2, 28) + 789

    def test_zero_step(self):
        assert apply_offset(123, Duration(months=5, nanoseconds=7), 0, NS) == 123

    def test_overflow_ns(self):
        start = epoch(2262, 1, 1)
        with pytest.raises(OutOfBoundsDatetime, match="out of bounds"):
            apply_offset(start, Duration(months=12), 1, NS)

    def test_overflow_fixed(self):
        start = int(np.iinfo(np.int64).max) - 10
        with pytest.raises(OutOfBoundsDatetime, match="out of bounds for int64"):
            apply_offset(start, Duration(nanoseconds=11), 1, NS)

    def test_overflow_calendar(self):
        start = epoch(9999, 12, 1, unit=MS)
        with pytest.raises(OutOfBoundsDatetime, match="out of bounds"):
            apply_offset(start, Duration(months=1), 1, MS)

    def test_time_zone(self):
        resolver = tm.FixedOffsetResolver({"Plus10": timedelta(hours=10)})
        # 2021-01-31 14:00 UTC is 2021-02-01 00:00 local
        start = epoch(2021, 1, 31, 14)
        result = apply_offset(start, Duration(months=1), 1, NS, "Plus10", resolver)
        assert epoch_to_datetime(result, NS) == datetime(2021, 2, 28, 14)

        # without a time zone the same instant is Jan 31 UTC and clamps
        result = apply_offset(start, Duration(months=1), 1, NS)
        assert epoch_to_datetime(result, NS) == datetime(2021, 2, 28, 14)

        # Jan 31 local clamps to Feb 28 local
        start = epoch(2021, 1, 30, 14)
        result = apply_offset(start, Duration(months=1), 1, NS, "Plus10", resolver)
        assert epoch_to_datetime(result, NS) == datetime(2021, 2, 27, 14)

    def test_dst_day(self, step_dst_resolver):
        tz = step_dst_resolver.name
        # midnight local in winter
        start = epoch(2021, 3, 27) - 3_600 * 10 ** 9
        result = apply_offset(start, Duration(days=1), 1, NS, tz, step_dst_resolver)
        assert result - start == 24 * 3_600 * 10 ** 9
        result = apply_offset(start, Duration(days=2), 1, NS, tz, step_dst_resolver)
        assert result - start == 47 * 3_600 * 10 ** 9

    def test_fixed_ignores_dst(self, step_dst_resolver):
        tz = step_dst_resolver.name
        start = epoch(2021, 3, 27, 23)
        interval = Duration(nanoseconds=24 * 3_600 * 10 ** 9)
        result = apply_offset(start, interval, 1, NS, tz, step_dst_resolver)
        assert result - start == 24 * 3_600 * 10 ** 9

    def test_unknown_time_zone(self):
        resolver = tm.FixedOffsetResolver({})
        with pytest.raises(TimezoneResolutionError, match="unknown time zone"):
            apply_offset(0, Duration(days=1), 1, NS, "Nowhere", resolver)

    def test_default_resolver(self):
        start = epoch(2021, 3, 26, 23)
        result = apply_offset(start, Duration(days=3), 1, NS, "Europe/Amsterdam")
        assert result - start == 71 * 3_600 * 10 ** 9
