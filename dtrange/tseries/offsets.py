"""
Interval values and their calendar-aware application to epoch integers.
"""
from typing import Optional

from dateutil.relativedelta import relativedelta

from dtrange._typing import Resolver, TimezoneId
from dtrange.core.dtypes.dtypes import TimeUnit
from dtrange.errors import OutOfBoundsDatetime
from dtrange.tseries.conversion import (
    check_int64_bounds,
    datetime_to_epoch,
    epoch_to_datetime,
    sub_microsecond_remainder,
)
from dtrange.tseries.timezones import get_resolver

_NS_PER_DAY = 86_400 * 1_000_000_000
_NS_PER_WEEK = 7 * _NS_PER_DAY

# (suffix, nanoseconds) used to render the fixed component, largest first
_FIXED_PARTS = [
    ("h", 3_600 * 1_000_000_000),
    ("m", 60 * 1_000_000_000),
    ("s", 1_000_000_000),
    ("ms", 1_000_000),
    ("us", 1_000),
    ("ns", 1),
]


class Duration:
    """
    An immutable interval made of calendar and fixed components.

    Weeks, months and days are calendar components: their absolute length
    depends on the date they are applied from. Nanoseconds are a fixed
    component. All components are non-negative magnitudes; the sign is
    carried by `negative`.

    Parameters
    ----------
    weeks, months, days, nanoseconds : int, default 0
    negative : bool, default False

    Examples
    --------
    >>> Duration(months=1, days=2)
    Duration('1mo2d')
    >>> Duration.parse("-3h")
    Duration('-3h')
    """

    __slots__ = ("_weeks", "_months", "_days", "_nanoseconds", "_negative")

    def __init__(
        self,
        weeks: int = 0,
        months: int = 0,
        days: int = 0,
        nanoseconds: int = 0,
        negative: bool = False,
    ):
        for name, value in [
            ("weeks", weeks),
            ("months", months),
            ("days", days),
            ("nanoseconds", nanoseconds),
        ]:
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an integer, got {type(value)}")
            if value < 0:
                raise ValueError(
                    f"{name} must be non-negative, use negative=True instead"
                )
        self._weeks = weeks
        self._months = months
        self._days = days
        self._nanoseconds = nanoseconds
        self._negative = bool(negative)

    @classmethod
    def parse(cls, freq) -> "Duration":
        """
        Build a Duration from a string such as ``"1mo2d"`` or another
        interval-like value; see ``dtrange.tseries.frequencies.to_duration``.
        """
        from dtrange.tseries.frequencies import to_duration

        return to_duration(freq)

    @property
    def weeks(self) -> int:
        return self._weeks

    @property
    def months(self) -> int:
        return self._months

    @property
    def days(self) -> int:
        return self._days

    @property
    def nanoseconds(self) -> int:
        return self._nanoseconds

    @property
    def negative(self) -> bool:
        return self._negative

    @property
    def is_fixed(self) -> bool:
        """
        Whether the duration has no calendar component.
        """
        return self._weeks == 0 and self._months == 0 and self._days == 0

    def is_zero(self) -> bool:
        return self.is_fixed and self._nanoseconds == 0

    def duration_ns(self) -> int:
        """
        Approximate length in nanoseconds, counting a month as 28 days.

        Only suitable as an estimate, e.g. to size a buffer.
        """
        return (
            self._months * 28 * _NS_PER_DAY
            + self._weeks * _NS_PER_WEEK
            + self._days * _NS_PER_DAY
            + self._nanoseconds
        )

    def duration_us(self) -> int:
        return self.duration_ns() // 1_000

    def duration_ms(self) -> int:
        return self.duration_ns() // 1_000_000

    def duration_in(self, unit: TimeUnit) -> int:
        return self.duration_ns() // unit.nanos

    def fixed_in(self, unit: TimeUnit) -> int:
        """
        The fixed component expressed in `unit`, truncated toward zero.
        """
        return self._nanoseconds // unit.nanos

    def __mul__(self, other) -> "Duration":
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        return Duration(
            weeks=self._weeks * abs(other),
            months=self._months * abs(other),
            days=self._days * abs(other),
            nanoseconds=self._nanoseconds * abs(other),
            negative=self._negative != (other < 0),
        )

    __rmul__ = __mul__

    def __neg__(self) -> "Duration":
        return Duration(
            weeks=self._weeks,
            months=self._months,
            days=self._days,
            nanoseconds=self._nanoseconds,
            negative=not self._negative,
        )

    def _key(self):
        # the sign of a zero duration is irrelevant
        return (
            self._weeks,
            self._months,
            self._days,
            self._nanoseconds,
            self._negative and not self.is_zero(),
        )

    def __eq__(self, other) -> bool:
        if isinstance(other, str):
            try:
                other = Duration.parse(other)
            except ValueError:
                return False
        if not isinstance(other, Duration):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @property
    def freqstr(self) -> str:
        parts = []
        if self._months:
            parts.append(f"{self._months}mo")
        if self._weeks:
            parts.append(f"{self._weeks}w")
        if self._days:
            parts.append(f"{self._days}d")
        remaining = self._nanoseconds
        for suffix, nanos in _FIXED_PARTS:
            count, remaining = divmod(remaining, nanos)
            if count:
                parts.append(f"{count}{suffix}")
        out = "".join(parts) or "0ns"
        if self._negative and not self.is_zero():
            out = "-" + out
        return out

    def __str__(self) -> str:
        return self.freqstr

    def __repr__(self) -> str:
        return f"Duration('{self.freqstr}')"


def _add_calendar(
    start: int,
    interval: Duration,
    unit: TimeUnit,
    tz: TimezoneId,
    resolver: Resolver,
) -> int:
    # calendar components are applied to the local wall time: months first,
    # clamping to the last day of the month, then weeks and days
    remainder = sub_microsecond_remainder(start, unit)
    if tz is None:
        local = epoch_to_datetime(start, unit)
    else:
        local = resolver.to_local(start, unit, tz)

    sign = -1 if interval.negative else 1
    shift = relativedelta(
        months=sign * interval.months,
        days=sign * (7 * interval.weeks + interval.days),
    )
    try:
        local = local + shift
    except (OverflowError, ValueError) as err:
        raise OutOfBoundsDatetime(
            f"adding {interval} to {local} is out of bounds"
        ) from err

    if tz is None:
        result = datetime_to_epoch(local, unit)
    else:
        result = resolver.localize(local, unit, tz)
    return result + remainder


def apply_offset(
    start: int,
    interval: Duration,
    step: int,
    unit: TimeUnit,
    tz: TimezoneId = None,
    resolver: Optional[Resolver] = None,
) -> int:
    """
    Compute ``start + interval * step`` as an epoch integer in `unit`.

    Parameters
    ----------
    start : int
        Epoch integer in `unit`.
    interval : Duration
    step : int
        Every component of `interval` is scaled by `step` before applying.
    unit : TimeUnit
    tz : str, optional
        Time zone whose local calendar resolves the calendar components.
        Without it, calendar components are resolved in naive (UTC) time.
    resolver : TimezoneResolver, optional
        Defaults to the resolver chosen by the ``timezone.backend`` option.

    Returns
    -------
    int

    Raises
    ------
    OutOfBoundsDatetime
        If the result does not fit the representable range of `unit`.
    TimezoneResolutionError
        If `tz` is unknown, or a step lands on an ambiguous or non-existent
        wall time.

    Notes
    -----
    Across a daylight-saving transition, consecutive calendar steps are not
    evenly spaced in absolute time: one day is always one local calendar day.
    """
    offset = interval * step
    result = start

    if not offset.is_fixed:
        if tz is not None and resolver is None:
            resolver = get_resolver()
        result = _add_calendar(result, offset, unit, tz, resolver)

    # the fixed component is absolute time, independent of the time zone
    fixed = offset.fixed_in(unit)
    if offset.negative:
        fixed = -fixed
    return check_int64_bounds(result + fixed)
