"""
Define the enumerations and dtype metadata used by temporal ranges.
"""

import enum
import re
from typing import Optional

import numpy as np

from dtrange._typing import ClosedLike, TimeUnitLike


class TimeUnit(enum.Enum):
    """
    Granularity of the epoch integers representing instants.

    Every instant consumed or produced by one range call shares one unit.
    """

    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"

    @property
    def nanos(self) -> int:
        """
        Number of nanoseconds spanned by one tick of this unit.
        """
        return _UNIT_NANOS[self]

    @property
    def per_second(self) -> int:
        return 1_000_000_000 // self.nanos

    def datetime64_dtype(self) -> np.dtype:
        return np.dtype(f"M8[{self.value}]")

    def timedelta64_dtype(self) -> np.dtype:
        return np.dtype(f"m8[{self.value}]")

    @classmethod
    def from_value(cls, value: TimeUnitLike) -> "TimeUnit":
        """
        Return the member for `value`, which may already be a member or one of
        the strings "ns", "us", "ms" (case-insensitive).

        Raises
        ------
        ValueError
            If `value` does not name a supported unit.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        units = ", ".join(repr(u.value) for u in cls)
        raise ValueError(f"time_unit must be one of {units}, got {repr(value)}")

    def __str__(self) -> str:
        return self.value


_UNIT_NANOS = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
}


class ClosedWindow(enum.Enum):
    """
    Which boundaries of a bounded range are included in the output.

    ======= ============== ============
    member  includes start includes end
    ======= ============== ============
    BOTH    yes            yes
    LEFT    yes            no
    RIGHT   no             yes
    NONE    no             no
    ======= ============== ============
    """

    BOTH = "both"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"

    @property
    def left_closed(self) -> bool:
        return self in (ClosedWindow.BOTH, ClosedWindow.LEFT)

    @property
    def right_closed(self) -> bool:
        return self in (ClosedWindow.BOTH, ClosedWindow.RIGHT)

    @classmethod
    def from_value(cls, value: ClosedLike) -> "ClosedWindow":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ValueError(
            f"closed has to be one of 'both', 'left', 'right' or 'none', "
            f"got {repr(value)}"
        )

    def __str__(self) -> str:
        return self.value


class IsSorted(enum.Enum):
    """
    Sortedness recorded on a column, trusted without re-verification.
    """

    ASCENDING = "ascending"
    DESCENDING = "descending"
    NOT = "not"


class DatetimeDtype:
    """
    Metadata describing a column of epoch integers.

    **This is not an actual numpy dtype**, but a duck type carrying the
    time unit and the optional time zone identifier.

    Parameters
    ----------
    unit : TimeUnit or str, default "ns"
        The precision of the datetime data.
    tz : str, optional
        The time zone identifier, e.g. ``"Europe/Amsterdam"``.

    Examples
    --------
    >>> DatetimeDtype("us", "UTC")
    datetime64[us, UTC]
    >>> DatetimeDtype.construct_from_string("datetime64[ms]")
    datetime64[ms]
    """

    _metadata = ("unit", "tz")
    _match = re.compile(r"(datetime64|M8)\[(?P<unit>[a-z]+)(, (?P<tz>.+))?\]")

    def __init__(self, unit: TimeUnitLike = "ns", tz: Optional[str] = None):
        self._unit = TimeUnit.from_value(unit)
        if tz is not None and not isinstance(tz, str):
            raise TypeError(f"tz must be a time zone identifier string, got {tz!r}")
        self._tz = tz or None

    @property
    def unit(self) -> TimeUnit:
        """
        The precision of the datetime data.
        """
        return self._unit

    @property
    def tz(self) -> Optional[str]:
        """
        The timezone.
        """
        return self._tz

    @property
    def base(self) -> np.dtype:
        return self._unit.datetime64_dtype()

    @property
    def name(self) -> str:
        if self._tz is None:
            return f"datetime64[{self._unit.value}]"
        return f"datetime64[{self._unit.value}, {self._tz}]"

    @classmethod
    def construct_from_string(cls, string: str) -> "DatetimeDtype":
        if not isinstance(string, str):
            raise TypeError(
                f"'construct_from_string' expects a string, got {type(string)}"
            )

        msg = f"Cannot construct a 'DatetimeDtype' from '{string}'"
        match = cls._match.fullmatch(string)
        if match:
            d = match.groupdict()
            try:
                return cls(unit=d["unit"], tz=d["tz"])
            except ValueError as err:
                raise TypeError(msg) from err
        raise TypeError(msg)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return self.name

    def __hash__(self) -> int:
        return hash((self._unit, self._tz))

    def __eq__(self, other) -> bool:
        if isinstance(other, str):
            try:
                other = type(self).construct_from_string(other)
            except TypeError:
                return False
        if not isinstance(other, DatetimeDtype):
            return False
        return self._unit is other._unit and self._tz == other._tz
