"""
Time zone resolution behind a small, injectable interface.

Calendar-aware stepping needs two questions answered for a time zone: which
wall time corresponds to an instant, and which instant a wall time denotes.
``TimezoneResolver`` asks them through ``utcoffset``/``local_utcoffset`` so
that the range generator never binds to one time zone database directly.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

import dateutil.tz
import pytz

from dtrange._config import get_option
from dtrange.core.dtypes.dtypes import TimeUnit
from dtrange.errors import AbstractMethodError, TimezoneResolutionError
from dtrange.tseries.conversion import datetime_to_epoch, epoch_to_datetime


class TimezoneResolver:
    """
    Base class mapping between instants and local wall times of a time zone.

    Subclasses implement ``get_tzinfo``, ``utcoffset`` and ``local_utcoffset``.
    Every failure to resolve surfaces as ``TimezoneResolutionError``.
    """

    def get_tzinfo(self, tz: str) -> tzinfo:
        """
        Return a ``tzinfo`` for the identifier `tz`.
        """
        raise AbstractMethodError(self)

    def utcoffset(self, utc: datetime, tz: str) -> timedelta:
        """
        Offset of `tz` from UTC at the naive UTC datetime `utc`.
        """
        raise AbstractMethodError(self)

    def local_utcoffset(self, local: datetime, tz: str) -> timedelta:
        """
        Offset of `tz` from UTC for the naive wall time `local`.

        Raises
        ------
        TimezoneResolutionError
            If `local` is ambiguous or does not exist in `tz`.
        """
        raise AbstractMethodError(self)

    def to_local(self, value: int, unit: TimeUnit, tz: str) -> datetime:
        """
        Naive wall time in `tz` of the epoch integer `value`.

        Precision below one microsecond is dropped; see
        ``dtrange.tseries.conversion.sub_microsecond_remainder``.
        """
        utc = epoch_to_datetime(value, unit)
        return utc + self.utcoffset(utc, tz)

    def localize(self, local: datetime, unit: TimeUnit, tz: str) -> int:
        """
        Epoch integer of the naive wall time `local` in `tz`.
        """
        return datetime_to_epoch(local - self.local_utcoffset(local, tz), unit)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PytzResolver(TimezoneResolver):
    """
    Resolve time zones with the Olson database shipped by ``pytz``.
    """

    def get_tzinfo(self, tz: str) -> tzinfo:
        try:
            return pytz.timezone(tz)
        except pytz.UnknownTimeZoneError as err:
            raise TimezoneResolutionError(f"unknown time zone {repr(tz)}") from err

    def utcoffset(self, utc: datetime, tz: str) -> timedelta:
        zone = self.get_tzinfo(tz)
        return pytz.utc.localize(utc).astimezone(zone).utcoffset()

    def local_utcoffset(self, local: datetime, tz: str) -> timedelta:
        zone = self.get_tzinfo(tz)
        try:
            # is_dst=None makes pytz raise instead of guessing
            return zone.localize(local, is_dst=None).utcoffset()
        except pytz.AmbiguousTimeError as err:
            raise TimezoneResolutionError(
                f"datetime '{local}' is ambiguous in time zone '{tz}'"
            ) from err
        except pytz.NonExistentTimeError as err:
            raise TimezoneResolutionError(
                f"datetime '{local}' is non-existent in time zone '{tz}'"
            ) from err


class DateutilResolver(TimezoneResolver):
    """
    Resolve time zones with ``dateutil.tz``, which reads the system
    zoneinfo files.
    """

    def get_tzinfo(self, tz: str) -> tzinfo:
        # gettz("") returns the local zone, which is never what is meant here
        zone = dateutil.tz.gettz(tz) if tz else None
        if zone is None:
            raise TimezoneResolutionError(f"unknown time zone {repr(tz)}")
        return zone

    def utcoffset(self, utc: datetime, tz: str) -> timedelta:
        zone = self.get_tzinfo(tz)
        return utc.replace(tzinfo=dateutil.tz.UTC).astimezone(zone).utcoffset()

    def local_utcoffset(self, local: datetime, tz: str) -> timedelta:
        zone = self.get_tzinfo(tz)
        aware = local.replace(tzinfo=zone)
        if not dateutil.tz.datetime_exists(aware):
            raise TimezoneResolutionError(
                f"datetime '{local}' is non-existent in time zone '{tz}'"
            )
        if dateutil.tz.datetime_ambiguous(aware):
            raise TimezoneResolutionError(
                f"datetime '{local}' is ambiguous in time zone '{tz}'"
            )
        return aware.utcoffset()


_resolvers = {
    "pytz": PytzResolver,
    "dateutil": DateutilResolver,
}


def get_resolver(backend: Optional[str] = None) -> TimezoneResolver:
    """
    Return the resolver for `backend`, defaulting to the
    ``timezone.backend`` option.
    """
    if backend is None:
        backend = get_option("timezone.backend")
    try:
        klass = _resolvers[backend]
    except KeyError as err:
        raise ValueError(
            f"timezone backend must be one of {sorted(_resolvers)}, got {backend!r}"
        ) from err
    return klass()


def localize_value(
    value: int, unit: TimeUnit, tz: str, resolver: TimezoneResolver
) -> datetime:
    """
    Aware datetime in `tz` for the epoch integer `value`.
    """
    utc = epoch_to_datetime(value, unit).replace(tzinfo=timezone.utc)
    return utc.astimezone(resolver.get_tzinfo(tz))
