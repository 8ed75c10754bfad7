"""
Deterministic time zone resolvers for tests.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Dict, List

from dtrange.errors import TimezoneResolutionError
from dtrange.tseries.timezones import TimezoneResolver


class FixedOffsetResolver(TimezoneResolver):
    """
    Resolver where every known zone has a constant offset from UTC.

    Parameters
    ----------
    offsets : dict of str to timedelta
    """

    def __init__(self, offsets: Dict[str, timedelta]):
        self.offsets = dict(offsets)

    def _offset(self, tz: str) -> timedelta:
        try:
            return self.offsets[tz]
        except KeyError as err:
            raise TimezoneResolutionError(f"unknown time zone {repr(tz)}") from err

    def get_tzinfo(self, tz: str) -> tzinfo:
        return timezone(self._offset(tz), tz)

    def utcoffset(self, utc: datetime, tz: str) -> timedelta:
        return self._offset(tz)

    def local_utcoffset(self, local: datetime, tz: str) -> timedelta:
        return self._offset(tz)


class _StepTZ(tzinfo):
    def __init__(self, resolver: "StepDSTResolver", name: str):
        self._resolver = resolver
        self._name = name

    def _candidates(self, local: datetime) -> List[timedelta]:
        return self._resolver._local_candidates(local)

    def utcoffset(self, dt):
        candidates = self._candidates(dt.replace(tzinfo=None))
        if not candidates:
            # inside the gap, read with the offset before the transition
            return self._resolver.std
        return candidates[dt.fold] if len(candidates) > 1 else candidates[0]

    def dst(self, dt):
        return self.utcoffset(dt) - self._resolver.std

    def tzname(self, dt):
        return self._name

    def fromutc(self, dt):
        utc = dt.replace(tzinfo=None)
        local = utc + self._resolver.utcoffset(utc, self._name)
        candidates = self._candidates(local)
        fold = 1 if len(candidates) > 1 and utc >= self._resolver.dst_end else 0
        return local.replace(tzinfo=self, fold=fold)


class StepDSTResolver(TimezoneResolver):
    """
    Resolver for a single zone with one daylight-saving period.

    Between `dst_start` and `dst_end` (naive UTC) the offset is `dst`,
    otherwise `std`. Moving clocks forward leaves a gap of non-existent wall
    times; moving them back makes wall times ambiguous.
    """

    def __init__(
        self,
        dst_start: datetime,
        dst_end: datetime,
        std: timedelta = timedelta(hours=1),
        dst: timedelta = timedelta(hours=2),
        name: str = "Test/Step",
    ):
        self.dst_start = dst_start
        self.dst_end = dst_end
        self.std = std
        self.dst = dst
        self.name = name

    def _check(self, tz: str) -> None:
        if tz != self.name:
            raise TimezoneResolutionError(f"unknown time zone {repr(tz)}")

    def _local_candidates(self, local: datetime) -> List[timedelta]:
        # offsets, earliest instant first, under which `local` is a valid wall time
        return [
            off
            for off in (self.dst, self.std)
            if self.utcoffset(local - off, self.name) == off
        ]

    def get_tzinfo(self, tz: str) -> tzinfo:
        self._check(tz)
        return _StepTZ(self, tz)

    def utcoffset(self, utc: datetime, tz: str) -> timedelta:
        self._check(tz)
        if self.dst_start <= utc < self.dst_end:
            return self.dst
        return self.std

    def local_utcoffset(self, local: datetime, tz: str) -> timedelta:
        self._check(tz)
        candidates = self._local_candidates(local)
        if not candidates:
            raise TimezoneResolutionError(
                f"datetime '{local}' is non-existent in time zone '{tz}'"
            )
        if len(candidates) > 1:
            raise TimezoneResolutionError(
                f"datetime '{local}' is ambiguous in time zone '{tz}'"
            )
        return candidates[0]
