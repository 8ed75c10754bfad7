from dtrange.core.arrays.datetimes import DatetimeArray
from dtrange.core.arrays.times import TimeArray

__all__ = [
    "DatetimeArray",
    "TimeArray",
]
