# flake8: noqa

from dtrange.core.arrays.datetimes import DatetimeArray, date_range
from dtrange.core.arrays.times import TimeArray, time_range
from dtrange.core.dtypes.dtypes import ClosedWindow, DatetimeDtype, IsSorted, TimeUnit
from dtrange.tseries.frequencies import to_duration
from dtrange.tseries.offsets import Duration
