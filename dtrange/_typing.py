from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

import numpy as np

# To prevent import cycles place any internal imports in the branch below
# and use a string literal forward reference to it in subsequent types
# https://mypy.readthedocs.io/en/latest/common_issues.html#import-cycles
if TYPE_CHECKING:
    from dateutil.relativedelta import relativedelta

    from dtrange.core.dtypes.dtypes import ClosedWindow, TimeUnit
    from dtrange.tseries.offsets import Duration
    from dtrange.tseries.timezones import TimezoneResolver


# scalars

DatetimeConvertibleTypes = Union[datetime, date, np.datetime64, str]
TimeConvertibleTypes = Union[time, str]
IntervalConvertibleTypes = Union[
    "Duration", str, timedelta, np.timedelta64, "relativedelta"
]

# enumerations accepted either as members or by their string value
TimeUnitLike = Union["TimeUnit", str]
ClosedLike = Union["ClosedWindow", str]

# time zones are referred to by their database identifier, e.g. "Europe/Amsterdam"
TimezoneId = Optional[str]
Resolver = Optional["TimezoneResolver"]

# functions
FuncType = Callable[..., Any]
F = TypeVar("F", bound=FuncType)
