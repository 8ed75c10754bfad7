# flake8: noqa

__docformat__ = "restructuredtext"

# Let users know if they're missing any of our hard dependencies
hard_dependencies = ("numpy", "pytz", "dateutil")
missing_dependencies = []

for dependency in hard_dependencies:
    try:
        __import__(dependency)
    except ImportError as e:
        missing_dependencies.append(f"{dependency}: {e}")

if missing_dependencies:
    raise ImportError(
        "Unable to import required dependencies:\n" + "\n".join(missing_dependencies)
    )
del hard_dependencies, dependency, missing_dependencies

from dtrange._config import (
    get_option,
    set_option,
    reset_option,
    describe_option,
    option_context,
    options,
)

# let init-time option registration happen
import dtrange.core.config_init

from dtrange.core.api import (
    # dtypes
    ClosedWindow,
    DatetimeDtype,
    IsSorted,
    TimeUnit,
    # intervals
    Duration,
    to_duration,
    # columns
    DatetimeArray,
    TimeArray,
    # ranges
    date_range,
    time_range,
)

from dtrange import errors

__version__ = "0.1.0"

__doc__ = """
dtrange - ranges of timestamps for temporal columns
===================================================

**dtrange** generates ordered sequences of timestamps between two bounds,
spaced by a fixed duration ("90m") or a calendar interval ("1mo"), and
returns them as typed columns of epoch integers.

Main Features
-------------
  - Fixed intervals are generated as a vectorized arithmetic progression.
  - Calendar intervals respect month lengths and daylight-saving time,
    through a pluggable time zone resolver backed by pytz or dateutil.
  - Four inclusion modes for the bounds: both, left, right, none.
  - Nanosecond, microsecond and millisecond precision.
"""
