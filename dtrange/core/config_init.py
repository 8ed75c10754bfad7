"""
This module is imported from the dtrange package __init__.py file
in order to ensure that the core.config options registered here will
be available as soon as the user loads the package. if register_option
is invoked inside specific modules, they will not be registered until that
module is imported, which may or may not be a problem.

If you need to make sure options are available even before a certain
module is imported, register them here rather than in the module.
"""
import dtrange._config.config as cf
from dtrange._config.config import is_nonnegative_int, is_one_of_factory

# ------
# Range
# ------

time_unit_doc = """
: str
    The time unit used by date_range when `time_unit` is not passed.
    One of 'ns', 'us', 'ms'.
"""

closed_doc = """
: str
    Which bounds date_range and time_range include when `closed` is not
    passed. One of 'both', 'left', 'right', 'none'.
"""

performance_warning_threshold_doc = """
: int or None
    Emit a PerformanceWarning when a range with a calendar interval (days,
    weeks, months) is estimated to hold more values than this. Such ranges
    are computed one value at a time. None disables the warning.
"""

cf.register_option(
    "range.time_unit",
    "ns",
    time_unit_doc,
    validator=is_one_of_factory(["ns", "us", "ms"]),
)
cf.register_option(
    "range.closed",
    "both",
    closed_doc,
    validator=is_one_of_factory(["both", "left", "right", "none"]),
)
cf.register_option(
    "range.performance_warning_threshold",
    1_000_000,
    performance_warning_threshold_doc,
    validator=is_nonnegative_int,
)

# ---------
# Timezone
# ---------

timezone_backend_doc = """
: str
    The time zone database used to resolve calendar intervals and tz-aware
    bounds when no resolver is passed. 'pytz' (default) or 'dateutil'.
"""

cf.register_option(
    "timezone.backend",
    "pytz",
    timezone_backend_doc,
    validator=is_one_of_factory(["pytz", "dateutil"]),
)
