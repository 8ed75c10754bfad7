from datetime import datetime, time
from typing import Optional

from dtrange._typing import TimeConvertibleTypes

_time_formats = [
    "%H:%M",
    "%H%M",
    "%I:%M%p",
    "%I%M%p",
    "%H:%M:%S",
    "%H%M%S",
    "%I:%M:%S%p",
    "%I%M%S%p",
    "%H:%M:%S.%f",
]


def to_time(arg: TimeConvertibleTypes, format: Optional[str] = None) -> time:
    """
    Parse a time string to a time object using fixed strptime formats ("%H:%M",
    "%H%M", "%I:%M%p", "%I%M%p", "%H:%M:%S", "%H%M%S", "%I:%M:%S%p",
    "%I%M%S%p", "%H:%M:%S.%f")

    Parameters
    ----------
    arg : str, datetime.time or datetime.datetime
    format : str, default None
        Format used to convert arg into a time object.  If None, fixed formats
        are used.

    Returns
    -------
    datetime.time
        Always naive.

    Raises
    ------
    ValueError
        If `arg` cannot be parsed, or carries a time zone.
    """
    if isinstance(arg, datetime):
        arg = arg.time()

    if isinstance(arg, time):
        if arg.tzinfo is not None:
            raise ValueError(f"time range endpoints must be naive, got {arg}")
        return arg

    if not isinstance(arg, str):
        raise TypeError(f"Cannot convert {type(arg).__name__} to a time")

    if format is not None:
        try:
            return datetime.strptime(arg, format).time()
        except ValueError as err:
            msg = f"Cannot convert {arg} to a time with given format {format}"
            raise ValueError(msg) from err

    for time_format in _time_formats:
        try:
            return datetime.strptime(arg.strip(), time_format).time()
        except ValueError:
            continue
    raise ValueError(f"Cannot convert arg {repr(arg)} to a time")
