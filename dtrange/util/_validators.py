"""
Module that contains useful utilities
for validating data or function arguments
"""
from typing import Optional

from dtrange._config import get_option
from dtrange._typing import ClosedLike, TimeUnitLike
from dtrange.core.dtypes.dtypes import ClosedWindow, TimeUnit


def validate_endpoints(closed: Optional[ClosedLike]) -> ClosedWindow:
    """
    Check that the `closed` argument is among "both", "left", "right", "none"
    or a ClosedWindow member.

    Parameters
    ----------
    closed : {"both", "left", "right", "none"}, ClosedWindow or None
        None defers to the ``range.closed`` option.

    Returns
    -------
    ClosedWindow

    Raises
    ------
    ValueError : if argument is not among valid values
    """
    if closed is None:
        closed = get_option("range.closed")
    return ClosedWindow.from_value(closed)


def validate_time_unit(time_unit: Optional[TimeUnitLike]) -> TimeUnit:
    """
    Check that the `time_unit` argument names a supported unit.

    None defers to the ``range.time_unit`` option.
    """
    if time_unit is None:
        time_unit = get_option("range.time_unit")
    return TimeUnit.from_value(time_unit)
