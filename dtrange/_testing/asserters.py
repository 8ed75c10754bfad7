from typing import Optional

import numpy as np

from dtrange.core.arrays.datetimelike import DatetimeLikeArrayMixin
from dtrange.core.arrays.datetimes import DatetimeArray
from dtrange.core.arrays.times import TimeArray


def raise_assert_detail(obj, message, left, right):
    __tracebackhide__ = True

    msg = f"""{obj} are different

{message}
[left]:  {left}
[right]: {right}"""
    raise AssertionError(msg)


def assert_class_equal(left, right, obj="Input"):
    """
    Checks classes are equal.
    """
    __tracebackhide__ = True

    if type(left) is not type(right):
        msg = f"{obj} classes are different"
        raise_assert_detail(obj, msg, type(left).__name__, type(right).__name__)


def assert_attr_equal(attr: str, left, right, obj: str = "Attributes"):
    """
    Check attributes are equal. Both objects must have attribute.
    """
    __tracebackhide__ = True

    left_attr = getattr(left, attr)
    right_attr = getattr(right, attr)

    if left_attr is right_attr or left_attr == right_attr:
        return

    msg = f'Attribute "{attr}" are different'
    raise_assert_detail(obj, msg, left_attr, right_attr)


def assert_numpy_array_equal(
    left,
    right,
    check_dtype: bool = True,
    err_msg: Optional[str] = None,
    obj: str = "numpy array",
):
    """
    Check that 'np.ndarray' is equivalent.

    Parameters
    ----------
    left, right : numpy.ndarray
        The two arrays to be compared.
    check_dtype : bool, default True
        Check dtype if both a and b are np.ndarray.
    err_msg : str, default None
        If provided, used as assertion message.
    obj : str, default 'numpy array'
        Specify object name being compared, internally used to show appropriate
        assertion message.
    """
    __tracebackhide__ = True

    assert_class_equal(left, right, obj=obj)
    if not isinstance(left, np.ndarray):
        raise AssertionError(f"{obj} is not an np.ndarray, got {type(left)}")

    if left.shape != right.shape:
        raise_assert_detail(obj, f"{obj} shapes are different", left.shape, right.shape)

    if not np.array_equal(left, right):
        if err_msg is None:
            diff = int((left != right).sum())
            pct = round(diff * 100.0 / left.size, 5)
            err_msg = f"{obj} values are different ({pct} %)"
        raise_assert_detail(obj, err_msg, left, right)

    if check_dtype:
        assert_attr_equal("dtype", left, right, obj=obj)


def _assert_datetimelike_array_equal(
    left: DatetimeLikeArrayMixin,
    right: DatetimeLikeArrayMixin,
    obj: str,
    check_flags: bool,
):
    __tracebackhide__ = True

    assert_class_equal(left, right, obj=obj)
    assert_attr_equal("dtype", left, right, obj=obj)
    assert_attr_equal("name", left, right, obj=obj)
    if check_flags:
        assert_attr_equal("is_sorted", left, right, obj=obj)
    assert_numpy_array_equal(left.asi8, right.asi8, obj=f"{obj}.asi8")


def assert_datetime_array_equal(
    left: DatetimeArray,
    right: DatetimeArray,
    obj: str = "DatetimeArray",
    check_flags: bool = True,
):
    """
    Check that two DatetimeArray are equal: values, dtype, name and, when
    `check_flags` is set, the sorted flag.
    """
    __tracebackhide__ = True
    _assert_datetimelike_array_equal(left, right, obj, check_flags)


def assert_time_array_equal(
    left: TimeArray,
    right: TimeArray,
    obj: str = "TimeArray",
    check_flags: bool = True,
):
    __tracebackhide__ = True
    _assert_datetimelike_array_equal(left, right, obj, check_flags)
