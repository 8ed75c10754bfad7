from typing import Any, Iterator, Union

import numpy as np

from dtrange.core.dtypes.dtypes import IsSorted
from dtrange.errors import AbstractMethodError


class DatetimeLikeArrayMixin:
    """
    Shared core of columns backed by a 1-D array of epoch integers.

    Assumes that __new__/__init__ defines:
        _values
        _name
        _is_sorted

    and that the subclass defines ``_box_func`` and ``to_numpy``.
    """

    def __init__(self, values, name: str = "", is_sorted: IsSorted = IsSorted.NOT):
        values = np.asarray(values)
        if values.ndim != 1:
            raise ValueError("Only 1-dimensional input arrays are supported.")
        if values.dtype != np.int64:
            if len(values) and values.dtype.kind not in "iu":
                raise TypeError(
                    f"{type(self).__name__} values must be integers, "
                    f"got {values.dtype}"
                )
            values = values.astype(np.int64)
        self._values = values
        self._name = name
        self._is_sorted = IsSorted(is_sorted)

    def _box_func(self, x: int):
        """
        box function to get object from internal representation
        """
        raise AbstractMethodError(self)

    def _with_values(self, values: np.ndarray, is_sorted: IsSorted):
        raise AbstractMethodError(self)

    def to_numpy(self) -> np.ndarray:
        raise AbstractMethodError(self)

    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def asi8(self) -> np.ndarray:
        """
        Integer representation of the values.

        Returns
        -------
        ndarray
            An ndarray with int64 dtype.
        """
        return self._values

    @property
    def is_sorted(self) -> IsSorted:
        return self._is_sorted

    def set_sorted_flag(self, flag: Union[IsSorted, str]) -> None:
        """
        Record the sortedness of the values.

        The flag is trusted as is; the values are not inspected.
        """
        self._is_sorted = IsSorted(flag)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        for value in self._values:
            yield self._box_func(int(value))

    def __getitem__(self, key):
        if isinstance(key, (int, np.integer)):
            return self._box_func(int(self._values[key]))
        result = self._values[key]
        if isinstance(key, slice) and (key.step is None or key.step > 0):
            is_sorted = self._is_sorted
        else:
            is_sorted = IsSorted.NOT
        return self._with_values(result, is_sorted)

    def __array__(self, dtype=None) -> np.ndarray:
        if dtype is None:
            return self.to_numpy()
        return np.asarray(self.to_numpy(), dtype=dtype)

    def __repr__(self) -> str:
        values = ", ".join(str(x) for x in self)
        return (
            f"<{type(self).__name__} {self._name!r}>\n"
            f"[{values}]\n"
            f"Length: {len(self)}, dtype: {self.dtype}"
        )

    @property
    def dtype(self):
        raise AbstractMethodError(self, methodtype="property")
