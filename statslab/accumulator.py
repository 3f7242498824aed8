"""Running totals with more precision than the stored float64 values."""

from typing import Iterable

import numpy as np


class ExtendedSum:
    """
    Compensated running total kept in ``numpy.longdouble``.

    On x86 Linux ``longdouble`` is the 80-bit extended type; elsewhere it may
    fall back to float64, and the Neumaier correction term keeps the error of
    the total in the same class either way.
    """

    __slots__ = ("_total", "_compensation")

    def __init__(self, start: float = 0.0):
        self._total = np.longdouble(start)
        self._compensation = np.longdouble(0.0)

    def add(self, value) -> "ExtendedSum":
        value = np.longdouble(value)
        total = self._total + value
        if abs(self._total) >= abs(value):
            self._compensation += (self._total - total) + value
        else:
            self._compensation += (value - total) + self._total
        self._total = total
        return self

    def extend(self, values: Iterable) -> "ExtendedSum":
        for value in values:
            self.add(value)
        return self

    @property
    def value(self) -> np.longdouble:
        """Итог в расширенной точности"""
        return self._total + self._compensation

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"ExtendedSum({float(self)!r})"


def extended_sum(values: Iterable) -> np.longdouble:
    """Sum *values* through an :class:`ExtendedSum` and return the wide total."""
    return ExtendedSum().extend(values).value
