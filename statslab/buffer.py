"""
Упорядоченный числовой буфер.

Хранит конечные значения float64 в непрерывном растущем массиве numpy и
поддерживает их по возрастанию при любых вставках и удалениях.
"""

import logging
import math
import numbers
import operator
from typing import Iterable, Iterator, List, Optional

import numpy as np

logger = logging.getLogger(__name__)

MIN_CAPACITY = 8


class OrderedNumericBuffer:
    """
    Растущий массив чисел, всегда отсортированный по возрастанию.

    Параметры:
    -----------
    capacity : int, optional
        Начальная ёмкость. Если не задана или 0, память не выделяется
        до первой вставки; иначе выделяется max(8, capacity) ячеек.
    """

    def __init__(self, capacity: Optional[int] = None):
        self._data: Optional[np.ndarray] = None
        self._length = 0
        if capacity:
            if capacity < 0:
                raise ValueError(f"Capacity must be non-negative, got {capacity}")
            self._data = np.empty(max(MIN_CAPACITY, capacity), dtype=np.float64)

    # ------------------------------------------------------------------
    # Модификаторы
    # ------------------------------------------------------------------

    def insert(self, value: float) -> int:
        """Вставка значения в отсортированную позицию; возвращает индекс"""
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Expected a real number, got {type(value).__name__}")
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"Only finite values can be inserted, got {value}")

        pos = self.lower_bound(value)
        self._grow_if_needed()
        tail_end = self._length
        if pos < tail_end:
            self._data[pos + 1:tail_end + 1] = self._data[pos:tail_end]
        self._data[pos] = value
        self._length += 1
        return pos

    def insert_many(self, values: Iterable[float]) -> int:
        """Вставка значений по одному; возвращает число вставленных"""
        inserted = 0
        for value in values:
            self.insert(value)
            inserted += 1
        return inserted

    def erase_value(self, value: float, count: int = 1) -> int:
        """
        Удаление до count первых вхождений value.

        :param value: Удаляемое значение
        :param count: Максимальное число удаляемых вхождений (>= 1)
        :return: Число фактически удалённых элементов
        """
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")

        pos = self.lower_bound(value)
        run_end = pos
        while (
            run_end < self._length
            and self._data[run_end] == value
            and run_end - pos < count
        ):
            run_end += 1

        removed = run_end - pos
        if removed:
            self._shift_left(pos, removed)
            logger.debug(f"Removed {removed} occurrence(s) of {value}")
        return removed

    def erase_all(self, value: float) -> int:
        """Удаление всех вхождений value"""
        if not self._length:
            return 0
        return self.erase_value(value, self._length)

    def erase_at(self, index: int) -> float:
        """Удаление элемента по индексу; возвращает удалённое значение"""
        index = self._check_index(index)
        removed = float(self._data[index])
        self._shift_left(index, 1)
        return removed

    def clear(self) -> None:
        """Сброс длины в 0; выделенная память сохраняется"""
        self._length = 0

    # ------------------------------------------------------------------
    # Доступ
    # ------------------------------------------------------------------

    def size(self) -> int:
        return self._length

    def capacity(self) -> int:
        return 0 if self._data is None else len(self._data)

    def at(self, index: int) -> float:
        return float(self._data[self._check_index(index)])

    def lower_bound(self, value: float) -> int:
        """Первый индекс i, для которого elements[i] >= value"""
        left, right = 0, self._length
        while left < right:
            middle = (left + right) // 2
            if self._data[middle] < value:
                left = middle + 1
            else:
                right = middle
        return left

    def view(self) -> np.ndarray:
        """Read-only view of the active elements (no copy)."""
        if self._data is None:
            return np.empty(0, dtype=np.float64)
        active = self._data[:self._length]
        active.flags.writeable = False
        return active

    def to_numpy(self) -> np.ndarray:
        return self.view().copy()

    def to_list(self) -> List[float]:
        return [float(x) for x in self.view()]

    def copy(self) -> "OrderedNumericBuffer":
        """Глубокая копия с независимым хранилищем"""
        clone = OrderedNumericBuffer()
        if self._data is not None:
            clone._data = self._data.copy()
        clone._length = self._length
        return clone

    def __copy__(self) -> "OrderedNumericBuffer":
        return self.copy()

    def __deepcopy__(self, memo) -> "OrderedNumericBuffer":
        return self.copy()

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[float]:
        for i in range(self._length):
            yield float(self._data[i])

    def __getitem__(self, index: int) -> float:
        return self.at(index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrderedNumericBuffer):
            return NotImplemented
        return np.array_equal(self.view(), other.view())

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"OrderedNumericBuffer(size={self._length}, "
            f"capacity={self.capacity()}, values={self.to_list()})"
        )

    # ------------------------------------------------------------------
    # Внутренние методы
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> int:
        index = operator.index(index)
        if not 0 <= index < self._length:
            raise IndexError(
                f"Index {index} out of range for buffer of size {self._length}"
            )
        return index

    def _grow_if_needed(self) -> None:
        """Удвоение ёмкости (минимум 8) при заполненном хранилище"""
        old_capacity = self.capacity()
        if self._length < old_capacity:
            return

        new_capacity = max(MIN_CAPACITY, 2 * old_capacity)
        grown = np.empty(new_capacity, dtype=np.float64)
        if self._length:
            grown[:self._length] = self._data[:self._length]
        self._data = grown
        logger.debug(f"Buffer grown from {old_capacity} to {new_capacity} slots")

    def _shift_left(self, start: int, gap: int) -> None:
        """Сдвиг хвоста влево на gap ячеек, закрывая [start, start + gap)"""
        tail_end = self._length
        self._data[start:tail_end - gap] = self._data[start + gap:tail_end]
        self._length -= gap
