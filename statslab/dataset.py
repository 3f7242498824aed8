"""
Dataset: an ordered numeric buffer plus its estimation mode.
"""

from enum import Enum
from typing import Iterable, Optional, Union

from statslab.buffer import OrderedNumericBuffer


class EstimationMode(Enum):
    """Denominator convention for variance-family statistics."""

    SAMPLE = "sample"
    POPULATION = "population"

    @property
    def is_sample(self) -> bool:
        return self is EstimationMode.SAMPLE

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, value: Union[str, "EstimationMode"]) -> "EstimationMode":
        """Accepts an EstimationMode or a case-insensitive name like 'Population'."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(
                f"Invalid estimation mode: {value!r}. Valid options: {valid}"
            ) from None


class Dataset:
    """
    Container for the values under analysis.

    The buffer is exclusively owned by the dataset: a buffer passed in is
    copied, and :meth:`copy` never aliases it. The mode is configuration,
    not data, and is threaded into every statistic that distinguishes sample
    and population estimation.

    Args:
        mode: Sample or population estimation (default: sample)
        buffer: Existing buffer whose values seed the dataset (copied)
    """

    def __init__(
        self,
        mode: Union[str, EstimationMode] = EstimationMode.SAMPLE,
        buffer: Optional[OrderedNumericBuffer] = None,
    ):
        self.mode = EstimationMode.parse(mode)
        self.buffer = buffer.copy() if buffer is not None else OrderedNumericBuffer()

    @classmethod
    def from_values(
        cls,
        values: Iterable[float],
        mode: Union[str, EstimationMode] = EstimationMode.SAMPLE,
    ) -> "Dataset":
        dataset = cls(mode=mode)
        dataset.insert_many(values)
        return dataset

    @property
    def sample(self) -> bool:
        return self.mode.is_sample

    def insert(self, value: float) -> int:
        return self.buffer.insert(value)

    def insert_many(self, values: Iterable[float]) -> int:
        return self.buffer.insert_many(values)

    def erase_value(self, value: float, count: int = 1) -> int:
        return self.buffer.erase_value(value, count)

    def erase_all(self, value: float) -> int:
        return self.buffer.erase_all(value)

    def erase_at(self, index: int) -> float:
        return self.buffer.erase_at(index)

    def clear(self) -> None:
        self.buffer.clear()

    def size(self) -> int:
        return self.buffer.size()

    def capacity(self) -> int:
        return self.buffer.capacity()

    def at(self, index: int) -> float:
        return self.buffer.at(index)

    def values(self):
        return self.buffer.to_list()

    def copy(self) -> "Dataset":
        return Dataset(mode=self.mode, buffer=self.buffer)

    def __copy__(self) -> "Dataset":
        return self.copy()

    def __deepcopy__(self, memo) -> "Dataset":
        return self.copy()

    def __len__(self) -> int:
        return self.buffer.size()

    def __iter__(self):
        return iter(self.buffer)

    def __repr__(self) -> str:
        return f"Dataset(mode={self.mode.value!r}, size={self.size()})"
