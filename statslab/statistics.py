"""
Descriptive statistics over an OrderedNumericBuffer.

Every function is a pure read of the current buffer state: nothing is cached,
so repeated calls always reflect the live data. Each statistic declares its
minimum dataset size and raises a typed error when it is not met:

- EmptyDatasetError when the dataset has no values at all
- InsufficientDataError when it has fewer values than the statistic needs
- UndefinedResultError for coefficient-of-variation statistics when mean == 0

Sums, sums of squares and higher-power sums are accumulated with
:class:`~statslab.accumulator.ExtendedSum` and narrowed to ``float`` only for
the returned value.

Author: StatsLab Team
License: Apache 2.0
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from statslab.accumulator import ExtendedSum
from statslab.buffer import OrderedNumericBuffer
from statslab.dataset import Dataset
from statslab.exceptions import (
    EmptyDatasetError,
    InsufficientDataError,
    StatisticError,
    UndefinedResultError,
)

DataLike = Union[OrderedNumericBuffer, Dataset]

TUKEY_MULTIPLIER = 1.5


class Quartiles(NamedTuple):
    """Tukey quartiles (Q1, Q2, Q3)."""

    q1: float
    q2: float
    q3: float

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


class FrequencyRow(NamedTuple):
    """Distinct value and its number of occurrences."""

    value: float
    count: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _values(data: DataLike) -> np.ndarray:
    if isinstance(data, Dataset):
        data = data.buffer
    if not isinstance(data, OrderedNumericBuffer):
        raise TypeError(
            f"Expected OrderedNumericBuffer or Dataset, got {type(data).__name__}"
        )
    return data.view()


def _require(data: DataLike, need: int, statistic: str) -> np.ndarray:
    """Return the sorted values, or raise if fewer than *need* are stored."""
    values = _values(data)
    n = len(values)
    if n == 0:
        raise EmptyDatasetError(statistic)
    if n < need:
        raise InsufficientDataError(statistic, need, n)
    return values


def _mode_label(statistic: str, sample: bool) -> str:
    return f"{statistic} ({'sample' if sample else 'population'})"


def _runs(values: np.ndarray) -> Iterator[Tuple[float, int]]:
    """Yield (value, run length) for each maximal run of equal values."""
    n = len(values)
    i = 0
    while i < n:
        j = i + 1
        while j < n and values[j] == values[i]:
            j += 1
        yield float(values[i]), j - i
        i = j


def _median_of(values: np.ndarray, start: int, stop: int) -> float:
    """Median of the sorted slice [start, stop) without interpolation."""
    length = stop - start
    middle = start + length // 2
    if length % 2:
        return float(values[middle])
    return (float(values[middle - 1]) + float(values[middle])) / 2.0


def _mean(values: np.ndarray) -> float:
    return float(ExtendedSum().extend(values)) / len(values)


def _deviations(values: np.ndarray) -> Iterator[np.longdouble]:
    mu = np.longdouble(_mean(values))
    for x in values:
        yield np.longdouble(x) - mu


def _squared_deviations(values: np.ndarray) -> np.longdouble:
    acc = ExtendedSum()
    for d in _deviations(values):
        acc.add(d * d)
    return acc.value


def _variance(values: np.ndarray, sample: bool) -> float:
    n = len(values)
    denominator = n - 1 if sample else n
    result = float(_squared_deviations(values) / np.longdouble(denominator))
    # rounding may leave a tiny negative residue
    return max(result, 0.0)


def _kurtosis_terms(values: np.ndarray) -> Optional[Tuple[float, float]]:
    """Excel bias-corrected kurtosis term and the excess correction term.

    Returns None when the values have no spread.
    """
    n = np.longdouble(len(values))
    s = np.sqrt(_squared_deviations(values) / (n - 1))
    if s == 0:
        return None

    sum_z4 = ExtendedSum()
    for d in _deviations(values):
        z = d / s
        sum_z4.add(z * z * z * z)

    term = n * (n + 1) / ((n - 1) * (n - 2) * (n - 3)) * sum_z4.value
    correction = 3 * (n - 1) * (n - 1) / ((n - 2) * (n - 3))
    return float(term), float(correction)


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------


def minimum(data: DataLike) -> float:
    return float(_require(data, 1, "Minimum")[0])


def maximum(data: DataLike) -> float:
    return float(_require(data, 1, "Maximum")[-1])


def value_range(data: DataLike) -> float:
    values = _require(data, 1, "Range")
    return float(values[-1]) - float(values[0])


def total(data: DataLike) -> float:
    """Sum of all values."""
    return float(ExtendedSum().extend(_require(data, 1, "Sum")))


def mean(data: DataLike) -> float:
    return _mean(_require(data, 1, "Mean"))


def median(data: DataLike) -> float:
    values = _require(data, 1, "Median")
    return _median_of(values, 0, len(values))


def modes(data: DataLike) -> List[float]:
    """
    Values tied for the highest frequency, ascending.

    Returns an empty list when no value repeats (every run has length 1).
    """
    values = _require(data, 1, "Mode(s)")
    runs = list(_runs(values))
    best = max(length for _, length in runs)
    if best <= 1:
        return []
    return [value for value, length in runs if length == best]


def midrange(data: DataLike) -> float:
    values = _require(data, 1, "Midrange")
    return (float(values[0]) + float(values[-1])) / 2.0


# ---------------------------------------------------------------------------
# Dispersion
# ---------------------------------------------------------------------------


def variance(data: DataLike, sample: bool = True) -> float:
    """Variance with Bessel's correction for samples (n - 1) or n for populations."""
    label = _mode_label("Variance", sample)
    values = _require(data, 2 if sample else 1, label)
    return _variance(values, sample)


def stdev(data: DataLike, sample: bool = True) -> float:
    label = _mode_label("Standard Deviation", sample)
    values = _require(data, 2 if sample else 1, label)
    return math.sqrt(_variance(values, sample))


def quartiles(data: DataLike) -> Quartiles:
    """
    Tukey quartiles.

    The sorted values are split at m = n // 2. For even n the halves are
    [0, m) and [m, n); for odd n the median element is excluded and the upper
    half is [m + 1, n). Q1 and Q3 are the medians of the halves; no
    interpolation between ranks is applied.
    """
    values = _require(data, 2, "Quartiles")
    n = len(values)
    m = n // 2
    q2 = _median_of(values, 0, n)
    q1 = _median_of(values, 0, m)
    q3 = _median_of(values, m if n % 2 == 0 else m + 1, n)
    return Quartiles(q1, q2, q3)


def iqr(data: DataLike) -> float:
    _require(data, 2, "Interquartile Range")
    return quartiles(data).iqr


def outliers(data: DataLike, multiplier: float = TUKEY_MULTIPLIER) -> List[float]:
    """Values outside [Q1 - k*IQR, Q3 + k*IQR], ascending."""
    values = _require(data, 2, "Outliers")
    q1, _, q3 = quartiles(data)
    fence = multiplier * (q3 - q1)
    lower, upper = q1 - fence, q3 + fence
    return [float(x) for x in values if x < lower or x > upper]


def sum_squares(data: DataLike) -> float:
    values = _require(data, 1, "Sum of Squares")
    acc = ExtendedSum()
    for x in values:
        x = np.longdouble(x)
        acc.add(x * x)
    return float(acc)


def mean_abs_deviation(data: DataLike) -> float:
    values = _require(data, 1, "Mean Absolute Deviation")
    acc = ExtendedSum()
    for d in _deviations(values):
        acc.add(abs(d))
    return float(acc.value / np.longdouble(len(values)))


def rms(data: DataLike) -> float:
    """Root mean square."""
    values = _require(data, 1, "Root Mean Square")
    return math.sqrt(sum_squares(data) / len(values))


def sem(data: DataLike, sample: bool = True) -> float:
    """Standard error of the mean."""
    label = _mode_label("Standard Error of Mean", sample)
    values = _require(data, 2 if sample else 1, label)
    return math.sqrt(_variance(values, sample)) / math.sqrt(len(values))


# ---------------------------------------------------------------------------
# Shape
# ---------------------------------------------------------------------------


def skewness(data: DataLike, sample: bool = True) -> float:
    """
    Skewness.

    Population: (m3 / n) / s**3 with s = sqrt(m2 / n).
    Sample: g1 = (m3 / n) / s**3 with s = sqrt(m2 / (n - 1)), scaled by
    sqrt(n (n - 1)) / (n - 2).

    A dataset without spread has skewness 0.
    """
    label = _mode_label("Skewness", sample)
    values = _require(data, 3 if sample else 1, label)
    n = np.longdouble(len(values))

    m2, m3 = ExtendedSum(), ExtendedSum()
    for d in _deviations(values):
        m2.add(d * d)
        m3.add(d * d * d)

    s = np.sqrt(m2.value / (n - 1 if sample else n))
    if s == 0:
        return 0.0
    g1 = (m3.value / n) / (s * s * s)
    if sample:
        return float(np.sqrt(n * (n - 1)) / (n - 2) * g1)
    return float(g1)


def kurtosis(data: DataLike) -> float:
    """
    Excel bias-corrected kurtosis term.

    n (n + 1) / ((n - 1)(n - 2)(n - 3)) * sum(((x - mean) / s) ** 4) with the
    sample standard deviation s; 0 when s == 0.
    """
    terms = _kurtosis_terms(_require(data, 4, "Kurtosis"))
    if terms is None:
        return 0.0
    return terms[0]


def kurtosis_excess(data: DataLike) -> float:
    """Excel excess kurtosis: the kurtosis term minus 3 (n - 1)^2 / ((n - 2)(n - 3))."""
    terms = _kurtosis_terms(_require(data, 4, "Kurtosis Excess"))
    if terms is None:
        return 0.0
    term, correction = terms
    return term - correction


def coefficient_of_variation(
    data: DataLike, sample: bool = True, statistic: str = "Coefficient of Variation"
) -> float:
    """stdev / mean; raises UndefinedResultError when the mean is exactly 0."""
    values = _require(data, 1, statistic)
    mu = _mean(values)
    if mu == 0.0:
        raise UndefinedResultError(statistic)
    _require(data, 2 if sample else 1, statistic)
    return math.sqrt(_variance(values, sample)) / mu


def relative_std_deviation(data: DataLike, sample: bool = True) -> float:
    """Coefficient of variation in percent."""
    return 100.0 * coefficient_of_variation(
        data, sample, statistic="Relative Standard Deviation"
    )


# ---------------------------------------------------------------------------
# Distribution
# ---------------------------------------------------------------------------


def frequency_table(data: DataLike) -> List[FrequencyRow]:
    """Ascending (value, count) pairs, one per distinct value."""
    values = _require(data, 1, "Frequency Table")
    return [FrequencyRow(value, count) for value, count in _runs(values)]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatisticSpec:
    """A named statistic that can be evaluated against a Dataset."""

    name: str
    label: str
    func: Callable[..., Any]
    uses_mode: bool = False

    def title(self, sample: bool) -> str:
        return _mode_label(self.label, sample) if self.uses_mode else self.label

    def compute(self, dataset: Dataset) -> Any:
        if self.uses_mode:
            return self.func(dataset, dataset.sample)
        return self.func(dataset)


@dataclass
class StatOutcome:
    """Result of :func:`evaluate`: either a value or the statistic error."""

    name: str
    title: str
    value: Any = None
    error: Optional[StatisticError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


_SPECS = [
    StatisticSpec("min", "Minimum", minimum),
    StatisticSpec("max", "Maximum", maximum),
    StatisticSpec("range", "Range", value_range),
    StatisticSpec("sum", "Sum", total),
    StatisticSpec("mean", "Mean", mean),
    StatisticSpec("median", "Median", median),
    StatisticSpec("modes", "Mode(s)", modes),
    StatisticSpec("stdev", "Standard Deviation", stdev, uses_mode=True),
    StatisticSpec("variance", "Variance", variance, uses_mode=True),
    StatisticSpec("midrange", "Midrange", midrange),
    StatisticSpec("quartiles", "Quartiles", quartiles),
    StatisticSpec("iqr", "Interquartile Range (IQR)", iqr),
    StatisticSpec("outliers", "Outliers (Tukey +/- 1.5*IQR)", outliers),
    StatisticSpec("sum-squares", "Sum of Squares", sum_squares),
    StatisticSpec("mad", "Mean Absolute Deviation", mean_abs_deviation),
    StatisticSpec("rms", "Root Mean Square (RMS)", rms),
    StatisticSpec("sem", "Standard Error of Mean (SEM)", sem, uses_mode=True),
    StatisticSpec("skewness", "Skewness", skewness, uses_mode=True),
    StatisticSpec("kurtosis", "Kurtosis (Pearson)", kurtosis),
    StatisticSpec("kurtosis-excess", "Kurtosis Excess", kurtosis_excess),
    StatisticSpec(
        "cv", "Coefficient of Variation", coefficient_of_variation, uses_mode=True
    ),
    StatisticSpec(
        "rsd", "Relative Standard Deviation (%)", relative_std_deviation, uses_mode=True
    ),
    StatisticSpec("frequency", "Frequency Table", frequency_table),
]

STATISTICS: Dict[str, StatisticSpec] = {spec.name: spec for spec in _SPECS}


def evaluate(name: str, dataset: Dataset) -> StatOutcome:
    """
    Compute one registered statistic using the dataset's estimation mode.

    Statistic errors are returned in ``outcome.error`` instead of raised.

    Raises:
        KeyError: If *name* is not a registered statistic
    """
    spec = STATISTICS[name]
    outcome = StatOutcome(name=name, title=spec.title(dataset.sample))
    try:
        outcome.value = spec.compute(dataset)
    except StatisticError as e:
        outcome.error = e
    return outcome
