"""
Модуль для сводки описательных статистик набора данных.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from statslab import statistics as st
from statslab.dataset import Dataset
from statslab.exceptions import EmptyDatasetError, StatisticError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescriptiveStats:
    """
    Снимок всех скалярных статистик набора.

    Статистики, для которых данных недостаточно или результат
    не определён, равны None.
    """
    mode: str
    count: int
    min: float
    max: float
    range: float
    sum: float
    mean: float
    median: float
    modes: List[float]
    variance: Optional[float]
    stdev: Optional[float]
    midrange: float
    q1: Optional[float]
    q2: Optional[float]
    q3: Optional[float]
    iqr: Optional[float]
    outliers: Optional[List[float]]
    sum_squares: float
    mean_abs_deviation: float
    rms: float
    sem: Optional[float]
    skewness: Optional[float]
    kurtosis: Optional[float]
    kurtosis_excess: Optional[float]
    cv: Optional[float]
    rsd: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        """Преобразование в словарь."""
        return asdict(self)

    def to_series(self) -> pd.Series:
        """Скалярные статистики в виде pandas.Series (без списков)."""
        data = {
            key: value
            for key, value in self.to_dict().items()
            if key not in ('mode', 'modes', 'outliers')
        }
        return pd.Series(data, name=self.mode, dtype="float64")


def _optional(func: Callable[[], Any]) -> Any:
    try:
        return func()
    except StatisticError as e:
        logger.debug(f"Skipped in summary: {e}")
        return None


def describe(dataset: Dataset) -> DescriptiveStats:
    """
    Расчет всех статистик с учётом режима набора (выборка/генеральная совокупность).

    Args:
        dataset: Набор данных

    Returns:
        DescriptiveStats: Снимок статистик

    Raises:
        EmptyDatasetError: Если набор пуст
    """
    if dataset.size() == 0:
        raise EmptyDatasetError("Summary")

    sample = dataset.sample
    quartiles = _optional(lambda: st.quartiles(dataset))

    result = DescriptiveStats(
        mode=dataset.mode.value,
        count=dataset.size(),
        min=st.minimum(dataset),
        max=st.maximum(dataset),
        range=st.value_range(dataset),
        sum=st.total(dataset),
        mean=st.mean(dataset),
        median=st.median(dataset),
        modes=st.modes(dataset),
        variance=_optional(lambda: st.variance(dataset, sample)),
        stdev=_optional(lambda: st.stdev(dataset, sample)),
        midrange=st.midrange(dataset),
        q1=quartiles.q1 if quartiles else None,
        q2=quartiles.q2 if quartiles else None,
        q3=quartiles.q3 if quartiles else None,
        iqr=quartiles.iqr if quartiles else None,
        outliers=_optional(lambda: st.outliers(dataset)),
        sum_squares=st.sum_squares(dataset),
        mean_abs_deviation=st.mean_abs_deviation(dataset),
        rms=st.rms(dataset),
        sem=_optional(lambda: st.sem(dataset, sample)),
        skewness=_optional(lambda: st.skewness(dataset, sample)),
        kurtosis=_optional(lambda: st.kurtosis(dataset)),
        kurtosis_excess=_optional(lambda: st.kurtosis_excess(dataset)),
        cv=_optional(lambda: st.coefficient_of_variation(dataset, sample)),
        rsd=_optional(lambda: st.relative_std_deviation(dataset, sample)),
    )

    logger.debug(f"Рассчитаны статистики для {result.count} значений")
    return result


def frequency_frame(dataset: Dataset) -> pd.DataFrame:
    """Таблица частот: value, frequency, percent."""
    rows = st.frequency_table(dataset)
    frame = pd.DataFrame(rows, columns=['value', 'frequency'])
    frame['percent'] = 100.0 * frame['frequency'] / dataset.size()
    return frame
