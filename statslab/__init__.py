"""
StatsLab - descriptive statistics over a continuously sorted numeric dataset.

Includes:
- OrderedNumericBuffer: sorted growable storage
- Dataset with sample / population estimation mode
- Statistics engine (location, dispersion, shape, distribution)
- Plain-text report renderer
"""

from .buffer import OrderedNumericBuffer
from .dataset import Dataset, EstimationMode
from .exceptions import (
    ConfigurationError,
    EmptyDatasetError,
    InsufficientDataError,
    StatisticError,
    StatsLabError,
    UndefinedResultError,
)
from .report import render_all, write_to_file
from .statistics import (
    STATISTICS,
    FrequencyRow,
    Quartiles,
    StatOutcome,
    evaluate,
)
from .summary import DescriptiveStats, describe, frequency_frame

__version__ = "1.0.0"

__all__ = [
    # Хранилище и набор данных
    "OrderedNumericBuffer",
    "Dataset",
    "EstimationMode",
    # Статистики
    "STATISTICS",
    "FrequencyRow",
    "Quartiles",
    "StatOutcome",
    "evaluate",
    "DescriptiveStats",
    "describe",
    "frequency_frame",
    # Отчёт
    "render_all",
    "write_to_file",
    # Исключения
    "StatsLabError",
    "StatisticError",
    "EmptyDatasetError",
    "InsufficientDataError",
    "UndefinedResultError",
    "ConfigurationError",
]
