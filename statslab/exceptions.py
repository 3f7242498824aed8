"""
Пользовательские исключения StatsLab
"""
from typing import Any, Dict, Optional


class StatsLabError(Exception):
    """Базовое исключение для всех ошибок проекта"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class StatisticError(StatsLabError):
    """Статистика не может быть вычислена на текущих данных"""

    def __init__(self, message: str, statistic: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.statistic = statistic
        if statistic:
            self.details['statistic'] = statistic


class EmptyDatasetError(StatisticError):
    """Набор данных пуст"""

    def __init__(self, statistic: Optional[str] = None):
        super().__init__("Dataset is empty.", statistic=statistic)


class InsufficientDataError(StatisticError):
    """Размер набора меньше минимума, который требует статистика"""

    def __init__(self, statistic: str, required: int, actual: int):
        message = f"{statistic} requires at least {required} value(s)."
        super().__init__(message, statistic=statistic)
        self.required = required
        self.actual = actual
        self.details.update({
            'required': required,
            'actual': actual
        })


class UndefinedResultError(StatisticError):
    """Результат математически не определён (среднее равно нулю)"""

    def __init__(self, statistic: str):
        super().__init__(f"{statistic} is undefined when the mean is 0.",
                         statistic=statistic)


class ConfigurationError(StatsLabError):
    """Ошибки конфигурации"""
    pass
