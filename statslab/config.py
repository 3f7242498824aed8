"""
Загрузчик конфигурации StatsLab из YAML файла
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from statslab.dataset import EstimationMode
from statslab.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class StatsConfig:
    """Конфигурация расчёта и отчёта."""
    # Режим оценки: "sample" или "population"
    mode: str = "sample"
    # Множитель IQR для границ выбросов Тьюки
    outlier_multiplier: float = 1.5
    # Диапазон (включительно) для случайных значений
    random_low: int = 0
    random_high: int = 100
    random_seed: Optional[int] = None
    log_level: str = "WARNING"

    @property
    def estimation_mode(self) -> EstimationMode:
        return EstimationMode.parse(self.mode)

    def validate(self) -> List[str]:
        """Возвращает список ошибок; пустой список - конфигурация валидна"""
        errors = []
        try:
            EstimationMode.parse(self.mode)
        except ValueError as e:
            errors.append(str(e))
        if not isinstance(self.outlier_multiplier, (int, float)) or self.outlier_multiplier < 0:
            errors.append(
                f"outlier_multiplier must be a non-negative number, got {self.outlier_multiplier!r}"
            )
        if not isinstance(self.random_low, int) or not isinstance(self.random_high, int):
            errors.append("random_low and random_high must be integers")
        elif self.random_low > self.random_high:
            errors.append(
                f"random_low ({self.random_low}) must not exceed random_high ({self.random_high})"
            )
        if self.random_seed is not None and not isinstance(self.random_seed, int):
            errors.append(f"random_seed must be an integer, got {self.random_seed!r}")
        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"log_level must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.log_level!r}"
            )
        return errors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StatsConfig":
        """Создание из словаря; неизвестные ключи игнорируются"""
        valid = {f.name for f in fields(cls)}
        known = {}
        for key, value in data.items():
            if key in valid:
                known[key] = value
            else:
                logger.warning(f"Unknown configuration key ignored: {key}")
        return cls(**known)


def load_config(path: Optional[Union[str, Path]] = None) -> StatsConfig:
    """
    Загрузка конфигурации из YAML файла

    Args:
        path: Путь к YAML файлу; None - конфигурация по умолчанию

    Returns:
        StatsConfig объект

    Raises:
        ConfigurationError: При ошибках загрузки или валидации
    """
    if path is None:
        return StatsConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}",
                                 details={'path': str(path)})

    logger.info(f"Loading configuration from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    config = StatsConfig.from_dict(data)
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(errors)}",
                                 details={'errors': errors})

    config.log_level = str(config.log_level).upper()
    return config
