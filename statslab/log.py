"""
Настройка логирования с цветным выводом в консоль.
"""

import logging
import sys
from typing import Optional, TextIO

import colorlog

# Цветовая схема для разных уровней логирования
COLOR_SCHEME = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

CONSOLE_FORMAT = '%(log_color)s%(levelname)-8s%(reset)s %(name)s - %(message)s'


def setup_logging(level: str = 'WARNING', stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Настраивает логгер пакета statslab.

    Повторный вызов заменяет обработчики, а не дублирует их.

    Args:
        level: Уровень логирования
        stream: Поток для вывода (по умолчанию stderr)

    Returns:
        logging.Logger: Корневой логгер пакета
    """
    logger = logging.getLogger('statslab')
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(colorlog.ColoredFormatter(
        CONSOLE_FORMAT,
        log_colors=COLOR_SCHEME,
    ))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
