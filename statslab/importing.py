"""
Filling a dataset from text, files and random draws.
"""

import logging
import math
from pathlib import Path
from typing import Iterator, Optional, Union

import numpy as np

from statslab.dataset import Dataset

logger = logging.getLogger(__name__)


def parse_tokens(text: str) -> Iterator[float]:
    """
    Yield finite numbers from whitespace-separated tokens.

    Tokens that do not parse as a finite decimal number are skipped.
    """
    for token in text.split():
        try:
            value = float(token)
        except ValueError:
            logger.debug(f"Skipping token {token!r}: not a number")
            continue
        if not math.isfinite(value):
            logger.debug(f"Skipping token {token!r}: not finite")
            continue
        yield value


def insert_tokens(dataset: Dataset, text: str) -> int:
    """Insert every parsable token of *text*; returns the number inserted."""
    return dataset.insert_many(parse_tokens(text))


def insert_from_file(dataset: Dataset, path: Union[str, Path]) -> int:
    """
    Insert values read from a file of whitespace-separated numbers.

    Args:
        dataset: Target dataset
        path: File to read

    Returns:
        Number of values inserted

    Raises:
        OSError: If the file cannot be opened
    """
    path = Path(path)
    # undecodable bytes become U+FFFD and the token is then skipped
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        text = f.read()
    inserted = insert_tokens(dataset, text)
    logger.info(f"Inserted {inserted} value(s) from {path}")
    return inserted


def insert_random(
    dataset: Dataset,
    count: int,
    low: int = 0,
    high: int = 100,
    rng: Optional[np.random.Generator] = None,
) -> int:
    """
    Insert *count* random integers drawn uniformly from [low, high].

    Args:
        dataset: Target dataset
        count: Number of values to draw
        low: Smallest possible value
        high: Largest possible value (inclusive)
        rng: numpy Generator; a fresh default_rng() if None

    Returns:
        Number of values inserted
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if low > high:
        raise ValueError(f"low ({low}) must not exceed high ({high})")

    rng = rng if rng is not None else np.random.default_rng()
    draws = rng.integers(low, high, size=count, endpoint=True)
    inserted = dataset.insert_many(float(x) for x in draws)
    logger.info(f"Inserted {inserted} random value(s) in [{low}, {high}]")
    return inserted
