"""Averaging and formatting helpers shared by every report statistic."""

import math
from datetime import datetime
from typing import Iterable, Optional


def safe_average(values: Optional[Iterable[float]]) -> float:
    """Return the mean of values, or 0 when there are none.

    Summation is plain left-to-right so results are reproducible.
    """
    if values is None:
        return 0
    total = 0
    count = 0
    for value in values:
        total += value
        count += 1
    if count == 0:
        return 0
    return total / count


def format_stat(value: Optional[float]) -> str:
    """Render a statistic with exactly two decimals ("0.00" for 0 or missing)."""
    if not value or math.isnan(value):
        return '0.00'
    return f"{value:.2f}"


def hours_between(start: datetime, end: datetime) -> float:
    """Fractional hours from start to end (negative if end is earlier)."""
    return (end - start).total_seconds() / 3600
