"""
Descriptive Statistics: per-column summary

Counts, missingness and range for every type; mean and median for
numeric columns. An empty numeric or date subset yields "N/A" and
undefined (None) statistics instead of NaN.
"""

import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from ..core.config import settings
from ..models.analysis import DataType, StatisticsSummary
from .value_parsing import parse_date, parse_number, stringify

logger = logging.getLogger("column_analyzer.stats")


def summarize(
    column_values: Sequence[Any],
    total_row_count: int,
    data_type: DataType,
) -> StatisticsSummary:
    """
    Summarize a column whose missing values were already dropped.

    Args:
        column_values: non-missing raw values
        total_row_count: rows in the dataset, including missing cells
        data_type: detected type of the column
    """
    count = len(column_values)
    missing = max(total_row_count - count, 0)
    summary = dict(
        count=count,
        unique_count=len({stringify(v) for v in column_values}),
        missing_count=missing,
        missing_pct=round(missing / total_row_count * 100, 1) if total_row_count > 0 else 0.0,
    )

    if data_type.is_numeric:
        numbers = [n for n in (parse_number(v) for v in column_values) if n is not None]
        if numbers:
            summary["value_range"] = (f"{min(numbers):.2f}", f"{max(numbers):.2f}")
            summary["mean"] = mean(numbers)
            summary["median"] = median(numbers)
        else:
            logger.warning("summarize: %s column has no finite numbers", data_type.value)

    elif data_type == DataType.DATE:
        dates = [d for d in (parse_date(v) for v in column_values) if d is not None]
        if dates:
            fmt = settings.DATE_DISPLAY_FORMAT
            summary["value_range"] = (min(dates).strftime(fmt), max(dates).strftime(fmt))

    return StatisticsSummary(**summary)


def mean(numbers: List[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty list."""
    if not numbers:
        return None
    return float(np.mean(numbers))


def median(numbers: List[float]) -> Optional[float]:
    """Middle value, averaging the two middle values for even counts."""
    if not numbers:
        return None
    ordered = sorted(numbers)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]
