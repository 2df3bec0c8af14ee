"""
Type Detector — classify a column from its raw values

Checks run in a fixed order and the first match wins:

    Empty -> Date -> Integer/Float -> Boolean -> Categorical -> Text

Numeric detection runs before the categorical check, so a column of
repeated numeric strings is still Integer or Float.
"""

import logging
from typing import Any, Optional, Sequence

from ..core.config import settings
from ..models.analysis import DataType
from .value_parsing import is_blank, parse_date, parse_number, stringify

logger = logging.getLogger("column_analyzer.type_detector")

# Spellings of the two truth values; "yes", "true" and "1" are the same value
BOOLEAN_TOKENS = frozenset({"true", "yes", "1", "false", "no", "0"})


class TypeDetector:
    """
    Infers the DataType of a column.

    Args:
        match_threshold: share of values that must parse as a date or a
            number for the column to take that type (strictly greater).
        categorical_ratio: distinct/total ratio at or below which a
            column is categorical.
    """

    def __init__(
        self,
        match_threshold: Optional[float] = None,
        categorical_ratio: Optional[float] = None,
    ):
        self.match_threshold = (
            settings.TYPE_MATCH_THRESHOLD if match_threshold is None else match_threshold
        )
        self.categorical_ratio = (
            settings.CATEGORICAL_MAX_RATIO if categorical_ratio is None else categorical_ratio
        )

    def detect(self, values: Sequence[Any]) -> DataType:
        total = len(values)
        if total == 0:
            return DataType.EMPTY

        sample = next((v for v in values if not is_blank(v)), None)
        if sample is None:
            return DataType.EMPTY

        if parse_date(sample) is not None:
            date_count = sum(1 for v in values if parse_date(v) is not None)
            if date_count / total > self.match_threshold:
                return DataType.DATE

        numbers = [n for n in (parse_number(v) for v in values) if n is not None]
        if len(numbers) / total > self.match_threshold:
            if all(n.is_integer() for n in numbers):
                return DataType.INTEGER
            return DataType.FLOAT

        lowered = {stringify(v).lower() for v in values}
        if lowered <= BOOLEAN_TOKENS:
            return DataType.BOOLEAN

        distinct = len({stringify(v) for v in values})
        if distinct <= total * self.categorical_ratio:
            return DataType.CATEGORICAL

        return DataType.TEXT


def detect_data_type(values: Sequence[Any]) -> DataType:
    """Classify values with the configured thresholds."""
    data_type = TypeDetector().detect(values)
    logger.debug("detect_data_type: %d values -> %s", len(values), data_type.value)
    return data_type
