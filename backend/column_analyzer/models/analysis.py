"""
Analysis result models.

Every result is a frozen dataclass built fresh for one analysis call and
exposing ``to_dict()`` so the rendering layer receives plain JSON data.
"""

import enum
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union

from ..core.exceptions import InsufficientDataError


class DataType(str, enum.Enum):
    """Inferred type of a column."""
    EMPTY = "Empty"
    DATE = "Date"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    CATEGORICAL = "Categorical"
    TEXT = "Text"

    @property
    def is_numeric(self) -> bool:
        return self in (DataType.INTEGER, DataType.FLOAT)


class BinKind(str, enum.Enum):
    """Binning strategy."""
    NUMERIC = "numeric"
    DATE = "date"
    CATEGORICAL = "categorical"


class TrendDirection(str, enum.Enum):
    UPWARD = "upward"
    DOWNWARD = "downward"
    STABLE = "stable"


BoundValue = Union[float, datetime, None]


def _bound_to_json(value: BoundValue) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _float_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


@dataclass(frozen=True)
class StatisticsSummary:
    """Descriptive statistics for one column."""
    count: int
    unique_count: int
    missing_count: int
    missing_pct: float
    value_range: Optional[Tuple[str, str]] = None
    mean: Optional[float] = None
    median: Optional[float] = None

    @property
    def range_label(self) -> str:
        if self.value_range is None:
            return "N/A"
        return f"{self.value_range[0]} to {self.value_range[1]}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "unique_count": self.unique_count,
            "missing_count": self.missing_count,
            "missing_pct": self.missing_pct,
            "range": list(self.value_range) if self.value_range else "N/A",
            "range_label": self.range_label,
            "mean": self.mean,
            "median": self.median,
        }


@dataclass(frozen=True)
class Bin:
    """A single histogram bucket."""
    label: str
    count: int
    lower_bound: BoundValue = None
    upper_bound: BoundValue = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "count": self.count,
            "lower_bound": _bound_to_json(self.lower_bound),
            "upper_bound": _bound_to_json(self.upper_bound),
        }


@dataclass(frozen=True)
class RegressionModel:
    """Ordinary least squares line: y = slope * x + intercept."""
    slope: float
    intercept: float

    @property
    def is_defined(self) -> bool:
        return math.isfinite(self.slope) and math.isfinite(self.intercept)

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slope": _float_or_none(self.slope),
            "intercept": _float_or_none(self.intercept),
        }


@dataclass(frozen=True)
class TrendLine:
    """Fitted regression line evaluated at each index of a series."""
    slope: float
    intercept: float
    values: Tuple[float, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "values": list(self.values),
        }


@dataclass(frozen=True)
class ForecastResult:
    """Linear-trend projection with a symmetric confidence band."""
    trend_slope: float
    intercept: float
    predicted_values: Tuple[float, ...]
    upper_bound: Tuple[float, ...]
    lower_bound: Tuple[float, ...]
    confidence_level: int
    t_value: float
    standard_error: float
    margin: float
    trend_direction: TrendDirection

    @property
    def horizon(self) -> int:
        return len(self.predicted_values)

    @property
    def next_value(self) -> float:
        return self.predicted_values[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trend_slope": self.trend_slope,
            "intercept": self.intercept,
            "trend_direction": self.trend_direction.value,
            "predicted_values": list(self.predicted_values),
            "upper_bound": list(self.upper_bound),
            "lower_bound": list(self.lower_bound),
            "confidence_level": self.confidence_level,
            "t_value": self.t_value,
            "standard_error": self.standard_error,
            "margin": self.margin,
            "next_value": self.next_value,
            "horizon": self.horizon,
        }


@dataclass(frozen=True)
class ForecastFailure:
    """Why a forecast was not produced."""
    reason: str
    message: str
    required: Optional[int] = None
    available: Optional[int] = None

    @classmethod
    def from_error(cls, error: InsufficientDataError) -> "ForecastFailure":
        return cls(
            reason=error.reason,
            message=str(error),
            required=error.required,
            available=error.available,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason,
            "message": self.message,
            "required": self.required,
            "available": self.available,
        }


@dataclass(frozen=True)
class ColumnAnalysis:
    """Everything computed for one column."""
    column: str
    data_type: DataType
    total_rows: int
    stats: StatisticsSummary
    bin_kind: Optional[BinKind] = None
    bins: Tuple[Bin, ...] = ()
    trend: Optional[TrendLine] = None
    smoothed: Optional[Tuple[float, ...]] = None
    forecast: Optional[ForecastResult] = None
    forecast_error: Optional[ForecastFailure] = None

    @property
    def can_forecast(self) -> bool:
        return self.data_type.is_numeric

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "data_type": self.data_type.value,
            "total_rows": self.total_rows,
            "can_forecast": self.can_forecast,
            "stats": self.stats.to_dict(),
            "bin_kind": self.bin_kind.value if self.bin_kind else None,
            "bins": [b.to_dict() for b in self.bins],
            "trend": self.trend.to_dict() if self.trend else None,
            "smoothed": list(self.smoothed) if self.smoothed is not None else None,
            "forecast": self.forecast.to_dict() if self.forecast else None,
            "forecast_error": self.forecast_error.to_dict() if self.forecast_error else None,
        }


@dataclass(frozen=True)
class DatasetAnalysis:
    """Per-column analyses for a whole dataset."""
    row_count: int
    columns: Tuple[str, ...]
    analyses: Dict[str, ColumnAnalysis] = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_count": self.row_count,
            "columns": list(self.columns),
            "analyses": {name: a.to_dict() for name, a in self.analyses.items()},
            "errors": dict(self.errors),
        }

