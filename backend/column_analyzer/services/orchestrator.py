"""
Analysis Orchestrator — one column in, one ColumnAnalysis out

Pipeline per column:
  1. drop missing cells (None / NaN)
  2. detect the data type
  3. summarize and bin using the type's strategy
  4. trend line and moving average for the series view
  5. forecast, only when requested and only for numeric columns

Options are checked before any work; an out-of-range one raises
``InvalidOptionError``. Forecast failures come back as ``ForecastFailure``
on the result rather than as exceptions, and a column that blows up in
``analyze_dataset`` is recorded under ``errors`` without stopping the other columns.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import ColumnNotFoundError, InsufficientDataError, InvalidOptionError
from ..models.analysis import (
    BinKind,
    ColumnAnalysis,
    DatasetAnalysis,
    DataType,
    ForecastFailure,
)
from . import binner, descriptive_stats, forecaster, regression, smoothing
from .type_detector import detect_data_type
from .value_parsing import is_missing, parse_date, parse_number, stringify, to_timestamp_ms

logger = logging.getLogger("column_analyzer.orchestrator")

BIN_STRATEGY: Dict[DataType, Optional[BinKind]] = {
    DataType.INTEGER: BinKind.NUMERIC,
    DataType.FLOAT: BinKind.NUMERIC,
    DataType.DATE: BinKind.DATE,
    DataType.BOOLEAN: BinKind.CATEGORICAL,
    DataType.CATEGORICAL: BinKind.CATEGORICAL,
    DataType.TEXT: BinKind.CATEGORICAL,
    DataType.EMPTY: None,
}


def column_names(rows: Sequence[Dict[str, Any]]) -> List[str]:
    """Column list of a dataset, taken from the keys of its first row."""
    if not rows:
        return []
    return [str(k) for k in rows[0].keys()]


def extract_column(rows: Sequence[Dict[str, Any]], name: str) -> List[Any]:
    """Values of one column in row order; absent keys read as None."""
    if name not in column_names(rows):
        raise ColumnNotFoundError(name)
    return [row.get(name) for row in rows]


def analyze_column(
    name: str,
    column: Sequence[Any],
    total_row_count: Optional[int] = None,
    include_forecast: bool = False,
    horizon: Optional[int] = None,
    confidence_level: Optional[int] = None,
    bin_count: Optional[int] = None,
    smoothing_window: Optional[int] = None,
) -> ColumnAnalysis:
    """
    Analyze one column.

    Args:
        name: column name
        column: raw values in row order, missing cells included
        total_row_count: rows in the dataset (defaults to len(column))
        include_forecast: attempt a forecast for numeric columns
        horizon: forecast length
        confidence_level: 90, 95 or 99
        bin_count: fixed bin count for numeric/date bins
        smoothing_window: moving average window
    """
    _check_options(horizon=horizon, bin_count=bin_count, smoothing_window=smoothing_window)

    if total_row_count is None:
        total_row_count = len(column)

    values = [v for v in column if not is_missing(v)]
    data_type = detect_data_type(values)
    stats = descriptive_stats.summarize(values, total_row_count, data_type)

    bin_kind = BIN_STRATEGY[data_type]
    bins = binner.compute_bins(values, bin_kind, bin_count) if bin_kind else []

    series = _trend_series(values, data_type)
    trend = regression.trend_line(series) if series else None

    numbers: List[float] = []
    smoothed = None
    if data_type.is_numeric:
        numbers = [n for n in (parse_number(v) for v in values) if n is not None]
        smoothed = tuple(smoothing.smooth(numbers, smoothing_window))

    forecast_result = None
    forecast_error = None
    if include_forecast:
        if not data_type.is_numeric:
            forecast_error = ForecastFailure(
                reason="not_numeric",
                message=f"Column '{name}' is {data_type.value}; forecasts need Integer or Float data",
            )
        else:
            try:
                forecast_result = forecaster.forecast(numbers, horizon, confidence_level)
            except InsufficientDataError as e:
                forecast_error = ForecastFailure.from_error(e)

    logger.debug(
        "analyze_column '%s': %d values, type=%s, %d bins",
        name, len(values), data_type.value, len(bins),
    )

    return ColumnAnalysis(
        column=name,
        data_type=data_type,
        total_rows=total_row_count,
        stats=stats,
        bin_kind=bin_kind,
        bins=tuple(bins),
        trend=trend,
        smoothed=smoothed,
        forecast=forecast_result,
        forecast_error=forecast_error,
    )


def analyze_rows(
    rows: Sequence[Dict[str, Any]],
    column: str,
    **options: Any,
) -> ColumnAnalysis:
    """Analyze one named column of a row dataset."""
    values = extract_column(rows, column)
    return analyze_column(column, values, total_row_count=len(rows), **options)


def analyze_dataset(
    rows: Sequence[Dict[str, Any]],
    include_forecast: bool = False,
    **options: Any,
) -> DatasetAnalysis:
    """Analyze every column; one failing column does not block the rest."""
    _check_options(
        horizon=options.get("horizon"),
        bin_count=options.get("bin_count"),
        smoothing_window=options.get("smoothing_window"),
    )
    columns = column_names(rows)
    logger.info("analyze_dataset: %d rows, %d columns", len(rows), len(columns))

    analyses: Dict[str, ColumnAnalysis] = {}
    errors: Dict[str, str] = {}
    for name in columns:
        try:
            analyses[name] = analyze_rows(
                rows, name, include_forecast=include_forecast, **options
            )
        except Exception as e:
            logger.exception("analyze_dataset: column '%s' failed", name)
            errors[name] = str(e)

    return DatasetAnalysis(
        row_count=len(rows),
        columns=tuple(columns),
        analyses=analyses,
        errors=errors,
    )


def _check_options(**options: Optional[int]) -> None:
    for name, value in options.items():
        if value is not None and value < 1:
            raise InvalidOptionError(name, value)


def _trend_series(values: Sequence[Any], data_type: DataType) -> List[float]:
    """Numeric view of a column for the trend line."""
    if data_type == DataType.EMPTY:
        return []
    if data_type.is_numeric:
        return [n for n in (parse_number(v) for v in values) if n is not None]
    if data_type == DataType.DATE:
        return [to_timestamp_ms(d) for d in (parse_date(v) for v in values) if d is not None]

    # Categorical/Text/Boolean: position of each value among the distinct
    # values in order of first appearance
    positions: Dict[str, int] = {}
    series = []
    for v in values:
        key = stringify(v)
        if key not in positions:
            positions[key] = len(positions)
        series.append(float(positions[key]))
    return series
