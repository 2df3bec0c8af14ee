"""
Forecaster — linear-trend projection with confidence bands

Fits OLS over indices 0..n-1, projects ``horizon`` points past the end
of the series and brackets each prediction with ±margin, where

    margin = t(confidence_level) × residual standard error

The t-values are a three-point normal approximation. Unrecognised
confidence levels fall back to DEFAULT_T_VALUE (the 95% value).
"""

import logging
from typing import Dict, Optional, Sequence

from ..core.config import settings
from ..core.exceptions import InsufficientDataError
from ..models.analysis import ForecastResult, TrendDirection
from . import regression

logger = logging.getLogger("column_analyzer.forecaster")

T_VALUES: Dict[int, float] = {
    90: 1.645,
    95: 1.96,
    99: 2.576,
}

DEFAULT_T_VALUE = T_VALUES[95]

MIN_FORECAST_POINTS = regression.MIN_POINTS_FOR_STANDARD_ERROR


def get_t_value(confidence_level: int) -> float:
    """Critical value for a confidence level, 1.96 when not in T_VALUES."""
    return T_VALUES.get(confidence_level, DEFAULT_T_VALUE)


def trend_direction(slope: float) -> TrendDirection:
    if slope > 0:
        return TrendDirection.UPWARD
    if slope < 0:
        return TrendDirection.DOWNWARD
    return TrendDirection.STABLE


def forecast(
    series: Sequence[float],
    horizon: Optional[int] = None,
    confidence_level: Optional[int] = None,
) -> ForecastResult:
    """
    Project a numeric series forward.

    Args:
        series: observed values in order
        horizon: number of future points (default DEFAULT_FORECAST_HORIZON)
        confidence_level: 90, 95 or 99 (default DEFAULT_CONFIDENCE_LEVEL)

    Raises:
        InsufficientDataError: fewer than three observations
        ValueError: horizon below 1
    """
    if horizon is None:
        horizon = settings.DEFAULT_FORECAST_HORIZON
    if confidence_level is None:
        confidence_level = settings.DEFAULT_CONFIDENCE_LEVEL
    if horizon < 1:
        raise ValueError(f"horizon must be >= 1, got {horizon}")

    n = len(series)
    if n < MIN_FORECAST_POINTS:
        logger.warning("forecast: refused, %d values (need %d)", n, MIN_FORECAST_POINTS)
        raise InsufficientDataError(required=MIN_FORECAST_POINTS, available=n)

    model = regression.fit_series(series)
    std_error = regression.standard_error(series, model)
    t_value = get_t_value(confidence_level)
    if confidence_level not in T_VALUES:
        logger.debug("forecast: unknown confidence level %s, using t=%.3f", confidence_level, t_value)
    margin = t_value * std_error

    predicted = tuple(model.predict(n + i) for i in range(horizon))
    logger.info(
        "forecast: n=%d horizon=%d level=%s slope=%.4f margin=%.4f",
        n, horizon, confidence_level, model.slope, margin,
    )

    return ForecastResult(
        trend_slope=model.slope,
        intercept=model.intercept,
        predicted_values=predicted,
        upper_bound=tuple(p + margin for p in predicted),
        lower_bound=tuple(p - margin for p in predicted),
        confidence_level=confidence_level,
        t_value=t_value,
        standard_error=std_error,
        margin=margin,
        trend_direction=trend_direction(model.slope),
    )
