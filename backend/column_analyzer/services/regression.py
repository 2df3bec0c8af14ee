"""
Regression Engine — ordinary least squares on index-vs-value series

Closed form:

    slope     = (n·Σxy − Σx·Σy) / (n·Σx² − (Σx)²)
    intercept = (Σy − slope·Σx) / n

A zero denominator (one point, or identical xs) yields NaN slope and
intercept; callers check ``RegressionModel.is_defined``.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..core.exceptions import InsufficientDataError
from ..models.analysis import RegressionModel, TrendLine

logger = logging.getLogger("column_analyzer.regression")

# Residual standard error divides by n - 2
MIN_POINTS_FOR_STANDARD_ERROR = 3


def fit(xs: Sequence[float], ys: Sequence[float]) -> RegressionModel:
    """Fit y = slope·x + intercept by ordinary least squares."""
    if len(xs) != len(ys):
        raise ValueError(f"xs and ys differ in length: {len(xs)} != {len(ys)}")
    if len(xs) == 0:
        raise ValueError("cannot fit a regression to an empty series")

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    n = len(x)

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        logger.debug("fit: zero denominator for n=%d, slope undefined", n)
        return RegressionModel(slope=math.nan, intercept=math.nan)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return RegressionModel(slope=slope, intercept=intercept)


def fit_series(values: Sequence[float]) -> RegressionModel:
    """Fit values against their indices 0..n-1."""
    return fit(range(len(values)), values)


def standard_error(values: Sequence[float], model: RegressionModel) -> float:
    """
    Residual standard error sqrt(Σ residual² / (n − 2)) of a series fit
    against its indices.

    Raises:
        InsufficientDataError: fewer than three values
    """
    n = len(values)
    if n < MIN_POINTS_FOR_STANDARD_ERROR:
        raise InsufficientDataError(required=MIN_POINTS_FOR_STANDARD_ERROR, available=n)

    y = np.asarray(values, dtype=float)
    predicted = model.slope * np.arange(n) + model.intercept
    residuals = y - predicted
    return float(np.sqrt((residuals ** 2).sum() / (n - 2)))


def trend_line(values: Sequence[float]) -> Optional[TrendLine]:
    """Fitted line at every index of the series, or None if undefined."""
    if len(values) == 0:
        return None
    model = fit_series(values)
    if not model.is_defined:
        return None
    fitted = tuple(model.predict(i) for i in range(len(values)))
    return TrendLine(slope=model.slope, intercept=model.intercept, values=fitted)
