"""
Tests for linear-trend forecasting.
"""

import math

import pytest

from column_analyzer.core.config import settings
from column_analyzer.core.exceptions import InsufficientDataError
from column_analyzer.models.analysis import TrendDirection
from column_analyzer.services.forecaster import (
    DEFAULT_T_VALUE,
    T_VALUES,
    forecast,
    get_t_value,
    trend_direction,
)


def test_perfectly_linear_series(linear_series):
    result = forecast(linear_series, horizon=2, confidence_level=95)

    assert result.predicted_values == pytest.approx((6.0, 7.0))
    assert result.margin == pytest.approx(0.0)
    assert result.trend_slope == pytest.approx(1.0)
    assert result.next_value == pytest.approx(6.0)
    assert result.trend_direction == TrendDirection.UPWARD


def test_band_width_is_constant(noisy_series):
    result = forecast(noisy_series, horizon=6, confidence_level=90)

    assert result.margin > 0
    for upper, lower in zip(result.upper_bound, result.lower_bound):
        assert upper - lower == pytest.approx(2 * result.margin)


def test_margin_uses_t_value():
    result = forecast([1.0, 3.0, 2.0], horizon=1, confidence_level=99)

    assert result.t_value == 2.576
    assert result.standard_error == pytest.approx(math.sqrt(1.5))
    assert result.margin == pytest.approx(2.576 * math.sqrt(1.5))


def test_t_value_table():
    assert T_VALUES == {90: 1.645, 95: 1.96, 99: 2.576}
    assert get_t_value(90) == 1.645
    assert get_t_value(99) == 2.576


@pytest.mark.parametrize("level", [80, 50, 0, 100])
def test_unknown_confidence_level_falls_back(level, linear_series):
    assert get_t_value(level) == DEFAULT_T_VALUE == 1.96
    result = forecast(linear_series, horizon=1, confidence_level=level)
    assert result.confidence_level == level
    assert result.t_value == 1.96


def test_defaults(linear_series):
    result = forecast(linear_series)
    assert result.horizon == settings.DEFAULT_FORECAST_HORIZON
    assert result.confidence_level == settings.DEFAULT_CONFIDENCE_LEVEL


@pytest.mark.parametrize("series", [[], [1.0], [1.0, 2.0]])
def test_insufficient_data(series):
    with pytest.raises(InsufficientDataError) as exc_info:
        forecast(series, horizon=3)
    assert exc_info.value.available == len(series)
    assert exc_info.value.reason == "insufficient_data"


def test_invalid_horizon(linear_series):
    with pytest.raises(ValueError):
        forecast(linear_series, horizon=0)


def test_trend_direction():
    assert trend_direction(0.2) == TrendDirection.UPWARD
    assert trend_direction(-0.2) == TrendDirection.DOWNWARD
    assert trend_direction(0.0) == TrendDirection.STABLE


def test_flat_series_is_stable():
    result = forecast([4.0, 4.0, 4.0, 4.0], horizon=2)
    assert result.trend_direction == TrendDirection.STABLE
    assert result.predicted_values == pytest.approx((4.0, 4.0))


def test_to_dict_shape(linear_series):
    data = forecast(linear_series, horizon=3).to_dict()
    assert data["horizon"] == 3
    assert data["trend_direction"] == "upward"
    assert len(data["upper_bound"]) == len(data["lower_bound"]) == 3
