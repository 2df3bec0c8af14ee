"""
Tests for the OLS regression engine.
"""

import math

import pytest

from column_analyzer.core.exceptions import InsufficientDataError
from column_analyzer.services.regression import fit, fit_series, standard_error, trend_line


@pytest.mark.parametrize("slope,intercept", [(2.5, -1.0), (-0.75, 10.0), (0.0, 4.0)])
def test_fit_recovers_linear_series(slope, intercept):
    xs = list(range(12))
    ys = [slope * x + intercept for x in xs]
    model = fit(xs, ys)

    assert model.slope == pytest.approx(slope)
    assert model.intercept == pytest.approx(intercept)


def test_fit_series_uses_indices(linear_series):
    model = fit_series(linear_series)
    assert model.slope == pytest.approx(1.0)
    assert model.intercept == pytest.approx(1.0)


def test_single_point_slope_is_undefined():
    model = fit([0], [5.0])
    assert math.isnan(model.slope)
    assert not model.is_defined
    assert model.to_dict() == {"slope": None, "intercept": None}


def test_identical_xs_slope_is_undefined():
    assert not fit([1, 1, 1], [1, 2, 3]).is_defined


def test_fit_rejects_bad_input():
    with pytest.raises(ValueError):
        fit([], [])
    with pytest.raises(ValueError):
        fit([0, 1], [1.0])


def test_standard_error_of_perfect_fit_is_zero(linear_series):
    model = fit_series(linear_series)
    assert standard_error(linear_series, model) == pytest.approx(0.0)


def test_standard_error_known_value():
    # slope 0.5, intercept 1.5, residuals -0.5, 1, -0.5 -> sqrt(1.5 / 1)
    values = [1.0, 3.0, 2.0]
    model = fit_series(values)
    assert standard_error(values, model) == pytest.approx(math.sqrt(1.5))


def test_standard_error_needs_three_points():
    values = [1.0, 2.0]
    with pytest.raises(InsufficientDataError) as exc_info:
        standard_error(values, fit_series(values))
    assert exc_info.value.required == 3
    assert exc_info.value.available == 2


def test_trend_line_values():
    line = trend_line([1.0, 2.0, 3.0])
    assert line.values == pytest.approx((1.0, 2.0, 3.0))
    assert line.slope == pytest.approx(1.0)


def test_trend_line_undefined_for_single_value():
    assert trend_line([7.0]) is None
    assert trend_line([]) is None
