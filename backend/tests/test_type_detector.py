"""
Tests for column type detection.
"""

import pytest

from column_analyzer.models.analysis import DataType
from column_analyzer.services.type_detector import TypeDetector, detect_data_type


def test_detect_integer():
    assert detect_data_type(["1", "2", "3", "4"]) == DataType.INTEGER


def test_detect_float():
    assert detect_data_type(["1.5", "2.25"]) == DataType.FLOAT


def test_detect_boolean_with_synonyms():
    assert detect_data_type(["true", "false", "yes"]) == DataType.BOOLEAN


def test_detect_boolean_python_bools():
    assert detect_data_type([True, False, True]) == DataType.BOOLEAN


def test_detect_date():
    assert detect_data_type(["2023-01-01", "2023-02-01", "2023-03-01"]) == DataType.DATE


def test_detect_text_above_categorical_ratio():
    # 3 distinct out of 5 is 0.6, above the 0.2 limit
    assert detect_data_type(["red", "blue", "red", "green", "red"]) == DataType.TEXT


def test_detect_categorical_at_ratio_boundary():
    values = ["red"] * 8 + ["blue"] * 2
    assert detect_data_type(values) == DataType.CATEGORICAL


@pytest.mark.parametrize("values", [[], [""], ["  ", ""]])
def test_detect_empty(values):
    assert detect_data_type(values) == DataType.EMPTY


def test_numeric_check_precedes_categorical():
    assert detect_data_type(["5"] * 10) == DataType.INTEGER
    assert detect_data_type(["2.5"] * 10) == DataType.FLOAT


def test_integral_floats_are_integers():
    assert detect_data_type([1, 2.0, "3"]) == DataType.INTEGER


def test_numeric_share_must_exceed_threshold():
    # 4 of 5 numeric is exactly 0.8, not above it
    assert detect_data_type(["1", "2", "3", "4", "x"]) == DataType.TEXT


def test_mostly_non_dates_fall_through():
    values = ["2023-01-01", "2023-01-02", "5", "6", "7"]
    assert detect_data_type(values) == DataType.TEXT


def test_custom_thresholds():
    detector = TypeDetector(match_threshold=0.5, categorical_ratio=0.5)
    assert detector.detect(["1", "2", "x"]) == DataType.INTEGER
    assert detector.detect(["a", "b", "a", "b"]) == DataType.CATEGORICAL


def test_ordinal_labels_are_not_dates():
    assert detect_data_type(["1st", "2nd", "3rd", "4th", "5th"]) == DataType.TEXT


def test_boolean_requires_every_token_to_be_boolean():
    assert detect_data_type(["Yes", "NO", "1", "false"]) == DataType.BOOLEAN
    assert detect_data_type(["yes", "maybe", "no"]) == DataType.TEXT
