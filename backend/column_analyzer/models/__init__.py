from .analysis import (
    Bin,
    BinKind,
    ColumnAnalysis,
    DatasetAnalysis,
    DataType,
    ForecastFailure,
    ForecastResult,
    RegressionModel,
    StatisticsSummary,
    TrendDirection,
    TrendLine,
)

__all__ = [
    "Bin",
    "BinKind",
    "ColumnAnalysis",
    "DatasetAnalysis",
    "DataType",
    "ForecastFailure",
    "ForecastResult",
    "RegressionModel",
    "StatisticsSummary",
    "TrendDirection",
    "TrendLine",
]
