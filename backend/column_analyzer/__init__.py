"""Column Analyzer: type inference, statistics, binning and trend forecasting for tabular columns."""

__version__ = "0.1.0"
