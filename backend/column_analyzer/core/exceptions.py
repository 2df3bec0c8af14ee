"""
Domain exceptions for the column analyzer.

The analysis core raises these; the orchestrator converts forecast
failures into ForecastFailure results and the API maps the rest onto
HTTP status codes.
"""


class ColumnAnalyzerError(Exception):
    """Base class for all column analyzer errors."""


class InsufficientDataError(ColumnAnalyzerError, ValueError):
    """Raised when a computation needs more observations than it was given."""

    reason = "insufficient_data"

    def __init__(self, required: int, available: int, message: str = None):
        self.required = required
        self.available = available
        if message is None:
            message = (
                f"At least {required} numeric values are required, "
                f"got {available}"
            )
        super().__init__(message)


class IngestionError(ColumnAnalyzerError, ValueError):
    """Raised when an uploaded file cannot be turned into rows."""


class ColumnNotFoundError(ColumnAnalyzerError, KeyError):
    """Raised when a requested column is not present in the dataset."""

    def __init__(self, column: str):
        self.column = column
        super().__init__(column)

    def __str__(self) -> str:
        return f"Column not found: {self.column}"


class InvalidOptionError(ColumnAnalyzerError, ValueError):
    """Raised when an analysis option is outside its allowed range."""

    def __init__(self, option: str, value: int):
        self.option = option
        self.value = value
        super().__init__(f"{option} must be >= 1, got {value}")
