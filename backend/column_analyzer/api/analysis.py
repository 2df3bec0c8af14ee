"""
Analysis API Endpoints

Stateless column analysis: every request carries its own data and gets a
freshly computed result. Nothing is stored between requests.
"""

from fastapi import APIRouter, HTTPException, UploadFile, File, Query
from fastapi.responses import JSONResponse
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
import logging

from ..core.config import settings
from ..core.exceptions import (
    ColumnNotFoundError,
    IngestionError,
    InsufficientDataError,
    InvalidOptionError,
)
from ..models.analysis import ForecastFailure
from ..services import forecaster, orchestrator
from ..services.ingestion import ingestion_service
from ..services.value_parsing import parse_number

logger = logging.getLogger("column_analyzer.api.analysis")

router = APIRouter(prefix="/analysis", tags=["Analysis"])


# Pydantic models for API
class ForecastOptions(BaseModel):
    include_forecast: bool = False
    horizon: int = Field(default_factory=lambda: settings.DEFAULT_FORECAST_HORIZON, ge=1, le=1000)
    confidence_level: int = Field(
        default_factory=lambda: settings.DEFAULT_CONFIDENCE_LEVEL,
        description="90, 95 or 99; other values use the 95% t-value",
    )


class ColumnAnalysisRequest(ForecastOptions):
    rows: List[Dict[str, Any]]
    column: str
    bin_count: Optional[int] = Field(None, ge=1, le=200, description="Fixed bin count for numeric/date bins")
    smoothing_window: Optional[int] = Field(None, ge=1, description="Moving average window")


class ForecastRequest(BaseModel):
    values: List[Any]
    horizon: int = Field(default_factory=lambda: settings.DEFAULT_FORECAST_HORIZON, ge=1, le=1000)
    confidence_level: int = Field(default_factory=lambda: settings.DEFAULT_CONFIDENCE_LEVEL)


@router.post("/column")
async def analyze_column(request: ColumnAnalysisRequest):
    """Analyze one column of a row dataset."""
    if not request.rows:
        raise HTTPException(status_code=400, detail="Dataset has no rows")

    try:
        result = orchestrator.analyze_rows(
            request.rows,
            request.column,
            include_forecast=request.include_forecast,
            horizon=request.horizon,
            confidence_level=request.confidence_level,
            bin_count=request.bin_count,
            smoothing_window=request.smoothing_window,
        )
    except ColumnNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOptionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


@router.post("/upload")
async def analyze_upload(
    file: UploadFile = File(...),
    column: Optional[str] = Query(default=None, description="Column to analyze; all columns if omitted"),
    include_forecast: bool = Query(default=False),
    horizon: int = Query(default=settings.DEFAULT_FORECAST_HORIZON, ge=1, le=1000),
    confidence_level: int = Query(default=settings.DEFAULT_CONFIDENCE_LEVEL),
):
    """Parse an uploaded CSV and analyze one column, or every column."""
    content = await file.read()
    try:
        rows = ingestion_service.parse_file(content, file.filename or "")
    except IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("analyze_upload: %s, %d rows, column=%s", file.filename, len(rows), column)

    options = dict(
        include_forecast=include_forecast,
        horizon=horizon,
        confidence_level=confidence_level,
    )

    if column is None:
        return orchestrator.analyze_dataset(rows, **options).to_dict()

    try:
        result = orchestrator.analyze_rows(rows, column, **options)
    except ColumnNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return result.to_dict()


@router.post("/forecast")
async def forecast_series(request: ForecastRequest):
    """
    Forecast a numeric series.

    Non-numeric entries are skipped. Fewer than three numbers gives a
    422 carrying the failure details.
    """
    numbers = [n for n in (parse_number(v) for v in request.values) if n is not None]

    try:
        result = forecaster.forecast(numbers, request.horizon, request.confidence_level)
    except InsufficientDataError as e:
        failure = ForecastFailure.from_error(e)
        return JSONResponse(status_code=422, content={"detail": failure.to_dict()})

    return result.to_dict()
