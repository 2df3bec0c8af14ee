"""
Dataset API Endpoints

Input side of the analyzer: turns an uploaded CSV into rows and reports
the column list the caller can pick from.
"""

from fastapi import APIRouter, HTTPException, UploadFile, File, Query

from ..core.exceptions import IngestionError
from ..services.ingestion import ingestion_service
from ..services.orchestrator import column_names

router = APIRouter(prefix="/datasets", tags=["Datasets"])


@router.post("/columns")
async def list_columns(file: UploadFile = File(...)):
    """Parse a CSV and return its columns and row count."""
    content = await file.read()
    try:
        rows = ingestion_service.parse_file(content, file.filename or "")
    except IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "filename": file.filename,
        "row_count": len(rows),
        "columns": column_names(rows),
    }


@router.post("/rows")
async def parse_rows(
    file: UploadFile = File(...),
    limit: int = Query(default=1000, ge=1, le=100_000),
    offset: int = Query(default=0, ge=0),
):
    """Parse a CSV and return a page of its rows."""
    content = await file.read()
    try:
        rows = ingestion_service.parse_file(content, file.filename or "")
    except IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    page = rows[offset:offset + limit]
    return {
        "filename": file.filename,
        "row_count": len(rows),
        "columns": column_names(rows),
        "rows": page,
        "count": len(page),
        "limit": limit,
        "offset": offset,
    }
