"""
Ingestion Service: CSV bytes to row dictionaries

Turns an uploaded CSV into the row format the orchestrator consumes:
a list of ``{column: value}`` dicts, with empty cells as None and
numeric cells already typed. The column list is the first row's keys.
"""

import codecs
import csv
import io
import logging
from typing import Any, Dict, List

import numpy as np
import pandas as pd

from ..core.config import settings
from ..core.exceptions import IngestionError

logger = logging.getLogger("column_analyzer.ingestion")


class IngestionService:
    """Parses uploaded tabular files into rows."""

    def __init__(self, max_file_size_mb: int = None):
        self.max_file_size_mb = max_file_size_mb or settings.MAX_FILE_SIZE_MB

    def parse_file(self, content: bytes, filename: str) -> List[Dict[str, Any]]:
        """
        Parse an uploaded file.

        Raises:
            IngestionError: unsupported extension, oversize, empty or
                unparseable content
        """
        ext = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
        if ext not in settings.SUPPORTED_FORMATS:
            raise IngestionError(f"Unsupported file type '{filename}': please upload a CSV file")

        size_mb = len(content) / (1024 * 1024)
        if size_mb > self.max_file_size_mb:
            raise IngestionError(
                f"File is {size_mb:.1f}MB, larger than the {self.max_file_size_mb}MB limit"
            )

        return self.parse_csv(content)

    def parse_csv(self, content: bytes) -> List[Dict[str, Any]]:
        if not content or not content.strip():
            raise IngestionError("Empty or invalid CSV file")

        sample = content[:8192]
        encoding = self._detect_encoding(sample)
        delimiter = self._detect_delimiter(sample.decode(encoding, errors="replace"))
        logger.info("Detected encoding=%s, delimiter=%r", encoding, delimiter)

        try:
            df = pd.read_csv(
                io.BytesIO(content),
                encoding=encoding,
                sep=delimiter,
                on_bad_lines="skip",
                skip_blank_lines=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise IngestionError(f"Error parsing CSV file: {e}") from e

        df.columns = [str(c).strip() for c in df.columns]
        df.dropna(how="all", inplace=True)
        if df.empty:
            raise IngestionError("Empty or invalid CSV file")

        rows = [
            {col: _to_python(value) for col, value in record.items()}
            for record in df.to_dict(orient="records")
        ]
        logger.info("parse_csv: %d rows, %d columns", len(rows), len(df.columns))
        return rows

    def _detect_encoding(self, sample: bytes) -> str:
        """
        Detect text encoding from sample bytes.

        The sample may end mid-character, so it is fed to an incremental
        decoder that holds back an incomplete trailing sequence.
        latin-1 decodes any byte string and comes last.
        """
        for encoding in ("utf-8-sig", "utf-8", "cp1252", "latin-1"):
            try:
                codecs.getincrementaldecoder(encoding)().decode(sample, final=False)
                return encoding
            except (UnicodeDecodeError, LookupError):
                continue
        return "utf-8"

    def _detect_delimiter(self, sample: str) -> str:
        """Detect CSV delimiter from sample text."""
        try:
            dialect = csv.Sniffer().sniff(sample[:4096], delimiters=",;\t|")
            return dialect.delimiter
        except csv.Error:
            return ","


def _to_python(value: Any) -> Any:
    """Numpy scalars to Python values; NaN and infinities to None."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not np.isfinite(value):
        return None
    return value


ingestion_service = IngestionService()
