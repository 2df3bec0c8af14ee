"""
Value Parsing: explicit parse attempts for raw cell values

Every component that needs a number or a date out of a raw cell goes
through these helpers, so type detection, statistics and binning agree
on what counts as numeric or temporal. Each helper returns the parsed
value or None; none of them raise for bad input.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional

import numpy as np
import pandas as pd

_DIGIT = re.compile(r"\d")

# Tried in order after ISO 8601. Free-form parsing is not attempted, so
# labels such as "1st" or "Q3" never read as dates.
DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%a, %d %b %Y %H:%M:%S",
)


def is_missing(value: Any) -> bool:
    """True for absent cells: None and float NaN."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def is_blank(value: Any) -> bool:
    """True for missing cells and strings that are empty after trimming."""
    return is_missing(value) or str(value).strip() == ""


def parse_number(value: Any) -> Optional[float]:
    """Parse a finite number, or return None."""
    if is_missing(value) or isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts "1_000"; a data cell with underscores is not a number
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not np.isfinite(number):
        return None
    return number


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a date, or return None.

    Only strings and date objects are dates. Numeric-looking strings and
    strings without a digit are rejected before pandas sees them, so
    "42" and "May" stay out of the temporal bucket. Strings must be
    ISO 8601 or match one of DATE_FORMATS.
    """
    if is_missing(value) or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return _naive(pd.Timestamp(value))
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or not _DIGIT.search(text) or parse_number(text) is not None:
        return None

    for fmt in ("ISO8601",) + DATE_FORMATS:
        try:
            parsed = pd.to_datetime(text, format=fmt, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            continue
        if parsed is not None and not pd.isna(parsed):
            return _naive(parsed)
    return None


def _naive(ts: pd.Timestamp) -> datetime:
    """Convert to a naive datetime, moving aware values to UTC first."""
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def stringify(value: Any) -> str:
    """
    Canonical text of a cell, used for distinct-value counting.

    Integral floats render without a fractional part so 3 and 3.0 count
    as the same value.
    """
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)) and np.isfinite(value) and float(value).is_integer():
        return str(int(value))
    if isinstance(value, np.integer):
        return str(int(value))
    return str(value)


def to_timestamp_ms(value: datetime) -> float:
    """Milliseconds since the epoch for a naive (UTC) datetime."""
    return pd.Timestamp(value).value / 1_000_000
