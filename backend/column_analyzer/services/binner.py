"""
Binner — histogram buckets for numeric, date and categorical columns

Numeric and date values are split into equal-width bins covering
[min, max]; the last bin is closed on both ends so the maximum lands
in it. Categorical values get one bin per distinct value.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from ..core.config import settings
from ..models.analysis import Bin, BinKind
from .value_parsing import parse_date, parse_number, stringify, to_timestamp_ms

logger = logging.getLogger("column_analyzer.binner")


def default_bin_count(n: int) -> int:
    """ceil(sqrt(n)) capped at MAX_BIN_COUNT."""
    if n <= 0:
        return 0
    return min(settings.MAX_BIN_COUNT, math.ceil(math.sqrt(n)))


def compute_bins(
    values: Sequence[Any],
    kind: BinKind = BinKind.NUMERIC,
    bin_count: Optional[int] = None,
) -> List[Bin]:
    """
    Equal-width bins over the parseable values.

    Args:
        values: raw values; unparseable ones are skipped
        kind: BinKind.NUMERIC or BinKind.DATE
        bin_count: fixed number of bins; defaults to the sqrt rule
    """
    if kind == BinKind.CATEGORICAL:
        return compute_categorical_bins(values)

    if kind == BinKind.DATE:
        dates = [d for d in (parse_date(v) for v in values) if d is not None]
        points = [to_timestamp_ms(d) for d in dates]
    else:
        points = [n for n in (parse_number(v) for v in values) if n is not None]

    if not points:
        return []

    if bin_count is None:
        bin_count = default_bin_count(len(points))
    elif bin_count < 1:
        raise ValueError(f"bin_count must be >= 1, got {bin_count}")

    low, high = min(points), max(points)
    if low == high:
        logger.debug("compute_bins: degenerate range at %s, using one bin", low)
        return [_make_bin(kind, low, high, len(points))]

    # Work in halved units when max - min overflows; the halved span of two
    # finite floats is always finite.
    scale = 1.0 if math.isfinite(high - low) else 0.5
    origin = low * scale
    width = (high * scale - origin) / bin_count

    counts = [0] * bin_count
    for p in points:
        # width underflows to 0 only for subnormal spans
        offset = (p * scale - origin) / width if width > 0 else 0.0
        index = min(bin_count - 1, int(math.floor(offset)))
        counts[index] += 1

    def edge(i: int) -> float:
        if i == bin_count:
            return high
        return (origin + i * width) / scale

    return [
        _make_bin(kind, edge(i), edge(i + 1), counts[i])
        for i in range(bin_count)
    ]


def compute_categorical_bins(values: Sequence[Any]) -> List[Bin]:
    """One bin per distinct value, in order of first appearance."""
    counts: Dict[str, int] = {}
    for v in values:
        key = stringify(v)
        counts[key] = counts.get(key, 0) + 1
    return [Bin(label=label, count=count) for label, count in counts.items()]


def _make_bin(kind: BinKind, lower: float, upper: float, count: int) -> Bin:
    if kind == BinKind.DATE:
        lower_dt = _from_timestamp_ms(lower)
        upper_dt = _from_timestamp_ms(upper)
        fmt = settings.DATE_DISPLAY_FORMAT
        return Bin(
            label=f"{lower_dt.strftime(fmt)} - {upper_dt.strftime(fmt)}",
            count=count,
            lower_bound=lower_dt,
            upper_bound=upper_dt,
        )
    return Bin(
        label=f"{lower:.1f}-{upper:.1f}",
        count=count,
        lower_bound=lower,
        upper_bound=upper,
    )


def _from_timestamp_ms(ms: float) -> datetime:
    return pd.Timestamp(round(ms), unit="ms").to_pydatetime()
