"""
Moving Average Smoother: centered sliding-window mean.

The window shrinks at the edges instead of padding, so the output is
always as long as the input.
"""

from typing import List, Optional, Sequence

from ..core.config import settings


def smooth(values: Sequence[float], window: Optional[int] = None) -> List[float]:
    """Mean of values[max(0, i - w//2) : min(n, i + w//2 + 1)] for each i."""
    if window is None:
        window = settings.MOVING_AVERAGE_WINDOW
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")

    n = len(values)
    half = window // 2
    result = []
    for i in range(n):
        chunk = values[max(0, i - half):min(n, i + half + 1)]
        result.append(sum(chunk) / len(chunk))
    return result
