"""Display formatting helpers."""
import math
from typing import Optional


def format_duration(seconds: Optional[float]) -> str:
    """
    Format a duration as ``mm:ss``.

    - Seconds are floored, never rounded (59.9 -> "00:59")
    - Hours are not shown; only the minute and second fields are kept
    - Missing or negative durations render as "00:00"
    """
    if not seconds or seconds < 0:
        return "00:00"

    total = math.floor(seconds)
    minutes = (total // 60) % 60
    secs = total % 60
    return f"{minutes:02d}:{secs:02d}"
