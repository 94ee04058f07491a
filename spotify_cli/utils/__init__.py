"""
Utility functions for spotify-cli.

Usage:
    from spotify_cli.utils import format_duration
"""

import math
from datetime import timedelta


def format_duration(duration: int | float | timedelta) -> str:
    """
    Format a duration as a clock string.

    Args:
        duration: Non-negative duration, either a number of seconds or
                  a timedelta. Sub-second remainders are truncated,
                  never rounded.

    Returns:
        "H:MM:SS" for durations of at least one hour, else "M:SS".
        Minutes and seconds are zero-padded to two digits; hours are
        unpadded and have no upper bound.

    Raises:
        ValueError: If the duration is negative.

    Examples:
        format_duration(0)      # "0:00"
        format_duration(61)     # "1:01"
        format_duration(3600)   # "1:00:00"
        format_duration(36610)  # "10:10:10"
        format_duration(timedelta(minutes=3, seconds=30, milliseconds=999))  # "3:30"
    """
    if isinstance(duration, timedelta):
        if duration < timedelta(0):
            raise ValueError(f"Duration must be non-negative, got {duration!r}")
        total_seconds = duration // timedelta(seconds=1)
    else:
        if duration < 0:
            raise ValueError(f"Duration must be non-negative, got {duration!r}")
        total_seconds = math.floor(duration)

    hours = total_seconds // 3600
    minutes = (total_seconds // 60) % 60
    secs = total_seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
