"""Millisecond and microsecond timestamp utilities."""

import time
from datetime import datetime, timezone

# 9999-12-31T23:59:59.999Z
MAX_DATETIME_MILLIS = 253_402_300_799_999


def now_micros():
    """Current time in microseconds since Unix epoch."""
    return time.time_ns() // 1_000


def now_millis():
    """Current time in milliseconds since Unix epoch."""
    return time.time_ns() // 1_000_000


def format_timestamp(epoch_us=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = now_micros()

    dt = datetime.fromtimestamp(epoch_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"


def format_millis(epoch_ms):
    """Format a millisecond timestamp as ISO 8601 with milliseconds.

    Returns None for values outside the range datetime can represent.
    """
    if not 0 <= epoch_ms <= MAX_DATETIME_MILLIS:
        return None
    dt = datetime.fromtimestamp(epoch_ms // 1_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{epoch_ms % 1_000:03d}Z"
