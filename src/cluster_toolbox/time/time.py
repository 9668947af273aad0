"""Clock helpers used for log timestamps."""

from datetime import datetime, timezone
from time import time as time_sec
from time import time_ns as time_nano


def time_s() -> float:
    """Get the current time in seconds since the epoch."""
    return time_sec()


def time_ms() -> float:
    """Get the current time in milliseconds since the epoch."""
    return time_sec() * 1_000.0


def time_ns() -> int:
    """Get the current time in nanoseconds since the epoch."""
    return time_nano()


def time_iso8601() -> str:
    """Get the current UTC time as an ISO 8601 string with millisecond precision.

    Example:
        >>> time_iso8601()
        '2023-04-04T00:28:50.516Z'

    """
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
