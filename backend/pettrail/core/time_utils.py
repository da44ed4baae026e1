from datetime import datetime, timedelta, timezone
from typing import Callable

# A clock returns the current time as an aware UTC datetime.
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: current server time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Return `dt` as an aware UTC datetime.

    Naive values are assumed to already be UTC. This covers timestamps sent
    without an offset and values read back from databases that drop tzinfo
    (SQLite).
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def whole_seconds_between(start: datetime, end: datetime) -> int:
    """Floor of (end - start) in seconds, negative when end < start.

    Example: 00:00:00 -> 00:00:09.8 gives 9, and the reverse gives -10.
    """
    return (ensure_utc(end) - ensure_utc(start)) // timedelta(seconds=1)
