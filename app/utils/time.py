"""Time utilities for timestamps. All datetimes in UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_seconds() -> int:
    """Return current time as whole seconds since the epoch, for `created` fields."""
    return int(utc_now().timestamp())
