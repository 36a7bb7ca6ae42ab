"""
Time source for the content pipeline.

All instants are naive UTC datetimes, which is what SQLite hands back.
Routes receive the clock through `get_clock` so tests can swap in a fixed one.
"""
from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to naive UTC. Naive input is taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def isoformat(value: Optional[datetime]) -> Optional[str]:
    """Serialize a naive UTC datetime with a trailing Z."""
    if value is None:
        return None
    return to_utc(value).isoformat() + "Z"


def get_clock() -> Clock:
    """FastAPI dependency returning the current clock."""
    return utcnow
