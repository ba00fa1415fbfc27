"""
Core Utilities.

Shared utility functions used across the package.
All modules should import utilities from this module.
"""

import re
from datetime import datetime, timedelta, timezone

_ONE_TICK = timedelta(microseconds=1)
_LINE_BREAKS = re.compile(r"[\r\n]+")


def utc_now() -> datetime:
    """
    Return current UTC time as a timezone-aware datetime.

    Notes are stored with an explicit +00:00 offset so the text column
    sorts chronologically and parses back into aware datetimes.
    """
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime in the on-disk ISO-8601 form (UTC, microseconds)."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: object) -> datetime:
    """
    Parse a stored ISO-8601 timestamp.

    Raises:
        ValueError: If the value is not an ISO-8601 string
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO-8601 string, got {type(value).__name__}")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class MonotonicClock:
    """
    UTC clock that never returns the same instant twice.

    Each call to tick() is strictly later than the previous one, even when
    the wall clock has not advanced (or stepped backwards).
    """

    def __init__(self) -> None:
        self._last: datetime | None = None

    def tick(self) -> datetime:
        now = utc_now()
        if self._last is not None and now <= self._last:
            now = self._last + _ONE_TICK
        self._last = now
        return now


def is_blank(value: str | None) -> bool:
    """True for None, empty or whitespace-only text."""
    return value is None or not value.strip()


def truncate_text(text: str | None, max_length: int = 45) -> str:
    """Shorten text to max_length characters, appending an ellipsis."""
    if text and len(text) > max_length:
        return text[:max_length] + "..."
    return text or ""


def to_single_line(text: str | None) -> str:
    """Collapse line breaks into single spaces."""
    return _LINE_BREAKS.sub(" ", text or "")
