"""Local datetime helpers for due-date validation and display."""

from __future__ import annotations

from datetime import datetime


def local_now() -> datetime:
    """Return the current naive local datetime."""
    return datetime.now()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string, converting aware values to naive local time."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_datetime(value: str | datetime | None) -> str:
    """
    Format a datetime for display, e.g. ``25 December 2025 at 17:00``.

    Strings that are not valid ISO-8601 are returned unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = parse_iso_datetime(value)
        except (TypeError, ValueError):
            return value
    return f"{moment.day} {moment:%B %Y} at {moment:%H:%M}"
