"""UTC timestamp helpers used for feed dates and the run summary."""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC.

    Example:
        >>> ensure_utc(datetime(2025, 3, 1, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_rfc822(dt: datetime) -> str:
    """Format for RSS ``pubDate``/``lastBuildDate``.

    Example:
        >>> format_rfc822(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))
        'Sat, 01 Mar 2025 12:00:00 GMT'
    """
    return format_datetime(ensure_utc(dt), usegmt=True)


def format_iso(dt: datetime) -> str:
    """ISO-8601 with millisecond precision and a ``Z`` suffix.

    Example:
        >>> format_iso(datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))
        '2025-03-01T12:00:00.000Z'
    """
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
