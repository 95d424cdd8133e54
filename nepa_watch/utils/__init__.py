"""Small shared helpers."""

from .timestamps import ensure_utc, format_iso, format_rfc822, utc_now

__all__ = ["utc_now", "ensure_utc", "format_iso", "format_rfc822"]
