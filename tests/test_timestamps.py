"""Tests for UTC timestamp helpers."""

from datetime import datetime, timedelta, timezone

from nepa_watch.utils.timestamps import ensure_utc, format_iso, format_rfc822, utc_now


def test_utc_now_is_aware():
    now = utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_ensure_utc_naive_is_assumed_utc():
    dt = ensure_utc(datetime(2025, 3, 1, 12, 0))
    assert dt == datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_ensure_utc_converts_offsets():
    mountain = timezone(timedelta(hours=-7))
    dt = ensure_utc(datetime(2025, 3, 1, 5, 0, tzinfo=mountain))
    assert dt == datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    assert dt.tzinfo == timezone.utc


def test_ensure_utc_none():
    assert ensure_utc(None) is None


def test_format_rfc822():
    dt = datetime(2025, 3, 1, 12, 0, 5, tzinfo=timezone.utc)
    assert format_rfc822(dt) == "Sat, 01 Mar 2025 12:00:05 GMT"


def test_format_iso_millisecond_precision():
    dt = datetime(2025, 3, 1, 12, 0, 5, 123456, tzinfo=timezone.utc)
    assert format_iso(dt) == "2025-03-01T12:00:05.123Z"
