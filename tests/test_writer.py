"""Tests for writing feed files and the run summary."""

import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from nepa_watch.config.models import OutputConfig
from nepa_watch.feeds import FeedWriteError, FeedWriter

GENERATED_AT = datetime(2025, 3, 1, 12, 0, 5, 250000, tzinfo=timezone.utc)


@pytest.fixture
def writer(tmp_path):
    return FeedWriter(OutputConfig(directory=str(tmp_path / "docs")))


class TestFeedWriter:
    def test_layout(self, writer, tmp_path):
        root = tmp_path / "docs"
        assert writer.national_path == root / "index.xml"
        assert writer.state_path("NV") == root / "by-state" / "NV.xml"
        assert writer.summary_path == root / "last-run.json"

    def test_write_everything(self, writer):
        paths = writer.write("<rss national/>", {"NV": "<rss nv/>", "UT": "<rss ut/>"}, GENERATED_AT, 2)

        assert len(paths) == 4
        assert writer.national_path.read_text(encoding="utf-8") == "<rss national/>"
        assert writer.state_path("NV").read_text(encoding="utf-8") == "<rss nv/>"
        assert writer.state_path("UT").read_text(encoding="utf-8") == "<rss ut/>"
        assert json.loads(writer.summary_path.read_text(encoding="utf-8")) == {
            "generatedAt": "2025-03-01T12:00:05.250Z",
            "total": 2,
        }

    def test_no_state_feeds(self, writer):
        writer.write("<rss/>", {}, GENERATED_AT, 0)

        assert writer.national_path.exists()
        assert not writer.state_directory.exists()

    def test_overwrites_previous_run(self, writer):
        writer.write_national("old")
        writer.write_national("new")
        assert writer.national_path.read_text(encoding="utf-8") == "new"

    def test_no_temporary_files_left(self, writer):
        writer.write("<rss/>", {"NV": "<rss/>"}, GENERATED_AT, 1)
        leftovers = [p for p in writer.directory.rglob("*") if p.name.endswith(".tmp")]
        assert leftovers == []

    def test_utf8_content(self, writer):
        writer.write_national("<title>Café — Overlook</title>")
        assert "Café — Overlook" in writer.national_path.read_text(encoding="utf-8")

    def test_os_error_wrapped(self, writer):
        with patch("nepa_watch.feeds.writer.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(FeedWriteError) as exc_info:
                writer.write_national("<rss/>")
        assert exc_info.value.path == str(writer.national_path)
