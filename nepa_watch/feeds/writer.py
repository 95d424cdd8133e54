"""Writes rendered feeds and the run summary to the output directory."""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from nepa_watch.config.models import OutputConfig
from nepa_watch.logging import get_logger
from nepa_watch.utils.timestamps import format_iso

from .exceptions import FeedWriteError

logger = get_logger(__name__, component="feeds")


class FeedWriter:
    """
    Owns the output layout::

        <directory>/index.xml
        <directory>/by-state/<STATE>.xml
        <directory>/last-run.json

    Each file is written to a temporary sibling and renamed into place, so a
    reader never sees a half-written feed.
    """

    def __init__(self, output: OutputConfig) -> None:
        self.output = output
        self.directory = Path(output.directory)

    @property
    def national_path(self) -> Path:
        return self.directory / self.output.national_filename

    @property
    def state_directory(self) -> Path:
        return self.directory / self.output.state_subdirectory

    @property
    def summary_path(self) -> Path:
        return self.directory / self.output.summary_filename

    def state_path(self, feed_name: str) -> Path:
        return self.state_directory / f"{feed_name}.xml"

    def write(self, national: str, states: Dict[str, str], generated_at: datetime, total: int) -> List[Path]:
        """Write the national feed, every state feed and the run summary."""
        paths = [self.write_national(national)]
        paths.extend(self.write_states(states))
        paths.append(self.write_summary(generated_at, total))
        logger.info(
            f"Wrote {len(paths)} files to {self.directory}",
            extra={
                "event": "feeds.write.run_completed",
                "output_dir": str(self.directory),
                "state_feed_count": len(states),
            },
        )
        return paths

    def write_national(self, document: str) -> Path:
        return self._write(self.national_path, document)

    def write_states(self, documents: Dict[str, str]) -> List[Path]:
        """Write one file per feed name; nothing (not even the directory) when empty."""
        return [self._write(self.state_path(name), doc) for name, doc in documents.items()]

    def write_summary(self, generated_at: datetime, total: int) -> Path:
        summary = {"generatedAt": format_iso(generated_at), "total": total}
        return self._write(self.summary_path, json.dumps(summary, indent=2) + "\n")

    def _write(self, path: Path, content: str) -> Path:
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(
                f"Failed to write {path}: {e}",
                extra={"event": "feeds.write.failed", "path": str(path)},
            )
            raise FeedWriteError(f"Failed to write {path}: {e}", path=str(path)) from e

        logger.debug(
            f"Wrote {path}",
            extra={"event": "feeds.write.completed", "path": str(path), "bytes": len(content)},
        )
        return path
