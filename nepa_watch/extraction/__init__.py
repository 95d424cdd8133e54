"""Extraction of project records from HTML and rendered pages."""

from .html import (
    PROJECT_ANCHOR_SELECTOR,
    PROJECT_HREF_PATTERN,
    build_link_record,
    extract_from_html,
    match_project_id,
    records_from_anchors,
)

__all__ = [
    "PROJECT_ANCHOR_SELECTOR",
    "PROJECT_HREF_PATTERN",
    "build_link_record",
    "extract_from_html",
    "match_project_id",
    "records_from_anchors",
]
