"""Project link extraction from search result markup.

Used when the upstream answers with a rendered page instead of JSON. Only
anchors pointing at a project page count; everything else on the page is
ignored.
"""

import re
from typing import Iterable, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from nepa_watch.config.models import DEFAULT_HOST
from nepa_watch.domain.models import Record, synthesize_title
from nepa_watch.logging import get_logger

logger = get_logger(__name__, component="extraction")

# Relative form is what the search page emits; absolute links on any host are accepted too
PROJECT_HREF_PATTERN = re.compile(r"^(?:https?://[^/\s]+)?/eplanning-ui/project/(\d+)/510/?$")

# CSS selector matching candidate anchors in a live DOM
PROJECT_ANCHOR_SELECTOR = 'a[href*="/eplanning-ui/project/"]'


def match_project_id(href: Optional[str]) -> Optional[str]:
    """Return the project id from a project link, or None for any other href."""
    if not href:
        return None
    match = PROJECT_HREF_PATTERN.match(href.strip())
    return match.group(1) if match else None


def build_link_record(href: str, text: Optional[str], base_url: str = DEFAULT_HOST) -> Optional[Record]:
    """Build an identity-and-title record from one anchor.

    Returns None when ``href`` is not a project link.
    """
    project_id = match_project_id(href)
    if project_id is None:
        return None

    title = re.sub(r"\s+", " ", text or "").strip() or synthesize_title(project_id)
    return Record(
        id=project_id,
        title=title,
        url=urljoin(base_url.rstrip("/") + "/", href.strip()),
    )


def records_from_anchors(anchors: Iterable[tuple[str, Optional[str]]], base_url: str = DEFAULT_HOST) -> list[Record]:
    """Turn ``(href, text)`` pairs into records, in order, skipping non-project links."""
    records = []
    for href, text in anchors:
        record = build_link_record(href, text, base_url=base_url)
        if record is not None:
            records.append(record)
    return records


def extract_from_html(html: Optional[str], base_url: str = DEFAULT_HOST) -> list[Record]:
    """Extract project records from raw markup in document order.

    Duplicate links are kept; deduplication happens during reconciliation.
    Empty or malformed markup yields an empty list.
    """
    if not html or not html.strip():
        return []

    soup = BeautifulSoup(html, "html.parser")
    anchors = (
        (anchor.get("href"), anchor.get_text(" ", strip=True))
        for anchor in soup.find_all("a", href=PROJECT_HREF_PATTERN)
    )
    records = records_from_anchors(anchors, base_url=base_url)

    logger.debug(
        f"Extracted {len(records)} project links from markup",
        extra={"event": "extraction.html.completed", "count": len(records)},
    )
    return records
