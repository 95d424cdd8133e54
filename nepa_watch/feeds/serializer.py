"""RSS 2.0 rendering of record sets using Jinja2."""

from datetime import datetime
from typing import Iterable, List, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from nepa_watch.domain.models import Record
from nepa_watch.logging import get_logger
from nepa_watch.utils.timestamps import format_rfc822, utc_now

from .exceptions import FeedRenderError

logger = get_logger(__name__, component="feeds")

_XML_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "'": "&apos;",
    '"': "&quot;",
}

# (label, Record attribute) in display order
DESCRIPTION_FIELDS = (
    ("State", "state"),
    ("Office", "office"),
    ("Doc", "nepa_type"),
    ("Status", "nepa_status"),
)


def escape_xml(value: Optional[str]) -> str:
    """Replace the five XML special characters with named entities.

    Example:
        >>> escape_xml("Tom & Jerry's <\\"Ranch\\">")
        'Tom &amp; Jerry&apos;s &lt;&quot;Ranch&quot;&gt;'
    """
    if value is None:
        return ""
    return "".join(_XML_ENTITIES.get(ch, ch) for ch in str(value))


def description_lines(record: Record) -> List[str]:
    """One escaped ``<b>Label:</b> value`` line per present metadata field."""
    lines = []
    for label, attribute in DESCRIPTION_FIELDS:
        value = getattr(record, attribute)
        if value:
            lines.append(f"<b>{label}:</b> {escape_xml(value)}")
    return lines


def render_description(record: Record) -> str:
    """HTML description for an item, or ``""`` when no metadata is present."""
    lines = description_lines(record)
    if not lines:
        return ""
    return "<p>" + "<br/>".join(lines) + "</p>"


class FeedSerializer:
    """Renders record sets into RSS documents.

    The timestamp stamped on items is the generation time of the run: the
    upstream has no reliable publication date.
    """

    def __init__(self, template_name: str = "rss.xml.j2") -> None:
        self.template_name = template_name
        self.env = Environment(
            loader=PackageLoader("nepa_watch.feeds", "templates"),
            autoescape=False,  # escaping is explicit through xml_escape
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["xml_escape"] = escape_xml

    def serialize(
        self,
        title: str,
        link: str,
        records: Iterable[Record],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render one feed.

        Raises:
            FeedRenderError: If the template cannot be rendered
        """
        build_date = format_rfc822(generated_at or utc_now())
        items = [
            {
                "id": record.id,
                "title": record.title,
                "url": record.url,
                "description": render_description(record),
            }
            for record in records
        ]

        try:
            document = self.env.get_template(self.template_name).render(
                title=title, link=link, items=items, build_date=build_date
            )
        except TemplateError as e:
            logger.error(
                f"Feed rendering failed: {e}",
                extra={"event": "feeds.render.failed", "feed_title": title},
                exc_info=True,
            )
            raise FeedRenderError(f"Feed rendering failed for '{title}': {e}") from e

        logger.debug(
            f"Rendered feed with {len(items)} items",
            extra={"event": "feeds.render.completed", "feed_title": title, "count": len(items)},
        )
        return document
