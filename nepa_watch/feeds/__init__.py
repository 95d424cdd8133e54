"""Feed rendering and output.

- FeedSerializer: renders records as an RSS 2.0 document
- FeedWriter: writes national, per-state and summary files
"""

from .exceptions import FeedError, FeedRenderError, FeedWriteError
from .serializer import FeedSerializer, description_lines, escape_xml, render_description
from .writer import FeedWriter

__all__ = [
    "FeedSerializer",
    "FeedWriter",
    "description_lines",
    "escape_xml",
    "render_description",
    "FeedError",
    "FeedRenderError",
    "FeedWriteError",
]
