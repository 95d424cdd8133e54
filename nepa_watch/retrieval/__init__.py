"""Retrieval of search results from the ePlanning upstream.

The ladder tries, in order:
- StructuredSearchStrategy: JSON search API
- MarkupSearchStrategy: search page HTML
- RenderedDomStrategy: headless browser (only when enabled)

Use the factory to build a ladder from configuration:
    from nepa_watch.retrieval import build_ladder
    ladder = build_ladder(app_config)
    result = ladder.retrieve(term)
"""

from .base import RetrievalResult, RetrievalStrategy
from .browser import BrowserSession, RenderedDomStrategy
from .client import UpstreamClient, UpstreamResponse
from .exceptions import (
    BrowserError,
    RetrievalConfigurationError,
    RetrievalError,
    SearchHTTPError,
    TransportError,
)
from .factory import build_ladder
from .ladder import RetrievalLadder
from .strategies import MarkupSearchStrategy, StructuredSearchStrategy

__all__ = [
    # Ladder and factory
    "RetrievalLadder",
    "build_ladder",
    # Strategies
    "RetrievalStrategy",
    "RetrievalResult",
    "StructuredSearchStrategy",
    "MarkupSearchStrategy",
    "RenderedDomStrategy",
    "BrowserSession",
    # HTTP
    "UpstreamClient",
    "UpstreamResponse",
    # Exceptions
    "RetrievalError",
    "SearchHTTPError",
    "TransportError",
    "BrowserError",
    "RetrievalConfigurationError",
]
