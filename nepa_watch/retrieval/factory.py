"""Builds the retrieval ladder from configuration."""

from nepa_watch.config.models import AppConfig
from nepa_watch.logging import get_logger

from .browser import BrowserSession, RenderedDomStrategy
from .client import UpstreamClient
from .ladder import RetrievalLadder
from .strategies import MarkupSearchStrategy, StructuredSearchStrategy

logger = get_logger(__name__, component="retrieval")


def build_ladder(app_config: AppConfig) -> RetrievalLadder:
    """Assemble structured → markup (→ rendered-DOM when the browser is enabled).

    Example:
        >>> ladder = build_ladder(app_config)
        >>> result = ladder.retrieve(SearchTerm(text="solar NV", label="solar"))
    """
    upstream = app_config.upstream
    client = UpstreamClient(timeout=upstream.http_request_timeout, user_agent=upstream.user_agent)

    strategies = [
        StructuredSearchStrategy(
            client, api_url=upstream.api_url, host=upstream.host, page_size=upstream.page_size
        ),
        MarkupSearchStrategy(client, search_page_url=upstream.search_page_url, host=upstream.host),
    ]

    if app_config.browser.enabled:
        session = BrowserSession(
            headless=app_config.browser.headless, user_agent=upstream.user_agent
        )
        strategies.append(
            RenderedDomStrategy(
                session,
                search_page_url=upstream.search_page_url,
                host=upstream.host,
                wait_seconds=app_config.browser.wait_seconds,
                navigation_timeout=upstream.http_request_timeout,
            )
        )

    ladder = RetrievalLadder(strategies)
    logger.debug(
        "Retrieval ladder built",
        extra={"event": "retrieval.ladder.built", "strategies": ",".join(ladder.strategy_names)},
    )
    return ladder
