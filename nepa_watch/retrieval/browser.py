"""Rendered-DOM retrieval through a headless Playwright browser.

Last rung of the ladder. The search page builds its result list with
client-side scripts, so when neither the API nor the raw markup produced
anything, the page is rendered and the links are read from the live DOM.
"""

from typing import Optional
from urllib.parse import urlencode

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from nepa_watch.domain.models import SearchTerm
from nepa_watch.extraction.html import PROJECT_ANCHOR_SELECTOR, records_from_anchors
from nepa_watch.logging import get_logger

from .base import RetrievalResult, RetrievalStrategy
from .exceptions import BrowserError
from .strategies import search_page_params

logger = get_logger(__name__, component="browser")

_ANCHOR_SCRIPT = "els => els.map(el => [el.getAttribute('href'), el.textContent])"


class BrowserSession:
    """Lazily started Chromium instance shared by every term of a run."""

    def __init__(self, headless: bool = True, user_agent: Optional[str] = None) -> None:
        self.headless = headless
        self.user_agent = user_agent
        self._playwright = None
        self._browser = None
        self._context = None

    def new_page(self):
        """Open a page, launching the browser on first use.

        Raises:
            BrowserError: If Chromium cannot be launched
        """
        if self._context is None:
            self._start()
        return self._context.new_page()

    def _start(self) -> None:
        logger.info("Launching headless browser", extra={"event": "browser.launching"})
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            self._context = self._browser.new_context(user_agent=self.user_agent)
        except PlaywrightError as e:
            self.close()
            raise BrowserError(f"Failed to launch headless browser: {e}", url="about:blank") from e

    def close(self) -> None:
        """Shut the browser down; safe to call more than once."""
        for resource in (self._context, self._browser):
            if resource is None:
                continue
            try:
                resource.close()
            except PlaywrightError as e:
                logger.debug(
                    f"Ignoring error while closing browser: {e}",
                    extra={"event": "browser.close_failed"},
                )
        if self._playwright is not None:
            self._playwright.stop()
        self._playwright = self._browser = self._context = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def wait_for_project_links(page, timeout_ms: int) -> bool:
    """Wait for at least one project link to render.

    Returns False when the wait times out; the caller reads whatever is on
    the page either way.
    """
    try:
        page.wait_for_selector(PROJECT_ANCHOR_SELECTOR, timeout=timeout_ms)
    except PlaywrightTimeoutError:
        return False
    return True


class RenderedDomStrategy(RetrievalStrategy):
    """Render the search page and read project anchors from the DOM."""

    name = "rendered-dom"

    def __init__(
        self,
        session: BrowserSession,
        search_page_url: str,
        host: str,
        wait_seconds: float = 20,
        navigation_timeout: int = 30,
    ) -> None:
        self.session = session
        self.search_page_url = search_page_url
        self.host = host
        self.wait_ms = int(wait_seconds * 1000)
        self.navigation_timeout_ms = navigation_timeout * 1000

    def retrieve(self, term: SearchTerm) -> RetrievalResult:
        url = f"{self.search_page_url}?{urlencode(search_page_params(term))}"
        try:
            page = self.session.new_page()
        except PlaywrightError as e:
            raise BrowserError(f"Browser could not open a page for {url}: {e}", url=url) from e
        try:
            page.goto(url, wait_until="domcontentloaded", timeout=self.navigation_timeout_ms)
            if not wait_for_project_links(page, self.wait_ms):
                logger.info(
                    "No project links rendered before timeout; reading page as-is",
                    extra={"event": "browser.wait.timeout", "wait_ms": self.wait_ms},
                )
            anchors = page.eval_on_selector_all(PROJECT_ANCHOR_SELECTOR, _ANCHOR_SCRIPT)
        except PlaywrightError as e:
            raise BrowserError(f"Browser navigation to {url} failed: {e}", url=url) from e
        finally:
            try:
                page.close()
            except PlaywrightError as e:
                logger.debug(
                    f"Ignoring error while closing page: {e}",
                    extra={"event": "browser.page_close_failed"},
                )

        records = records_from_anchors(
            ((href, text) for href, text in anchors or []), base_url=self.host
        )
        return RetrievalResult.success(self.name, records)

    def close(self) -> None:
        self.session.close()
