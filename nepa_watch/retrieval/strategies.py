"""HTTP retrieval strategies: structured JSON search and search-page markup."""

import json
from typing import Any, Dict

from nepa_watch.domain.models import SearchTerm
from nepa_watch.extraction.html import extract_from_html
from nepa_watch.logging import get_logger
from nepa_watch.normalization.service import find_row_list, normalize_rows

from .base import RetrievalResult, RetrievalStrategy
from .client import UpstreamClient
from .exceptions import SearchHTTPError

logger = get_logger(__name__, component="retrieval")

JSON_HEADERS = {"Accept": "application/json, text/plain, */*"}
HTML_HEADERS = {"Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8"}


class StructuredSearchStrategy(RetrievalStrategy):
    """Query the search API and normalize its JSON rows.

    Plain terms go out as a GET with ``searchText``; terms that carry a filter
    expression are submitted as a POST body with ``advSearch``, one page only.
    """

    name = "structured"

    def __init__(self, client: UpstreamClient, api_url: str, host: str, page_size: int = 100) -> None:
        self.client = client
        self.api_url = api_url
        self.host = host
        self.page_size = page_size

    def retrieve(self, term: SearchTerm) -> RetrievalResult:
        if term.is_advanced:
            response = self.client.request(
                self.api_url,
                method="POST",
                headers={**JSON_HEADERS, "Content-Type": "application/json"},
                json_data={"advSearch": term.adv_search, "page": 0, "size": self.page_size},
            )
            if not response.ok:
                logger.error(
                    f"HTTP {response.status_code} for search \"{term.label}\"",
                    extra={
                        "event": "retrieval.structured.rejected",
                        "status_code": response.status_code,
                        "url": self.api_url,
                    },
                )
                raise SearchHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=self.api_url,
                )
        else:
            response = self.client.request(
                self.api_url,
                headers=JSON_HEADERS,
                params={"searchText": term.text, "page": 0, "size": self.page_size},
            )
            if not response.ok:
                return RetrievalResult.failed(self.name, f"HTTP {response.status_code}")

        if not response.is_json:
            return RetrievalResult.failed(
                self.name, f"non-JSON content type: {response.content_type or 'missing'}"
            )

        try:
            payload: Any = json.loads(response.text)
        except ValueError as e:
            return RetrievalResult.failed(self.name, f"invalid JSON: {e}")

        rows = find_row_list(payload)
        if rows is None:
            return RetrievalResult.failed(self.name, "JSON payload holds no row list")

        return RetrievalResult.success(self.name, normalize_rows(rows, host=self.host))

    def close(self) -> None:
        self.client.close()


class MarkupSearchStrategy(RetrievalStrategy):
    """Fetch the human search page and scrape project links from it.

    A page without any project link counts as a failure: the search page is
    script-rendered, and an empty shell says nothing about the result set.
    """

    name = "markup"

    def __init__(self, client: UpstreamClient, search_page_url: str, host: str) -> None:
        self.client = client
        self.search_page_url = search_page_url
        self.host = host

    def retrieve(self, term: SearchTerm) -> RetrievalResult:
        response = self.client.request(
            self.search_page_url,
            headers=HTML_HEADERS,
            params=search_page_params(term),
        )
        if not response.ok:
            return RetrievalResult.failed(self.name, f"HTTP {response.status_code}")

        records = extract_from_html(response.text, base_url=self.host)
        if not records:
            return RetrievalResult.failed(self.name, "no project links in markup")
        return RetrievalResult.success(self.name, records)

    def close(self) -> None:
        self.client.close()


def search_page_params(term: SearchTerm) -> Dict[str, str]:
    """Query-string parameters that reproduce ``term`` on the search page."""
    if term.is_advanced:
        params = {"advSearch": json.dumps(term.adv_search, separators=(",", ":"))}
        if term.text:
            params["searchText"] = term.text
        return params
    return {"searchText": term.text}
