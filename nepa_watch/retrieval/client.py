"""HTTP access to the ePlanning search endpoints."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from nepa_watch.logging import get_logger

from .exceptions import RetrievalConfigurationError, TransportError

logger = get_logger(__name__, component="retrieval")


@dataclass(frozen=True)
class UpstreamResponse:
    """The parts of an HTTP response the strategies look at."""

    url: str
    status_code: int
    content_type: str
    text: str
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def is_json(self) -> bool:
        return "json" in self.content_type.lower()


class UpstreamClient:
    """Thin ``requests.Session`` wrapper with a fixed User-Agent and timeout.

    Status codes are returned, not raised: whether a 4xx/5xx is fatal depends
    on which strategy made the call. Network-level failures raise
    ``TransportError``.
    """

    def __init__(self, timeout: int = 30, user_agent: str = "NepaWatch/1.0") -> None:
        if not 5 <= timeout <= 300:
            raise RetrievalConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise RetrievalConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> UpstreamResponse:
        """Send one request.

        Raises:
            TransportError: On timeouts, connection failures, or other
                request-level errors
        """
        logger.debug(
            f"HTTP {method} request to {url}",
            extra={"event": "retrieval.http.request", "method": method, "url": url},
        )

        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "retrieval.http.timeout", "url": url, "timeout": self.timeout},
            )
            raise TransportError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={
                    "event": "retrieval.http.error",
                    "error_type": type(e).__name__,
                    "url": url,
                },
            )
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        result = UpstreamResponse(
            url=response.url or url,
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            text=response.text,
            reason=response.reason or "",
        )
        logger.debug(
            f"HTTP {result.status_code} from {url}",
            extra={
                "event": "retrieval.http.response",
                "status_code": result.status_code,
                "content_type": result.content_type,
                "url": url,
            },
        )
        return result

    def close(self) -> None:
        self._session.close()
