"""Exceptions raised while retrieving search results.

Malformed or non-JSON responses are not exceptions: strategies report them
as a failed ``RetrievalResult`` and the ladder moves to the next strategy.
Everything here escapes the ladder and is handled per term by the
reconciliation engine.
"""


class RetrievalError(Exception):
    """Base exception for retrieval errors that abort a single term."""


class SearchHTTPError(RetrievalError):
    """An explicit search submission returned a non-success HTTP status."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class TransportError(RetrievalError):
    """The upstream could not be reached at all (DNS, connection, timeout)."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class BrowserError(TransportError):
    """The headless browser failed to launch or crashed while navigating."""


class RetrievalConfigurationError(RetrievalError):
    """The retrieval stack was configured with unusable settings."""
