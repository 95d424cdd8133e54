"""Exceptions raised while producing feed files."""


class FeedError(Exception):
    """Base exception for feed rendering and writing."""


class FeedRenderError(FeedError):
    """A feed template failed to render."""


class FeedWriteError(FeedError):
    """A feed or summary file could not be written."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path
