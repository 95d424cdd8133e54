"""Scoped logging context backed by contextvars.

Fields pushed here (run_id, term, label, ...) are copied onto every log
record emitted inside the scope by ``ContextualFilter``.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("nepa_watch_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the fields currently in scope."""
    return dict(_log_context.get())


def push_log_context(**fields: Any) -> Token:
    """Layer ``fields`` over the current context and return a reset token."""
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before ``push_log_context``."""
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop every field. Intended for tests."""
    _log_context.set({})


class log_context:
    """Context manager form of push/pop.

    Example:
        >>> with log_context(run_id="4f2a", term="solar NV"):
        ...     logger.info("Retrieving term")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._token: Optional[Token] = None

    def __enter__(self):
        self._token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            pop_log_context(self._token)
            self._token = None
        return False
