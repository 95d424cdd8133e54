"""Structured logging helpers shared by every nepa_watch component."""

import logging
from typing import Optional


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a ``component`` field on every record.

    Fields passed through ``extra`` at the call site win over the adapter's
    own fields, so a call can still override ``component`` when needed.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Return a module logger, tagged with ``component`` when one is given.

    Example:
        >>> logger = get_logger(__name__, component="retrieval")
        >>> logger.info("Term retrieved", extra={"event": "retrieval.term.completed"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = ["ComponentLoggerAdapter", "get_logger"]
