"""Query expansion into search terms."""

from .expander import expand_all, expand_query, expand_search

__all__ = ["expand_all", "expand_query", "expand_search"]
