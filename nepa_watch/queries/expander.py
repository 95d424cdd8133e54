"""Expansion of configured queries and searches into concrete search terms."""

from typing import Iterable, Iterator, Sequence

from nepa_watch.config.models import QueryConfig, SearchDefinition
from nepa_watch.domain.models import SearchTerm
from nepa_watch.logging import get_logger

logger = get_logger(__name__, component="queries")


def expand_query(query: QueryConfig, states: Sequence[str] = ()) -> list[SearchTerm]:
    """Expand one free-text query.

    A per-state query with states configured yields ``"<text> <state>"`` for
    each state; any other query yields its text once. Empty text yields
    nothing.

    Example:
        >>> expand_query(QueryConfig(search_text="solar", per_state=True), ["NV", "UT"])
        [SearchTerm(text='solar NV', label='solar'), SearchTerm(text='solar UT', label='solar')]
    """
    text = (query.search_text or "").strip()
    if not text:
        return []

    usable_states = [state.strip() for state in states if state and state.strip()]
    if query.per_state and usable_states:
        return [SearchTerm(text=f"{text} {state}".strip(), label=text) for state in usable_states]
    return [SearchTerm(text=text, label=text)]


def expand_search(definition: SearchDefinition) -> list[SearchTerm]:
    """Expand a pre-built advanced search into a single filter-carrying term.

    Definitions without a usable filter expression are skipped.
    """
    adv_search = definition.filter_expression()
    if adv_search is None:
        logger.warning(
            f"Search \"{definition.name}\" has no advSearch filter; skipping",
            extra={"event": "queries.search.skipped", "search": definition.name},
        )
        return []
    return [SearchTerm(text="", label=definition.name, adv_search=adv_search)]


def expand_all(
    queries: Iterable[QueryConfig],
    states: Sequence[str] = (),
    searches: Iterable[SearchDefinition] = (),
) -> Iterator[SearchTerm]:
    """Yield every term in configuration order: queries first, then searches."""
    for query in queries:
        yield from expand_query(query, states)
    for definition in searches:
        yield from expand_search(definition)
