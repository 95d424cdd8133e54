"""Soft checks on raw configuration that warn instead of failing."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warnings for configuration that loads but is probably a mistake."""
    messages = []
    states = config_dict.get("states") or []
    queries = config_dict.get("queries") or []

    per_state_queries = []
    seen_texts = set()
    for idx, query in enumerate(queries):
        if not isinstance(query, dict):
            continue
        text = str(query.get("searchText", query.get("search_text")) or "").strip()
        if not text:
            messages.append(f"Query {idx} has empty searchText and will be skipped")
            continue
        if text.lower() in seen_texts:
            messages.append(f"Query '{text}' appears more than once")
        seen_texts.add(text.lower())
        if query.get("perState", query.get("per_state")):
            per_state_queries.append(text)

    if per_state_queries and not states:
        messages.append(
            "perState queries found but no states configured; "
            f"they will run once without a state: {', '.join(per_state_queries)}"
        )

    if isinstance(states, list):
        normalized = [str(s).strip().upper() for s in states if s]
        duplicates = sorted({s for s in normalized if normalized.count(s) > 1})
        if duplicates:
            messages.append(f"Duplicate states will issue repeated searches: {', '.join(duplicates)}")

    total_terms = len(queries) + len(config_dict.get("searches") or [])
    total_terms += len(per_state_queries) * max(len(states) - 1, 0) if isinstance(states, list) else 0
    if total_terms > 200:
        messages.append(
            f"Configuration expands to about {total_terms} searches; "
            "every one is a sequential upstream request"
        )

    return messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit each message through the ``warnings`` module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
