"""Per-state grouping of the merged record set."""

import re
from typing import Dict, Iterable, List, Tuple

from nepa_watch.domain.models import Record
from nepa_watch.logging import get_logger

logger = get_logger(__name__, component="reconciliation")


def state_tokens(record: Record) -> List[str]:
    """Distinct, trimmed state labels of ``record`` in their original order."""
    if not record.state:
        return []
    tokens: List[str] = []
    for token in record.state.split(","):
        token = token.strip()
        if token and token not in tokens:
            tokens.append(token)
    return tokens


def partition_by_state(records: Iterable[Record]) -> Dict[str, List[Record]]:
    """Group records by state label.

    A record listing several states lands once in each of their groups;
    a record without a state lands in none. Records keep encounter order
    within each group, and groups are ordered by first appearance.

    Example:
        >>> groups = partition_by_state([nv_record, nv_ut_record])
        >>> [r.id for r in groups["NV"]], [r.id for r in groups["UT"]]
        (['100', '300'], ['300'])
    """
    groups: Dict[str, List[Record]] = {}
    for record in records:
        for token in state_tokens(record):
            groups.setdefault(token, []).append(record)
    return groups


def state_feed_name(label: str) -> str:
    """File stem for a state feed: uppercase letters only ("N.M." -> "NM")."""
    return re.sub(r"[^A-Z]", "", label.upper())


def group_by_feed_name(partitions: Dict[str, List[Record]]) -> Dict[str, Tuple[str, List[Record]]]:
    """Key partitions by feed file stem.

    Labels that reduce to the same stem ("NV" and "nv") share one feed,
    titled with the first label seen and holding each record once. Labels
    with no letters at all cannot be named and are dropped.
    """
    feeds: Dict[str, Tuple[str, List[Record]]] = {}
    for label, records in partitions.items():
        stem = state_feed_name(label)
        if not stem:
            logger.warning(
                f"State label {label!r} has no letters; no feed written for it",
                extra={"event": "partition.label.unnamed", "state": label},
            )
            continue
        if stem not in feeds:
            feeds[stem] = (label, list(records))
            continue
        merged = feeds[stem][1]
        known = {record.id for record in merged}
        merged.extend(record for record in records if record.id not in known)
    return feeds
