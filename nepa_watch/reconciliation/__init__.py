"""Cross-term deduplication and per-state partitioning."""

from .engine import ReconciliationEngine, RecordAccumulator, RunAbortedError
from .models import ReconciliationResult, TermRunStats
from .partition import group_by_feed_name, partition_by_state, state_feed_name, state_tokens

__all__ = [
    "ReconciliationEngine",
    "RecordAccumulator",
    "RunAbortedError",
    "ReconciliationResult",
    "TermRunStats",
    "group_by_feed_name",
    "partition_by_state",
    "state_feed_name",
    "state_tokens",
]
