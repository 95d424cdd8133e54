"""Data models for reconciliation results."""

from dataclasses import dataclass, field
from typing import List, Optional

from nepa_watch.domain.models import Record


@dataclass
class TermRunStats:
    """
    Outcome of one search term.

    Attributes:
        term: Term text (or the advanced search label)
        label: Query or search definition the term came from
        strategy: Strategy that produced the records, None if none succeeded
        fetched_count: Records the strategy returned
        added_count: Records new to the merged set
        duplicate_count: Records already seen earlier in the run
        error_type: Exception class name when the term was aborted
        error_message: Exception message when the term was aborted
        transport_failure: Whether the upstream could not be reached
    """

    term: str
    label: str
    strategy: Optional[str] = None
    fetched_count: int = 0
    added_count: int = 0
    duplicate_count: int = 0
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    transport_failure: bool = False

    @property
    def had_error(self) -> bool:
        return self.error_type is not None


@dataclass
class ReconciliationResult:
    """
    Merged, deduplicated records of one run plus per-term statistics.

    Attributes:
        records: Unique records in first-seen order
        term_stats: One entry per executed term, in execution order
    """

    records: List[Record] = field(default_factory=list)
    term_stats: List[TermRunStats] = field(default_factory=list)

    @property
    def total_fetched(self) -> int:
        return sum(s.fetched_count for s in self.term_stats)

    @property
    def total_duplicates(self) -> int:
        return sum(s.duplicate_count for s in self.term_stats)

    @property
    def failed_terms(self) -> List[TermRunStats]:
        return [s for s in self.term_stats if s.had_error]
