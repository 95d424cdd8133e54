"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from nepa_watch.reconciliation.models import TermRunStats


@dataclass
class PipelineRunResult:
    """
    Aggregate results from one feed build.

    Attributes:
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        total_duration_seconds: Wall time of the run
        record_count: Unique records in the national feed
        state_feed_count: Per-state feeds written
        term_stats: Per-term execution statistics
        skipped: Whether the run was skipped because another was in progress
    """

    run_started_at: datetime
    run_finished_at: datetime
    total_duration_seconds: float = 0.0
    record_count: int = 0
    state_feed_count: int = 0
    term_stats: List[TermRunStats] = field(default_factory=list)
    skipped: bool = False

    def __post_init__(self):
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def term_count(self) -> int:
        return len(self.term_stats)

    @property
    def failed_term_count(self) -> int:
        return sum(1 for s in self.term_stats if s.had_error)

    @property
    def total_fetched(self) -> int:
        return sum(s.fetched_count for s in self.term_stats)

    @property
    def had_errors(self) -> bool:
        return self.failed_term_count > 0
