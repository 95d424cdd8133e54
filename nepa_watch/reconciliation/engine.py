"""Reconciliation: run every term through the ladder and merge the results."""

from typing import Iterable, List, Sequence

from nepa_watch.config.models import QueryConfig, SearchDefinition
from nepa_watch.domain.models import Record, SearchTerm
from nepa_watch.logging import get_logger
from nepa_watch.logging.context import log_context
from nepa_watch.queries.expander import expand_all
from nepa_watch.retrieval.exceptions import RetrievalError, TransportError
from nepa_watch.retrieval.ladder import RetrievalLadder

from .models import ReconciliationResult, TermRunStats

logger = get_logger(__name__, component="reconciliation")


class RunAbortedError(Exception):
    """Every term of the run failed at the transport level."""

    def __init__(self, message: str, failed_terms: int) -> None:
        super().__init__(message)
        self.failed_terms = failed_terms


class RecordAccumulator:
    """Ordered record set keyed by ``Record.id``; the first occurrence wins.

    Later records with a known id are dropped whole, never merged field by
    field.
    """

    def __init__(self) -> None:
        self._records: List[Record] = []
        self._seen: set[str] = set()

    def add(self, record: Record) -> bool:
        """Add ``record`` unless its id was seen; return whether it was added."""
        if record.id in self._seen:
            return False
        self._seen.add(record.id)
        self._records.append(record)
        return True

    def __contains__(self, record_id: str) -> bool:
        return record_id in self._seen

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> List[Record]:
        return list(self._records)


class ReconciliationEngine:
    """
    Executes every expanded term, one at a time, against the retrieval ladder.

    Terms run strictly sequentially in configuration order. A term that raises
    a ``RetrievalError`` is logged and skipped. If every attempted term failed
    at the transport level the run is aborted with ``RunAbortedError``.
    """

    def __init__(self, ladder: RetrievalLadder) -> None:
        self.ladder = ladder

    def run(
        self,
        queries: Iterable[QueryConfig],
        states: Sequence[str] = (),
        searches: Iterable[SearchDefinition] = (),
    ) -> ReconciliationResult:
        """Expand, retrieve and merge.

        Returns:
            ReconciliationResult with unique records in first-seen order

        Raises:
            RunAbortedError: If the upstream was unreachable for every term
        """
        accumulator = RecordAccumulator()
        term_stats = [
            self._run_term(term, accumulator)
            for term in expand_all(queries, states, searches)
        ]

        transport_failures = [s for s in term_stats if s.transport_failure]
        if term_stats and len(transport_failures) == len(term_stats):
            raise RunAbortedError(
                f"Upstream unreachable for all {len(term_stats)} search terms",
                failed_terms=len(term_stats),
            )

        result = ReconciliationResult(records=accumulator.records, term_stats=term_stats)
        logger.info(
            f"Reconciled {len(result.records)} unique records from {len(term_stats)} terms",
            extra={
                "event": "reconciliation.completed",
                "term_count": len(term_stats),
                "record_count": len(result.records),
                "fetched": result.total_fetched,
                "duplicates": result.total_duplicates,
                "failed_terms": len(result.failed_terms),
            },
        )
        return result

    def _run_term(self, term: SearchTerm, accumulator: RecordAccumulator) -> TermRunStats:
        stats = TermRunStats(term=term.describe(), label=term.label)

        with log_context(term=stats.term, label=term.label):
            try:
                result = self.ladder.retrieve(term)
            except RetrievalError as e:
                stats.error_type = type(e).__name__
                stats.error_message = str(e)
                stats.transport_failure = isinstance(e, TransportError)
                logger.error(
                    f"Skipping term after {stats.error_type}: {e}",
                    extra={"event": "reconciliation.term.failed", "error_type": stats.error_type},
                )
                return stats

            stats.strategy = result.strategy if result.ok else None
            stats.fetched_count = len(result.records)
            for record in result.records:
                if accumulator.add(record):
                    stats.added_count += 1
                else:
                    stats.duplicate_count += 1

            logger.debug(
                f"Term merged: {stats.added_count} new, {stats.duplicate_count} duplicate",
                extra={
                    "event": "reconciliation.term.merged",
                    "strategy": stats.strategy,
                    "added": stats.added_count,
                    "duplicates": stats.duplicate_count,
                },
            )
        return stats

