"""Pipeline orchestration for one feed build."""

import threading
from typing import Callable, Dict, Optional
from uuid import uuid4

from nepa_watch.config.models import AppConfig
from nepa_watch.feeds.serializer import FeedSerializer
from nepa_watch.feeds.writer import FeedWriter
from nepa_watch.logging import get_logger
from nepa_watch.logging.context import log_context
from nepa_watch.reconciliation.engine import ReconciliationEngine
from nepa_watch.reconciliation.partition import group_by_feed_name, partition_by_state
from nepa_watch.retrieval.factory import build_ladder
from nepa_watch.retrieval.ladder import RetrievalLadder
from nepa_watch.utils.timestamps import utc_now

from .models import PipelineRunResult

logger = get_logger(__name__, component="pipeline")


class FeedPipeline:
    """
    Runs one complete build: expand → retrieve → reconcile → partition →
    serialize → write.

    Feeds are rendered and written only after every term has been processed.
    Retrieval failures of single terms are absorbed by the reconciliation
    engine; ``RunAbortedError`` and ``FeedError`` propagate to the caller.
    """

    def __init__(
        self,
        app_config: AppConfig,
        ladder_factory: Callable[[AppConfig], RetrievalLadder] = build_ladder,
        serializer: Optional[FeedSerializer] = None,
        writer: Optional[FeedWriter] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            app_config: Application configuration
            ladder_factory: Builds a fresh retrieval ladder for each run
            serializer: Feed serializer (default: RSS template serializer)
            writer: Feed writer (default: writes under ``output.directory``)
        """
        self.app_config = app_config
        self.ladder_factory = ladder_factory
        self.serializer = serializer or FeedSerializer()
        self.writer = writer or FeedWriter(app_config.output)
        self._lock = threading.Lock()

    def run_once(self) -> PipelineRunResult:
        """
        Execute one build.

        Returns:
            PipelineRunResult; ``skipped`` is set when a previous run still
            holds the lock

        Raises:
            RunAbortedError: If the upstream was unreachable for every term
            FeedError: If a feed could not be rendered or written
        """
        run_started_at = utc_now()
        run_id = uuid4().hex

        if not self._lock.acquire(blocking=False):
            with log_context(run_id=run_id):
                logger.warning(
                    "Pipeline run skipped: previous run still in progress",
                    extra={"event": "pipeline.run.skipped", "reason": "lock_held"},
                )
            return PipelineRunResult(
                run_started_at=run_started_at, run_finished_at=utc_now(), skipped=True
            )

        try:
            with log_context(run_id=run_id):
                return self._run(run_started_at)
        finally:
            self._lock.release()

    def _run(self, run_started_at) -> PipelineRunResult:
        config = self.app_config
        logger.info(
            "Pipeline run started",
            extra={
                "event": "pipeline.run.started",
                "query_count": len(config.queries),
                "search_count": len(config.searches),
                "state_count": len(config.states),
            },
        )

        ladder = self.ladder_factory(config)
        try:
            reconciliation = ReconciliationEngine(ladder).run(
                config.queries, config.states, config.searches
            )
        finally:
            ladder.close()

        records = reconciliation.records
        state_feeds = group_by_feed_name(partition_by_state(records))
        generated_at = utc_now()

        national = self.serializer.serialize(config.feed.title, config.feed.link, records, generated_at)
        state_documents: Dict[str, str] = {
            feed_name: self.serializer.serialize(
                config.feed.state_title_template.format(state=label),
                config.feed.link,
                state_records,
                generated_at,
            )
            for feed_name, (label, state_records) in state_feeds.items()
        }

        self.writer.write(national, state_documents, generated_at, len(records))

        result = PipelineRunResult(
            run_started_at=run_started_at,
            run_finished_at=utc_now(),
            record_count=len(records),
            state_feed_count=len(state_documents),
            term_stats=reconciliation.term_stats,
        )
        logger.info(
            "Pipeline run completed",
            extra={
                "event": "pipeline.run.completed",
                "duration_ms": int(result.total_duration_seconds * 1000),
                "term_count": result.term_count,
                "failed_terms": result.failed_term_count,
                "total_fetched": result.total_fetched,
                "record_count": result.record_count,
                "state_feed_count": result.state_feed_count,
                "output_dir": str(self.writer.directory),
            },
        )
        return result
