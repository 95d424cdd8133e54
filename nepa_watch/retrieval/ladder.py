"""The retrieval ladder: ordered strategies, first success wins."""

from typing import Sequence

from nepa_watch.domain.models import SearchTerm
from nepa_watch.logging import get_logger

from .base import RetrievalResult, RetrievalStrategy
from .exceptions import RetrievalConfigurationError

logger = get_logger(__name__, component="retrieval")


class RetrievalLadder:
    """Try each strategy in order until one returns a successful result.

    When every strategy fails the last failure is returned with no records.
    That is an ordinary outcome for a term, not an error. ``RetrievalError``
    raised by a strategy propagates unchanged.
    """

    def __init__(self, strategies: Sequence[RetrievalStrategy]) -> None:
        if not strategies:
            raise RetrievalConfigurationError("A retrieval ladder needs at least one strategy")
        self.strategies = list(strategies)

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.name for strategy in self.strategies]

    def retrieve(self, term: SearchTerm) -> RetrievalResult:
        result = None
        for strategy in self.strategies:
            result = strategy.retrieve(term)
            if result.ok:
                logger.info(
                    f"Retrieved {len(result.records)} records via {strategy.name}",
                    extra={
                        "event": "retrieval.term.succeeded",
                        "strategy": strategy.name,
                        "count": len(result.records),
                    },
                )
                return result

            logger.info(
                f"Strategy {strategy.name} gave up: {result.failure}",
                extra={
                    "event": "retrieval.strategy.fallback",
                    "strategy": strategy.name,
                    "reason": result.failure,
                },
            )

        logger.warning(
            "All retrieval strategies failed",
            extra={
                "event": "retrieval.term.exhausted",
                "strategies": ",".join(self.strategy_names),
                "reason": result.failure,
            },
        )
        return result

    def close(self) -> None:
        for strategy in self.strategies:
            strategy.close()
