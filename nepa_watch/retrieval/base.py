"""Strategy interface and result type for the retrieval ladder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from nepa_watch.domain.models import Record, SearchTerm


@dataclass(frozen=True)
class RetrievalResult:
    """Outcome of one strategy for one term.

    Attributes:
        strategy: Name of the strategy that produced this result
        records: Records retrieved (empty on failure)
        failure: Why the strategy gave up, or None on success
    """

    strategy: str
    records: list[Record] = field(default_factory=list)
    failure: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, strategy: str, records: list[Record]) -> "RetrievalResult":
        return cls(strategy=strategy, records=list(records))

    @classmethod
    def failed(cls, strategy: str, reason: str) -> "RetrievalResult":
        return cls(strategy=strategy, records=[], failure=reason)


class RetrievalStrategy(ABC):
    """One way of getting search results for a term.

    ``retrieve`` returns a failed ``RetrievalResult`` when the upstream
    answered with something this strategy cannot use, so the ladder can try
    the next one. It raises a ``RetrievalError`` subclass only for failures
    that make the whole term unrecoverable.
    """

    name: str = "strategy"

    @abstractmethod
    def retrieve(self, term: SearchTerm) -> RetrievalResult:
        """Retrieve records for ``term``."""

    def close(self) -> None:
        """Release held resources. Strategies without any keep the default."""
