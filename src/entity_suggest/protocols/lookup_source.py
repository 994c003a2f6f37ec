"""External lookup source protocols.

A source performs exactly one network call per ``search`` and returns raw
candidates. Resilience (timeout, cache, circuit breaker) and cleanup are
layered on top by ``ExternalLookupClient``; sources raise freely.
"""

from typing import Protocol, runtime_checkable

from entity_suggest.entities import Candidate, EntityKind, Query


@runtime_checkable
class LookupSource(Protocol):
    """Protocol for external search backends."""

    @property
    def name(self) -> str:
        """Service identifier used for caching, breakers and usage counts."""
        ...

    @property
    def billable(self) -> bool:
        """Whether each call should be reported to the usage tracker."""
        ...

    def supports(self, kind: EntityKind) -> bool:
        """Whether this source can answer queries of ``kind``."""
        ...

    async def search(self, query: Query) -> list[Candidate]:
        """Run one search call.

        Raises:
            httpx.HTTPError: On transport errors or non-success status
            MalformedResponseError: If the payload has an unexpected shape
        """
        ...


@runtime_checkable
class SummarySource(Protocol):
    """Protocol for sources that can return a page's opening text."""

    async def fetch_summary(self, title: str) -> str:
        """Return the summary extract for ``title`` ("" when there is none).

        Raises:
            httpx.HTTPError: On transport errors or non-success status
            MalformedResponseError: If the payload has an unexpected shape
        """
        ...
