"""Quota tracking protocol for paid external APIs."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class UsageTracker(Protocol):
    """Receives one notification per billable external call.

    Callers treat ``record_external_call`` as fire-and-forget: its failures
    are logged and never affect a suggestion request.
    """

    async def record_external_call(self, service_id: str) -> None:
        ...

    def get_stats(self) -> dict:
        ...
