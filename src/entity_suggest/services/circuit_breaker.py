"""Sliding-window circuit breaker.

The breaker stores nothing but failure timestamps. Its state is computed on
every access from the failures still inside the trailing window:

    OPEN   iff failures in window >= max_failures
    CLOSED otherwise

There is no half-open probe and no reset on success. Once old failures age
out of the window the circuit is closed again, and the next call doubles as
the probe. That is acceptable here because every wrapped call is a
read-only, idempotent search.
"""

import logging
import threading
import time
from collections import deque
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


class CircuitBreaker:
    """Failure window for one external service.

    Example:
        ```python
        breaker = CircuitBreaker("wikidata", max_failures=3, failure_window=60)
        if not breaker.is_open():
            try:
                ...
            except httpx.HTTPError:
                breaker.record_failure()
        ```
    """

    def __init__(
        self,
        service: str,
        max_failures: int,
        failure_window: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the breaker.

        Args:
            service: Service identifier, used in logs and stats
            max_failures: Failures within the window that open the circuit
            failure_window: Trailing window length in seconds
            clock: Source of "now" in seconds. Injectable for tests.
        """
        if max_failures < 1:
            raise ValueError("max_failures must be at least 1")
        if failure_window <= 0:
            raise ValueError("failure_window must be positive")

        self.service = service
        self.max_failures = max_failures
        self.failure_window = failure_window
        self._clock = clock
        self._failures: deque[float] = deque()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        cutoff = now - self.failure_window
        while self._failures and self._failures[0] <= cutoff:
            self._failures.popleft()

    def record_failure(self) -> None:
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._failures.append(now)
            count = len(self._failures)

        if count == self.max_failures:
            logger.info(
                "Circuit for %s opened after %d failures in %.0fs",
                self.service,
                count,
                self.failure_window,
            )

    def failure_count(self) -> int:
        with self._lock:
            self._prune(self._clock())
            return len(self._failures)

    def is_open(self) -> bool:
        return self.failure_count() >= self.max_failures

    @property
    def state(self) -> CircuitState:
        return CircuitState.OPEN if self.is_open() else CircuitState.CLOSED

    def reset(self) -> None:
        """Forget all recorded failures."""
        with self._lock:
            self._failures.clear()

    def snapshot(self) -> dict:
        count = self.failure_count()
        return {
            "service": self.service,
            "state": (
                CircuitState.OPEN if count >= self.max_failures else CircuitState.CLOSED
            ).value,
            "failures_in_window": count,
            "max_failures": self.max_failures,
            "failure_window": self.failure_window,
        }
