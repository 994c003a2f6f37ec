"""Cancel superseded suggestion requests.

While the user keeps typing, each keystroke issues a new request on the
same session. Only the newest one is worth finishing: starting a request
cancels any unfinished one on the same session key, which aborts its
in-flight network calls.
"""

import asyncio
import logging
import weakref
from collections.abc import Awaitable, Callable
from typing import TypeVar

from entity_suggest.exceptions import SupersededError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SupersedingRunner:
    """Runs at most one live task per session key.

    Example:
        ```python
        runner = SupersedingRunner()
        outcome = await runner.run("session-1", lambda: service.suggest("jam", "cuisine"))
        ```
    """

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}
        self._superseded: weakref.WeakSet[asyncio.Task] = weakref.WeakSet()

    async def run(self, session_key: str, factory: Callable[[], Awaitable[T]]) -> T:
        """Run ``factory()`` as the current request for ``session_key``.

        Raises:
            SupersededError: A newer request on the same key cancelled this one
            asyncio.CancelledError: The caller itself was cancelled
        """
        previous = self._tasks.get(session_key)
        if previous is not None and not previous.done():
            self._superseded.add(previous)
            previous.cancel()
            logger.debug("Superseded in-flight request on session %s", session_key)

        task = asyncio.ensure_future(factory())
        self._tasks[session_key] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task in self._superseded:
                raise SupersededError(session_key) from None
            task.cancel()
            raise
        finally:
            # A newer request may already own the key.
            if self._tasks.get(session_key) is task:
                del self._tasks[session_key]

    @property
    def active_sessions(self) -> int:
        return sum(1 for task in self._tasks.values() if not task.done())
