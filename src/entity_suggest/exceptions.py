"""Error types raised inside the suggestion engine.

None of these escape ``SuggestionService``: lookup errors degrade to empty
results, and ``SupersededError`` is turned into a ``superseded`` response by
the HTTP handler.
"""


class SuggestionEngineError(Exception):
    """Base class for engine errors."""


class LookupSourceError(SuggestionEngineError):
    """An external source failed to answer (non-success status, bad transport)."""

    def __init__(self, service: str, message: str) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service


class MalformedResponseError(LookupSourceError):
    """An external source answered with an unexpected payload shape."""


class SupersededError(SuggestionEngineError):
    """A newer request on the same session replaced this one."""

    def __init__(self, session_key: str) -> None:
        super().__init__(f"request superseded on session {session_key!r}")
        self.session_key = session_key
