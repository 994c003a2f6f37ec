"""Suggestion result domain entities."""

from dataclasses import dataclass, field
from enum import Enum


class ResultOrigin(str, Enum):
    """Where an individual suggestion came from."""

    STATIC = "static"
    EXTERNAL_ENHANCED = "external_enhanced"


class SuggestionSource(str, Enum):
    """Tag describing how a whole suggestion list was produced."""

    STATIC_MATCH = "static_match"
    STATIC_POPULAR = "static_popular"
    NO_MATCH = "no_match"
    STATIC_FALLBACK = "static_fallback"
    EXTERNAL_API = "external_api"
    EXTERNAL_ENHANCED = "external_enhanced"
    PLACES_API = "places_api"
    SUPERSEDED = "superseded"


class SuggestionState(str, Enum):
    """Terminal state of the per-request orchestration."""

    STATIC_MATCHED = "static_matched"
    STATIC_EMPTY_OR_PARTIAL = "static_empty_or_partial"
    EXTERNAL_MATCHED = "external_matched"
    EXTERNAL_EMPTY = "external_empty"


@dataclass(frozen=True)
class SuggestionResult:
    """A cleaned, human-presentable entity name returned to callers."""

    name: str
    source: ResultOrigin


@dataclass(frozen=True)
class SuggestionOutcome:
    """Everything the orchestrator knows about one request.

    Attributes:
        suggestions: Ranked, deduplicated results
        source: How the list was produced
        state: Where the orchestration ended
        has_more_results: Whether an enhanced search might find more
        message: Optional hint for the UI
    """

    suggestions: list[SuggestionResult] = field(default_factory=list)
    source: SuggestionSource = SuggestionSource.NO_MATCH
    state: SuggestionState = SuggestionState.STATIC_EMPTY_OR_PARTIAL
    has_more_results: bool = False
    message: str | None = None

    @property
    def names(self) -> list[str]:
        return [result.name for result in self.suggestions]
