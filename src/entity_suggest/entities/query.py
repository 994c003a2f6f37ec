"""Suggestion query domain entity."""

from dataclasses import dataclass
from enum import Enum

from entity_suggest.normalizer import normalize


class EntityKind(str, Enum):
    """Kinds of entity the engine can suggest."""

    CHEF = "chef"
    DISH = "dish"
    CUISINE = "cuisine"
    INGREDIENT = "ingredient"
    RESTAURANT = "restaurant"


@dataclass(frozen=True)
class Query:
    """A user-typed partial string, normalized once on creation.

    Attributes:
        raw: The string as typed
        normalized: Lowercase, diacritic-free, whitespace-trimmed form
        kind: Entity kind being completed
        limit: Maximum number of suggestions to return
        location: Free-text location (restaurants only)
    """

    raw: str
    normalized: str
    kind: EntityKind
    limit: int
    location: str | None = None

    @classmethod
    def create(
        cls,
        raw: str,
        kind: EntityKind | str,
        limit: int,
        location: str | None = None,
    ) -> "Query":
        """Build a query, deriving the normalized form from ``raw``."""
        location = (location or "").strip() or None
        return cls(
            raw=raw or "",
            normalized=normalize(raw or ""),
            kind=EntityKind(kind),
            limit=limit,
            location=location,
        )

    @property
    def is_empty(self) -> bool:
        return not self.normalized

    @property
    def cache_key(self) -> str:
        """Kind-qualified key used for result caching."""
        key = f"{self.kind.value}:{self.normalized}"
        if self.location:
            key = f"{key}@{normalize(self.location)}"
        return key
