"""Raw external search hit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A search hit before classification, extraction and validation.

    Attributes:
        source_title: Page title or label as returned by the source
        snippet: Description/excerpt text used by the structural filter
        source_id: Opaque identifier from the source (page id, entity URI)
    """

    source_title: str
    snippet: str = ""
    source_id: str | None = None
