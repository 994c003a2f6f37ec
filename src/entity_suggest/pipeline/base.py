"""Shared stages for turning raw search hits into entity names.

A pipeline is four ordered stages, each a small pure function:

1. structural filter  - ``(Candidate) -> bool``
2. extraction         - ``(title) -> name`` ("" on failure)
3. validation         - ``(name) -> bool``
4. query containment  - ``matches(name, query)``

Stages never raise on bad input. A candidate that fails any stage is dropped.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from entity_suggest.entities import Candidate, EntityKind, Query
from entity_suggest.normalizer import fold_diacritics, normalize

logger = logging.getLogger(__name__)

DEFAULT_DEMONYM_SUFFIXES: tuple[str, ...] = ("an", "ian", "ean", "ese", "ish", "i", "ic", "aican")

# Namespaces and page types that never describe a single entity.
META_MARKERS: tuple[str, ...] = (
    "disambiguation",
    "list of",
    "lists of",
    "category:",
    "talk:",
    "template:",
    "user:",
    "file:",
    "wikipedia:",
    "help:",
    "portal:",
    "draft:",
    "index of",
    "outline of",
    "glossary of",
)

# Snippet phrases that mark a biography.
BIOGRAPHY_MARKERS: tuple[str, ...] = ("(born", "was born", "born in", "(died")

# Terms that put a page outside the food domain for every kind.
NON_DOMAIN_TERMS: tuple[str, ...] = (
    "television",
    "tv series",
    "series",
    "episode",
    "film",
    "movie",
    "album",
    "song",
    "band",
    "novel",
    "magazine",
    "company",
    "corporation",
    "brand",
    "inc",
    "ltd",
    "restaurant chain",
    "video game",
    "river",
    "county",
    "province",
    "district",
    "municipality",
)

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_HONORIFIC = re.compile(r"^(?:mr|mrs|ms|dr|sir|dame|lady|lord|chef)\.?\s", re.IGNORECASE)
_INITIAL = re.compile(r"\b[A-Z]\.(?:\s|$)")
_GENERATIONAL = re.compile(r"\b(?:jr|sr|ii|iii|iv)\.?$", re.IGNORECASE)


def is_meta_page(title: str, snippet: str = "") -> bool:
    """True for disambiguation, list, category and other namespace pages."""
    text = f"{title.lower()} {snippet.lower()}"
    return any(marker in text for marker in META_MARKERS)


def mentions_any(text: str, terms: Iterable[str]) -> bool:
    """Substring check over the normalized text."""
    haystack = normalize(text)
    return any(term in haystack for term in terms)


def contains_term(text: str, terms: Iterable[str]) -> bool:
    """Whole-word check over the normalized text; multi-word terms match as phrases."""
    normalized = normalize(text)
    words = set(re.findall(r"[a-z0-9']+", normalized))
    for term in terms:
        if term in words or (" " in term and term in normalized):
            return True
    return False


def is_biography(snippet: str) -> bool:
    return mentions_any(snippet, BIOGRAPHY_MARKERS)


def strip_qualifiers(
    title: str,
    qualifiers: Iterable[str] = (),
    suffixes: Iterable[str] = (),
) -> str:
    """Remove parenthetical qualifiers and trailing domain suffixes.

    Known qualifiers (e.g. ``"(chef)"``) are removed first, then any other
    parenthetical, then one trailing suffix word such as ``"cuisine"``.
    """
    name = title or ""
    for qualifier in qualifiers:
        name = re.sub(r"\s*" + re.escape(qualifier), "", name, flags=re.IGNORECASE)
    name = _PARENTHETICAL.sub("", name)
    name = re.sub(r"\s+", " ", name).strip()

    for suffix in suffixes:
        pattern = re.compile(r"\s+" + re.escape(suffix) + r"$", re.IGNORECASE)
        if pattern.search(name):
            name = pattern.sub("", name).strip()
            break

    return name.strip(" ,;:-")


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of each word, lower-case the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" ") if word)


def looks_like_person_name(name: str) -> bool:
    """Heuristic person-name detector used to keep people out of non-chef kinds.

    Matches honorifics ("Sir", "Dr."), middle initials ("Julia C. Child")
    and generational suffixes ("Jr."). Plain two-word title-case strings are
    NOT treated as names, since "Beef Wellington" has the same shape.
    """
    folded = fold_diacritics(name).strip()
    if not folded:
        return False
    return bool(
        _HONORIFIC.match(folded) or _INITIAL.search(folded) or _GENERATIONAL.search(folded)
    )


def matches(
    name: str,
    query: str,
    suffixes: Iterable[str] = DEFAULT_DEMONYM_SUFFIXES,
) -> bool:
    """Query containment check used while the user is still typing.

    True when the normalized name contains the normalized query, when the
    name starts with the query followed by a demonym suffix, or when the
    query is a demonym whose stem (query minus suffix, four or more
    characters) starts the name ("japanese" -> "Japan").
    """
    key = normalize(name)
    q = normalize(query)
    if not q:
        return True
    if not key:
        return False
    if q in key or key.startswith(q):
        return True

    for suffix in suffixes:
        if key.startswith(q + suffix):
            return True
        if q.endswith(suffix):
            stem = q[: -len(suffix)]
            if len(stem) >= 4 and key.startswith(stem):
                return True
    return False


@dataclass(frozen=True)
class CandidatePipeline:
    """Ordered classification/extraction/validation chain for one entity kind."""

    kind: EntityKind
    is_likely: Callable[[Candidate], bool]
    extract: Callable[[str], str]
    is_valid: Callable[[str], bool]
    suffixes: tuple[str, ...] = DEFAULT_DEMONYM_SUFFIXES
    # Place search ranks by location, so its hits need not contain the query.
    match_query: bool = True

    def structural(self, candidates: Iterable[Candidate]) -> list[Candidate]:
        return [c for c in candidates if self.is_likely(c)]

    def names(self, candidates: Iterable[Candidate]) -> list[str]:
        """Run extraction and validation over already-filtered candidates."""
        extracted = (self.extract(c.source_title) for c in candidates)
        return [name for name in extracted if name and self.is_valid(name)]

    def run(self, candidates: Iterable[Candidate], query: Query) -> list[str]:
        """Apply all four stages and drop case-insensitive duplicates.

        Returns an empty list, never an error, when nothing survives.
        """
        candidates = list(candidates)
        plausible = self.structural(candidates)
        cleaned = self.names(plausible)
        matched = cleaned
        if self.match_query:
            matched = [n for n in cleaned if matches(n, query.normalized, self.suffixes)]

        seen: set[str] = set()
        unique = []
        for name in matched:
            key = normalize(name)
            if key not in seen:
                seen.add(key)
                unique.append(name)

        logger.debug(
            "%s pipeline for %r: %d raw, %d plausible, %d valid, %d matched",
            self.kind.value,
            query.raw,
            len(candidates),
            len(plausible),
            len(cleaned),
            len(unique),
        )
        return unique
