"""Relevance ranking for suggestion names.

Ordering, highest priority first:

1. exact match of the whole name
2. name starts with the query
3. earlier first occurrence of the query inside the name
4. shorter name
5. lexicographic order

All comparisons except the final tiebreak go through ``normalize``, so they
ignore case and diacritics. Names that do not contain the query at all sort
after every name that does.
"""

from collections.abc import Iterable

from entity_suggest.normalizer import normalize


def relevance_key(name: str, normalized_query: str) -> tuple[bool, bool, int, int, str]:
    """Sort key for ``name`` against an already-normalized query."""
    key = normalize(name)
    position = key.find(normalized_query)
    if position < 0:
        position = len(key) + 1
    return (
        key != normalized_query,
        not key.startswith(normalized_query),
        position,
        len(name),
        name,
    )


def rank(names: Iterable[str], query: str) -> list[str]:
    """Return ``names`` ordered by relevance to ``query``.

    An empty query leaves the input order untouched.
    """
    names = list(names)
    normalized_query = normalize(query)
    if not normalized_query:
        return names
    return sorted(names, key=lambda name: relevance_key(name, normalized_query))
