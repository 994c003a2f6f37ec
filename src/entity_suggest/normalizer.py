"""Query normalization and diacritic-insensitive comparison keys.

Every matching stage in the engine compares strings through ``normalize``,
so two inputs that differ only by case, accents or surrounding whitespace
must produce the same key:

    >>> normalize("  Crème Brûlée ")
    'creme brulee'
    >>> normalize("café") == normalize("CAFE")
    True

Folding is limited to Unicode decomposition plus removal of combining marks.
Letters without a decomposition (``ø``, ``ł``, ``æ``) are kept as they are.
"""

import itertools
import re
import unicodedata

_WHITESPACE = re.compile(r"\s+")

# Accented forms tried against sources that only match exact code points.
ACCENT_MAP: dict[str, tuple[str, ...]] = {
    "a": ("à", "á", "â", "ã", "ä", "å"),
    "e": ("è", "é", "ê", "ë"),
    "i": ("ì", "í", "î", "ï"),
    "o": ("ò", "ó", "ô", "õ", "ö"),
    "u": ("ù", "ú", "û", "ü"),
    "n": ("ñ",),
    "c": ("ç",),
}


def fold_diacritics(text: str) -> str:
    """Strip combining marks but keep the original case."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw: str) -> str:
    """Return the canonical comparison form of ``raw``.

    Lowercases, decomposes, drops combining marks, collapses internal
    whitespace and trims. Total and idempotent.
    """
    if not raw:
        return ""
    folded = fold_diacritics(raw.lower())
    return _WHITESPACE.sub(" ", folded).strip()


def accent_variants(query: str, max_variants: int = 24) -> list[str]:
    """Build accented spellings of a normalized query.

    Used by lookups against sources whose text filters are accent-sensitive,
    so "creme" can still find "crème". Each variant replaces every occurrence
    of one base letter with one accented form; the unaccented query comes
    first and duplicates are dropped.
    """
    base = normalize(query)
    if not base:
        return []

    variants = [base]
    candidates = (
        base.replace(letter, accented)
        for letter, accents in ACCENT_MAP.items()
        if letter in base
        for accented in accents
    )
    for variant in itertools.islice(candidates, max_variants):
        if variant not in variants:
            variants.append(variant)

    lowered = query.lower().strip()
    if lowered and lowered not in variants:
        variants.append(lowered)

    return variants
