"""Chef classification, name extraction, validation and summary verification."""

import re

from entity_suggest.entities import Candidate
from entity_suggest.normalizer import fold_diacritics, normalize

from .base import contains_term, is_meta_page, mentions_any, strip_qualifiers

CHEF_KEYWORDS: tuple[str, ...] = (
    "chef",
    "cook",
    "culinary",
    "restaurateur",
    "restaurant",
    "michelin",
    "cookbook",
    "gastronomy",
    "cuisine",
    "pastry",
    "patissier",
)

CHEF_QUALIFIERS: tuple[str, ...] = (
    "(chef)",
    "(cook)",
    "(restaurateur)",
    "(American chef)",
    "(British chef)",
    "(French chef)",
)

NON_NAME_WORDS: tuple[str, ...] = (
    "show",
    "series",
    "program",
    "programme",
    "channel",
    "network",
    "tv",
    "television",
    "movie",
    "film",
    "book",
    "magazine",
    "restaurant",
    "kitchen",
    "company",
    "inc",
    "ltd",
    "corp",
    "group",
    "brand",
    "empire",
    "kingdom",
    "nation",
    "cuisine",
    "award",
    "awards",
)

# Lowercase particles allowed between name words ("Giada de Laurentiis").
_PARTICLE = r"(?:de|da|di|del|della|van|von|der|den|la|le|du|dos|das|y|i|bin|al|ter)"
_NAME_WORD = r"[A-Z][a-z'][A-Za-z'\-]*"
_INITIAL = r"[A-Z]\."
PERSON_NAME = re.compile(
    rf"^{_NAME_WORD}(?: (?:{_PARTICLE} )?(?:{_NAME_WORD}|{_INITIAL})){{1,3}}$"
)
_CLEAN_NAME = re.compile(r"^[A-Z][A-Za-z'\-\s.]+$")

# "... is/was a(n) [up to four qualifier words] chef/cook/restaurateur"
CHEF_SENTENCE = re.compile(
    r"\b(?:is|was)\s+(?:an?|the)\s+((?:[\w'\-]+,?\s+){0,4}?)"
    r"(?:chef|cook|restaurateur|patissier|pastry chef)s?\b"
)
SUMMARY_DISQUALIFIERS: tuple[str, ...] = ("television", "fictional", "series", "character")
# Second occupations of real chefs; removed before the disqualifier check.
SECOND_OCCUPATION = re.compile(r"\btelevision (?:presenter|personality|host|judge)s?\b")

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")


def has_person_name_shape(title: str) -> bool:
    """"Firstname [Middlename] Lastname" capitalization, parentheticals ignored."""
    bare = strip_qualifiers(title)
    return bool(PERSON_NAME.match(fold_diacritics(bare)))


def is_likely_chef(candidate: Candidate) -> bool:
    title, snippet = candidate.source_title, candidate.snippet
    if is_meta_page(title, snippet):
        return False
    if not has_person_name_shape(title):
        return False
    return mentions_any(f"{title} {snippet}", CHEF_KEYWORDS)


def extract_chef_name(title: str) -> str:
    name = strip_qualifiers(title, CHEF_QUALIFIERS)
    if len(name) >= 3 and _CLEAN_NAME.match(fold_diacritics(name)):
        return name
    return ""


def is_valid_chef_name(name: str) -> bool:
    if not 3 <= len(name) <= 60:
        return False
    if name == name.upper() and len(name) > 3:
        return False
    if not 2 <= len(name.split()) <= 5:
        return False
    return not contains_term(name, NON_NAME_WORDS)


def opening_sentence(text: str) -> str:
    """First sentence of a summary extract."""
    text = " ".join((text or "").split())
    if not text:
        return ""
    return _SENTENCE_END.split(text, maxsplit=1)[0]


def is_chef_summary(text: str) -> bool:
    """Check that a page's opening sentence describes a real chef.

    The sentence must say the subject is/was a(n) [nationality/honorific]
    chef, cook or restaurateur, and nowhere may it mention television,
    fictional characters or a series. "Television presenter" and similar
    second occupations are not counted against a real chef.
    """
    sentence = normalize(opening_sentence(text))
    if not CHEF_SENTENCE.search(sentence):
        return False
    remainder = SECOND_OCCUPATION.sub(" ", sentence)
    return not contains_term(remainder, SUMMARY_DISQUALIFIERS)
