"""Cuisine classification, name extraction and validation.

Encyclopedia titles for cuisines are usually "<Demonym> cuisine" or
"Cuisine of <Place>"; extraction reduces both to the distinguishing part,
so "Jamaican cuisine" becomes "Jamaican".
"""

import re

from entity_suggest.entities import Candidate
from entity_suggest.normalizer import normalize

from .base import (
    NON_DOMAIN_TERMS,
    contains_term,
    is_biography,
    is_meta_page,
    looks_like_person_name,
    mentions_any,
    strip_qualifiers,
)

CUISINE_KEYWORDS: tuple[str, ...] = (
    "cuisine",
    "culinary",
    "cooking",
    "gastronomy",
    "dishes",
    "food culture",
    "culinary tradition",
)

CUISINE_QUALIFIERS: tuple[str, ...] = ("(cuisine)", "(cooking)", "(food)")
CUISINE_SUFFIXES: tuple[str, ...] = ("cuisine", "cooking", "food", "gastronomy")

GENERIC_CUISINE_TERMS: frozenset[str] = frozenset(
    {
        "food",
        "cuisine",
        "cooking",
        "culinary",
        "gastronomy",
        "dish",
        "dishes",
        "recipe",
        "restaurant",
        "kitchen",
        "diet",
        "history",
        "national",
        "regional",
        "traditional",
    }
)

_OF_FORM = re.compile(r"^(?:cuisine|cooking|food)\s+of\s+(?:the\s+)?(.+)$", re.IGNORECASE)


def is_likely_cuisine(candidate: Candidate) -> bool:
    title, snippet = candidate.source_title, candidate.snippet
    if is_meta_page(title, snippet) or is_biography(snippet):
        return False
    return mentions_any(f"{title} {snippet}", CUISINE_KEYWORDS)


def extract_cuisine_name(title: str) -> str:
    name = strip_qualifiers(title, CUISINE_QUALIFIERS, CUISINE_SUFFIXES)
    of_form = _OF_FORM.match(name)
    if of_form:
        name = of_form.group(1).strip()
    return name


def is_valid_cuisine_name(name: str) -> bool:
    if not 3 <= len(name) <= 30:
        return False
    if normalize(name) in GENERIC_CUISINE_TERMS:
        return False
    if looks_like_person_name(name) or contains_term(name, NON_DOMAIN_TERMS):
        return False
    if contains_term(name, ("cuisine", "cooking")):
        # Extraction left the keyword in the middle ("Cuisine and culture").
        return False
    return len(name.split()) <= 3
