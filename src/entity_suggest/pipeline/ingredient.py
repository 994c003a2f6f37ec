"""Ingredient classification, name extraction and validation."""

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

INGREDIENT_KEYWORDS: tuple[str, ...] = (
    "ingredient",
    "food",
    "edible",
    "spice",
    "herb",
    "vegetable",
    "fruit",
    "cheese",
    "meat",
    "grain",
    "cereal",
    "legume",
    "seed",
    "nut",
    "oil",
    "flour",
    "condiment",
    "seasoning",
    "culinary",
    "cultivated",
)

INGREDIENT_QUALIFIERS: tuple[str, ...] = (
    "(ingredient)",
    "(food)",
    "(spice)",
    "(herb)",
    "(plant)",
    "(vegetable)",
    "(fruit)",
    "(cheese)",
    "(condiment)",
)

GENERIC_INGREDIENT_TERMS: frozenset[str] = frozenset(
    {
        "food",
        "ingredient",
        "ingredients",
        "plant",
        "spice",
        "spices",
        "herb",
        "herbs",
        "vegetable",
        "vegetables",
        "fruit",
        "meat",
        "grain",
        "seed",
        "oil",
        "cheese",
    }
)


def is_likely_ingredient(candidate: Candidate) -> bool:
    title, snippet = candidate.source_title, candidate.snippet
    if is_meta_page(title, snippet) or is_biography(snippet):
        return False
    return mentions_any(f"{title} {snippet}", INGREDIENT_KEYWORDS)


def extract_ingredient_name(title: str) -> str:
    return strip_qualifiers(title, INGREDIENT_QUALIFIERS)


def is_valid_ingredient_name(name: str) -> bool:
    if not 3 <= len(name) <= 25:
        return False
    if normalize(name) in GENERIC_INGREDIENT_TERMS:
        return False
    if looks_like_person_name(name) or contains_term(name, NON_DOMAIN_TERMS):
        return False
    return len(name.split()) <= 3
