"""Dish classification, name extraction and validation."""

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

DISH_KEYWORDS: tuple[str, ...] = (
    "dish",
    "food",
    "cuisine",
    "recipe",
    "dessert",
    "soup",
    "stew",
    "salad",
    "bread",
    "pastry",
    "cake",
    "sauce",
    "noodle",
    "dumpling",
    "sandwich",
    "pasta",
    "pizza",
    "curry",
    "snack",
    "delicacy",
    "meal",
    "served",
    "baked",
    "fried",
    "grilled",
    "roasted",
    "cooked",
)

DISH_QUALIFIERS: tuple[str, ...] = (
    "(dish)",
    "(food)",
    "(dessert)",
    "(soup)",
    "(sauce)",
    "(bread)",
    "(pastry)",
    "(cake)",
)
DISH_SUFFIXES: tuple[str, ...] = ("recipe", "dish")

# Single words too broad to be a useful suggestion on their own.
GENERIC_DISH_TERMS: frozenset[str] = frozenset(
    {
        "food",
        "dish",
        "dishes",
        "meal",
        "cuisine",
        "recipe",
        "soup",
        "stew",
        "salad",
        "dessert",
        "bread",
        "sauce",
        "snack",
        "breakfast",
        "lunch",
        "dinner",
        "cooking",
    }
)


def is_likely_dish(candidate: Candidate) -> bool:
    title, snippet = candidate.source_title, candidate.snippet
    if is_meta_page(title, snippet) or is_biography(snippet):
        return False
    return mentions_any(f"{title} {snippet}", DISH_KEYWORDS)


def extract_dish_name(title: str) -> str:
    return strip_qualifiers(title, DISH_QUALIFIERS, DISH_SUFFIXES)


def is_valid_dish_name(name: str) -> bool:
    if not 3 <= len(name) <= 50:
        return False
    if normalize(name) in GENERIC_DISH_TERMS:
        return False
    if looks_like_person_name(name):
        return False
    if contains_term(name, NON_DOMAIN_TERMS):
        return False
    if contains_term(name, ("cuisine", "cooking", "recipes")):
        return False
    # Multi-word titles are accepted as specific dishes ("Beef Wellington").
    return len(name.split()) <= 6
