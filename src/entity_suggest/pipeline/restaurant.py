"""Restaurant name cleanup.

Place search already returns venues, so there is no structural filter
beyond dropping empty display names.
"""

from entity_suggest.entities import Candidate


def is_likely_restaurant(candidate: Candidate) -> bool:
    return bool(candidate.source_title.strip())


def extract_restaurant_name(title: str) -> str:
    return " ".join(title.split())


def is_valid_restaurant_name(name: str) -> bool:
    return 2 <= len(name) <= 80
