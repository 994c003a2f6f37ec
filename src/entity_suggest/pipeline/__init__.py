"""Candidate pipelines: raw search hits in, clean entity names out.

Usage:
    ```python
    from entity_suggest.entities import EntityKind, Query
    from entity_suggest.pipeline import get_pipeline

    pipeline = get_pipeline(EntityKind.CUISINE)
    names = pipeline.run(candidates, Query.create("jam", "cuisine", limit=10))
    ```
"""

from entity_suggest.config import settings
from entity_suggest.entities import EntityKind

from .base import DEFAULT_DEMONYM_SUFFIXES, CandidatePipeline, matches
from .chef import extract_chef_name, is_chef_summary, is_likely_chef, is_valid_chef_name
from .cuisine import extract_cuisine_name, is_likely_cuisine, is_valid_cuisine_name
from .dish import extract_dish_name, is_likely_dish, is_valid_dish_name
from .ingredient import extract_ingredient_name, is_likely_ingredient, is_valid_ingredient_name
from .restaurant import extract_restaurant_name, is_likely_restaurant, is_valid_restaurant_name

_STAGES = {
    EntityKind.CHEF: (is_likely_chef, extract_chef_name, is_valid_chef_name),
    EntityKind.DISH: (is_likely_dish, extract_dish_name, is_valid_dish_name),
    EntityKind.CUISINE: (is_likely_cuisine, extract_cuisine_name, is_valid_cuisine_name),
    EntityKind.INGREDIENT: (
        is_likely_ingredient,
        extract_ingredient_name,
        is_valid_ingredient_name,
    ),
    EntityKind.RESTAURANT: (
        is_likely_restaurant,
        extract_restaurant_name,
        is_valid_restaurant_name,
    ),
}


def get_pipeline(
    kind: EntityKind | str,
    suffixes: tuple[str, ...] | None = None,
) -> CandidatePipeline:
    """Build the pipeline for one entity kind.

    Args:
        kind: Entity kind (enum member or its string value)
        suffixes: Demonym suffixes for progressive matching.
                  Defaults to settings.demonym_suffixes.

    Raises:
        ValueError: If ``kind`` is not a known entity kind
    """
    kind = EntityKind(kind)
    is_likely, extract, is_valid = _STAGES[kind]
    return CandidatePipeline(
        kind=kind,
        is_likely=is_likely,
        extract=extract,
        is_valid=is_valid,
        suffixes=tuple(suffixes if suffixes is not None else settings.demonym_suffixes),
        match_query=kind is not EntityKind.RESTAURANT,
    )


__all__ = [
    "CandidatePipeline",
    "DEFAULT_DEMONYM_SUFFIXES",
    "get_pipeline",
    "is_chef_summary",
    "matches",
]
