"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from entity_suggest.config import settings
from entity_suggest.entities import EntityKind

MAX_TEXT_LENGTH = 200


class SuggestionRequest(BaseModel):
    """Request DTO for suggestions.

    Accepts camelCase (``entityKind``) as sent by the UI, or snake_case.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field("", description="The partially typed name", max_length=MAX_TEXT_LENGTH)
    entity_kind: EntityKind = Field(
        ...,
        alias="entityKind",
        description="Kind of entity to complete: chef, dish, cuisine, ingredient, restaurant",
    )
    limit: int | None = Field(
        None,
        description="Maximum number of suggestions (defaults depend on enhanced)",
        ge=1,
        le=settings.max_limit,
    )
    enhanced: bool = Field(
        False,
        description="Also query external knowledge bases and merge the results",
    )
    location: str | None = Field(
        None,
        description="Search area for restaurant suggestions",
        max_length=MAX_TEXT_LENGTH,
    )
