from typing import Annotated, Any

from fastapi import FastAPI, Header, Query
from fastapi.middleware.cors import CORSMiddleware

from entity_suggest.api.dependencies import HandlerDep, lifespan
from entity_suggest.config import settings
from entity_suggest.dto import (
    CacheClearResponse,
    HealthCheckResponse,
    SuggestionRequest,
    SuggestionResponse,
)
from entity_suggest.dto.requests import MAX_TEXT_LENGTH
from entity_suggest.entities import EntityKind

SessionHeader = Annotated[
    str | None,
    Header(alias="X-Suggestion-Session", description="Newer requests on a session cancel older ones"),
]

app = FastAPI(
    title="Entity Suggest API",
    description="Autocomplete for chefs, dishes, cuisines, ingredients and restaurants",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Entity Suggest API",
        "version": "0.1.0",
        "description": "Autocomplete for chefs, dishes, cuisines, ingredients and restaurants",
        "entity_kinds": [kind.value for kind in EntityKind],
        "endpoints": {
            "suggestions": "/suggestions",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/suggestions", response_model=SuggestionResponse, response_model_exclude_none=True)
async def suggest(
    request: SuggestionRequest,
    handler: HandlerDep,
    session: SessionHeader = None,
) -> SuggestionResponse:
    """Suggest completions for a partially typed name."""
    return await handler.suggest(request, session=session)


@app.get(
    "/suggestions/{kind}",
    response_model=SuggestionResponse,
    response_model_exclude_none=True,
)
async def suggest_by_kind(
    kind: EntityKind,
    handler: HandlerDep,
    query: Annotated[str, Query(max_length=MAX_TEXT_LENGTH)] = "",
    limit: Annotated[int | None, Query(ge=1, le=settings.max_limit)] = None,
    enhanced: bool = False,
    location: Annotated[str | None, Query(max_length=MAX_TEXT_LENGTH)] = None,
    session: SessionHeader = None,
) -> SuggestionResponse:
    """Query-string variant of POST /suggestions."""
    request = SuggestionRequest(
        query=query,
        entity_kind=kind,
        limit=limit,
        enhanced=enhanced,
        location=location,
    )
    return await handler.suggest(request, session=session)


@app.delete("/suggestions/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep, service: str | None = None) -> CacheClearResponse:
    """Drop cached lookup results for every external service, or one."""
    return await handler.clear_cache(service)


@app.get("/stats", response_model=dict[str, Any])
async def get_stats(handler: HandlerDep) -> dict[str, Any]:
    """Circuit states, cache statistics and paid API usage."""
    return await handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "entity_suggest.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
