"""HTTP handlers for suggestion operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging

from fastapi import HTTPException, status

from entity_suggest.dto import (
    CacheClearResponse,
    HealthCheckResponse,
    SuggestionRequest,
    SuggestionResponse,
)
from entity_suggest.entities import SuggestionSource
from entity_suggest.exceptions import SupersededError
from entity_suggest.services import CircuitState, SuggestionService, SupersedingRunner

logger = logging.getLogger(__name__)


class SuggestionHandler:
    """HTTP handlers for suggestion operations.

    This handler delegates business logic to SuggestionService
    and handles HTTP-specific concerns like:
    - Rejecting an empty enhanced query with 400
    - Running requests per session so newer ones supersede older ones
    - Converting outcomes to DTOs

    Example:
        ```python
        handler = SuggestionHandler(suggestion_service=service, runner=SupersedingRunner())

        @app.post("/suggestions", response_model=SuggestionResponse)
        async def suggest(request: SuggestionRequest):
            return await handler.suggest(request)
        ```
    """

    def __init__(
        self,
        suggestion_service: SuggestionService,
        runner: SupersedingRunner | None = None,
    ) -> None:
        """Initialize the suggestion handler.

        Args:
            suggestion_service: The suggestion service for business logic (required).
            runner: Per-session supersession. A fresh runner if None.
        """
        self._service = suggestion_service
        self._runner = runner or SupersedingRunner()

    async def suggest(
        self,
        request: SuggestionRequest,
        session: str | None = None,
    ) -> SuggestionResponse:
        """Handle suggestion requests.

        Args:
            request: The suggestion request DTO
            session: Optional session key; a newer request on it cancels this one

        Returns:
            SuggestionResponse with ranked suggestions and a source tag

        Raises:
            HTTPException: 400 for an empty enhanced query, 500 on unexpected errors
        """
        if request.enhanced and not request.query.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Query is required for enhanced search",
            )

        def run():
            return self._service.suggest(
                request.query,
                request.entity_kind,
                limit=request.limit,
                enhanced=request.enhanced,
                location=request.location,
            )

        try:
            if session:
                outcome = await self._runner.run(session, run)
            else:
                outcome = await run()
        except SupersededError:
            return SuggestionResponse(
                suggestions=[],
                source=SuggestionSource.SUPERSEDED.value,
                query=request.query,
                entity_kind=request.entity_kind.value,
            )
        except Exception as e:
            logger.exception("Suggestion request failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get suggestions: {e}",
            ) from e

        return SuggestionResponse(
            suggestions=outcome.names,
            source=outcome.source.value,
            has_more_results=outcome.has_more_results,
            message=outcome.message,
            query=request.query,
            entity_kind=request.entity_kind.value,
        )

    async def clear_cache(self, service: str | None = None) -> CacheClearResponse:
        """Handle DELETE /suggestions/cache requests."""
        try:
            count = await self._service.clear_cache(service)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e
        return CacheClearResponse(success=True, deleted_count=count, service=service)

    async def get_stats(self) -> dict:
        """Handle GET /stats requests."""
        try:
            return await self._service.get_stats()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Open circuits are reported but do not make the service unhealthy:
        suggestions still work from the static lists.
        """
        open_circuits = [
            client.name
            for client in self._service.clients
            if client.breaker.state is CircuitState.OPEN
        ]
        return HealthCheckResponse(status="healthy", open_circuits=open_circuits)
