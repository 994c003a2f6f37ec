"""Google Places text-search source for restaurants.

A paid API: every call is reported to the usage tracker and its circuit
breaker trips sooner than the free knowledge-base sources.
"""

import logging

import httpx

from entity_suggest.config import settings
from entity_suggest.entities import Candidate, EntityKind, Query
from entity_suggest.exceptions import LookupSourceError, MalformedResponseError

logger = logging.getLogger(__name__)

FIELD_MASK = "places.id,places.displayName,places.formattedAddress"
MAX_RESULT_COUNT = 20


class PlacesSource:
    """Restaurant search backed by the Places ``searchText`` endpoint.

    This class satisfies the LookupSource protocol through structural
    typing - no explicit inheritance needed.
    """

    name = "places"
    billable = True

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Places source.

        Args:
            api_key: Google API key. Defaults to settings.google_places_api_key.
            endpoint: searchText URL. Defaults to settings.places_endpoint.
            timeout: Per-request timeout in seconds. Defaults to settings.lookup_timeout.
            client: Pre-built HTTP client (tests pass one with a mock transport).
        """
        self._api_key = api_key or settings.google_places_api_key
        self._endpoint = endpoint or settings.places_endpoint
        self._timeout = timeout or settings.lookup_timeout
        self._client = client

    @classmethod
    def create(cls, api_key: str | None = None) -> "PlacesSource":
        """Factory method to create PlacesSource with defaults."""
        return cls(api_key=api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": settings.http_user_agent},
            )
        return self._client

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def supports(self, kind: EntityKind) -> bool:
        return kind is EntityKind.RESTAURANT

    async def search(self, query: Query) -> list[Candidate]:
        """Search "<query> in <location>" and return venue names.

        Raises:
            LookupSourceError: If no API key is configured
            httpx.HTTPError: On transport errors or non-2xx status
            MalformedResponseError: If the payload has an unexpected shape
        """
        if not self._api_key:
            raise LookupSourceError(self.name, "no API key configured")

        text = query.raw.strip()
        if query.location:
            text = f"{text} in {query.location}"

        response = await self.client.post(
            self._endpoint,
            json={
                "textQuery": text,
                "includedType": "restaurant",
                "maxResultCount": min(query.limit, MAX_RESULT_COUNT),
            },
            headers={"X-Goog-Api-Key": self._api_key, "X-Goog-FieldMask": FIELD_MASK},
        )
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(self.name, f"response is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(self.name, "response is not an object")

        # An empty result set comes back as {}.
        places = data.get("places", [])
        if not isinstance(places, list):
            raise MalformedResponseError(self.name, "places is not a list")

        candidates = []
        for place in places:
            display_name = (place.get("displayName") or {}).get("text", "")
            if not display_name:
                continue
            candidates.append(
                Candidate(
                    source_title=display_name,
                    snippet=place.get("formattedAddress", ""),
                    source_id=place.get("id"),
                )
            )

        logger.debug("Places returned %d venues for %r", len(candidates), text)
        return candidates

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
