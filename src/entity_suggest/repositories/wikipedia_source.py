"""Wikipedia search and summary source.

Two call shapes against the same wiki:

- full-text page search (``/w/rest.php/v1/search/page``), used for every
  food kind with a hint word appended to the query
- page summary (``/api/rest_v1/page/summary/{title}``), used to verify
  chef candidates against the opening sentence of their article
"""

import html
import logging
import re
from urllib.parse import quote

import httpx

from entity_suggest.config import settings
from entity_suggest.entities import Candidate, EntityKind, Query
from entity_suggest.exceptions import MalformedResponseError
from entity_suggest.pipeline.chef import opening_sentence

logger = logging.getLogger(__name__)

SEARCH_HINTS = {
    EntityKind.CHEF: "chef",
    EntityKind.DISH: "dish",
    EntityKind.CUISINE: "cuisine",
    EntityKind.INGREDIENT: "food",
}

_TAG = re.compile(r"<[^>]+>")


def strip_markup(text: str | None) -> str:
    """Drop search-match spans and other tags, unescape entities."""
    if not text:
        return ""
    return " ".join(html.unescape(_TAG.sub("", text)).split())


class WikipediaSource:
    """Encyclopedia source backed by the Wikipedia REST APIs.

    This class satisfies the LookupSource and SummarySource protocols
    through structural typing - no explicit inheritance needed.
    """

    name = "wikipedia"
    billable = False

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Wikipedia source.

        Args:
            base_url: Wiki root URL. Defaults to settings.wikipedia_base_url.
            timeout: Per-request timeout in seconds. Defaults to settings.lookup_timeout.
            client: Pre-built HTTP client (tests pass one with a mock transport).
        """
        self._base_url = (base_url or settings.wikipedia_base_url).rstrip("/")
        self._timeout = timeout or settings.lookup_timeout
        self._client = client

    @classmethod
    def create(cls, base_url: str | None = None) -> "WikipediaSource":
        """Factory method to create WikipediaSource with defaults."""
        return cls(base_url=base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"User-Agent": settings.http_user_agent},
                limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            )
        return self._client

    def supports(self, kind: EntityKind) -> bool:
        return kind in SEARCH_HINTS

    async def search(self, query: Query) -> list[Candidate]:
        """Full-text search for ``query`` plus the kind's hint word.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx status
            MalformedResponseError: If the payload has no ``pages`` list
        """
        term = f"{query.raw.strip()} {SEARCH_HINTS[query.kind]}"
        response = await self.client.get(
            f"{self._base_url}/w/rest.php/v1/search/page",
            params={"q": term, "limit": min(max(query.limit * 2, 10), 50)},
        )
        response.raise_for_status()

        try:
            pages = response.json()["pages"]
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedResponseError(self.name, f"unexpected search result: {e}") from e
        if not isinstance(pages, list):
            raise MalformedResponseError(self.name, "pages is not a list")

        candidates = []
        for page in pages:
            if not isinstance(page, dict) or not page.get("title"):
                continue
            snippet = " ".join(
                part
                for part in (strip_markup(page.get("description")), strip_markup(page.get("excerpt")))
                if part
            )
            page_id = page.get("id")
            candidates.append(
                Candidate(
                    source_title=strip_markup(page["title"]),
                    snippet=snippet,
                    source_id=str(page_id) if page_id is not None else None,
                )
            )

        logger.debug("Wikipedia returned %d pages for %r", len(candidates), term)
        return candidates

    async def fetch_summary(self, title: str) -> str:
        """Return the opening sentence of the article named ``title``.

        A missing article is not an error and yields "".

        Raises:
            httpx.HTTPError: On transport errors or non-2xx status other than 404
            MalformedResponseError: If the payload is not a JSON object
        """
        path = quote(title.replace(" ", "_"), safe="")
        response = await self.client.get(f"{self._base_url}/api/rest_v1/page/summary/{path}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return ""
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(self.name, f"summary is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(self.name, "summary is not an object")
        return opening_sentence(data.get("extract") or "")

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
