"""Wikidata SPARQL lookup source.

Queries the public Wikidata Query Service for chefs, dishes and
ingredients. One HTTP call per search: every accent variant of the query
goes into a single ``FILTER`` so typing "creme" still finds "Crème brûlée"
without fanning out into several round-trips.

Class strategies:
- chef: occupation (P106) chef (Q3499072), fictional and television
  characters excluded
- dish: instance of dish (Q746549), of any subclass of dish, or a meal
  (Q1362230) with a "made from material" (P186) statement
- ingredient: has an Open Food Facts ingredient id (P5930)
"""

import logging

import httpx

from entity_suggest.config import settings
from entity_suggest.entities import Candidate, EntityKind, Query
from entity_suggest.exceptions import MalformedResponseError
from entity_suggest.normalizer import accent_variants
from entity_suggest.pipeline.base import capitalize_words

logger = logging.getLogger(__name__)

LABEL_LANGUAGES = ("en", "fr", "es", "it")

_CLASS_PATTERNS = {
    EntityKind.CHEF: """
  ?item wdt:P106 wd:Q3499072 .
  FILTER NOT EXISTS { ?item wdt:P31 wd:Q95074 }
  FILTER NOT EXISTS { ?item wdt:P31 wd:Q15632617 }
  FILTER NOT EXISTS { ?item wdt:P31 wd:Q15773317 }""",
    EntityKind.DISH: """
  { ?item wdt:P31 wd:Q746549 . }
  UNION { ?item wdt:P31 ?dishType . ?dishType wdt:P279* wd:Q746549 . }
  UNION { ?item wdt:P31 wd:Q1362230 . ?item wdt:P186 ?material . }""",
    EntityKind.INGREDIENT: """
  ?item wdt:P5930 ?offId .""",
}

# Prefixed to each description so the structural filter sees the class.
_KIND_TERMS = {
    EntityKind.CHEF: "chef",
    EntityKind.DISH: "dish",
    EntityKind.INGREDIENT: "food ingredient",
}


def sparql_literal(value: str) -> str:
    """Quote ``value`` as a SPARQL string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def build_sparql(query: Query, row_limit: int) -> str:
    """Render the SPARQL text for ``query``.

    Raises:
        ValueError: If the entity kind has no Wikidata strategy
    """
    if query.kind not in _CLASS_PATTERNS:
        raise ValueError(f"Wikidata has no strategy for {query.kind.value!r}")

    variants = accent_variants(query.raw or query.normalized)
    label_filter = " || ".join(
        f"CONTAINS(LCASE(?label), {sparql_literal(variant)})" for variant in variants
    )
    languages = ", ".join(sparql_literal(lang) for lang in LABEL_LANGUAGES)

    return f"""SELECT DISTINCT ?item ?label ?description WHERE {{{_CLASS_PATTERNS[query.kind]}
  ?item rdfs:label ?label .
  FILTER(LANG(?label) IN ({languages}))
  FILTER({label_filter})
  OPTIONAL {{ ?item schema:description ?description . FILTER(LANG(?description) = "en") }}
}}
ORDER BY STRLEN(?label)
LIMIT {row_limit}"""


class WikidataSource:
    """Structured knowledge-base source backed by the Wikidata Query Service.

    This class satisfies the LookupSource protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        source = WikidataSource.create()
        candidates = await source.search(Query.create("ramsay", "chef", limit=10))
        ```
    """

    name = "wikidata"
    billable = False
    KINDS = frozenset({EntityKind.CHEF, EntityKind.DISH, EntityKind.INGREDIENT})

    def __init__(
        self,
        endpoint: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Wikidata source.

        Args:
            endpoint: SPARQL endpoint URL. Defaults to settings.wikidata_endpoint.
            timeout: Per-request timeout in seconds. Defaults to settings.lookup_timeout.
            client: Pre-built HTTP client (tests pass one with a mock transport).
        """
        self._endpoint = endpoint or settings.wikidata_endpoint
        self._timeout = timeout or settings.lookup_timeout
        self._client = client

    @classmethod
    def create(cls, endpoint: str | None = None) -> "WikidataSource":
        """Factory method to create WikidataSource with defaults."""
        return cls(endpoint=endpoint)

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
        return kind in self.KINDS

    async def search(self, query: Query) -> list[Candidate]:
        """Run one SPARQL query and return label rows as candidates.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx status
            MalformedResponseError: If the result set is not shaped as expected
        """
        sparql = build_sparql(query, row_limit=min(max(query.limit * 2, 15), 50))
        response = await self.client.post(
            self._endpoint,
            data={"query": sparql},
            headers={"Accept": "application/sparql-results+json"},
        )
        response.raise_for_status()

        try:
            bindings = response.json()["results"]["bindings"]
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedResponseError(self.name, f"unexpected SPARQL result: {e}") from e
        if not isinstance(bindings, list):
            raise MalformedResponseError(self.name, "bindings is not a list")

        candidates = []
        for row in bindings:
            try:
                label = row["label"]["value"]
            except (KeyError, TypeError) as e:
                raise MalformedResponseError(self.name, f"row without label: {row!r}") from e
            description = (row.get("description") or {}).get("value", "")
            if query.kind is not EntityKind.CHEF:
                label = capitalize_words(label)
            candidates.append(
                Candidate(
                    source_title=label,
                    snippet=f"{_KIND_TERMS[query.kind]}: {description}".strip(),
                    source_id=(row.get("item") or {}).get("value"),
                )
            )

        logger.debug("Wikidata returned %d rows for %r", len(candidates), query.raw)
        return candidates

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
