"""
Tests for the entity suggest API.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from entity_suggest.api.app import app
from entity_suggest.api.dependencies import get_handler
from entity_suggest.config import settings
from entity_suggest.exceptions import SupersededError
from entity_suggest.handlers import SuggestionHandler
from entity_suggest.repositories import InMemoryResultCache
from entity_suggest.services import SuggestionService


@pytest.fixture
def service():
    """Service over the bundled lists with no external sources."""
    return SuggestionService(
        clients=[],
        cache=InMemoryResultCache(),
        external_on_miss=(),
    )


@pytest.fixture
def client(service):
    """Create a test client with the handler overridden."""
    handler = SuggestionHandler(suggestion_service=service)
    app.dependency_overrides[get_handler] = lambda: handler
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Entity Suggest API"
    assert "restaurant" in data["entity_kinds"]


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "open_circuits": []}


def test_suggest_camel_case(client):
    """Test suggestions with the UI's camelCase payload."""
    response = client.post("/suggestions", json={"query": "jam", "entityKind": "cuisine"})
    assert response.status_code == 200
    data = response.json()
    assert data["suggestions"] == ["Jamaican"]
    assert data["source"] == "static_match"
    assert data["hasMoreResults"] is True
    assert data["message"] == "Try enhanced search for more cuisine options"
    assert data["entityKind"] == "cuisine"


def test_suggest_empty_query_returns_popular(client):
    """Test that an empty query gets popular names."""
    response = client.post("/suggestions", json={"query": "", "entityKind": "cuisine", "limit": 3})
    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "static_popular"
    assert data["suggestions"] == ["Italian", "Mexican", "Chinese"]
    assert "message" not in data


def test_enhanced_requires_query(client):
    """Test that enhanced search rejects an empty query."""
    response = client.post(
        "/suggestions",
        json={"query": "  ", "entityKind": "dish", "enhanced": True},
    )
    assert response.status_code == 400


def test_unknown_entity_kind(client):
    """Test validation of the entity kind."""
    response = client.post("/suggestions", json={"query": "x", "entityKind": "beverage"})
    assert response.status_code == 422


def test_limit_out_of_range(client):
    """Test validation of the limit."""
    response = client.get("/suggestions/dish", params={"query": "pi", "limit": 500})
    assert response.status_code == 422


def test_overlong_query_string_is_422(client):
    """Test that over-long query-string input is a validation error, not a 500."""
    response = client.get("/suggestions/dish", params={"query": "a" * 201})
    assert response.status_code == 422

    response = client.get(
        "/suggestions/restaurant", params={"query": "pizza", "location": "b" * 201}
    )
    assert response.status_code == 422


def test_limit_bound_follows_settings(client):
    """Test that both request forms accept exactly the configured maximum."""
    response = client.get(
        "/suggestions/cuisine", params={"query": "", "limit": settings.max_limit}
    )
    assert response.status_code == 200

    response = client.post(
        "/suggestions",
        json={"query": "", "entityKind": "cuisine", "limit": settings.max_limit + 1},
    )
    assert response.status_code == 422


def test_suggest_by_kind(client):
    """Test the query-string variant."""
    response = client.get("/suggestions/chef", params={"query": "Gordon"})
    assert response.status_code == 200
    data = response.json()
    assert data["suggestions"] == ["Gordon Ramsay"]
    assert data["query"] == "Gordon"


def test_clear_cache(client):
    """Test cache invalidation endpoint."""
    response = client.delete("/suggestions/cache", params={"service": "wikidata"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "deleted_count": 0, "service": "wikidata"}


def test_get_stats(client):
    """Test get stats endpoint."""
    response = client.get("/stats")
    assert response.status_code == 200
    data = response.json()
    assert data["circuits"] == {}
    assert data["cache"]["backend"] == "memory"


def test_superseded_request(service):
    """Test that a superseded request answers with the superseded tag."""
    runner = AsyncMock()
    runner.run.side_effect = SupersededError("tab-1")
    handler = SuggestionHandler(suggestion_service=service, runner=runner)
    app.dependency_overrides[get_handler] = lambda: handler
    try:
        response = TestClient(app).post(
            "/suggestions",
            json={"query": "jam", "entityKind": "cuisine"},
            headers={"X-Suggestion-Session": "tab-1"},
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "superseded"
    assert data["suggestions"] == []


def test_unexpected_error_is_500():
    """Test that service errors become a 500."""
    service = AsyncMock(spec=SuggestionService)
    service.suggest.side_effect = RuntimeError("boom")
    handler = SuggestionHandler(suggestion_service=service)
    app.dependency_overrides[get_handler] = lambda: handler
    try:
        response = TestClient(app).post(
            "/suggestions", json={"query": "jam", "entityKind": "cuisine"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]

