"""
Tests for the search and analytics endpoints.

Tests /api/search/query, /api/search/suggest and /api/analytics/search
with the catalog store swapped for an in-memory one.
"""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from engines.search import CatalogStoreError
from middleware.logging_middleware import RequestLoggingMiddleware
from routers import analytics, search
from routers.search import get_catalog_store

from .conftest import CatalogRow, FakeCatalogStore, make_candidate

# Create test app
app = FastAPI()
app.add_middleware(RequestLoggingMiddleware)
app.include_router(search.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")


@pytest.fixture
def catalog():
    return FakeCatalogStore(rows=[
        CatalogRow(
            make_candidate(id=1, name="Dell XPS 13 Plus", slug="dell-xps-13-plus", price="1499.00",
                           category_name="Laptops", images=["/img/xps.jpg"], review_ratings=[5, 4],
                           short_description="13 inch ultrabook"),
            category_slug="laptops",
        ),
        CatalogRow(
            make_candidate(id=2, name="Leather Jacket", slug="leather-jacket", price="249.00",
                           category_name="Fashion"),
            category_slug="fashion",
            stock=0,
        ),
    ])


@pytest.fixture
def client(catalog):
    """Test client with the in-memory catalog installed."""
    app.dependency_overrides[get_catalog_store] = lambda: catalog
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    """Test client whose catalog store is down."""
    store = AsyncMock()
    store.count.side_effect = CatalogStoreError("connection refused")
    store.fetch_candidates.side_effect = CatalogStoreError("connection refused")
    app.dependency_overrides[get_catalog_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestSearchQuery:

    def test_response_shape(self, client):
        response = client.get("/api/search/query", params={"q": "laptop", "page": "1", "pageSize": "12"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["page"] == 1
        assert data["pageSize"] == 12
        assert data["products"] == [{
            "id": 1,
            "name": "Dell XPS 13 Plus",
            "slug": "dell-xps-13-plus",
            "image": "/img/xps.jpg",
            "price": 1499.0,
            "category": "Laptops",
            "averageRating": 4.5,
            "reviewCount": 2,
            "shortDescription": "13 inch ultrabook",
        }]

    def test_short_query_returns_empty_payload(self, client, catalog):
        response = client.get("/api/search/query", params={"q": "l"})

        assert response.status_code == 200
        assert response.json() == {"products": [], "total": 0, "page": 1, "pageSize": 12}
        assert catalog.events == []

    def test_missing_query_is_treated_as_empty(self, client):
        response = client.get("/api/search/query")

        assert response.status_code == 200
        assert response.json()["total"] == 0

    def test_malformed_parameters_fall_back(self, client):
        response = client.get(
            "/api/search/query",
            params={"q": "jacket", "page": "zero", "pageSize": "lots", "min": "abc"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["pageSize"] == 12
        assert [p["name"] for p in data["products"]] == ["Leather Jacket"]
        assert data["products"][0]["image"] == "/placeholder.svg"

    def test_page_size_is_clamped(self, client):
        response = client.get("/api/search/query", params={"q": "laptop", "pageSize": "500"})
        assert response.json()["pageSize"] == 50

    def test_structural_filters(self, client):
        in_stock = client.get("/api/search/query", params={"q": "jacket", "inStock": "true"})
        priced = client.get("/api/search/query", params={"q": "jacket", "max": "100"})
        category = client.get("/api/search/query", params={"q": "jacket", "category": "fashion"})

        assert in_stock.json()["total"] == 0
        assert priced.json()["total"] == 0
        assert category.json()["total"] == 1

    def test_store_failure_is_503(self, failing_client):
        response = failing_client.get("/api/search/query", params={"q": "laptop"})

        assert response.status_code == 503
        assert response.json()["detail"] == "Search is temporarily unavailable"

    def test_request_id_header(self, client):
        response = client.get("/api/search/query", params={"q": "laptop"})
        assert response.headers.get("X-Request-ID")

    def test_search_event_is_recorded(self, client):
        with patch("routers.search.record_search_event") as record:
            client.get("/api/search/query", params={"q": "Laptop"})

        record.assert_called_once()
        kwargs = record.call_args.kwargs
        assert kwargs["query"] == "Laptop"
        assert kwargs["result_count"] == 1
        assert kwargs["source"] == "api"

    def test_no_event_when_store_fails(self, failing_client):
        with patch("routers.search.record_search_event") as record:
            failing_client.get("/api/search/query", params={"q": "laptop"})

        record.assert_not_called()


class TestSuggest:

    def test_suggestions(self, client):
        response = client.get("/api/search/suggest", params={"q": "jac"})

        assert response.status_code == 200
        assert response.json() == {"suggestions": [{
            "id": 2,
            "name": "Leather Jacket",
            "slug": "leather-jacket",
            "image": "/placeholder.svg",
            "price": 249.0,
            "category": "Fashion",
            "averageRating": 0.0,
            "reviewCount": 0,
        }]}

    def test_empty_query(self, client, catalog):
        response = client.get("/api/search/suggest", params={"q": "  "})

        assert response.json() == {"suggestions": []}
        assert catalog.events == []

    def test_limit_is_clamped(self, client, catalog):
        client.get("/api/search/suggest", params={"q": "laptop", "limit": "100"})
        client.get("/api/search/suggest", params={"q": "laptop", "limit": "abc"})

        assert catalog.fetch_limits == [20, 8]

    def test_store_failure_is_503(self, failing_client):
        response = failing_client.get("/api/search/suggest", params={"q": "laptop"})
        assert response.status_code == 503


class TestSearchAnalytics:

    def test_track_search(self, client):
        with patch("routers.analytics.record_search_event") as record:
            response = client.post(
                "/api/analytics/search",
                json={"query": "sofa", "resultCount": 0, "aiSuggested": True, "source": "popup"},
            )

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        kwargs = record.call_args.kwargs
        assert kwargs["query"] == "sofa"
        assert kwargs["result_count"] == 0
        assert kwargs["ai_suggested"] is True
        assert kwargs["source"] == "popup"

    def test_defaults(self, client):
        with patch("routers.analytics.record_search_event") as record:
            response = client.post("/api/analytics/search", json={})

        assert response.json() == {"ok": True}
        assert record.call_args.kwargs["source"] == "unknown"

    def test_negative_result_count_is_rejected(self, client):
        response = client.post("/api/analytics/search", json={"query": "sofa", "resultCount": -1})
        assert response.status_code == 422

    def test_logging_failure_does_not_escape(self):
        from services.search_analytics_service import record_search_event

        with patch("services.search_analytics_service.get_search_event_logger", side_effect=RuntimeError("boom")):
            record_search_event(query="sofa", result_count=0)
