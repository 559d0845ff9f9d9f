"""애플리케이션 진입점 및 라우트 동작 테스트."""

from __future__ import annotations

import importlib
import random

from fastapi.testclient import TestClient

from app.api.dependencies import provide_destination_service, provide_places_aggregator
from app.core.config import get_settings
from app.services.destination_service import DestinationService
from app.services.photo_service import UnsplashPhotoService
from app.services.places_aggregator import PlacesAggregator
from app.services.weather_service import OpenWeatherService
from tests.mocks.mock_opentripmap_service import MockGeocoder, MockOpenTripMapService, make_detail

_PROVIDER_KEYS = (
    "WEATHER_API_KEY",
    "OPENWEATHER_API_KEY",
    "UNSPLASH_API_KEY",
    "UNSPLASH_ACCESS_KEY",
    "OPENTRIPMAP_API_KEY",
)


def _set_env(monkeypatch, **overrides: str) -> None:
    for key in _PROVIDER_KEYS:
        monkeypatch.delenv(key, raising=False)
    for key, value in overrides.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()


def _load_main_module():
    import app.main as main_module

    return importlib.reload(main_module)


def _offline_aggregator(provider=None) -> PlacesAggregator:
    return PlacesAggregator(
        provider=provider,
        geocoder=MockGeocoder(),
        tier_delay_seconds=0,
        detail_delay_seconds=0,
        rng=random.Random(1),
    )


def _offline_client(monkeypatch, provider=None, **env: str) -> TestClient:
    _set_env(monkeypatch, **env)
    main_module = _load_main_module()
    aggregator = _offline_aggregator(provider)
    service = DestinationService(
        weather_service=OpenWeatherService(api_key=None, rng=random.Random(1)),
        photo_service=UnsplashPhotoService(api_key=None, query_delay_seconds=0),
        places_aggregator=aggregator,
    )
    main_module.app.dependency_overrides[provide_destination_service] = lambda: service
    main_module.app.dependency_overrides[provide_places_aggregator] = lambda: aggregator
    return TestClient(main_module.app)


def test_health_check_endpoint(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Travel Explorer Server is running"}


def test_security_headers_are_attached(monkeypatch) -> None:
    _set_env(monkeypatch)
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["referrer-policy"] == "no-referrer"
    assert response.headers["permissions-policy"] == "geolocation=(), microphone=(), camera=()"


def test_cors_allowlist_from_env(monkeypatch) -> None:
    _set_env(
        monkeypatch,
        CORS_ALLOW_ORIGINS="https://example.com",
        CORS_ALLOW_METHODS="GET,POST,OPTIONS",
        CORS_ALLOW_HEADERS="Content-Type",
    )
    main_module = _load_main_module()

    client = TestClient(main_module.app)
    response = client.get("/", headers={"Origin": "https://example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://example.com"


def test_featured_destinations(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/destinations")

    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Paris", "Tokyo", "New York", "London"]


def test_search_redirects_to_destination_slug(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.post("/api/v1/search", json={"destination": "New York"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/api/v1/destinations/new-york"

    empty = client.post("/api/v1/search", json={"destination": "   "}, follow_redirects=False)
    assert empty.status_code == 303
    assert empty.headers["location"] == "/"


def test_destination_page_payload_uses_camel_case(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/destinations/paris")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Paris - Travel Explorer"
    assert body["ogImage"] == body["photos"][0]["url"]
    assert "windSpeed" in body["weather"]
    assert len(body["photos"]) == 8
    assert body["places"][0]["name"] == "Eiffel Tower"
    assert {"reviewCount", "openingHours", "ticketPrice"} <= set(body["places"][0])


def test_city_places_reports_fallback_source(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/places/Tokyo")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["city"] == "Tokyo"
    assert body["count"] == len(body["places"]) == 5
    assert body["source"] == "Fallback"


def test_city_places_accepts_slug(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/places/new-york")

    assert response.status_code == 200
    body = response.json()
    assert body["city"] == "new york"
    assert body["places"][0]["name"] == "Statue of Liberty"

    category = client.get("/api/v1/places/new-york/category/monument").json()
    assert category["city"] == "new york"
    assert category["places"][0]["name"] == "Statue of Liberty"


def test_category_filter_is_case_insensitive_substring(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    museums = client.get("/api/v1/places/Paris/category/MUSEUM").json()
    religious = client.get("/api/v1/places/Paris/category/site").json()

    assert [place["name"] for place in museums["places"]] == ["Louvre Museum"]
    assert religious["count"] == 2


def test_search_places_requires_city_or_coordinates(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/search-places")

    assert response.status_code == 400
    assert response.json() == {"detail": "City name or coordinates (lat, lng) are required"}


def test_search_places_by_coordinates_uses_nearby_search(monkeypatch) -> None:
    provider = MockOpenTripMapService({3: [make_detail("x1", "Louvre Museum", "museums")]})
    client = _offline_client(monkeypatch, provider=provider)

    response = client.get("/api/v1/search-places", params={"lat": 48.86, "lng": 2.34, "radius": 800})

    assert response.status_code == 200
    body = response.json()
    assert body["query"]["radius"] == 800
    assert [place["name"] for place in body["places"]] == ["Louvre Museum"]
    assert provider.radius_calls[0]["radius"] == 800


def test_search_places_by_city(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/search-places", params={"city": "Nowhereville"})

    assert response.status_code == 200
    assert response.json()["count"] == 4


def test_places_diagnostic_summarizes_sample_cities(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    response = client.get("/api/v1/test-places")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert list(body["testResults"]) == ["paris", "london", "tokyo", "new york", "rome"]
    assert all(result["source"] == "Fallback" for result in body["testResults"].values())
    new_york = body["testResults"]["new york"]
    assert len(new_york["sample"]) == 3
    assert new_york["sample"][0]["name"] == "Statue of Liberty"
    assert set(new_york["sample"][0]) == {"name", "category", "rating", "coordinates"}
    assert body["apiStatus"] == {"opentripmap": "Fallback", "weather": "Mock", "photos": "Fallback"}


def test_health_reports_provider_key_status(monkeypatch) -> None:
    client = _offline_client(monkeypatch, OPENTRIPMAP_API_KEY="otm-key")

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["apis"] == {
        "nominatim": "configured",
        "openweather": "missing",
        "unsplash": "missing",
        "opentripmap": "configured",
    }


def test_readiness_endpoint(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    async def _fake_tcp(*args, **kwargs):
        return {"status": "ok", "ok": True, "required": True, "detail": "mock-ok"}

    monkeypatch.setattr("app.core.readiness._check_tcp_connectivity", _fake_tcp)

    response = client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"
    assert response.json()["checks"]["opentripmap"]["status"] == "skip"


def test_slow_places_provider_degrades_to_fallback(monkeypatch) -> None:
    provider = MockOpenTripMapService(
        {3: [make_detail("x1", "Louvre Museum", "museums")]}, detail_delay_seconds=1.0
    )
    client = _offline_client(monkeypatch)
    aggregator = PlacesAggregator(
        provider=provider,
        geocoder=MockGeocoder(),
        tier_delay_seconds=0,
        detail_delay_seconds=0,
        collect_timeout_seconds=0.1,
        rng=random.Random(1),
    )
    service = DestinationService(
        weather_service=OpenWeatherService(api_key=None, rng=random.Random(1)),
        photo_service=UnsplashPhotoService(api_key=None, query_delay_seconds=0),
        places_aggregator=aggregator,
    )
    client.app.dependency_overrides[provide_destination_service] = lambda: service

    response = client.get("/api/v1/destinations/paris")

    assert response.status_code == 200
    body = response.json()
    assert body["places"][0]["name"] == "Eiffel Tower"
    assert all(place["source"] == "Fallback" for place in body["places"])
    assert len(body["photos"]) == 8
    assert "temperature" in body["weather"]
    assert provider.detail_calls == ["x1"]



def test_unhandled_exception_hides_internal_message(monkeypatch) -> None:
    client = _offline_client(monkeypatch)

    class _BrokenService:
        async def build_page(self, slug: str):
            raise RuntimeError("secret internals")

    client.app.dependency_overrides[provide_destination_service] = lambda: _BrokenService()
    client = TestClient(client.app, raise_server_exceptions=False)

    response = client.get("/api/v1/destinations/paris")

    assert response.status_code == 500
    assert response.json() == {"detail": "내부 서버 오류가 발생했습니다."}
