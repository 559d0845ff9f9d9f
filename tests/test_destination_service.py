"""여행지 집계 서비스 테스트."""

from __future__ import annotations

import asyncio
import random

from app.schemas.destination import Coordinates
from app.services.destination_service import (
    DEFAULT_OG_IMAGE,
    DestinationService,
    city_name_to_slug,
    resolve_destination_info,
    slug_to_city_name,
)
from app.services.photo_service import UnsplashPhotoService
from app.services.places_aggregator import PlacesAggregator
from app.services.weather_service import MOCK_WEATHER_READINGS, OpenWeatherService
from tests.mocks.mock_opentripmap_service import MockGeocoder


class _RecordingPhotoService(UnsplashPhotoService):
    def __init__(self, photos=None) -> None:
        super().__init__(api_key=None, query_delay_seconds=0)
        self._photos = photos
        self.queries: list[str] = []

    async def get_photos(self, query: str):
        self.queries.append(query)
        if self._photos is not None:
            return self._photos
        return await super().get_photos(query)


class _RecordingPlacesAggregator(PlacesAggregator):
    def __init__(self) -> None:
        super().__init__(
            provider=None,
            geocoder=MockGeocoder(),
            tier_delay_seconds=0,
            detail_delay_seconds=0,
            rng=random.Random(5),
        )
        self.requests: list[tuple[str, Coordinates | None]] = []

    async def get_famous_places(self, city: str, coordinates: Coordinates | None = None):
        self.requests.append((city, coordinates))
        return await super().get_famous_places(city, coordinates)


def _service(photos=None) -> tuple[DestinationService, _RecordingPhotoService, _RecordingPlacesAggregator]:
    photo_service = _RecordingPhotoService(photos)
    places = _RecordingPlacesAggregator()
    service = DestinationService(
        weather_service=OpenWeatherService(api_key=None, rng=random.Random(5)),
        photo_service=photo_service,
        places_aggregator=places,
    )
    return service, photo_service, places


def test_fetch_combines_all_three_components_without_credentials() -> None:
    service, photo_service, places = _service()

    data = asyncio.run(service.fetch("Paris"))

    assert data.weather in MOCK_WEATHER_READINGS
    assert len(data.photos) == 8
    assert all(photo.id.startswith("generic") for photo in data.photos)
    assert [place.name for place in data.places][0] == "Eiffel Tower"
    assert photo_service.queries == ["Paris travel city"]
    assert places.requests == [("Paris", None)]


def test_build_page_for_featured_destination_uses_known_coordinates() -> None:
    service, _, places = _service()

    page = asyncio.run(service.build_page("new-york"))

    assert page.title == "New York - Travel Explorer"
    assert page.destination.country == "USA"
    assert places.requests == [("new york", Coordinates(lat=40.7128, lng=-74.0060))]
    assert page.og_image == page.photos[0].url
    assert page.places[0].name == "Statue of Liberty"


def test_build_page_for_unknown_destination() -> None:
    service, _, _ = _service(photos=[])

    page = asyncio.run(service.build_page("san-sebastian"))

    assert page.title == "San Sebastian - Travel Explorer"
    assert page.destination.country == "Unknown"
    assert page.destination.description == "Explore the beautiful city of san sebastian."
    assert page.og_image == DEFAULT_OG_IMAGE
    assert len(page.places) == 4


def test_slug_helpers() -> None:
    assert slug_to_city_name("new-york") == "new york"
    assert city_name_to_slug("  New   York ") == "new-york"
    assert city_name_to_slug("") == ""
    assert resolve_destination_info("TOKYO").name == "Tokyo"
