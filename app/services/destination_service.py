"""여행지 페이지용 날씨/사진/장소 집계 서비스."""

from __future__ import annotations

import asyncio
from functools import lru_cache

from app.core.destinations_data import FEATURED_DESTINATIONS
from app.core.logger import get_logger
from app.schemas.destination import (
    Coordinates,
    DestinationData,
    DestinationInfo,
    DestinationPageResponse,
)
from app.services.photo_service import UnsplashPhotoService, get_photo_service
from app.services.places_aggregator import PlacesAggregator, get_places_aggregator
from app.services.weather_service import OpenWeatherService, get_weather_service

logger = get_logger(__name__)

DEFAULT_OG_IMAGE = "https://images.unsplash.com/photo-1488646953014-85cb44e25828?w=1200&h=630&fit=crop"


def slug_to_city_name(slug: str) -> str:
    """`new-york` 형태의 슬러그를 `new york`으로 되돌립니다."""
    return " ".join((slug or "").replace("-", " ").split())


def city_name_to_slug(name: str) -> str:
    """검색어를 URL 슬러그로 바꿉니다."""
    return "-".join((name or "").lower().split())


def find_featured_destination(city_name: str) -> DestinationInfo | None:
    normalized = (city_name or "").strip().lower()
    return next((item for item in FEATURED_DESTINATIONS if item.name.lower() == normalized), None)


def resolve_destination_info(city_name: str) -> DestinationInfo:
    """추천 여행지면 등록된 정보를, 아니면 제목형 이름의 기본 정보를 반환합니다."""
    featured = find_featured_destination(city_name)
    if featured is not None:
        return featured
    return DestinationInfo(
        name=" ".join(word[:1].upper() + word[1:] for word in city_name.split(" ")),
        country="Unknown",
        description=f"Explore the beautiful city of {city_name}.",
        lat=0.0,
        lng=0.0,
    )


class DestinationService:
    """세 제공자 어댑터를 동시에 실행하고 결과를 하나로 묶습니다.

    각 어댑터가 항상 결과를 돌려주므로 여기에는 오류 분기가 없습니다.
    """

    def __init__(
        self,
        weather_service: OpenWeatherService,
        photo_service: UnsplashPhotoService,
        places_aggregator: PlacesAggregator,
    ) -> None:
        self._weather_service = weather_service
        self._photo_service = photo_service
        self._places_aggregator = places_aggregator

    async def fetch(self, city: str, coordinates: Coordinates | None = None) -> DestinationData:
        """날씨/사진/장소를 동시에 조회합니다."""
        weather, photos, places = await asyncio.gather(
            self._weather_service.get_weather(city),
            self._photo_service.get_photos(f"{city} travel city"),
            self._places_aggregator.get_famous_places(city, coordinates),
        )
        logger.info(
            "Destination data assembled: city=%s photos=%d places=%d temperature=%d",
            city,
            len(photos),
            len(places),
            weather.temperature,
        )
        return DestinationData(weather=weather, photos=photos, places=places)

    async def build_page(self, slug: str) -> DestinationPageResponse:
        """슬러그로 여행지 페이지 응답을 조립합니다."""
        city_name = slug_to_city_name(slug)
        info = resolve_destination_info(city_name)
        logger.info("Loading destination: %s", info.name)

        data = await self.fetch(city_name, info.coordinates)
        return DestinationPageResponse(
            title=f"{info.name} - Travel Explorer",
            destination=info,
            og_image=data.photos[0].url if data.photos else DEFAULT_OG_IMAGE,
            weather=data.weather,
            photos=data.photos,
            places=data.places,
        )


@lru_cache(maxsize=1)
def get_destination_service() -> DestinationService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return DestinationService(
        weather_service=get_weather_service(),
        photo_service=get_photo_service(),
        places_aggregator=get_places_aggregator(),
    )
