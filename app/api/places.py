"""장소 조회 API."""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import provide_places_aggregator, provide_settings
from app.core.config import Settings
from app.core.logger import get_logger
from app.core.readiness import collect_readiness_status
from app.schemas.places import (
    CategoryPlacesResponse,
    CityPlacesSummary,
    HealthResponse,
    PlaceSample,
    PlaceSearchQuery,
    PlacesDiagnosticResponse,
    PlacesResponse,
    SearchPlacesResponse,
)
from app.services.destination_service import slug_to_city_name
from app.services.places_aggregator import DEFAULT_RADIUS_METERS, PlacesAggregator

router = APIRouter(prefix="/api/v1", tags=["places"])
logger = get_logger(__name__)

DIAGNOSTIC_CITIES: tuple[str, ...] = ("paris", "london", "tokyo", "new york", "rome")


def _now() -> datetime:
    return datetime.now(UTC)


@router.get("/places/{city}", response_model=PlacesResponse)
async def get_city_places(
    city: str,
    aggregator: PlacesAggregator = Depends(provide_places_aggregator),  # noqa: B008
) -> PlacesResponse:
    """도시의 대표 명소 목록을 반환합니다. `new-york` 같은 슬러그도 받습니다."""
    city = slug_to_city_name(city)
    logger.info("Places request received: city=%s", city)
    places = await aggregator.get_famous_places(city)
    return PlacesResponse(
        city=city,
        places=places,
        count=len(places),
        source=places[0].source if places else "none",
        timestamp=_now(),
    )


@router.get("/places/{city}/category/{category}", response_model=CategoryPlacesResponse)
async def get_city_places_by_category(
    city: str,
    category: str,
    aggregator: PlacesAggregator = Depends(provide_places_aggregator),  # noqa: B008
) -> CategoryPlacesResponse:
    """카테고리 이름에 검색어가 포함된 장소만 반환합니다(대소문자 무시)."""
    city = slug_to_city_name(city)
    places = await aggregator.get_famous_places(city)
    needle = category.lower()
    filtered = [place for place in places if needle in place.category.lower()]
    logger.info("Category filter: city=%s category=%s matched=%d", city, category, len(filtered))
    return CategoryPlacesResponse(
        city=city,
        category=category,
        places=filtered,
        count=len(filtered),
        timestamp=_now(),
    )


@router.get("/search-places", response_model=SearchPlacesResponse)
async def search_places(
    city: str | None = Query(default=None),
    lat: float | None = Query(default=None),
    lng: float | None = Query(default=None),
    radius: int = Query(default=DEFAULT_RADIUS_METERS, gt=0),
    aggregator: PlacesAggregator = Depends(provide_places_aggregator),  # noqa: B008
) -> SearchPlacesResponse:
    """좌표가 있으면 주변 검색, 없으면 도시 이름으로 명소를 검색합니다."""
    has_coordinates = lat is not None and lng is not None
    if not city and not has_coordinates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="City name or coordinates (lat, lng) are required",
        )

    if has_coordinates:
        places = await aggregator.search_nearby(lat, lng, city or "Location", radius)
    else:
        places = await aggregator.get_famous_places(city)

    return SearchPlacesResponse(
        query=PlaceSearchQuery(city=city, lat=lat, lng=lng, radius=radius),
        places=places,
        count=len(places),
        timestamp=_now(),
    )


@router.get("/test-places", response_model=PlacesDiagnosticResponse)
async def run_places_diagnostic(
    aggregator: PlacesAggregator = Depends(provide_places_aggregator),  # noqa: B008
    settings: Settings = Depends(provide_settings),  # noqa: B008
) -> PlacesDiagnosticResponse:
    """대표 도시들의 장소 수집 결과를 요약해 제공자 연동 상태를 점검합니다."""
    results: dict[str, CityPlacesSummary] = {}
    for city in DIAGNOSTIC_CITIES:
        logger.info("Places diagnostic: city=%s", city)
        places = await aggregator.get_famous_places(city)
        results[city] = CityPlacesSummary(
            count=len(places),
            source=places[0].source if places else "Unknown",
            sample=[
                PlaceSample(
                    name=place.name,
                    category=place.category,
                    rating=place.rating,
                    coordinates=place.coordinates,
                )
                for place in places[:3]
            ],
        )

    return PlacesDiagnosticResponse(
        message="Places provider integration test completed",
        test_results=results,
        timestamp=_now(),
        api_status={
            "opentripmap": "Active" if settings.OPENTRIPMAP_API_KEY else "Fallback",
            "weather": "Active" if settings.WEATHER_API_KEY else "Mock",
            "photos": "Active" if settings.UNSPLASH_API_KEY else "Fallback",
        },
    )


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(provide_settings)) -> HealthResponse:  # noqa: B008
    """제공자별 자격 증명 설정 여부를 반환합니다."""

    def _state(key: str | None) -> str:
        return "configured" if key else "missing"

    return HealthResponse(
        timestamp=_now(),
        apis={
            "nominatim": "configured",
            "openweather": _state(settings.WEATHER_API_KEY),
            "unsplash": _state(settings.UNSPLASH_API_KEY),
            "opentripmap": _state(settings.OPENTRIPMAP_API_KEY),
        },
    )


@router.get("/health/ready")
async def readiness() -> dict[str, object]:
    """제공자 호스트 연결 준비 상태를 반환합니다."""
    return await collect_readiness_status()
