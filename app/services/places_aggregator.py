"""여행지 주변 대표 명소 수집 서비스.

좌표 확인 → 흥미도 등급별 후보 조회 → 상세 조회 및 정규화 → 중복 제거 → 정렬 순서로
동작하며, 어느 단계에서든 결과가 없으면 도시별 대체 테이블로 떨어집니다.
호출자에게 예외를 던지지 않습니다.
"""

from __future__ import annotations

import asyncio
import random
from functools import lru_cache
from typing import Any

from app.core.config import get_settings
from app.core.fallback_places_data import generic_fallback_seeds, lookup_fallback_city
from app.core.geo import is_resolved, jitter, to_coordinates
from app.core.logger import get_logger
from app.core.place_policy import (
    calculate_rating,
    categorize,
    clamp_rating,
    deduplicate_places,
    format_address,
    format_description,
    has_usable_name,
    pick_opening_hours,
    pick_ticket_price,
    rank_places,
)
from app.core.timeout_policy import get_timeout_policy
from app.schemas.destination import Coordinates, Place
from app.services.geocoding_service import NominatimGeocoder, get_geocoder
from app.services.opentripmap_service import get_opentripmap_service
from app.services.places_service import PointsOfInterestProtocol

logger = get_logger(__name__)

RATE_TIERS: tuple[int, ...] = (3, 2, 1)
MAX_RESULTS_PER_TIER = 15
MAX_DETAILS_PER_TIER = 10
MAX_TOTAL_DETAILS = 30
DEFAULT_RADIUS_METERS = 15000


class PlacesAggregator:
    """POI 제공자 결과를 정규화/정렬하고, 실패 시 대체 장소를 만듭니다."""

    def __init__(
        self,
        provider: PointsOfInterestProtocol | None,
        geocoder: NominatimGeocoder,
        *,
        radius_meters: int = DEFAULT_RADIUS_METERS,
        tier_delay_seconds: float = 0.3,
        detail_delay_seconds: float = 0.1,
        detail_concurrency: int = 1,
        collect_timeout_seconds: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._provider = provider
        self._geocoder = geocoder
        self._radius_meters = radius_meters
        self._tier_delay_seconds = max(0.0, tier_delay_seconds)
        self._detail_delay_seconds = max(0.0, detail_delay_seconds)
        self._detail_concurrency = max(1, int(detail_concurrency))
        self._collect_timeout_seconds = collect_timeout_seconds
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls) -> PlacesAggregator:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        return cls(
            provider=get_opentripmap_service(),
            geocoder=get_geocoder(),
            radius_meters=settings.PLACES_SEARCH_RADIUS_METERS,
            tier_delay_seconds=settings.PLACES_TIER_DELAY_SECONDS,
            detail_delay_seconds=settings.PLACES_DETAIL_DELAY_SECONDS,
            detail_concurrency=settings.PLACES_DETAIL_CONCURRENCY,
            collect_timeout_seconds=get_timeout_policy(settings).places_collect_timeout_seconds,
        )

    async def get_famous_places(self, city: str, coordinates: Coordinates | None = None) -> list[Place]:
        """도시의 대표 명소를 최대 25개 반환합니다. 비어 있는 목록을 반환하지 않습니다."""
        logger.info("Fetching famous places: city=%s", city)
        resolved = coordinates if is_resolved(coordinates) else None
        try:
            if resolved is None:
                resolved = await self._geocoder.geocode(city)
            if resolved.is_unresolved:
                logger.warning("No coordinates found, using fallback places: city=%s", city)
                return self.fallback_places(city, resolved)

            try:
                places = await self._collect_within_deadline(resolved, city, self._radius_meters)
            except asyncio.TimeoutError:
                logger.warning(
                    "Places collection timed out after %ss, using fallback places: city=%s",
                    self._collect_timeout_seconds,
                    city,
                )
                return self.fallback_places(city, resolved)
            if not places:
                logger.warning("No provider places found, using fallback places: city=%s", city)
                return self.fallback_places(city, resolved)

            ranked = rank_places(places)
            logger.info("Fetched %d places: city=%s", len(ranked), city)
            return ranked
        except Exception:
            logger.exception("Places pipeline failed, using fallback places: city=%s", city)
            return self.fallback_places(city, resolved)

    async def search_nearby(
        self,
        lat: float,
        lng: float,
        city: str = "Location",
        radius_meters: int | None = None,
    ) -> list[Place]:
        """알려진 좌표 주변 제공자 장소만 정렬해 반환합니다. 대체 데이터는 쓰지 않습니다."""
        center = to_coordinates(lat, lng)
        if center.is_unresolved:
            logger.warning("Nearby search skipped for unresolved coordinates: city=%s", city)
            return []
        try:
            places = await self._collect_within_deadline(center, city, radius_meters or self._radius_meters)
        except asyncio.TimeoutError:
            logger.warning("Nearby search timed out after %ss: city=%s", self._collect_timeout_seconds, city)
            return []
        except Exception:
            logger.exception("Nearby search failed: city=%s", city)
            return []
        return rank_places(places)

    def fallback_places(self, city: str, coordinates: Coordinates | None = None) -> list[Place]:
        """대체 테이블(또는 범용 4개 항목)로 장소 목록을 만듭니다."""
        known_city = lookup_fallback_city(city)
        seeds = known_city.places if known_city else generic_fallback_seeds(city)
        if is_resolved(coordinates):
            center: Coordinates | None = coordinates
        else:
            center = known_city.center if known_city else None

        city_key = "-".join((city or "").lower().split())
        places: list[Place] = []
        for index, seed in enumerate(seeds):
            rating = clamp_rating(seed.rating)
            places.append(
                Place(
                    id=f"fallback-{city_key}-{index}",
                    name=seed.name,
                    category=seed.category,
                    address=seed.address,
                    description=seed.description,
                    rating=rating,
                    review_count=self._rng.randrange(100, 1100),
                    coordinates=jitter(center, self._rng) if center else Coordinates.unresolved(),
                    opening_hours=pick_opening_hours(seed.category, self._rng),
                    ticket_price=pick_ticket_price(seed.category, rating, self._rng),
                    website=None,
                    image=None,
                    source="Fallback",
                )
            )
        logger.info("Using %d fallback places: city=%s known=%s", len(places), city, known_city is not None)
        return places

    async def _collect_within_deadline(self, center: Coordinates, city: str, radius_meters: int) -> list[Place]:
        if not self._collect_timeout_seconds:
            return await self._collect_places(center, city, radius_meters)
        return await asyncio.wait_for(
            self._collect_places(center, city, radius_meters), timeout=self._collect_timeout_seconds
        )

    async def _collect_places(self, center: Coordinates, city: str, radius_meters: int) -> list[Place]:
        if self._provider is None:
            logger.warning("Places provider not configured: city=%s", city)
            return []

        places: list[Place] = []
        for tier_index, rate in enumerate(RATE_TIERS):
            if len(places) >= MAX_TOTAL_DETAILS:
                break
            if tier_index > 0:
                await asyncio.sleep(self._tier_delay_seconds)

            try:
                hits = await self._provider.radius_search(
                    center.lat,
                    center.lng,
                    radius_meters=radius_meters,
                    rate=rate,
                    limit=MAX_RESULTS_PER_TIER,
                )
            except Exception as exc:
                logger.warning("Places tier search failed: city=%s rate=%s error=%s", city, rate, exc)
                continue

            logger.info("Places tier search: city=%s rate=%s hits=%d", city, rate, len(hits))
            await self._fetch_details(hits[:MAX_DETAILS_PER_TIER], places, city)

        return deduplicate_places(places)

    async def _fetch_details(self, hits: list[dict[str, Any]], places: list[Place], city: str) -> None:
        for start in range(0, len(hits), self._detail_concurrency):
            remaining = MAX_TOTAL_DETAILS - len(places)
            if remaining <= 0:
                return
            batch = hits[start : start + self._detail_concurrency][:remaining]
            results = await asyncio.gather(*(self._fetch_place(hit, city) for hit in batch))
            places.extend(place for place in results if place is not None)
            if start + self._detail_concurrency < len(hits):
                await asyncio.sleep(self._detail_delay_seconds)

    async def _fetch_place(self, hit: dict[str, Any], city: str) -> Place | None:
        xid = str(hit.get("xid") or "")
        try:
            details = await self._provider.details(xid)
            return self._normalize(xid, details) if details else None
        except Exception as exc:
            logger.warning("Place details failed: city=%s xid=%s name=%s error=%s", city, xid, hit.get("name"), exc)
            return None

    def _normalize(self, xid: str, details: dict[str, Any]) -> Place | None:
        name = str(details.get("name") or "").strip()
        if not has_usable_name(name):
            return None

        point = details.get("point") or {}
        coordinates = to_coordinates(point.get("lat"), point.get("lon"))
        if coordinates.is_unresolved:
            logger.debug("Place details without coordinates skipped: xid=%s name=%s", xid, name)
            return None

        kinds = details.get("kinds")
        category = categorize(kinds)
        rating = calculate_rating(details.get("rate"), kinds)
        preview = details.get("preview") or {}

        return Place(
            id=xid,
            name=name,
            category=category,
            address=format_address(details.get("address")),
            description=format_description({**details, "name": name}, category),
            rating=rating,
            review_count=0,
            coordinates=coordinates,
            opening_hours=pick_opening_hours(category, self._rng),
            ticket_price=pick_ticket_price(category, rating, self._rng),
            website=details.get("url") or None,
            image=preview.get("source") or details.get("image") or None,
            source=self._provider.SOURCE_NAME,
        )


@lru_cache(maxsize=1)
def get_places_aggregator() -> PlacesAggregator:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return PlacesAggregator.from_settings()
