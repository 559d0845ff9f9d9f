"""Unsplash 기반 여행지 사진 검색 서비스."""

from __future__ import annotations

import asyncio
import re
from functools import lru_cache
from typing import Any

import requests

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.destination import Photo
from app.services import provider_http

logger = get_logger(__name__)

TARGET_PHOTO_COUNT = 8
MIN_PHOTO_COUNT = 6

_DESCRIPTOR_SUFFIX = re.compile(r"\s+(travel|city|tourism|attractions|landmarks).*$", re.IGNORECASE)

_EXCLUDED_TERMS = (
    "food",
    "meal",
    "dish",
    "recipe",
    "cooking",
    "restaurant menu",
    "portrait",
    "selfie",
    "headshot",
    "face close",
    "person looking",
    "animal",
    "pet",
    "dog",
    "cat",
    "bird",
    "wildlife",
    "flower close",
    "plant macro",
    "leaf detail",
    "garden flower",
    "bedroom",
    "kitchen interior",
    "bathroom",
    "living room",
    "office desk",
    "workplace",
    "computer screen",
    "laptop",
    "abstract pattern",
    "texture close",
    "wallpaper design",
)

_CITY_TERMS = (
    "city",
    "urban",
    "downtown",
    "street",
    "building",
    "architecture",
    "skyline",
    "view",
    "landscape",
    "aerial",
    "panorama",
    "landmark",
    "monument",
    "bridge",
    "tower",
    "square",
    "plaza",
    "historic",
    "tourism",
    "travel",
    "destination",
    "sight",
)

# (photo id, alt suffix)
_GENERIC_URBAN_PHOTOS = (
    ("1449824913935-59a10b8d2000", "urban view"),
    ("1477959858617-67f85cf4f1df", "cityscape"),
    ("1444723121867-7a241cacace9", "skyline"),
    ("1486299267070-83823f5448dd", "street scene"),
    ("1506905925346-21bda4d32df4", "architecture"),
    ("1480714378408-67cf0d13bc1f", "buildings"),
    ("1514565131-fce0801e5785", "downtown"),
    ("1496442226666-8d4d0e62e6e9", "city view"),
)


def extract_subject(query: str) -> str:
    """`paris travel city` 같은 쿼리에서 설명어를 떼어내 `paris`를 얻습니다."""
    return _DESCRIPTOR_SUFFIX.sub("", query or "").lower().strip()


def build_search_strategies(subject: str) -> list[list[str]]:
    """넓은 검색에서 좁은 검색 순으로 쿼리 묶음을 만듭니다."""
    return [
        [subject],
        [f"{subject} city", f"{subject} tourism"],
        [f"{subject} architecture", f"{subject} landmark", f"{subject} building"],
        [f"{subject} travel", f"{subject} destination", f"{subject} sightseeing"],
    ]


def generic_city_photos(subject: str, count: int = TARGET_PHOTO_COUNT) -> list[Photo]:
    """어느 도시에나 쓸 수 있는 범용 도시 사진을 반환합니다."""
    photos = [
        Photo(
            id=f"generic{index}",
            url=f"https://images.unsplash.com/photo-{photo_id}?w=800",
            thumbnail=f"https://images.unsplash.com/photo-{photo_id}?w=300",
            alt=f"{subject} {suffix}",
        )
        for index, (photo_id, suffix) in enumerate(_GENERIC_URBAN_PHOTOS, start=1)
    ]
    return photos[: max(0, count)]


def is_relevant_photo(raw: dict[str, Any], search_query: str, *, require_city_terms: bool) -> bool:
    """제외 어휘가 없고, 필요하면 도시 관련 어휘가 있는 결과인지 판별합니다."""
    text = f"{raw.get('description') or ''} {raw.get('alt_description') or ''}".lower()
    if any(term in text for term in _EXCLUDED_TERMS):
        return False
    if not require_city_terms:
        return True
    query = search_query.lower()
    return any(term in text or term in query for term in _CITY_TERMS)


class UnsplashPhotoService:
    """점진적 다중 전략 검색으로 여행지 갤러리를 구성합니다."""

    _SEARCH_URL = "https://api.unsplash.com/search/photos"
    _PER_PAGE = 30

    def __init__(
        self,
        api_key: str | None,
        timeout_seconds: int = 10,
        query_delay_seconds: float = 0.2,
    ) -> None:
        self._api_key = api_key or None
        self._timeout_seconds = timeout_seconds
        self._query_delay_seconds = max(0.0, query_delay_seconds)

    @classmethod
    def from_settings(cls) -> UnsplashPhotoService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        return cls(
            api_key=settings.UNSPLASH_API_KEY,
            timeout_seconds=get_timeout_policy(settings).photos_timeout_seconds,
            query_delay_seconds=settings.PHOTOS_QUERY_DELAY_SECONDS,
        )

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    async def get_photos(self, query: str) -> list[Photo]:
        """최대 8장의 사진을 반환합니다. 예외를 던지지 않습니다."""
        subject = extract_subject(query)
        if not self.is_configured:
            logger.info("Unsplash API key not configured, using generic photos: subject=%s", subject)
            return generic_city_photos(subject)

        try:
            collected = await self._collect(subject)
        except Exception:
            logger.exception("Photo search failed unexpectedly: subject=%s", subject)
            return generic_city_photos(subject)

        if len(collected) >= MIN_PHOTO_COUNT:
            logger.info("Returning %d API photos: subject=%s", min(len(collected), TARGET_PHOTO_COUNT), subject)
            return collected[:TARGET_PHOTO_COUNT]
        if collected:
            logger.info("Found %d API photos, padding with generic photos: subject=%s", len(collected), subject)
            padding = generic_city_photos(subject, TARGET_PHOTO_COUNT - len(collected))
            return [*collected, *padding]

        logger.warning("No relevant API photos found, using generic photos: subject=%s", subject)
        return generic_city_photos(subject)

    async def _collect(self, subject: str) -> list[Photo]:
        collected: list[Photo] = []
        seen_ids: set[str] = set()

        for strategy_index, queries in enumerate(build_search_strategies(subject)):
            if len(collected) >= TARGET_PHOTO_COUNT:
                break
            logger.info("Photo strategy %d: %d queries for %s", strategy_index + 1, len(queries), subject)

            for search_query in queries:
                if len(collected) >= TARGET_PHOTO_COUNT:
                    break
                results = await self._search(search_query)
                for raw in results:
                    if len(collected) >= TARGET_PHOTO_COUNT:
                        break
                    if not is_relevant_photo(raw, search_query, require_city_terms=strategy_index > 0):
                        continue
                    photo = self._map_photo(raw, subject)
                    if photo is None or photo.id in seen_ids:
                        continue
                    seen_ids.add(photo.id)
                    collected.append(photo)
                await asyncio.sleep(self._query_delay_seconds)

        return collected

    async def _search(self, search_query: str) -> list[dict[str, Any]]:
        try:
            data = await provider_http.get_json(
                self._SEARCH_URL,
                params={"query": search_query, "per_page": self._PER_PAGE, "client_id": self._api_key},
                headers={"Accept": "application/json", "Accept-Version": "v1"},
                timeout_seconds=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning(
                "Unsplash query failed: query=%s status=%s error=%s",
                search_query,
                provider_http.status_code_of(exc),
                exc,
            )
            return []
        except ValueError as exc:
            logger.warning("Unsplash response parse failed: query=%s error=%s", search_query, exc)
            return []

        results = (data or {}).get("results") if isinstance(data, dict) else None
        if not results:
            logger.info("No Unsplash results: query=%s", search_query)
            return []
        return [item for item in results if isinstance(item, dict)]

    @staticmethod
    def _map_photo(raw: dict[str, Any], subject: str) -> Photo | None:
        photo_id = raw.get("id")
        urls = raw.get("urls") or {}
        url = urls.get("regular") or urls.get("full")
        thumbnail = urls.get("small") or urls.get("thumb")
        if not (photo_id and url and thumbnail):
            return None
        return Photo(
            id=str(photo_id),
            url=url,
            thumbnail=thumbnail,
            alt=raw.get("alt_description") or raw.get("description") or f"{subject} view",
        )


@lru_cache(maxsize=1)
def get_photo_service() -> UnsplashPhotoService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return UnsplashPhotoService.from_settings()
