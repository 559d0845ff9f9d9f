"""OpenStreetMap Nominatim 기반 지오코딩 서비스."""

from __future__ import annotations

from functools import lru_cache

import requests

from app.core.config import get_settings
from app.core.geo import to_coordinates
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.schemas.destination import Coordinates
from app.services import provider_http

logger = get_logger(__name__)


class NominatimGeocoder:
    """도시 이름을 좌표로 변환합니다. 실패하면 (0, 0)을 반환하고 예외를 던지지 않습니다."""

    _SEARCH_URL = "https://nominatim.openstreetmap.org/search"

    def __init__(self, user_agent: str, timeout_seconds: int = 5) -> None:
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls) -> NominatimGeocoder:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        return cls(
            user_agent=settings.HTTP_USER_AGENT,
            timeout_seconds=get_timeout_policy(settings).geocoding_timeout_seconds,
        )

    async def geocode(self, place_name: str) -> Coordinates:
        """장소 이름의 첫 번째 검색 결과 좌표를 반환합니다."""
        query = (place_name or "").strip()
        if not query:
            return Coordinates.unresolved()

        logger.info("Geocoding city: %s", query)
        try:
            rows = await provider_http.get_json(
                self._SEARCH_URL,
                params={"format": "json", "q": query, "limit": 1, "addressdetails": 1},
                headers={"User-Agent": self._user_agent},
                timeout_seconds=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Geocoding failed: city=%s status=%s error=%s", query, provider_http.status_code_of(exc), exc)
            return Coordinates.unresolved()
        except ValueError as exc:
            logger.warning("Geocoding response parse failed: city=%s error=%s", query, exc)
            return Coordinates.unresolved()

        if not isinstance(rows, list) or not rows or not isinstance(rows[0], dict):
            logger.warning("Geocoding returned no match: city=%s", query)
            return Coordinates.unresolved()

        coordinates = to_coordinates(rows[0].get("lat"), rows[0].get("lon"))
        if coordinates.is_unresolved:
            logger.warning("Geocoding returned unusable coordinates: city=%s row=%s", query, rows[0])
        else:
            logger.info("Geocoded %s to: %s, %s", query, coordinates.lat, coordinates.lng)
        return coordinates


@lru_cache(maxsize=1)
def get_geocoder() -> NominatimGeocoder:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return NominatimGeocoder.from_settings()
