"""OpenTripMap API 서비스 구현."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.timeout_policy import get_timeout_policy
from app.services import provider_http
from app.services.places_service import PointsOfInterestProtocol

logger = get_logger(__name__)


class OpenTripMapError(RuntimeError):
    """OpenTripMap 호출 설정 실패 시 발생하는 예외."""


class OpenTripMapService(PointsOfInterestProtocol):
    """OpenTripMap API 기반 POI 서비스.

    전송 오류는 그대로 올려 보내고, 어느 단계에서 실패를 흡수할지는 호출자가 정합니다.
    """

    _BASE_URL = "https://api.opentripmap.com/0.1/en/places"

    def __init__(
        self,
        api_key: str,
        user_agent: str,
        timeout_seconds: int = 10,
        details_timeout_seconds: int = 8,
    ) -> None:
        if not api_key:
            raise OpenTripMapError("OPENTRIPMAP_API_KEY is not configured.")
        self._api_key = api_key
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds
        self._details_timeout_seconds = details_timeout_seconds

    @classmethod
    def from_settings(cls) -> OpenTripMapService | None:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다. 키가 없으면 None입니다."""
        settings = get_settings()
        if not settings.OPENTRIPMAP_API_KEY:
            logger.warning("OPENTRIPMAP_API_KEY is not configured, places will use fallback data.")
            return None
        timeout_policy = get_timeout_policy(settings)
        return cls(
            api_key=settings.OPENTRIPMAP_API_KEY,
            user_agent=settings.HTTP_USER_AGENT,
            timeout_seconds=timeout_policy.places_timeout_seconds,
            details_timeout_seconds=timeout_policy.place_details_timeout_seconds,
        )

    async def radius_search(
        self,
        lat: float,
        lng: float,
        *,
        radius_meters: int,
        rate: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        """반경 내 요약 레코드를 검색합니다."""
        data = await provider_http.get_json(
            f"{self._BASE_URL}/radius",
            params={
                "radius": radius_meters,
                "lon": lng,
                "lat": lat,
                "rate": rate,
                "limit": limit,
                "format": "json",
                "apikey": self._api_key,
            },
            headers={"User-Agent": self._user_agent},
            timeout_seconds=self._timeout_seconds,
        )
        if not isinstance(data, list):
            logger.warning("OpenTripMap radius search returned non-list payload: rate=%s", rate)
            return []
        return [item for item in data if isinstance(item, dict) and item.get("xid")]

    async def details(self, xid: str) -> dict[str, Any] | None:
        """장소 상세 레코드를 조회합니다."""
        if not xid:
            return None
        data = await provider_http.get_json(
            f"{self._BASE_URL}/xid/{xid}",
            params={"apikey": self._api_key},
            headers={"User-Agent": self._user_agent},
            timeout_seconds=self._details_timeout_seconds,
        )
        return data if isinstance(data, dict) else None


@lru_cache(maxsize=1)
def get_opentripmap_service() -> OpenTripMapService | None:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return OpenTripMapService.from_settings()
