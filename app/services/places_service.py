"""관광 명소(POI) 제공자 추상 프로토콜 정의."""

from abc import ABC, abstractmethod
from typing import Any


class PointsOfInterestProtocol(ABC):
    """반경 검색과 상세 조회를 제공하는 POI 제공자 인터페이스를 정의합니다."""

    SOURCE_NAME: str = "OpenTripMap"

    @abstractmethod
    async def radius_search(
        self,
        lat: float,
        lng: float,
        *,
        radius_meters: int,
        rate: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        """좌표 주변의 요약 레코드를 검색합니다.

        Args:
            lat: 중심 위도
            lng: 중심 경도
            radius_meters: 검색 반경(m)
            rate: 흥미도 등급(3이 가장 선별적)
            limit: 최대 결과 수

        Returns:
            `xid`를 포함한 요약 레코드 목록. 실패하면 예외를 던집니다.
        """
        raise NotImplementedError

    @abstractmethod
    async def details(self, xid: str) -> dict[str, Any] | None:
        """장소 상세 레코드를 조회합니다.

        Args:
            xid: 제공자 장소 ID

        Returns:
            태그, rate, 주소, 설명 등을 담은 상세 레코드 또는 None
        """
        raise NotImplementedError
