"""장소 조회 API 스키마."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.destination import Coordinates, Place, PlaceCategory


class PlacesResponse(BaseModel):
    """도시별 장소 목록 응답."""

    success: bool = Field(default=True, description="처리 성공 여부")
    city: str = Field(..., description="요청 도시")
    places: list[Place] = Field(default_factory=list, description="정렬된 장소 목록")
    count: int = Field(..., description="장소 수")
    source: str = Field(..., description="첫 항목 기준 데이터 출처")
    timestamp: datetime = Field(..., description="응답 생성 시각(UTC)")


class CategoryPlacesResponse(BaseModel):
    """카테고리로 걸러낸 장소 목록 응답."""

    success: bool = Field(default=True, description="처리 성공 여부")
    city: str = Field(..., description="요청 도시")
    category: str = Field(..., description="요청 카테고리 검색어")
    places: list[Place] = Field(default_factory=list, description="필터링된 장소 목록")
    count: int = Field(..., description="장소 수")
    timestamp: datetime = Field(..., description="응답 생성 시각(UTC)")


class PlaceSearchQuery(BaseModel):
    """좌표/도시 기반 장소 검색 조건."""

    city: str | None = Field(default=None, description="도시 이름")
    lat: float | None = Field(default=None, description="위도")
    lng: float | None = Field(default=None, description="경도")
    radius: int = Field(default=15000, description="검색 반경(m)")


class SearchPlacesResponse(BaseModel):
    """장소 검색 응답."""

    success: bool = Field(default=True, description="처리 성공 여부")
    query: PlaceSearchQuery
    places: list[Place] = Field(default_factory=list, description="검색된 장소 목록")
    count: int = Field(..., description="장소 수")
    timestamp: datetime = Field(..., description="응답 생성 시각(UTC)")


class DestinationSearchRequest(BaseModel):
    """홈 화면 검색 폼 요청."""

    destination: str = Field(default="", description="사용자가 입력한 여행지")


class HealthResponse(BaseModel):
    """제공자 자격 증명 설정 상태."""

    status: str = Field(default="healthy", description="서비스 상태")
    timestamp: datetime = Field(..., description="응답 생성 시각(UTC)")
    apis: dict[str, str] = Field(default_factory=dict, description="제공자별 설정 상태")


class PlaceSample(BaseModel):
    """진단 응답에 담는 장소 요약."""

    name: str
    category: PlaceCategory
    rating: float
    coordinates: Coordinates


class CityPlacesSummary(BaseModel):
    count: int = Field(..., description="장소 수")
    source: str = Field(..., description="첫 항목 기준 데이터 출처")
    sample: list[PlaceSample] = Field(default_factory=list, description="상위 3개 장소")


class PlacesDiagnosticResponse(BaseModel):
    """대표 도시 장소 수집 진단 결과."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="처리 성공 여부")
    message: str = Field(..., description="진단 요약")
    test_results: dict[str, CityPlacesSummary] = Field(
        default_factory=dict, alias="testResults", description="도시별 수집 결과"
    )
    timestamp: datetime = Field(..., description="응답 생성 시각(UTC)")
    api_status: dict[str, str] = Field(default_factory=dict, alias="apiStatus", description="제공자별 동작 모드")
