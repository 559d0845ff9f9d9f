"""여행지 페이지에 바인딩되는 날씨/사진/장소 모델."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PlaceSource = Literal["OpenTripMap", "Fallback"]


class PlaceCategory(StrEnum):
    """장소 카테고리 폐쇄 어휘."""

    MUSEUM = "Museum"
    RELIGIOUS_SITE = "Religious Site"
    THEATER = "Theater"
    BRIDGE = "Bridge"
    TOWER = "Tower"
    MONUMENT = "Monument"
    CASTLE = "Castle"
    GARDEN = "Garden"
    PARK = "Park"
    HISTORIC_SITE = "Historic Site"
    ARCHAEOLOGICAL_SITE = "Archaeological Site"
    ARCHITECTURE = "Architecture"
    GALLERY = "Gallery"
    PALACE = "Palace"
    NATURAL_SITE = "Natural Site"
    ATTRACTION = "Attraction"


class Coordinates(BaseModel):
    """위경도 좌표. (0, 0)은 미해결 센티널입니다."""

    lat: float = Field(default=0.0, description="위도")
    lng: float = Field(default=0.0, description="경도")

    @property
    def is_unresolved(self) -> bool:
        return self.lat == 0 and self.lng == 0

    @classmethod
    def unresolved(cls) -> Coordinates:
        return cls(lat=0.0, lng=0.0)


class Place(BaseModel):
    """정규화된 관광 명소 정보."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="제공자 ID 또는 fallback-<city>-<index>")
    name: str = Field(..., min_length=1, description="장소 이름")
    category: PlaceCategory = Field(default=PlaceCategory.ATTRACTION, description="장소 카테고리")
    address: str = Field(default="", description="도로, 도시, 국가를 쉼표로 연결한 주소")
    description: str = Field(default="", description="장소 설명")
    rating: float = Field(..., ge=3.0, le=5.0, description="3.0~5.0 범위 평점")
    review_count: int = Field(default=0, ge=0, alias="reviewCount", description="리뷰 수")
    coordinates: Coordinates = Field(default_factory=Coordinates.unresolved, description="장소 좌표")
    opening_hours: str = Field(default="", alias="openingHours", description="운영 시간")
    ticket_price: str = Field(default="", alias="ticketPrice", description="입장료")
    website: str | None = Field(default=None, description="웹사이트 URL")
    image: str | None = Field(default=None, description="대표 이미지 URL")
    source: PlaceSource = Field(..., description="데이터 출처")


class Photo(BaseModel):
    """여행지 갤러리 사진."""

    id: str = Field(..., description="사진 ID")
    url: str = Field(..., description="원본 크기 URL")
    thumbnail: str = Field(..., description="썸네일 URL")
    alt: str = Field(..., description="도시명이 포함된 대체 텍스트")


class WeatherReading(BaseModel):
    """현재 날씨 스냅샷."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temperature: int = Field(..., description="섭씨 온도")
    description: str = Field(..., description="날씨 설명")
    humidity: int = Field(..., description="습도(%)")
    wind_speed: float = Field(..., alias="windSpeed", description="풍속(m/s), 소수점 첫째 자리")
    icon: str = Field(..., description="제공자 아이콘 코드")


class DestinationInfo(BaseModel):
    """추천 여행지 메타데이터."""

    name: str = Field(..., description="표시용 여행지 이름")
    country: str = Field(default="Unknown", description="국가")
    description: str = Field(default="", description="여행지 소개")
    lat: float = Field(default=0.0, description="알려진 위도")
    lng: float = Field(default=0.0, description="알려진 경도")
    image: str | None = Field(default=None, description="대표 이미지 URL")

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=self.lat, lng=self.lng)


class DestinationData(BaseModel):
    """한 번의 요청으로 조립되는 날씨/사진/장소 묶음."""

    model_config = ConfigDict(frozen=True)

    weather: WeatherReading
    photos: list[Photo]
    places: list[Place]


class DestinationPageResponse(BaseModel):
    """여행지 페이지 렌더링용 응답."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="페이지 제목")
    destination: DestinationInfo
    og_image: str = Field(..., alias="ogImage", description="Open Graph 이미지 URL")
    weather: WeatherReading
    photos: list[Photo]
    places: list[Place]
