"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    WEATHER_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("WEATHER_API_KEY", "OPENWEATHER_API_KEY"),
    )
    UNSPLASH_API_KEY: str | None = Field(
        default=None,
        validation_alias=AliasChoices("UNSPLASH_API_KEY", "UNSPLASH_ACCESS_KEY"),
    )
    OPENTRIPMAP_API_KEY: str | None = None
    HTTP_USER_AGENT: str = "Travel-Explorer-App/1.0"
    REQUEST_TIMEOUT_SECONDS: int = 60
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    GEOCODING_TIMEOUT_SECONDS: int = 5
    WEATHER_TIMEOUT_SECONDS: int = 8
    PHOTOS_TIMEOUT_SECONDS: int = 10
    PLACES_TIMEOUT_SECONDS: int = 10
    PLACE_DETAILS_TIMEOUT_SECONDS: int = 8
    PLACES_COLLECT_TIMEOUT_SECONDS: int = 45
    PHOTOS_QUERY_DELAY_SECONDS: float = 0.2
    PLACES_TIER_DELAY_SECONDS: float = 0.3
    PLACES_DETAIL_DELAY_SECONDS: float = 0.1
    PLACES_DETAIL_CONCURRENCY: int = 1
    PLACES_SEARCH_RADIUS_METERS: int = 15000
    APP_ENV: str = "development"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type"
    SECURITY_HEADERS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("WEATHER_API_KEY", "UNSPLASH_API_KEY", "OPENTRIPMAP_API_KEY", mode="before")
    @classmethod
    def _blank_key_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(
        "PHOTOS_QUERY_DELAY_SECONDS",
        "PLACES_TIER_DELAY_SECONDS",
        "PLACES_DETAIL_DELAY_SECONDS",
        mode="before",
    )
    @classmethod
    def _clamp_delay_seconds(cls, value: object) -> float:
        try:
            numeric = float(value) if value is not None else 0.0
        except (TypeError, ValueError):
            numeric = 0.0
        return min(5.0, max(0.0, numeric))

    @field_validator("PLACES_DETAIL_CONCURRENCY", mode="before")
    @classmethod
    def _clamp_places_detail_concurrency(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else 1
        except (TypeError, ValueError):
            numeric = 1
        return min(10, max(1, numeric))


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
