"""OpenWeatherMap 현재 날씨 서비스."""

from __future__ import annotations

import random
from functools import lru_cache
from typing import Any

import requests

from app.core.config import get_settings
from app.core.logger import get_logger
from app.core.rounding import round_half_up
from app.core.timeout_policy import get_timeout_policy
from app.schemas.destination import WeatherReading
from app.services import provider_http

logger = get_logger(__name__)

MOCK_WEATHER_READINGS: tuple[WeatherReading, ...] = (
    WeatherReading(temperature=22, description="partly cloudy", humidity=65, wind_speed=3.2, icon="02d"),
    WeatherReading(temperature=18, description="light rain", humidity=80, wind_speed=2.1, icon="10d"),
    WeatherReading(temperature=25, description="clear sky", humidity=45, wind_speed=1.5, icon="01d"),
    WeatherReading(temperature=15, description="scattered clouds", humidity=70, wind_speed=4.0, icon="03d"),
    WeatherReading(temperature=28, description="sunny", humidity=40, wind_speed=2.8, icon="01d"),
)


class OpenWeatherService:
    """도시 이름으로 현재 날씨를 조회합니다.

    자격 증명이 없거나 호출이 실패하면 고정된 5개 스냅샷 중 하나를 반환합니다.
    두 경우는 반환값으로 구분되지 않고 로그로만 구분됩니다.
    """

    _CURRENT_WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str | None,
        timeout_seconds: int = 8,
        rng: random.Random | None = None,
    ) -> None:
        self._api_key = api_key or None
        self._timeout_seconds = timeout_seconds
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls) -> OpenWeatherService:
        """애플리케이션 설정으로 서비스 인스턴스를 생성합니다."""
        settings = get_settings()
        return cls(
            api_key=settings.WEATHER_API_KEY,
            timeout_seconds=get_timeout_policy(settings).weather_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return self._api_key is not None

    def mock_reading(self) -> WeatherReading:
        """고정 스냅샷 풀에서 하나를 고릅니다."""
        return self._rng.choice(MOCK_WEATHER_READINGS)

    async def get_weather(self, city: str) -> WeatherReading:
        """현재 날씨를 반환합니다. 예외를 던지지 않습니다."""
        if not self.is_configured:
            logger.info("Weather API key not configured, using mock data: city=%s", city)
            return self.mock_reading()

        logger.info("Fetching weather for: %s", city)
        try:
            data = await provider_http.get_json(
                self._CURRENT_WEATHER_URL,
                params={"q": city, "appid": self._api_key, "units": "metric"},
                headers={"Accept": "application/json"},
                timeout_seconds=self._timeout_seconds,
            )
            reading = self._map_reading(data)
        except requests.HTTPError as exc:
            status_code = provider_http.status_code_of(exc)
            if status_code == 401:
                logger.error("Weather API error: invalid API key, check WEATHER_API_KEY: city=%s", city)
            elif status_code == 404:
                logger.error("Weather API error: city not found: city=%s", city)
            else:
                logger.error("Weather API error: city=%s status=%s error=%s", city, status_code, exc)
            return self.mock_reading()
        except requests.RequestException as exc:
            logger.error("Weather API request failed: city=%s error=%s", city, exc)
            return self.mock_reading()
        except (ValueError, TypeError, KeyError, IndexError) as exc:
            logger.error("Weather API response parse failed: city=%s error=%s", city, exc)
            return self.mock_reading()

        logger.info("Fetched weather: city=%s temperature=%d", city, reading.temperature)
        return reading

    @staticmethod
    def _map_reading(data: Any) -> WeatherReading:
        main = data["main"]
        condition = data["weather"][0]
        return WeatherReading(
            temperature=int(round_half_up(float(main["temp"]))),
            description=str(condition["description"]),
            humidity=int(main["humidity"]),
            wind_speed=round_half_up(float(data["wind"]["speed"]), 1),
            icon=str(condition["icon"]),
        )


@lru_cache(maxsize=1)
def get_weather_service() -> OpenWeatherService:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return OpenWeatherService.from_settings()
