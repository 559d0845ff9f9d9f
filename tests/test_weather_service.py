"""OpenWeatherMap 날씨 서비스 테스트."""

from __future__ import annotations

import asyncio
import logging
import random

import requests

from app.services.weather_service import MOCK_WEATHER_READINGS, OpenWeatherService
from tests.mocks.fake_http import FakeResponse, RecordingGet

_OPENWEATHER_PAYLOAD = {
    "main": {"temp": 21.5, "humidity": 58},
    "weather": [{"description": "few clouds", "icon": "02d"}],
    "wind": {"speed": 3.25},
}


def _service(api_key: str | None = "weather-key") -> OpenWeatherService:
    return OpenWeatherService(api_key=api_key, timeout_seconds=8, rng=random.Random(7))


def test_get_weather_maps_provider_payload(monkeypatch) -> None:
    fake_get = RecordingGet(FakeResponse(_OPENWEATHER_PAYLOAD))
    monkeypatch.setattr("app.services.provider_http.requests.get", fake_get)

    reading = asyncio.run(_service().get_weather("Paris"))

    assert reading.temperature == 22
    assert reading.description == "few clouds"
    assert reading.humidity == 58
    assert reading.wind_speed == 3.3
    assert reading.icon == "02d"
    assert fake_get.calls[0]["params"] == {"q": "Paris", "appid": "weather-key", "units": "metric"}


def test_get_weather_without_key_returns_mock_without_network(monkeypatch) -> None:
    fake_get = RecordingGet(FakeResponse(_OPENWEATHER_PAYLOAD))
    monkeypatch.setattr("app.services.provider_http.requests.get", fake_get)

    reading = asyncio.run(_service(api_key=None).get_weather("Paris"))

    assert reading in MOCK_WEATHER_READINGS
    assert fake_get.calls == []


def test_get_weather_invalid_key_logs_and_returns_mock(monkeypatch, caplog) -> None:
    monkeypatch.setattr("app.services.provider_http.requests.get", RecordingGet(FakeResponse(None, 401)))

    with caplog.at_level(logging.ERROR, logger="app.services.weather_service"):
        reading = asyncio.run(_service().get_weather("Paris"))

    assert reading in MOCK_WEATHER_READINGS
    assert "invalid API key" in caplog.text


def test_get_weather_unknown_city_logs_and_returns_mock(monkeypatch, caplog) -> None:
    monkeypatch.setattr("app.services.provider_http.requests.get", RecordingGet(FakeResponse(None, 404)))

    with caplog.at_level(logging.ERROR, logger="app.services.weather_service"):
        reading = asyncio.run(_service().get_weather("Atlantis"))

    assert reading in MOCK_WEATHER_READINGS
    assert "city not found" in caplog.text


def test_get_weather_transport_and_parse_failures_return_mock(monkeypatch) -> None:
    monkeypatch.setattr("app.services.provider_http.requests.get", RecordingGet(requests.Timeout("read timed out")))
    assert asyncio.run(_service().get_weather("Paris")) in MOCK_WEATHER_READINGS

    monkeypatch.setattr("app.services.provider_http.requests.get", RecordingGet(FakeResponse({"main": {}})))
    assert asyncio.run(_service().get_weather("Paris")) in MOCK_WEATHER_READINGS


def test_mock_pool_is_fixed_and_seeded() -> None:
    assert len(MOCK_WEATHER_READINGS) == 5
    assert [reading.temperature for reading in MOCK_WEATHER_READINGS] == [22, 18, 25, 15, 28]

    first = OpenWeatherService(api_key=None, rng=random.Random(3)).mock_reading()
    second = OpenWeatherService(api_key=None, rng=random.Random(3)).mock_reading()
    assert first == second


def test_weather_reading_serializes_wind_speed_alias() -> None:
    payload = MOCK_WEATHER_READINGS[0].model_dump(by_alias=True)

    assert payload["windSpeed"] == 3.2
    assert "wind_speed" not in payload
