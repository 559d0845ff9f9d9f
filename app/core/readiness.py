"""애플리케이션 준비성(readiness) 체크 유틸."""

from __future__ import annotations

import asyncio
import socket

from app.core.config import Settings, get_settings
from app.core.timeout_policy import TimeoutPolicy, get_timeout_policy

ReadinessCheck = dict[str, str | bool]

_HTTPS_PORT = 443


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _skip(detail: str, *, required: bool = False) -> ReadinessCheck:
    return {"status": "skip", "ok": True, "required": required, "detail": detail}


async def _check_tcp_connectivity(host: str, port: int, timeout_seconds: int, label: str) -> ReadinessCheck:
    def _connect() -> None:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return None

    try:
        await asyncio.to_thread(_connect)
        return _ok(f"{label} 연결 가능 ({host}:{port})")
    except Exception as exc:
        return _fail(f"{label} 연결 실패 ({host}:{port}): {exc}")


async def _check_provider(
    api_key: str | None,
    *,
    key_name: str,
    host: str,
    label: str,
    timeout_seconds: int,
) -> ReadinessCheck:
    if not api_key:
        return _skip(f"{key_name} 미설정으로 {label} 체크를 건너뜁니다.")
    return await _check_tcp_connectivity(host=host, port=_HTTPS_PORT, timeout_seconds=timeout_seconds, label=label)


async def _check_geocoder_readiness(timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    return await _check_tcp_connectivity(
        host="nominatim.openstreetmap.org",
        port=_HTTPS_PORT,
        timeout_seconds=timeout_policy.geocoding_timeout_seconds,
        label="Nominatim",
    )


async def collect_readiness_status(settings: Settings | None = None) -> dict[str, object]:
    """외부 제공자 호스트 연결 상태를 점검합니다.

    제공자가 모두 대체 데이터로 동작할 수 있으므로 실패는 `degraded`로만 표시합니다.
    """
    settings = settings or get_settings()
    timeout_policy = get_timeout_policy(settings)

    geocoder_check, weather_check, photos_check, places_check = await asyncio.gather(
        _check_geocoder_readiness(timeout_policy),
        _check_provider(
            settings.WEATHER_API_KEY,
            key_name="WEATHER_API_KEY",
            host="api.openweathermap.org",
            label="OpenWeatherMap API",
            timeout_seconds=timeout_policy.weather_timeout_seconds,
        ),
        _check_provider(
            settings.UNSPLASH_API_KEY,
            key_name="UNSPLASH_API_KEY",
            host="api.unsplash.com",
            label="Unsplash API",
            timeout_seconds=timeout_policy.photos_timeout_seconds,
        ),
        _check_provider(
            settings.OPENTRIPMAP_API_KEY,
            key_name="OPENTRIPMAP_API_KEY",
            host="api.opentripmap.com",
            label="OpenTripMap API",
            timeout_seconds=timeout_policy.places_timeout_seconds,
        ),
    )

    checks: dict[str, ReadinessCheck] = {
        "nominatim": geocoder_check,
        "openweather": weather_check,
        "unsplash": photos_check,
        "opentripmap": places_check,
    }
    all_ok = all(bool(check["ok"]) for check in checks.values())

    return {
        "status": "ready" if all_ok else "degraded",
        "checks": checks,
    }
