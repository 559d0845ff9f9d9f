"""외부 제공자 호출 타임아웃 정책 정의."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.config import Settings, get_settings

_MIN_TIMEOUT_SECONDS = 1
_MAX_CONNECT_TIMEOUT_SECONDS = 5.0
_CONNECT_TIMEOUT_RATIO = 0.3


def _normalize_timeout(value: int | float | None, default: int, *, upper_bound: int | None = None) -> int:
    """타임아웃 값을 정수 초 단위로 정규화합니다."""
    try:
        seconds = int(value) if value is not None else int(default)
    except (TypeError, ValueError):
        seconds = int(default)

    seconds = max(_MIN_TIMEOUT_SECONDS, seconds)
    if upper_bound is not None:
        seconds = min(seconds, upper_bound)
    return seconds


@dataclass(frozen=True, slots=True)
class TimeoutPolicy:
    """요청 단위 및 제공자별 타임아웃 정책."""

    request_timeout_seconds: int
    external_api_timeout_seconds: int
    geocoding_timeout_seconds: int
    weather_timeout_seconds: int
    photos_timeout_seconds: int
    places_timeout_seconds: int
    place_details_timeout_seconds: int
    places_collect_timeout_seconds: int


def build_timeout_policy(settings: Settings) -> TimeoutPolicy:
    """설정값으로부터 일관된 타임아웃 정책을 생성합니다.

    제공자별 타임아웃은 외부 API 타임아웃을, 외부 API 타임아웃은 요청 타임아웃을 넘지 않습니다.
    """
    request_timeout = _normalize_timeout(settings.REQUEST_TIMEOUT_SECONDS, default=60)
    external_timeout = _normalize_timeout(
        settings.EXTERNAL_API_TIMEOUT_SECONDS,
        default=15,
        upper_bound=request_timeout,
    )

    return TimeoutPolicy(
        request_timeout_seconds=request_timeout,
        external_api_timeout_seconds=external_timeout,
        geocoding_timeout_seconds=_normalize_timeout(
            settings.GEOCODING_TIMEOUT_SECONDS, default=5, upper_bound=external_timeout
        ),
        weather_timeout_seconds=_normalize_timeout(
            settings.WEATHER_TIMEOUT_SECONDS, default=8, upper_bound=external_timeout
        ),
        photos_timeout_seconds=_normalize_timeout(
            settings.PHOTOS_TIMEOUT_SECONDS, default=10, upper_bound=external_timeout
        ),
        places_timeout_seconds=_normalize_timeout(
            settings.PLACES_TIMEOUT_SECONDS, default=10, upper_bound=external_timeout
        ),
        place_details_timeout_seconds=_normalize_timeout(
            settings.PLACE_DETAILS_TIMEOUT_SECONDS, default=8, upper_bound=external_timeout
        ),
        places_collect_timeout_seconds=_normalize_timeout(
            settings.PLACES_COLLECT_TIMEOUT_SECONDS, default=45, upper_bound=request_timeout
        ),
    )


def get_timeout_policy(settings: Settings | None = None) -> TimeoutPolicy:
    """현재 설정을 기반으로 타임아웃 정책을 반환합니다."""
    resolved_settings = settings or get_settings()
    return build_timeout_policy(resolved_settings)


def to_requests_timeout(total_timeout_seconds: int) -> tuple[float, float]:
    """requests용 (connect, read) 타임아웃 튜플을 생성합니다."""
    total = float(max(_MIN_TIMEOUT_SECONDS, int(total_timeout_seconds)))
    connect_timeout = min(_MAX_CONNECT_TIMEOUT_SECONDS, max(1.0, total * _CONNECT_TIMEOUT_RATIO))
    read_timeout = max(1.0, total - connect_timeout) if total > connect_timeout else max(0.5, total * 0.5)
    return (connect_timeout, read_timeout)
