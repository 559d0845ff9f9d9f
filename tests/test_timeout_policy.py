"""타임아웃 정책 유틸 테스트."""

from app.core.config import Settings
from app.core.timeout_policy import build_timeout_policy, to_requests_timeout


def test_build_timeout_policy_caps_by_request_timeout() -> None:
    settings = Settings(
        REQUEST_TIMEOUT_SECONDS=20,
        EXTERNAL_API_TIMEOUT_SECONDS=50,
        GEOCODING_TIMEOUT_SECONDS=30,
        WEATHER_TIMEOUT_SECONDS=8,
        PHOTOS_TIMEOUT_SECONDS=25,
        PLACES_TIMEOUT_SECONDS=10,
        PLACE_DETAILS_TIMEOUT_SECONDS=45,
    )

    policy = build_timeout_policy(settings)

    assert policy.request_timeout_seconds == 20
    assert policy.external_api_timeout_seconds == 20
    assert policy.geocoding_timeout_seconds == 20
    assert policy.weather_timeout_seconds == 8
    assert policy.photos_timeout_seconds == 20
    assert policy.places_timeout_seconds == 10
    assert policy.place_details_timeout_seconds == 20
    assert policy.places_collect_timeout_seconds == 20


def test_build_timeout_policy_caps_providers_by_external_timeout() -> None:
    policy = build_timeout_policy(Settings(EXTERNAL_API_TIMEOUT_SECONDS=6, PLACES_TIMEOUT_SECONDS=0))

    assert policy.external_api_timeout_seconds == 6
    assert policy.geocoding_timeout_seconds == 5
    assert policy.weather_timeout_seconds == 6
    assert policy.places_timeout_seconds == 1


def test_places_collect_timeout_defaults_below_request_timeout() -> None:
    policy = build_timeout_policy(Settings(REQUEST_TIMEOUT_SECONDS=60, PLACES_COLLECT_TIMEOUT_SECONDS=45))

    assert policy.places_collect_timeout_seconds == 45


def test_to_requests_timeout_returns_connect_and_read_timeout() -> None:
    connect_timeout, read_timeout = to_requests_timeout(10)

    assert connect_timeout == 3.0
    assert read_timeout == 7.0
