"""좌표 정규화와 지터링을 위한 지리 유틸리티."""

from __future__ import annotations

import math
import random

from app.schemas.destination import Coordinates

_MIN_LAT = -90.0
_MAX_LAT = 90.0
_MIN_LNG = -180.0
_MAX_LNG = 180.0
_DEFAULT_JITTER_DEGREES = 0.01


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def to_coordinates(lat: object, lng: object) -> Coordinates:
    """임의 입력을 좌표로 변환합니다. 해석할 수 없거나 범위를 벗어나면 미해결 좌표입니다."""
    try:
        latitude = float(lat)  # type: ignore[arg-type]
        longitude = float(lng)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return Coordinates.unresolved()

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return Coordinates.unresolved()
    if not (_MIN_LAT <= latitude <= _MAX_LAT and _MIN_LNG <= longitude <= _MAX_LNG):
        return Coordinates.unresolved()
    return Coordinates(lat=latitude, lng=longitude)


def is_resolved(coordinates: Coordinates | None) -> bool:
    """좌표가 주어졌고 (0, 0) 센티널이 아닌지 반환합니다."""
    return coordinates is not None and not coordinates.is_unresolved


def jitter(
    center: Coordinates,
    rng: random.Random,
    max_offset_degrees: float = _DEFAULT_JITTER_DEGREES,
) -> Coordinates:
    """중심 좌표 주변 ±max_offset_degrees 범위로 흔든 좌표를 반환합니다."""
    offset = abs(float(max_offset_degrees))
    return Coordinates(
        lat=_clamp(center.lat + (rng.random() - 0.5) * 2 * offset, _MIN_LAT, _MAX_LAT),
        lng=_clamp(center.lng + (rng.random() - 0.5) * 2 * offset, _MIN_LNG, _MAX_LNG),
    )
