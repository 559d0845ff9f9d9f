"""장소 분류, 평점, 정렬, 표시 문구 합성 정책."""

from __future__ import annotations

import random
import re
from collections.abc import Iterable
from typing import Any

from app.core.rounding import round_half_up
from app.schemas.destination import Place, PlaceCategory

MIN_RATING = 3.0
MAX_RATING = 5.0
DEFAULT_RATING = 4.0
RANKING_DEFAULT_RATING = 3.5
MAX_RANKED_PLACES = 25
MIN_NAME_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 200

# 앞쪽 키워드가 우선합니다.
_KIND_CATEGORY_MAP: tuple[tuple[str, PlaceCategory], ...] = (
    ("museums", PlaceCategory.MUSEUM),
    ("churches", PlaceCategory.RELIGIOUS_SITE),
    ("theatres", PlaceCategory.THEATER),
    ("bridges", PlaceCategory.BRIDGE),
    ("towers", PlaceCategory.TOWER),
    ("monuments_and_memorials", PlaceCategory.MONUMENT),
    ("castles", PlaceCategory.CASTLE),
    ("gardens", PlaceCategory.GARDEN),
    ("parks", PlaceCategory.PARK),
    ("historic", PlaceCategory.HISTORIC_SITE),
    ("archaeology", PlaceCategory.ARCHAEOLOGICAL_SITE),
    ("architecture", PlaceCategory.ARCHITECTURE),
    ("galleries", PlaceCategory.GALLERY),
    ("palaces", PlaceCategory.PALACE),
    ("natural", PlaceCategory.NATURAL_SITE),
)

_CATEGORY_WEIGHTS: dict[PlaceCategory, int] = {
    PlaceCategory.MONUMENT: 1,
    PlaceCategory.MUSEUM: 2,
    PlaceCategory.HISTORIC_SITE: 3,
    PlaceCategory.CASTLE: 4,
    PlaceCategory.PALACE: 5,
    PlaceCategory.RELIGIOUS_SITE: 6,
    PlaceCategory.TOWER: 7,
    PlaceCategory.BRIDGE: 8,
    PlaceCategory.GALLERY: 9,
    PlaceCategory.THEATER: 10,
    PlaceCategory.PARK: 11,
    PlaceCategory.GARDEN: 12,
    PlaceCategory.ARCHITECTURE: 13,
    PlaceCategory.NATURAL_SITE: 14,
    PlaceCategory.ATTRACTION: 15,
}
_UNKNOWN_CATEGORY_WEIGHT = 16

_DESCRIPTION_TEMPLATES: dict[PlaceCategory, str] = {
    PlaceCategory.MUSEUM: "Explore the collections and exhibits at {name}.",
    PlaceCategory.RELIGIOUS_SITE: "Visit the historic {name}.",
    PlaceCategory.PARK: "Enjoy nature and relaxation at {name}.",
    PlaceCategory.MONUMENT: "Discover the historic {name}.",
    PlaceCategory.CASTLE: "Experience history at {name}.",
    PlaceCategory.BRIDGE: "Cross the famous {name}.",
    PlaceCategory.TOWER: "Get views from {name}.",
    PlaceCategory.GALLERY: "View art at {name}.",
    PlaceCategory.THEATER: "Catch a performance at {name}.",
    PlaceCategory.PALACE: "Tour the magnificent {name}.",
}
_DEFAULT_DESCRIPTION = "Visit the notable {name}."

OPENING_HOURS_BY_CATEGORY: dict[PlaceCategory, tuple[str, ...]] = {
    PlaceCategory.MUSEUM: ("9:00 AM - 5:00 PM", "10:00 AM - 6:00 PM", "9:30 AM - 5:30 PM", "10:00 AM - 5:00 PM"),
    PlaceCategory.RELIGIOUS_SITE: ("6:00 AM - 8:00 PM", "7:00 AM - 7:00 PM", "6:30 AM - 8:30 PM", "24 hours"),
    PlaceCategory.PARK: ("6:00 AM - 10:00 PM", "5:00 AM - 11:00 PM", "24 hours", "6:00 AM - 9:00 PM"),
    PlaceCategory.MONUMENT: ("9:00 AM - 6:00 PM", "8:00 AM - 7:00 PM", "10:00 AM - 5:00 PM", "9:30 AM - 6:30 PM"),
    PlaceCategory.CASTLE: ("9:00 AM - 5:00 PM", "10:00 AM - 6:00 PM", "9:30 AM - 5:30 PM"),
    PlaceCategory.TOWER: ("9:00 AM - 6:00 PM", "10:00 AM - 7:00 PM", "8:30 AM - 6:30 PM"),
    PlaceCategory.GALLERY: ("10:00 AM - 6:00 PM", "11:00 AM - 7:00 PM", "10:00 AM - 5:00 PM"),
    PlaceCategory.THEATER: ("Box office: 10:00 AM - 8:00 PM", "Shows: 7:30 PM - 10:30 PM", "Varies by show schedule"),
    PlaceCategory.PALACE: ("9:00 AM - 5:00 PM", "10:00 AM - 4:00 PM", "9:30 AM - 5:30 PM"),
    PlaceCategory.BRIDGE: ("24 hours", "Open access", "Always accessible"),
    PlaceCategory.HISTORIC_SITE: ("9:00 AM - 6:00 PM", "8:00 AM - 7:00 PM", "10:00 AM - 5:00 PM"),
    PlaceCategory.GARDEN: ("8:00 AM - 6:00 PM", "7:00 AM - 7:00 PM", "6:00 AM - 8:00 PM"),
}
DEFAULT_OPENING_HOURS: tuple[str, ...] = ("9:00 AM - 5:00 PM", "10:00 AM - 6:00 PM")

TICKET_PRICES_BY_CATEGORY: dict[PlaceCategory, tuple[str, ...]] = {
    PlaceCategory.MUSEUM: ("€8", "€12", "€15", "€18", "€22", "Free"),
    PlaceCategory.RELIGIOUS_SITE: ("Free", "Free", "Donation welcome", "€3", "€5"),
    PlaceCategory.PARK: ("Free", "Free", "€2", "€5"),
    PlaceCategory.MONUMENT: ("€5", "€8", "€12", "€15", "€18"),
    PlaceCategory.CASTLE: ("€12", "€15", "€18", "€22", "€25"),
    PlaceCategory.TOWER: ("€10", "€15", "€20", "€25"),
    PlaceCategory.GALLERY: ("€6", "€10", "€12", "€15", "Free"),
    PlaceCategory.THEATER: ("€25", "€35", "€45", "€55", "€75"),
    PlaceCategory.PALACE: ("€15", "€20", "€25", "€30"),
    PlaceCategory.BRIDGE: ("Free", "Free"),
    PlaceCategory.HISTORIC_SITE: ("€5", "€8", "€10", "€12", "€15"),
    PlaceCategory.GARDEN: ("Free", "€3", "€5", "€8"),
}
DEFAULT_TICKET_PRICES: tuple[str, ...] = ("€8", "€12", "€15")

_LEADING_DIGITS = re.compile(r"^\s*(\d+(?:\.\d+)?)")


def categorize(kinds: str | Iterable[str] | None) -> PlaceCategory:
    """제공자 태그 문자열(쉼표 구분)에서 첫 번째로 일치하는 키워드의 카테고리를 반환합니다."""
    text = _kinds_text(kinds)
    if not text:
        return PlaceCategory.ATTRACTION
    for keyword, category in _KIND_CATEGORY_MAP:
        if keyword in text:
            return category
    return PlaceCategory.ATTRACTION


def parse_rate(rate: Any) -> float | None:
    """`3`, `"2"`, `"3h"` 같은 제공자 rate 값에서 숫자 부분을 읽습니다."""
    if rate is None or isinstance(rate, bool):
        return None
    if isinstance(rate, int | float):
        return float(rate)
    match = _LEADING_DIGITS.match(str(rate))
    return float(match.group(1)) if match else None


def calculate_rating(rate: Any, kinds: str | Iterable[str] | None) -> float:
    """1~3 rate를 1~5 척도로 바꾸고 카테고리 가산점을 더한 뒤 [3.0, 5.0]으로 자릅니다."""
    numeric_rate = parse_rate(rate)
    if not numeric_rate:
        return DEFAULT_RATING

    rating = numeric_rate / 3 * 5
    text = _kinds_text(kinds)
    if "museums" in text or "monuments_and_memorials" in text:
        rating += 0.3
    if "historic" in text or "architecture" in text:
        rating += 0.2
    return clamp_rating(rating)


def clamp_rating(rating: float) -> float:
    return round_half_up(min(MAX_RATING, max(MIN_RATING, float(rating))), 1)


def category_weight(category: PlaceCategory | str | None) -> int:
    try:
        return _CATEGORY_WEIGHTS.get(PlaceCategory(category), _UNKNOWN_CATEGORY_WEIGHT)
    except ValueError:
        return _UNKNOWN_CATEGORY_WEIGHT


def format_address(address: dict[str, Any] | None) -> str:
    if not address:
        return ""
    parts = [address.get(key) for key in ("road", "city", "country")]
    return ", ".join(str(part) for part in parts if part)


def format_description(details: dict[str, Any], category: PlaceCategory) -> str:
    """위키백과 발췌문을 200자로 자르거나, 카테고리 문장으로 대체합니다."""
    extracts = details.get("wikipedia_extracts") or {}
    text = (extracts.get("text") or "").strip() if isinstance(extracts, dict) else ""
    if text:
        if len(text) > DESCRIPTION_MAX_LENGTH:
            return text[:DESCRIPTION_MAX_LENGTH] + "..."
        return text
    template = _DESCRIPTION_TEMPLATES.get(category, _DEFAULT_DESCRIPTION)
    return template.format(name=details.get("name") or "")


def pick_opening_hours(category: PlaceCategory, rng: random.Random) -> str:
    return rng.choice(OPENING_HOURS_BY_CATEGORY.get(category, DEFAULT_OPENING_HOURS))


def ticket_price_pool(category: PlaceCategory, rating: float) -> tuple[str, ...]:
    """평점이 높으면 비싼 쪽 3개, 낮으면 싼 쪽 3개로 후보를 좁힙니다."""
    prices = TICKET_PRICES_BY_CATEGORY.get(category, DEFAULT_TICKET_PRICES)
    if rating >= 4.5:
        return prices[-3:]
    if rating <= 3.5:
        return prices[:3]
    return prices


def pick_ticket_price(category: PlaceCategory, rating: float, rng: random.Random) -> str:
    return rng.choice(ticket_price_pool(category, rating))


def dedupe_key(name: str) -> str:
    """소문자화 후 영숫자가 아닌 문자를 제거한 이름 키."""
    lowered = (name or "").lower()
    key = "".join(ch for ch in lowered if ch.isalnum())
    return key or lowered.strip()


def has_usable_name(name: str | None) -> bool:
    return bool(name) and len(name.strip()) >= MIN_NAME_LENGTH


def deduplicate_places(places: Iterable[Place]) -> list[Place]:
    """이름 키 기준으로 먼저 나온 장소만 남깁니다."""
    unique: list[Place] = []
    seen: set[str] = set()
    for place in places:
        key = dedupe_key(place.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(place)
    return unique


def rank_places(places: Iterable[Place], limit: int = MAX_RANKED_PLACES) -> list[Place]:
    """카테고리 가중치 오름차순, 같은 가중치면 평점 내림차순으로 정렬해 상위 limit개를 반환합니다."""
    ranked = sorted(
        places,
        key=lambda place: (
            category_weight(place.category),
            -(place.rating if place.rating is not None else RANKING_DEFAULT_RATING),
        ),
    )
    return ranked[:limit]


def _kinds_text(kinds: str | Iterable[str] | None) -> str:
    if not kinds:
        return ""
    if isinstance(kinds, str):
        return kinds
    return ",".join(str(kind) for kind in kinds)
