"""장소 제공자가 결과를 주지 못할 때 쓰는 도시별 대표 명소 테이블."""

from __future__ import annotations

from dataclasses import dataclass

from app.schemas.destination import Coordinates, PlaceCategory


@dataclass(frozen=True, slots=True)
class FallbackPlaceSeed:
    """대체 장소 원본 항목."""

    name: str
    category: PlaceCategory
    address: str
    rating: float
    description: str


@dataclass(frozen=True, slots=True)
class FallbackCity:
    """대체 장소 테이블에 등록된 도시."""

    center: Coordinates
    places: tuple[FallbackPlaceSeed, ...]


_C = PlaceCategory

FALLBACK_CITIES: dict[str, FallbackCity] = {
    "paris": FallbackCity(
        center=Coordinates(lat=48.8566, lng=2.3522),
        places=(
            FallbackPlaceSeed("Eiffel Tower", _C.TOWER, "Champ de Mars, Paris", 4.5, "Iconic iron tower and symbol of Paris."),
            FallbackPlaceSeed(
                "Louvre Museum",
                _C.MUSEUM,
                "Rue de Rivoli, Paris",
                4.6,
                "World's largest art museum, home to the Mona Lisa.",
            ),
            FallbackPlaceSeed(
                "Notre-Dame Cathedral",
                _C.RELIGIOUS_SITE,
                "Île de la Cité, Paris",
                4.4,
                "Gothic masterpiece on the Seine River.",
            ),
            FallbackPlaceSeed(
                "Arc de Triomphe",
                _C.MONUMENT,
                "Place Charles de Gaulle, Paris",
                4.5,
                "Triumphal arch honoring French military victories.",
            ),
            FallbackPlaceSeed(
                "Sacré-Cœur Basilica",
                _C.RELIGIOUS_SITE,
                "Montmartre, Paris",
                4.4,
                "Beautiful basilica atop Montmartre hill.",
            ),
        ),
    ),
    "london": FallbackCity(
        center=Coordinates(lat=51.5074, lng=-0.1278),
        places=(
            FallbackPlaceSeed(
                "Big Ben", _C.TOWER, "Westminster, London", 4.5, "Iconic clock tower at the Palace of Westminster."
            ),
            FallbackPlaceSeed(
                "Tower of London", _C.CASTLE, "Tower Hill, London", 4.4, "Historic castle housing the Crown Jewels."
            ),
            FallbackPlaceSeed(
                "London Eye", _C.ATTRACTION, "South Bank, London", 4.3, "Giant observation wheel with city views."
            ),
            FallbackPlaceSeed(
                "British Museum", _C.MUSEUM, "Great Russell St, London", 4.6, "World-renowned museum of human history."
            ),
            FallbackPlaceSeed(
                "Tower Bridge", _C.BRIDGE, "Tower Bridge Rd, London", 4.5, "Victorian bridge with glass floor walkway."
            ),
        ),
    ),
    "tokyo": FallbackCity(
        center=Coordinates(lat=35.6762, lng=139.6503),
        places=(
            FallbackPlaceSeed(
                "Senso-ji Temple", _C.RELIGIOUS_SITE, "Asakusa, Tokyo", 4.3, "Ancient Buddhist temple in Asakusa district."
            ),
            FallbackPlaceSeed(
                "Tokyo Skytree", _C.TOWER, "Sumida, Tokyo", 4.2, "Tallest structure in Japan with observation decks."
            ),
            FallbackPlaceSeed(
                "Meiji Shrine", _C.RELIGIOUS_SITE, "Shibuya, Tokyo", 4.4, "Shinto shrine surrounded by forest in the city."
            ),
            FallbackPlaceSeed(
                "Imperial Palace", _C.PALACE, "Chiyoda, Tokyo", 4.0, "Primary residence of the Emperor of Japan."
            ),
            FallbackPlaceSeed(
                "Shibuya Crossing", _C.ATTRACTION, "Shibuya, Tokyo", 4.3, "World's busiest pedestrian crossing."
            ),
        ),
    ),
    "new york": FallbackCity(
        center=Coordinates(lat=40.7128, lng=-74.0060),
        places=(
            FallbackPlaceSeed(
                "Statue of Liberty", _C.MONUMENT, "Liberty Island, NY", 4.5, "Symbol of freedom and democracy."
            ),
            FallbackPlaceSeed(
                "Central Park", _C.PARK, "Manhattan, New York", 4.6, "Large public park in the heart of Manhattan."
            ),
            FallbackPlaceSeed(
                "Times Square", _C.ATTRACTION, "Manhattan, New York", 4.2, "Bright lights and Broadway theaters."
            ),
            FallbackPlaceSeed(
                "Empire State Building", _C.TOWER, "Midtown Manhattan, NY", 4.4, "Art Deco skyscraper with city views."
            ),
            FallbackPlaceSeed(
                "Brooklyn Bridge", _C.BRIDGE, "Brooklyn, New York", 4.5, "Historic suspension bridge over East River."
            ),
        ),
    ),
    "rome": FallbackCity(
        center=Coordinates(lat=41.9028, lng=12.4964),
        places=(
            FallbackPlaceSeed(
                "Colosseum", _C.HISTORIC_SITE, "Rome, Italy", 4.6, "Ancient amphitheater, symbol of Imperial Rome."
            ),
            FallbackPlaceSeed("Vatican City", _C.RELIGIOUS_SITE, "Vatican City", 4.7, "Papal residence with Sistine Chapel."),
            FallbackPlaceSeed(
                "Trevi Fountain", _C.MONUMENT, "Rome, Italy", 4.5, "Baroque fountain, famous for coin tossing."
            ),
            FallbackPlaceSeed("Pantheon", _C.HISTORIC_SITE, "Rome, Italy", 4.6, "Best-preserved Roman building."),
            FallbackPlaceSeed("Roman Forum", _C.HISTORIC_SITE, "Rome, Italy", 4.4, "Center of ancient Roman public life."),
        ),
    ),
    "barcelona": FallbackCity(
        center=Coordinates(lat=41.3874, lng=2.1686),
        places=(
            FallbackPlaceSeed(
                "Sagrada Familia", _C.RELIGIOUS_SITE, "Barcelona, Spain", 4.6, "Gaudí's unfinished masterpiece basilica."
            ),
            FallbackPlaceSeed("Park Güell", _C.PARK, "Barcelona, Spain", 4.4, "Colorful mosaic park by Gaudí."),
            FallbackPlaceSeed(
                "Casa Batlló", _C.ARCHITECTURE, "Barcelona, Spain", 4.5, "Gaudí's fantastical modernist house."
            ),
            FallbackPlaceSeed("La Rambla", _C.ATTRACTION, "Barcelona, Spain", 4.2, "Famous tree-lined pedestrian street."),
            FallbackPlaceSeed(
                "Gothic Quarter", _C.HISTORIC_SITE, "Barcelona, Spain", 4.3, "Medieval neighborhood with narrow streets."
            ),
        ),
    ),
}


def generic_fallback_seeds(city: str) -> tuple[FallbackPlaceSeed, ...]:
    """테이블에 없는 도시용 4개 범용 항목."""
    return (
        FallbackPlaceSeed("City Center", _C.ATTRACTION, f"Downtown {city}", 4.0, "Main commercial and cultural district."),
        FallbackPlaceSeed("Historic Old Town", _C.HISTORIC_SITE, city, 4.1, "Historic heart of the city."),
        FallbackPlaceSeed("Main Square", _C.ATTRACTION, f"Central {city}", 4.1, "Central meeting place and landmark."),
        FallbackPlaceSeed("City Museum", _C.MUSEUM, city, 4.0, "Local history and culture museum."),
    )


def lookup_fallback_city(city: str) -> FallbackCity | None:
    return FALLBACK_CITIES.get((city or "").strip().lower())
