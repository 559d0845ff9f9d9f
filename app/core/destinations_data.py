"""홈 화면에 노출하는 추천 여행지 메타데이터."""

from app.schemas.destination import DestinationInfo

FEATURED_DESTINATIONS: tuple[DestinationInfo, ...] = (
    DestinationInfo(
        name="Paris",
        country="France",
        description="The City of Light, famous for its art, fashion, and romance.",
        image="https://images.unsplash.com/photo-1502602898657-3e91760cbb34?ixlib=rb-1.2.1&w=1000&q=80",
        lat=48.8566,
        lng=2.3522,
    ),
    DestinationInfo(
        name="Tokyo",
        country="Japan",
        description="A bustling metropolis blending traditional and modern culture.",
        image="https://images.unsplash.com/photo-1540959733332-eab4deabeeaf?w=500",
        lat=35.6762,
        lng=139.6503,
    ),
    DestinationInfo(
        name="New York",
        country="USA",
        description="The city that never sleeps, iconic skyline and culture.",
        image="https://images.unsplash.com/photo-1496442226666-8d4d0e62e6e9?w=500",
        lat=40.7128,
        lng=-74.0060,
    ),
    DestinationInfo(
        name="London",
        country="England",
        description="Historic city with royal palaces, museums, and tea culture.",
        image="https://images.unsplash.com/photo-1513635269975-59663e0ac1ad?w=500",
        lat=51.5074,
        lng=-0.1278,
    ),
)
