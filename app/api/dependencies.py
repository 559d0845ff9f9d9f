"""API 의존성 모음."""

from __future__ import annotations

from app.core.config import Settings, get_settings
from app.services.destination_service import DestinationService, get_destination_service
from app.services.places_aggregator import PlacesAggregator, get_places_aggregator


def provide_settings() -> Settings:
    """애플리케이션 설정을 제공합니다."""
    return get_settings()


def provide_destination_service() -> DestinationService:
    """여행지 집계 서비스 인스턴스를 제공합니다."""
    return get_destination_service()


def provide_places_aggregator() -> PlacesAggregator:
    """장소 집계 서비스 인스턴스를 제공합니다."""
    return get_places_aggregator()
