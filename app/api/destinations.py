"""여행지 페이지/검색 API."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from app.api.dependencies import provide_destination_service
from app.core.destinations_data import FEATURED_DESTINATIONS
from app.core.logger import get_logger
from app.schemas.destination import DestinationInfo, DestinationPageResponse
from app.schemas.places import DestinationSearchRequest
from app.services.destination_service import DestinationService, city_name_to_slug

router = APIRouter(prefix="/api/v1", tags=["destinations"])
logger = get_logger(__name__)


@router.get("/destinations", response_model=list[DestinationInfo])
def list_featured_destinations() -> list[DestinationInfo]:
    """홈 화면 추천 여행지 목록을 반환합니다."""
    return list(FEATURED_DESTINATIONS)


@router.post("/search", status_code=status.HTTP_303_SEE_OTHER)
def search_destination(request: DestinationSearchRequest) -> RedirectResponse:
    """검색어를 슬러그로 바꿔 여행지 페이지로 리다이렉트합니다."""
    slug = city_name_to_slug(request.destination)
    if not slug:
        return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)

    logger.info("Destination search: query=%s slug=%s", request.destination, slug)
    return RedirectResponse(url=f"/api/v1/destinations/{slug}", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/destinations/{slug}", response_model=DestinationPageResponse)
async def get_destination_page(
    slug: str,
    service: DestinationService = Depends(provide_destination_service),  # noqa: B008
) -> DestinationPageResponse:
    """여행지의 날씨/사진/장소를 한 번에 반환합니다."""
    return await service.build_page(slug)
