from fastapi import APIRouter

from app.dependencies import ModerationDep, ReviewQueryDep
from app.schemas.reviews import (
    ReviewsResponse,
    VisibilityUpdateRequest,
    VisibilityUpdateResponse,
)

router = APIRouter(prefix="/api/reviews")


@router.get("/hostaway", response_model=ReviewsResponse)
async def list_hostaway_reviews(service: ReviewQueryDep) -> ReviewsResponse:
    """All normalized reviews, for the internal dashboard."""
    return await service.list_reviews()


@router.get("/public", response_model=ReviewsResponse)
async def list_public_reviews(service: ReviewQueryDep) -> ReviewsResponse:
    """Only reviews approved for public display."""
    return await service.list_public_reviews()


@router.patch("/hostaway/{review_id}/public", response_model=VisibilityUpdateResponse)
async def set_review_visibility(
    review_id: str,
    request: VisibilityUpdateRequest,
    service: ModerationDep,
) -> VisibilityUpdateResponse:
    record = await service.set_visibility(review_id, request.publicDisplay)
    return VisibilityUpdateResponse(
        message=f"Review {review_id} visibility updated",
        review=record,
    )
