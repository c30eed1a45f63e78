from typing import Any

from pydantic import BaseModel


class Review(BaseModel):
    id: str | None = None
    channel: str
    property: str | None = None
    reviewer: str | None = None
    type: str | None = None
    status: str | None = None
    ratingOverall: float | None = None
    ratingsByCategory: dict[str, float | None] = {}
    text: str | None = None
    submittedAt: str | None = None
    publicDisplay: bool = False


class ReviewsResponse(BaseModel):
    status: str = "success"
    source: str
    count: int
    reviews: list[Review]


class VisibilityUpdateRequest(BaseModel):
    publicDisplay: bool


class VisibilityUpdateResponse(BaseModel):
    success: bool = True
    message: str
    # Provider-shaped record as persisted, not a normalized Review
    review: dict[str, Any]
