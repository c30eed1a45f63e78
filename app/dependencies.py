from typing import Annotated

from fastapi import Depends, Request

from app.services.moderation import ModerationService
from app.services.reviews import ReviewQueryService


def get_review_query_service(request: Request) -> ReviewQueryService:
    return request.app.state.review_query_service


def get_moderation_service(request: Request) -> ModerationService:
    return request.app.state.moderation_service


ReviewQueryDep = Annotated[ReviewQueryService, Depends(get_review_query_service)]
ModerationDep = Annotated[ModerationService, Depends(get_moderation_service)]
