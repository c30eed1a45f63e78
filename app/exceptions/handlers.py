import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import ReviewNotFoundError, ReviewPersistError

logger = logging.getLogger(__name__)


async def review_not_found_handler(_request: Request, exc: ReviewNotFoundError) -> JSONResponse:
    logger.info("Review not found: %s", exc.review_id)
    return JSONResponse(
        status_code=404,
        content={"success": False, "message": "Review not found"},
    )


async def review_persist_error_handler(_request: Request, exc: ReviewPersistError) -> JSONResponse:
    logger.error("Review persistence failed: %s", exc.message)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Failed to persist changes"},
    )
