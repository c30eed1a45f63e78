import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import CorsSettings, Settings
from app.exceptions.custom import ReviewNotFoundError, ReviewPersistError
from app.exceptions.handlers import review_not_found_handler, review_persist_error_handler
from app.routers.reviews import router as reviews_router
from app.services.hostaway import HostawayService
from app.services.moderation import ModerationService
from app.services.reviews import ReviewQueryService
from app.store import ReviewStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    store = ReviewStore.load(settings.reviews_file)

    async with httpx.AsyncClient(timeout=settings.hostaway_timeout) as client:
        hostaway = HostawayService(
            client,
            settings.hostaway_api_key,
            settings.hostaway_account_id,
            fallback=store,
            url=settings.hostaway_api_url,
            timeout=settings.hostaway_timeout,
        )

        app.state.review_store = store
        app.state.review_query_service = ReviewQueryService(hostaway)
        app.state.moderation_service = ModerationService(store)

        yield


cors = CorsSettings()

app = FastAPI(title="Hostaway Reviews", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allowed_origins,
    allow_origin_regex=cors.allow_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ReviewNotFoundError, review_not_found_handler)
app.add_exception_handler(ReviewPersistError, review_persist_error_handler)

app.include_router(reviews_router)


@app.get("/", response_class=PlainTextResponse)
async def health() -> str:
    return "API is running"
