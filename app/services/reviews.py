import logging

from app.mappers.hostaway_mapper import normalize_hostaway
from app.schemas.reviews import ReviewsResponse
from app.services.hostaway import HostawayService

logger = logging.getLogger(__name__)


class ReviewQueryService:
    def __init__(self, hostaway: HostawayService):
        self._hostaway = hostaway

    async def list_reviews(self, public_only: bool = False) -> ReviewsResponse:
        """Fetch, normalize and optionally keep only publicly displayed reviews."""
        fetched = await self._hostaway.fetch_reviews()
        reviews = [normalize_hostaway(raw) for raw in fetched.records]
        if public_only:
            reviews = [r for r in reviews if r.publicDisplay]

        logger.info(
            "Sending %d %sreviews (source: %s)",
            len(reviews), "public " if public_only else "", fetched.source,
        )
        return ReviewsResponse(
            source=fetched.source.value,
            count=len(reviews),
            reviews=reviews,
        )

    async def list_public_reviews(self) -> ReviewsResponse:
        return await self.list_reviews(public_only=True)
