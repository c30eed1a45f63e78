import asyncio
import logging
from typing import Any

from app.exceptions.custom import ReviewNotFoundError, ReviewPersistError
from app.store import ReviewStore

logger = logging.getLogger(__name__)


class ModerationService:
    def __init__(self, store: ReviewStore):
        self._store = store

    async def set_visibility(self, review_id: str, public_display: bool) -> dict[str, Any]:
        """Set a review's PublicDisplayStatus and flush the store.

        Returns the provider-shaped record. Raises ReviewNotFoundError without
        touching the store, or ReviewPersistError when the flush fails; in the
        latter case the in-memory change is kept until the next successful
        flush or a restart.
        """
        record = self._store.set_public_display(review_id, public_display)
        if record is None:
            raise ReviewNotFoundError(review_id)

        payload = self._store.dumps()
        try:
            await asyncio.to_thread(self._store.write, payload)
        except ReviewPersistError:
            logger.exception(
                "Review %s visibility changed in memory but not saved to %s",
                review_id, self._store.path,
            )
            raise

        logger.info("Review %s publicDisplay set to %s", review_id, public_display)
        return record
