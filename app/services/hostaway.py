import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import httpx
from pydantic import ValidationError

from app.exceptions.custom import FetchFailure, HostawayError
from app.schemas.hostaway import HostawayReviewsResponse
from app.store import ReviewStore

logger = logging.getLogger(__name__)

REVIEWS_URL = "https://api.hostaway.com/v1/reviews"
DEFAULT_TIMEOUT = 10.0


class ReviewSource(StrEnum):
    live = "Hostaway API"
    mock_empty = "mock (empty live response)"
    mock_error = "mock (API error)"


@dataclass
class FetchResult:
    records: list[Any]
    source: ReviewSource
    failure: FetchFailure | None = None


class HostawayService:
    """Single-attempt fetch of Hostaway reviews with a local fallback.

    fetch_reviews() never raises. Any failure is logged with its kind and
    answered with the records of the local review store.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        account_id: str,
        fallback: ReviewStore,
        url: str = REVIEWS_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._client = client
        self._fallback = fallback
        self._url = url
        self._timeout = timeout
        self._params = {"accountId": account_id}
        self._headers = {"Authorization": f"Bearer {api_key}"}

    async def _fetch_live(self) -> list[Any]:
        try:
            resp = await self._client.get(
                self._url,
                params=self._params,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise HostawayError(f"timed out after {self._timeout}s", FetchFailure.timeout) from exc
        except httpx.HTTPError as exc:
            raise HostawayError(str(exc) or type(exc).__name__, FetchFailure.network) from exc

        if resp.status_code >= 400:
            raise HostawayError(
                resp.text[:500], FetchFailure.http_status, status_code=resp.status_code
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise HostawayError(
                "response body is not JSON", FetchFailure.invalid_json, status_code=resp.status_code
            ) from exc

        try:
            data = HostawayReviewsResponse.model_validate(payload)
        except ValidationError as exc:
            raise HostawayError(
                f"invalid response structure: {exc.error_count()} error(s)",
                FetchFailure.invalid_shape,
                status_code=resp.status_code,
            ) from exc

        if data.status != "success":
            raise HostawayError(
                f"unexpected status {data.status!r}",
                FetchFailure.invalid_shape,
                status_code=resp.status_code,
            )

        return data.result

    def _fallback_result(self, source: ReviewSource, failure: FetchFailure | None = None) -> FetchResult:
        return FetchResult(records=list(self._fallback.records), source=source, failure=failure)

    async def fetch_reviews(self) -> FetchResult:
        logger.info("Fetching live reviews from Hostaway")
        try:
            records = await self._fetch_live()
        except HostawayError as exc:
            logger.warning(
                "Hostaway request failed (%s, status=%s): %s. Falling back to local reviews",
                exc.kind, exc.status_code, exc.message,
                extra={"fetch_failure": str(exc.kind)},
            )
            return self._fallback_result(ReviewSource.mock_error, exc.kind)
        except Exception:
            logger.exception("Unexpected error fetching Hostaway reviews, falling back to local reviews")
            return self._fallback_result(ReviewSource.mock_error, FetchFailure.unexpected)

        if not records:
            logger.warning("Hostaway returned no reviews, falling back to local reviews")
            return self._fallback_result(ReviewSource.mock_empty)

        logger.info("Fetched %d reviews from Hostaway", len(records))
        return FetchResult(records=records, source=ReviewSource.live)
