import httpx
import pytest
import respx
from httpx import AsyncClient, Response

from app.exceptions.custom import FetchFailure
from app.services.hostaway import REVIEWS_URL, HostawayService, ReviewSource
from app.store import ReviewStore

LIVE_RECORD = {
    "id": 1001,
    "type": "guest-to-host",
    "status": "published",
    "rating": 10,
    "publicReview": "Perfect!",
    "reviewCategory": [],
    "submittedAt": "2024-05-01 12:00:00",
    "guestName": "Live Guest",
    "listingName": "Live Listing",
    "PublicDisplayStatus": True,
}


@pytest.fixture
def store(reviews_file):
    return ReviewStore.load(reviews_file)


@pytest.fixture
async def service(store):
    async with AsyncClient() as client:
        yield HostawayService(client, "test-key", "61148", fallback=store)


@respx.mock
@pytest.mark.asyncio
async def test_live_success(service):
    route = respx.get(REVIEWS_URL).mock(
        return_value=Response(200, json={"status": "success", "result": [LIVE_RECORD]})
    )

    result = await service.fetch_reviews()

    assert result.source == ReviewSource.live == "Hostaway API"
    assert result.records == [LIVE_RECORD]
    assert result.failure is None

    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer test-key"
    assert request.url.params["accountId"] == "61148"


@respx.mock
@pytest.mark.asyncio
async def test_empty_live_response_uses_fallback(service, fallback_records):
    respx.get(REVIEWS_URL).mock(
        return_value=Response(200, json={"status": "success", "result": []})
    )

    result = await service.fetch_reviews()

    assert result.source == "mock (empty live response)"
    assert result.records == fallback_records
    assert result.failure is None


@respx.mock
@pytest.mark.parametrize(
    "side_effect, failure",
    [
        (httpx.ConnectTimeout("timed out"), FetchFailure.timeout),
        (httpx.ReadTimeout("timed out"), FetchFailure.timeout),
        (httpx.ConnectError("refused"), FetchFailure.network),
    ],
)
@pytest.mark.asyncio
async def test_transport_errors_use_fallback(service, fallback_records, side_effect, failure):
    respx.get(REVIEWS_URL).mock(side_effect=side_effect)

    result = await service.fetch_reviews()

    assert result.source == "mock (API error)"
    assert result.records == fallback_records
    assert result.failure == failure


@respx.mock
@pytest.mark.parametrize(
    "response, failure",
    [
        (Response(405, text="Method Not Allowed"), FetchFailure.http_status),
        (Response(500, text="Internal Server Error"), FetchFailure.http_status),
        (Response(200, text="<html>oops</html>"), FetchFailure.invalid_json),
        (Response(200, json={"status": "fail", "result": [LIVE_RECORD]}), FetchFailure.invalid_shape),
        (Response(200, json={"result": [LIVE_RECORD]}), FetchFailure.invalid_shape),
        (Response(200, json={"status": "success"}), FetchFailure.invalid_shape),
        (Response(200, json={"status": "success", "result": {"id": 1}}), FetchFailure.invalid_shape),
        (Response(200, json=[LIVE_RECORD]), FetchFailure.invalid_shape),
    ],
)
@pytest.mark.asyncio
async def test_bad_responses_use_fallback(service, fallback_records, response, failure):
    respx.get(REVIEWS_URL).mock(return_value=response)

    result = await service.fetch_reviews()

    assert result.source == "mock (API error)"
    assert result.records == fallback_records
    assert result.failure == failure


@respx.mock
@pytest.mark.asyncio
async def test_unexpected_error_uses_fallback(service, fallback_records):
    respx.get(REVIEWS_URL).mock(side_effect=RuntimeError("boom"))

    result = await service.fetch_reviews()

    assert result.source == "mock (API error)"
    assert result.records == fallback_records
    assert result.failure == FetchFailure.unexpected


@respx.mock
@pytest.mark.asyncio
async def test_fallback_reflects_in_memory_moderation(service, store):
    respx.get(REVIEWS_URL).mock(return_value=Response(500))

    store.set_public_display(7455, True)
    result = await service.fetch_reviews()

    record = next(r for r in result.records if r["id"] == 7455)
    assert record["PublicDisplayStatus"] is True


@respx.mock
@pytest.mark.asyncio
async def test_uses_configured_url_and_timeout(store):
    url = "https://hostaway.test/v1/reviews"
    route = respx.get(url).mock(
        return_value=Response(200, json={"status": "success", "result": [LIVE_RECORD]})
    )

    async with AsyncClient() as client:
        service = HostawayService(client, "k", "1", fallback=store, url=url, timeout=2.5)
        result = await service.fetch_reviews()

    assert route.called
    assert result.source == ReviewSource.live
    assert route.calls.last.request.extensions["timeout"]["read"] == 2.5


def test_source_labels_are_fixed():
    assert {s.value for s in ReviewSource} == {
        "Hostaway API",
        "mock (empty live response)",
        "mock (API error)",
    }


@respx.mock
@pytest.mark.asyncio
async def test_live_result_with_non_object_elements_is_kept(service):
    respx.get(REVIEWS_URL).mock(
        return_value=Response(200, json={"status": "success", "result": [LIVE_RECORD, None, 5]})
    )

    result = await service.fetch_reviews()

    assert result.source == ReviewSource.live
    assert result.records == [LIVE_RECORD, None, 5]
    assert result.failure is None
