import httpx
import pytest

from ytlive.api import get_live_streaming_details
from ytlive.outcome import Failure, Retryable, Success
from ytlive.request import Cancellation


def _client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_get_live_streaming_details_returns_first_record() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["id"] == "abc"
        return httpx.Response(
            200,
            json={"items": [{"liveStreamingDetails": {"scheduledStartTime": "2024-01-01T00:00:00Z"}}]},
        )

    async with _client(handler) as client:
        outcome = await get_live_streaming_details(client, "secret", "abc", base_url="https://api.test")

    assert isinstance(outcome, Success)
    assert outcome.value.scheduled_start_time.isoformat() == "2024-01-01T00:00:00+00:00"


@pytest.mark.anyio
async def test_get_live_streaming_details_maps_status_codes() -> None:
    statuses = iter([503, 403, 429])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), json={"error": {"message": "nope"}})

    async with _client(handler) as client:
        first = await get_live_streaming_details(client, "secret", "abc")
        second = await get_live_streaming_details(client, "secret", "abc")
        third = await get_live_streaming_details(client, "secret", "abc")

    assert isinstance(first, Retryable) and "503" in first.reason
    assert isinstance(second, Failure) and "403" in second.reason
    assert isinstance(third, Retryable) and "429" in third.reason


@pytest.mark.anyio
async def test_get_live_streaming_details_skips_transport_for_empty_id() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"items": []})

    async with _client(handler) as client:
        outcome = await get_live_streaming_details(client, "secret", "")

    assert isinstance(outcome, Failure)
    assert calls == []


@pytest.mark.anyio
async def test_get_live_streaming_details_honors_prior_cancellation() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"items": []})

    cancellation = Cancellation()
    cancellation.cancel()
    async with _client(handler) as client:
        outcome = await get_live_streaming_details(client, "secret", "abc", cancellation)

    assert isinstance(outcome, Retryable)
    assert calls == []


@pytest.mark.anyio
async def test_get_live_streaming_details_connection_error_is_retryable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        outcome = await get_live_streaming_details(client, "secret", "abc")

    assert isinstance(outcome, Retryable)
    assert "ConnectError" in outcome.reason
