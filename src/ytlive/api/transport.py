"""httpx-backed transport for the ``videos`` endpoint."""

from __future__ import annotations

import asyncio

import httpx

from ..classify import BufferedResponse
from ..core.config_schema import DEFAULT_BASE_URL
from ..request import CallCancelled, CallRequest
from ..util.log import Log

YOUTUBE_API_BASE_URL = DEFAULT_BASE_URL
VIDEOS_ENDPOINT = "/videos"
LIVE_STREAMING_DETAILS_PART = "liveStreamingDetails"

log = Log.create({"service": "transport"})


def build_params(video_id: str, api_key: str, part: str = LIVE_STREAMING_DETAILS_PART) -> dict[str, str]:
    """Query parameters of a ``videos.list`` request."""
    return {
        "part": part,
        "id": video_id,
        "key": api_key,
    }


class HttpxTransport:
    """Sends ``GET {base_url}/videos`` requests through an ``httpx.AsyncClient``.

    The client is owned by the caller; this class never opens or closes it.
    The request is raced against the call's cancellation signal and
    ``CallCancelled`` is raised if the signal fires first.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        *,
        base_url: str = YOUTUBE_API_BASE_URL,
        endpoint: str = VIDEOS_ENDPOINT,
        part: str = LIVE_STREAMING_DETAILS_PART,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._url = base_url.rstrip("/") + endpoint
        self._part = part

    async def _fetch(self, request: CallRequest) -> BufferedResponse:
        params = build_params(request.id or "", self._api_key, self._part)
        response = await self._client.get(self._url, params=params)
        log.debug("received response", {"id": request.id, "status": response.status_code})
        return BufferedResponse(status_code=response.status_code, body=response.text)

    async def __call__(self, request: CallRequest) -> BufferedResponse:
        fetch = asyncio.ensure_future(self._fetch(request))
        cancelled = asyncio.ensure_future(request.cancellation.wait())
        try:
            done, _ = await asyncio.wait({fetch, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (fetch, cancelled):
                if not task.done():
                    task.cancel()
            await asyncio.gather(fetch, cancelled, return_exceptions=True)

        if fetch in done:
            return fetch.result()
        raise CallCancelled(f"cancellation requested while fetching {request.id}")

    def __repr__(self) -> str:
        return f"HttpxTransport(url={self._url!r}, part={self._part!r})"
