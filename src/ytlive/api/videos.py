"""``videos`` endpoint: live streaming details for a single video."""

from __future__ import annotations

from typing import Optional

import httpx

from ..classify import classify
from ..outcome import Outcome
from ..request import CallRequest, Cancellation
from ..util.log import Log
from .models import LiveStreamingDetails, parse_live_streaming_details
from .transport import YOUTUBE_API_BASE_URL, HttpxTransport

log = Log.create({"service": "videos"})


async def get_live_streaming_details(
    client: httpx.AsyncClient,
    api_key: str,
    video_id: str,
    cancellation: Optional[Cancellation] = None,
    *,
    base_url: str = YOUTUBE_API_BASE_URL,
) -> Outcome[LiveStreamingDetails]:
    """Fetch the live streaming details of ``video_id`` in one attempt.

    Never raises for network, HTTP or payload problems; inspect the returned
    outcome and re-invoke on ``Retryable`` if desired.
    """
    request = CallRequest(id=video_id, cancellation=cancellation or Cancellation())
    transport = HttpxTransport(client, api_key, base_url=base_url)
    with log.time("videos.list", {"id": video_id}):
        return await classify(request, transport, parse_live_streaming_details)
