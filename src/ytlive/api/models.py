"""Wire models for the YouTube Data API ``videos`` endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..outcome import Err, Ok, Result

M = TypeVar("M", bound=BaseModel)


class LiveStreamingDetails(BaseModel):
    """Broadcast metadata of a live or scheduled video."""
    actual_start_time: Optional[datetime] = Field(None, alias="actualStartTime")
    actual_end_time: Optional[datetime] = Field(None, alias="actualEndTime")
    scheduled_start_time: Optional[datetime] = Field(None, alias="scheduledStartTime")
    scheduled_end_time: Optional[datetime] = Field(None, alias="scheduledEndTime")
    concurrent_viewers: Optional[int] = Field(None, alias="concurrentViewers")
    active_live_chat_id: Optional[str] = Field(None, alias="activeLiveChatId")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class VideoItem(BaseModel):
    """One element of the ``items`` array."""
    kind: Optional[str] = None
    etag: Optional[str] = None
    id: Optional[str] = None
    live_streaming_details: LiveStreamingDetails = Field(alias="liveStreamingDetails")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class VideosResponse(BaseModel):
    """Top-level ``videos.list`` response body."""
    kind: Optional[str] = None
    etag: Optional[str] = None
    items: List[VideoItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


def deserialize(text: str, model: Type[M]) -> Result[M]:
    """Parse JSON text into ``model``; validation and syntax errors become ``Err``."""
    try:
        return Ok(model.model_validate_json(text))
    except ValidationError as e:
        return Err(f"{model.__name__}: {e.error_count()} validation error(s): {e.errors(include_url=False)}")


def parse_live_streaming_details(text: str) -> Result[List[LiveStreamingDetails]]:
    """Parser for the classifier: the detail record of every returned item."""
    result = deserialize(text, VideosResponse)
    if isinstance(result, Err):
        return result
    return Ok([item.live_streaming_details for item in result.value.items])
