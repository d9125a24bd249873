"""YouTube Data API client pieces."""

from .models import LiveStreamingDetails, VideoItem, VideosResponse, parse_live_streaming_details
from .transport import YOUTUBE_API_BASE_URL, HttpxTransport, build_params
from .videos import get_live_streaming_details

__all__ = [
    "HttpxTransport",
    "LiveStreamingDetails",
    "VideoItem",
    "VideosResponse",
    "YOUTUBE_API_BASE_URL",
    "build_params",
    "get_live_streaming_details",
    "parse_live_streaming_details",
]
