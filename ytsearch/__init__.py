"""Scrape YouTube search, watch and playlist pages without the official API."""
from __future__ import annotations

from .aggregate import (
    Duration,
    PlaylistResponse,
    SearchResponse,
    VideoDetail,
    aggregate_playlist_contents,
    aggregate_search_results,
    build_video_details,
)
from .errors import FetchError, InvalidRequestError, JsonNotFoundError, YouTubeSearchError
from .extract import (
    INITIAL_DATA_MARKERS,
    PLAYER_RESPONSE_MARKERS,
    extract_named_json,
    scan_balanced_object,
    walk_tree,
)
from .renderers import (
    Author,
    ChannelRecord,
    PlaylistItem,
    PlaylistRecord,
    VideoRecord,
    build_channel_record,
    build_playlist_item,
    build_playlist_record,
    build_video_record,
)
from .runner import SearchRequest, SearchRunner, yt_search
from .youtube import get_playlist, get_video, search

__version__ = "1.0.0"

__all__ = [
    "Author",
    "ChannelRecord",
    "Duration",
    "FetchError",
    "INITIAL_DATA_MARKERS",
    "InvalidRequestError",
    "JsonNotFoundError",
    "PLAYER_RESPONSE_MARKERS",
    "PlaylistItem",
    "PlaylistRecord",
    "PlaylistResponse",
    "SearchRequest",
    "SearchResponse",
    "SearchRunner",
    "VideoDetail",
    "VideoRecord",
    "YouTubeSearchError",
    "aggregate_playlist_contents",
    "aggregate_search_results",
    "build_channel_record",
    "build_playlist_item",
    "build_playlist_record",
    "build_video_details",
    "build_video_record",
    "extract_named_json",
    "get_playlist",
    "get_video",
    "scan_balanced_object",
    "search",
    "walk_tree",
    "yt_search",
]
