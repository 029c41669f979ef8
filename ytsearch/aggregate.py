"""Assemble search, playlist and watch-page responses from decoded payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from langdetect import DetectorFactory, LangDetectException, detect_langs

from .extract import walk_tree
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
    playlist_url,
    watch_url,
)
from .text import clean_text, dig, format_timestamp, pick_best_thumbnail, pick_text

logger = logging.getLogger(__name__)

DetectorFactory.seed = 0


@dataclass
class SearchResponse:
    query: str
    videos: List[VideoRecord] = field(default_factory=list)
    channels: List[ChannelRecord] = field(default_factory=list)
    playlists: List[PlaylistRecord] = field(default_factory=list)
    live: List[VideoRecord] = field(default_factory=list)
    continuation: Optional[str] = None

    def asdict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "videos": [video.asdict() for video in self.videos],
            "channels": [channel.asdict() for channel in self.channels],
            "playlists": [playlist.asdict() for playlist in self.playlists],
            "live": [video.asdict() for video in self.live],
            "continuation": self.continuation,
        }


@dataclass
class PlaylistResponse:
    list_id: Optional[str]
    url: Optional[str]
    title: Optional[str]
    author: Optional[Author]
    videos: List[PlaylistItem] = field(default_factory=list)

    def asdict(self) -> Dict[str, Any]:
        return {
            "type": "playlist",
            "listId": self.list_id,
            "url": self.url,
            "title": self.title,
            "author": self.author.asdict() if self.author else None,
            "videos": [video.asdict() for video in self.videos],
        }


@dataclass
class Duration:
    seconds: Optional[int] = None
    timestamp: Optional[str] = None


@dataclass
class VideoDetail:
    video_id: Optional[str]
    url: Optional[str]
    title: Optional[str]
    description: Optional[str]
    duration: Duration
    views: Optional[int]
    author: Optional[Author]
    thumbnail: Optional[str]
    publish_date: Optional[str]
    upload_date: Optional[str]
    keywords: List[str] = field(default_factory=list)
    language: Optional[str] = None

    def asdict(self) -> Dict[str, Any]:
        return {
            "type": "video",
            "videoId": self.video_id,
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "duration": {"seconds": self.duration.seconds, "timestamp": self.duration.timestamp},
            "views": self.views,
            "author": self.author.asdict() if self.author else None,
            "thumbnail": self.thumbnail,
            "publishDate": self.publish_date,
            "uploadDate": self.upload_date,
            "keywords": list(self.keywords),
            "language": self.language,
        }


def _continuation_token(node: Dict[str, Any]) -> Optional[str]:
    token = dig(node, "nextContinuationData", "continuation") or dig(
        node, "continuationCommand", "token"
    )
    return clean_text(token) or None


def aggregate_search_results(tree: Any, query: str) -> SearchResponse:
    response = SearchResponse(query=query)

    def visit(node: Dict[str, Any]) -> None:
        video_renderer = node.get("videoRenderer")
        if isinstance(video_renderer, dict):
            video = build_video_record(video_renderer)
            if video:
                (response.live if video.live else response.videos).append(video)

        channel_renderer = node.get("channelRenderer")
        if isinstance(channel_renderer, dict):
            channel = build_channel_record(channel_renderer)
            if channel:
                response.channels.append(channel)

        playlist_renderer = node.get("playlistRenderer")
        if isinstance(playlist_renderer, dict):
            playlist = build_playlist_record(playlist_renderer)
            if playlist:
                response.playlists.append(playlist)

        if response.continuation is None:
            response.continuation = _continuation_token(node)

    walk_tree(tree, visit)
    logger.debug(
        "Search %r: %d videos, %d live, %d channels, %d playlists",
        query,
        len(response.videos),
        len(response.live),
        len(response.channels),
        len(response.playlists),
    )
    return response


def aggregate_playlist_contents(tree: Any, list_id: Optional[str] = None) -> PlaylistResponse:
    videos: List[PlaylistItem] = []
    headers: List[Dict[str, Any]] = []

    def visit(node: Dict[str, Any]) -> None:
        header_renderer = node.get("playlistHeaderRenderer")
        if not headers and isinstance(header_renderer, dict):
            headers.append(header_renderer)

        item_renderer = node.get("playlistVideoRenderer")
        if isinstance(item_renderer, dict):
            item = build_playlist_item(item_renderer)
            if item:
                videos.append(item)

    walk_tree(tree, visit)

    header = headers[0] if headers else {}
    owner_name = pick_text(header.get("ownerText"))
    owner_id = clean_text(dig(header, "ownerEndpoint", "browseEndpoint", "browseId")) or None
    list_id = clean_text(list_id) or clean_text(header.get("playlistId")) or None
    logger.debug("Playlist %s: %d videos", list_id, len(videos))

    return PlaylistResponse(
        list_id=list_id,
        url=playlist_url(list_id) if list_id else None,
        title=pick_text(header.get("title")),
        author=Author(name=owner_name, channel_id=owner_id) if owner_name else None,
        videos=videos,
    )


def _parse_count(value: Any) -> Optional[int]:
    text = clean_text(value)
    if not text:
        return None
    try:
        number = int(float(text))
    except (OverflowError, ValueError):
        return None
    return number if number >= 0 else None


def detect_language(*texts: Optional[str]) -> Optional[str]:
    """Guess the language code of the joined ``texts`` with langdetect."""

    joined = "\n".join(text for text in texts if text).strip()
    if not joined:
        return None
    try:
        candidates = detect_langs(joined)
    except LangDetectException:
        return None
    return candidates[0].lang if candidates else None


def _normalize_language_code(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    candidate = str(value).strip().lower()
    if not candidate:
        return None
    candidate = candidate.replace("_", "-")
    if "-" in candidate:
        candidate = candidate.split("-", 1)[0]
    return candidate or None


def _resolve_language(
    details: Dict[str, Any], micro: Dict[str, Any], texts: List[Optional[str]]
) -> Optional[str]:
    for hint in (details.get("defaultAudioLanguage"), micro.get("language")):
        code = _normalize_language_code(hint)
        if code:
            return code
    return detect_language(*texts)


def build_video_details(
    video_details: Optional[Dict[str, Any]],
    microformat: Optional[Dict[str, Any]],
    video_id: Optional[str] = None,
) -> VideoDetail:
    """Read the flat ``videoDetails`` and microformat blocks of a player response.

    ``microformat`` may be the ``microformat`` wrapper or the inner
    ``playerMicroformatRenderer``. Duration is rebuilt from
    ``lengthSeconds`` rather than any display text.
    """

    details = video_details if isinstance(video_details, dict) else {}
    micro = microformat if isinstance(microformat, dict) else {}
    if isinstance(micro.get("playerMicroformatRenderer"), dict):
        micro = micro["playerMicroformatRenderer"]

    video_id = clean_text(video_id) or clean_text(details.get("videoId")) or None
    title = clean_text(details.get("title")) or None
    description = clean_text(details.get("shortDescription")) or None

    seconds = _parse_count(details.get("lengthSeconds"))
    duration = Duration(seconds=seconds)
    if seconds is not None:
        duration.timestamp = format_timestamp(seconds)

    author_name = clean_text(details.get("author")) or None
    channel_id = clean_text(details.get("channelId")) or None

    keywords = details.get("keywords")
    if not isinstance(keywords, list):
        keywords = []

    return VideoDetail(
        video_id=video_id,
        url=watch_url(video_id) if video_id else None,
        title=title,
        description=description,
        duration=duration,
        views=_parse_count(details.get("viewCount")),
        author=Author(name=author_name, channel_id=channel_id) if author_name else None,
        thumbnail=pick_best_thumbnail(dig(details, "thumbnail", "thumbnails")),
        publish_date=clean_text(micro.get("publishDate")) or None,
        upload_date=clean_text(micro.get("uploadDate")) or None,
        keywords=[str(keyword) for keyword in keywords],
        language=_resolve_language(details, micro, [title, description]),
    )
