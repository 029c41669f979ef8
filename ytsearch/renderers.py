"""Turn individual YouTube renderer objects into flat records."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .text import (
    YOUTUBE_ORIGIN,
    clean_text,
    dig,
    normalize_url,
    parse_duration_seconds,
    parse_subscriber_count,
    pick_best_thumbnail,
    pick_text,
    to_int,
)

NAVIGATION_URL_PATH = ("navigationEndpoint", "commandMetadata", "webCommandMetadata", "url")


@dataclass
class Author:
    name: str
    channel_id: Optional[str] = None
    url: Optional[str] = None

    def asdict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name}
        if self.channel_id is not None:
            payload["channelId"] = self.channel_id
        if self.url is not None:
            payload["url"] = self.url
        return payload


@dataclass
class VideoRecord:
    video_id: str
    url: str
    title: Optional[str]
    timestamp: Optional[str]
    seconds: Optional[int]
    views: Optional[int]
    views_text: Optional[str]
    ago: Optional[str]
    author: Optional[Author]
    thumbnail: Optional[str]
    live: bool = False

    def asdict(self) -> Dict[str, Any]:
        return {
            "type": "video",
            "videoId": self.video_id,
            "url": self.url,
            "title": self.title,
            "timestamp": self.timestamp,
            "seconds": self.seconds,
            "views": self.views,
            "viewsText": self.views_text,
            "ago": self.ago,
            "author": self.author.asdict() if self.author else None,
            "thumbnail": self.thumbnail,
            "live": self.live,
        }


@dataclass
class ChannelRecord:
    channel_id: str
    url: str
    name: Optional[str]
    description: Optional[str]
    subscribers_text: Optional[str]
    subscribers: Optional[int]
    thumbnail: Optional[str]

    def asdict(self) -> Dict[str, Any]:
        return {
            "type": "channel",
            "channelId": self.channel_id,
            "url": self.url,
            "name": self.name,
            "description": self.description,
            "subscribersText": self.subscribers_text,
            "subscribers": self.subscribers,
            "thumbnail": self.thumbnail,
        }


@dataclass
class PlaylistRecord:
    list_id: str
    url: str
    title: Optional[str]
    video_count_text: Optional[str]
    video_count: Optional[int]
    author: Optional[Author]
    thumbnail: Optional[str]

    def asdict(self) -> Dict[str, Any]:
        return {
            "type": "playlist",
            "listId": self.list_id,
            "url": self.url,
            "title": self.title,
            "videoCountText": self.video_count_text,
            "videoCount": self.video_count,
            "author": self.author.asdict() if self.author else None,
            "thumbnail": self.thumbnail,
        }


@dataclass
class PlaylistItem:
    """A video as listed inside a playlist page (no views or publish time)."""

    video_id: str
    url: str
    title: Optional[str]
    timestamp: Optional[str]
    seconds: Optional[int]
    author: Optional[Author]
    thumbnail: Optional[str]

    def asdict(self) -> Dict[str, Any]:
        return {
            "videoId": self.video_id,
            "url": self.url,
            "title": self.title,
            "timestamp": self.timestamp,
            "seconds": self.seconds,
            "author": self.author.asdict() if self.author else None,
            "thumbnail": self.thumbnail,
        }


def watch_url(video_id: str) -> str:
    return f"{YOUTUBE_ORIGIN}/watch?v={video_id}"


def channel_url(channel_id: str) -> str:
    return f"{YOUTUBE_ORIGIN}/channel/{channel_id}"


def playlist_url(list_id: str) -> str:
    return f"{YOUTUBE_ORIGIN}/playlist?list={list_id}"


def _identifier(renderer: Dict[str, Any], key: str) -> Optional[str]:
    return clean_text(renderer.get(key)) or None


def _resolve_author(byline: Any) -> Optional[Author]:
    name = pick_text(byline)
    if not name:
        return None
    first_run = dig(byline, "runs", 0)
    channel_id = clean_text(dig(first_run, "navigationEndpoint", "browseEndpoint", "browseId")) or None
    url = normalize_url(dig(first_run, *NAVIGATION_URL_PATH)) or normalize_url(
        dig(first_run, "navigationEndpoint", "browseEndpoint", "canonicalBaseUrl")
    )
    if not url and channel_id:
        url = channel_url(channel_id)
    return Author(name=name, channel_id=channel_id, url=url)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def is_live_renderer(renderer: Dict[str, Any]) -> bool:
    """Best-effort live detection from badge labels and overlay styles."""

    for badge in _as_list(renderer.get("badges")):
        label = clean_text(dig(badge, "metadataBadgeRenderer", "label"))
        if "live" in label.lower():
            return True
    for overlay in _as_list(renderer.get("thumbnailOverlays")):
        style = clean_text(dig(overlay, "thumbnailOverlayTimeStatusRenderer", "style"))
        if "live" in style.lower():
            return True
    return False


def build_video_record(renderer: Dict[str, Any]) -> Optional[VideoRecord]:
    video_id = _identifier(renderer, "videoId")
    if not video_id:
        return None

    timestamp = pick_text(renderer.get("lengthText"))
    views_text = pick_text(renderer.get("viewCountText"))
    author = _resolve_author(renderer.get("ownerText")) or _resolve_author(
        renderer.get("longBylineText")
    )

    return VideoRecord(
        video_id=video_id,
        url=normalize_url(dig(renderer, *NAVIGATION_URL_PATH)) or watch_url(video_id),
        title=pick_text(renderer.get("title")),
        timestamp=timestamp,
        seconds=parse_duration_seconds(timestamp),
        views=to_int(views_text),
        views_text=views_text,
        ago=pick_text(renderer.get("publishedTimeText")),
        author=author,
        thumbnail=pick_best_thumbnail(dig(renderer, "thumbnail", "thumbnails")),
        live=is_live_renderer(renderer),
    )


def build_channel_record(renderer: Dict[str, Any]) -> Optional[ChannelRecord]:
    channel_id = _identifier(renderer, "channelId")
    if not channel_id:
        return None

    subscribers_text = pick_text(renderer.get("subscriberCountText"))
    return ChannelRecord(
        channel_id=channel_id,
        url=normalize_url(dig(renderer, *NAVIGATION_URL_PATH)) or channel_url(channel_id),
        name=pick_text(renderer.get("title")),
        description=pick_text(renderer.get("descriptionSnippet")),
        subscribers_text=subscribers_text,
        subscribers=parse_subscriber_count(subscribers_text),
        thumbnail=pick_best_thumbnail(dig(renderer, "thumbnail", "thumbnails")),
    )


def build_playlist_record(renderer: Dict[str, Any]) -> Optional[PlaylistRecord]:
    list_id = _identifier(renderer, "playlistId")
    if not list_id:
        return None

    video_count_text = pick_text(renderer.get("videoCountText"))
    author_name = pick_text(renderer.get("shortBylineText"))
    thumbnails = dig(renderer, "thumbnails", 0, "thumbnails") or dig(
        renderer, "thumbnail", "thumbnails"
    )
    return PlaylistRecord(
        list_id=list_id,
        url=normalize_url(dig(renderer, *NAVIGATION_URL_PATH)) or playlist_url(list_id),
        title=pick_text(renderer.get("title")),
        video_count_text=video_count_text,
        video_count=to_int(video_count_text),
        author=Author(name=author_name) if author_name else None,
        thumbnail=pick_best_thumbnail(thumbnails),
    )


def build_playlist_item(renderer: Dict[str, Any]) -> Optional[PlaylistItem]:
    video_id = _identifier(renderer, "videoId")
    if not video_id:
        return None

    timestamp = pick_text(renderer.get("lengthText"))
    author_name = pick_text(renderer.get("shortBylineText"))
    return PlaylistItem(
        video_id=video_id,
        url=watch_url(video_id),
        title=pick_text(renderer.get("title")),
        timestamp=timestamp,
        seconds=parse_duration_seconds(timestamp),
        author=Author(name=author_name) if author_name else None,
        thumbnail=pick_best_thumbnail(dig(renderer, "thumbnail", "thumbnails")),
    )
