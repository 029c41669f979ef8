from __future__ import annotations

import json
from typing import Any, Dict

import pytest


def video_renderer(video_id: str = "abc123", **overrides: Any) -> Dict[str, Any]:
    renderer: Dict[str, Any] = {
        "videoId": video_id,
        "title": {"runs": [{"text": "Hello "}, {"text": "World"}]},
        "lengthText": {"simpleText": "4:05"},
        "viewCountText": {"simpleText": "1,234 views"},
        "publishedTimeText": {"simpleText": "2 days ago"},
        "ownerText": {
            "runs": [
                {
                    "text": "Some Channel",
                    "navigationEndpoint": {
                        "commandMetadata": {"webCommandMetadata": {"url": "/@somechannel"}},
                        "browseEndpoint": {"browseId": "UCabcdefghijklmnopqrstuv"},
                    },
                }
            ]
        },
        "thumbnail": {
            "thumbnails": [
                {"url": "https://i.ytimg.com/vi/abc123/default.jpg", "width": 120},
                {"url": "https://i.ytimg.com/vi/abc123/hq720.jpg", "width": 720},
            ]
        },
        "navigationEndpoint": {
            "commandMetadata": {"webCommandMetadata": {"url": f"/watch?v={video_id}"}}
        },
    }
    renderer.update(overrides)
    return renderer


def channel_renderer(channel_id: str = "UCabcdefghijklmnopqrstuv", **overrides: Any) -> Dict[str, Any]:
    renderer: Dict[str, Any] = {
        "channelId": channel_id,
        "title": {"simpleText": "Some Channel"},
        "descriptionSnippet": {"runs": [{"text": "Videos about "}, {"text": "things"}]},
        "subscriberCountText": {"simpleText": "1.2M subscribers"},
        "thumbnail": {"thumbnails": [{"url": "//yt3.ggpht.com/small"}, {"url": "//yt3.ggpht.com/big"}]},
        "navigationEndpoint": {
            "commandMetadata": {"webCommandMetadata": {"url": "/@somechannel"}}
        },
    }
    renderer.update(overrides)
    return renderer


def playlist_renderer(playlist_id: str = "PL123", **overrides: Any) -> Dict[str, Any]:
    renderer: Dict[str, Any] = {
        "playlistId": playlist_id,
        "title": {"simpleText": "Best Of"},
        "videoCountText": {"runs": [{"text": "42"}, {"text": " videos"}]},
        "shortBylineText": {"runs": [{"text": "Curator"}]},
        "thumbnails": [{"thumbnails": [{"url": "https://i.ytimg.com/a.jpg"}, {"url": "https://i.ytimg.com/b.jpg"}]}],
    }
    renderer.update(overrides)
    return renderer


def search_tree() -> Dict[str, Any]:
    live_badge = {"metadataBadgeRenderer": {"label": "LIVE"}}
    return {
        "contents": {
            "twoColumnSearchResultsRenderer": {
                "primaryContents": {
                    "sectionListRenderer": {
                        "contents": [
                            {
                                "itemSectionRenderer": {
                                    "contents": [
                                        {"videoRenderer": video_renderer("vid1")},
                                        {"channelRenderer": channel_renderer()},
                                        {"videoRenderer": video_renderer("live1", badges=[live_badge])},
                                        {"playlistRenderer": playlist_renderer()},
                                        {"videoRenderer": video_renderer("")},
                                        {"channelRenderer": channel_renderer("")},
                                        {"playlistRenderer": {"title": {"simpleText": "no id"}}},
                                        {"videoRenderer": video_renderer("vid2")},
                                    ]
                                }
                            },
                            {
                                "continuationItemRenderer": {
                                    "continuationEndpoint": {
                                        "continuationCommand": {"token": "NEXT_PAGE"}
                                    }
                                }
                            },
                        ]
                    }
                }
            }
        }
    }


def playlist_tree() -> Dict[str, Any]:
    def item(video_id: str, title: str) -> Dict[str, Any]:
        return {
            "playlistVideoRenderer": {
                "videoId": video_id,
                "title": {"runs": [{"text": title}]},
                "lengthText": {"simpleText": "1:02:05"},
                "shortBylineText": {"runs": [{"text": "Uploader"}]},
                "thumbnail": {"thumbnails": [{"url": "https://i.ytimg.com/1.jpg"}, {"url": "https://i.ytimg.com/2.jpg"}]},
            }
        }

    return {
        "header": {
            "playlistHeaderRenderer": {
                "playlistId": "PL123",
                "title": {"simpleText": "My Mix"},
                "ownerText": {"runs": [{"text": "Owner Name"}]},
                "ownerEndpoint": {"browseEndpoint": {"browseId": "UCowner"}},
            }
        },
        "contents": [
            item("v1", "First"),
            item("v2", "Second"),
            {"playlistVideoRenderer": {"title": {"simpleText": "Deleted video"}}},
        ],
        "sidebar": {"playlistHeaderRenderer": {"title": {"simpleText": "Ignored"}}},
    }


def player_response() -> Dict[str, Any]:
    return {
        "videoDetails": {
            "videoId": "abc123",
            "title": "A  Title",
            "lengthSeconds": "3725",
            "keywords": ["music", "test"],
            "channelId": "UCabcdefghijklmnopqrstuv",
            "shortDescription": "Line one\nLine two",
            "thumbnail": {"thumbnails": [{"url": "https://i.ytimg.com/s.jpg"}, {"url": "https://i.ytimg.com/l.jpg"}]},
            "viewCount": "1000000",
            "author": "Some Channel",
            "defaultAudioLanguage": "en-US",
        },
        "microformat": {
            "playerMicroformatRenderer": {
                "publishDate": "2021-06-15",
                "uploadDate": "2021-06-14",
            }
        },
    }


def wrap_html(marker: str, payload: Dict[str, Any]) -> str:
    return (
        "<!DOCTYPE html><html><head><title>YouTube</title></head><body>"
        f"<script nonce=\"x\">{marker} {json.dumps(payload)};</script>"
        "</body></html>"
    )


@pytest.fixture
def search_html() -> str:
    return wrap_html("var ytInitialData =", search_tree())


@pytest.fixture
def playlist_html() -> str:
    return wrap_html('window["ytInitialData"] =', playlist_tree())


@pytest.fixture
def watch_html() -> str:
    return wrap_html("var ytInitialPlayerResponse =", player_response())
