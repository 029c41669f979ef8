"""Fetch YouTube pages and turn them into search, video and playlist responses."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Dict, Optional, Sequence

import requests

from .aggregate import (
    PlaylistResponse,
    SearchResponse,
    VideoDetail,
    aggregate_playlist_contents,
    aggregate_search_results,
    build_video_details,
)
from .errors import FetchError, InvalidRequestError, JsonNotFoundError
from .extract import INITIAL_DATA_MARKERS, PLAYER_RESPONSE_MARKERS, extract_named_json
from .text import YOUTUBE_ORIGIN, clean_text

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_TIMEOUT = 45
DEFAULT_HL = "en"
DEFAULT_GL = "US"

SESSION = requests.Session()
SESSION.max_redirects = 5
SESSION.headers.update(
    {
        "User-Agent": USER_AGENT,
        "Accept-Language": "en-US,en;q=0.9",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        # Skips the EU consent interstitial.
        "Cookie": "CONSENT=YES+1; GPS=1;",
    }
)


class RateLimiter:
    """Hands out fetch slots at least ``min_interval`` seconds apart.

    Slots are reserved under the lock; the sleep happens outside it.
    """

    def __init__(self, min_interval: float):
        self.min_interval = min_interval
        self._lock = threading.Lock()
        self._next_slot = 0.0

    def wait(self) -> None:
        with self._lock:
            now = time.monotonic()
            delay = max(0.0, self._next_slot - now)
            self._next_slot = max(now, self._next_slot) + self.min_interval
        if delay > 0:
            time.sleep(delay)


FETCH_INTERVAL = 0.5
RATE_LIMITER = RateLimiter(min_interval=FETCH_INTERVAL)


def http_get(url: str, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None) -> str:
    """Return the body of ``url`` for any status in [200, 400)."""

    RATE_LIMITER.wait()
    try:
        response = SESSION.get(
            url,
            params=params,
            timeout=timeout or DEFAULT_TIMEOUT,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        raise FetchError(f"Failed to load {url}: {exc}") from exc

    status = response.status_code
    logger.info("GET %s -> %s", url, status)
    if status < 200 or status >= 400:
        raise FetchError(f"YouTube HTTP {status}", status_code=status)
    return response.text or ""


def _locale(hl: Optional[str], gl: Optional[str]) -> Dict[str, str]:
    return {"hl": clean_text(hl) or DEFAULT_HL, "gl": clean_text(gl) or DEFAULT_GL}


def _extract(html_text: str, markers: Sequence[str], page: str) -> Dict[str, Any]:
    try:
        return extract_named_json(html_text, markers)
    except JsonNotFoundError as exc:
        raise exc.with_page(page) from None


def search(
    query: Optional[str],
    *,
    hl: Optional[str] = None,
    gl: Optional[str] = None,
    timeout: Optional[float] = None,
) -> SearchResponse:
    q = clean_text(query)
    if not q:
        raise InvalidRequestError("Missing search query")

    params = {"search_query": q, **_locale(hl, gl)}
    html_text = http_get(f"{YOUTUBE_ORIGIN}/results", params=params, timeout=timeout)
    initial_data = _extract(html_text, INITIAL_DATA_MARKERS, "search")
    return aggregate_search_results(initial_data, q)


def get_video(
    video_id: Optional[str],
    *,
    hl: Optional[str] = None,
    gl: Optional[str] = None,
    timeout: Optional[float] = None,
) -> VideoDetail:
    vid = clean_text(video_id)
    if not vid:
        raise InvalidRequestError("Missing video id")

    params = {"v": vid, **_locale(hl, gl)}
    html_text = http_get(f"{YOUTUBE_ORIGIN}/watch", params=params, timeout=timeout)
    player = _extract(html_text, PLAYER_RESPONSE_MARKERS, "video")
    return build_video_details(player.get("videoDetails"), player.get("microformat"), video_id=vid)


def get_playlist(
    list_id: Optional[str],
    *,
    hl: Optional[str] = None,
    gl: Optional[str] = None,
    timeout: Optional[float] = None,
) -> PlaylistResponse:
    pid = clean_text(list_id)
    if not pid:
        raise InvalidRequestError("Missing playlist id")

    params = {"list": pid, **_locale(hl, gl)}
    html_text = http_get(f"{YOUTUBE_ORIGIN}/playlist", params=params, timeout=timeout)
    initial_data = _extract(html_text, INITIAL_DATA_MARKERS, "playlist")
    return aggregate_playlist_contents(initial_data, list_id=pid)
