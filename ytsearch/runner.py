"""Background dispatch of search, video and playlist requests."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from . import youtube
from .aggregate import PlaylistResponse, SearchResponse, VideoDetail

logger = logging.getLogger(__name__)

Response = Union[SearchResponse, VideoDetail, PlaylistResponse]
Callback = Callable[[Optional[BaseException], Optional[Response]], None]


def _first(payload: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = payload.get(key)
        if value:
            return value
    return None


def _seconds(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return float(value)


@dataclass(frozen=True)
class SearchRequest:
    query: Optional[str] = None
    video_id: Optional[str] = None
    list_id: Optional[str] = None
    hl: Optional[str] = None
    gl: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "SearchRequest":
        if not isinstance(payload, dict):
            return cls()
        return cls(
            query=_first(payload, "query", "search", "q"),
            video_id=_first(payload, "videoId", "video_id"),
            list_id=_first(payload, "listId", "list_id"),
            hl=payload.get("hl"),
            gl=payload.get("gl"),
            timeout=_seconds(payload.get("timeout")),
        )

    @classmethod
    def from_input(cls, value: object) -> "SearchRequest":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(query=value)
        if isinstance(value, dict):
            return cls.from_payload(value)
        return cls()

    @property
    def kind(self) -> str:
        if self.video_id:
            return "video"
        if self.list_id:
            return "playlist"
        return "search"


class SearchRunner:
    """Runs requests on a thread pool and hands back futures."""

    def __init__(self, *, max_workers: int = 4):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ytsearch")
        self._lock = threading.Lock()
        self._closed = False

    def run(self, request: SearchRequest) -> Response:
        options = {"hl": request.hl, "gl": request.gl, "timeout": request.timeout}
        if request.video_id:
            return youtube.get_video(request.video_id, **options)
        if request.list_id:
            return youtube.get_playlist(request.list_id, **options)
        return youtube.search(request.query, **options)

    def submit(self, request: SearchRequest) -> "Future[Response]":
        with self._lock:
            if self._closed:
                raise RuntimeError("SearchRunner has been shut down")
            logger.debug("Queueing %s request", request.kind)
            return self._executor.submit(self.run, request)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=wait)


_DEFAULT_RUNNER: Optional[SearchRunner] = None
_DEFAULT_LOCK = threading.Lock()


def default_runner() -> SearchRunner:
    global _DEFAULT_RUNNER
    with _DEFAULT_LOCK:
        if _DEFAULT_RUNNER is None:
            _DEFAULT_RUNNER = SearchRunner()
        return _DEFAULT_RUNNER


def yt_search(
    value: object,
    callback: Optional[Callback] = None,
    *,
    runner: Optional[SearchRunner] = None,
) -> Optional["Future[Response]"]:
    """Start a request described by ``value``.

    ``value`` may be a query string, a mapping of options or a
    :class:`SearchRequest`. Without ``callback`` the pending future is
    returned. With one, ``callback(error, result)`` is invoked once the
    request settles and ``None`` is returned.
    """

    request = SearchRequest.from_input(value)
    future = (runner or default_runner()).submit(request)
    if callback is None:
        return future

    def _settle(done: "Future[Response]") -> None:
        error = done.exception()
        if error is not None:
            callback(error, None)
        else:
            callback(None, done.result())

    future.add_done_callback(_settle)
    return None
