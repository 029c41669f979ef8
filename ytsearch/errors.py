"""Exceptions raised by the scraping layer."""
from __future__ import annotations

from typing import Optional, Sequence, Tuple


class YouTubeSearchError(RuntimeError):
    """Base class for failures surfaced to callers."""


class InvalidRequestError(YouTubeSearchError):
    """Raised when a request is missing its query, video id or list id."""


class FetchError(YouTubeSearchError):
    """Raised when YouTube cannot be reached or answers with a failing status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class JsonNotFoundError(YouTubeSearchError):
    """Raised when no embedded JSON payload could be located or decoded."""

    def __init__(
        self,
        markers: Sequence[str],
        *,
        marker_present: bool = False,
        page: Optional[str] = None,
    ):
        self.markers: Tuple[str, ...] = tuple(markers)
        self.marker_present = marker_present
        self.page = page
        super().__init__(self._describe())

    def _describe(self) -> str:
        target = self.markers[0] if self.markers else "embedded JSON"
        where = f" in {self.page} page" if self.page else ""
        if self.marker_present:
            return f"Found {target!r}{where} but the payload could not be decoded"
        return f"Unable to locate {target!r}{where} (possible block or consent page)"

    def with_page(self, page: str) -> "JsonNotFoundError":
        return JsonNotFoundError(self.markers, marker_present=self.marker_present, page=page)
