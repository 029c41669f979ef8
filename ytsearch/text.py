"""Scalar helpers shared by the renderer parsers."""
from __future__ import annotations

import re
from typing import Any, Optional

YOUTUBE_ORIGIN = "https://www.youtube.com"

WHITESPACE_RE = re.compile(r"\s+")
NON_DIGIT_RE = re.compile(r"[^\d]")
ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
DIGITS_RE = re.compile(r"\d+")


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return WHITESPACE_RE.sub(" ", str(value)).strip()


def to_int(value: Any) -> Optional[int]:
    """Keep only the digits of ``value``; ``None`` when there are none."""

    digits = NON_DIGIT_RE.sub("", clean_text(value))
    if not digits:
        return None
    return int(digits)


def normalize_url(value: Any) -> Optional[str]:
    candidate = clean_text(value)
    if not candidate:
        return None
    if ABSOLUTE_URL_RE.match(candidate):
        return candidate
    if candidate.startswith("//"):
        return f"https:{candidate}"
    if candidate.startswith("/"):
        return f"{YOUTUBE_ORIGIN}{candidate}"
    return candidate


def parse_duration_seconds(timestamp: Any) -> Optional[int]:
    text = clean_text(timestamp)
    if not text:
        return None
    seconds = 0
    for part in text.split(":"):
        part = part.strip()
        if not DIGITS_RE.fullmatch(part):
            return None
        seconds = seconds * 60 + int(part)
    return seconds


def format_timestamp(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    if seconds >= 3600:
        hours, minutes = divmod(minutes, 60)
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_subscriber_count(text: Any) -> Optional[int]:
    text = clean_text(text)
    text = re.sub(r"\s*subscribers?$", "", text, flags=re.IGNORECASE).strip()
    if not text:
        return None
    multiplier = 1
    if text[-1] in "Kk":
        multiplier = 1_000
        text = text[:-1]
    elif text[-1] in "Mm":
        multiplier = 1_000_000
        text = text[:-1]
    elif text[-1] in "Bb":
        multiplier = 1_000_000_000
        text = text[:-1]
    text = text.replace(",", "").strip()
    try:
        return int(float(text) * multiplier)
    except (OverflowError, ValueError):
        return None


def dig(node: Any, *path: Any) -> Any:
    """Follow ``path`` through dicts and lists, returning ``None`` on any miss."""

    current = node
    for step in path:
        if isinstance(current, dict):
            current = current.get(step)
        elif isinstance(current, list) and isinstance(step, int):
            if -len(current) <= step < len(current):
                current = current[step]
            else:
                return None
        else:
            return None
        if current is None:
            return None
    return current


def runs_text(runs: Any) -> str:
    if not isinstance(runs, list):
        return ""
    parts = []
    for run in runs:
        if isinstance(run, dict):
            parts.append(str(run.get("text") or ""))
    return clean_text("".join(parts))


def pick_text(node: Any) -> Optional[str]:
    """Resolve a text field: ``runs`` first, then ``simpleText``."""

    if not isinstance(node, dict):
        return None
    return runs_text(node.get("runs")) or clean_text(node.get("simpleText")) or None


def pick_best_thumbnail(thumbnails: Any) -> Optional[str]:
    # Candidates arrive ordered by ascending resolution.
    if not isinstance(thumbnails, list) or not thumbnails:
        return None
    return normalize_url(dig(thumbnails, -1, "url"))
