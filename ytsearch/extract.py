"""Locate and decode the JSON payloads YouTube embeds in its HTML pages."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .errors import JsonNotFoundError

logger = logging.getLogger(__name__)

INITIAL_DATA_MARKERS = (
    "var ytInitialData =",
    'window["ytInitialData"] =',
    "ytInitialData =",
)
PLAYER_RESPONSE_MARKERS = (
    "var ytInitialPlayerResponse =",
    'window["ytInitialPlayerResponse"] =',
    "ytInitialPlayerResponse =",
)

# Only a backslash that is not itself escaped starts an \xHH sequence.
HEX_ESCAPE_RE = re.compile(r"(?<!\\)((?:\\\\)*)\\x([0-9a-fA-F]{2})")


def scan_balanced_object(document: str, start: int = 0) -> Optional[Tuple[str, int]]:
    """Return the first balanced ``{...}`` at or after ``start``.

    The result is the object text together with the index just past its
    closing brace. Braces inside single or double quoted strings are
    ignored and a backslash escapes exactly one character. ``None`` is
    returned when no opening brace exists or the braces never balance.
    """

    begin = document.find("{", max(start, 0))
    if begin == -1:
        return None

    depth = 0
    quote = ""
    escape = False

    for index in range(begin, len(document)):
        ch = document[index]

        if quote:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == quote:
                quote = ""
            continue

        if ch == '"' or ch == "'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return document[begin : index + 1], index + 1

    return None


def repair_hex_escapes(raw: str) -> str:
    return HEX_ESCAPE_RE.sub(lambda match: match.group(1) + chr(int(match.group(2), 16)), raw)


def decode_json_object(raw: str) -> Optional[Dict[str, Any]]:
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Strict decode failed, retrying with \\xHH escapes repaired")
        try:
            payload = json.loads(repair_hex_escapes(raw))
        except ValueError:
            return None
    if not isinstance(payload, dict):
        return None
    return payload


def extract_named_json(document: str, markers: Sequence[str]) -> Dict[str, Any]:
    """Decode the object assigned after the first usable marker.

    Markers are tried in order. A marker that is missing, or whose object
    cannot be scanned or decoded, hands over to the next one. Raises
    :class:`JsonNotFoundError` when none of them yields a payload.
    """

    marker_present = False
    for marker in markers:
        position = document.find(marker)
        if position == -1:
            continue
        marker_present = True
        scanned = scan_balanced_object(document, position + len(marker))
        if scanned is None:
            logger.debug("Marker %r found at %d but no balanced object follows", marker, position)
            continue
        payload = decode_json_object(scanned[0])
        if payload is None:
            logger.debug("Marker %r found at %d but its object did not decode", marker, position)
            continue
        logger.debug("Decoded %d characters after marker %r", len(scanned[0]), marker)
        return payload

    logger.warning(
        "No decodable payload for markers %s (marker present: %s)", list(markers), marker_present
    )
    raise JsonNotFoundError(markers, marker_present=marker_present)


def walk_tree(tree: Any, visit: Callable[[Dict[str, Any]], None]) -> None:
    """Call ``visit`` on every dict in ``tree``, parents before children."""

    stack: List[Any] = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            visit(node)
            children = list(node.values())
        elif isinstance(node, list):
            children = node
        else:
            continue
        stack.extend(reversed(children))
