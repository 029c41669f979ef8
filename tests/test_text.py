from __future__ import annotations

import pytest

from ytsearch.text import (
    clean_text,
    dig,
    format_timestamp,
    normalize_url,
    parse_duration_seconds,
    parse_subscriber_count,
    pick_best_thumbnail,
    pick_text,
    to_int,
)


def test_clean_text_collapses_whitespace() -> None:
    assert clean_text("  Hello \n\t  World  ") == "Hello World"
    assert clean_text(None) == ""
    assert clean_text(42) == "42"


def test_to_int_strips_non_digits() -> None:
    assert to_int("1,234 views") == 1234
    assert to_int("No views") is None
    assert to_int("") is None
    assert to_int(None) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("/watch?v=xyz", "https://www.youtube.com/watch?v=xyz"),
        ("//i.ytimg.com/x.jpg", "https://i.ytimg.com/x.jpg"),
        ("https://example.com/a", "https://example.com/a"),
        ("HTTP://example.com/a", "HTTP://example.com/a"),
        ("", None),
        (None, None),
    ],
)
def test_normalize_url(raw, expected) -> None:
    assert normalize_url(raw) == expected


def test_duration_parsing_and_formatting_agree() -> None:
    assert format_timestamp(125) == "2:05"
    assert format_timestamp(3725) == "1:02:05"
    assert parse_duration_seconds("2:05") == 125
    assert parse_duration_seconds("1:02:05") == 3725
    assert format_timestamp(0) == "0:00"
    assert format_timestamp(3600) == "1:00:00"


def test_malformed_duration_is_none() -> None:
    assert parse_duration_seconds("LIVE") is None
    assert parse_duration_seconds("1::2") is None
    assert parse_duration_seconds("") is None


def test_thumbnail_selection_is_positional() -> None:
    thumbnails = [{"url": "a", "width": 50}, {"url": "b", "width": 200}]
    assert pick_best_thumbnail(thumbnails) == "b"
    reversed_sizes = [{"url": "//i.ytimg.com/big.jpg", "width": 900}, {"url": "/small.jpg", "width": 10}]
    assert pick_best_thumbnail(reversed_sizes) == "https://www.youtube.com/small.jpg"
    assert pick_best_thumbnail([]) is None
    assert pick_best_thumbnail(None) is None


def test_pick_text_prefers_runs() -> None:
    assert pick_text({"runs": [{"text": "Hello "}, {"text": "World"}], "simpleText": "x"}) == "Hello World"
    assert pick_text({"simpleText": "  plain  text "}) == "plain text"
    assert pick_text({"runs": []}) is None
    assert pick_text(None) is None


def test_dig_returns_none_for_missing_steps() -> None:
    tree = {"a": [{"b": "c"}]}
    assert dig(tree, "a", 0, "b") == "c"
    assert dig(tree, "a", 3, "b") is None
    assert dig(tree, "x", "y") is None
    assert dig("scalar", "a") is None


def test_parse_subscriber_count() -> None:
    assert parse_subscriber_count("1.2M subscribers") == 1_200_000
    assert parse_subscriber_count("2.5K") == 2_500
    assert parse_subscriber_count("987 subscribers") == 987
    assert parse_subscriber_count("@somehandle") is None
    assert parse_subscriber_count(None) is None


def test_parse_subscriber_count_overflow_is_none() -> None:
    assert parse_subscriber_count("1e400") is None
    assert parse_subscriber_count("1e400K subscribers") is None
