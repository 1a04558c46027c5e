"""Tests for emoji HTML helpers."""

from __future__ import annotations

from text2lesson.application.emoji import get_emoji_html, lookup_emoji


def test_lookup_emoji_resolves_aliases_case_insensitively() -> None:
    assert lookup_emoji("happy") == "&#x1F600;"
    assert lookup_emoji("Alert") == "&#x26A0;&#xFE0F;"
    assert lookup_emoji("-(") == "&#x1F641;"
    assert lookup_emoji("unicorn") is None


def test_get_emoji_html_converts_code_points() -> None:
    assert get_emoji_html("U+1F600") == "&#x1F600;"
    assert get_emoji_html("u+1f44d") == "&#x1F44D;"


def test_get_emoji_html_returns_space_for_blank_definition() -> None:
    assert get_emoji_html("") == " "
    assert get_emoji_html(None) == " "


def test_get_emoji_html_wraps_unknown_names_in_error_span() -> None:
    html = get_emoji_html("unicorn")

    assert html.startswith('<span data-error="')
    assert html.endswith(">&#x2754;</span>")
