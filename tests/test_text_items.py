"""Tests for TextItem creation and its derived views."""

from __future__ import annotations

from text2lesson.application.text_items import create_text_item
from text2lesson.domain.metadata import Metadata
from text2lesson.domain.text_item import TextItem


def test_create_text_item_returns_empty_item_for_empty_source() -> None:
    item = create_text_item("")

    assert item == TextItem()
    assert item.is_empty
    assert item.plain_text == ""
    assert item.first_word == ""


def test_create_text_item_tracks_missing_words_and_plain_text() -> None:
    item = create_text_item("Capital is ...Paris.")

    assert item.missing_words == ("Paris",)
    assert item.plain_text == "Capital is ...."
    assert item.first_word == "Capital"


def test_create_text_item_resolves_metadata() -> None:
    item = create_text_item("Welcome to meta:TITLE", Metadata({"TITLE": "Fractions"}))

    assert item.plain_text == "Welcome to Fractions"


def test_create_text_item_renders_markdown_before_substitutions() -> None:
    item = create_text_item("Some **Bold** ...word")

    assert "<strong>Bold</strong>" in item.html
    assert item.missing_words == ("word",)


def test_first_word_skips_leading_tags() -> None:
    item = TextItem(html="<p><strong>Answer</strong> text</p>")

    assert item.first_word == "Answer"


def test_create_text_item_keeps_icon_prefix_as_literal_text() -> None:
    item = create_text_item("See icon:house")

    assert item.plain_text == "See icon:house"
    assert "<i " not in item.html
