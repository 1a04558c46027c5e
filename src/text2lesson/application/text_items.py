"""Build `TextItem` values from lesson field source text."""

from __future__ import annotations

from text2lesson.application.inline_substitutions import track_substitutions
from text2lesson.application.markdown_lite import clean_up_html, render_markup
from text2lesson.domain.metadata import Metadata
from text2lesson.domain.text_item import TextItem


def create_text_item(source: str | None, metadata: Metadata | None = None) -> TextItem:
    """Render `source` and substitute inline items.

    Inline items are substituted after the Markdown rules and before the final
    clean up, so they only ever see escaped, block-tagged text. Empty source
    gives an empty item.
    """
    if not source:
        return TextItem()
    substituted = track_substitutions(render_markup(source), metadata)
    return TextItem(html=clean_up_html(substituted.html), missing_words=substituted.missing_words)
