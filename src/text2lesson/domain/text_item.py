"""Rendered form of one lesson field (intro, question, answer or explanation)."""

from __future__ import annotations

import re
from dataclasses import dataclass

_MISSING_WORD_TAG_RE = re.compile(r"<(?:[^>]*missing-word[^>]*)>")
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_FIRST_WORD_RE = re.compile(r"^(?:\s|</?[^\r\n\f\t>]*>)*([^\s<]*)")


@dataclass(frozen=True)
class TextItem:
    """Sanitized HTML of a field plus the missing words captured from it."""

    html: str = ""
    missing_words: tuple[str, ...] = ()

    @property
    def plain_text(self) -> str:
        """HTML with tags removed, whitespace collapsed and missing words shown as `...`."""
        text = _MISSING_WORD_TAG_RE.sub("...", self.html)
        text = _TAG_RE.sub("", text)
        return _WHITESPACE_RE.sub(" ", text).strip()

    @property
    def first_word(self) -> str:
        """First token of the HTML ignoring any tags; empty if there is none."""
        match = _FIRST_WORD_RE.match(self.html)
        return match.group(1) if match else ""

    @property
    def is_empty(self) -> bool:
        return not self.html
