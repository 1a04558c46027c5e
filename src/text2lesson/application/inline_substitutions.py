"""Inline item substitutions applied to rendered lesson HTML.

Items are written as `PREFIXword>class`, where both `word` and `>class` are
optional. An item only fires on a word boundary: it must follow the start of a
line, a space or the `>` closing an HTML tag, and be followed by whitespace,
one of `,;:.?!`, the end of a line or a closing tag. The supported items are:

- `...word` a missing word (fill-in-the-blank or ordering slot);
- `emoji:name` an emoji from the name table or `U+XXXX` code points;
- `meta:KEY` a value from the lesson metadata.

None of the items can fail the render: unknown emoji or metadata keys become
inline markers with an encoded `data-error` attribute.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from text2lesson.application.attribute_codec import encode_attribute, error_attribute_html
from text2lesson.application.emoji import get_emoji_html
from text2lesson.domain.metadata import Metadata

LOGGER = logging.getLogger(__name__)

MISSING_WORD_CLASS = "missing-word"
MISSING_WORD_ATTRIBUTE = "data-missing-word"

# Class names must be lowercase.
SAFE_CLASSES = frozenset({"big", "bigger", "biggest", "small", "smaller", "smallest"})

_ESCAPED_GREATER_THAN_RE = re.compile(r"\\>")


def item_pattern(prefix: str) -> re.Pattern[str]:
    """Compile the shared item expression for `prefix`.

    `prefix` is a regular expression fragment and must not contain capturing
    groups. Groups of the result: 1 the boundary character before the prefix,
    2 the optional word, 3 the optional class without its `>`.
    """
    start_capture = r"(^|[ >])"
    word_capture = r"((?:&#?[a-zA-Z0-9]+?;|[^\s<>])+?)?"
    class_capture = r"(?:>([a-zA-Z_]*))?"
    end_lookahead = r"(?=[\s,;:.?!]|$|</.+?>)"
    return re.compile(
        f"{start_capture}{prefix}{word_capture}{class_capture}{end_lookahead}",
        re.IGNORECASE | re.MULTILINE,
    )


MISSING_WORD_RE = item_pattern(r"[.]{3}")
EMOJI_RE = item_pattern("emoji:")
METADATA_RE = item_pattern("meta:")


@dataclass(frozen=True)
class InlineSubstitutionResult:
    """Substituted HTML and the missing words found, in document order."""

    html: str
    missing_words: tuple[str, ...]


def make_class_safe(requested_class: str | None) -> str:
    """Return the whitelisted class name, or an empty string if not allowed."""
    if not requested_class:
        return ""
    lowered = requested_class.lower()
    return lowered if lowered in SAFE_CLASSES else ""


def missing_word_html(word: str) -> str:
    return (
        f'<span class="{MISSING_WORD_CLASS}" '
        f'{MISSING_WORD_ATTRIBUTE}="{encode_attribute(word)}"></span>'
    )


def track_substitutions(html: str, metadata: Metadata | None = None) -> InlineSubstitutionResult:
    """Apply all inline items to `html` and collect the missing words."""
    html = _ESCAPED_GREATER_THAN_RE.sub("&gt;", html)
    missing_words = tuple(_word(match) for match in MISSING_WORD_RE.finditer(html))

    substitutions: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], str]], ...] = (
        (MISSING_WORD_RE, _replace_missing_word),
        (EMOJI_RE, _replace_emoji),
        (METADATA_RE, lambda match: _replace_metadata(match, metadata)),
    )
    for pattern, replacement in substitutions:
        html = pattern.sub(replacement, html)
    return InlineSubstitutionResult(html=html, missing_words=missing_words)


def _word(match: re.Match[str]) -> str:
    return match.group(2) or ""


def _replace_missing_word(match: re.Match[str]) -> str:
    return f"{match.group(1)}{missing_word_html(_word(match))}"


def _replace_emoji(match: re.Match[str]) -> str:
    classes = "emoji"
    safe_class = make_class_safe(match.group(3))
    if safe_class:
        classes = f"{classes} {safe_class}"
    return f'{match.group(1)}<span class="{classes}">{get_emoji_html(_word(match))}</span>'


def _replace_metadata(match: re.Match[str], metadata: Metadata | None) -> str:
    word = _word(match)
    value = metadata.get_value(word) if metadata is not None and word else None
    if not value:
        LOGGER.warning("event=metadata_key_missing key=%s", word)
        error_attribute = error_attribute_html(f"Cannot find metadata {word}")
        return f"{match.group(1)}<span {error_attribute}>{word}</span>"
    return f"{match.group(1)}{value}"
