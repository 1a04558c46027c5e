"""Emoji name table and HTML conversion for `emoji:` codes."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType

from text2lesson.application.attribute_codec import error_attribute_html

LOGGER = logging.getLogger(__name__)

ALIAS_MARKER = "@"
UNKNOWN_EMOJI_NAME = "WHITE-QUESTION-MARK"

# Values starting with ALIAS_MARKER refer to another entry; one level only.
PREDEFINED_EMOJIS = MappingProxyType(
    {
        "GRINNING": "&#x1F600;",
        ")": "@GRINNING",
        "-)": "@GRINNING",
        "SMILEY": "@GRINNING",
        "SMILING": "@GRINNING",
        "HAPPY": "@GRINNING",
        "WORRIED": "&#x1F61F;",
        "SAD": "@WORRIED",
        "LAUGHING": "&#x1F602;",
        "LAUGH": "@LAUGHING",
        "CRYING": "&#x1F622;",
        "TEAR": "@CRYING",
        "FROWNING": "&#x1F641;",
        "(": "@FROWNING",
        "-(": "@FROWNING",
        "NEUTRAL": "&#x1F610;",
        "ANGRY": "&#x1F620;",
        "GRUMPY": "@ANGRY",
        "WINK": "&#x1F609;",
        "WINKY": "@WINK",
        "WINKING": "@WINK",
        "WARNING": "&#x26A0;&#xFE0F;",
        "ALERT": "@WARNING",
        "ERROR": "@WARNING",
        UNKNOWN_EMOJI_NAME: "&#x2754;",
    }
)

_CODE_POINT_RE = re.compile(r"U\+([A-F0-9]+)")


def lookup_emoji(name: str) -> str | None:
    """Return the entity markup for a table name, following one alias level."""
    code = PREDEFINED_EMOJIS.get(name.upper())
    if code is not None and code.startswith(ALIAS_MARKER):
        code = PREDEFINED_EMOJIS.get(code[len(ALIAS_MARKER) :])
    return code


def get_emoji_html(definition: str | None) -> str:
    """Convert an emoji name or `U+XXXX` sequence into HTML.

    Unknown names give a visible question-mark glyph wrapped in a span whose
    `data-error` attribute carries the diagnostic.
    """
    if not definition:
        LOGGER.info("event=emoji_blank")
        return " "

    upper_definition = definition.upper()
    if upper_definition.startswith("U+"):
        return _CODE_POINT_RE.sub(r"&#x\1;", upper_definition)

    code = lookup_emoji(upper_definition)
    if code is None:
        LOGGER.warning("event=emoji_unknown name=%s", definition)
        error_attribute = error_attribute_html(f"Cannot find emoji {definition}")
        return f"<span {error_attribute}>{PREDEFINED_EMOJIS[UNKNOWN_EMOJI_NAME]}</span>"
    return code
