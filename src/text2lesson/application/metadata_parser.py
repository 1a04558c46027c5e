"""Parse the metadata header block of a lesson."""

from __future__ import annotations

import re

from text2lesson.application.html_text import escape_html
from text2lesson.domain.metadata import Metadata

# KEY, one of `:;.` optionally followed by `-`, then the value.
_METADATA_LINE_RE = re.compile(r"^\s*(\w+)\s*[:;.]-?\s*(.*?)\s*$", re.ASCII)


def parse_metadata(source: str | None) -> Metadata:
    """Build `Metadata` from `KEY: value` lines.

    Keys are upper-cased and values HTML-escaped. A repeated key keeps the
    last value. Lines that do not match are ignored, so any input is accepted.
    """
    values: dict[str, str] = {}
    for line in (source or "").split("\n"):
        match = _METADATA_LINE_RE.match(line)
        if match:
            values[match.group(1).upper()] = escape_html(match.group(2))
    return Metadata(values)
