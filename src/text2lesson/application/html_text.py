"""HTML escaping and entity helpers shared by the renderer and metadata parser."""

from __future__ import annotations

import re

NUL_REPLACEMENT = "\ufffd"
AMPERSAND_PATTERN = r"&(?![\w#]+?;)"

_AMPERSAND_RE = re.compile(AMPERSAND_PATTERN)
_DECIMAL_ENTITY_RE = re.compile(r"&#([0-9]{1,7});")


def escape_html(text: str) -> str:
    """Escape `&` (unless already an entity) and every `<`. No Markdown is processed."""
    escaped = _AMPERSAND_RE.sub("&amp;", text.replace("\0", NUL_REPLACEMENT))
    return escaped.replace("<", "&lt;")


def encode_char_to_entity(char: str) -> str:
    """Return the decimal entity for the first character of `char`."""
    return f"&#{ord(char[0])};"


def encode_to_entities(text: str) -> str:
    return "".join(encode_char_to_entity(char) for char in text)


def decode_from_entities(text: str) -> str:
    """Decode decimal entities produced by `encode_to_entities`."""
    return _DECIMAL_ENTITY_RE.sub(_decode_entity, text)


def _decode_entity(match: re.Match[str]) -> str:
    code_point = int(match.group(1))
    if code_point > 0x10FFFF:
        return match.group(0)
    return chr(code_point)
