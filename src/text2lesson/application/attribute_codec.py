"""Reversible, attribute-safe encoding for data carried in HTML attributes."""

from __future__ import annotations

import base64
import binascii
from urllib.parse import quote, unquote

# Characters left untouched by percent-encoding, matching URI component rules.
_UNRESERVED = "-_.!~*'()"


def encode_attribute(content: str) -> str:
    """Encode text so it can sit inside a double-quoted attribute value."""
    percent_encoded = quote(content, safe=_UNRESERVED)
    return base64.b64encode(percent_encoded.encode("ascii")).decode("ascii")


def decode_attribute(encoded: str) -> str:
    """Invert `encode_attribute`.

    Raises:
        ValueError: if `encoded` is not valid base64 content.
    """
    try:
        percent_encoded = base64.b64decode(encoded.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as exc:
        raise ValueError("Attribute value is not encoded content.") from exc
    return unquote(percent_encoded.decode("ascii"))


def error_attribute_html(message: str) -> str:
    """Return a `data-error` attribute carrying an encoded diagnostic message."""
    return f'data-error="{encode_attribute(message)}"'
