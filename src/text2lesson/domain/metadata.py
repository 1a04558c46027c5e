"""Lesson metadata: the `KEY: value` header block of a lesson."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Metadata:
    """Case-insensitive, read-only lookup of HTML-escaped metadata values."""

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {key.upper(): value for key, value in self.values.items()}
        object.__setattr__(self, "values", MappingProxyType(normalized))

    def get_value(self, key: str, default: str | None = None) -> str | None:
        """Return the value stored for `key` in any letter case, else `default`."""
        return self.values.get(key.upper(), default)

    def as_dict(self) -> dict[str, str]:
        return dict(self.values)

    def __len__(self) -> int:
        return len(self.values)
