"""Domain models for compiling lesson text from a file or pasted text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from text2lesson.domain.lesson import Lesson


class LessonSourceType(StrEnum):
    """Supported origins of lesson text."""

    TEXT_FILE = "text_file"
    PASTE = "paste"


@dataclass(frozen=True)
class LessonOrigin:
    """Where compiled lesson text came from."""

    source_type: LessonSourceType
    filename: str | None
    compiled_at: datetime


@dataclass(frozen=True)
class CompiledLesson:
    """Compiled lesson with deterministic metadata about its source text."""

    lesson: Lesson
    content_hash: str
    length: int
    origin: LessonOrigin
