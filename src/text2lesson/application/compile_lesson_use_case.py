"""Application use-case for compiling lesson text into a playable lesson."""

from __future__ import annotations

import hashlib
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from text2lesson.application.errors import LessonCommandError
from text2lesson.application.lesson_source import LessonSource
from text2lesson.domain.lesson_import import CompiledLesson, LessonOrigin, LessonSourceType

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileLessonCommand:
    """Input contract for compiling text from a file or paste."""

    source_type: LessonSourceType
    content: str
    filename: str | None = None
    compiled_at: datetime | None = None


class CompileLessonUseCase:
    """Split, render and classify lesson text.

    Any lesson text is accepted; malformed markup degrades to metadata or
    plain paragraphs instead of failing.
    """

    def execute(self, command: CompileLessonCommand) -> CompiledLesson:
        """Compile command content and return the lesson with source metadata."""
        self._validate(command)
        correlation_id = str(uuid4())

        lesson_source = LessonSource.create_from_source(command.content)
        lesson = lesson_source.convert_to_lesson()

        compiled_at = command.compiled_at or datetime.now(tz=UTC)
        content_hash = hashlib.sha256(command.content.encode("utf-8")).hexdigest()
        result = CompiledLesson(
            lesson=lesson,
            content_hash=content_hash,
            length=len(command.content),
            origin=LessonOrigin(
                source_type=command.source_type,
                filename=command.filename,
                compiled_at=compiled_at,
            ),
        )

        type_counts = Counter(problem.question_type.value for problem in lesson.problems)
        LOGGER.info(
            (
                "event=lesson_compiled correlation_id=%s source_type=%s filename=%s "
                "content_hash=%s length=%s problems_count=%s question_types=%s"
            ),
            correlation_id,
            command.source_type.value,
            command.filename or "-",
            content_hash,
            result.length,
            len(lesson.problems),
            ",".join(f"{name}:{count}" for name, count in sorted(type_counts.items())) or "-",
        )
        if lesson.is_empty:
            LOGGER.warning(
                "event=lesson_empty correlation_id=%s source_type=%s filename=%s",
                correlation_id,
                command.source_type.value,
                command.filename or "-",
            )
        return result

    def _validate(self, command: CompileLessonCommand) -> None:
        if command.source_type is LessonSourceType.TEXT_FILE and not command.filename:
            raise LessonCommandError("Filename is required for text file lessons.")
