"""Conversion between compiled lessons and the versioned JSON document."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from text2lesson.domain.compiled_lesson import (
    CompiledLessonV1,
    LessonSourceV1,
    ProblemV1,
    TextItemV1,
)
from text2lesson.domain.lesson import Lesson
from text2lesson.domain.lesson_import import CompiledLesson
from text2lesson.domain.problem import Problem
from text2lesson.domain.text_item import TextItem

LOGGER = logging.getLogger(__name__)


def text_item_to_document(item: TextItem) -> TextItemV1:
    return TextItemV1(
        html=item.html,
        plain_text=item.plain_text,
        missing_words=list(item.missing_words),
    )


def problem_to_document(problem: Problem) -> ProblemV1:
    return ProblemV1(
        question_type=problem.question_type,
        intro=text_item_to_document(problem.intro),
        question=text_item_to_document(problem.question),
        explanation=text_item_to_document(problem.explanation),
        right_answers=[text_item_to_document(answer) for answer in problem.right_answers],
        wrong_answers=[text_item_to_document(answer) for answer in problem.wrong_answers],
    )


def lesson_to_document(lesson: Lesson) -> CompiledLessonV1:
    """Export metadata and problems; playback state is not part of the document."""
    return CompiledLessonV1(
        metadata=lesson.metadata.as_dict(),
        problems=[problem_to_document(problem) for problem in lesson.problems],
    )


def compiled_lesson_to_document(compiled: CompiledLesson) -> CompiledLessonV1:
    """Export a compiled lesson including where its text came from."""
    document = lesson_to_document(compiled.lesson)
    document.source = LessonSourceV1(
        source_type=compiled.origin.source_type,
        filename=compiled.origin.filename,
        content_hash=compiled.content_hash,
        length=compiled.length,
        compiled_at=compiled.origin.compiled_at,
    )
    return document


def dump_lesson_document(document: CompiledLessonV1, *, indent: int | None = 2) -> str:
    return document.model_dump_json(indent=indent)


def load_lesson_document(json_text: str) -> CompiledLessonV1:
    """Parse and validate a lesson document.

    Raises:
        ValueError: when the text is not a valid `v1` lesson document.
    """
    try:
        return CompiledLessonV1.model_validate_json(json_text)
    except ValidationError as exc:
        LOGGER.warning("event=lesson_document_invalid errors_count=%s", exc.error_count())
        raise ValueError("Lesson document does not match schema v1.") from exc
