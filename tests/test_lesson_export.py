"""Tests for the versioned lesson document schema and export."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from text2lesson.application.compile_lesson_use_case import (
    CompileLessonCommand,
    CompileLessonUseCase,
)
from text2lesson.application.lesson_export import (
    compiled_lesson_to_document,
    dump_lesson_document,
    lesson_to_document,
    load_lesson_document,
)
from text2lesson.application.lesson_source import LessonSource
from text2lesson.domain.compiled_lesson import CompiledLessonV1, ProblemV1, TextItemV1
from text2lesson.domain.lesson_import import LessonSourceType
from text2lesson.domain.problem import QuestionType


def test_lesson_to_document_exports_metadata_and_problems(sample_lesson_text: str) -> None:
    lesson = LessonSource.create_from_source(sample_lesson_text).convert_to_lesson()

    document = lesson_to_document(lesson)

    assert document.schema_version == "v1"
    assert document.metadata == {"TITLE": "Fractions", "AUTHOR": "Ann &amp; Bob"}
    assert [problem.question_type for problem in document.problems] == [
        QuestionType.SIMPLE,
        QuestionType.MULTI,
        QuestionType.FILL,
        QuestionType.ORDER,
        QuestionType.SLIDE,
    ]
    assert document.problems[2].question.missing_words == ["Paris"]
    assert document.problems[0].right_answers[0].plain_text == "3/4"
    assert document.source is None


def test_compiled_lesson_document_round_trips_through_json(sample_lesson_text: str) -> None:
    compiled = CompileLessonUseCase().execute(
        CompileLessonCommand(
            source_type=LessonSourceType.TEXT_FILE,
            content=sample_lesson_text,
            filename="fractions.txt",
            compiled_at=datetime(2024, 5, 1, tzinfo=UTC),
        )
    )
    document = compiled_lesson_to_document(compiled)

    loaded = load_lesson_document(dump_lesson_document(document))

    assert loaded == document
    assert loaded.source is not None
    assert loaded.source.filename == "fractions.txt"
    assert loaded.source.content_hash == compiled.content_hash


def test_load_lesson_document_rejects_other_versions() -> None:
    with pytest.raises(ValueError, match="schema v1"):
        load_lesson_document('{"schema_version": "v2"}')


def test_load_lesson_document_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="schema v1"):
        load_lesson_document('{"schema_version": "v1", "problems": [], "extra": 1}')


def test_problem_schema_rejects_fill_without_words() -> None:
    with pytest.raises(ValidationError, match="Fill problems"):
        ProblemV1(
            question_type=QuestionType.FILL,
            question=TextItemV1(html="<p>x</p>", missing_words=[""]),
        )


def test_problem_schema_rejects_simple_with_two_answers() -> None:
    with pytest.raises(ValidationError, match="exactly one right answer"):
        ProblemV1(
            question_type=QuestionType.SIMPLE,
            right_answers=[TextItemV1(html="a"), TextItemV1(html="b")],
        )


def test_lesson_schema_rejects_lower_case_metadata_keys() -> None:
    with pytest.raises(ValidationError, match="upper case"):
        CompiledLessonV1(metadata={"title": "x"})
