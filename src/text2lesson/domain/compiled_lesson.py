"""Versioned JSON schema for compiled lessons."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from text2lesson.domain.lesson_import import LessonSourceType
from text2lesson.domain.problem import QuestionType


class TextItemV1(BaseModel):
    """Rendered field; HTML is kept byte for byte so whitespace is not stripped."""

    model_config = ConfigDict(extra="forbid")

    html: str = ""
    plain_text: str = ""
    missing_words: list[str] = Field(default_factory=list)


class ProblemV1(BaseModel):
    """One problem with its derived question type."""

    model_config = ConfigDict(extra="forbid")

    question_type: QuestionType
    intro: TextItemV1 = Field(default_factory=TextItemV1)
    question: TextItemV1 = Field(default_factory=TextItemV1)
    explanation: TextItemV1 = Field(default_factory=TextItemV1)
    right_answers: list[TextItemV1] = Field(default_factory=list)
    wrong_answers: list[TextItemV1] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_question_type_matches_content(self) -> ProblemV1:
        missing_words = self.question.missing_words
        if self.question_type is QuestionType.ORDER:
            if len(missing_words) != 1 or missing_words[0]:
                raise ValueError("Order problems need exactly one empty missing word.")
        elif self.question_type is QuestionType.FILL:
            if not missing_words or not all(missing_words):
                raise ValueError("Fill problems need missing words with content.")
        elif self.question_type is QuestionType.MULTI:
            if len(self.right_answers) < 2:
                raise ValueError("Multi problems need more than one right answer.")
        elif self.question_type is QuestionType.SIMPLE:
            if len(self.right_answers) != 1:
                raise ValueError("Simple problems need exactly one right answer.")

        return self


class LessonSourceV1(BaseModel):
    """Where the compiled text came from."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    source_type: LessonSourceType
    filename: str | None = None
    content_hash: str = Field(min_length=64, max_length=64)
    length: int = Field(ge=0)
    compiled_at: datetime


class CompiledLessonV1(BaseModel):
    """Strict schema for an exported lesson document."""

    model_config = ConfigDict(extra="forbid")

    schema_version: Literal["v1"] = "v1"
    metadata: dict[str, str] = Field(default_factory=dict)
    problems: list[ProblemV1] = Field(default_factory=list)
    source: LessonSourceV1 | None = None

    @model_validator(mode="after")
    def validate_metadata_keys_are_upper_case(self) -> CompiledLessonV1:
        if any(key != key.upper() for key in self.metadata):
            raise ValueError("Metadata keys must be upper case.")

        return self
