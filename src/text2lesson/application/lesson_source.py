"""Split raw lesson text into metadata and per-problem source blocks.

A lesson is line oriented. A key line starts with up to three decorative
characters (`-`, `#`, `_`, `*` or space), then a key character, optionally
repeated and wrapped in brackets, for example `(?)`, `((=))` or `## i `.
Everything after the key belongs to that field, as do the following lines up
to the next key line. Lines before the first key line are lesson metadata.

Only `x` may also be written in upper case, so a line such as `I think so`
stays ordinary text.

| key | field             |
|-----|-------------------|
| `i` | intro             |
| `?` | question          |
| `=` | right answer      |
| `x` | wrong answer      |
| `&` | explanation       |
| `_` | question break    |
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum

from text2lesson.application.metadata_parser import parse_metadata
from text2lesson.application.text_items import create_text_item
from text2lesson.domain.lesson import Lesson
from text2lesson.domain.problem import Problem

LOGGER = logging.getLogger(__name__)

_LINE_SPLIT_RE = re.compile(r"\r\n|\n")
_KEY_LINE_RE = re.compile(r"^[-#_* ]{0,3}(?:\(*([i?=xX&_])\1*[_) ]+)(.*)$")


class ProblemItemKey(StrEnum):
    """Key characters, lower case, that start each problem field."""

    INTRO = "i"
    QUESTION = "?"
    RIGHT_ANSWER = "="
    WRONG_ANSWER = "x"
    EXPLANATION = "&"
    QUESTION_BREAK = "_"


@dataclass(frozen=True)
class LineDetails:
    """Key found on a line, if any, and the content that follows it."""

    key: ProblemItemKey | None
    content: str


@dataclass
class ProblemSource:
    """Raw, unrendered text of one problem."""

    intro_source: str = ""
    question_source: str = ""
    explanation_source: str = ""
    right_answer_sources: list[str] = field(default_factory=list)
    wrong_answer_sources: list[str] = field(default_factory=list)

    def add_right_answer_source(self, data: str) -> None:
        self.right_answer_sources.append(data)

    def add_wrong_answer_source(self, data: str) -> None:
        self.wrong_answer_sources.append(data)


@dataclass
class LessonSource:
    """Metadata text and problem sources split out of one lesson document."""

    meta_source: str = ""
    problem_sources: list[ProblemSource] = field(default_factory=list)

    @classmethod
    def create_from_source(cls, source: str | None) -> LessonSource:
        return split_lesson_source(source)

    def convert_to_lesson(self) -> Lesson:
        return convert_to_lesson(self)


def get_line_details(line: str) -> LineDetails:
    """Return the key and following content; lines without a key keep all text."""
    match = _KEY_LINE_RE.match(line)
    if not match:
        return LineDetails(key=None, content=line)
    return LineDetails(key=ProblemItemKey(match.group(1).lower()), content=match.group(2))


def is_new_problem(
    last_key: ProblemItemKey | None,
    new_key: ProblemItemKey,
    current_problem: ProblemSource,
) -> bool:
    """Decide whether `new_key` starts a new problem.

    Any key after a question break starts a new problem. Otherwise only an
    intro or question key does, and only when that field is already filled.
    """
    if last_key is ProblemItemKey.QUESTION_BREAK:
        return True
    if new_key is ProblemItemKey.INTRO:
        return bool(current_problem.intro_source)
    if new_key is ProblemItemKey.QUESTION:
        return bool(current_problem.question_source)
    return False


class _LessonSourceBuilder:
    """Line-by-line state machine used by `split_lesson_source`."""

    def __init__(self) -> None:
        self.lesson_source = LessonSource()
        self._problem: ProblemSource | None = None
        self._current_key: ProblemItemKey | None = None
        self._data = ""

    @property
    def found_key(self) -> bool:
        return self._current_key is not None

    def add_line(self, line: str) -> None:
        details = get_line_details(line)
        if details.key is None:
            self._data += f"{details.content}\n"
            return

        self._flush()
        self._data = f"{details.content}\n" if details.content else ""
        if self._problem is None or is_new_problem(
            self._current_key, details.key, self._problem
        ):
            self._problem = ProblemSource()
            self.lesson_source.problem_sources.append(self._problem)
        self._current_key = details.key

    def finish(self) -> LessonSource:
        if self._data:
            self._flush()
        return self.lesson_source

    def _flush(self) -> None:
        data = self._data
        problem = self._problem
        key = self._current_key
        if key is None or problem is None:
            self.lesson_source.meta_source = data
        elif key is ProblemItemKey.INTRO:
            problem.intro_source = data
        elif key is ProblemItemKey.QUESTION:
            problem.question_source = data
        elif key is ProblemItemKey.RIGHT_ANSWER:
            problem.add_right_answer_source(data)
        elif key is ProblemItemKey.WRONG_ANSWER:
            problem.add_wrong_answer_source(data)
        elif key is ProblemItemKey.EXPLANATION:
            problem.explanation_source = data
        # Text following a question break is discarded.


def split_lesson_source(source: str | None) -> LessonSource:
    """Split a lesson document into a `LessonSource`. Never raises.

    A document without any key line becomes metadata only, with no problems.
    """
    text = source or ""
    builder = _LessonSourceBuilder()
    for line in _LINE_SPLIT_RE.split(text):
        builder.add_line(line)
    lesson_source = builder.finish()
    if not builder.found_key:
        lesson_source.meta_source = text
    return lesson_source


def convert_to_lesson(lesson_source: LessonSource) -> Lesson:
    """Render every field and assemble the `Lesson`.

    Metadata is parsed first so `meta:` items in any field can be resolved.
    """
    metadata = parse_metadata(lesson_source.meta_source)
    problems = [
        Problem(
            intro=create_text_item(problem_source.intro_source, metadata),
            question=create_text_item(problem_source.question_source, metadata),
            explanation=create_text_item(problem_source.explanation_source, metadata),
            right_answers=tuple(
                create_text_item(answer, metadata)
                for answer in problem_source.right_answer_sources
            ),
            wrong_answers=tuple(
                create_text_item(answer, metadata)
                for answer in problem_source.wrong_answer_sources
            ),
        )
        for problem_source in lesson_source.problem_sources
    ]
    LOGGER.debug(
        "event=lesson_converted metadata_keys=%s problems_count=%s",
        len(metadata),
        len(problems),
    )
    return Lesson(metadata=metadata, problems=problems)
