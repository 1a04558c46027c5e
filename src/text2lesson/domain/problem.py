"""Problems and the derivation of their question type."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from text2lesson.domain.text_item import TextItem

# Missing-word placeholder that is the last content of the HTML, allowing for
# any number of trailing closing paragraph tags.
_MISSING_WORD_AT_END_RE = re.compile(
    r'<span +class *= *"missing-word"[^>]*></span>(?:\s*</p>\s*)*\Z'
)


class QuestionType(StrEnum):
    """Interaction style of a problem, derived from its content."""

    SIMPLE = "simple"
    MULTI = "multi"
    FILL = "fill"
    ORDER = "order"
    SLIDE = "slide"


def classify_problem(
    question: TextItem | None,
    right_answers: Sequence[TextItem],
    wrong_answers: Sequence[TextItem] = (),
) -> QuestionType:
    """Derive the question type using a fixed priority order.

    - order: exactly one missing word, with no content, at the very end of
      the question; answers are selected onto a separate line;
    - fill: one or more missing words, all with content; wrong answers act
      as red herrings and right answers are ignored;
    - multi: more than one right answer;
    - simple: exactly one right answer;
    - slide: nothing to answer.

    A problem without question HTML is always a slide, whatever its answers.
    Wrong answers never change the type; they are accepted so callers can
    pass the full problem state.
    """
    if question is None or not question.html:
        return QuestionType.SLIDE
    if _is_order_question(question):
        return QuestionType.ORDER
    if _is_fill_question(question):
        return QuestionType.FILL
    if len(right_answers) > 1:
        return QuestionType.MULTI
    if len(right_answers) == 1:
        return QuestionType.SIMPLE
    return QuestionType.SLIDE


def _is_order_question(question: TextItem) -> bool:
    return (
        len(question.missing_words) == 1
        and not question.missing_words[0]
        and _MISSING_WORD_AT_END_RE.search(question.html.rstrip()) is not None
    )


def _is_fill_question(question: TextItem) -> bool:
    return bool(question.missing_words) and all(question.missing_words)


@dataclass(frozen=True)
class Problem:
    """One question or slide of a lesson.

    `question_type` is computed from the other fields when the problem is
    built and cannot be supplied or reassigned.
    """

    intro: TextItem = field(default_factory=TextItem)
    question: TextItem = field(default_factory=TextItem)
    explanation: TextItem = field(default_factory=TextItem)
    right_answers: tuple[TextItem, ...] = ()
    wrong_answers: tuple[TextItem, ...] = ()
    question_type: QuestionType = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "right_answers", tuple(self.right_answers))
        object.__setattr__(self, "wrong_answers", tuple(self.wrong_answers))
        object.__setattr__(
            self,
            "question_type",
            classify_problem(self.question, self.right_answers, self.wrong_answers),
        )

    @property
    def first_words_of_right_answers(self) -> list[str]:
        return [answer.first_word for answer in self.right_answers]

    @property
    def first_words_of_wrong_answers(self) -> list[str]:
        return [answer.first_word for answer in self.wrong_answers]
