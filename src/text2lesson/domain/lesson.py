"""Compiled lesson with playback cursor and marking history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from text2lesson.domain.metadata import Metadata
from text2lesson.domain.problem import Problem


class MarkState(IntEnum):
    """Outcome recorded for a played item."""

    UNDEFINED = -1
    CORRECT = 0
    INCORRECT = 1
    SKIPPED = 2


@dataclass(frozen=True)
class MarkedItem:
    item: Any
    state: MarkState


@dataclass(frozen=True)
class Marks:
    """Totals of the marks recorded so far."""

    correct: int
    incorrect: int
    skipped: int
    marked_items: tuple[MarkedItem, ...]


class ItemMarker:
    """Record marks in the order they were given."""

    def __init__(self) -> None:
        self._marked_items: list[MarkedItem] = []

    def reset(self) -> None:
        self._marked_items = []

    def mark_item(self, item: Any, state: MarkState) -> None:
        self._marked_items.append(MarkedItem(item=item, state=MarkState(state)))

    @property
    def marks(self) -> Marks:
        states = [marked.state for marked in self._marked_items]
        return Marks(
            correct=states.count(MarkState.CORRECT),
            incorrect=states.count(MarkState.INCORRECT),
            skipped=states.count(MarkState.SKIPPED),
            marked_items=tuple(self._marked_items),
        )


class Lesson:
    """Metadata plus an ordered, fixed sequence of problems.

    The problem list cannot change after construction. Playback state (the
    cursor and the marks) is the only mutable part.
    """

    def __init__(self, metadata: Metadata | None = None, problems: Iterable[Problem] = ()) -> None:
        self._metadata = metadata if metadata is not None else Metadata()
        self._problems = tuple(problems)
        self._index = 0
        self._marker = ItemMarker()

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    @property
    def problems(self) -> tuple[Problem, ...]:
        return self._problems

    @property
    def is_empty(self) -> bool:
        """True when no problem has an intro or a question to show."""
        return not any(
            problem.intro.html or problem.question.html for problem in self._problems
        )

    @property
    def has_more_problems(self) -> bool:
        return self._index < len(self._problems)

    def get_next_problem(self) -> Problem | None:
        """Return the problem at the cursor and advance, or None when finished."""
        if not self.has_more_problems:
            return None
        problem = self._problems[self._index]
        self._index += 1
        return problem

    def peek_at_next_problem(self) -> Problem | None:
        """Return the problem at the cursor without advancing."""
        if not self.has_more_problems:
            return None
        return self._problems[self._index]

    def restart(self) -> None:
        """Move the cursor back to the first problem and clear the marks."""
        self._index = 0
        self._marker.reset()

    def mark_problem(self, problem: Any, state: MarkState) -> None:
        self._marker.mark_item(problem, state)

    @property
    def marks(self) -> Marks:
        return self._marker.marks
