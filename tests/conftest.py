"""Shared pytest fixtures for lesson compiler tests."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_LESSON = """TITLE: Fractions
AUTHOR: Ann & Bob

(i) Welcome to meta:TITLE
(?) What is 1/2 + 1/4?
(=) 3/4
(x) 2/6
(&) Add the quarters.
(?) Pick the primes
(=) 2
(=) 3
(x) 4
(?) The capital of France is ...Paris.
(?) Put these in order ...
(=) one
(=) two
(_)
(i) Final slide"""


@pytest.fixture
def sample_lesson_text() -> str:
    """Lesson with one problem of each question type, in type order simple..slide."""
    return SAMPLE_LESSON


@pytest.fixture
def sample_lesson_file(tmp_path: Path, sample_lesson_text: str) -> Path:
    path = tmp_path / "lesson.txt"
    path.write_text(sample_lesson_text, encoding="utf-8")
    return path
