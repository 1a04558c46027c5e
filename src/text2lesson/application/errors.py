"""Errors raised outside the lesson markup itself.

Author markup never raises; these cover commands and files that cannot be
compiled at all.
"""

from __future__ import annotations


class LessonCompileError(ValueError):
    """Base error for lesson compile requests that cannot be processed."""


class LessonCommandError(LessonCompileError):
    """Raised when a compile command is missing required details."""


class LessonFileError(LessonCompileError):
    """Raised when lesson text cannot be read from a file."""
