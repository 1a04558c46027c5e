"""Reading lesson text files from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from text2lesson.application.errors import LessonFileError
from text2lesson.infrastructure.config import DEFAULT_ENCODING, DEFAULT_MAX_BYTES

LOGGER = logging.getLogger(__name__)


def read_lesson_file(
    path: Path,
    *,
    encoding: str = DEFAULT_ENCODING,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> str:
    """Read and decode a lesson file.

    A leading byte order mark is dropped. Line endings are left as they are
    because the compiler normalizes them itself.

    Raises:
        LessonFileError: when the file is missing, too large or not decodable.
    """
    if not path.is_file():
        raise LessonFileError(f"Lesson file not found: {path}")

    size = path.stat().st_size
    if size > max_bytes:
        raise LessonFileError(f"Lesson file is larger than {max_bytes} bytes: {path}")

    try:
        raw_bytes = path.read_bytes()
    except OSError as exc:
        raise LessonFileError(f"Lesson file cannot be read: {path}") from exc

    try:
        content = raw_bytes.decode(encoding)
    except UnicodeDecodeError as exc:
        raise LessonFileError(f"Lesson file is not valid {encoding}: {path}") from exc

    LOGGER.debug("event=lesson_file_read filename=%s size=%s", path.name, size)
    return content.removeprefix("\ufeff")


def write_text_file(path: Path, content: str, *, encoding: str = DEFAULT_ENCODING) -> None:
    """Write `content`, creating parent directories as needed."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
    except OSError as exc:
        raise LessonFileError(f"Output file cannot be written: {path}") from exc
