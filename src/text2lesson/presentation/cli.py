"""Command line interface for compiling lesson files."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from uuid import uuid4

from text2lesson.application.compile_lesson_use_case import (
    CompileLessonCommand,
    CompileLessonUseCase,
)
from text2lesson.application.errors import LessonCompileError
from text2lesson.application.lesson_export import (
    compiled_lesson_to_document,
    dump_lesson_document,
)
from text2lesson.domain.lesson import Lesson
from text2lesson.domain.lesson_import import CompiledLesson, LessonSourceType
from text2lesson.infrastructure.config import CompilerSettings
from text2lesson.infrastructure.lesson_files import read_lesson_file, write_text_file

LOGGER = logging.getLogger(__name__)

PrintFn = Callable[[str], None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text2lesson",
        description="Compile plain-text lesson markup into HTML problems",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Write the lesson as a JSON document")
    compile_parser.add_argument("path", type=Path)
    compile_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="File to write instead of standard output",
    )

    summary_parser = subparsers.add_parser("summary", help="List problems and their types")
    summary_parser.add_argument("path", type=Path)
    return parser


def run(
    argv: Sequence[str] | None = None,
    *,
    settings: CompilerSettings | None = None,
    print_fn: PrintFn = print,
) -> int:
    """Run one CLI command and return the process exit code."""
    args = build_parser().parse_args(argv)
    resolved = settings or CompilerSettings()
    try:
        if args.command == "compile":
            return _compile(args.path, args.output, resolved, print_fn)
        return _summary(args.path, resolved, print_fn)
    except LessonCompileError as exc:
        correlation_id = str(uuid4())
        LOGGER.error(
            "event=cli_command_failed correlation_id=%s command=%s path=%s error=%s",
            correlation_id,
            args.command,
            args.path,
            exc,
        )
        print_fn(f"Error: {exc} correlation_id={correlation_id}")
        return 1


def format_summary(lesson: Lesson) -> list[str]:
    """One line per problem: number, type and plain question text."""
    lines = []
    for index, problem in enumerate(lesson.problems, start=1):
        question = problem.question.plain_text or "-"
        lines.append(f"{index}. [{problem.question_type.value}] {question}")
    return lines


def _compile_path(path: Path, settings: CompilerSettings) -> CompiledLesson:
    content = read_lesson_file(path, encoding=settings.encoding, max_bytes=settings.max_bytes)
    return CompileLessonUseCase().execute(
        CompileLessonCommand(
            source_type=LessonSourceType.TEXT_FILE,
            content=content,
            filename=path.name,
        )
    )


def _compile(
    path: Path,
    output: Path | None,
    settings: CompilerSettings,
    print_fn: PrintFn,
) -> int:
    compiled = _compile_path(path, settings)
    document_json = dump_lesson_document(compiled_lesson_to_document(compiled))
    if output is None:
        print_fn(document_json)
    else:
        write_text_file(output, document_json + "\n", encoding=settings.encoding)
        LOGGER.info("event=lesson_document_written output=%s", output)
    return 0


def _summary(path: Path, settings: CompilerSettings, print_fn: PrintFn) -> int:
    compiled = _compile_path(path, settings)
    title = compiled.lesson.metadata.get_value("TITLE")
    if title:
        print_fn(f"Title: {title}")
    for line in format_summary(compiled.lesson) or ["No problems."]:
        print_fn(line)
    return 0
