"""Compiler configuration resolved from environment variables."""

from __future__ import annotations

import codecs
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

LOG_LEVEL_ENV_VAR = "TEXT2LESSON_LOG_LEVEL"
ENCODING_ENV_VAR = "TEXT2LESSON_ENCODING"
MAX_BYTES_ENV_VAR = "TEXT2LESSON_MAX_BYTES"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ENCODING = "utf-8"
DEFAULT_MAX_BYTES = 1024 * 1024

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigurationError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class CompilerSettings:
    """Settings used by the CLI when reading and compiling lesson files."""

    log_level: str = DEFAULT_LOG_LEVEL
    encoding: str = DEFAULT_ENCODING
    max_bytes: int = DEFAULT_MAX_BYTES

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def load_settings(environ: Mapping[str, str] | None = None) -> CompilerSettings:
    """Return settings from `environ` (defaults to `os.environ`).

    Blank values fall back to the defaults.
    """
    env = os.environ if environ is None else environ
    return CompilerSettings(
        log_level=_resolve_log_level(env),
        encoding=_resolve_encoding(env),
        max_bytes=_resolve_max_bytes(env),
    )


def _resolve(env: Mapping[str, str], env_var: str, fallback: str) -> str:
    resolved = env.get(env_var, "").strip()
    return resolved if resolved else fallback


def _resolve_log_level(env: Mapping[str, str]) -> str:
    level = _resolve(env, LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level in {LOG_LEVEL_ENV_VAR}: {level}")
    return level


def _resolve_encoding(env: Mapping[str, str]) -> str:
    encoding = _resolve(env, ENCODING_ENV_VAR, DEFAULT_ENCODING)
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"Unknown encoding in {ENCODING_ENV_VAR}: {encoding}") from exc
    return encoding


def _resolve_max_bytes(env: Mapping[str, str]) -> int:
    raw_value = _resolve(env, MAX_BYTES_ENV_VAR, str(DEFAULT_MAX_BYTES))
    try:
        max_bytes = int(raw_value)
    except ValueError as exc:
        raise ConfigurationError(f"{MAX_BYTES_ENV_VAR} must be an integer.") from exc
    if max_bytes <= 0:
        raise ConfigurationError(f"{MAX_BYTES_ENV_VAR} must be positive.")
    return max_bytes
