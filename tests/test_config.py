"""Tests for environment based compiler settings."""

from __future__ import annotations

import logging

import pytest

from text2lesson.infrastructure.config import (
    DEFAULT_MAX_BYTES,
    ENCODING_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    MAX_BYTES_ENV_VAR,
    CompilerSettings,
    ConfigurationError,
    load_settings,
)


def test_load_settings_uses_defaults_when_env_missing() -> None:
    settings = load_settings({})

    assert settings == CompilerSettings()
    assert settings.log_level == "INFO"
    assert settings.encoding == "utf-8"
    assert settings.max_bytes == DEFAULT_MAX_BYTES


def test_load_settings_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV_VAR, " debug ")
    monkeypatch.setenv(ENCODING_ENV_VAR, "latin-1")
    monkeypatch.setenv(MAX_BYTES_ENV_VAR, "2048")

    settings = load_settings()

    assert settings.log_level == "DEBUG"
    assert settings.log_level_number == logging.DEBUG
    assert settings.encoding == "latin-1"
    assert settings.max_bytes == 2048


def test_load_settings_treats_blank_values_as_missing() -> None:
    assert load_settings({LOG_LEVEL_ENV_VAR: "  ", MAX_BYTES_ENV_VAR: ""}) == CompilerSettings()


@pytest.mark.parametrize(
    ("environ", "message"),
    [
        ({LOG_LEVEL_ENV_VAR: "LOUD"}, "Unknown log level"),
        ({ENCODING_ENV_VAR: "no-such-codec"}, "Unknown encoding"),
        ({MAX_BYTES_ENV_VAR: "many"}, "must be an integer"),
        ({MAX_BYTES_ENV_VAR: "0"}, "must be positive"),
    ],
)
def test_load_settings_rejects_invalid_values(environ: dict[str, str], message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        load_settings(environ)
