"""Command line entrypoint."""

from __future__ import annotations

import logging
import sys
from uuid import uuid4

from text2lesson.infrastructure.config import ConfigurationError, load_settings
from text2lesson.infrastructure.logging_config import configure_logging
from text2lesson.presentation.cli import run

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Run the lesson compiler CLI."""
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging()
        correlation_id = str(uuid4())
        LOGGER.error("event=config_invalid correlation_id=%s error=%s", correlation_id, exc)
        print(f"Invalid configuration: {exc} correlation_id={correlation_id}")
        return 1

    configure_logging(settings.log_level_number)
    try:
        return run(sys.argv[1:], settings=settings)
    except Exception:
        correlation_id = str(uuid4())
        LOGGER.exception("event=cli_failed correlation_id=%s", correlation_id)
        print(f"Lesson compiler failed. correlation_id={correlation_id}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
