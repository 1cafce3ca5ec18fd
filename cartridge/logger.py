"""Loguru-based logging setup."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | {message}"
VERBOSE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | "
    "<cyan>{module}.{function}</cyan> | {message}"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<7} | {extra[command]} | "
    "{module}.{function}:{line} | {message}"
)


def setup_logger(
    verbose: bool = False, log_file: Path | None = None, command: str | None = None
) -> None:
    """Configure loguru for one CLI run.

    Console output is INFO, or DEBUG with the caller's location when
    *verbose*. The optional log file always records DEBUG, tagged with the
    running subcommand so appended runs can be told apart.
    """
    logger.remove()
    logger.configure(extra={"command": command or "-"})

    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=VERBOSE_FORMAT if verbose else CONSOLE_FORMAT,
        colorize=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_file),
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="5 MB",
            retention="7 days",
            encoding="utf-8",
        )
