"""
Logging configuration for the ``gridfield`` package logger.

Library modules only create module loggers; handlers are attached here, by
the command line entry point or by user code.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "gridfield"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> None:
    """
    Configure the 'gridfield' namespace logger.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG").
        log_file: Optional path to also write logs to.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # avoid duplicate output when called twice
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
