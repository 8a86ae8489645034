"""Logging utilities for showdocs runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "showdocs"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the showdocs hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the showdocs logger with a stderr sink and optional file sink.

    Verbose runs log at DEBUG, which enables the per-file and per-directory
    trace lines. Failures are logged at ERROR and are shown either way.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[showdocs] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def flush_logging() -> None:
    """Flush every showdocs handler along with stdout and stderr."""
    for handler in logging.getLogger(_LOGGER_NAME).handlers:
        handler.flush()
    sys.stdout.flush()
    sys.stderr.flush()


__all__ = ["configure_logging", "flush_logging", "get_logger"]
