"""Logging utilities for componentlab commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "componentlab"
_CONSOLE_FORMAT = "[componentlab] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the componentlab hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Route componentlab records to the console and, optionally, a log file.

    The console follows ``verbose``; the file sink always records DEBUG so a
    store's cleanup and import decisions can be audited after the fact.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is None:
        logger.setLevel(console_level)
        return logger

    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    sink = logging.FileHandler(path, encoding="utf-8")
    sink.setLevel(logging.DEBUG)
    sink.setFormatter(logging.Formatter(_FILE_FORMAT))
    logger.addHandler(sink)
    logger.setLevel(logging.DEBUG)
    return logger


__all__ = ["configure_logging", "get_logger"]
