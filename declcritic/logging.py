"""Logging utilities for declcritic runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "declcritic"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the declcritic hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def debug_enabled(name: str | None = None) -> bool:
    """Whether DEBUG records for the given component would be emitted."""
    return get_logger(name).isEnabledFor(logging.DEBUG)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the declcritic logger with console output and an optional file sink.

    ``verbose`` switches to DEBUG, which also emits the inferred module
    structures and inference failure reasons.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # One console sink per process, even when main() runs repeatedly.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[declcritic] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "debug_enabled", "get_logger"]
