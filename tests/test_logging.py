"""Tests for declcritic logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

from declcritic.logging import configure_logging, debug_enabled, get_logger


def test_reconfiguring_keeps_a_single_console_handler() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert debug_enabled("critic")


def test_log_file_receives_component_records(tmp_path: Path) -> None:
    log_file = tmp_path / "declcritic.log"
    configure_logging(log_file=log_file)

    get_logger("registry").info("Downloading pkg@1.0.0")
    assert not debug_enabled("registry")

    logger = configure_logging()
    assert len(logger.handlers) == 1
    assert "declcritic.registry: Downloading pkg@1.0.0" in log_file.read_text(encoding="utf-8")
