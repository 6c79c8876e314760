from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.modules import ModuleBuilder


@pytest.fixture
def module_builder(tmp_path: Path) -> ModuleBuilder:
    """Provide a module builder rooted at the pytest tmp_path."""
    return ModuleBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_declcritic_logger():
    """CLI runs reconfigure the package logger; restore it so caplog keeps working."""
    logger = logging.getLogger("declcritic")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
