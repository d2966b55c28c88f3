from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.tree_builder import TreeBuilder


@pytest.fixture
def tree_builder(tmp_path: Path) -> TreeBuilder:
    """Provide a reusable tree builder rooted at the pytest tmp_path."""
    return TreeBuilder(tmp_path)


@pytest.fixture
def srcscan_logs(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch):
    """Capture srcscan log records even after the CLI has configured logging."""
    monkeypatch.setattr(logging.getLogger("srcscan"), "propagate", True)
    caplog.set_level(logging.DEBUG, logger="srcscan")
    return caplog


@pytest.fixture(autouse=True)
def _restore_srcscan_logger():
    logger = logging.getLogger("srcscan")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
