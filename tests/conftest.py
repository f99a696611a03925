from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.asset_tree import AssetTreeBuilder


@pytest.fixture
def asset_tree(tmp_path: Path) -> AssetTreeBuilder:
    """Provide a reusable asset tree rooted at the pytest tmp_path."""
    return AssetTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _restore_registrygen_logger():
    """Undo CLI logging setup so caplog keeps receiving registrygen records."""
    logger = logging.getLogger("registrygen")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
