from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.docs_builder import DocsTreeBuilder


@pytest.fixture
def docs_builder(tmp_path: Path) -> DocsTreeBuilder:
    """Provide a reusable docs tree builder rooted at the pytest tmp_path."""
    return DocsTreeBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _isolate_showdocs_logger():
    """Restore the showdocs logger after tests that call configure_logging."""
    logger = logging.getLogger("showdocs")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    logger.propagate = True
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.propagate = propagate
    logger.setLevel(level)
