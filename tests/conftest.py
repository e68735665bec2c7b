from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    monkeypatch.delenv("PROJACTIONS_CONFIG_FILE", raising=False)
    return ProjectBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_projactions_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests log normally."""
    yield
    logger = logging.getLogger("projactions")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
