"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def snapshot_path() -> Any:
    """Path to tests/fixtures/snapshots/<name>."""

    def _path(name: str) -> Path:
        return FIXTURES_DIR / "snapshots" / name

    return _path
