"""Pytest configuration for local package import resolution and shared map fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `iarmap` and `iarmapcmp` without package installation.
    sys.path.insert(0, project_root_str)

DATA_DIR = PROJECT_ROOT / "data"


@pytest.fixture
def left_map_path() -> Path:
    return DATA_DIR / "left.map"


@pytest.fixture
def right_map_path() -> Path:
    return DATA_DIR / "right.map"
