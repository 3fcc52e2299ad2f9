from __future__ import annotations

from pathlib import Path

import pytest

from cf_practice.config import ConfigStore
from cf_practice.workspace import Workspace


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def store(home: Path) -> ConfigStore:
    store = ConfigStore(home)
    store.init()
    return store


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    return Workspace(tmp_path / "practice")
