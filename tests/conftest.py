from __future__ import annotations

import os

import pytest

from weaseltoon import _config
from weaseltoon.dimensions import default_dimensions
from weaseltoon.mesh_quality import MeshQuality


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.weaseltoon directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "weaseltoon.cfg")
    return config_dir


@pytest.fixture
def dims():
    return default_dimensions()


@pytest.fixture
def coarse() -> MeshQuality:
    return MeshQuality(circular_segments=24, loft_steps=3)
