"""Fixtures isolating config tests from the real repository and environment."""

from __future__ import annotations

import importlib
from collections.abc import Iterator
from pathlib import Path

import pytest

import mbws.config.config as config_module
import mbws.config.paths as paths_module
import mbws.config.settings as settings_module


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make ``tmp_path`` the detected project root with no env overrides."""

    for name in (paths_module.CONFIG_PATH_ENV, paths_module.LOG_FILE_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(paths_module, "_detect_repo_root", lambda _start=None: tmp_path)
    return tmp_path


@pytest.fixture
def config_runtime_env(portable_repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Swap in a fresh module-level ``config``; settings are rebuilt afterwards."""

    cls = config_module.Config
    monkeypatch.setattr(cls, "_instance", None)
    monkeypatch.setattr(cls, "_loaded_from", None)
    monkeypatch.setattr(config_module, "config", cls.load())

    yield portable_repo_root

    monkeypatch.undo()
    _ = importlib.reload(settings_module)
