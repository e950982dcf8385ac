"""Shared pytest fixtures for the mediatag test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from mediatag.config.config import Config


@pytest.fixture(autouse=True)
def isolated_runtime(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the portable repo root at a temporary directory and reset singletons."""

    import mediatag.config.paths as paths
    from mediatag.platform.logging import setup_logger

    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _ = (repo_root / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return repo_root

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    monkeypatch.delenv("MEDIATAG_CONFIG", raising=False)
    Config.reset()
    try:
        yield repo_root
    finally:
        Config.reset()
        _ = setup_logger(log_file=None, console_level=logging.WARNING)


@pytest.fixture
def config() -> Config:
    """Default configuration that never touches the filesystem."""

    return Config()
