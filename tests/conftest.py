"""Shared fixtures: a fake home directory and config-file helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from cartridge.context import AppContext, create_context


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``Path.home()`` at an empty temporary directory."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return home_dir


@pytest.fixture
def system_vars(home: Path) -> dict[str, str]:
    return {"home": str(home), "config": str(home / ".config")}


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    d = tmp_path / "cfg"
    d.mkdir()
    return d


@pytest.fixture
def write_config(config_dir: Path) -> Callable[..., Path]:
    def _write(text: str, name: str = "games.toml") -> Path:
        path = config_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_context(
    write_config: Callable[..., Path], system_vars: dict[str, str]
) -> Callable[[str], AppContext]:
    def _make(text: str) -> AppContext:
        return create_context(write_config(text), system_variables=system_vars)

    return _make
