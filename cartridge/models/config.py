"""Configuration document models — decoded from the TOML config file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _require_str(data: dict[str, Any], key: str, section: str) -> str:
    if key not in data:
        raise KeyError(f"[[{section}]] entry is missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"[[{section}]] field '{key}' must be a string, got {type(value).__name__}")
    return value


def _table_list(data: dict[str, Any], key: str, section: str) -> list[dict[str, Any]]:
    raw = data.get(key, [])
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise TypeError(f"'{section}' must be an array of tables")
    return raw


@dataclass
class Variable:
    """User-defined variable (``[[var]]``); ``value`` may contain ``${...}`` references."""

    name: str
    value: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Variable:
        return cls(
            name=_require_str(data, "name", "var"),
            value=_require_str(data, "value", "var"),
        )


@dataclass
class SaveLocation:
    """One place on disk holding saves for a game.

    An empty ``files`` list means everything under ``path`` is backed up.
    """

    path: str
    files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SaveLocation:
        files = data.get("files", [])
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise TypeError("[[save]] field 'files' must be an array of strings")
        return cls(path=_require_str(data, "path", "save"), files=list(files))


@dataclass
class Game:
    """Game entry (``[[game]]``) with its save locations in document order."""

    name: str
    enabled: bool = True
    saves: list[SaveLocation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Game:
        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise TypeError("[[game]] field 'enabled' must be a boolean")
        # [[game.save]] tables, or an inline `saves = [{...}]` array
        key = "save" if "save" in data else "saves"
        return cls(
            name=_require_str(data, "name", "game"),
            enabled=enabled,
            saves=[SaveLocation.from_dict(s) for s in _table_list(data, key, "game.save")],
        )


@dataclass
class Config:
    """Whole configuration document. Unknown keys are ignored."""

    variables: list[Variable] = field(default_factory=list)
    games: list[Game] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        return cls(
            variables=[Variable.from_dict(v) for v in _table_list(data, "var", "var")],
            games=[Game.from_dict(g) for g in _table_list(data, "game", "game")],
        )

    @property
    def enabled_games(self) -> list[Game]:
        return [game for game in self.games if game.enabled]

    def find_game(self, name: str) -> Game | None:
        """Return the first game named *name*, or None."""
        for game in self.games:
            if game.name == name:
                return game
        return None
