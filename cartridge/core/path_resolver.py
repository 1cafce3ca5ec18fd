"""Portable path resolver — map host save paths into the backup tree.

The username is the only personal segment in a typical save path, so it is
collapsed to a fixed placeholder. That lets a backup taken on one account
restore on another of the same platform family.

  POSIX     /home/alice/.local/share/Game   -> user_home/.local/share/Game
            /opt/game/saves                 -> opt/game/saves
  Windows   C:\\Users\\alice\\Saved Games\\X   -> drive_c/Users/user_home/Saved Games/X

The variant is picked from the shape of the path (drive or UNC prefix),
so a tree produced on one OS stays readable on the other.
"""

from __future__ import annotations

import os
import posixpath
import re
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath

HOME_PLACEHOLDER = "user_home"
USERS_DIR = "Users"

_DRIVE_RE = re.compile(r"^[A-Za-z]:")
_UNC_RE = re.compile(r"^\\\\[^\\/]+[\\/][^\\/]+")
_SPECIAL = ("", ".", "..")


def is_windows_path(path: str | PurePath) -> bool:
    """True if *path* should be mapped with the Windows rules."""
    if isinstance(path, PureWindowsPath):
        return True
    raw = str(path)
    return bool(_DRIVE_RE.match(raw) or _UNC_RE.match(raw)) or os.name == "nt"


def _normal(*parts: str) -> PurePosixPath:
    return PurePosixPath(*(p for p in parts if p not in _SPECIAL))


def _posix_normpath(path: str) -> str:
    # normpath keeps a leading "//"; POSIX treats it as "/"
    normalized = posixpath.normpath(path)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def _default_home() -> str | None:
    try:
        return str(Path.home())
    except RuntimeError:
        return None


def anonymize_windows_path(path: str | PurePath) -> PurePosixPath:
    """Windows rules: ``drive_<letter>`` prefix, ``Users/<name>`` -> ``Users/user_home``."""
    win = PureWindowsPath(path)
    out: list[str] = []

    drive = win.drive
    if len(drive) == 2 and drive[1] == ":":
        out.append(f"drive_{drive[0].lower()}")
    elif drive.startswith(("\\\\", "//")):
        # \\server\share -> unc/server/share
        out.append("unc")
        out.extend(part for part in re.split(r"[\\/]+", drive) if part)

    parts = [p for p in win.parts[1:] if p] if win.anchor else list(win.parts)
    i = 0
    while i < len(parts):
        name = parts[i]
        if name.lower() == USERS_DIR.lower() and i + 1 < len(parts):
            out.extend((USERS_DIR, HOME_PLACEHOLDER))
            i += 2
            continue
        if name not in _SPECIAL:
            out.append(name)
        i += 1
    return PurePosixPath(*out)


def anonymize_posix_path(path: str | PurePath, home: str | None = None) -> PurePosixPath:
    """POSIX rules: home prefix -> ``user_home``, other absolute paths lose the root."""
    posix = PurePosixPath(_posix_normpath(str(path)))
    if home is None:
        home = _default_home()

    if home:
        try:
            relative = posix.relative_to(_posix_normpath(home))
        except ValueError:
            pass
        else:
            return _normal(HOME_PLACEHOLDER, *relative.parts)

    if posix.is_absolute():
        return _normal(*posix.parts[1:])
    return _normal(*posix.parts)


def anonymize(path: str | PurePath, home: str | None = None) -> PurePosixPath:
    """Return the relative path under a game's backup directory for host *path*.

    Pure: never touches the filesystem.
    """
    if is_windows_path(path):
        return anonymize_windows_path(path)
    return anonymize_posix_path(path, home)


def backup_path_for(path: str | PurePath, game_dir: Path, home: str | None = None) -> Path:
    """Return ``game_dir / anonymize(path)`` — used for both backup and restore."""
    return game_dir.joinpath(*anonymize(path, home).parts)
