"""File selector / copier — recursive mirror and glob-pattern copy modes."""

from __future__ import annotations

import glob
import shutil
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from cartridge.errors import FilesystemError


def ensure_dir(path: Path) -> None:
    """Create *path* and any missing parents."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError("create directory", path, e) from e


def exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        raise FilesystemError("inspect", path, e) from e


def is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError as e:
        raise FilesystemError("inspect", path, e) from e


def is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        raise FilesystemError("inspect", path, e) from e


def copy_file(source: Path, dest: Path) -> None:
    logger.debug(f"Copying file: {source} -> {dest}")
    try:
        shutil.copy2(source, dest)
    except OSError as e:
        raise FilesystemError("copy file", source, e) from e


def copy_recursive(source: Path, dest: Path) -> int:
    """Copy *source* into the directory *dest*.

    A regular file is copied under its own name; a directory has its whole
    tree mirrored below *dest*. Returns the number of files copied.
    """
    logger.debug(f"Copying all files from {source} to {dest}")
    ensure_dir(dest)

    if is_file(source):
        copy_file(source, dest / source.name)
        return 1

    try:
        entries = sorted(source.iterdir())
    except OSError as e:
        raise FilesystemError("read directory", source, e) from e

    count = 0
    for entry in entries:
        target = dest / entry.name
        if is_dir(entry):
            logger.debug(f"Creating directory: {target}")
            count += copy_recursive(entry, target)
        else:
            copy_file(entry, target)
            count += 1
    return count


def match_pattern(source: Path, pattern: str) -> list[Path]:
    """Regular files under *source* matching the shell-style *pattern*.

    Supports ``*``, ``?``, ``[...]`` and ``**``. Hidden files are matched too.
    """
    matches = glob.glob(pattern, root_dir=source, recursive=True, include_hidden=True)
    files = [source / m for m in sorted(matches)]
    return [f for f in files if is_file(f)]


def copy_by_patterns(source: Path, dest: Path, patterns: Iterable[str]) -> int:
    """Copy files matching each pattern, flattened into *dest* by basename.

    Matched files from different subdirectories that share a basename
    overwrite each other; the last match wins. Returns the number of
    files copied.
    """
    ensure_dir(dest)
    total = 0
    for pattern in patterns:
        logger.debug(f"Searching for files matching pattern: {source / pattern}")
        count = 0
        for path in match_pattern(source, pattern):
            copy_file(path, dest / path.name)
            count += 1
        logger.info(f"Copied {count} files matching pattern: {pattern}")
        total += count
    return total
