"""Configuration loading — locate the TOML file, decode it into the config model."""

from __future__ import annotations

import tomllib
from pathlib import Path

from loguru import logger

from cartridge.errors import (
    AmbiguousConfig,
    ConfigMalformed,
    ConfigNotFound,
    ConfigUnreadable,
    NoConfig,
)
from cartridge.models.config import Config

CONFIG_SUFFIX = ".toml"
BACKUP_DIR_NAME = "backup"


def find_config_file(explicit: str | Path | None = None, search_dir: Path | None = None) -> Path:
    """Pick the configuration file.

    An explicit path must exist. Otherwise *search_dir* (default: the
    current directory) is scanned, non-recursively, for exactly one
    ``*.toml`` file.
    """
    if explicit is not None:
        path = Path(explicit)
        try:
            found = path.exists()
        except OSError as e:
            raise ConfigUnreadable(f"Failed to read {path}: {e}") from e
        if not found:
            raise ConfigNotFound(path)
        logger.info(f"Using specified config file: {path}")
        return path

    search_dir = search_dir or Path.cwd()
    logger.info(f"No config file specified, searching for TOML files in {search_dir}")
    try:
        candidates = sorted(
            p for p in search_dir.iterdir() if p.suffix == CONFIG_SUFFIX and p.is_file()
        )
    except OSError as e:
        raise ConfigUnreadable(f"Failed to read directory {search_dir}: {e}") from e

    if not candidates:
        raise NoConfig(search_dir)
    if len(candidates) > 1:
        raise AmbiguousConfig([p.name for p in candidates])

    logger.info(f"Found config file: {candidates[0]}")
    return candidates[0]


def load_config(path: Path) -> Config:
    """Read and decode *path* into a :class:`Config`."""
    logger.info(f"Loading configuration from: {path}")
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigMalformed(f"Failed to parse TOML configuration {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigUnreadable(f"Failed to read config file {path}: {e}") from e

    logger.debug("Parsing TOML configuration")
    try:
        config = Config.from_dict(data)
    except (TypeError, KeyError, ValueError) as e:
        # KeyError wraps its message in quotes
        message = e.args[0] if isinstance(e, KeyError) and e.args else e
        raise ConfigMalformed(f"Invalid configuration {path}: {message}") from e

    logger.info(
        f"Successfully loaded {len(config.games)} games and {len(config.variables)} variables"
    )
    return config


def backup_root_for(config_path: Path) -> Path:
    """Backup tree root: ``backup/`` next to the configuration file."""
    return config_path.parent / BACKUP_DIR_NAME
