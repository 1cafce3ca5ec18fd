"""Application context — everything one invocation needs, built once from the config file."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from cartridge.config import backup_root_for, load_config
from cartridge.core.backup import BackupManager
from cartridge.core.restore import RestoreManager
from cartridge.core.variables import resolve_variables
from cartridge.models.config import Config


@dataclass(frozen=True)
class AppContext:
    """
    Service container for one run.

    The config and resolved variables are read-only after construction;
    both managers borrow them.
    """

    config_path: Path
    config: Config
    variables: Mapping[str, str]
    backup_root: Path
    backup_manager: BackupManager
    restore_manager: RestoreManager


def create_context(config_path: Path, system_variables: Mapping[str, str] | None = None) -> AppContext:
    """Load *config_path*, resolve its variables and wire the managers."""
    config = load_config(config_path)
    backup_root = backup_root_for(config_path)
    logger.info(f"Backup root directory: {backup_root}")

    variables = MappingProxyType(resolve_variables(config.variables, system_variables))

    return AppContext(
        config_path=config_path,
        config=config,
        variables=variables,
        backup_root=backup_root,
        backup_manager=BackupManager(config, variables, backup_root),
        restore_manager=RestoreManager(config, variables, backup_root),
    )
