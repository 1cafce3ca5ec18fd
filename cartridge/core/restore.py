"""Restore manager — copy backed-up saves from the backup tree to their original locations."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from cartridge.core.backup import run_batch
from cartridge.core.copier import copy_file, copy_recursive, ensure_dir, is_dir, is_file
from cartridge.core.path_resolver import backup_path_for
from cartridge.core.variables import expand_variables
from cartridge.errors import GameNotFound, NoBackup
from cartridge.models.batch_result import BatchResult

if TYPE_CHECKING:
    from cartridge.models.config import Config, SaveLocation


class RestoreManager:
    """
    Restore enabled games from ``<backup_root>/<game name>/``.

    Restore always mirrors the whole anonymized directory back, whatever
    the save location's ``files`` patterns are: the backup tree already
    holds exactly the files that were selected. Existing files are
    overwritten.
    """

    def __init__(self, config: Config, variables: Mapping[str, str], backup_root: Path) -> None:
        self._config = config
        self._variables = variables
        self._backup_root = backup_root

    def restore_game(self, game_name: str) -> None:
        logger.info(f"Starting restore for game: {game_name}")
        game = self._config.find_game(game_name)
        if game is None:
            raise GameNotFound(game_name)
        if not game.enabled:
            logger.warning(f"Game '{game_name}' is disabled, skipping restore")
            return

        game_dir = self._backup_root / game.name
        if not is_dir(game_dir):
            raise NoBackup(game_name, game_dir)

        for i, save in enumerate(game.saves, start=1):
            logger.info(f"Processing restore location {i}/{len(game.saves)} for game '{game.name}'")
            self._restore_save_location(game_name, save, game_dir)

        logger.info(f"Successfully completed restore for game: {game_name}")

    def _restore_save_location(self, game_name: str, save: SaveLocation, game_dir: Path) -> None:
        dest = Path(expand_variables(save.path, self._variables))
        logger.info(f"Restoring to: {dest}")

        source = backup_path_for(dest, game_dir, self._variables.get("home"))
        logger.debug(f"Restore source: {source}")
        if not is_dir(source):
            raise NoBackup(game_name, source)

        single = self._single_file_backup(source, dest)
        if single is not None:
            # Save location names a file: put it back at that path
            ensure_dir(dest.parent)
            copy_file(single, dest)
            return

        ensure_dir(dest)
        copied = copy_recursive(source, dest)
        logger.debug(f"Restored {copied} files to {dest}")

    @staticmethod
    def _single_file_backup(source: Path, dest: Path) -> Path | None:
        """Return the backed-up file when *dest* is an existing file."""
        candidate = source / dest.name
        if is_file(dest) and is_file(candidate):
            return candidate
        return None

    def restore_all(self) -> BatchResult:
        """Restore all enabled games; raises AggregateFailure if any failed."""
        logger.info("Starting restore for all enabled games")
        return run_batch(self._config.enabled_games, self.restore_game, "restore")
