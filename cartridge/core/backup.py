"""Backup manager — copies each game's save locations into the backup tree."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from cartridge.core.copier import copy_by_patterns, copy_recursive, ensure_dir, exists, is_dir
from cartridge.core.path_resolver import backup_path_for
from cartridge.core.variables import expand_variables
from cartridge.errors import AggregateFailure, CartridgeError, GameNotFound, SourceMissing
from cartridge.models.batch_result import BatchResult

if TYPE_CHECKING:
    from cartridge.models.config import Config, Game, SaveLocation


def run_batch(games: list[Game], action: Callable[[str], None], operation: str) -> BatchResult:
    """Run *action* for every game, recording failures instead of stopping."""
    result = BatchResult()
    if not games:
        logger.warning("No enabled games found in configuration")
        return result

    for game in games:
        try:
            action(game.name)
        except CartridgeError as e:
            result.failed[game.name] = str(e)
            logger.error(f"✗ Failed to {operation} '{game.name}': {e}")
        else:
            result.succeeded.append(game.name)
            logger.info(f"✓ Successfully completed {operation}: {game.name}")

    logger.info(
        f"{operation.capitalize()} summary: "
        f"{len(result.succeeded)} successful, {len(result.failed)} failed"
    )
    if not result.ok:
        raise AggregateFailure(operation, result)
    return result


class BackupManager:
    """Backs up enabled games into ``<backup_root>/<game name>/``."""

    def __init__(self, config: Config, variables: Mapping[str, str], backup_root: Path) -> None:
        self._config = config
        self._variables = variables
        self._backup_root = backup_root

    @property
    def backup_root(self) -> Path:
        return self._backup_root

    def game_backup_dir(self, game_name: str) -> Path:
        return self._backup_root / game_name

    def _get_game(self, game_name: str) -> Game:
        game = self._config.find_game(game_name)
        if game is None:
            raise GameNotFound(game_name)
        return game

    def list_games(self) -> list[Game]:
        """Enabled games in document order."""
        logger.info("Listing games from configuration")
        games = self._config.enabled_games
        logger.info(f"Found {len(games)} enabled games")
        return games

    def has_backup(self, game_name: str) -> bool:
        found = is_dir(self.game_backup_dir(game_name))
        logger.debug(f"Checking backup for '{game_name}': {found}")
        return found

    def backup_game(self, game_name: str) -> None:
        """Back up every save location of one game, aborting on the first failure."""
        logger.info(f"Starting backup for game: {game_name}")
        game = self._get_game(game_name)
        if not game.enabled:
            logger.warning(f"Game '{game_name}' is disabled, skipping backup")
            return

        game_dir = self.game_backup_dir(game.name)
        logger.info(f"Creating backup directory: {game_dir}")
        ensure_dir(game_dir)

        for i, save in enumerate(game.saves, start=1):
            logger.info(f"Processing save location {i}/{len(game.saves)} for game '{game.name}'")
            self._backup_save_location(save, game_dir)

        logger.info(f"Successfully completed backup for game: {game_name}")

    def _backup_save_location(self, save: SaveLocation, game_dir: Path) -> None:
        source = Path(expand_variables(save.path, self._variables))
        logger.info(f"Backing up from: {source}")
        if not exists(source):
            raise SourceMissing(source)

        dest = backup_path_for(source, game_dir, self._variables.get("home"))
        logger.debug(f"Backup destination: {dest}")
        ensure_dir(dest)

        if not save.files:
            logger.info("No specific files specified, backing up all files recursively")
            copied = copy_recursive(source, dest)
        else:
            logger.info(f"Backing up {len(save.files)} specific file patterns")
            copied = copy_by_patterns(source, dest, save.files)
        logger.debug(f"Copied {copied} files from {source}")

    def backup_all(self) -> BatchResult:
        """Back up all enabled games; raises AggregateFailure if any failed."""
        logger.info("Starting backup for all enabled games")
        return run_batch(self._config.enabled_games, self.backup_game, "backup")
