"""Command-line interface.

Usage:
    cartridge [--config PATH] [--verbose] backup [GAME]
    cartridge [--config PATH] [--verbose] restore [GAME]
    cartridge [--config PATH] [--verbose] list

Without ``--config`` the single ``*.toml`` file in the current directory
is used. Without a game name, ``backup``/``restore`` act on every enabled
game.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from cartridge import __version__
from cartridge.config import find_config_file
from cartridge.context import AppContext, create_context
from cartridge.errors import CartridgeError
from cartridge.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cartridge",
        description="A CLI tool for backing up and restoring game save files",
    )
    parser.add_argument("-c", "--config", help="Path to the TOML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--log-file", type=Path, help="Also write a debug log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")
    backup = commands.add_parser("backup", help="Backup game saves")
    backup.add_argument(
        "game_name", nargs="?", help="Game to backup (default: all enabled games)"
    )
    restore = commands.add_parser("restore", help="Restore game saves")
    restore.add_argument(
        "game_name", nargs="?", help="Game to restore (default: all enabled games)"
    )
    commands.add_parser("list", help="List enabled games in the configuration")
    return parser


def print_games(ctx: AppContext) -> None:
    games = ctx.backup_manager.list_games()
    if not games:
        print("No enabled games found in configuration.")
        return

    print("Available games:")
    for game in games:
        status = "Has backup" if ctx.backup_manager.has_backup(game.name) else "No backup"
        print(f"  {game.name} - {status} ({len(game.saves)} save locations)")


def run(args: argparse.Namespace) -> None:
    ctx = create_context(find_config_file(args.config))

    if args.command == "backup":
        if args.game_name:
            ctx.backup_manager.backup_game(args.game_name)
        else:
            ctx.backup_manager.backup_all()
    elif args.command == "restore":
        if args.game_name:
            ctx.restore_manager.restore_game(args.game_name)
        else:
            ctx.restore_manager.restore_all()
    elif args.command == "list":
        print_games(ctx)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logger(verbose=args.verbose, log_file=args.log_file, command=args.command)
    logger.info(f"Starting cartridge v{__version__}")

    try:
        run(args)
    except CartridgeError as e:
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
