"""Error kinds raised by the loader, resolver and backup/restore managers."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cartridge.models.batch_result import BatchResult


class CartridgeError(Exception):
    """Base class for every error the CLI reports to the user."""


# ── Configuration ──


class ConfigError(CartridgeError):
    """Locating, reading or decoding the configuration failed."""


class ConfigNotFound(ConfigError):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Specified config file not found: {self.path}")


class NoConfig(ConfigError):
    def __init__(self, search_dir: str | Path) -> None:
        self.search_dir = Path(search_dir)
        super().__init__(f"No TOML configuration files found in {self.search_dir}")


class AmbiguousConfig(ConfigError):
    def __init__(self, candidates: list[str]) -> None:
        self.candidates = candidates
        super().__init__(
            f"Multiple TOML files found: {', '.join(candidates)}. "
            "Please specify which one to use with --config"
        )


class ConfigUnreadable(ConfigError):
    pass


class ConfigMalformed(ConfigError):
    pass


class ReservedVariableName(ConfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Variable name '{name}' is reserved and cannot be used in configuration"
        )


# ── Variables ──


class VariableError(CartridgeError):
    """Raised while expanding ``${name}`` references."""


class UndefinedVariable(VariableError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Undefined variable: {name}")


class CircularVariableReference(VariableError):
    def __init__(self, value: str, passes: int) -> None:
        self.value = value
        self.passes = passes
        super().__init__(
            f"Variable resolution of '{value}' exceeded {passes} passes "
            "(possible circular reference)"
        )


# ── Backup / restore ──


class GameNotFound(CartridgeError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Game '{name}' not found in configuration")


class NoBackup(CartridgeError):
    def __init__(self, name: str, path: Path) -> None:
        self.name = name
        self.path = path
        super().__init__(f"No backup found for '{name}': {path}")


class SourceMissing(CartridgeError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Save path does not exist: {path}")


class FilesystemError(CartridgeError):
    """Wraps an ``OSError``; the original is kept as ``__cause__``."""

    def __init__(self, action: str, path: Path, error: OSError) -> None:
        self.action = action
        self.path = path
        self.error = error
        super().__init__(f"Failed to {action}: {path}: {error}")


class AggregateFailure(CartridgeError):
    def __init__(self, operation: str, result: BatchResult) -> None:
        self.operation = operation
        self.result = result
        super().__init__(
            f"Some {operation}s failed ({len(result.failed)} of {result.total}). "
            "Check the logs above for details."
        )
