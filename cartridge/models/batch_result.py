"""Outcome of a bulk backup/restore run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BatchResult:
    """Per-game outcome of ``backup_all`` / ``restore_all``, in document order."""

    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)  # game name -> error message

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed
