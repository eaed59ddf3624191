"""Migration management entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from baasix_cli.api_access.api_models import MigrationRecord


class MigrateAction(str, Enum):
    """Actions understood by the migrate command."""

    STATUS = "status"
    LIST = "list"
    RUN = "run"
    CREATE = "create"
    ROLLBACK = "rollback"
    RESET = "reset"


@dataclass(frozen=True)
class MigrationStatus:
    """Local migration files compared with what the server has executed."""

    total: int
    executed: int
    pending: tuple[str, ...]


@dataclass(frozen=True)
class MigrationListing:
    """One local migration file and its execution record, if any."""

    name: str
    record: MigrationRecord | None

    @property
    def executed(self) -> bool:
        return self.record is not None
