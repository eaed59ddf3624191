"""Pure planning helpers comparing local files with executed migrations."""

from __future__ import annotations

from collections.abc import Sequence

from baasix_cli.api_access.api_models import MigrationRecord

from .migration_models import MigrationListing, MigrationStatus


def pending_migrations(
    local_migrations: Sequence[str], executed: Sequence[MigrationRecord]
) -> list[str]:
    """Local migration names the server has not executed yet, in local order."""
    executed_names = {record.name for record in executed}
    return [name for name in local_migrations if name not in executed_names]


def build_migration_status(
    local_migrations: Sequence[str], executed: Sequence[MigrationRecord]
) -> MigrationStatus:
    return MigrationStatus(
        total=len(local_migrations),
        executed=len(executed),
        pending=tuple(pending_migrations(local_migrations, executed)),
    )


def build_migration_listing(
    local_migrations: Sequence[str], executed: Sequence[MigrationRecord]
) -> list[MigrationListing]:
    records_by_name = {record.name: record for record in executed}
    return [
        MigrationListing(name=name, record=records_by_name.get(name)) for name in local_migrations
    ]


def select_rollback(executed: Sequence[MigrationRecord], steps: int) -> list[MigrationRecord]:
    """Migrations belonging to the ``steps`` most recent batches, newest batch first.

    A missing batch number counts as batch 0.
    """
    if steps <= 0:
        return []
    ordered = sorted(executed, key=lambda record: record.batch or 0, reverse=True)
    batches: set[int] = set()
    selected: list[MigrationRecord] = []
    for record in ordered:
        batch = record.batch or 0
        if len(batches) < steps:
            batches.add(batch)
        if batch in batches:
            selected.append(record)
    return selected


def reset_step_count(executed: Sequence[MigrationRecord]) -> int:
    """Number of rollback steps needed to undo every executed batch."""
    return max((record.batch or 0 for record in executed), default=0)
