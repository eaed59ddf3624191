"""Local migration file discovery and creation."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path

from baasix_cli.template_rendering import render_template

MIGRATIONS_DIRNAME = "migrations"
MIGRATION_SUFFIXES: tuple[str, ...] = (".js", ".ts")

_MIGRATION_NAME = re.compile(r"^[a-z0-9_]+$", re.IGNORECASE)


class MigrationError(Exception):
    """Raised when a migration action cannot be completed."""


def migrations_dir(cwd: Path | str) -> Path:
    return Path(cwd) / MIGRATIONS_DIRNAME


def list_local_migrations(cwd: Path | str) -> list[str]:
    """Return sorted migration filenames; empty when the directory is missing."""
    directory = migrations_dir(cwd)
    if not directory.is_dir():
        return []
    return sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and entry.suffix in MIGRATION_SUFFIXES
    )


def validate_migration_name(name: str) -> str:
    """Return the stripped name or raise MigrationError."""
    stripped = name.strip()
    if not stripped:
        raise MigrationError("Migration name is required.")
    if not _MIGRATION_NAME.match(stripped):
        raise MigrationError(
            "Migration name can only contain letters, numbers, and underscores."
        )
    return stripped


def create_migration_file(cwd: Path | str, name: str, *, now: datetime | None = None) -> Path:
    """Write a new timestamped migration file from the migration template.

    Raises:
      MigrationError: If the name is invalid or the file already exists.
      OSError: If writing the file fails.
    """
    migration_name = validate_migration_name(name)
    created_at = now or datetime.now(UTC)
    directory = migrations_dir(cwd)
    directory.mkdir(parents=True, exist_ok=True)

    filename = f"{created_at.strftime('%Y%m%d%H%M%S')}_{migration_name}.js"
    destination = directory / filename
    if destination.exists():
        raise MigrationError(f"Migration file {filename} already exists.")
    destination.write_text(
        render_template(
            "migration/migration.js.j2",
            name=migration_name,
            created_at=created_at.isoformat(),
        ),
        encoding="utf-8",
    )
    return destination
