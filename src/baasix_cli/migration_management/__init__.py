"""Migration management exports."""

from .local_migrations import (
    MIGRATIONS_DIRNAME,
    MigrationError,
    create_migration_file,
    list_local_migrations,
    validate_migration_name,
)
from .migration_models import MigrateAction, MigrationListing, MigrationStatus
from .migration_planning import (
    build_migration_listing,
    build_migration_status,
    pending_migrations,
    reset_step_count,
    select_rollback,
)
from .migration_service import MigrationApi, fetch_executed_migrations

__all__ = [
    "MIGRATIONS_DIRNAME",
    "MigrateAction",
    "MigrationApi",
    "MigrationError",
    "MigrationListing",
    "MigrationStatus",
    "build_migration_listing",
    "build_migration_status",
    "create_migration_file",
    "fetch_executed_migrations",
    "list_local_migrations",
    "pending_migrations",
    "reset_step_count",
    "select_rollback",
    "validate_migration_name",
]
