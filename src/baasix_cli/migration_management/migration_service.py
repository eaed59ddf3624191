"""Remote migration calls shared by the migrate actions."""

from __future__ import annotations

import logging
from typing import Protocol

from baasix_cli.api_access.api_errors import EndpointNotFoundError
from baasix_cli.api_access.api_models import MigrationCommandResult, MigrationRecord

LOGGER = logging.getLogger(__name__)


class MigrationApi(Protocol):
    """Subset of the API client used by the migrate command."""

    def fetch_migrations(self) -> list[MigrationRecord]: ...

    def run_migrations(
        self, *, step: int | None = None, dry_run: bool = False
    ) -> MigrationCommandResult: ...

    def rollback_migrations(
        self, *, step: int | None = None, batch: int | None = None
    ) -> MigrationCommandResult: ...


def fetch_executed_migrations(api: MigrationApi) -> list[MigrationRecord]:
    """Executed migrations, or none when the server has no migrations endpoint."""
    try:
        return api.fetch_migrations()
    except EndpointNotFoundError:
        LOGGER.debug("Server exposes no /migrations endpoint; treating as none executed")
        return []
