"""Remote API entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class MigrationRecord:  # pylint: disable=too-many-instance-attributes
    """A migration the server reports as known or executed."""

    name: str
    id: str | None = None
    version: str | None = None
    status: str | None = None
    type: str | None = None
    executed_at: datetime | None = None
    batch: int | None = None

    @staticmethod
    def from_payload(payload: Mapping[str, Any]) -> MigrationRecord:
        batch = payload.get("batch")
        return MigrationRecord(
            name=str(payload.get("name", "")),
            id=_optional_text(payload.get("id")),
            version=_optional_text(payload.get("version")),
            status=_optional_text(payload.get("status")),
            type=_optional_text(payload.get("type")),
            executed_at=_parse_timestamp(payload.get("executedAt")),
            batch=batch if isinstance(batch, int) and not isinstance(batch, bool) else None,
        )


@dataclass(frozen=True)
class MigrationCommandResult:
    """Server answer to a run or rollback request."""

    success: bool
    message: str

    @staticmethod
    def from_payload(payload: Mapping[str, Any]) -> MigrationCommandResult:
        return MigrationCommandResult(
            success=bool(payload.get("success")),
            message=str(payload.get("message") or ""),
        )


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
