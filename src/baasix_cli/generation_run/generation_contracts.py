"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class GenerationTarget(str, Enum):
    """What the generate command produces."""

    TYPES = "types"
    SDK_TYPES = "sdk-types"
    SCHEMA_JSON = "schema-json"

    @property
    def default_output(self) -> str:
        return "schemas.json" if self is GenerationTarget.SCHEMA_JSON else "baasix.d.ts"

    @property
    def is_typescript(self) -> bool:
        return self is not GenerationTarget.SCHEMA_JSON


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for one generation run."""

    cwd: Path
    output_path: str
    target: GenerationTarget
    url: str | None = None

    @property
    def destination(self) -> Path:
        return (self.cwd / self.output_path).resolve()


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    destination: Path | None
    schema_count: int
    target: GenerationTarget

    @property
    def written(self) -> bool:
        return self.destination is not None
