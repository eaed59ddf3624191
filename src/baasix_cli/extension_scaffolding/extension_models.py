"""Extension scaffolding entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExtensionType(str, Enum):
    HOOK = "hook"
    ENDPOINT = "endpoint"


@dataclass(frozen=True)
class ExtensionRequest:
    """Describe which extension to scaffold."""

    extension_type: ExtensionType
    name: str
    collection: str | None = None
    typescript: bool = False

    @property
    def directory_name(self) -> str:
        return f"baasix-{self.extension_type.value}-{self.name}"

    @property
    def file_extension(self) -> str:
        return "ts" if self.typescript else "js"
