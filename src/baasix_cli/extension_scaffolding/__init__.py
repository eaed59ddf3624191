"""Extension scaffolding exports."""

from .extension_models import ExtensionRequest, ExtensionType
from .extension_writer import (
    EXTENSIONS_DIRNAME,
    ExtensionScaffoldError,
    extension_directory,
    validate_extension_name,
    write_extension,
)

__all__ = [
    "EXTENSIONS_DIRNAME",
    "ExtensionRequest",
    "ExtensionScaffoldError",
    "ExtensionType",
    "extension_directory",
    "validate_extension_name",
    "write_extension",
]
