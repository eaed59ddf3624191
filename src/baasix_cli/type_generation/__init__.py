"""Type generation exports."""

from .type_declaration_builder import (
    field_to_type,
    generate_sdk_types,
    generate_types,
    is_optional_member,
    to_type_name,
)

__all__ = [
    "field_to_type",
    "generate_sdk_types",
    "generate_types",
    "is_optional_member",
    "to_type_name",
]
