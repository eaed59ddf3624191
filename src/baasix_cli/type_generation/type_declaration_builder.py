"""TypeScript declaration generation from collection schemas.

The builders are pure: they take parsed schema descriptors and return text.
Fetching schemas and writing the result belong to the callers.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import UTC, datetime

from baasix_cli.schema_management.schema_models import (
    FieldConstraints,
    FieldDescriptor,
    RelationField,
    ScalarField,
    ScalarKind,
    SchemaDescriptor,
    is_system_collection,
)

from .constants import (
    ARRAY_ITEM_TYPES,
    GEOJSON_DECLARATIONS,
    SCALAR_TYPES,
    SDK_PACKAGE,
    UNKNOWN_TYPE,
)

_WORD_SEPARATOR = re.compile(r"[-_]")


def to_type_name(collection_name: str) -> str:
    """Derive the interface name for a collection.

    Examples::

        to_type_name("order_items") -> "OrderItems"
        to_type_name("order-items") -> "OrderItems"
    """
    return "".join(
        word[:1].upper() + word[1:].lower() for word in _WORD_SEPARATOR.split(collection_name)
    )


def field_to_type(field: FieldDescriptor) -> tuple[str, str | None]:
    """Return the TypeScript type and optional doc annotation for one field."""
    if isinstance(field, RelationField):
        target_type = to_type_name(field.target_collection)
        if field.kind.is_to_many:
            return f"{target_type}[] | null", None
        return f"{target_type} | null", None

    base_type = _scalar_base_type(field)
    null_suffix = " | null" if field.nullable else ""
    return f"{base_type}{null_suffix}", _constraint_annotation(field.constraints)


def is_optional_member(field: FieldDescriptor) -> bool:
    """Relations are always optional; scalars unless non-nullable or primary key."""
    if isinstance(field, RelationField):
        return True
    return field.nullable and not field.is_primary_key


def generate_types(
    schemas: Sequence[SchemaDescriptor], *, generated_at: datetime | None = None
) -> str:
    """Generate interfaces, the collection-name union and the name-to-type map."""
    lines = _banner(
        "Auto-generated TypeScript types for Baasix collections",
        "baasix generate types",
        generated_at,
    )
    lines.extend(GEOJSON_DECLARATIONS)

    referenced = _referenced_system_collections(schemas)
    emitted: set[str] = set()
    for schema in schemas:
        if schema.collection_name in referenced and schema.collection_name not in emitted:
            emitted.add(schema.collection_name)
            lines.extend(_system_interface(schema))

    user_schemas = [schema for schema in schemas if not schema.is_system]
    for schema in user_schemas:
        lines.extend(_collection_interface(schema))

    lines.extend(_collection_name_union(user_schemas))
    lines.extend(_collection_type_map(user_schemas))
    return "\n".join(lines)


def generate_sdk_types(
    schemas: Sequence[SchemaDescriptor], *, generated_at: datetime | None = None
) -> str:
    """Generate the declarations plus a typed client factory wrapping the SDK."""
    lines = _banner(
        "Auto-generated typed SDK helpers for Baasix collections",
        "baasix generate sdk-types",
        generated_at,
    )
    lines.extend(
        [
            f"import {{ createBaasix }} from '{SDK_PACKAGE}';",
            f"import type {{ QueryParams, Filter, PaginatedResponse }} from '{SDK_PACKAGE}';",
            "",
            generate_types(schemas, generated_at=generated_at),
            "/**",
            " * Create a typed Baasix client with collection-specific methods",
            " */",
            "export function createTypedBaasix(config: Parameters<typeof createBaasix>[0]) {",
            "  const client = createBaasix(config);",
            "",
            "  return {",
            "    ...client,",
            "    /**",
            "     * Type-safe items access",
            "     */",
            "    collections: {",
        ]
    )
    for schema in schemas:
        if schema.is_system:
            continue
        type_name = to_type_name(schema.collection_name)
        name_literal = _string_literal(schema.collection_name)
        lines.append(f"      {name_literal}: client.items<{type_name}>({name_literal}),")
    lines.extend(["    },", "  };", "}", ""])
    return "\n".join(lines)


def _banner(title: str, command: str, generated_at: datetime | None) -> list[str]:
    timestamp = (generated_at or datetime.now(UTC)).isoformat()
    return [
        "/**",
        f" * {title}",
        f" * Generated at: {timestamp}",
        " *",
        f" * Do not edit this file manually. Re-run '{command}' to update.",
        " */",
        "",
    ]


def _referenced_system_collections(schemas: Sequence[SchemaDescriptor]) -> set[str]:
    referenced: set[str] = set()
    for schema in schemas:
        for field in schema.fields:
            if (
                isinstance(field, RelationField)
                and is_system_collection(field.target_collection)
                and field.target_collection != schema.collection_name
            ):
                referenced.add(field.target_collection)
    return referenced


def _system_interface(schema: SchemaDescriptor) -> list[str]:
    # Relations on system collections are dropped to keep expansion one level deep.
    scalar_fields = [field for field in schema.fields if isinstance(field, ScalarField)]
    label = schema.display_name or schema.collection_name
    lines = ["/**", f" * {label} (system collection)", " */"]
    lines.append(f"export interface {to_type_name(schema.collection_name)} {{")
    for field in scalar_fields:
        lines.extend(_member_lines(field))
    lines.extend(["}", ""])
    return lines


def _collection_interface(schema: SchemaDescriptor) -> list[str]:
    label = schema.display_name or schema.collection_name
    lines = ["/**", f" * {label} collection", " */"]
    lines.append(f"export interface {to_type_name(schema.collection_name)} {{")
    for field in schema.fields:
        lines.extend(_member_lines(field))
    if schema.timestamps:
        lines.append("  createdAt?: string;")
        lines.append("  updatedAt?: string;")
    if schema.soft_delete:
        lines.append("  deletedAt?: string | null;")
    lines.extend(["}", ""])
    return lines


def _member_lines(field: FieldDescriptor) -> list[str]:
    type_text, annotation = field_to_type(field)
    optional = "?" if is_optional_member(field) else ""
    lines = []
    if annotation:
        lines.append(f"  /** {annotation} */")
    lines.append(f"  {field.name}{optional}: {type_text};")
    return lines


def _collection_name_union(schemas: Sequence[SchemaDescriptor]) -> list[str]:
    lines = ["/**", " * All collection names", " */"]
    if not schemas:
        lines.extend(["export type CollectionName = never;", ""])
        return lines
    lines.append("export type CollectionName =")
    for schema in schemas:
        lines.append(f"  | {_string_literal(schema.collection_name)}")
    lines[-1] += ";"
    lines.append("")
    return lines


def _collection_type_map(schemas: Sequence[SchemaDescriptor]) -> list[str]:
    lines = ["/**", " * Map collection names to their types", " */"]
    lines.append("export interface CollectionTypeMap {")
    for schema in schemas:
        key = _string_literal(schema.collection_name)
        lines.append(f"  {key}: {to_type_name(schema.collection_name)};")
    lines.extend(["}", ""])
    return lines


def _scalar_base_type(field: ScalarField) -> str:
    if field.kind is ScalarKind.ENUM:
        if field.enum_values:
            return " | ".join(_string_literal(value) for value in field.enum_values)
        return "string"
    if field.kind is ScalarKind.ARRAY:
        item_kind = field.array_item_kind or ScalarKind.UNKNOWN
        return f"{ARRAY_ITEM_TYPES.get(item_kind, UNKNOWN_TYPE)}[]"
    return SCALAR_TYPES.get(field.kind, UNKNOWN_TYPE)


def _constraint_annotation(constraints: FieldConstraints | None) -> str | None:
    if constraints is None:
        return None
    parts: list[str] = []
    if constraints.minimum is not None:
        parts.append(f"@min {constraints.minimum}")
    if constraints.maximum is not None:
        parts.append(f"@max {constraints.maximum}")
    if constraints.length_range is not None:
        low, high = constraints.length_range
        parts.append(f"@length {low}-{high}")
    if constraints.max_length is not None:
        parts.append(f"@maxLength {constraints.max_length}")
    parts.extend(f"@format {label}" for label in constraints.formats)
    if constraints.pattern:
        parts.append(f"@pattern {constraints.pattern}")
    if constraints.precision is not None:
        precision, scale = constraints.precision
        parts.append(f"@precision {precision},{scale}")
    # "*/" would close the surrounding doc comment.
    return " ".join(parts).replace("*/", "*\\/") if parts else None


def _string_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"
