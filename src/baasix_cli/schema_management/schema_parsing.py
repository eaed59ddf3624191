"""Conversion of raw server schema payloads into schema descriptors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import (
    FieldConstraints,
    FieldDescriptor,
    RelationField,
    RelationKind,
    ScalarField,
    ScalarKind,
    SchemaDescriptor,
)

_FORMAT_FLAGS: tuple[tuple[str, str], ...] = (
    ("isEmail", "email"),
    ("isUrl", "url"),
    ("isIP", "ip"),
    ("isUUID", "uuid"),
)


class SchemaError(Exception):
    """Raised when a schema payload is structurally invalid."""


def parse_schema_descriptors(raw_schemas: Sequence[Any]) -> list[SchemaDescriptor]:
    """Parse the `/schemas` payload, preserving collection and field order."""
    if isinstance(raw_schemas, (str, bytes)) or not isinstance(raw_schemas, Sequence):
        raise SchemaError("Schema payload must be a list of collection entries.")
    return [parse_schema_descriptor(entry) for entry in raw_schemas]


def parse_schema_descriptor(entry: Any) -> SchemaDescriptor:
    """Parse one `{collectionName, schema}` entry."""
    if not isinstance(entry, Mapping):
        raise SchemaError("Schema entries must be objects.")
    collection_name = entry.get("collectionName")
    if not isinstance(collection_name, str) or not collection_name:
        raise SchemaError("Schema entry is missing a collectionName.")

    definition = entry.get("schema")
    if not isinstance(definition, Mapping):
        raise SchemaError(f"Collection '{collection_name}' has no schema definition.")
    raw_fields = definition.get("fields")
    if not isinstance(raw_fields, Mapping):
        raise SchemaError(f"Collection '{collection_name}' schema must define a fields mapping.")

    fields = tuple(
        _parse_field(collection_name, str(field_name), raw_field)
        for field_name, raw_field in raw_fields.items()
    )
    display_name = definition.get("name")
    return SchemaDescriptor(
        collection_name=collection_name,
        fields=fields,
        display_name=display_name if isinstance(display_name, str) and display_name else None,
        timestamps=bool(definition.get("timestamps")),
        soft_delete=bool(definition.get("paranoid")),
    )


def _parse_field(collection_name: str, field_name: str, raw_field: Any) -> FieldDescriptor:
    location = f"{collection_name}.{field_name}"
    if not isinstance(raw_field, Mapping):
        raise SchemaError(f"Field '{location}' must be an object.")

    rel_type = raw_field.get("relType")
    if rel_type:
        return _parse_relation_field(location, field_name, rel_type, raw_field.get("target"))

    raw_type = raw_field.get("type")
    if raw_type is None:
        raise SchemaError(f"Field '{location}' defines neither a type nor a relation.")
    if not isinstance(raw_type, str):
        raise SchemaError(f"Field '{location}' type must be a string.")

    kind = ScalarKind.from_wire(raw_type)
    values = raw_field.get("values")
    return ScalarField(
        name=field_name,
        kind=kind,
        nullable=raw_field.get("allowNull") is not False,
        is_primary_key=bool(raw_field.get("primaryKey")),
        constraints=_parse_constraints(raw_field.get("validate"), values),
        enum_values=_enum_values(values) if kind is ScalarKind.ENUM else (),
        array_item_kind=_array_item_kind(values) if kind is ScalarKind.ARRAY else None,
    )


def _parse_relation_field(
    location: str, field_name: str, rel_type: Any, target: Any
) -> RelationField:
    if not isinstance(rel_type, str):
        raise SchemaError(f"Field '{location}' relType must be a string.")
    kind = RelationKind.from_wire(rel_type)
    if kind is None:
        raise SchemaError(f"Field '{location}' has unsupported relation type '{rel_type}'.")
    if not isinstance(target, str) or not target:
        raise SchemaError(f"Relation field '{location}' requires a target collection.")
    return RelationField(name=field_name, kind=kind, target_collection=target)


def _parse_constraints(validate: Any, values: Any) -> FieldConstraints | None:
    rules = validate if isinstance(validate, Mapping) else {}
    sizing = values if isinstance(values, Mapping) else {}

    length_range = None
    raw_len = rules.get("len")
    if isinstance(raw_len, Sequence) and not isinstance(raw_len, str) and len(raw_len) >= 2:
        length_range = (raw_len[0], raw_len[1])

    precision = None
    if sizing.get("precision") and sizing.get("scale"):
        precision = (sizing["precision"], sizing["scale"])

    constraints = FieldConstraints(
        minimum=_number_or_none(rules.get("min")),
        maximum=_number_or_none(rules.get("max")),
        length_range=length_range,
        max_length=sizing.get("length") or None,
        formats=tuple(label for flag, label in _FORMAT_FLAGS if rules.get(flag)),
        pattern=_pattern_text(rules.get("regex")),
        precision=precision,
    )
    return None if constraints.is_empty() else constraints


def _pattern_text(value: Any) -> str | None:
    if not value:
        return None
    # Sequelize accepts [pattern, flags]; render it the way JavaScript joins arrays.
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ",".join(str(part) for part in value)
    return str(value)


def _number_or_none(value: Any) -> int | float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _enum_values(values: Any) -> tuple[str, ...]:
    candidates: Any = values
    if isinstance(values, Mapping):
        candidates = values.get("values")
    if isinstance(candidates, Sequence) and not isinstance(candidates, str):
        return tuple(str(value) for value in candidates)
    return ()


def _array_item_kind(values: Any) -> ScalarKind:
    if isinstance(values, Mapping) and isinstance(values.get("type"), str):
        return ScalarKind.from_wire(values["type"])
    return ScalarKind.UNKNOWN
