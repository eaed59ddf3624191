"""Schema management exports."""

from .schema_models import (
    SYSTEM_COLLECTION_PREFIX,
    FieldConstraints,
    FieldDescriptor,
    RelationField,
    RelationKind,
    ScalarField,
    ScalarKind,
    SchemaDescriptor,
    is_system_collection,
)
from .schema_parsing import SchemaError, parse_schema_descriptor, parse_schema_descriptors

__all__ = [
    "SYSTEM_COLLECTION_PREFIX",
    "FieldConstraints",
    "FieldDescriptor",
    "RelationField",
    "RelationKind",
    "ScalarField",
    "ScalarKind",
    "SchemaDescriptor",
    "SchemaError",
    "is_system_collection",
    "parse_schema_descriptor",
    "parse_schema_descriptors",
]
