"""Schema management entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SYSTEM_COLLECTION_PREFIX = "baasix_"


class ScalarKind(str, Enum):
    """Scalar column types reported by the server."""

    STRING = "STRING"
    TEXT = "TEXT"
    UUID = "UUID"
    SUID = "SUID"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    JSON = "JSON"
    JSONB = "JSONB"
    ARRAY = "ARRAY"
    ENUM = "ENUM"
    GEOMETRY = "GEOMETRY"
    POINT = "POINT"
    LINESTRING = "LINESTRING"
    POLYGON = "POLYGON"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_wire(cls, value: str) -> ScalarKind:
        """Resolve a server type name case-insensitively, falling back to UNKNOWN."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.UNKNOWN


class RelationKind(str, Enum):
    """Relation cardinalities as seen from the declaring collection."""

    BELONGS_TO = "BelongsTo"
    HAS_ONE = "HasOne"
    HAS_MANY = "HasMany"
    BELONGS_TO_MANY = "BelongsToMany"

    @property
    def is_to_many(self) -> bool:
        return self in (RelationKind.HAS_MANY, RelationKind.BELONGS_TO_MANY)

    @classmethod
    def from_wire(cls, value: str) -> RelationKind | None:
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


@dataclass(frozen=True)
class FieldConstraints:  # pylint: disable=too-many-instance-attributes
    """Validation rules attached to a scalar field."""

    minimum: int | float | None = None
    maximum: int | float | None = None
    length_range: tuple[int, int] | None = None
    max_length: int | None = None
    formats: tuple[str, ...] = ()
    pattern: str | None = None
    precision: tuple[int, int] | None = None

    def is_empty(self) -> bool:
        return self == FieldConstraints()


@dataclass(frozen=True)
class ScalarField:  # pylint: disable=too-many-instance-attributes
    """Field holding a value directly."""

    name: str
    kind: ScalarKind
    nullable: bool = True
    is_primary_key: bool = False
    constraints: FieldConstraints | None = None
    enum_values: tuple[str, ...] = ()
    array_item_kind: ScalarKind | None = None


@dataclass(frozen=True)
class RelationField:
    """Field referencing records of another collection."""

    name: str
    kind: RelationKind
    target_collection: str


FieldDescriptor = ScalarField | RelationField


@dataclass(frozen=True)
class SchemaDescriptor:
    """One collection as described by the server."""

    collection_name: str
    fields: tuple[FieldDescriptor, ...] = ()
    display_name: str | None = None
    timestamps: bool = False
    soft_delete: bool = False

    @property
    def is_system(self) -> bool:
        return is_system_collection(self.collection_name)


def is_system_collection(collection_name: str) -> bool:
    """Return True for built-in collections shipped by the platform."""
    return collection_name.startswith(SYSTEM_COLLECTION_PREFIX)
