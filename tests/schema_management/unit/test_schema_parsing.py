"""Schema payload parsing tests."""

from __future__ import annotations

import pytest
from baasix_cli.schema_management import (
    FieldConstraints,
    RelationField,
    RelationKind,
    ScalarField,
    ScalarKind,
    SchemaError,
    parse_schema_descriptor,
    parse_schema_descriptors,
)


def _entry(collection_name: str, fields: dict, **schema_flags) -> dict:
    return {"collectionName": collection_name, "schema": {"fields": fields, **schema_flags}}


def test_parses_scalar_and_relation_fields_in_declared_order() -> None:
    descriptor = parse_schema_descriptor(
        _entry(
            "posts",
            {
                "id": {"type": "UUID", "primaryKey": True, "allowNull": False},
                "title": {"type": "String", "allowNull": False},
                "author": {"relType": "BelongsTo", "target": "baasix_User"},
                "tags": {"relType": "BelongsToMany", "target": "tags"},
            },
            name="Posts",
            timestamps=True,
            paranoid=True,
        )
    )

    assert descriptor.collection_name == "posts"
    assert descriptor.display_name == "Posts"
    assert descriptor.timestamps is True
    assert descriptor.soft_delete is True
    assert [field.name for field in descriptor.fields] == ["id", "title", "author", "tags"]
    assert descriptor.fields[0] == ScalarField(
        name="id", kind=ScalarKind.UUID, nullable=False, is_primary_key=True
    )
    assert descriptor.fields[2] == RelationField(
        name="author", kind=RelationKind.BELONGS_TO, target_collection="baasix_User"
    )
    assert descriptor.fields[3].kind.is_to_many


def test_nullable_is_false_only_for_explicit_false() -> None:
    descriptor = parse_schema_descriptor(
        _entry(
            "notes",
            {
                "body": {"type": "Text"},
                "draft": {"type": "Boolean", "allowNull": None},
                "title": {"type": "String", "allowNull": False},
            },
        )
    )

    assert [field.nullable for field in descriptor.fields] == [True, True, False]


def test_scalar_and_relation_kinds_are_case_insensitive_with_unknown_fallback() -> None:
    descriptor = parse_schema_descriptor(
        _entry(
            "things",
            {
                "count": {"type": "integer"},
                "shape": {"type": "POLYGON"},
                "mystery": {"type": "Money"},
                "owner": {"relType": "hasone", "target": "owners"},
            },
        )
    )

    kinds = [field.kind for field in descriptor.fields]
    assert kinds == [
        ScalarKind.INTEGER,
        ScalarKind.POLYGON,
        ScalarKind.UNKNOWN,
        RelationKind.HAS_ONE,
    ]


def test_builds_constraints_from_validate_and_values() -> None:
    descriptor = parse_schema_descriptor(
        _entry(
            "products",
            {
                "name": {"type": "String", "validate": {"len": [3, 50]}, "values": {"length": 255}},
                "price": {
                    "type": "Decimal",
                    "validate": {"min": 0, "max": 10000},
                    "values": {"precision": 10, "scale": 2},
                },
                "email": {"type": "String", "validate": {"isEmail": True, "regex": "^.+@acme$"}},
                "plain": {"type": "String", "validate": {"min": True}},
            },
        )
    )

    name, price, email, plain = descriptor.fields
    assert name.constraints == FieldConstraints(length_range=(3, 50), max_length=255)
    assert price.constraints == FieldConstraints(minimum=0, maximum=10000, precision=(10, 2))
    assert email.constraints == FieldConstraints(formats=("email",), pattern="^.+@acme$")
    assert plain.constraints is None


def test_regex_given_as_pattern_and_flags_is_joined_with_comma() -> None:
    descriptor = parse_schema_descriptor(
        _entry("codes", {"code": {"type": "String", "validate": {"regex": ["^a", "i"]}}})
    )

    assert descriptor.fields[0].constraints == FieldConstraints(pattern="^a,i")


def test_reads_enum_values_and_array_item_kind() -> None:
    descriptor = parse_schema_descriptor(
        _entry(
            "articles",
            {
                "status": {"type": "Enum", "values": {"values": ["draft", "published"]}},
                "legacy": {"type": "ENUM", "values": ["a", "b"]},
                "labels": {"type": "Array", "values": {"type": "String"}},
                "matrix": {"type": "Array"},
            },
        )
    )

    status, legacy, labels, matrix = descriptor.fields
    assert status.enum_values == ("draft", "published")
    assert legacy.enum_values == ("a", "b")
    assert labels.array_item_kind is ScalarKind.STRING
    assert matrix.array_item_kind is ScalarKind.UNKNOWN


@pytest.mark.parametrize(
    ("raw_field", "message"),
    [
        ("not-a-mapping", "posts.broken"),
        ({"allowNull": True}, "neither a type nor a relation"),
        ({"type": 42}, "type must be a string"),
        ({"relType": "BelongsTo"}, "requires a target collection"),
        ({"relType": "ManyToMany", "target": "tags"}, "unsupported relation type"),
    ],
)
def test_structurally_invalid_fields_raise_schema_error_naming_the_field(
    raw_field: object, message: str
) -> None:
    with pytest.raises(SchemaError, match=message) as excinfo:
        parse_schema_descriptors([_entry("posts", {"broken": raw_field})])

    assert "posts.broken" in str(excinfo.value)


def test_rejects_entries_without_collection_name_or_fields() -> None:
    with pytest.raises(SchemaError, match="collectionName"):
        parse_schema_descriptor({"schema": {"fields": {}}})
    with pytest.raises(SchemaError, match="fields mapping"):
        parse_schema_descriptor({"collectionName": "posts", "schema": {"fields": []}})


def test_system_collection_detection_uses_reserved_prefix() -> None:
    descriptors = parse_schema_descriptors(
        [_entry("baasix_User", {"email": {"type": "String"}}), _entry("users_archive", {})]
    )

    assert [descriptor.is_system for descriptor in descriptors] == [True, False]
