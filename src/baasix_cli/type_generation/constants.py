"""Shared type generation constants."""

from __future__ import annotations

from baasix_cli.schema_management.schema_models import ScalarKind

GEOJSON_DECLARATIONS: tuple[str, ...] = (
    "// GeoJSON types for PostGIS fields",
    "declare namespace GeoJSON {",
    "  interface Point { type: 'Point'; coordinates: [number, number]; }",
    "  interface LineString { type: 'LineString'; coordinates: [number, number][]; }",
    "  interface Polygon { type: 'Polygon'; coordinates: [number, number][][]; }",
    "  type Geometry = Point | LineString | Polygon;",
    "}",
    "",
)

SDK_PACKAGE = "@tspvivek/baasix-sdk"

SCALAR_TYPES: dict[ScalarKind, str] = {
    ScalarKind.STRING: "string",
    ScalarKind.TEXT: "string",
    ScalarKind.UUID: "string",
    ScalarKind.SUID: "string",
    ScalarKind.INTEGER: "number",
    ScalarKind.BIGINT: "number",
    ScalarKind.FLOAT: "number",
    ScalarKind.REAL: "number",
    ScalarKind.DOUBLE: "number",
    ScalarKind.DECIMAL: "number",
    ScalarKind.BOOLEAN: "boolean",
    # ISO-8601 strings on the wire
    ScalarKind.DATE: "string",
    ScalarKind.DATETIME: "string",
    ScalarKind.TIME: "string",
    ScalarKind.JSON: "Record<string, unknown>",
    ScalarKind.JSONB: "Record<string, unknown>",
    ScalarKind.GEOMETRY: "GeoJSON.Geometry",
    ScalarKind.POINT: "GeoJSON.Geometry",
    ScalarKind.LINESTRING: "GeoJSON.Geometry",
    ScalarKind.POLYGON: "GeoJSON.Geometry",
}

ARRAY_ITEM_TYPES: dict[ScalarKind, str] = {
    ScalarKind.STRING: "string",
    ScalarKind.INTEGER: "number",
    ScalarKind.BOOLEAN: "boolean",
}

UNKNOWN_TYPE = "unknown"
