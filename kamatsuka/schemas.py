"""Turning Stone structs and unions into OpenAPI component schemas."""

from __future__ import annotations

from collections.abc import Container
from typing import Any

from kamatsuka.stone import StoneStruct, StoneUnion
from kamatsuka.typeschema import (
    SCHEMA_REF_PREFIX,
    clean_type_name,
    convert_type_to_schema_ref,
    resolve_type_reference,
)

TAG_PROPERTY = ".tag"


def _reference(type_str: str, namespace_map: Container[str]) -> str:
    resolved = resolve_type_reference(type_str, namespace_map)
    return f"{SCHEMA_REF_PREFIX}{clean_type_name(resolved)}"


def convert_struct_to_schema(
    struct_def: StoneStruct, namespace_map: Container[str] | None = None
) -> dict[str, Any]:
    """Object schema for a struct; a struct that extends another becomes an ``allOf``."""
    namespace_map = namespace_map if namespace_map is not None else {}
    properties = {
        stone_field.name: convert_type_to_schema_ref(stone_field.field_type, namespace_map)
        for stone_field in struct_def.fields
    }
    required = [
        stone_field.name for stone_field in struct_def.fields if not stone_field.optional
    ]

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    if struct_def.description is not None:
        schema["description"] = struct_def.description

    if struct_def.extends is None:
        return schema

    composed: dict[str, Any] = {
        "allOf": [{"$ref": _reference(struct_def.extends, namespace_map)}, schema]
    }
    if struct_def.description is not None:
        composed["description"] = struct_def.description
    return composed


def convert_union_to_schema(
    union_def: StoneUnion, namespace_map: Container[str] | None = None
) -> dict[str, Any]:
    """Object schema with a ``.tag`` enum; typed variants feed the discriminator mapping."""
    namespace_map = namespace_map if namespace_map is not None else {}
    tags = [variant.name for variant in union_def.variants]
    mapping = {
        variant.name: _reference(variant.variant_type, namespace_map)
        for variant in union_def.variants
        if variant.variant_type is not None
    }

    schema: dict[str, Any] = {
        "type": "object",
        "properties": {TAG_PROPERTY: {"type": "string", "enum": tags}},
        "required": [TAG_PROPERTY],
    }
    if union_def.description is not None:
        schema["description"] = union_def.description
    if mapping:
        schema["discriminator"] = {"propertyName": TAG_PROPERTY, "mapping": mapping}
    return schema