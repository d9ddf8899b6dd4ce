"""Mapping Stone type expressions to OpenAPI schema dictionaries."""

from __future__ import annotations

import re
from collections.abc import Container
from typing import Any

SCHEMA_REF_PREFIX = "#/components/schemas/"

# Key order of a serialized schema object.
_SCHEMA_KEYS = (
    "type",
    "properties",
    "required",
    "allOf",
    "items",
    "enum",
    "description",
    "format",
    "minLength",
    "maxLength",
    "minimum",
    "maximum",
    "nullable",
    "discriminator",
)

_PRIMITIVES = frozenset(
    {
        "String",
        "Integer",
        "Int32",
        "Int64",
        "UInt32",
        "UInt64",
        "Boolean",
        "Float",
        "Float32",
        "Float64",
        "Void",
        "Bytes",
        "Timestamp",
    }
)

_INT_PREFIXES = ("Int32(", "Int64(", "UInt32(", "UInt64(")
_FLOAT_PREFIXES = ("Float32(", "Float64(")
_INLINE_PREFIXES = ("List(", "String(", "Timestamp(", *_INT_PREFIXES, *_FLOAT_PREFIXES)

_INT_TEXT = re.compile(r"[+-]?[0-9]+")


class SchemaError(ValueError):
    """Raised when a Stone type cannot be turned into a schema."""


def _schema(**fields: Any) -> dict[str, Any]:
    return {key: fields[key] for key in _SCHEMA_KEYS if fields.get(key) is not None}


def _reference(type_name: str) -> dict[str, str]:
    return {"$ref": f"{SCHEMA_REF_PREFIX}{clean_type_name(type_name)}"}


def _parse_int(text: str, bits: int) -> int | None:
    if not _INT_TEXT.fullmatch(text):
        return None
    value = int(text)
    low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    return value if low <= value <= high else None


def _constraints(clean_type: str, names: dict[str, str], bits: int) -> dict[str, int]:
    """Read ``name=value`` integer parameters inside the parentheses."""
    start = clean_type.find("(")
    end = clean_type.rfind(")")
    if start == -1 or end == -1:
        return {}
    found: dict[str, int] = {}
    for param in clean_type[start + 1 : end].split(","):
        param = param.strip()
        for prefix, key in names.items():
            if param.startswith(prefix):
                value = _parse_int(param[len(prefix) :], bits)
                if value is None:
                    found.pop(key, None)
                else:
                    found[key] = value
    return found


def clean_type_name(type_name: str) -> str:
    """Schema name for a type: trimmed, with dots and underscores removed."""
    return type_name.strip().replace(".", "").replace("_", "")


def capitalize(s: str) -> str:
    """Upper-case the first character only."""
    return s[:1].upper() + s[1:]


def resolve_type_reference(type_str: str, namespace_map: Container[str]) -> str:
    """Drop a ``namespace.`` qualifier when that namespace is known."""
    namespace_name, dot, type_name = type_str.partition(".")
    if dot and namespace_name in namespace_map:
        return type_name
    return type_str


def extract_list_inner_type(list_type: str) -> str:
    """Element type of ``List(T, ...)``."""
    start = list_type.find("(")
    end = list_type.rfind(")")
    if start == -1 or end == -1 or end < start:
        raise SchemaError(f"Invalid list type: {list_type}")
    return list_type[start + 1 : end].split(",", 1)[0].strip()


def convert_type_to_schema(
    type_str: str, namespace_map: Container[str] | None = None
) -> dict[str, Any]:
    """Inline schema for a built-in Stone type; a trailing ``?`` makes it nullable."""
    namespace_map = namespace_map if namespace_map is not None else {}
    clean_type = type_str.rstrip("?")
    nullable = True if type_str.endswith("?") else None

    if clean_type.startswith("List("):
        inner = extract_list_inner_type(clean_type)
        return _schema(
            type="array",
            items=convert_type_to_schema_ref(inner, namespace_map),
            nullable=nullable,
        )
    if clean_type.startswith("String("):
        lengths = _constraints(
            clean_type, {"min_length=": "minLength", "max_length=": "maxLength"}, 32
        )
        return _schema(type="string", nullable=nullable, **lengths)
    if clean_type.startswith("Timestamp("):
        return _schema(type="string", format="date-time", nullable=nullable)
    if clean_type.startswith(_INT_PREFIXES):
        wide = clean_type.startswith(("Int64", "UInt64"))
        bounds = _constraints(
            clean_type, {"min_value=": "minimum", "max_value=": "maximum"}, 64
        )
        return _schema(
            type="integer",
            format="int64" if wide else "int32",
            nullable=nullable,
            **bounds,
        )
    if clean_type.startswith(_FLOAT_PREFIXES):
        double = clean_type.startswith("Float64")
        return _schema(
            type="number", format="double" if double else "float", nullable=nullable
        )

    if clean_type == "String":
        return _schema(type="string", nullable=nullable)
    if clean_type in ("Integer", "Int32", "Int64", "UInt32", "UInt64"):
        return _schema(type="integer", format="int64", nullable=nullable)
    if clean_type == "Boolean":
        return _schema(type="boolean", nullable=nullable)
    if clean_type in ("Float", "Float32", "Float64"):
        return _schema(type="number", format="double", nullable=nullable)
    if clean_type == "Bytes":
        return _schema(type="string", format="byte", nullable=nullable)
    if clean_type == "Timestamp":
        return _schema(type="string", format="date-time", nullable=nullable)
    if clean_type == "Void":
        return _schema(type="object", nullable=nullable)
    raise SchemaError(f"Cannot convert type {clean_type} to inline schema")


def convert_type_to_schema_ref(
    type_str: str, namespace_map: Container[str] | None = None
) -> dict[str, Any]:
    """Inline schema for built-in types, a ``$ref`` for anything else."""
    namespace_map = namespace_map if namespace_map is not None else {}
    clean_type = type_str.rstrip("?")
    if clean_type in _PRIMITIVES or clean_type.startswith(_INLINE_PREFIXES):
        return convert_type_to_schema(type_str, namespace_map)
    return _reference(resolve_type_reference(clean_type, namespace_map))


def convert_alias_to_schema(
    alias_type: str, namespace_map: Container[str] | None = None
) -> dict[str, Any]:
    """Schema for an alias: inline for built-ins, ``allOf`` of a reference otherwise."""
    namespace_map = namespace_map if namespace_map is not None else {}
    clean_type = alias_type.rstrip("?")
    if clean_type in _PRIMITIVES or clean_type.startswith(_INLINE_PREFIXES):
        return convert_type_to_schema(alias_type, namespace_map)
    resolved = resolve_type_reference(clean_type, namespace_map)
    return _schema(
        allOf=[_reference(resolved)],
        nullable=True if alias_type.endswith("?") else None,
    )