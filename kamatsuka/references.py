"""Helpers for schema references, including Stone ``List(...)`` names."""

from __future__ import annotations

SCHEMA_PREFIX = "#/components/schemas/"
_LIST_OPEN = "List("


def is_stone_list_type(schema_name: str) -> bool:
    """True for names written as ``List(...)``."""
    return schema_name.startswith(_LIST_OPEN) and schema_name.endswith(")")


def _list_inner(list_type: str) -> str | None:
    inner = list_type[len(_LIST_OPEN) : list_type.rfind(")")]
    if not inner:
        return None
    return inner.split(",", 1)[0].strip()


def extract_schema_name(reference: str) -> str | None:
    """Name a ``#/components/schemas/`` reference points to, or ``None``.

    A ``List(T, ...)`` target yields its element type ``T``.
    """
    if not reference.startswith(SCHEMA_PREFIX):
        return None
    schema_name = reference
    while schema_name.startswith(SCHEMA_PREFIX):
        schema_name = schema_name[len(SCHEMA_PREFIX) :]
    if is_stone_list_type(schema_name):
        inner = _list_inner(schema_name)
        if inner is not None:
            return inner
    return schema_name


def convert_list_type_to_array_name(list_type: str) -> str | None:
    """Map ``List(User)`` to ``UserArray``; ``None`` for anything else."""
    if not is_stone_list_type(list_type):
        return None
    inner = _list_inner(list_type)
    if inner is None:
        return None
    return f"{inner}Array"