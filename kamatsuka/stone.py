"""Data model for the definitions found in a Stone namespace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StoneField:
    """A field of a struct; ``optional`` follows a trailing ``?`` on the type unless given."""

    name: str
    field_type: str
    optional: bool | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if self.optional is None:
            self.optional = self.field_type.endswith("?")


@dataclass
class StoneVariant:
    """A tag of a union, with or without a carried type."""

    name: str
    variant_type: str | None = None
    description: str | None = None


@dataclass
class StoneExample:
    """A named example attached to a struct or union."""

    name: str
    description: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class StoneStruct:
    """A struct definition, optionally extending another struct."""

    name: str
    fields: list[StoneField] = field(default_factory=list)
    extends: str | None = None
    description: str | None = None
    examples: list[StoneExample] = field(default_factory=list)


@dataclass
class StoneUnion:
    """A union definition; ``closed`` marks a ``union_closed``."""

    name: str
    variants: list[StoneVariant] = field(default_factory=list)
    closed: bool = False
    description: str | None = None
    examples: list[StoneExample] = field(default_factory=list)


@dataclass
class StoneRoute:
    """A route with its argument, result and error types and its attributes."""

    name: str
    params: list[str] = field(default_factory=list)
    description: str | None = None
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass
class StoneNamespace:
    """Everything defined in one Stone namespace."""

    name: str
    description: str | None = None
    routes: list[StoneRoute] = field(default_factory=list)
    structs: list[StoneStruct] = field(default_factory=list)
    unions: list[StoneUnion] = field(default_factory=list)
    aliases: dict[str, str] = field(default_factory=dict)
    imports: list[str] = field(default_factory=list)