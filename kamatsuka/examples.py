"""Reading the key/value lines of Stone ``example`` blocks into JSON-like values."""

from __future__ import annotations

import math
import re
from typing import Any

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def parse_quoted_string(s: str) -> str:
    """Strip surrounding double quotes and unescape ``\\"``."""
    return s.strip('"').replace('\\"', '"')


def _as_int(text: str) -> int | None:
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if _I64_MIN <= value <= _I64_MAX:
        return value
    return None


def _as_float(text: str) -> float | None:
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        value = float(text)
        if not math.isfinite(value):
            raise ValueError(f"Example value is not a finite number: {text}")
    return None


def parse_example_value(text: str) -> Any:
    """Turn the text right of ``=`` into a string, number, boolean or ``None``."""
    value = text.strip()
    if value.startswith('"'):
        return parse_quoted_string(value)
    integer = _as_int(value)
    if integer is not None:
        return integer
    number = _as_float(value)
    if number is not None:
        return number
    if value in ("true", "false"):
        return value == "true"
    if value == "null":
        return None
    return value


def parse_example_fields(text: str) -> dict[str, Any]:
    """Collect ``key = value`` lines of an example block, skipping its header line."""
    fields: dict[str, Any] = {}
    for raw_line in text.split("\n"):
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        if "=" not in line or line.strip().startswith("example"):
            continue
        key, _, value = line.partition("=")
        fields[key.strip()] = parse_example_value(value)
    return fields