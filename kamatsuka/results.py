"""Outcomes of comparing Stone definitions with an OpenAPI document."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ResultKind(Enum):
    """Kind of a comparison outcome; the value is its report label."""

    MATCH = "MATCH"
    MISSING = "MISSING"
    EXTRA = "EXTRA"
    MISMATCH = "MISMATCH"
    MISSING_IN_STONE = "MISSING IN STONE"
    UNDEFINED_REFERENCE = "UNDEFINED REFERENCE"


@dataclass(frozen=True)
class ComparisonResult:
    """One outcome; every kind but ``MATCH`` carries a message."""

    kind: ResultKind
    message: str | None = None


_COLORS = {
    ResultKind.MATCH: "32",
    ResultKind.MISSING: "31",
    ResultKind.EXTRA: "34",
    ResultKind.MISMATCH: "33",
    ResultKind.MISSING_IN_STONE: "35",
    ResultKind.UNDEFINED_REFERENCE: "31",
}

_SUMMARY = (
    (ResultKind.MATCH, "Matches"),
    (ResultKind.MISSING, "Missing"),
    (ResultKind.EXTRA, "Extra"),
    (ResultKind.MISMATCH, "Mismatches"),
    (ResultKind.MISSING_IN_STONE, "Missing in Stone"),
    (ResultKind.UNDEFINED_REFERENCE, "Undefined References"),
)


def _style(text: str, color: str, bold: bool = False) -> str:
    stream = sys.stdout
    if os.environ.get("NO_COLOR") or not getattr(stream, "isatty", lambda: False)():
        return text
    codes = f"1;{color}" if bold else color
    return f"\x1b[{codes}m{text}\x1b[0m"


def count_results(results: Iterable[ComparisonResult]) -> dict[ResultKind, int]:
    """Number of results of each kind, every kind present."""
    counts = dict.fromkeys(ResultKind, 0)
    for result in results:
        counts[result.kind] += 1
    return counts


def report_results(results: Iterable[ComparisonResult]) -> dict[ResultKind, int]:
    """Print every non-matching result and a summary; return the counts."""
    results = list(results)
    print(_style("Comparison Results:", "33", bold=True))
    print()
    for result in results:
        if result.kind is ResultKind.MATCH:
            continue
        label = _style(f"{result.kind.value}:", _COLORS[result.kind], bold=True)
        print(f"{label} {result.message}")

    counts = count_results(results)
    print()
    print(_style("Summary:", "32", bold=True))
    for kind, caption in _SUMMARY:
        print(f"  {_style(str(counts[kind]), _COLORS[kind])} {caption}")

    if all(counts[kind] == 0 for kind in ResultKind if kind is not ResultKind.MATCH):
        print()
        print(_style("✓ All checks passed!", "32", bold=True))
    return counts