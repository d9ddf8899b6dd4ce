"""Build OpenAPI documents from Stone API definitions."""

__version__ = "0.1.0"

__all__ = [
    "stone",
    "examples",
    "references",
    "typeschema",
    "results",
    "schemas",
    "operations",
    "converter",
]