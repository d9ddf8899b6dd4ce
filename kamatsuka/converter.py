"""Assembling a whole OpenAPI document from one or more Stone namespaces."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import yaml

from kamatsuka.operations import collect_scopes, route_to_operation
from kamatsuka.schemas import convert_struct_to_schema, convert_union_to_schema
from kamatsuka.stone import StoneNamespace
from kamatsuka.typeschema import convert_alias_to_schema

DEFAULT_BASE_URL = "https://api.dropboxapi.com/2"
OPENAPI_VERSION = "3.0.3"
AUTHORIZATION_URL = "https://www.dropbox.com/oauth2/authorize"
TOKEN_URL = "https://api.dropboxapi.com/oauth2/token"


def _info() -> dict[str, Any]:
    return {
        "title": "Dropbox API",
        "description": "Dropbox API v2 - Combined from multiple Stone definitions",
        "version": "2.0",
        "contact": {
            "name": "Dropbox API",
            "url": "https://www.dropbox.com/developers",
        },
    }


def _servers(base_url: str) -> list[dict[str, str]]:
    return [
        {"url": base_url, "description": "Dropbox API v2 - API Server"},
        {
            "url": base_url.replace("api", "content"),
            "description": "Dropbox API v2 - Content Server",
        },
        {
            "url": base_url.replace("api", "notify"),
            "description": "Dropbox API v2 - Notify Server",
        },
    ]


def _security_schemes(scopes: dict[str, str]) -> dict[str, Any]:
    return {
        "oauth2": {
            "type": "oauth2",
            "flows": {
                "authorizationCode": {
                    "authorizationUrl": AUTHORIZATION_URL,
                    "tokenUrl": TOKEN_URL,
                    "scopes": scopes,
                }
            },
        }
    }


def merge_namespaces_to_openapi(
    namespaces: Iterable[StoneNamespace],
    namespace_map: Mapping[str, StoneNamespace] | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> dict[str, Any]:
    """One OpenAPI document holding the routes and types of every namespace.

    ``namespace_map`` names the loaded namespaces, so that qualified type
    references into them resolve to the bare type name.
    """
    namespaces = list(namespaces)
    namespace_map = namespace_map if namespace_map is not None else {}
    paths: dict[str, Any] = {}
    schemas: dict[str, Any] = {}

    for namespace in namespaces:
        for route in namespace.routes:
            paths[f"/{namespace.name}/{route.name}"] = {
                "post": route_to_operation(route, base_url)
            }
        for struct_def in namespace.structs:
            schemas[struct_def.name] = convert_struct_to_schema(struct_def, namespace_map)
        for union_def in namespace.unions:
            schemas[union_def.name] = convert_union_to_schema(union_def, namespace_map)
        for name, alias_type in namespace.aliases.items():
            schemas[name] = convert_alias_to_schema(alias_type, namespace_map)

    return {
        "openapi": OPENAPI_VERSION,
        "info": _info(),
        "servers": _servers(base_url),
        "paths": paths,
        "components": {
            "securitySchemes": _security_schemes(collect_scopes(namespaces)),
            "schemas": schemas,
        },
    }


def convert_to_openapi(
    namespace: StoneNamespace, base_url: str = DEFAULT_BASE_URL
) -> dict[str, Any]:
    """OpenAPI document for a single namespace."""
    return merge_namespaces_to_openapi([namespace], {}, base_url)


def dump_openapi_yaml(spec: Mapping[str, Any]) -> str:
    """Serialize a document to YAML, keeping key order."""
    return yaml.safe_dump(
        dict(spec), sort_keys=False, allow_unicode=True, default_flow_style=False
    )