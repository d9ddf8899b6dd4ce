"""Building OpenAPI operations and OAuth scopes from Stone routes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from kamatsuka.stone import StoneNamespace, StoneRoute
from kamatsuka.typeschema import SCHEMA_REF_PREFIX, clean_type_name

JSON_MEDIA = "application/json"
BINARY_MEDIA = "application/octet-stream"
DEFAULT_SCOPE = "account_info.read"
API_ARG_HEADER = "Dropbox-API-Arg"
API_RESULT_HEADER = "Dropbox-API-Result"

_STYLE_DESCRIPTIONS = {
    "rpc": "RPC-style endpoint: Both request and response bodies are JSON.",
    "upload": (
        "Upload-style endpoint: Request has JSON parameters in Dropbox-API-Arg header "
        "and binary data in body. Response body is JSON."
    ),
    "download": (
        "Download-style endpoint: Request has JSON parameters in Dropbox-API-Arg header. "
        "Response has JSON metadata in Dropbox-API-Result header and binary data in body."
    ),
}

_NAMED_HOSTS = {
    "content": "Dropbox Content Server",
    "notify": "Dropbox Notify Server",
}


def _ref_content(type_name: str) -> dict[str, Any]:
    return {JSON_MEDIA: {"schema": {"$ref": f"{SCHEMA_REF_PREFIX}{clean_type_name(type_name)}"}}}


def _object_content(description: str) -> dict[str, Any]:
    return {JSON_MEDIA: {"schema": {"type": "object", "description": description}}}


def _binary_content() -> dict[str, Any]:
    return {BINARY_MEDIA: {"schema": {"type": "string", "format": "binary"}}}


def _flag(attrs: dict[str, str], key: str) -> bool | None:
    value = attrs.get(key)
    return None if value is None else value == "true"


def _route_scope(route: StoneRoute) -> str:
    return route.attrs.get("scope", DEFAULT_SCOPE)


def _servers(host: str | None, base_url: str) -> list[dict[str, str]] | None:
    if host is None:
        return None
    description = _NAMED_HOSTS.get(host, f"Dropbox {host} Server")
    return [{"url": base_url.replace("api", host), "description": description}]


def _parameters(route: StoneRoute, style: str | None) -> list[dict[str, Any]] | None:
    if style not in ("upload", "download"):
        return None
    if route.params and route.params[0] != "Void":
        content = _ref_content(route.params[0])
    else:
        content = _object_content("JSON parameters for this request")
    return [
        {
            "name": API_ARG_HEADER,
            "in": "header",
            "description": "The request parameters as a JSON encoded string in this header.",
            "required": True,
            "content": content,
        }
    ]


def _result_headers(route: StoneRoute) -> dict[str, Any]:
    if len(route.params) >= 2 and route.params[1] != "Void":
        content = _ref_content(route.params[1])
    else:
        content = _object_content("JSON metadata for the downloaded file")
    return {
        API_RESULT_HEADER: {
            "description": "The JSON metadata response encoded as a string in this header.",
            "required": True,
            "content": content,
        }
    }


def _request_body(route: StoneRoute, style: str | None) -> dict[str, Any] | None:
    if style == "upload":
        return {"required": True, "content": _binary_content()}
    if style == "download":
        return None
    if len(route.params) > 1 and route.params[0] != "Void":
        return {"required": True, "content": _ref_content(route.params[0])}
    return None


def _responses(route: StoneRoute, style: str | None) -> dict[str, Any]:
    responses: dict[str, Any] = {}
    if style == "download":
        responses["200"] = {
            "description": "Successful response with file content",
            "content": _binary_content(),
            "headers": _result_headers(route),
        }
    elif len(route.params) > 1:
        responses["200"] = {
            "description": "Successful response",
            "content": _ref_content(route.params[1]),
        }
    else:
        responses["200"] = {"description": "Successful response"}

    if len(route.params) > 2 and route.params[2] != "Void":
        responses["400"] = {
            "description": "Error response",
            "content": _ref_content(route.params[2]),
        }
    return responses


def route_to_operation(route: StoneRoute, base_url: str) -> dict[str, Any]:
    """The POST operation for a route, as a serializable mapping."""
    attrs = route.attrs
    style = attrs.get("style")
    summary = route.description if route.description is not None else f"Execute {route.name}"
    style_description = _STYLE_DESCRIPTIONS.get(style) if style is not None else None
    description = f"{summary} {style_description}" if style_description else summary

    operation: dict[str, Any] = {
        "summary": summary,
        "operationId": route.name,
        "security": [{"oauth2": [_route_scope(route)]}],
    }
    request_body = _request_body(route, style)
    if request_body is not None:
        operation["requestBody"] = request_body
    operation["responses"] = _responses(route, style)
    servers = _servers(attrs.get("host"), base_url)
    if servers is not None:
        operation["servers"] = servers
    parameters = _parameters(route, style)
    if parameters is not None:
        operation["parameters"] = parameters
    operation["description"] = description

    extensions = {
        "x-stone-auth": attrs.get("auth"),
        "x-stone-style": style,
        "x-stone-preview": _flag(attrs, "is_preview"),
        "x-stone-allow-app-folder": _flag(attrs, "allow_app_folder_app"),
        "x-stone-select-admin-mode": attrs.get("select_admin_mode"),
        "x-stone-cloud-doc-auth": _flag(attrs, "is_cloud_doc_auth"),
    }
    operation.update((key, value) for key, value in extensions.items() if value is not None)
    return operation


def collect_scopes(namespaces: Iterable[StoneNamespace]) -> dict[str, str]:
    """Every OAuth scope used by the routes, in first-seen order, with a description."""
    scopes: dict[str, str] = {}
    for namespace in namespaces:
        for route in namespace.routes:
            scope = _route_scope(route)
            scopes[scope] = f"Access to {scope.replace('_', ' ')} operations"
    return scopes