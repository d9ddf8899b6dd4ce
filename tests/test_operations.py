import pytest

from kamatsuka.operations import collect_scopes, route_to_operation
from kamatsuka.stone import StoneNamespace, StoneRoute

BASE = "https://api.example.com"


@pytest.fixture
def upload_route():
    return StoneRoute(
        name="upload_file",
        description="Upload a file",
        params=["Void", "User"],
        attrs={
            "host": "content",
            "auth": "user",
            "style": "upload",
            "is_preview": "false",
            "allow_app_folder_app": "true",
            "select_admin_mode": "team_admin",
            "scope": "files.content.write",
        },
    )


def test_upload_route_server_and_extensions(upload_route):
    op = route_to_operation(upload_route, BASE)
    assert len(op["servers"]) == 1
    assert op["servers"][0]["url"] == "https://content.example.com"
    assert op["servers"][0]["description"] == "Dropbox Content Server"
    assert op["x-stone-auth"] == "user"
    assert op["x-stone-style"] == "upload"
    assert op["x-stone-preview"] is False
    assert op["x-stone-allow-app-folder"] is True
    assert op["x-stone-select-admin-mode"] == "team_admin"
    assert "x-stone-cloud-doc-auth" not in op


def test_upload_route_body_and_parameters(upload_route):
    op = route_to_operation(upload_route, BASE)
    assert op["requestBody"] == {
        "required": True,
        "content": {
            "application/octet-stream": {"schema": {"type": "string", "format": "binary"}}
        },
    }
    param = op["parameters"][0]
    assert param["name"] == "Dropbox-API-Arg"
    assert param["in"] == "header"
    assert param["required"] is True
    assert param["content"]["application/json"]["schema"] == {
        "type": "object",
        "description": "JSON parameters for this request",
    }
    assert op["responses"]["200"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/User"
    }
    assert op["security"] == [{"oauth2": ["files.content.write"]}]
    assert op["summary"] == "Upload a file"
    assert op["description"].startswith("Upload a file Upload-style endpoint:")


def test_plain_route_defaults():
    route = StoneRoute(name="get_user", description="Get a user", params=["Void", "User"])
    op = route_to_operation(route, BASE)
    assert "requestBody" not in op
    assert "servers" not in op
    assert "parameters" not in op
    assert op["operationId"] == "get_user"
    assert op["security"] == [{"oauth2": ["account_info.read"]}]
    assert op["description"] == "Get a user"
    assert list(op["responses"]) == ["200"]
    assert not any(key.startswith("x-stone") for key in op)


def test_rpc_route_with_arg_and_error():
    route = StoneRoute(
        name="list_folder",
        params=["ListFolderArg", "ListFolderResult", "list_folder_error"],
        attrs={"style": "rpc"},
    )
    op = route_to_operation(route, BASE)
    assert op["summary"] == "Execute list_folder"
    assert op["description"] == (
        "Execute list_folder RPC-style endpoint: Both request and response bodies are JSON."
    )
    assert op["requestBody"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ListFolderArg"
    }
    assert op["responses"]["400"]["description"] == "Error response"
    assert op["responses"]["400"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/listfoldererror"
    }


def test_void_error_has_no_400():
    route = StoneRoute(name="ping", params=["Void", "Void", "Void"])
    op = route_to_operation(route, BASE)
    assert "400" not in op["responses"]
    assert "requestBody" not in op


def test_single_param_route_has_bare_200():
    route = StoneRoute(name="noop", params=["Void"])
    op = route_to_operation(route, BASE)
    assert op["responses"] == {"200": {"description": "Successful response"}}


def test_download_route():
    route = StoneRoute(
        name="download",
        params=["DownloadArg", "FileMetadata", "DownloadError"],
        attrs={"style": "download", "host": "content"},
    )
    op = route_to_operation(route, BASE)
    assert "requestBody" not in op
    ok = op["responses"]["200"]
    assert ok["description"] == "Successful response with file content"
    assert "application/octet-stream" in ok["content"]
    header = ok["headers"]["Dropbox-API-Result"]
    assert header["required"] is True
    assert header["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/FileMetadata"
    }
    assert op["parameters"][0]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/DownloadArg"
    }


def test_download_route_without_result_type():
    route = StoneRoute(name="get_blob", params=["Arg", "Void"], attrs={"style": "download"})
    op = route_to_operation(route, BASE)
    header = op["responses"]["200"]["headers"]["Dropbox-API-Result"]
    assert header["content"]["application/json"]["schema"]["description"] == (
        "JSON metadata for the downloaded file"
    )


def test_notify_and_custom_hosts():
    notify = route_to_operation(StoneRoute(name="a", attrs={"host": "notify"}), BASE)
    assert notify["servers"] == [
        {"url": "https://notify.example.com", "description": "Dropbox Notify Server"}
    ]
    other = route_to_operation(StoneRoute(name="b", attrs={"host": "media"}), BASE)
    assert other["servers"][0]["url"] == "https://media.example.com"
    assert other["servers"][0]["description"] == "Dropbox media Server"


def test_cloud_doc_auth_flag():
    op = route_to_operation(StoneRoute(name="c", attrs={"is_cloud_doc_auth": "true"}), BASE)
    assert op["x-stone-cloud-doc-auth"] is True


def test_operation_key_order(upload_route):
    op = route_to_operation(upload_route, BASE)
    keys = list(op)
    assert keys[:5] == ["summary", "operationId", "security", "requestBody", "responses"]
    assert keys.index("description") < keys.index("x-stone-auth")


def test_collect_scopes_orders_and_dedups():
    namespaces = [
        StoneNamespace(
            name="files",
            routes=[
                StoneRoute(name="a", attrs={"scope": "files.content.write"}),
                StoneRoute(name="b"),
            ],
        ),
        StoneNamespace(
            name="users",
            routes=[StoneRoute(name="c", attrs={"scope": "files.content.write"})],
        ),
    ]
    scopes = collect_scopes(namespaces)
    assert list(scopes) == ["files.content.write", "account_info.read"]
    assert scopes["account_info.read"] == "Access to account info.read operations"


def test_collect_scopes_empty():
    assert collect_scopes([StoneNamespace(name="empty")]) == {}