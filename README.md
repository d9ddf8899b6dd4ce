# kamatsuka

A library for turning API definitions written in the Stone interface
language into an OpenAPI 3.0.3 document. Stone namespaces are described
with plain dataclasses; the library builds operations for their routes and
component schemas for their structs, unions and aliases, and writes the
result as YAML. It depends only on PyYAML.

## Describing Stone definitions

`kamatsuka.stone` holds the data model:

- `StoneNamespace` – name, description, routes, structs, unions, aliases
  (name → type expression) and imports.
- `StoneRoute` – name, `params` (argument, result and error types),
  description and `attrs` (route attributes such as `style`, `host`, `auth`,
  `scope`).
- `StoneStruct` with `StoneField`s, optionally `extends` another struct.
  A field's `optional` flag follows a trailing `?` on its type unless given.
- `StoneUnion` with `StoneVariant`s; `closed` marks a closed union.
- `StoneExample` – a named example with its field values.

## Building a specification

```python
from kamatsuka.stone import StoneNamespace, StoneRoute, StoneStruct, StoneField
from kamatsuka.converter import convert_to_openapi, dump_openapi_yaml

users = StoneNamespace(
    name="users",
    routes=[
        StoneRoute(
            name="get_account",
            params=["GetAccountArg", "Account", "GetAccountError"],
            description="Get information about a user's account.",
            attrs={"scope": "account_info.read"},
        ),
    ],
    structs=[
        StoneStruct(
            name="Account",
            fields=[
                StoneField(name="account_id", field_type="String"),
                StoneField(name="email", field_type="String?"),
            ],
        ),
    ],
)

spec = convert_to_openapi(users, "https://api.dropboxapi.com/2")
print(dump_openapi_yaml(spec))
```

The document is a plain dictionary; `dump_openapi_yaml` serializes it
keeping key order.

`kamatsuka.converter.merge_namespaces_to_openapi(namespaces, namespace_map,
base_url)` merges several namespaces into one document. `namespace_map`
maps namespace names to namespaces, so that a qualified reference such as
`common.AccountId` into a known namespace resolves to `AccountId`.

### Routes

Each route becomes a `POST /<namespace>/<route>` operation
(`kamatsuka.operations.route_to_operation`):

- `style: rpc` (or no style) – the argument type is the JSON request body
  (when there is a result type and the argument is not `Void`), the result
  type the JSON `200` response.
- `style: upload` – arguments go in the `Dropbox-API-Arg` header, the body
  is binary.
- `style: download` – arguments go in the `Dropbox-API-Arg` header, the
  `200` response is binary with the result in a `Dropbox-API-Result` header.
- An error type other than `Void` adds a `400` response.
- A `host` attribute adds a per-operation server whose URL is the base URL
  with `api` replaced by the host.
- `auth`, `style`, `is_preview`, `allow_app_folder_app`, `select_admin_mode`
  and `is_cloud_doc_auth` are kept as `x-stone-*` extensions.
- The `scope` attribute (default `account_info.read`) becomes the
  operation's OAuth2 scope; `kamatsuka.operations.collect_scopes` gathers
  them all for the security scheme.

### Types

- `kamatsuka.typeschema.convert_type_to_schema` turns built-in type
  expressions such as `String(min_length=1)`, `UInt64(min_value=1)`,
  `Timestamp("%Y-%m-%d")` or `List(String, min_items=1)` into inline
  schemas; a trailing `?` makes them nullable. Other types raise
  `kamatsuka.typeschema.SchemaError`.
- `convert_type_to_schema_ref` gives an inline schema for built-ins and a
  `$ref` to `#/components/schemas/<name>` otherwise, where dots and
  underscores are removed from the name (`clean_type_name`).
- `convert_alias_to_schema` handles alias types.
- `kamatsuka.schemas.convert_struct_to_schema` builds an object schema (an
  `allOf` with the parent when the struct extends another), and
  `convert_union_to_schema` an object with a `.tag` enum and, for typed
  variants, a discriminator mapping.

### Example blocks

`kamatsuka.examples.parse_example_fields(text)` reads the `key = value`
lines of a Stone `example` block into a dictionary;
`parse_example_value` turns a single value into a string, integer, float,
boolean or `None`.

## Comparison results

`kamatsuka.results` provides `ComparisonResult` (a `ResultKind` and a
message), `count_results` and `report_results`, which prints every
non-matching result and a summary, coloured when writing to a terminal and
`NO_COLOR` is unset, and returns the counts. `kamatsuka.references` has the
helpers `extract_schema_name`, `is_stone_list_type` and
`convert_list_type_to_array_name` for `#/components/schemas/` references,
including Stone `List(...)` names.

## What the package does not do

- It has no parser for Stone source text; namespaces are built in Python.
- It does not load or validate existing OpenAPI documents, check their
  references, or compare them with Stone definitions; only the result
  types and reference-name helpers above are provided for that purpose.
- It has no command-line interface and writes no files itself.