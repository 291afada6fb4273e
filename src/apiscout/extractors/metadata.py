from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from apiscout.extractors.profiles import FrameworkProfile
from apiscout.extractors.syntax import CallShape, DialectSyntax
from apiscout.extractors.walker import walk

# axios request config keys
CLIENT_HEADERS_KEY = "headers"
CLIENT_QUERY_KEY = "params"
CLIENT_BODY_KEY = "data"

# fastify route schema keys
_SCHEMA_SECTIONS = {"headers": "headers", "querystring": "query", "query": "query", "body": "body"}


@dataclass
class Metadata:
    headers: dict[str, Any] = field(default_factory=dict)
    query_parameters: dict[str, Any] = field(default_factory=dict)
    body: Any = None


def extract_client_metadata(syntax: DialectSyntax, call: CallShape) -> Metadata:
    """
    axios-style config object in the second argument:
      axios.post(url, { headers: {...}, params: {...}, data: {...} })
    Each piece is independent; a missing or non-literal section stays empty.
    """
    meta = Metadata()
    if len(call.arguments) < 2:
        return meta

    entries = syntax.object_entries(call.arguments[1])
    for key, value in entries or []:
        if key == CLIENT_HEADERS_KEY:
            headers = syntax.literal_value(value)
            if isinstance(headers, dict) and value is not headers:
                meta.headers = headers
        elif key == CLIENT_QUERY_KEY:
            params = syntax.literal_value(value)
            if isinstance(params, dict) and value is not params:
                meta.query_parameters = params
        elif key == CLIENT_BODY_KEY:
            meta.body = syntax.literal_value(value)
    return meta


def extract_server_metadata(
    syntax: DialectSyntax,
    call: CallShape,
    profile: FrameworkProfile,
) -> Metadata:
    """
    Best-effort scan of a route registration.

    Route options (fastify `schema`) are read first, then the handler (last
    function argument) is scanned for what it reads off its first parameter:
      req.body.name / const { name } = req.body   -> body["name"]
      req.query.page                              -> query["page"]
      req.headers["x-api-key"] / req.get("X-Id")  -> headers[...]
    Names found in the handler map to None; the value is not known statically.
    """
    meta = Metadata()
    rest = call.arguments[1:]

    if profile.options_schema:
        for arg in rest:
            entries = syntax.object_entries(arg)
            if entries is not None:
                _apply_schema(syntax, entries, meta)
                break

    handler = _find_handler(syntax, rest)
    if handler is not None:
        _scan_handler(syntax, handler, profile, meta)
    return meta


def _find_handler(syntax: DialectSyntax, args: tuple[dict, ...]) -> Optional[dict]:
    for arg in reversed(args):
        if syntax.function_params(arg) is not None:
            return arg
    return None


def _apply_schema(syntax: DialectSyntax, entries: list[tuple[str, dict]], meta: Metadata) -> None:
    schema_node = dict(entries).get("schema")
    if schema_node is None:
        return
    schema = syntax.literal_value(schema_node)
    if not isinstance(schema, dict) or schema is schema_node:
        return

    for key, section in _SCHEMA_SECTIONS.items():
        if key not in schema:
            continue
        value = schema[key]
        if section == "body":
            meta.body = value
            continue
        # JSON schema objects list their fields under "properties"
        fields = value.get("properties", value) if isinstance(value, dict) else None
        if not isinstance(fields, dict):
            continue
        target = meta.headers if section == "headers" else meta.query_parameters
        target.update(fields)


def _scan_handler(
    syntax: DialectSyntax,
    handler: dict,
    profile: FrameworkProfile,
    meta: Metadata,
) -> None:
    params = syntax.function_params(handler) or []
    request = params[0] if params else ""
    if not request:
        return

    body_fields: Optional[dict[str, Any]] = None
    body_seen = False

    def record(section: str, name: Optional[str]) -> None:
        nonlocal body_fields, body_seen
        if section == "body":
            if body_fields is None:
                body_fields = {}
            body_seen = True
            if name is not None:
                body_fields.setdefault(name, None)
        elif name is not None:
            target = meta.headers if section == "headers" else meta.query_parameters
            target.setdefault(name, None)

    def classify(chain: list[str]) -> Optional[tuple[str, Optional[str]]]:
        # chain[0] is the request parameter
        for section, accessors in (
            ("body", profile.body_accessors),
            ("query", profile.query_accessors),
            ("headers", profile.header_accessors),
        ):
            for accessor in accessors:
                size = len(accessor) + 1
                if tuple(chain[1:size]) == accessor and len(chain) >= size:
                    return section, (chain[size] if len(chain) > size else None)
        return None

    def visit(node: dict) -> None:
        chain = syntax.member_chain(node)
        if chain and len(chain) >= 2 and chain[0] == request:
            hit = classify(chain)
            if hit is not None:
                record(*hit)

        destructured = syntax.destructuring(node)
        if destructured is not None:
            source_chain = syntax.member_chain(destructured.source)
            if source_chain and source_chain[0] == request:
                hit = classify(source_chain)
                if hit is not None and hit[1] is None:
                    for key in destructured.keys:
                        record(hit[0], key)

        callee = syntax.callee(node)
        if callee is not None and profile.header_getters:
            callee_chain = syntax.member_chain(callee)
            if (
                callee_chain
                and len(callee_chain) == 2
                and callee_chain[0] == request
                and callee_chain[1] in profile.header_getters
            ):
                args = syntax.call_arguments(node)
                name = syntax.route_text(args[0]) if args else None
                if name:
                    record("headers", name)

    walk(handler, visit)

    # a schema-declared body wins over fields read in the handler
    if body_seen and meta.body is None:
        meta.body = body_fields
