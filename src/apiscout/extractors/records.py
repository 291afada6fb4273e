from __future__ import annotations

from apiscout.domain.models import EndpointRecord
from apiscout.extractors.matcher import RouteMatch
from apiscout.extractors.metadata import extract_client_metadata, extract_server_metadata
from apiscout.extractors.paths import ResourcePath
from apiscout.extractors.profiles import FrameworkProfile
from apiscout.extractors.syntax import DialectSyntax


def _first_argument_text(syntax: DialectSyntax, match: RouteMatch) -> str:
    # Dynamic or missing path arguments fall back to "" rather than dropping the record.
    args = match.call.arguments
    if not args:
        return ""
    text = syntax.route_text(args[0])
    return text if text is not None else ""


def build_route_record(
    syntax: DialectSyntax,
    match: RouteMatch,
    profile: FrameworkProfile,
    resource: ResourcePath,
    source_file: str,
) -> EndpointRecord:
    meta = extract_server_metadata(syntax, match.call, profile)
    return EndpointRecord(
        method=match.method,
        path=resource.join(_first_argument_text(syntax, match)),
        headers=meta.headers,
        query_parameters=meta.query_parameters,
        body=meta.body,
        source_file=source_file,
        resource_name=resource.resource_name,
        kind="route",
        line=match.call.line,
    )


def build_request_record(
    syntax: DialectSyntax,
    match: RouteMatch,
    resource: ResourcePath,
    source_file: str,
) -> EndpointRecord:
    # Client calls carry their own URL; the file-derived prefix is not applied.
    meta = extract_client_metadata(syntax, match.call)
    return EndpointRecord(
        method=match.method,
        path=_first_argument_text(syntax, match),
        headers=meta.headers,
        query_parameters=meta.query_parameters,
        body=meta.body,
        source_file=source_file,
        resource_name=resource.resource_name,
        kind="request",
        line=match.call.line,
    )
