from __future__ import annotations

from pathlib import Path
from typing import Optional

from apiscout.domain.models import EndpointRecord
from apiscout.extractors.base import read_source
from apiscout.extractors.javascript.parser import JavaScriptParser
from apiscout.extractors.javascript.syntax import SYNTAX
from apiscout.extractors.matcher import match_client_request, match_server_route
from apiscout.extractors.paths import resolve_resource
from apiscout.extractors.profiles import FrameworkProfile
from apiscout.extractors.records import build_request_record, build_route_record
from apiscout.extractors.walker import walk
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)

_PARSER = JavaScriptParser()


def extract_endpoints_from_source(
    source: str,
    file_path: Path,
    profile: FrameworkProfile,
    object_instance: str,
    source_file: Optional[str] = None,
) -> tuple[EndpointRecord, ...]:
    """
    Route registrations and outgoing requests in one JavaScript source:
      router.get("/users", (req, res) => ...)                  -> kind="route"
      axios.post(url, { headers, params, data })               -> kind="request"

    A call matched as a route is not re-checked as a request. Files that do
    not parse are logged and contribute nothing.
    """
    outcome = _PARSER.parse(source, file_path)
    if not outcome.ok:
        logger.warning("Skipping %s: %s", file_path, outcome.error.reason if outcome.error else "parse error")
        return ()

    resource = resolve_resource(file_path)
    label = source_file if source_file is not None else str(file_path)

    records: list[EndpointRecord] = []

    def visit(node: dict) -> None:
        route = match_server_route(SYNTAX, node, profile, object_instance)
        if route is not None:
            records.append(build_route_record(SYNTAX, route, profile, resource, label))
            return
        request = match_client_request(SYNTAX, node, profile, object_instance)
        if request is not None:
            records.append(build_request_record(SYNTAX, request, resource, label))

    walk(outcome.tree, visit)
    return tuple(records)


def extract_endpoints_from_file(
    path: Path,
    profile: FrameworkProfile,
    object_instance: str,
    source_file: Optional[str] = None,
) -> tuple[EndpointRecord, ...]:
    return extract_endpoints_from_source(
        read_source(path),
        path,
        profile,
        object_instance,
        source_file=source_file,
    )
