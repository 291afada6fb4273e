from __future__ import annotations

from pathlib import Path
from typing import Optional

from apiscout.domain.models import EndpointRecord
from apiscout.extractors.base import read_source
from apiscout.extractors.matcher import match_server_route
from apiscout.extractors.paths import resolve_resource
from apiscout.extractors.profiles import FrameworkProfile
from apiscout.extractors.records import build_route_record
from apiscout.extractors.typescript.parser import TypeScriptParser
from apiscout.extractors.typescript.syntax import SYNTAX
from apiscout.extractors.walker import walk

_PARSER = TypeScriptParser()


def extract_endpoints_from_source(
    source: str,
    file_path: Path,
    profile: FrameworkProfile,
    object_instance: str,
    source_file: Optional[str] = None,
) -> tuple[EndpointRecord, ...]:
    """
    Route registrations in one TypeScript source, e.g. for object_instance="router":
      router.get("/:id", handler)
      router.post(`/bulk`, auth, async (req: Request, res: Response) => { ... })

    Raises TypedParseError on malformed input.
    """
    tree = _PARSER.parse(source, file_path).tree
    resource = resolve_resource(file_path)
    label = source_file if source_file is not None else str(file_path)

    records: list[EndpointRecord] = []

    def visit(node: dict) -> None:
        match = match_server_route(SYNTAX, node, profile, object_instance)
        if match is not None:
            records.append(build_route_record(SYNTAX, match, profile, resource, label))

    walk(tree, visit)
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
