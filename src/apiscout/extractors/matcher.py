from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from apiscout.domain.models import EndpointKind, HttpMethod
from apiscout.extractors.profiles import CLIENT_VERBS, FrameworkProfile
from apiscout.extractors.syntax import CallShape, DialectSyntax


@dataclass(frozen=True)
class RouteMatch:
    variant: EndpointKind
    method: HttpMethod
    call: CallShape


def match_server_route(
    syntax: DialectSyntax,
    node: dict,
    profile: FrameworkProfile,
    object_instance: str,
) -> Optional[RouteMatch]:
    """
    Recognize `<object_instance>.<verb>(...)` where <verb> is in the
    profile's verb table. Only the callee shape matters: a missing or
    dynamic path argument still matches.
    """
    if profile.kind != "server":
        return None
    call = syntax.call_shape(node)
    if call is None or call.object_name != object_instance:
        return None
    method = profile.verbs.get(call.member_name)
    if method is None:
        return None
    return RouteMatch(variant="route", method=method, call=call)


def match_client_request(
    syntax: DialectSyntax,
    node: dict,
    profile: FrameworkProfile,
    object_instance: str,
) -> Optional[RouteMatch]:
    """
    Recognize outgoing requests:
      - `<object_instance>.<verb>(url, config)` for client profiles
      - `axios.<verb>(url, config)` (any profile's client_libraries)
    """
    call = syntax.call_shape(node)
    if call is None:
        return None

    method: Optional[HttpMethod] = None
    if profile.kind == "client" and call.object_name == object_instance:
        method = profile.verbs.get(call.member_name)
    if method is None and call.object_name in profile.client_libraries:
        method = CLIENT_VERBS.get(call.member_name)
    if method is None:
        return None
    return RouteMatch(variant="request", method=method, call=call)
