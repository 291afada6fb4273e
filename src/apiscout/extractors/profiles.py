from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from apiscout.domain.models import HttpMethod
from apiscout.utils.exceptions import UnknownFrameworkError

ProfileKind = Literal["server", "client"]

_STANDARD_VERBS: Mapping[str, HttpMethod] = {
    "get": "GET",
    "post": "POST",
    "put": "PUT",
    "patch": "PATCH",
    "delete": "DELETE",
    "options": "OPTIONS",
    "head": "HEAD",
}

# Verb table used for well-known client libraries (axios.get, axios.post, ...)
CLIENT_VERBS: Mapping[str, HttpMethod] = dict(_STANDARD_VERBS)


@dataclass(frozen=True)
class FrameworkProfile:
    """
    Naming convention of one routing/client framework.

    `verbs` maps the member name used on the object instance to the HTTP
    method. The accessor tuples are member chains hanging off the handler's
    first parameter (req, ctx, request) that carry body/query/headers.
    """

    name: str
    kind: ProfileKind
    verbs: Mapping[str, HttpMethod]
    body_accessors: tuple[tuple[str, ...], ...] = (("body",),)
    query_accessors: tuple[tuple[str, ...], ...] = (("query",),)
    header_accessors: tuple[tuple[str, ...], ...] = (("headers",),)
    header_getters: tuple[str, ...] = ()
    # fastify: app.post("/x", { schema: { body, querystring, headers } }, handler)
    options_schema: bool = False
    client_libraries: tuple[str, ...] = ("axios",)
    description: str = ""


PROFILES: dict[str, FrameworkProfile] = {
    "express": FrameworkProfile(
        name="express",
        kind="server",
        verbs=_STANDARD_VERBS,
        header_getters=("header", "get"),
        description="express Router / app: router.get(path, handler)",
    ),
    "koa": FrameworkProfile(
        name="koa",
        kind="server",
        verbs={**_STANDARD_VERBS, "del": "DELETE"},
        body_accessors=(("request", "body"),),
        query_accessors=(("query",), ("request", "query")),
        header_accessors=(("headers",), ("request", "headers"), ("header",)),
        header_getters=("get",),
        description="koa-router / @koa/router: router.get(path, ctx => ...)",
    ),
    "fastify": FrameworkProfile(
        name="fastify",
        kind="server",
        verbs=_STANDARD_VERBS,
        options_schema=True,
        description="fastify: fastify.post(path, { schema }, handler)",
    ),
    "restify": FrameworkProfile(
        name="restify",
        kind="server",
        verbs={
            "get": "GET",
            "post": "POST",
            "put": "PUT",
            "patch": "PATCH",
            "del": "DELETE",
            "opts": "OPTIONS",
            "head": "HEAD",
        },
        header_getters=("header",),
        description="restify: server.del(path, handler)",
    ),
    "axios": FrameworkProfile(
        name="axios",
        kind="client",
        verbs=CLIENT_VERBS,
        description="axios instances: api.post(url, { headers, params, data })",
    ),
}


def get_profile(name: str) -> FrameworkProfile:
    key = (name or "").strip().lower()
    if key in PROFILES:
        return PROFILES[key]
    raise UnknownFrameworkError(name, sorted(PROFILES))


def list_profiles() -> list[FrameworkProfile]:
    return [PROFILES[k] for k in sorted(PROFILES)]
