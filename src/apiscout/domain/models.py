from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# "route": server-side registration, "request": client-side call
EndpointKind = Literal["route", "request"]


class EndpointRecord(BaseModel):
    """
    One endpoint recovered from a single matched call.

    Created once per match and never mutated. Serialized with camelCase
    aliases (queryParameters, sourceFile, resourceName).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: HttpMethod
    path: str = ""
    headers: dict[str, Any] = Field(default_factory=dict)
    query_parameters: dict[str, Any] = Field(default_factory=dict, alias="queryParameters")
    body: Any = None
    source_file: str = Field(alias="sourceFile")
    resource_name: str = Field(alias="resourceName")

    kind: EndpointKind = "route"
    line: Optional[int] = None
