from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

_VERSION_SEGMENT = re.compile(r"/(v\d+)/")

INDEX_NAME = "index"


@dataclass(frozen=True)
class ResourcePath:
    resource_name: str
    endpoint_path: str

    def join(self, route_path: str) -> str:
        # No slash de-duplication: "/users" + "/" + ... is kept verbatim.
        return f"{self.endpoint_path}{route_path}"


def resolve_resource(file_path: Path | str) -> ResourcePath:
    """
    Derive the resource name and endpoint prefix for a source file.

      routes/users.ts        -> users, /users
      api/v2/orders.ts       -> orders, /v2/orders
      api/v2/index.ts        -> index, /index   (index never picks up a version)
    """
    p = Path(file_path)
    resource_name = p.stem

    if resource_name == INDEX_NAME:
        return ResourcePath(resource_name=resource_name, endpoint_path=f"/{resource_name}")

    match = _VERSION_SEGMENT.search(p.as_posix())
    if match:
        return ResourcePath(
            resource_name=resource_name,
            endpoint_path=f"/{match.group(1)}/{resource_name}",
        )
    return ResourcePath(resource_name=resource_name, endpoint_path=f"/{resource_name}")
