from pathlib import Path

from apiscout.extractors.paths import ResourcePath, resolve_resource


def test_resolve_plain_file():
    assert resolve_resource("src/routes/users.ts") == ResourcePath("users", "/users")


def test_resolve_versioned_file():
    assert resolve_resource(Path("api/v2/orders.ts")) == ResourcePath("orders", "/v2/orders")
    assert resolve_resource("svc/v12/handlers/orders.js").endpoint_path == "/v12/orders"


def test_resolve_version_must_be_a_whole_segment():
    assert resolve_resource("api/v2orders/items.ts").endpoint_path == "/items"
    assert resolve_resource("api/version2/items.ts").endpoint_path == "/items"


def test_resolve_index_never_versioned():
    assert resolve_resource("routes/index.ts") == ResourcePath("index", "/index")
    assert resolve_resource("api/v3/index.js") == ResourcePath("index", "/index")


def test_join_keeps_slashes_verbatim():
    res = resolve_resource("routes/users.ts")
    assert res.join("/") == "/users/"
    assert res.join("//x") == "/users//x"
    assert res.join("") == "/users"
