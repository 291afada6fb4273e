from pathlib import Path

import pytest

from apiscout.extractors.profiles import get_profile
from apiscout.extractors.typescript.processor import extract_endpoints_from_source
from apiscout.utils.exceptions import TypedParseError

EXPRESS = get_profile("express")


def test_extract_routes_one_record_per_matching_call():
    src = """
import { Router, Request, Response } from "express";

const router = Router();

router.get("/", (req: Request, res: Response) => res.json([]));
router.post("/", async (req: Request, res: Response) => {
  const { name, email } = req.body;
  res.status(201).json({ name, email });
});
router.delete("/:id", (req: Request, res: Response) => res.sendStatus(204));

export default router;
"""
    records = extract_endpoints_from_source(src, Path("src/routes/users.ts"), EXPRESS, "router")

    assert len(records) == 3
    assert [r.method for r in records] == ["GET", "POST", "DELETE"]
    assert [r.path for r in records] == ["/users/", "/users/", "/users/:id"]
    assert all(r.resource_name == "users" for r in records)
    assert all(r.source_file == str(Path("src/routes/users.ts")) for r in records)
    assert all(r.kind == "route" for r in records)

    assert records[0].body is None
    assert records[1].body == {"name": None, "email": None}
    assert records[1].line == 7


def test_extract_routes_versioned_directory():
    src = """
router.get("/:id", (req, res) => res.json({}));
"""
    records = extract_endpoints_from_source(src, Path("api/v2/orders.ts"), EXPRESS, "router")
    assert len(records) == 1
    assert records[0].method == "GET"
    assert records[0].path == "/v2/orders/:id"
    assert records[0].resource_name == "orders"


def test_extract_routes_index_file_uses_index_prefix():
    src = """
router.get("/widgets", (req, res) => res.json([]));
"""
    records = extract_endpoints_from_source(src, Path("routes/index.ts"), EXPRESS, "router")
    assert [r.path for r in records] == ["/index/widgets"]
    assert records[0].resource_name == "index"


def test_extract_routes_dynamic_path_keeps_record_with_prefix_only():
    src = """
const base = "/things";
router.get(base + "/all", (req, res) => res.json([]));
router.post();
"""
    records = extract_endpoints_from_source(src, Path("things.ts"), EXPRESS, "router")
    assert len(records) == 2
    assert [r.path for r in records] == ["/things", "/things"]
    assert [r.method for r in records] == ["GET", "POST"]


def test_extract_routes_template_literal_paths():
    src = """
const id = "x";
router.get(`/health`, (req, res) => res.send("ok"));
router.get(`/items/${id}`, (req, res) => res.send("ok"));
"""
    records = extract_endpoints_from_source(src, Path("status.ts"), EXPRESS, "router")
    assert [r.path for r in records] == ["/status/health", "/status/items/"]


def test_extract_routes_ignores_other_objects_and_non_verbs():
    src = """
app.get("/x", (req, res) => res.end());
router.use(express.json());
router.route("/y");
function register() {
  router.patch("/nested", (req, res) => res.end());
}
"""
    records = extract_endpoints_from_source(src, Path("misc.ts"), EXPRESS, "router")
    assert len(records) == 1
    assert records[0].method == "PATCH"
    assert records[0].path == "/misc/nested"


def test_extract_routes_query_and_headers_from_handler():
    src = """
router.get("/search", (req, res) => {
  const page = req.query.page;
  const { limit } = req.query;
  const token = req.headers["x-api-key"];
  const tenant = req.header("X-Tenant");
  res.json([]);
});
"""
    records = extract_endpoints_from_source(src, Path("search.ts"), EXPRESS, "router")
    assert len(records) == 1
    r = records[0]
    assert r.query_parameters == {"page": None, "limit": None}
    assert r.headers == {"x-api-key": None, "X-Tenant": None}
    assert r.body is None


def test_extract_routes_koa_aliases_and_context_accessors():
    src = """
router.del("/items/:id", async (ctx) => {
  const reason = ctx.request.body.reason;
  const force = ctx.query.force;
  ctx.body = { ok: true };
});
"""
    records = extract_endpoints_from_source(src, Path("catalog.ts"), get_profile("koa"), "router")
    assert len(records) == 1
    assert records[0].method == "DELETE"
    assert records[0].path == "/catalog/items/:id"
    assert records[0].body == {"reason": None}
    assert records[0].query_parameters == {"force": None}


def test_extract_routes_fastify_schema_options():
    src = """
fastify.post("/", {
  schema: {
    body: { type: "object", properties: { sku: { type: "string" } } },
    querystring: { type: "object", properties: { dryRun: { type: "boolean" } } },
    headers: { type: "object", properties: { "x-request-id": { type: "string" } } },
  },
}, async (request, reply) => {
  return { ok: true };
});
"""
    records = extract_endpoints_from_source(src, Path("orders.ts"), get_profile("fastify"), "fastify")
    assert len(records) == 1
    r = records[0]
    assert r.path == "/orders/"
    assert r.body == {"type": "object", "properties": {"sku": {"type": "string"}}}
    assert r.query_parameters == {"dryRun": {"type": "boolean"}}
    assert r.headers == {"x-request-id": {"type": "string"}}


def test_extract_routes_malformed_source_raises():
    src = """
router.get("/x", (req, res) => {
"""
    with pytest.raises(TypedParseError) as exc:
        extract_endpoints_from_source(src, Path("broken.ts"), EXPRESS, "router")
    assert exc.value.path == str(Path("broken.ts"))


def test_extract_routes_deeply_nested_expression():
    concat = " + ".join(["'a'"] * 800)
    src = f"const s = {concat};\nrouter.get('/x', handler);\n"

    records = extract_endpoints_from_source(src, Path("bundle.ts"), EXPRESS, "router")
    assert [r.path for r in records] == ["/bundle/x"]


def test_extract_routes_cooks_string_escapes():
    src = r"""
fastify.get(`/tab\x41`, {
  schema: {
    headers: { "x-note": { example: "a\nb\x41\u{1F600}" } },
  },
}, async (request, reply) => ({}));
"""
    records = extract_endpoints_from_source(src, Path("notes.ts"), get_profile("fastify"), "fastify")
    assert records[0].path == "/notes/tabA"
    assert records[0].headers == {"x-note": {"example": "a\nbA\U0001F600"}}
