from pathlib import Path

from apiscout.extractors.javascript.processor import extract_endpoints_from_source
from apiscout.extractors.profiles import get_profile

EXPRESS = get_profile("express")


def test_extract_axios_call_with_config_object():
    src = """
const axios = require("axios");

function createWidget(url) {
  return axios.post(url, { headers: { X: "1" }, data: { a: 1 }, params: { b: 2 } });
}
"""
    records = extract_endpoints_from_source(src, Path("client/widgets.js"), EXPRESS, "router")
    assert len(records) == 1
    r = records[0]
    assert r.method == "POST"
    assert r.kind == "request"
    assert r.headers == {"X": "1"}
    assert r.body == {"a": 1}
    assert isinstance(r.body["a"], int)
    assert r.query_parameters == {"b": 2}
    assert r.path == ""
    assert r.resource_name == "widgets"
    assert r.line == 5


def test_extract_axios_keeps_non_literal_values_as_fragments():
    src = """
axios.get("https://api.example.com/me", { headers: { Authorization: token, Accept: `application/json` } });
"""
    records = extract_endpoints_from_source(src, Path("me.js"), EXPRESS, "router")
    assert len(records) == 1
    headers = records[0].headers
    assert records[0].path == "https://api.example.com/me"
    assert headers["Accept"] == "application/json"
    assert headers["Authorization"]["type"] == "Identifier"
    assert headers["Authorization"]["name"] == "token"


def test_extract_server_routes_with_prefix():
    src = """
const express = require("express");
const router = express.Router();

router.get("/", function (req, res) {
  res.json([]);
});

router.put("/:id", (req, res) => {
  const id = req.params.id;
  const name = req.body.name;
  res.json({ id: id, name: name });
});

module.exports = router;
"""
    records = extract_endpoints_from_source(src, Path("routes/v1/users.js"), EXPRESS, "router")
    assert [(r.method, r.path) for r in records] == [("GET", "/v1/users/"), ("PUT", "/v1/users/:id")]
    assert records[1].body == {"name": None}
    assert all(r.kind == "route" for r in records)


def test_extract_es_module_falls_back_to_module_grammar():
    src = """
import express from "express";
const router = express.Router();
router.patch("/:id", (req, res) => res.end());
export default router;
"""
    records = extract_endpoints_from_source(src, Path("accounts.js"), EXPRESS, "router")
    assert len(records) == 1
    assert records[0].method == "PATCH"
    assert records[0].path == "/accounts/:id"


def test_extract_client_profile_object_instance():
    src = """
const api = axios.create({ baseURL: "/api" });

export async function load(id) {
  await api.get(`/items`, { params: { expand: true } });
  await api.delete(`/items/${id}`);
}
"""
    records = extract_endpoints_from_source(src, Path("items.js"), get_profile("axios"), "api")
    assert [(r.method, r.path) for r in records] == [("GET", "/items"), ("DELETE", "/items/")]
    assert records[0].query_parameters == {"expand": True}
    assert all(r.kind == "request" for r in records)


def test_route_match_is_not_reported_again_as_request():
    src = """
axios.get("/x", (req, res) => res.end());
"""
    records = extract_endpoints_from_source(src, Path("dual.js"), EXPRESS, "axios")
    assert len(records) == 1
    assert records[0].kind == "route"
    assert records[0].path == "/dual/x"


def test_extract_broken_file_yields_nothing():
    src = """
router.get('/x', function (req, res) {
"""
    records = extract_endpoints_from_source(src, Path("broken.js"), EXPRESS, "router")
    assert records == ()


def test_extract_axios_string_values_are_cooked():
    src = r"""
axios.get("/notes", { headers: { "x-note": "a\nb\x41" } });
"""
    records = extract_endpoints_from_source(src, Path("notes.js"), EXPRESS, "router")
    assert records[0].headers == {"x-note": "a\nbA"}
