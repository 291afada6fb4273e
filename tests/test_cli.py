from pathlib import Path
import json
import textwrap

from typer.testing import CliRunner

from apiscout.cli import app

runner = CliRunner()


def write(p: Path, s: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")


def test_cli_discover_json(tmp_path: Path):
    write(
        tmp_path / "routes" / "users.ts",
        """
        router.get("/:id", (req, res) => res.json({ id: req.params.id }));
        """,
    )
    write(tmp_path / "node_modules" / "lib" / "x.js", "router.get('/vendored', (req, res) => res.end());\n")

    result = runner.invoke(app, ["discover", str(tmp_path), "-f", "express", "-o", "router", "--format", "json"])
    assert result.exit_code == 0, result.output

    payload = json.loads(result.stdout)
    assert len(payload) == 1
    assert payload[0]["method"] == "GET"
    assert payload[0]["path"] == "/users/:id"
    assert payload[0]["queryParameters"] == {}
    assert payload[0]["resourceName"] == "users"
    assert payload[0]["sourceFile"].endswith("users.ts")


def test_cli_discover_json_to_file(tmp_path: Path):
    write(tmp_path / "repo" / "users.js", "router.post('/', (req, res) => res.end());\n")
    out = tmp_path / "out" / "endpoints.json"

    result = runner.invoke(app, ["discover", str(tmp_path / "repo"), "--format", "json", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))[0]["path"] == "/users/"


def test_cli_discover_table(tmp_path: Path):
    write(tmp_path / "users.js", "router.post('/', (req, res) => res.end());\n")

    result = runner.invoke(app, ["discover", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "POST" in result.stdout
    assert "Endpoints found" in result.stdout


def test_cli_discover_missing_path(tmp_path: Path):
    result = runner.invoke(app, ["discover", str(tmp_path / "nope")])
    assert result.exit_code == 2


def test_cli_discover_unknown_framework(tmp_path: Path):
    result = runner.invoke(app, ["discover", str(tmp_path), "-f", "hapi"])
    assert result.exit_code == 1


def test_cli_discover_typed_parse_error(tmp_path: Path):
    write(tmp_path / "broken.ts", "router.get('/x', (req, res) => {\n")

    result = runner.invoke(app, ["discover", str(tmp_path)])
    assert result.exit_code == 1


def test_cli_frameworks():
    result = runner.invoke(app, ["frameworks"])
    assert result.exit_code == 0
    for name in ("express", "koa", "fastify", "restify", "axios"):
        assert name in result.stdout
