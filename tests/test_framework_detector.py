from pathlib import Path
import json
import textwrap

from apiscout.repo.framework_detector import detect_framework


def write(p: Path, s: str) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(textwrap.dedent(s), encoding="utf-8")


def test_detect_from_package_json(tmp_path: Path):
    write(tmp_path / "package.json", json.dumps({"dependencies": {"express": "^4.19.0", "axios": "^1.6.0"}}))

    name, confidence = detect_framework(tmp_path)
    assert name == "express"
    assert 0.3 <= confidence <= 0.99


def test_detect_from_imports_only(tmp_path: Path):
    write(
        tmp_path / "src" / "server.ts",
        """
        import Router from "@koa/router";
        const router = new Router();
        """,
    )

    name, _ = detect_framework(tmp_path)
    assert name == "koa"


def test_detect_ignores_vendored_manifests(tmp_path: Path):
    write(tmp_path / "node_modules" / "fastify" / "package.json", json.dumps({"dependencies": {"fastify": "4"}}))
    write(tmp_path / "package.json", json.dumps({"dependencies": {"restify": "^11"}}))

    name, _ = detect_framework(tmp_path)
    assert name == "restify"


def test_detect_unknown(tmp_path: Path):
    write(tmp_path / "main.js", "console.log('hi');\n")
    write(tmp_path / "package.json", "{ not json")

    assert detect_framework(tmp_path) == ("unknown", 0.2)
