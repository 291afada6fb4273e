from __future__ import annotations

import json
import os
from collections import Counter
from pathlib import Path

from apiscout.repo.ignore import VENDOR_DIRS, should_ignore_dir
from apiscout.repo.scanner import _file_contains_any, iter_source_files
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)

# package.json dependency name -> profile
_DEPENDENCY_HINTS = {
    "express": "express",
    "koa": "koa",
    "koa-router": "koa",
    "@koa/router": "koa",
    "fastify": "fastify",
    "restify": "restify",
    "axios": "axios",
}

# import/require needles -> profile
_SOURCE_HINTS = {
    "express": ["require('express')", 'require("express")', "from 'express'", 'from "express"'],
    "koa": ["require('koa", 'require("koa', "from 'koa", 'from "koa', "@koa/router"],
    "fastify": ["require('fastify')", 'require("fastify")', "from 'fastify'", 'from "fastify"'],
    "restify": ["require('restify')", 'require("restify")', "from 'restify'", 'from "restify"'],
}


def _package_dependencies(package_json: Path) -> set[str]:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("Unreadable package.json: %s", package_json)
        return set()
    if not isinstance(data, dict):
        return set()
    deps: set[str] = set()
    for section in ("dependencies", "devDependencies", "peerDependencies"):
        value = data.get(section)
        if isinstance(value, dict):
            deps.update(value)
    return deps


def _iter_package_manifests(root: Path):
    for current, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if not should_ignore_dir(Path(current) / d))
        if "package.json" in files:
            yield Path(current) / "package.json"


def detect_framework(root: Path, sample_limit: int = 200) -> tuple[str, float]:
    """
    Heuristic detection from package.json files and import statements.
    Server frameworks outrank axios, which nearly every frontend pulls in.
    Returns (profile_name, confidence); ("unknown", 0.2) when nothing matches.
    """
    scores: Counter[str] = Counter()

    for package_json in _iter_package_manifests(root):
        for dep in _package_dependencies(package_json):
            profile = _DEPENDENCY_HINTS.get(dep)
            if profile is None:
                continue
            scores[profile] += 1 if profile == "axios" else 3

    for i, path in enumerate(iter_source_files(root, ignore_dirs=VENDOR_DIRS)):
        if i >= sample_limit:
            break
        for profile, needles in _SOURCE_HINTS.items():
            if _file_contains_any(path, needles):
                scores[profile] += 2

    if not scores:
        return ("unknown", 0.2)

    framework, top = scores.most_common(1)[0]
    total = sum(scores.values())
    confidence = max(0.3, min(0.99, top / max(total, 1)))
    return (framework, confidence)
