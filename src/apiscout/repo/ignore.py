from __future__ import annotations

from pathlib import Path

# Dependency/build output of JS/TS projects. Only pruned when the caller asks.
VENDOR_DIRS = frozenset({
    ".git",
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "coverage",
    ".next",
    ".nuxt",
    ".turbo",
    ".cache",
})


def should_ignore_dir(dir_path: Path, ignore: frozenset[str] | set[str] = VENDOR_DIRS) -> bool:
    return dir_path.name in ignore
