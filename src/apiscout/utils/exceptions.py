"""
apiscout/utils/exceptions.py

Custom exceptions for the project.
"""

from __future__ import annotations

from pathlib import Path


class DiscoveryError(Exception):
    """
    Base class for every error raised by endpoint discovery.
    """
    pass


class UnknownFrameworkError(DiscoveryError, ValueError):
    """
    Exception raised when a framework profile name is not registered.
    """

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown framework profile {name!r} (known: {', '.join(known)})")


class MaterializationError(DiscoveryError):
    """
    Exception raised when a remote source cannot be cloned or downloaded.
    """
    pass


class FileSystemError(DiscoveryError):
    """
    Exception raised when a file or directory cannot be read during the walk.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class TypedParseError(DiscoveryError):
    """
    Exception raised when a TypeScript file does not parse cleanly.
    Aborts the whole discovery run.
    """

    def __init__(self, path: Path | str, line: int | None = None, reason: str = "syntax error") -> None:
        self.path = str(path)
        self.line = line
        self.reason = reason
        where = f"{self.path}:{line}" if line is not None else self.path
        super().__init__(f"Failed to parse TypeScript file {where}: {reason}")


class UntypedParseError(DiscoveryError):
    """
    Parse failure of a JavaScript file.
    Reported for diagnostics only; the file contributes no endpoints.
    """

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to parse JavaScript file {self.path}: {reason}")
