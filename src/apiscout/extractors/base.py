from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from apiscout.utils.exceptions import UntypedParseError


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one source file: a dict tree, or the reported error."""

    tree: Optional[dict]
    error: Optional[UntypedParseError] = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


class SourceParser(ABC):
    """
    Turns one file's text into a nested-dict syntax tree.

    Implementations differ only in how they fail: strict parsers raise,
    tolerant parsers return a ParseOutcome carrying the error.
    """

    dialect: str = ""
    extension: str = ""

    @abstractmethod
    def parse(self, source: str, path: Path) -> ParseOutcome:
        raise NotImplementedError


def read_source(path: Path) -> str:
    # Undecodable bytes are replaced; OSError is left to the caller.
    return path.read_text(encoding="utf-8", errors="replace")
