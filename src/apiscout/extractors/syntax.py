from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

_STRING_ESCAPES = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)",
    re.DOTALL,
)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

# line continuations: a backslash before a line terminator disappears
_LINE_TERMINATORS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}


@dataclass(frozen=True)
class CallShape:
    """`<object_name>.<member_name>(...arguments)` with a plain identifier receiver."""

    object_name: str
    member_name: str
    arguments: tuple[dict, ...]
    line: Optional[int] = None


@dataclass(frozen=True)
class Destructuring:
    """`const { a, b } = <source>`: the bound keys and the source expression."""

    keys: tuple[str, ...]
    source: dict


class DialectSyntax(ABC):
    """
    Read-only view over one dialect's dict tree.

    Every node-shape question the matcher and metadata extractor ask goes
    through here, so those modules stay dialect-agnostic. Each implementation
    only recognizes its own closed set of node kinds and answers None for
    anything else.
    """

    @abstractmethod
    def call_shape(self, node: dict) -> Optional[CallShape]:
        """Non-computed member call on an identifier, else None."""

    @abstractmethod
    def route_text(self, node: dict) -> Optional[str]:
        """Static text of a string or template literal (substitutions dropped)."""

    @abstractmethod
    def literal_value(self, node: dict) -> Any:
        """Literal as a Python value; non-literals come back as the node itself."""

    @abstractmethod
    def object_entries(self, node: dict) -> Optional[list[tuple[str, dict]]]:
        """(key, value node) pairs of an object literal, else None."""

    @abstractmethod
    def function_params(self, node: dict) -> Optional[list[str]]:
        """Parameter names of a function/arrow literal ("" for patterns), else None."""

    @abstractmethod
    def member_chain(self, node: dict) -> Optional[list[str]]:
        """`req.headers['x-id']` -> ["req", "headers", "x-id"], else None."""

    @abstractmethod
    def callee(self, node: dict) -> Optional[dict]:
        """Callee expression of a call node."""

    @abstractmethod
    def call_arguments(self, node: dict) -> list[dict]:
        """Argument nodes of a call node."""

    @abstractmethod
    def destructuring(self, node: dict) -> Optional[Destructuring]:
        """Object-pattern variable declaration, else None."""


def parse_number(raw: str) -> Any:
    """
    Number literal text -> int/float, keeping what the literal says
    (`1` stays an int, `1.5` a float). Unparseable text is returned as-is.
    """
    text = raw.strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def unescape_string(raw: str) -> str:
    """
    Cook the body of a JS string or template literal the way the engine does:
    \\n, \\t, \\xHH, \\uHHHH, \\u{H...} and friends. Unknown escapes drop the
    backslash; surrogate pairs written as two \\u escapes are joined.
    """
    cooked = _STRING_ESCAPES.sub(_cook_escape, raw)
    try:
        return cooked.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeDecodeError:
        return cooked


def _cook_escape(match: re.Match) -> str:
    escape = match.group(1)
    if escape in _LINE_TERMINATORS:
        return ""
    if escape in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[escape]
    if escape.startswith("u{"):
        code = int(escape[2:-1], 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    if escape[0] in "ux" and len(escape) > 1:
        return chr(int(escape[1:], 16))
    return escape
