from __future__ import annotations

from pathlib import Path
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, TreeCursor

from apiscout.extractors.base import ParseOutcome, SourceParser
from apiscout.extractors.syntax import parse_number, unescape_string
from apiscout.utils.exceptions import TypedParseError

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())


class TypeScriptParser(SourceParser):
    """
    Strict TypeScript parser built on tree-sitter.

    tree-sitter always produces a tree, recovering around bad syntax with
    ERROR/MISSING nodes; any such node makes the file a TypedParseError.

    The tree is converted into plain dicts:
      {"kind", "line", "text", "fields": {name: node}, "children": [node, ...]}
    Only named nodes are kept. Children attached through a grammar field live
    under "fields", the rest under "children". String and number literals
    also carry "value"; template strings carry "quasis" (their static
    segments) and "substitutions" (how many ${...} they hold).
    """

    dialect = "typescript"
    extension = ".ts"

    def __init__(self) -> None:
        self._parser = Parser(TS_LANGUAGE)

    def parse(self, source: str, path: Path) -> ParseOutcome:
        data = source.encode("utf-8")
        tree = self._parser.parse(data)
        root = tree.root_node
        if root.has_error:
            raise TypedParseError(path, line=_first_error_line(root))
        return ParseOutcome(tree=_convert(tree.walk(), data))


def _convert(cursor: TreeCursor, data: bytes) -> dict:
    # iterative: the cursor does the descent, `parents` mirrors its depth
    root = _node_dict(cursor.node, data)
    parents = [root]
    if not cursor.goto_first_child():
        return root

    while True:
        current = None
        if cursor.node.is_named:
            current = _node_dict(cursor.node, data)
            _attach(parents[-1], cursor.field_name, current)

        if current is not None and cursor.goto_first_child():
            parents.append(current)
            continue

        while not cursor.goto_next_sibling():
            if len(parents) == 1:
                return root
            cursor.goto_parent()
            parents.pop()


def _node_dict(node: Node, data: bytes) -> dict:
    out: dict = {
        "kind": node.type,
        "line": node.start_point[0] + 1,
        "text": _text(node, data),
        "fields": {},
        "children": [],
    }

    if node.type == "string":
        out["value"] = unescape_string(out["text"][1:-1])
    elif node.type == "number":
        out["value"] = parse_number(out["text"])
    elif node.type == "template_string":
        quasis, substitutions = _template_parts(node, data)
        out["quasis"] = quasis
        out["substitutions"] = substitutions
    return out


def _attach(parent: dict, field_name: Optional[str], child: dict) -> None:
    if field_name is None:
        parent["children"].append(child)
        return
    existing = parent["fields"].get(field_name)
    if existing is None:
        parent["fields"][field_name] = child
    elif isinstance(existing, list):
        existing.append(child)
    else:
        parent["fields"][field_name] = [existing, child]


def _text(node: Node, data: bytes) -> str:
    return data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _template_parts(node: Node, data: bytes) -> tuple[list[str], int]:
    # `a${x}b` -> ["a", "b"]; the backticks are the first/last byte of the node
    raw: list[str] = []
    start = node.start_byte + 1
    substitutions = 0
    for child in node.children:
        if child.type == "template_substitution":
            raw.append(data[start:child.start_byte].decode("utf-8", errors="replace"))
            start = child.end_byte
            substitutions += 1
    raw.append(data[start:node.end_byte - 1].decode("utf-8", errors="replace"))
    return [unescape_string(part) for part in raw], substitutions


def _first_error_line(root: Node) -> Optional[int]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return root.start_point[0] + 1
