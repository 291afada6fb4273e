from __future__ import annotations

from typing import Any, Callable


def walk(node: Any, visitor: Callable[[dict], None]) -> None:
    """
    Depth-first, pre-order walk over a tree of nested dicts/lists.

    `visitor` is called on every mapping (the root included) before its
    children. Lists are descended into, scalars are skipped. Parser output is
    acyclic, so there is no cycle detection.

    Uses an explicit stack: generated code nests far deeper than the
    interpreter's recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
            continue
        if not isinstance(current, dict):
            continue

        visitor(current)
        children = [child for child in current.values() if isinstance(child, (dict, list))]
        stack.extend(reversed(children))
