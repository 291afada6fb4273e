from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from apiscout.extractors.syntax import CallShape, DialectSyntax, Destructuring, parse_number


class Kind(str, Enum):
    """ESTree node types (as produced by esprima) the extractors understand."""

    CALL = "CallExpression"
    MEMBER = "MemberExpression"
    IDENTIFIER = "Identifier"
    LITERAL = "Literal"
    TEMPLATE = "TemplateLiteral"
    OBJECT = "ObjectExpression"
    PROPERTY = "Property"
    ARRAY = "ArrayExpression"
    UNARY = "UnaryExpression"
    ARROW_FUNCTION = "ArrowFunctionExpression"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ASSIGNMENT_PATTERN = "AssignmentPattern"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    OBJECT_PATTERN = "ObjectPattern"


_FUNCTION_KINDS = {Kind.ARROW_FUNCTION.value, Kind.FUNCTION_EXPRESSION.value}


def _kind(node: Any) -> Optional[str]:
    return node.get("type") if isinstance(node, dict) else None


def _line(node: dict) -> Optional[int]:
    loc = node.get("loc") or {}
    return (loc.get("start") or {}).get("line")


def _quasi_text(quasi: dict) -> str:
    value = quasi.get("value") or {}
    cooked = value.get("cooked")
    return cooked if cooked is not None else value.get("raw", "")


class JavaScriptSyntax(DialectSyntax):
    def call_shape(self, node: dict) -> Optional[CallShape]:
        if _kind(node) != Kind.CALL.value:
            return None
        callee = node.get("callee")
        if _kind(callee) != Kind.MEMBER.value or callee.get("computed"):
            return None
        receiver = callee.get("object")
        member = callee.get("property")
        if _kind(receiver) != Kind.IDENTIFIER.value or _kind(member) != Kind.IDENTIFIER.value:
            return None
        return CallShape(
            object_name=receiver["name"],
            member_name=member["name"],
            arguments=tuple(self.call_arguments(node)),
            line=_line(node),
        )

    def callee(self, node: dict) -> Optional[dict]:
        if _kind(node) != Kind.CALL.value:
            return None
        return node.get("callee")

    def call_arguments(self, node: dict) -> list[dict]:
        return [arg for arg in node.get("arguments", []) if isinstance(arg, dict)]

    def route_text(self, node: dict) -> Optional[str]:
        kind = _kind(node)
        if kind == Kind.LITERAL.value and isinstance(node.get("value"), str):
            return node["value"]
        if kind == Kind.TEMPLATE.value:
            return "".join(_quasi_text(q) for q in node.get("quasis", []))
        return None

    def literal_value(self, node: dict) -> Any:
        kind = _kind(node)

        if kind == Kind.LITERAL.value:
            if "regex" in node:
                return node
            value = node.get("value")
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                # esprima hands numbers back as floats; the raw text knows better
                return parse_number(node.get("raw", str(value)))
            return value
        if kind == Kind.TEMPLATE.value and not node.get("expressions"):
            return "".join(_quasi_text(q) for q in node.get("quasis", []))
        if kind == Kind.OBJECT.value:
            return {key: self.literal_value(value) for key, value in self.object_entries(node) or []}
        if kind == Kind.ARRAY.value:
            return [
                self.literal_value(item) if isinstance(item, dict) else None
                for item in node.get("elements", [])
            ]
        if kind == Kind.UNARY.value and node.get("operator") == "-":
            value = self.literal_value(node.get("argument") or {})
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return -value

        return node

    def object_entries(self, node: dict) -> Optional[list[tuple[str, dict]]]:
        if _kind(node) != Kind.OBJECT.value:
            return None
        entries: list[tuple[str, dict]] = []
        for prop in node.get("properties", []):
            if _kind(prop) != Kind.PROPERTY.value or prop.get("computed"):
                continue
            name = _key_name(prop.get("key"))
            value = prop.get("value")
            if name is None or not isinstance(value, dict):
                continue
            entries.append((name, value))
        return entries

    def function_params(self, node: dict) -> Optional[list[str]]:
        if _kind(node) not in _FUNCTION_KINDS:
            return None
        names: list[str] = []
        for param in node.get("params", []):
            if _kind(param) == Kind.ASSIGNMENT_PATTERN.value:
                param = param.get("left")
            names.append(param["name"] if _kind(param) == Kind.IDENTIFIER.value else "")
        return names

    def member_chain(self, node: dict) -> Optional[list[str]]:
        parts: list[str] = []
        current = node
        while True:
            kind = _kind(current)
            if kind == Kind.MEMBER.value:
                prop = current.get("property")
                if current.get("computed"):
                    if _kind(prop) != Kind.LITERAL.value or not isinstance(prop.get("value"), str):
                        return None
                    parts.append(prop["value"])
                elif _kind(prop) == Kind.IDENTIFIER.value:
                    parts.append(prop["name"])
                else:
                    return None
                current = current.get("object")
            elif kind == Kind.IDENTIFIER.value:
                parts.append(current["name"])
                break
            else:
                return None
        parts.reverse()
        return parts

    def destructuring(self, node: dict) -> Optional[Destructuring]:
        if _kind(node) != Kind.VARIABLE_DECLARATOR.value:
            return None
        pattern = node.get("id")
        source = node.get("init")
        if _kind(pattern) != Kind.OBJECT_PATTERN.value or not isinstance(source, dict):
            return None

        keys: list[str] = []
        for prop in pattern.get("properties", []):
            if _kind(prop) != Kind.PROPERTY.value or prop.get("computed"):
                continue
            name = _key_name(prop.get("key"))
            if name is not None:
                keys.append(name)
        return Destructuring(keys=tuple(keys), source=source)


def _key_name(key: Any) -> Optional[str]:
    kind = _kind(key)
    if kind == Kind.IDENTIFIER.value:
        return key["name"]
    if kind == Kind.LITERAL.value and key.get("value") is not None:
        value = key["value"]
        return value if isinstance(value, str) else key.get("raw", str(value))
    return None


SYNTAX = JavaScriptSyntax()
