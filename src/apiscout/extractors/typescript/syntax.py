from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from apiscout.extractors.syntax import CallShape, DialectSyntax, Destructuring


class Kind(str, Enum):
    """tree-sitter-typescript node kinds the extractors understand."""

    CALL = "call_expression"
    ARGUMENTS = "arguments"
    MEMBER = "member_expression"
    SUBSCRIPT = "subscript_expression"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    STRING = "string"
    TEMPLATE = "template_string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    UNDEFINED = "undefined"
    OBJECT = "object"
    PAIR = "pair"
    SHORTHAND_PROPERTY = "shorthand_property_identifier"
    ARRAY = "array"
    UNARY = "unary_expression"
    PARENTHESIZED = "parenthesized_expression"
    AS = "as_expression"
    SATISFIES = "satisfies_expression"
    NON_NULL = "non_null_expression"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    FUNCTION = "function"
    REQUIRED_PARAMETER = "required_parameter"
    OPTIONAL_PARAMETER = "optional_parameter"
    VARIABLE_DECLARATOR = "variable_declarator"
    OBJECT_PATTERN = "object_pattern"
    SHORTHAND_PATTERN = "shorthand_property_identifier_pattern"
    PAIR_PATTERN = "pair_pattern"
    ASSIGNMENT_PATTERN = "object_assignment_pattern"


_FUNCTION_KINDS = {Kind.ARROW_FUNCTION.value, Kind.FUNCTION_EXPRESSION.value, Kind.FUNCTION.value}
# Wrappers that do not change the value: (x), x as T, x satisfies T, x!
_TRANSPARENT_KINDS = {
    Kind.PARENTHESIZED.value,
    Kind.AS.value,
    Kind.SATISFIES.value,
    Kind.NON_NULL.value,
}


def _kind(node: Any) -> Optional[str]:
    kind = node.get("kind") if isinstance(node, dict) else None
    # the walker also visits "fields" containers, where "kind" may be a grammar field
    return kind if isinstance(kind, str) else None


def _field(node: dict, name: str) -> Optional[dict]:
    value = node.get("fields", {}).get(name)
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _unwrap(node: Optional[dict]) -> Optional[dict]:
    while node is not None and _kind(node) in _TRANSPARENT_KINDS:
        children = node.get("children") or []
        node = children[0] if children else _field(node, "expression")
    return node


class TypeScriptSyntax(DialectSyntax):
    def call_shape(self, node: dict) -> Optional[CallShape]:
        if _kind(node) != Kind.CALL.value:
            return None
        function = _field(node, "function")
        if _kind(function) != Kind.MEMBER.value:
            return None
        receiver = _field(function, "object")
        member = _field(function, "property")
        if _kind(receiver) != Kind.IDENTIFIER.value or _kind(member) != Kind.PROPERTY_IDENTIFIER.value:
            return None
        return CallShape(
            object_name=receiver["text"],
            member_name=member["text"],
            arguments=tuple(self.call_arguments(node)),
            line=node.get("line"),
        )

    def callee(self, node: dict) -> Optional[dict]:
        if _kind(node) != Kind.CALL.value:
            return None
        return _field(node, "function")

    def call_arguments(self, node: dict) -> list[dict]:
        args = _field(node, "arguments")
        # tagged templates (fn`...`) put a template_string here
        if _kind(args) != Kind.ARGUMENTS.value:
            return []
        return list(args.get("children", []))

    def route_text(self, node: dict) -> Optional[str]:
        node = _unwrap(node)
        kind = _kind(node)
        if kind == Kind.STRING.value:
            return node["value"]
        if kind == Kind.TEMPLATE.value:
            return "".join(node["quasis"])
        return None

    def literal_value(self, node: dict) -> Any:
        inner = _unwrap(node)
        kind = _kind(inner)

        if kind in (Kind.STRING.value, Kind.NUMBER.value):
            return inner["value"]
        if kind == Kind.TEMPLATE.value and inner.get("substitutions", 0) == 0:
            return "".join(inner["quasis"])
        if kind == Kind.TRUE.value:
            return True
        if kind == Kind.FALSE.value:
            return False
        if kind in (Kind.NULL.value, Kind.UNDEFINED.value):
            return None
        if kind == Kind.OBJECT.value:
            return {key: self.literal_value(value) for key, value in self.object_entries(inner) or []}
        if kind == Kind.ARRAY.value:
            return [self.literal_value(item) for item in inner.get("children", [])]
        if kind == Kind.UNARY.value:
            argument = _field(inner, "argument")
            if _kind(argument) == Kind.NUMBER.value and inner["text"].lstrip().startswith("-"):
                value = argument["value"]
                if isinstance(value, (int, float)):
                    return -value

        return node

    def object_entries(self, node: dict) -> Optional[list[tuple[str, dict]]]:
        node = _unwrap(node)
        if _kind(node) != Kind.OBJECT.value:
            return None
        entries: list[tuple[str, dict]] = []
        for child in node.get("children", []):
            if _kind(child) != Kind.PAIR.value:
                # shorthand { token }, spreads and methods have no static key/value pair
                if _kind(child) == Kind.SHORTHAND_PROPERTY.value:
                    entries.append((child["text"], child))
                continue
            key = _field(child, "key")
            value = _field(child, "value")
            name = _key_name(key)
            if name is None or value is None:
                continue
            entries.append((name, value))
        return entries

    def function_params(self, node: dict) -> Optional[list[str]]:
        if _kind(node) not in _FUNCTION_KINDS:
            return None
        single = _field(node, "parameter")
        if _kind(single) == Kind.IDENTIFIER.value:
            return [single["text"]]

        params_node = _field(node, "parameters")
        names: list[str] = []
        for param in (params_node or {}).get("children", []):
            kind = _kind(param)
            if kind not in (Kind.REQUIRED_PARAMETER.value, Kind.OPTIONAL_PARAMETER.value):
                continue
            pattern = _field(param, "pattern")
            names.append(pattern["text"] if _kind(pattern) == Kind.IDENTIFIER.value else "")
        return names

    def member_chain(self, node: dict) -> Optional[list[str]]:
        parts: list[str] = []
        current = _unwrap(node)
        while True:
            kind = _kind(current)
            if kind == Kind.MEMBER.value:
                prop = _field(current, "property")
                if prop is None:
                    return None
                parts.append(prop["text"])
                current = _unwrap(_field(current, "object"))
            elif kind == Kind.SUBSCRIPT.value:
                index = _unwrap(_field(current, "index"))
                if _kind(index) != Kind.STRING.value:
                    return None
                parts.append(index["value"])
                current = _unwrap(_field(current, "object"))
            elif kind == Kind.IDENTIFIER.value:
                parts.append(current["text"])
                break
            else:
                return None
        parts.reverse()
        return parts

    def destructuring(self, node: dict) -> Optional[Destructuring]:
        if _kind(node) != Kind.VARIABLE_DECLARATOR.value:
            return None
        pattern = _field(node, "name")
        source = _field(node, "value")
        if _kind(pattern) != Kind.OBJECT_PATTERN.value or source is None:
            return None

        keys: list[str] = []
        for child in pattern.get("children", []):
            kind = _kind(child)
            if kind == Kind.SHORTHAND_PATTERN.value:
                keys.append(child["text"])
            elif kind == Kind.PAIR_PATTERN.value:
                name = _key_name(_field(child, "key"))
                if name is not None:
                    keys.append(name)
            elif kind == Kind.ASSIGNMENT_PATTERN.value:
                left = _field(child, "left")
                if left is not None:
                    keys.append(left["text"])
        return Destructuring(keys=tuple(keys), source=source)


def _key_name(key: Optional[dict]) -> Optional[str]:
    kind = _kind(key)
    if kind == Kind.PROPERTY_IDENTIFIER.value:
        return key["text"]
    if kind == Kind.STRING.value:
        return key["value"]
    if kind == Kind.NUMBER.value:
        return key["text"]
    return None


SYNTAX = TypeScriptSyntax()
