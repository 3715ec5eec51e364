"""Summaries of JSX attribute values.

Literal values keep their type (``str``, ``int``/``float``, ``bool``,
``None``); anything else is reduced to a short, readable expression string.
"""

from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from ..models import (
    VALUE_BOOLEAN,
    VALUE_EXPRESSION,
    VALUE_NONE,
    VALUE_NUMBER,
    VALUE_STRING,
    PropValue,
)

ELLIPSIS = "…"
DEFAULT_MAX_LENGTH = 50

_WHITESPACE = re.compile(r"\s+")

Summary = Tuple[PropValue, str]


def node_text(node: Any, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def char_column(node: Any, source: bytes) -> int:
    """Zero-based character column of ``node`` (tree-sitter reports bytes)."""
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    return len(source[line_start : node.start_byte].decode("utf-8", errors="ignore"))


def truncate(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    collapsed = _WHITESPACE.sub(" ", text).strip()
    if len(collapsed) <= max_length:
        return collapsed
    return collapsed[: max_length - 1].rstrip() + ELLIPSIS


def named_children(node: Any) -> list:
    return [child for child in node.children if child.is_named and child.type != "comment"]


def summarize_attribute_value(
    value_node: Optional[Any], source: bytes, max_length: int = DEFAULT_MAX_LENGTH
) -> Summary:
    """Summarise the right-hand side of ``name=...`` in a JSX attribute.

    A bare attribute (``<Input disabled />``) has no value node and reads as
    ``True``.
    """
    if value_node is None:
        return True, VALUE_BOOLEAN
    if value_node.type == "string":
        return _unquote(node_text(value_node, source)), VALUE_STRING
    if value_node.type == "jsx_expression":
        inner = named_children(value_node)
        if not inner:
            return None, VALUE_NONE
        return summarize_expression(inner[0], source, max_length)
    return summarize_expression(value_node, source, max_length)


def summarize_expression(node: Any, source: bytes, max_length: int = DEFAULT_MAX_LENGTH) -> Summary:
    node_type = node.type
    text = node_text(node, source)

    if node_type == "string":
        return _unquote(text), VALUE_STRING
    if node_type == "template_string":
        return _summarize_template(node, source, max_length)
    if node_type == "number":
        number = parse_number(text)
        if number is None:
            return truncate(text, max_length), VALUE_EXPRESSION
        return number, VALUE_NUMBER
    if node_type == "unary_expression":
        argument = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        if (
            argument is not None
            and argument.type == "number"
            and operator is not None
            and node_text(operator, source) in {"-", "+"}
        ):
            number = parse_number(node_text(argument, source))
            if number is not None:
                return (-number if node_text(operator, source) == "-" else number), VALUE_NUMBER
        return truncate(text, max_length), VALUE_EXPRESSION
    if node_type in {"true", "false"}:
        return node_type == "true", VALUE_BOOLEAN
    if node_type in {"null", "undefined"} or (node_type == "identifier" and text == "undefined"):
        return None, VALUE_NONE
    if node_type == "parenthesized_expression":
        inner = named_children(node)
        if len(inner) == 1:
            return summarize_expression(inner[0], source, max_length)
    return describe_expression(node, source, max_length), VALUE_EXPRESSION


def describe_expression(node: Any, source: bytes, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Render a non-literal expression as short text."""
    node_type = node.type
    if node_type == "identifier":
        return node_text(node, source)
    if node_type == "subscript_expression":
        obj = node.child_by_field_name("object")
        index = node.child_by_field_name("index")
        if obj is not None and index is not None:
            index_text = _describe_index(index, source, max_length)
            return truncate(f"{describe_expression(obj, source, max_length)}[{index_text}]", max_length)
    if node_type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is not None:
            return truncate(f"{describe_expression(callee, source, max_length)}()", max_length)
    if node_type == "arrow_function":
        params = node.child_by_field_name("parameters") or node.child_by_field_name("parameter")
        params_text = node_text(params, source) if params is not None else "()"
        return truncate(f"{params_text} => {ELLIPSIS}", max_length)
    if node_type in {"function_expression", "function"}:
        params = node.child_by_field_name("parameters")
        params_text = node_text(params, source) if params is not None else "()"
        return truncate(f"function{params_text} {{{ELLIPSIS}}}", max_length)
    if node_type == "object":
        return "{...}"
    if node_type == "array":
        return "[...]"
    if node_type in {"jsx_element", "jsx_self_closing_element"}:
        opening = node.child_by_field_name("open_tag") if node_type == "jsx_element" else node
        name = opening.child_by_field_name("name") if opening is not None else None
        tag = node_text(name, source) if name is not None else ""
        return f"<{tag} />"
    if node_type == "jsx_fragment":
        return "<>...</>"
    if node_type == "template_string":
        value, _ = _summarize_template(node, source, max_length)
        return str(value)
    if node_type == "parenthesized_expression":
        inner = named_children(node)
        if len(inner) == 1:
            return describe_expression(inner[0], source, max_length)
    return truncate(node_text(node, source), max_length)


def parse_number(text: str) -> Optional[int | float]:
    cleaned = text.replace("_", "").rstrip("n")
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def _describe_index(node: Any, source: bytes, max_length: int) -> str:
    if node.type == "string":
        return _unquote(node_text(node, source))
    if node.type == "number":
        return node_text(node, source)
    return describe_expression(node, source, max_length)


def _summarize_template(node: Any, source: bytes, max_length: int) -> Summary:
    start = node.start_byte + 1
    end = node.end_byte - 1
    pieces = []
    cursor = start
    substituted = False
    for child in node.children:
        if child.type != "template_substitution":
            continue
        substituted = True
        pieces.append(source[cursor : child.start_byte].decode("utf-8", errors="ignore"))
        inner = named_children(child)
        if inner:
            pieces.append(_substitution_text(inner[0], source, max_length))
        cursor = child.end_byte
    pieces.append(source[cursor:end].decode("utf-8", errors="ignore"))
    cooked = "".join(pieces)
    if not substituted:
        return cooked, VALUE_STRING
    return truncate(cooked, max_length), VALUE_EXPRESSION


def _substitution_text(node: Any, source: bytes, max_length: int) -> str:
    value, kind = summarize_expression(node, source, max_length)
    if kind == VALUE_NONE:
        return node_text(node, source)
    if kind == VALUE_BOOLEAN:
        return "true" if value else "false"
    return str(value)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'"}:
        return text[1:-1]
    return text


__all__ = [
    "DEFAULT_MAX_LENGTH",
    "ELLIPSIS",
    "char_column",
    "describe_expression",
    "named_children",
    "node_text",
    "parse_number",
    "summarize_attribute_value",
    "summarize_expression",
    "truncate",
]
