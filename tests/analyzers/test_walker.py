"""Tests for jsxprops.analyzers.walker."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from jsxprops.analyzers.walker import NodeCategory, NodeVisitor, categorize, enclosing, walk

_ids = itertools.count(1)


@dataclass
class FakeNode:
    type: str
    children: List["FakeNode"] = field(default_factory=list)
    fields: Dict[str, "FakeNode"] = field(default_factory=dict)
    id: int = field(default_factory=lambda: next(_ids))

    def child_by_field_name(self, name: str) -> Optional["FakeNode"]:
        return self.fields.get(name)


class RecordingVisitor(NodeVisitor):
    def __init__(self) -> None:
        self.events: list[tuple[str, str, tuple[str, ...]]] = []

    def visit_jsx_opening_element(self, node, ancestors) -> None:
        self.events.append(("jsx", node.type, tuple(a.type for a in ancestors)))

    def visit_component_declaration(self, node, ancestors) -> None:
        self.events.append(("declaration", node.type, tuple(a.type for a in ancestors)))

    def visit_type_declaration(self, node, ancestors) -> None:
        self.events.append(("type", node.type, tuple(a.type for a in ancestors)))


def _declarator(value_type: str) -> FakeNode:
    value = FakeNode(value_type)
    return FakeNode("variable_declarator", children=[value], fields={"value": value})


def test_categorize_covers_closed_set() -> None:
    assert categorize(FakeNode("jsx_opening_element")) is NodeCategory.JSX_OPENING_ELEMENT
    assert categorize(FakeNode("jsx_self_closing_element")) is NodeCategory.JSX_OPENING_ELEMENT
    assert categorize(FakeNode("function_declaration")) is NodeCategory.COMPONENT_DECLARATION
    assert categorize(FakeNode("class_declaration")) is NodeCategory.COMPONENT_DECLARATION
    assert categorize(_declarator("arrow_function")) is NodeCategory.COMPONENT_DECLARATION
    assert categorize(_declarator("function_expression")) is NodeCategory.COMPONENT_DECLARATION
    assert categorize(_declarator("number")) is NodeCategory.OTHER
    assert categorize(FakeNode("interface_declaration")) is NodeCategory.TYPE_DECLARATION
    assert categorize(FakeNode("type_alias_declaration")) is NodeCategory.TYPE_DECLARATION
    assert categorize(FakeNode("decorator")) is NodeCategory.OTHER


def test_walk_visits_in_preorder_with_ancestors() -> None:
    inner = FakeNode("jsx_self_closing_element")
    outer_open = FakeNode("jsx_opening_element")
    element = FakeNode("jsx_element", children=[outer_open, inner])
    declaration = FakeNode("function_declaration", children=[element])
    interface = FakeNode("interface_declaration")
    root = FakeNode("program", children=[interface, declaration])

    visitor = RecordingVisitor()
    count = walk(root, visitor)

    assert count == 6
    assert visitor.events == [
        ("type", "interface_declaration", ("program",)),
        ("declaration", "function_declaration", ("program",)),
        ("jsx", "jsx_opening_element", ("program", "function_declaration", "jsx_element")),
        ("jsx", "jsx_self_closing_element", ("program", "function_declaration", "jsx_element")),
    ]


def test_walk_never_reenters_shared_nodes() -> None:
    shared = FakeNode("jsx_self_closing_element")
    root = FakeNode("program", children=[shared, FakeNode("expression_statement", children=[shared])])

    visitor = RecordingVisitor()
    count = walk(root, visitor)

    assert count == 3
    assert [event[0] for event in visitor.events] == ["jsx"]


def test_walk_ignores_unknown_node_types() -> None:
    root = FakeNode("program", children=[FakeNode("mystery"), FakeNode("comment")])
    visitor = RecordingVisitor()
    assert walk(root, visitor) == 3
    assert visitor.events == []


def test_walk_handles_deep_trees_without_recursion() -> None:
    node = FakeNode("jsx_self_closing_element")
    for _ in range(3000):
        node = FakeNode("parenthesized_expression", children=[node])
    visitor = RecordingVisitor()
    assert walk(node, visitor) == 3001
    assert len(visitor.events) == 1
    assert len(visitor.events[0][2]) == 3000


def test_enclosing_returns_innermost_match() -> None:
    outer = FakeNode("function_declaration")
    middle = FakeNode("class_declaration")
    leaf = FakeNode("jsx_element")
    ancestors = (outer, middle, leaf)
    assert enclosing(ancestors, lambda n: n.type.endswith("_declaration")) is middle
    assert enclosing(ancestors, lambda n: n.type == "program") is None
