"""Depth-first traversal over tree-sitter syntax trees."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Set, Tuple


class SyntaxNode(Protocol):
    """The subset of ``tree_sitter.Node`` the walker relies on."""

    id: int
    type: str
    children: Sequence[Any]

    def child_by_field_name(self, name: str) -> Optional[Any]: ...


class NodeCategory(Enum):
    JSX_OPENING_ELEMENT = "jsx_opening_element"
    COMPONENT_DECLARATION = "component_declaration"
    TYPE_DECLARATION = "type_declaration"
    OTHER = "other"


JSX_OPENING_TYPES = frozenset({"jsx_opening_element", "jsx_self_closing_element"})
DECLARATION_TYPES = frozenset({"function_declaration", "class_declaration"})
FUNCTION_VALUE_TYPES = frozenset({"arrow_function", "function_expression", "function"})
TYPE_DECLARATION_TYPES = frozenset({"interface_declaration", "type_alias_declaration"})

Ancestors = Tuple[SyntaxNode, ...]


def categorize(node: SyntaxNode) -> NodeCategory:
    """Map a node onto the closed set of categories the analyzers care about."""
    node_type = node.type
    if node_type in JSX_OPENING_TYPES:
        return NodeCategory.JSX_OPENING_ELEMENT
    if node_type in DECLARATION_TYPES:
        return NodeCategory.COMPONENT_DECLARATION
    if node_type == "variable_declarator":
        value = node.child_by_field_name("value")
        if value is not None and value.type in FUNCTION_VALUE_TYPES:
            return NodeCategory.COMPONENT_DECLARATION
        return NodeCategory.OTHER
    if node_type in TYPE_DECLARATION_TYPES:
        return NodeCategory.TYPE_DECLARATION
    return NodeCategory.OTHER


class NodeVisitor:
    """Callbacks invoked by :func:`walk`; subclasses override what they need."""

    def visit_jsx_opening_element(self, node: SyntaxNode, ancestors: Ancestors) -> None:
        pass

    def visit_component_declaration(self, node: SyntaxNode, ancestors: Ancestors) -> None:
        pass

    def visit_type_declaration(self, node: SyntaxNode, ancestors: Ancestors) -> None:
        pass


def _handlers(visitor: NodeVisitor) -> Dict[NodeCategory, Callable[[SyntaxNode, Ancestors], None]]:
    return {
        NodeCategory.JSX_OPENING_ELEMENT: visitor.visit_jsx_opening_element,
        NodeCategory.COMPONENT_DECLARATION: visitor.visit_component_declaration,
        NodeCategory.TYPE_DECLARATION: visitor.visit_type_declaration,
    }


def walk(root: SyntaxNode, visitor: NodeVisitor) -> int:
    """Visit ``root`` and its descendants in pre-order, returning the node count.

    Iterative, with an explicit stack. A node whose id has already been seen
    is never entered again.
    """
    handlers = _handlers(visitor)
    visited: Set[int] = set()
    path: List[SyntaxNode] = []
    stack: List[Tuple[SyntaxNode, int]] = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if node.id in visited:
            continue
        visited.add(node.id)

        del path[depth:]
        handler = handlers.get(categorize(node))
        if handler is not None:
            handler(node, tuple(path))
        path.append(node)

        for child in reversed(node.children):
            stack.append((child, depth + 1))

    return len(visited)


def enclosing(ancestors: Ancestors, predicate: Callable[[SyntaxNode], bool]) -> Optional[SyntaxNode]:
    """Return the innermost ancestor satisfying ``predicate``."""
    for ancestor in reversed(ancestors):
        if predicate(ancestor):
            return ancestor
    return None


__all__ = [
    "Ancestors",
    "NodeCategory",
    "NodeVisitor",
    "SyntaxNode",
    "categorize",
    "enclosing",
    "walk",
]
