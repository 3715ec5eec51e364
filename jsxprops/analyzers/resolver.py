"""Same-file resolution of component declarations and their props types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..models import KIND_DEFINITION, ComponentAnalysis, PropUsage
from .values import char_column, named_children, node_text

_PATTERN_WRAPPERS = {"required_parameter", "optional_parameter"}
_NAMED_TYPE_NODES = {"type_identifier"}


@dataclass
class TypeDeclaration:
    """An interface or type alias with the property types it declares."""

    name: str
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class ComponentDeclaration:
    name: str
    node: Any
    kind: str
    parameter: Optional[Any] = None
    parameter_type: Optional[str] = None
    generic_type: Optional[str] = None


def is_component_name(name: str) -> bool:
    return bool(name) and name[0].isupper()


def declaration_name(node: Any, source: bytes) -> Optional[str]:
    """Return the declared identifier of a function, class or variable declarator."""
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.type not in {"identifier", "type_identifier"}:
        return None
    return node_text(name_node, source)


def component_name_of(node: Any, source: bytes) -> Optional[str]:
    name = declaration_name(node, source)
    if name and is_component_name(name):
        return name
    return None


class ComponentResolver:
    """Collects declarations during a walk and resolves them once the file is done.

    Resolution is limited to one file: a props type is only
    attached when the annotation or a ``<Name>Props`` declaration lives next
    to the component.
    """

    def __init__(self, path: str, source: bytes, *, include_types: bool = True) -> None:
        self.path = path
        self.source = source
        self.include_types = include_types
        self.declarations: List[ComponentDeclaration] = []
        self.types: Dict[str, TypeDeclaration] = {}

    def add_type(self, node: Any) -> None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = node_text(name_node, self.source)
        body = node.child_by_field_name("body") or node.child_by_field_name("value")
        properties: Dict[str, str] = {}
        if body is not None and body.type in {"interface_body", "object_type"}:
            for member in named_children(body):
                if member.type != "property_signature":
                    continue
                key = member.child_by_field_name("name")
                annotation = member.child_by_field_name("type")
                if key is None:
                    continue
                type_text = "any"
                if annotation is not None:
                    type_text = node_text(annotation, self.source).lstrip(":").strip()
                properties[_property_key(key, self.source)] = type_text
        # First declaration wins; later merges of the same interface are ignored.
        self.types.setdefault(name, TypeDeclaration(name=name, properties=properties))

    def add_declaration(self, node: Any) -> None:
        name = component_name_of(node, self.source)
        if name is None:
            return
        if node.type == "class_declaration":
            heritage = next((c for c in node.children if c.type == "class_heritage"), None)
            self.declarations.append(
                ComponentDeclaration(
                    name=name,
                    node=node,
                    kind="class",
                    generic_type=_first_type_argument(heritage, self.source),
                )
            )
            return

        function = node if node.type == "function_declaration" else node.child_by_field_name("value")
        parameter, parameter_type = _first_parameter(function, self.source)
        generic_type = None
        if node.type == "variable_declarator":
            generic_type = _first_type_argument(node.child_by_field_name("type"), self.source)
        self.declarations.append(
            ComponentDeclaration(
                name=name,
                node=node,
                kind="function",
                parameter=parameter,
                parameter_type=parameter_type,
                generic_type=generic_type,
            )
        )

    def props_interface(self, declaration: ComponentDeclaration) -> Optional[str]:
        if not self.include_types:
            return None
        if declaration.parameter_type:
            return declaration.parameter_type
        if declaration.generic_type:
            return declaration.generic_type
        conventional = f"{declaration.name}Props"
        if conventional in self.types:
            return conventional
        return None

    def resolve(self) -> List[ComponentAnalysis]:
        """Build the declaration view for every collected component."""
        definitions: List[ComponentAnalysis] = []
        for declaration in self.declarations:
            interface = self.props_interface(declaration)
            property_types = self.types[interface].properties if interface in self.types else {}
            start = declaration.node.start_point
            analysis = ComponentAnalysis(
                component_name=declaration.name,
                file=self.path,
                props_interface=interface,
                line=start[0] + 1,
                column=char_column(declaration.node, self.source),
                kind=KIND_DEFINITION,
            )
            for prop_name, prop_node, is_spread in self._declared_props(declaration):
                point = prop_node.start_point
                analysis.props.append(
                    PropUsage(
                        prop_name=prop_name,
                        component_name=declaration.name,
                        file=self.path,
                        line=point[0] + 1,
                        column=char_column(prop_node, self.source),
                        is_spread=is_spread,
                        type_annotation=(
                            property_types.get(prop_name) if self.include_types and not is_spread else None
                        ),
                    )
                )
            definitions.append(analysis)
        return definitions

    def interfaces_by_component(self) -> Dict[str, str]:
        mapping: Dict[str, str] = {}
        for declaration in self.declarations:
            interface = self.props_interface(declaration)
            if interface and declaration.name not in mapping:
                mapping[declaration.name] = interface
        return mapping

    def _declared_props(self, declaration: ComponentDeclaration) -> Iterator[tuple[str, Any, bool]]:
        if declaration.kind == "class":
            yield from _dedupe(self._member_props(declaration.node, ("this", "props")))
            return
        parameter = declaration.parameter
        if parameter is None:
            return
        if parameter.type == "object_pattern":
            yield from self._pattern_props(parameter)
        elif parameter.type == "identifier":
            param_name = node_text(parameter, self.source)
            yield from _dedupe(self._member_props(declaration.node, (param_name,)))

    def _pattern_props(self, pattern: Any) -> Iterator[tuple[str, Any, bool]]:
        for element in named_children(pattern):
            if element.type == "shorthand_property_identifier_pattern":
                yield node_text(element, self.source), element, False
            elif element.type == "pair_pattern":
                key = element.child_by_field_name("key")
                if key is not None:
                    yield _property_key(key, self.source), element, False
            elif element.type == "object_assignment_pattern":
                left = element.child_by_field_name("left")
                if left is not None:
                    yield node_text(left, self.source), element, False
            elif element.type == "rest_pattern":
                inner = named_children(element)
                label = node_text(inner[0], self.source) if inner else "rest"
                yield f"...{label}", element, True

    def _member_props(self, root: Any, target: tuple[str, ...]) -> Iterator[tuple[str, Any, bool]]:
        """Yield props read as ``<target>.x`` or destructured from ``<target>``."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "member_expression":
                obj = node.child_by_field_name("object")
                prop = node.child_by_field_name("property")
                if (
                    obj is not None
                    and prop is not None
                    and prop.type == "property_identifier"
                    and _expression_path(obj, self.source) == target
                ):
                    yield node_text(prop, self.source), node, False
            elif node.type == "variable_declarator":
                name = node.child_by_field_name("name")
                value = node.child_by_field_name("value")
                if (
                    name is not None
                    and value is not None
                    and name.type == "object_pattern"
                    and _expression_path(value, self.source) == target
                ):
                    yield from self._pattern_props(name)
            stack.extend(reversed(node.children))


def _dedupe(items: Iterator[tuple[str, Any, bool]]) -> Iterator[tuple[str, Any, bool]]:
    seen = set()
    for item in items:
        if item[0] in seen:
            continue
        seen.add(item[0])
        yield item


def _expression_path(node: Any, source: bytes) -> Optional[tuple[str, ...]]:
    if node.type in {"identifier", "this"}:
        return (node_text(node, source),)
    if node.type == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if obj is None or prop is None:
            return None
        head = _expression_path(obj, source)
        if head is None:
            return None
        return head + (node_text(prop, source),)
    return None


def _first_parameter(function: Optional[Any], source: bytes) -> tuple[Optional[Any], Optional[str]]:
    if function is None:
        return None, None
    single = function.child_by_field_name("parameter")
    if single is not None:
        return single, None
    params = function.child_by_field_name("parameters")
    if params is None:
        return None, None
    candidates = named_children(params)
    if not candidates:
        return None, None
    first = candidates[0]
    type_name = None
    if first.type in _PATTERN_WRAPPERS:
        annotation = first.child_by_field_name("type")
        type_name = _named_type(annotation, source)
        first = first.child_by_field_name("pattern") or first
    if first.type == "assignment_pattern":
        first = first.child_by_field_name("left") or first
    return first, type_name


def _named_type(annotation: Optional[Any], source: bytes) -> Optional[str]:
    if annotation is None:
        return None
    inner = named_children(annotation) if annotation.type == "type_annotation" else [annotation]
    if inner and inner[0].type in _NAMED_TYPE_NODES:
        return node_text(inner[0], source)
    return None


def _first_type_argument(node: Optional[Any], source: bytes) -> Optional[str]:
    if node is None:
        return None
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "type_arguments":
            arguments = named_children(current)
            if arguments and arguments[0].type in _NAMED_TYPE_NODES:
                return node_text(arguments[0], source)
            return None
        stack.extend(reversed(current.children))
    return None


def _property_key(node: Any, source: bytes) -> str:
    text = node_text(node, source)
    if node.type == "string" and len(text) >= 2:
        return text[1:-1]
    return text


__all__ = [
    "ComponentDeclaration",
    "ComponentResolver",
    "TypeDeclaration",
    "component_name_of",
    "declaration_name",
    "is_component_name",
]
