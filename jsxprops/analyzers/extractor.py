"""Prop extraction from JSX opening elements."""

from __future__ import annotations

from typing import Any, List, Optional

from ..errors import AnalyzerError
from ..logging import get_logger, log_skip
from ..models import KIND_USAGE, VALUE_NONE, ComponentAnalysis, PropUsage
from .resolver import component_name_of
from .values import (
    DEFAULT_MAX_LENGTH,
    char_column,
    named_children,
    node_text,
    summarize_attribute_value,
    truncate,
)
from .walker import Ancestors, NodeCategory, categorize, enclosing

logger = get_logger("extractor")

_NAME_TYPES = {"property_identifier", "jsx_namespace_name", "identifier"}


def jsx_tag_name(node: Any, source: bytes) -> Optional[str]:
    """Return the tag of an opening element (``Button``, ``UI.Select``), or None for fragments."""
    name = node.child_by_field_name("name")
    if name is None:
        return None
    return "".join(node_text(name, source).split())


class PropExtractor:
    """Turns each JSX opening element into a usage-site ``ComponentAnalysis``."""

    def __init__(self, path: str, source: bytes, *, value_max_length: int = DEFAULT_MAX_LENGTH) -> None:
        self.path = path
        self.source = source
        self.value_max_length = value_max_length
        self.instances: List[ComponentAnalysis] = []
        self.skipped_nodes = 0

    def extract(self, node: Any, ancestors: Ancestors) -> Optional[ComponentAnalysis]:
        tag = jsx_tag_name(node, self.source)
        if tag is None:
            return None
        start = node.start_point
        instance = ComponentAnalysis(
            component_name=tag,
            file=self.path,
            line=start[0] + 1,
            column=char_column(node, self.source),
            enclosing_component=self._enclosing_component(ancestors),
            kind=KIND_USAGE,
        )
        name_node = node.child_by_field_name("name")
        for attribute in named_children(node):
            if name_node is not None and attribute.id == name_node.id:
                continue
            if attribute.type == "type_arguments":
                continue
            if attribute.type == "jsx_expression" and not named_children(attribute):
                continue
            try:
                instance.props.append(self._prop_for(attribute, tag))
            except AnalyzerError as exc:
                self.skipped_nodes += 1
                log_skip(logger, self.path, exc, line=exc.line)
        self.instances.append(instance)
        return instance

    def _prop_for(self, attribute: Any, tag: str) -> PropUsage:
        point = attribute.start_point
        if attribute.type == "jsx_attribute":
            parts = named_children(attribute)
            if not parts or parts[0].type not in _NAME_TYPES:
                raise AnalyzerError(
                    "JSX attribute without a name", node_type=attribute.type, line=point[0] + 1
                )
            value_node = parts[1] if len(parts) > 1 else None
            value, kind = summarize_attribute_value(value_node, self.source, self.value_max_length)
            return PropUsage(
                prop_name=node_text(parts[0], self.source),
                component_name=tag,
                file=self.path,
                line=point[0] + 1,
                column=char_column(attribute, self.source),
                value=value,
                value_kind=kind,
            )
        if attribute.type == "jsx_expression":
            inner = named_children(attribute)
            if inner and inner[0].type == "spread_element":
                argument = named_children(inner[0])
                label = node_text(argument[0], self.source) if argument else ""
                return PropUsage(
                    prop_name=f"...{truncate(label, self.value_max_length)}",
                    component_name=tag,
                    file=self.path,
                    line=point[0] + 1,
                    column=char_column(attribute, self.source),
                    value=None,
                    value_kind=VALUE_NONE,
                    is_spread=True,
                )
        raise AnalyzerError(
            f"Unrecognised JSX attribute node '{attribute.type}'",
            node_type=attribute.type,
            line=point[0] + 1,
        )

    def _enclosing_component(self, ancestors: Ancestors) -> Optional[str]:
        declaration = enclosing(
            ancestors,
            lambda candidate: categorize(candidate) is NodeCategory.COMPONENT_DECLARATION
            and component_name_of(candidate, self.source) is not None,
        )
        if declaration is None:
            return None
        return component_name_of(declaration, self.source)


__all__ = ["PropExtractor", "jsx_tag_name"]
