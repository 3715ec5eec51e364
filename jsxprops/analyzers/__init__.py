"""Per-file analysis: walking a syntax tree and extracting prop usages."""

from __future__ import annotations

from typing import Any

from ..models import FileExtraction
from .extractor import PropExtractor, jsx_tag_name
from .parser import SourceParser, language_for_file
from .resolver import ComponentResolver
from .values import DEFAULT_MAX_LENGTH
from .walker import Ancestors, NodeCategory, NodeVisitor, categorize, walk


class FileAnalyzer(NodeVisitor):
    """Collects usage sites, declarations and props types for one file."""

    def __init__(
        self,
        path: str,
        source: bytes,
        *,
        include_types: bool = True,
        value_max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self.path = path
        self.extractor = PropExtractor(path, source, value_max_length=value_max_length)
        self.resolver = ComponentResolver(path, source, include_types=include_types)

    def visit_jsx_opening_element(self, node: Any, ancestors: Ancestors) -> None:
        self.extractor.extract(node, ancestors)

    def visit_component_declaration(self, node: Any, ancestors: Ancestors) -> None:
        self.resolver.add_declaration(node)

    def visit_type_declaration(self, node: Any, ancestors: Ancestors) -> None:
        self.resolver.add_type(node)

    def run(self, root: Any) -> FileExtraction:
        walk(root, self)
        interfaces = self.resolver.interfaces_by_component()
        for instance in self.extractor.instances:
            instance.props_interface = interfaces.get(instance.component_name)
        return FileExtraction(
            path=self.path,
            instances=list(self.extractor.instances),
            definitions=self.resolver.resolve(),
            skipped_nodes=self.extractor.skipped_nodes,
        )


def analyze_source(
    path: str,
    source: bytes,
    parser: SourceParser,
    *,
    include_types: bool = True,
    value_max_length: int = DEFAULT_MAX_LENGTH,
) -> FileExtraction:
    """Parse ``source`` as ``path`` and extract its usage sites and declarations."""
    tree = parser.parse_source(source, path)
    analyzer = FileAnalyzer(
        path, source, include_types=include_types, value_max_length=value_max_length
    )
    return analyzer.run(tree.root_node)


def analyze_file(
    path: str,
    parser: SourceParser,
    *,
    include_types: bool = True,
    value_max_length: int = DEFAULT_MAX_LENGTH,
) -> FileExtraction:
    """Read, parse and analyse ``path``; raises ``FileReadError`` or ``ParseError``."""
    tree, source = parser.parse_file(path)
    analyzer = FileAnalyzer(
        path, source, include_types=include_types, value_max_length=value_max_length
    )
    return analyzer.run(tree.root_node)


__all__ = [
    "FileAnalyzer",
    "NodeCategory",
    "NodeVisitor",
    "SourceParser",
    "analyze_file",
    "analyze_source",
    "categorize",
    "jsx_tag_name",
    "language_for_file",
    "walk",
]
