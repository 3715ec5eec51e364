"""Tree-sitter parsing for JavaScript and TypeScript sources."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Dict, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import FileReadError, ParseError

_LANGUAGE_FACTORIES: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

_LANGUAGE_BY_SUFFIX = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_LANGUAGES: Dict[str, Language] = {}
_LANGUAGES_LOCK = threading.Lock()


def language_for_file(path: str) -> Optional[str]:
    """Return the grammar key used for ``path`` or ``None`` when unsupported."""
    return _LANGUAGE_BY_SUFFIX.get(Path(path).suffix.lower())


def _get_language(language_key: str) -> Language:
    with _LANGUAGES_LOCK:
        language = _LANGUAGES.get(language_key)
        if language is None:
            language = Language(_LANGUAGE_FACTORIES[language_key]())
            _LANGUAGES[language_key] = language
        return language


class SourceParser:
    """Parses source files into tree-sitter trees.

    Parsers are not safe to share between threads, so each thread lazily
    builds its own set.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict
        self._local = threading.local()

    def parse_file(self, path: str) -> tuple[Tree, bytes]:
        """Read and parse ``path``; raises ``FileReadError`` or ``ParseError``."""
        try:
            source = Path(path).read_bytes()
            source.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(path, str(exc)) from exc
        return self.parse_source(source, path), source

    def parse_source(self, source: bytes, path: str) -> Tree:
        language_key = language_for_file(path)
        if language_key is None:
            raise ParseError(path, "unsupported file extension")
        parser = self._get_parser(language_key)
        tree = parser.parse(source)
        if self.strict and tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            raise ParseError(path, f"syntax error near line {line}")
        return tree

    def _get_parser(self, language_key: str) -> Parser:
        parsers: Dict[str, Parser] | None = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = {}
            self._local.parsers = parsers
        parser = parsers.get(language_key)
        if parser is None:
            parser = Parser(_get_language(language_key))
            parsers[language_key] = parser
        return parser


def _first_error_line(root: Node) -> int:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        if node.has_error:
            stack.extend(reversed(node.children))
    return root.start_point[0] + 1


__all__ = ["SourceParser", "language_for_file"]
