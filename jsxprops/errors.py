"""Exception hierarchy for prop lookups."""

from __future__ import annotations


class PropLookupError(RuntimeError):
    """Base class for errors raised by jsxprops."""


class ParseError(PropLookupError):
    """Raised when a syntax tree cannot be produced for a file."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Failed to parse {path}: {message}")
        self.path = path


class FileReadError(PropLookupError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Failed to read file {path}: {message}")
        self.path = path


class InvalidPathError(PropLookupError):
    """Raised when a requested path is empty, missing or not allowed."""


class AnalyzerError(PropLookupError):
    """Raised when an unexpected node shape reaches the extractor."""

    def __init__(self, message: str, *, node_type: str | None = None, line: int = 0) -> None:
        super().__init__(message)
        self.node_type = node_type
        self.line = line


__all__ = [
    "AnalyzerError",
    "FileReadError",
    "InvalidPathError",
    "ParseError",
    "PropLookupError",
]
