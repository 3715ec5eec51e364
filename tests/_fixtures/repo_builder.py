"""Helper utilities for constructing temporary JSX projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class RepoBuilder:
    """Utility for writing source files into a throwaway project directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def file(self, relative: str) -> str:
        """Return the absolute path of a project file as a string."""
        return str((self.root / relative).resolve())

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]
