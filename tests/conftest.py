from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from jsxprops.analyzers import SourceParser, analyze_source
from jsxprops.models import FileExtraction
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def extract():
    """Analyse an inline snippet as if it were the named file."""
    parser = SourceParser()

    def _extract(code: str, filename: str = "App.tsx", **kwargs) -> FileExtraction:
        source = textwrap.dedent(code).lstrip("\n").encode("utf-8")
        return analyze_source(filename, source, parser, **kwargs)

    return _extract
