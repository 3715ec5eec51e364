"""Discovery of JSX/TSX source files below a path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .config import DiscoveryConfig
from .logging import get_logger

logger = get_logger("scanner")

_PACKAGE_MARKER = "package.json"


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .jsxprops.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            if self.directory_only and rel_path.startswith(f"{self.pattern}/"):
                return True
            return False

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.is_file():
        return []

    rules: List[IgnoreRule] = []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return []
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class FileScanner:
    """Walks a directory to list analysable source files in a stable order."""

    def __init__(self, config: Optional[DiscoveryConfig] = None) -> None:
        self.config = config or DiscoveryConfig()

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in {ext.lower() for ext in self.config.extensions}

    def scan(self, path: str) -> List[str]:
        """Return source files under ``path``; a missing path yields an empty list."""
        target = Path(path).expanduser()
        if not target.exists():
            logger.info("Path not found, nothing to analyse: %s", target)
            return []
        if target.is_file():
            return [str(target.resolve())] if self.supports(target) else []
        if not target.is_dir():
            return []

        root = target.resolve()
        rules = parse_gitignore(root / ".gitignore")
        for pattern in self.config.exclude_paths:
            rule = build_ignore_rule(pattern)
            if rule is not None:
                rules.append(rule)

        files: List[str] = []
        for file_path in self._iter_files(root, rules):
            files.append(str(file_path))
            if self.config.max_files is not None and len(files) >= self.config.max_files:
                logger.warning(
                    "Stopping discovery at %d files under %s (max_files)", len(files), root
                )
                break
        logger.debug("Discovered %d source files under %s", len(files), root)
        return files

    def _iter_files(self, root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
        excluded = set(self.config.exclude_dirs)
        max_depth = self.config.max_depth
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
            depth = rel_dir.count("/") + 1 if rel_dir else 0

            kept = []
            for name in sorted(dirnames):
                if name in excluded:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                if max_depth is not None and depth + 1 > max_depth:
                    continue
                if self.config.respect_project_boundaries and (
                    current_dir / name / _PACKAGE_MARKER
                ).is_file():
                    logger.debug("Skipping nested package at %s", current_dir / name)
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                file_path = current_dir / filename
                if not self.supports(file_path):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _should_ignore(rel_path, False, rules):
                    continue
                yield file_path


__all__ = ["FileScanner", "IgnoreRule", "build_ignore_rule", "parse_gitignore"]
