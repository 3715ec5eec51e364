"""Validation of user-supplied paths against the allowed-roots policy."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from .errors import InvalidPathError


def _within(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def resolve_and_validate_path(
    value: object,
    label: str = "path",
    *,
    allowed_roots: Sequence[Path] = (),
    require_absolute: bool = False,
    base: Optional[Path] = None,
) -> Path:
    """Return an absolute, existing path or raise ``InvalidPathError``.

    Relative paths resolve against ``base`` (default: cwd) unless
    ``require_absolute`` is set. When ``allowed_roots`` is non-empty the
    real path must live inside one of them.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidPathError(f"{label} must be a non-empty string")

    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        if require_absolute:
            raise InvalidPathError(f"{label} must be an absolute path: {value}")
        candidate = (base or Path.cwd()) / candidate
    absolute = Path(os.path.normpath(candidate))

    if not absolute.exists():
        raise InvalidPathError(f"Invalid {label}: {value} -> {absolute} does not exist")
    if not absolute.is_dir() and not absolute.is_file():
        raise InvalidPathError(
            f"{label} exists but is neither a file nor directory: {absolute}"
        )

    if allowed_roots:
        real = absolute.resolve()
        if not any(_within(real, root.resolve()) for root in allowed_roots):
            raise InvalidPathError(f"Access to path outside allowed roots: {absolute}")

    return absolute


__all__ = ["resolve_and_validate_path"]
