"""Configuration loading for jsxprops (.jsxprops.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".jsxprops.yml"
ALLOWED_ROOTS_ENV = "ALLOWED_ROOTS"

DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")
DEFAULT_EXCLUDED_DIRS = (
    "node_modules",
    "dist",
    "build",
    ".git",
    "coverage",
    "tmp",
    "temp",
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DiscoveryConfig:
    """File discovery settings."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    exclude_paths: List[str] = field(default_factory=list)
    max_depth: Optional[int] = 10
    max_files: Optional[int] = None
    respect_project_boundaries: bool = False


@dataclass
class AnalysisConfig:
    """Extraction behaviour."""

    strict_parse: bool = True
    value_max_length: int = 50
    workers: int = 1


@dataclass
class PropLookupConfig:
    """Represents the settings defined in .jsxprops.yml."""

    root: Path
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    allowed_roots: List[Path] = field(default_factory=list)


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> PropLookupConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    discovery = DiscoveryConfig()
    discovery_data = _as_dict(data.get("discovery"))
    if discovery_data:
        extensions = _as_str_list(discovery_data.get("extensions"))
        if extensions:
            discovery.extensions = [_normalise_extension(ext) for ext in extensions]
        if "exclude_dirs" in discovery_data:
            discovery.exclude_dirs = _as_str_list(discovery_data.get("exclude_dirs"))
        discovery.exclude_paths = _as_str_list(discovery_data.get("exclude_paths"))
        if "max_depth" in discovery_data:
            discovery.max_depth = _as_int(discovery_data.get("max_depth"))
        discovery.max_files = _as_int(discovery_data.get("max_files"))
        discovery.respect_project_boundaries = (
            _as_bool(discovery_data.get("respect_project_boundaries")) or False
        )

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        strict = _as_bool(analysis_data.get("strict_parse"))
        if strict is not None:
            analysis.strict_parse = strict
        max_length = _as_int(analysis_data.get("value_max_length"))
        if max_length is not None:
            if max_length < 4:
                raise ConfigError("analysis.value_max_length must be at least 4")
            analysis.value_max_length = max_length
        workers = _as_int(analysis_data.get("workers"))
        if workers is not None:
            if workers < 1:
                raise ConfigError("analysis.workers must be a positive integer")
            analysis.workers = workers

    allowed = _as_str_list(data.get("allowed_roots"))
    allowed.extend(parse_allowed_roots(env.get(ALLOWED_ROOTS_ENV, "")))
    allowed_roots = _dedupe_paths(root / Path(item).expanduser() for item in allowed)

    return PropLookupConfig(
        root=root,
        discovery=discovery,
        analysis=analysis,
        allowed_roots=allowed_roots,
    )


def parse_allowed_roots(value: str) -> List[str]:
    """Split a comma-separated roots list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _dedupe_paths(paths: Iterable[Path]) -> List[Path]:
    seen: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.append(resolved)
    return seen


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
