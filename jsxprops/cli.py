"""CLI entrypoints for jsxprops commands."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from .config import ConfigError, PropLookupConfig, load_config, parse_allowed_roots
from .engine import PropLookupEngine
from .errors import PropLookupError
from .formats import (
    FORMAT_FULL,
    FORMATS,
    analysis_to_dict,
    component_props_to_dict,
    missing_result_to_dict,
    query_result_to_dict,
)
from .logging import configure_logging
from .models import PropCriterion
from .paths import resolve_and_validate_path
from .query import LOGIC_AND, LOGIC_OR


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "--config",
        help="Path to a .jsxprops.yml file or the directory containing it.",
    )
    parser.add_argument(
        "--allowed-roots",
        default="",
        help="Comma-separated directories the analysed path must live under.",
    )
    parser.add_argument(
        "--no-columns",
        action="store_true",
        help="Omit column numbers from the output.",
    )
    parser.add_argument(
        "--pretty-paths",
        action="store_true",
        help="Add path:line:col references to each location.",
    )


def _add_format_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=FORMAT_FULL,
        help="Response shape (defaults to full).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsxprops",
        description="Inventory JSX component usages and the props passed to them.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="List every component usage and prop under a path.",
    )
    _add_common_options(analyze_parser)
    _add_format_option(analyze_parser)
    analyze_parser.add_argument("path", help="File or directory to analyse.")
    analyze_parser.add_argument("--component", help="Only report this component.")
    analyze_parser.add_argument("--prop", help="Only report this prop.")
    analyze_parser.add_argument(
        "--no-types",
        action="store_true",
        help="Skip props interface resolution for component declarations.",
    )

    usage_parser = subparsers.add_parser(
        "find-usage",
        help="Find every place a prop is passed.",
    )
    _add_common_options(usage_parser)
    _add_format_option(usage_parser)
    usage_parser.add_argument("prop", help="Prop name to look for.")
    usage_parser.add_argument("path", help="File or directory to analyse.")
    usage_parser.add_argument("--component", help="Only report this component.")

    props_parser = subparsers.add_parser(
        "component-props",
        help="Show every usage of one component grouped by file.",
    )
    _add_common_options(props_parser)
    props_parser.add_argument("component", help="Component name, e.g. Button or UI.Select.")
    props_parser.add_argument("path", help="File or directory to analyse.")

    missing_parser = subparsers.add_parser(
        "missing",
        help="Find usages of a component that do not pass a required prop.",
    )
    _add_common_options(missing_parser)
    missing_parser.add_argument("component", help="Component name to check.")
    missing_parser.add_argument("required_prop", help="Prop every usage should pass.")
    missing_parser.add_argument("path", help="File or directory to analyse.")
    missing_parser.add_argument(
        "--no-spread-assumption",
        action="store_true",
        help="Report usages that only pass the prop through a spread.",
    )

    query_parser = subparsers.add_parser(
        "query",
        help="Find usages of a component whose props match criteria.",
    )
    _add_common_options(query_parser)
    query_parser.add_argument("component", help="Component name to query.")
    query_parser.add_argument("path", help="File or directory to analyse.")
    query_parser.add_argument(
        "--where",
        action="append",
        default=[],
        metavar="CRITERION",
        help=(
            "Prop criterion: NAME (present), !NAME (absent), NAME=VALUE (equals) "
            "or NAME~=VALUE (contains). Repeatable."
        ),
    )
    query_parser.add_argument(
        "--logic",
        choices=(LOGIC_AND, LOGIC_OR),
        default=LOGIC_AND,
        help="How criteria combine (defaults to AND).",
    )

    return parser


def parse_criterion(text: str) -> PropCriterion:
    """Parse a ``--where`` expression into a :class:`PropCriterion`."""
    text = text.strip()
    if not text:
        raise ValueError("Empty query criterion")
    if text.startswith("!"):
        return PropCriterion(name=text[1:].strip(), exists=False)
    if "~=" in text:
        name, value = text.split("~=", 1)
        return PropCriterion(name=name.strip(), value=value, operator="contains")
    if "=" in text:
        name, value = text.split("=", 1)
        return PropCriterion(name=name.strip(), value=value)
    return PropCriterion(name=text, exists=True)


def _load_config(args: argparse.Namespace) -> PropLookupConfig:
    if args.config:
        source = Path(args.config)
    else:
        target = Path(args.path).expanduser()
        source = target if target.exists() else Path.cwd()
    config = load_config(source)
    extra = [Path(item).expanduser().resolve() for item in parse_allowed_roots(args.allowed_roots)]
    for root in extra:
        if root not in config.allowed_roots:
            config.allowed_roots.append(root)
    return config


def _run(args: argparse.Namespace) -> Dict[str, Any]:
    config = _load_config(args)
    path = str(
        resolve_and_validate_path(args.path, "path", allowed_roots=config.allowed_roots)
    )
    engine = PropLookupEngine(config)
    options = {
        "include_columns": not args.no_columns,
        "include_pretty_paths": bool(args.pretty_paths),
    }

    if args.command == "analyze":
        result = engine.analyze_props(
            path,
            component_name=args.component,
            prop_name=args.prop,
            include_types=not args.no_types,
        )
        return analysis_to_dict(result, format=args.format, **options)
    if args.command == "find-usage":
        result = engine.find_prop_usage(args.prop, path, component_name=args.component)
        return analysis_to_dict(result, format=args.format, **options)
    if args.command == "component-props":
        return component_props_to_dict(engine.get_component_props(args.component, path), **options)
    if args.command == "missing":
        missing = engine.find_components_without_prop(
            args.component,
            args.required_prop,
            path,
            assume_spread_has_required_prop=not args.no_spread_assumption,
        )
        return missing_result_to_dict(missing, **options)
    if args.command == "query":
        criteria: List[PropCriterion] = [parse_criterion(item) for item in args.where]
        queried = engine.query_components(args.component, criteria, path, logic=args.logic)
        return query_result_to_dict(queried, **options)
    raise ValueError(f"Unknown command: {args.command}")  # pragma: no cover


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsxprops commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        payload = _run(args)
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")
    except PropLookupError as exc:
        parser.exit(1, f"{exc}\n")
    except ValueError as exc:
        parser.exit(1, f"jsxprops {args.command} failed: {exc}\n")

    print(json.dumps(payload, indent=2))


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
