"""JSON-ready encodings of analysis results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .models import (
    AnalysisResult,
    ComponentAnalysis,
    ComponentPropsResult,
    ComponentQueryResult,
    MissingPropResult,
    PropUsage,
    SkippedFile,
)

FORMAT_FULL = "full"
FORMAT_COMPACT = "compact"
FORMAT_MINIMAL = "minimal"
FORMATS = (FORMAT_FULL, FORMAT_COMPACT, FORMAT_MINIMAL)


def pretty_path(file: str, line: Optional[int] = None, column: Optional[int] = None) -> str:
    """Editor-friendly ``path:line:col`` reference."""
    normalised = file.replace("\\", "/")
    if line is None:
        return normalised
    if column is None:
        return f"{normalised}:{line}"
    return f"{normalised}:{line}:{column}"


def prop_usage_to_dict(
    usage: PropUsage, *, include_columns: bool = True, include_pretty_paths: bool = False
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "propName": usage.prop_name,
        "componentName": usage.component_name,
        "file": usage.file,
        "line": usage.line,
        "value": usage.value,
        "valueKind": usage.value_kind,
        "isSpread": usage.is_spread,
    }
    if include_columns:
        payload["column"] = usage.column
    if usage.type_annotation is not None:
        payload["type"] = usage.type_annotation
    if include_pretty_paths:
        payload["prettyPath"] = pretty_path(
            usage.file, usage.line, usage.column if include_columns else None
        )
    return payload


def component_to_dict(
    component: ComponentAnalysis,
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "componentName": component.component_name,
        "file": component.file,
        "line": component.line,
        "kind": component.kind,
        "props": [
            prop_usage_to_dict(
                prop,
                include_columns=include_columns,
                include_pretty_paths=include_pretty_paths,
            )
            for prop in component.props
        ],
    }
    if include_columns:
        payload["column"] = component.column
    if component.props_interface is not None:
        payload["propsInterface"] = component.props_interface
    if component.enclosing_component is not None:
        payload["enclosingComponent"] = component.enclosing_component
    if include_pretty_paths:
        payload["prettyPath"] = pretty_path(component.file)
    return payload


def skipped_to_dict(skipped: SkippedFile) -> Dict[str, Any]:
    return {"path": skipped.path, "reason": skipped.reason, "error": skipped.error}


def analysis_to_dict(
    result: AnalysisResult,
    *,
    format: str = FORMAT_FULL,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> Dict[str, Any]:
    """Encode ``result`` in one of the ``full``/``compact``/``minimal`` shapes."""
    if format == FORMAT_COMPACT:
        return to_compact(
            result, include_columns=include_columns, include_pretty_paths=include_pretty_paths
        )
    if format == FORMAT_MINIMAL:
        return to_minimal(
            result, include_columns=include_columns, include_pretty_paths=include_pretty_paths
        )
    if format != FORMAT_FULL:
        raise ValueError(f"Unknown response format: {format}")

    options = {"include_columns": include_columns, "include_pretty_paths": include_pretty_paths}
    return {
        "summary": {
            "totalFiles": result.summary.total_files,
            "totalComponents": result.summary.total_components,
            "totalProps": result.summary.total_props,
        },
        "components": [component_to_dict(c, **options) for c in result.components],
        "propUsages": [prop_usage_to_dict(u, **options) for u in result.prop_usages],
        "definitions": [component_to_dict(d, **options) for d in result.definitions],
        "skippedFiles": [skipped_to_dict(s) for s in result.skipped_files],
        "skippedNodes": result.skipped_nodes,
    }


def to_compact(
    result: AnalysisResult, *, include_columns: bool = True, include_pretty_paths: bool = False
) -> Dict[str, Any]:
    files: Dict[str, Dict[str, Any]] = {}
    for path, instances in result.files.items():
        names: Dict[str, Dict[str, Any]] = {}
        usages: List[Dict[str, Any]] = []
        for instance in instances:
            entry = names.setdefault(instance.component_name, {"name": instance.component_name, "props": []})
            for prop in instance.props:
                if prop.prop_name not in entry["props"]:
                    entry["props"].append(prop.prop_name)
                usage: Dict[str, Any] = {"name": prop.prop_name, "line": prop.line}
                if include_columns:
                    usage["col"] = prop.column
                if prop.value is not None:
                    usage["value"] = prop.value
                if prop.is_spread:
                    usage["spread"] = True
                usages.append(usage)
            if instance.props_interface and "interface" not in entry:
                entry["interface"] = instance.props_interface
        file_entry: Dict[str, Any] = {"components": list(names.values()), "usages": usages}
        if include_pretty_paths:
            file_entry["prettyPath"] = pretty_path(path)
        files[path] = file_entry
    return {
        "summary": {
            "files": result.summary.total_files,
            "components": result.summary.total_components,
            "props": result.summary.total_props,
        },
        "files": files,
        "skippedFiles": [skipped.path for skipped in result.skipped_files],
    }


def to_minimal(
    result: AnalysisResult, *, include_columns: bool = True, include_pretty_paths: bool = False
) -> Dict[str, Any]:
    props: Dict[str, List[Dict[str, Any]]] = {}
    for usage in result.prop_usages:
        entry: Dict[str, Any] = {
            "component": usage.component_name,
            "file": usage.file,
            "line": usage.line,
        }
        if include_pretty_paths:
            entry["prettyPath"] = pretty_path(
                usage.file, usage.line, usage.column if include_columns else None
            )
        props.setdefault(usage.prop_name, []).append(entry)
    return {"props": props}


def component_props_to_dict(
    result: ComponentPropsResult,
    *,
    include_columns: bool = True,
    include_pretty_paths: bool = False,
) -> Dict[str, Any]:
    return {
        "componentName": result.component_name,
        "totalInstances": result.total_instances,
        "files": {
            path: [
                component_to_dict(
                    instance,
                    include_columns=include_columns,
                    include_pretty_paths=include_pretty_paths,
                )
                for instance in instances
            ]
            for path, instances in result.files.items()
        },
        "skippedFiles": [skipped_to_dict(s) for s in result.skipped_files],
    }


def missing_result_to_dict(
    result: MissingPropResult, *, include_columns: bool = True, include_pretty_paths: bool = False
) -> Dict[str, Any]:
    usages = []
    for instance in result.missing_prop_usages:
        entry: Dict[str, Any] = {
            "componentName": instance.component_name,
            "file": instance.file,
            "line": instance.line,
            "existingProps": list(instance.existing_props),
        }
        if include_columns:
            entry["column"] = instance.column
        if include_pretty_paths:
            entry["prettyPath"] = pretty_path(
                instance.file, instance.line, instance.column if include_columns else None
            )
        usages.append(entry)
    return {
        "componentName": result.component_name,
        "requiredProp": result.required_prop,
        "assumeSpreadHasRequiredProp": result.assume_spread_has_required_prop,
        "missingPropUsages": usages,
        "summary": {
            "totalInstances": result.summary.total_instances,
            "missingPropCount": result.summary.missing_prop_count,
            "missingPropPercentage": result.summary.missing_prop_percentage,
        },
        "skippedFiles": [skipped_to_dict(s) for s in result.skipped_files],
    }


def query_result_to_dict(
    result: ComponentQueryResult, *, include_columns: bool = True, include_pretty_paths: bool = False
) -> Dict[str, Any]:
    matches = []
    for match in result.results:
        entry: Dict[str, Any] = {
            "componentName": match.component_name,
            "file": match.file,
            "line": match.line,
            "matchingProps": dict(match.matching_props),
            "allProps": dict(match.all_props),
        }
        if include_columns:
            entry["column"] = match.column
        if match.missing_props:
            entry["missingProps"] = list(match.missing_props)
        if include_pretty_paths:
            entry["prettyPath"] = pretty_path(match.file, match.line)
        matches.append(entry)
    return {
        "query": {
            "componentName": result.component_name,
            "logic": result.logic,
            "propCriteria": [
                {
                    key: value
                    for key, value in (
                        ("name", criterion.name),
                        ("value", criterion.value),
                        ("operator", criterion.operator),
                        ("exists", criterion.exists),
                    )
                    if value is not None
                }
                for criterion in result.criteria
            ],
        },
        "results": matches,
        "summary": {
            "totalMatches": result.summary.total_matches,
            "criteriaMatched": result.summary.criteria_matched,
            "filesScanned": result.summary.files_scanned,
        },
        "skippedFiles": [skipped_to_dict(s) for s in result.skipped_files],
    }


__all__ = [
    "FORMATS",
    "FORMAT_COMPACT",
    "FORMAT_FULL",
    "FORMAT_MINIMAL",
    "analysis_to_dict",
    "component_props_to_dict",
    "missing_result_to_dict",
    "pretty_path",
    "query_result_to_dict",
    "to_compact",
    "to_minimal",
]
