"""Criteria-based queries over component usage sites."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .aggregator import component_matches
from .models import (
    ComponentAnalysis,
    ComponentQueryResult,
    PropCriterion,
    PropValue,
    QueryMatch,
    QuerySummary,
    SkippedFile,
)

LOGIC_AND = "AND"
LOGIC_OR = "OR"
OPERATORS = ("equals", "contains")


def _as_text(value: PropValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def evaluate_criteria(
    props: Dict[str, PropValue],
    criteria: Sequence[PropCriterion],
    logic: str = LOGIC_AND,
) -> Tuple[bool, Dict[str, PropValue], List[str]]:
    """Evaluate ``criteria`` against a ``name -> value`` mapping.

    Returns ``(matches, matching_props, missing_props)``.
    """
    matching: Dict[str, PropValue] = {}
    missing: List[str] = []
    outcomes: List[bool] = []

    for criterion in criteria:
        present = criterion.name in props
        if criterion.exists is not None:
            matched = criterion.exists == present
            if not matched and criterion.exists:
                missing.append(criterion.name)
        elif criterion.value is not None:
            if not present:
                matched = False
                missing.append(criterion.name)
            else:
                actual = _as_text(props[criterion.name])
                expected = _as_text(criterion.value)
                if criterion.operator == "contains":
                    matched = expected in actual
                else:
                    matched = actual == expected
        else:
            matched = present
            if not matched:
                missing.append(criterion.name)

        if matched and present:
            matching[criterion.name] = props[criterion.name]
        outcomes.append(matched)

    if logic.upper() == LOGIC_OR:
        matches = any(outcomes)
    else:
        matches = all(outcomes)
    return matches, matching, missing


def validate_query(criteria: Sequence[PropCriterion], logic: str) -> str:
    """Reject unknown logic or operators, returning the normalised logic."""
    normalised = logic.upper()
    if normalised not in {LOGIC_AND, LOGIC_OR}:
        raise ValueError(f"Unsupported query logic: {logic}")
    for criterion in criteria:
        if criterion.operator not in OPERATORS:
            raise ValueError(f"Unsupported criterion operator: {criterion.operator}")
    return normalised


def query_instances(
    instances: Iterable[ComponentAnalysis],
    component_name: str,
    criteria: Sequence[PropCriterion],
    *,
    logic: str = LOGIC_AND,
    files_scanned: Optional[int] = None,
    skipped_files: Iterable[SkippedFile] = (),
) -> ComponentQueryResult:
    logic = validate_query(criteria, logic)

    results: List[QueryMatch] = []
    seen_files = set()
    for instance in instances:
        seen_files.add(instance.file)
        if not component_matches(instance.component_name, component_name):
            continue
        all_props: Dict[str, PropValue] = {}
        for prop in instance.props:
            all_props.setdefault(prop.prop_name, prop.value)
        matches, matching, missing = evaluate_criteria(all_props, criteria, logic)
        if not matches:
            continue
        results.append(
            QueryMatch(
                component_name=instance.component_name,
                file=instance.file,
                line=instance.line,
                column=instance.column,
                matching_props=matching,
                missing_props=missing,
                all_props=all_props,
            )
        )

    results.sort(key=lambda match: (match.file, match.line, match.column))
    return ComponentQueryResult(
        component_name=component_name,
        criteria=list(criteria),
        logic=logic,
        results=results,
        summary=QuerySummary(
            total_matches=len(results),
            criteria_matched=len(criteria),
            files_scanned=len(seen_files) if files_scanned is None else files_scanned,
        ),
        skipped_files=list(skipped_files),
    )


__all__ = ["LOGIC_AND", "LOGIC_OR", "evaluate_criteria", "query_instances", "validate_query"]
