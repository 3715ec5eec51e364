"""Detection of component instances that omit a required prop."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List

from .aggregator import component_matches
from .models import (
    ComponentAnalysis,
    MissingPropInstance,
    MissingPropResult,
    MissingPropSummary,
    SkippedFile,
)


class InstanceState(Enum):
    HAS_PROP = "has_prop"
    MISSING_PROP = "missing_prop"
    ASSUMED_SATISFIED_BY_SPREAD = "assumed_satisfied_by_spread"


def classify_instance(
    instance: ComponentAnalysis,
    required_prop: str,
    *,
    assume_spread_has_required_prop: bool = True,
) -> InstanceState:
    """Classify one usage site; a named prop always wins over a spread."""
    if any(not prop.is_spread and prop.prop_name == required_prop for prop in instance.props):
        return InstanceState.HAS_PROP
    if assume_spread_has_required_prop and instance.has_spread:
        return InstanceState.ASSUMED_SATISFIED_BY_SPREAD
    return InstanceState.MISSING_PROP


def missing_percentage(missing: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(100.0 * missing / total, 2)


def find_missing_prop(
    instances: Iterable[ComponentAnalysis],
    component_name: str,
    required_prop: str,
    *,
    assume_spread_has_required_prop: bool = True,
    skipped_files: Iterable[SkippedFile] = (),
) -> MissingPropResult:
    """Scan usage sites of ``component_name`` for ones lacking ``required_prop``.

    ``total_instances`` counts every matching usage site, whether or not it
    carries the prop.
    """
    total = 0
    missing: List[MissingPropInstance] = []
    for instance in instances:
        if not component_matches(instance.component_name, component_name):
            continue
        total += 1
        state = classify_instance(
            instance,
            required_prop,
            assume_spread_has_required_prop=assume_spread_has_required_prop,
        )
        if state is not InstanceState.MISSING_PROP:
            continue
        missing.append(
            MissingPropInstance(
                component_name=instance.component_name,
                file=instance.file,
                line=instance.line,
                column=instance.column,
                existing_props=list(dict.fromkeys(instance.prop_names)),
            )
        )

    return MissingPropResult(
        component_name=component_name,
        required_prop=required_prop,
        assume_spread_has_required_prop=assume_spread_has_required_prop,
        missing_prop_usages=missing,
        summary=MissingPropSummary(
            total_instances=total,
            missing_prop_count=len(missing),
            missing_prop_percentage=missing_percentage(len(missing), total),
        ),
        skipped_files=list(skipped_files),
    )


__all__ = ["InstanceState", "classify_instance", "find_missing_prop", "missing_percentage"]
