"""Tests for jsxprops.missing."""

from __future__ import annotations

import pytest

from jsxprops.missing import InstanceState, classify_instance, find_missing_prop, missing_percentage
from jsxprops.models import ComponentAnalysis, PropUsage


def _prop(name: str, *, spread: bool = False) -> PropUsage:
    return PropUsage(
        prop_name=name, component_name="Button", file="a.jsx", line=1, column=0, is_spread=spread
    )


def _button(*props: PropUsage, name: str = "Button", line: int = 1) -> ComponentAnalysis:
    return ComponentAnalysis(component_name=name, file="a.jsx", line=line, props=list(props))


def test_named_prop_wins_over_spread() -> None:
    instance = _button(_prop("...rest", spread=True), _prop("variant"))
    for assume in (True, False):
        state = classify_instance(instance, "variant", assume_spread_has_required_prop=assume)
        assert state is InstanceState.HAS_PROP


def test_spread_only_instance_depends_on_policy() -> None:
    instance = _button(_prop("...rest", spread=True))
    assert classify_instance(instance, "variant") is InstanceState.ASSUMED_SATISFIED_BY_SPREAD
    assert (
        classify_instance(instance, "variant", assume_spread_has_required_prop=False)
        is InstanceState.MISSING_PROP
    )


def test_find_missing_prop_counts_every_matching_instance() -> None:
    instances = [
        _button(_prop("variant"), line=1),
        _button(_prop("onClick"), _prop("onClick"), line=2),
        _button(line=3),
        _button(_prop("...rest", spread=True), line=4),
        _button(name="Card", line=5),
        _button(name="UI.Button", line=6),
    ]

    result = find_missing_prop(instances, "Button", "variant")

    assert result.summary.total_instances == 5
    assert result.summary.missing_prop_count == 3
    assert result.summary.missing_prop_percentage == 60.0
    assert [m.line for m in result.missing_prop_usages] == [2, 3, 6]
    assert result.missing_prop_usages[0].existing_props == ["onClick"]
    assert result.summary.total_instances >= result.summary.missing_prop_count


def test_policy_toggle_is_monotonic() -> None:
    instances = [
        _button(_prop("...rest", spread=True), line=1),
        _button(_prop("...more", spread=True), _prop("variant"), line=2),
        _button(line=3),
    ]

    assumed = find_missing_prop(instances, "Button", "variant")
    strict = find_missing_prop(
        instances, "Button", "variant", assume_spread_has_required_prop=False
    )

    assert assumed.summary.missing_prop_count == 1
    assert strict.summary.missing_prop_count == 2
    assert assumed.summary.total_instances == strict.summary.total_instances == 3
    assert strict.assume_spread_has_required_prop is False


def test_no_matching_instances() -> None:
    result = find_missing_prop([_button(name="Card")], "Button", "variant")
    assert result.summary.total_instances == 0
    assert result.summary.missing_prop_percentage == 0.0
    assert result.missing_prop_usages == []


@pytest.mark.parametrize(
    ("missing", "total", "expected"),
    [(0, 0, 0.0), (1, 3, 33.33), (2, 3, 66.67), (3, 3, 100.0)],
)
def test_missing_percentage_rounding(missing: int, total: int, expected: float) -> None:
    assert missing_percentage(missing, total) == expected
