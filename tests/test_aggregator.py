"""Tests for jsxprops.aggregator."""

from __future__ import annotations

from jsxprops.aggregator import PropAggregator, component_matches, filter_extraction
from jsxprops.models import ComponentAnalysis, FileExtraction, PropUsage, SkippedFile


def _instance(name: str, file: str, line: int, *props: str) -> ComponentAnalysis:
    return ComponentAnalysis(
        component_name=name,
        file=file,
        line=line,
        props=[
            PropUsage(prop_name=prop, component_name=name, file=file, line=line, column=0)
            for prop in props
        ],
    )


def _extraction(path: str, *instances: ComponentAnalysis) -> FileExtraction:
    return FileExtraction(path=path, instances=list(instances))


def test_component_matches_member_tags() -> None:
    assert component_matches("Button", "Button")
    assert component_matches("UI.Select", "Select")
    assert component_matches("UI.Select", "UI.Select")
    assert not component_matches("Select", "UI.Select")
    assert not component_matches("Selection", "Select")
    assert component_matches("Anything", None)


def test_summary_is_folded_on_add() -> None:
    aggregator = PropAggregator()
    aggregator.add(_extraction("a.jsx", _instance("Button", "a.jsx", 1, "x", "y")))
    aggregator.add(_extraction("b.jsx", _instance("Card", "b.jsx", 3), _instance("Button", "b.jsx", 4, "x")))

    summary = aggregator.summary
    assert (summary.total_files, summary.total_components, summary.total_props) == (2, 3, 3)


def test_result_views_are_consistent() -> None:
    aggregator = PropAggregator()
    aggregator.add(_extraction("a.jsx", _instance("Button", "a.jsx", 1, "x", "y")))
    aggregator.add(_extraction("b.jsx", _instance("Card", "b.jsx", 3), _instance("Button", "b.jsx", 4, "x")))
    result = aggregator.result()

    assert result.summary.total_props == len(result.prop_usages)
    assert result.summary.total_components == len(result.components)
    assert result.summary.total_components == sum(len(v) for v in result.files.values())
    assert (
        sum(len(c.props) for c in result.components)
        == sum(len(c.props) for v in result.files.values() for c in v)
        == result.summary.total_props
        == 3
    )
    assert list(result.files) == ["a.jsx", "b.jsx"]


def test_merge_orders_by_discovery_index() -> None:
    late = PropAggregator()
    late.add(_extraction("b.jsx", _instance("B", "b.jsx", 1)), order=1)
    late.skip(SkippedFile(path="d.jsx", reason="bad", error="ParseError"), order=3)
    early = PropAggregator()
    early.add(_extraction("a.jsx", _instance("A", "a.jsx", 1)), order=0)
    early.add(_extraction("c.jsx", _instance("C", "c.jsx", 1)), order=2)

    combined = PropAggregator().merge(late).merge(early)

    assert [e.path for e in combined.extractions()] == ["a.jsx", "b.jsx", "c.jsx"]
    assert [s.path for s in combined.skipped_files()] == ["d.jsx"]
    assert combined.summary.total_files == 3


def test_filter_extraction_by_prop_drops_empty_instances() -> None:
    extraction = _extraction(
        "a.jsx",
        _instance("Button", "a.jsx", 1, "variant", "onClick"),
        _instance("Button", "a.jsx", 2, "onClick"),
        _instance("Card", "a.jsx", 3, "variant"),
    )

    narrowed = filter_extraction(extraction, "Button", "variant")

    assert len(narrowed.instances) == 1
    assert narrowed.instances[0].prop_names == ["variant"]
    assert extraction.instances[0].prop_names == ["variant", "onClick"]


def test_filtered_refolds_summary() -> None:
    aggregator = PropAggregator()
    aggregator.add(
        _extraction(
            "a.jsx",
            _instance("Button", "a.jsx", 1, "variant", "onClick"),
            _instance("Card", "a.jsx", 2, "title"),
        )
    )

    result = aggregator.filtered("Button").result()

    assert result.summary.total_files == 1
    assert result.summary.total_components == 1
    assert result.summary.total_props == 2
    assert aggregator.summary.total_components == 2
