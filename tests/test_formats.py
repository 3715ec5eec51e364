"""Tests for jsxprops.formats."""

from __future__ import annotations

import json

import pytest

from jsxprops.aggregator import PropAggregator
from jsxprops.formats import (
    analysis_to_dict,
    missing_result_to_dict,
    pretty_path,
    query_result_to_dict,
)
from jsxprops.missing import find_missing_prop
from jsxprops.models import ComponentAnalysis, FileExtraction, PropCriterion, PropUsage, SkippedFile
from jsxprops.query import query_instances


def _result():
    button = ComponentAnalysis(
        component_name="Button",
        file="src/App.jsx",
        line=3,
        column=4,
        enclosing_component="App",
        props=[
            PropUsage("variant", "Button", "src/App.jsx", 3, 12, "primary", "string"),
            PropUsage("...rest", "Button", "src/App.jsx", 3, 30, is_spread=True),
        ],
    )
    aggregator = PropAggregator()
    aggregator.add(FileExtraction(path="src/App.jsx", instances=[button]))
    aggregator.skip(SkippedFile(path="src/Broken.jsx", reason="syntax", error="ParseError"))
    return aggregator.result()


def test_pretty_path() -> None:
    assert pretty_path("src\\App.jsx", 3, 4) == "src/App.jsx:3:4"
    assert pretty_path("src/App.jsx", 3) == "src/App.jsx:3"
    assert pretty_path("src/App.jsx") == "src/App.jsx"


def test_full_format_uses_camel_case() -> None:
    payload = analysis_to_dict(_result(), include_pretty_paths=True)

    assert payload["summary"] == {"totalFiles": 1, "totalComponents": 1, "totalProps": 2}
    usage = payload["propUsages"][0]
    assert usage["propName"] == "variant"
    assert usage["valueKind"] == "string"
    assert usage["column"] == 12
    assert usage["prettyPath"] == "src/App.jsx:3:12"
    component = payload["components"][0]
    assert component["enclosingComponent"] == "App"
    assert "propsInterface" not in component
    assert payload["skippedFiles"] == [
        {"path": "src/Broken.jsx", "reason": "syntax", "error": "ParseError"}
    ]
    json.dumps(payload)


def test_columns_can_be_omitted() -> None:
    payload = analysis_to_dict(_result(), include_columns=False, include_pretty_paths=True)
    usage = payload["propUsages"][0]
    assert "column" not in usage
    assert usage["prettyPath"] == "src/App.jsx:3"


def test_compact_format_groups_by_file() -> None:
    payload = analysis_to_dict(_result(), format="compact")

    assert payload["summary"] == {"files": 1, "components": 1, "props": 2}
    file_entry = payload["files"]["src/App.jsx"]
    assert file_entry["components"] == [{"name": "Button", "props": ["variant", "...rest"]}]
    assert file_entry["usages"][0] == {"name": "variant", "line": 3, "col": 12, "value": "primary"}
    assert file_entry["usages"][1]["spread"] is True
    assert payload["skippedFiles"] == ["src/Broken.jsx"]


def test_minimal_format_groups_by_prop() -> None:
    payload = analysis_to_dict(_result(), format="minimal")
    assert payload == {
        "props": {
            "variant": [{"component": "Button", "file": "src/App.jsx", "line": 3}],
            "...rest": [{"component": "Button", "file": "src/App.jsx", "line": 3}],
        }
    }


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        analysis_to_dict(_result(), format="xml")


def test_missing_and_query_encoders() -> None:
    instances = _result().components
    missing = missing_result_to_dict(
        find_missing_prop(instances, "Button", "size", assume_spread_has_required_prop=False)
    )
    assert missing["summary"] == {
        "totalInstances": 1,
        "missingPropCount": 1,
        "missingPropPercentage": 100.0,
    }
    assert missing["missingPropUsages"][0]["existingProps"] == ["variant", "...rest"]

    queried = query_result_to_dict(
        query_instances(instances, "Button", [PropCriterion(name="variant", value="primary")])
    )
    assert queried["query"]["propCriteria"] == [
        {"name": "variant", "value": "primary", "operator": "equals"}
    ]
    assert queried["results"][0]["matchingProps"] == {"variant": "primary"}
    assert queried["summary"]["totalMatches"] == 1
