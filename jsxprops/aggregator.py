"""Folding per-file extractions into whole-tree views."""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from .models import (
    AnalysisResult,
    AnalysisSummary,
    ComponentAnalysis,
    FileExtraction,
    PropUsage,
    SkippedFile,
)


def component_matches(name: str, query: Optional[str]) -> bool:
    """Return True when ``name`` is the queried component.

    An undotted query also matches the last segment of a member tag, so
    ``Select`` finds ``<UI.Select />``.
    """
    if query is None:
        return True
    if name == query:
        return True
    if "." not in query and "." in name:
        return name.rsplit(".", 1)[1] == query
    return False


def filter_extraction(
    extraction: FileExtraction,
    component_name: Optional[str] = None,
    prop_name: Optional[str] = None,
) -> FileExtraction:
    """Narrow an extraction to one component and/or prop.

    With a prop filter, usage sites left without any matching prop are
    dropped; declarations are always kept when their name matches.
    """
    if component_name is None and prop_name is None:
        return extraction

    def _narrow(analysis: ComponentAnalysis) -> ComponentAnalysis:
        if prop_name is None:
            return analysis
        return replace(analysis, props=[p for p in analysis.props if p.prop_name == prop_name])

    instances = [
        _narrow(instance)
        for instance in extraction.instances
        if component_matches(instance.component_name, component_name)
    ]
    if prop_name is not None:
        instances = [instance for instance in instances if instance.props]
    definitions = [
        _narrow(definition)
        for definition in extraction.definitions
        if component_matches(definition.component_name, component_name)
    ]
    return FileExtraction(
        path=extraction.path,
        instances=instances,
        definitions=definitions,
        skipped_nodes=extraction.skipped_nodes,
    )


class PropAggregator:
    """Accumulates extractions for one analysis call.

    Each entry carries the discovery index of its file so that results
    produced out of order (for example by a worker pool) come back in
    discovery order. Summary counts are folded as entries arrive.
    """

    def __init__(self) -> None:
        self._entries: List[Tuple[int, FileExtraction]] = []
        self._skipped: List[Tuple[int, SkippedFile]] = []
        self._summary = AnalysisSummary()
        self._skipped_nodes = 0
        self._next_order = 0

    def _order(self, order: Optional[int]) -> int:
        if order is None:
            order = self._next_order
        self._next_order = max(self._next_order, order + 1)
        return order

    def add(self, extraction: FileExtraction, order: Optional[int] = None) -> None:
        self._entries.append((self._order(order), extraction))
        self._summary.total_files += 1
        self._summary.total_components += len(extraction.instances)
        self._summary.total_props += sum(len(instance.props) for instance in extraction.instances)
        self._skipped_nodes += extraction.skipped_nodes

    def skip(self, skipped: SkippedFile, order: Optional[int] = None) -> None:
        self._skipped.append((self._order(order), skipped))

    def merge(self, other: "PropAggregator") -> "PropAggregator":
        """Fold another aggregator's entries into this one, keeping their order keys."""
        for order, extraction in other._entries:
            self.add(extraction, order)
        for order, skipped in other._skipped:
            self.skip(skipped, order)
        return self

    @property
    def summary(self) -> AnalysisSummary:
        return replace(self._summary)

    def extractions(self) -> List[FileExtraction]:
        return [extraction for _, extraction in sorted(self._entries, key=lambda item: item[0])]

    def skipped_files(self) -> List[SkippedFile]:
        return [skipped for _, skipped in sorted(self._skipped, key=lambda item: item[0])]

    def instances(self) -> Iterable[ComponentAnalysis]:
        for extraction in self.extractions():
            yield from extraction.instances

    def filtered(
        self, component_name: Optional[str] = None, prop_name: Optional[str] = None
    ) -> "PropAggregator":
        """Return a new aggregator over filtered copies of the same extractions."""
        narrowed = PropAggregator()
        for order, extraction in self._entries:
            narrowed.add(filter_extraction(extraction, component_name, prop_name), order)
        for order, skipped in self._skipped:
            narrowed.skip(skipped, order)
        return narrowed

    def result(self) -> AnalysisResult:
        components: List[ComponentAnalysis] = []
        prop_usages: List[PropUsage] = []
        files: Dict[str, List[ComponentAnalysis]] = {}
        definitions: List[ComponentAnalysis] = []
        for extraction in self.extractions():
            files.setdefault(extraction.path, []).extend(extraction.instances)
            components.extend(extraction.instances)
            for instance in extraction.instances:
                prop_usages.extend(instance.props)
            definitions.extend(extraction.definitions)
        return AnalysisResult(
            summary=self.summary,
            components=components,
            prop_usages=prop_usages,
            files=files,
            definitions=definitions,
            skipped_files=self.skipped_files(),
            skipped_nodes=self._skipped_nodes,
        )


__all__ = ["PropAggregator", "component_matches", "filter_extraction"]
