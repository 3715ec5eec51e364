"""Core data models shared across jsxprops components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

PropValue = Union[str, int, float, bool, None]

VALUE_STRING = "string"
VALUE_NUMBER = "number"
VALUE_BOOLEAN = "boolean"
VALUE_EXPRESSION = "expression"
VALUE_NONE = "none"

KIND_USAGE = "usage"
KIND_DEFINITION = "definition"


@dataclass(frozen=True)
class PropUsage:
    """A single prop observed at a usage site or in a component declaration."""

    prop_name: str
    component_name: str
    file: str
    line: int
    column: int
    value: PropValue = None
    value_kind: str = VALUE_NONE
    is_spread: bool = False
    type_annotation: Optional[str] = None


@dataclass
class ComponentAnalysis:
    """Props attached to one component usage site or declaration."""

    component_name: str
    file: str
    props: List[PropUsage] = field(default_factory=list)
    props_interface: Optional[str] = None
    line: int = 0
    column: int = 0
    enclosing_component: Optional[str] = None
    kind: str = KIND_USAGE

    @property
    def prop_names(self) -> List[str]:
        return [prop.prop_name for prop in self.props]

    @property
    def has_spread(self) -> bool:
        return any(prop.is_spread for prop in self.props)


@dataclass
class FileExtraction:
    """Everything extracted from a single source file."""

    path: str
    instances: List[ComponentAnalysis] = field(default_factory=list)
    definitions: List[ComponentAnalysis] = field(default_factory=list)
    skipped_nodes: int = 0


@dataclass(frozen=True)
class SkippedFile:
    """A file the analysis could not process."""

    path: str
    reason: str
    error: str


@dataclass
class AnalysisSummary:
    total_files: int = 0
    total_components: int = 0
    total_props: int = 0


@dataclass
class AnalysisResult:
    """Aggregated view over every analysed file."""

    summary: AnalysisSummary
    components: List[ComponentAnalysis] = field(default_factory=list)
    prop_usages: List[PropUsage] = field(default_factory=list)
    files: Dict[str, List[ComponentAnalysis]] = field(default_factory=dict)
    definitions: List[ComponentAnalysis] = field(default_factory=list)
    skipped_files: List[SkippedFile] = field(default_factory=list)
    skipped_nodes: int = 0


@dataclass
class ComponentPropsResult:
    """Usage sites of one component, keyed by file path."""

    component_name: str
    files: Dict[str, List[ComponentAnalysis]] = field(default_factory=dict)
    skipped_files: List[SkippedFile] = field(default_factory=list)

    @property
    def total_instances(self) -> int:
        return sum(len(instances) for instances in self.files.values())


@dataclass
class MissingPropInstance:
    component_name: str
    file: str
    line: int
    column: int
    existing_props: List[str] = field(default_factory=list)


@dataclass
class MissingPropSummary:
    total_instances: int = 0
    missing_prop_count: int = 0
    missing_prop_percentage: float = 0.0


@dataclass
class MissingPropResult:
    """Instances of a component lacking a required prop."""

    component_name: str
    required_prop: str
    assume_spread_has_required_prop: bool
    missing_prop_usages: List[MissingPropInstance] = field(default_factory=list)
    summary: MissingPropSummary = field(default_factory=MissingPropSummary)
    skipped_files: List[SkippedFile] = field(default_factory=list)


@dataclass(frozen=True)
class PropCriterion:
    """A single condition evaluated by ``query_components``."""

    name: str
    value: Union[str, int, float, bool, None] = None
    operator: str = "equals"
    exists: Optional[bool] = None


@dataclass
class QueryMatch:
    component_name: str
    file: str
    line: int
    column: int
    matching_props: Dict[str, PropValue] = field(default_factory=dict)
    missing_props: List[str] = field(default_factory=list)
    all_props: Dict[str, PropValue] = field(default_factory=dict)


@dataclass
class QuerySummary:
    total_matches: int = 0
    criteria_matched: int = 0
    files_scanned: int = 0


@dataclass
class ComponentQueryResult:
    component_name: str
    criteria: List[PropCriterion]
    logic: str
    results: List[QueryMatch] = field(default_factory=list)
    summary: QuerySummary = field(default_factory=QuerySummary)
    skipped_files: List[SkippedFile] = field(default_factory=list)
