"""Static inventory of JSX component usages and their props."""

from .engine import PropLookupEngine
from .errors import (
    AnalyzerError,
    FileReadError,
    InvalidPathError,
    ParseError,
    PropLookupError,
)
from .models import (
    AnalysisResult,
    AnalysisSummary,
    ComponentAnalysis,
    ComponentPropsResult,
    ComponentQueryResult,
    MissingPropResult,
    PropCriterion,
    PropUsage,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "AnalysisSummary",
    "AnalyzerError",
    "ComponentAnalysis",
    "ComponentPropsResult",
    "ComponentQueryResult",
    "FileReadError",
    "InvalidPathError",
    "MissingPropResult",
    "ParseError",
    "PropCriterion",
    "PropLookupEngine",
    "PropLookupError",
    "PropUsage",
]
