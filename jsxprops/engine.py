"""Entry point coordinating discovery, extraction and aggregation."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence

from .aggregator import PropAggregator
from .analyzers import SourceParser, analyze_file
from .config import PropLookupConfig
from .errors import FileReadError, ParseError
from .logging import get_logger, log_skip
from .missing import find_missing_prop
from .models import (
    AnalysisResult,
    ComponentPropsResult,
    ComponentQueryResult,
    MissingPropResult,
    PropCriterion,
    SkippedFile,
)
from .query import LOGIC_AND, query_instances, validate_query
from .scanner import FileScanner


class PropLookupEngine:
    """Answers prop questions for a file or directory tree.

    The engine keeps no state between calls: every operation builds its own
    :class:`PropAggregator`, so concurrent calls never share results.
    """

    def __init__(
        self,
        config: PropLookupConfig | None = None,
        scanner: FileScanner | None = None,
        parser: SourceParser | None = None,
    ) -> None:
        self.config = config or PropLookupConfig(root=Path.cwd())
        self.scanner = scanner or FileScanner(self.config.discovery)
        self.parser = parser or SourceParser(strict=self.config.analysis.strict_parse)
        self.logger = get_logger("engine")

    def collect(self, path: str, *, include_types: bool = True) -> PropAggregator:
        """Analyse every discovered file under ``path`` into a fresh aggregator."""
        files = self.scanner.scan(path)
        self.logger.info("Analysing %d files under %s", len(files), path)
        aggregator = PropAggregator()
        workers = self.config.analysis.workers

        if workers > 1 and len(files) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [
                    pool.submit(self._process_file, order, file_path, include_types)
                    for order, file_path in enumerate(files)
                ]
                for future in futures:
                    aggregator.merge(future.result())
        else:
            for order, file_path in enumerate(files):
                aggregator.merge(self._process_file(order, file_path, include_types))

        summary = aggregator.summary
        skipped = aggregator.skipped_files()
        self.logger.info(
            "Analysed %d files (%d skipped): %d components, %d props",
            summary.total_files,
            len(skipped),
            summary.total_components,
            summary.total_props,
        )
        return aggregator

    def _process_file(self, order: int, file_path: str, include_types: bool) -> PropAggregator:
        partial = PropAggregator()
        try:
            extraction = analyze_file(
                file_path,
                self.parser,
                include_types=include_types,
                value_max_length=self.config.analysis.value_max_length,
            )
        except (ParseError, FileReadError) as exc:
            log_skip(self.logger, file_path, exc)
            partial.skip(
                SkippedFile(path=file_path, reason=str(exc), error=type(exc).__name__), order
            )
        else:
            partial.add(extraction, order)
        return partial

    def analyze_props(
        self,
        path: str,
        component_name: Optional[str] = None,
        prop_name: Optional[str] = None,
        include_types: bool = True,
    ) -> AnalysisResult:
        """Inventory usage sites and props, optionally narrowed to a component and/or prop."""
        aggregator = self.collect(path, include_types=include_types)
        return aggregator.filtered(component_name, prop_name).result()

    def find_prop_usage(
        self, prop_name: str, path: str, component_name: Optional[str] = None
    ) -> AnalysisResult:
        return self.analyze_props(path, component_name=component_name, prop_name=prop_name)

    def get_component_props(self, component_name: str, path: str) -> ComponentPropsResult:
        result = self.collect(path).filtered(component_name).result()
        return ComponentPropsResult(
            component_name=component_name,
            files={file: instances for file, instances in result.files.items() if instances},
            skipped_files=result.skipped_files,
        )

    def find_components_without_prop(
        self,
        component_name: str,
        required_prop: str,
        path: str,
        assume_spread_has_required_prop: bool = True,
    ) -> MissingPropResult:
        aggregator = self.collect(path, include_types=False)
        return find_missing_prop(
            aggregator.instances(),
            component_name,
            required_prop,
            assume_spread_has_required_prop=assume_spread_has_required_prop,
            skipped_files=aggregator.skipped_files(),
        )

    def query_components(
        self,
        component_name: str,
        criteria: Sequence[PropCriterion],
        path: str,
        logic: str = LOGIC_AND,
    ) -> ComponentQueryResult:
        validate_query(criteria, logic)
        aggregator = self.collect(path, include_types=False)
        return query_instances(
            aggregator.instances(),
            component_name,
            list(criteria),
            logic=logic,
            files_scanned=aggregator.summary.total_files,
            skipped_files=aggregator.skipped_files(),
        )


__all__ = ["PropLookupEngine"]
