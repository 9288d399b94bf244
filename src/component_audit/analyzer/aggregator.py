"""Run-scoped aggregation of import and usage events."""
from typing import Dict, Iterable

from .models import (
    AnalysisReport,
    ComponentRow,
    ComponentStat,
    FileAnalysis,
    Origin,
)


class UsageAggregator:
    """Accumulates ComponentStats keyed by (library, component).

    One instance per run. Per-file results are folded in sequentially, so
    totals do not depend on the order files were discovered.
    """

    def __init__(self, tracked_libraries: Iterable[str] = ()):
        self.tracked_libraries = tuple(dict.fromkeys(tracked_libraries))
        self._stats: Dict[Origin, ComponentStat] = {}

    def record_import(self, library: str, component: str, file_path: str) -> ComponentStat:
        """Create the stat if absent, count the import and note the file."""
        key = Origin(library, component)
        stat = self._stats.get(key)
        if stat is None:
            stat = ComponentStat(library, component)
            self._stats[key] = stat
        stat.import_count += 1
        stat.files.add(file_path)
        return stat

    def record_usage(self, library: str, component: str) -> ComponentStat:
        """Count one rendered occurrence.

        Raises:
            LookupError: If no import of the pair was recorded first
        """
        stat = self._stats.get(Origin(library, component))
        if stat is None:
            raise LookupError(f"Usage recorded before any import of {component} from {library}")
        stat.usage_count += 1
        return stat

    def fold(self, analysis: FileAnalysis) -> None:
        """Apply one file's events: imports first, then usages."""
        for event in analysis.imports:
            self.record_import(event.library, event.component, event.file_path)
        for event in analysis.usages:
            self.record_usage(event.library, event.component)

    def get(self, library: str, component: str) -> ComponentStat | None:
        return self._stats.get(Origin(library, component))

    def __len__(self) -> int:
        return len(self._stats)

    def snapshot(self) -> AnalysisReport:
        """Freeze the current stats into an AnalysisReport.

        Rows are grouped by tracked-library order, then first-import order.
        """
        order = {library: index for index, library in enumerate(self.tracked_libraries)}
        stats = sorted(
            self._stats.values(),
            key=lambda stat: order.get(stat.library, len(order)),
        )
        return AnalysisReport(rows=tuple(
            ComponentRow(
                library=stat.library,
                component=stat.component,
                import_count=stat.import_count,
                usage_count=stat.usage_count,
                files=tuple(stat.files),
            )
            for stat in stats
        ))
