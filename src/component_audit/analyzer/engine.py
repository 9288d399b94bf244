"""Per-file orchestration: read, parse, extract bindings, scan usages, aggregate.

Each file is analyzed in two explicit passes. The binding table is complete
before any JSX tag is resolved, so a usage that appears above its import in
source order still counts.
"""
import concurrent.futures
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from ..errors import FileError, ParseFailure
from ..utils.safe_console import SafeConsole
from .aggregator import UsageAggregator
from .bindings import BindingExtractor
from .models import AnalysisReport, FileAnalysis, FileFailure
from .parser import SourceParser
from .usage_scanner import UsageScanner


@dataclass
class AuditResult:
    """Outcome of one audit run."""

    report: AnalysisReport
    files_scanned: int = 0
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def files_analyzed(self) -> int:
        return self.files_scanned - len(self.failures)


class UsageAuditor:
    """Runs the tracked-library usage audit over a set of files."""

    def __init__(self, tracked_libraries: Iterable[str],
                 project_root: str | Path = ".",
                 console: Optional[SafeConsole] = None,
                 workers: int = 1):
        """
        Args:
            tracked_libraries: Library identifiers to audit
            project_root: Paths in the report are made relative to this root
            console: Where per-file warnings go (stderr by default)
            workers: Number of threads; 1 means fully sequential
        """
        self.tracked_libraries = tuple(dict.fromkeys(tracked_libraries))
        self.project_root = Path(project_root).resolve()
        self.console = console if console is not None else SafeConsole(stderr=True)
        self.workers = max(1, workers)
        self.extractor = BindingExtractor(self.tracked_libraries)
        self.scanner = UsageScanner()

    def display_path(self, file_path: Path) -> str:
        try:
            return Path(file_path).resolve().relative_to(self.project_root).as_posix()
        except ValueError:
            return str(file_path)

    def analyze_source(self, source_code: bytes, file_path: str, grammar: str = 'tsx') -> FileAnalysis:
        """Analyze in-memory source. Raises ParseFailure on syntax errors."""
        tree = SourceParser(grammar).parse_source(source_code, file_path)
        return self._analyze_tree(tree.root_node, file_path)

    def analyze_file(self, file_path: str | Path) -> FileAnalysis:
        """Analyze one file on disk.

        Raises:
            ReadFailure: If the file cannot be read
            ParseFailure: If the file does not parse, or has no known grammar
        """
        file_path = Path(file_path)
        display = self.display_path(file_path)

        # A fresh parser per file keeps worker threads independent
        parser = SourceParser.from_file_extension(file_path)
        if parser is None:
            raise ParseFailure(display, f"No grammar for extension '{file_path.suffix}'")

        tree = parser.parse_file(file_path)
        return self._analyze_tree(tree.root_node, display)

    def _analyze_tree(self, root_node, display: str) -> FileAnalysis:
        # Pass 1: all tracked import bindings for this file
        bindings, imports = self.extractor.extract(root_node, display)
        # Pass 2: JSX tags resolved against this file's bindings only
        usages = self.scanner.scan(root_node, bindings, display)
        return FileAnalysis(file_path=display, imports=imports, usages=usages)

    def run(self, file_paths: Sequence[str | Path],
            on_file_done: Optional[Callable[[str], None]] = None) -> AuditResult:
        """Analyze every file and fold the results into a fresh aggregator.

        Files that cannot be read or parsed are reported as warnings and
        skipped; they contribute nothing to the report.
        """
        aggregator = UsageAggregator(self.tracked_libraries)
        failures: List[FileFailure] = []

        for file_path, outcome in self._analyze_all(file_paths):
            if isinstance(outcome, FileError):
                failure = FileFailure(
                    file_path=self.display_path(file_path),
                    kind=outcome.kind,
                    message=outcome.message,
                )
                failures.append(failure)
                self.console.warning(
                    f"Error analyzing {failure.file_path}: {failure.message}. Skipping file."
                )
            else:
                aggregator.fold(outcome)

            if on_file_done is not None:
                on_file_done(str(file_path))

        return AuditResult(
            report=aggregator.snapshot(),
            files_scanned=len(file_paths),
            failures=failures,
        )

    def _analyze_all(self, file_paths: Sequence[str | Path]):
        """Yield (path, FileAnalysis | FileError) in input order."""
        if self.workers == 1 or len(file_paths) < 2:
            for file_path in file_paths:
                yield file_path, self._analyze_safely(file_path)
            return

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as executor:
            # map() preserves input order, so folding stays deterministic
            yield from zip(file_paths, executor.map(self._analyze_safely, file_paths))

    def _analyze_safely(self, file_path):
        try:
            return self.analyze_file(file_path)
        except FileError as e:
            return e
