"""Data model shared by the extractor, scanner, aggregator and emitters."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple


class SpecifierKind(Enum):
    """Shape of one import specifier. Only NAMED participates in binding."""

    NAMED = "named"
    DEFAULT = "default"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class ImportSpecifier:
    kind: SpecifierKind
    local_name: str
    imported_name: Optional[str] = None


class Origin(NamedTuple):
    """The (library, exported name) pair a local identifier resolves to."""

    library: str
    component: str


@dataclass(frozen=True)
class ImportEvent:
    library: str
    component: str
    file_path: str


@dataclass(frozen=True)
class UsageEvent:
    library: str
    component: str
    file_path: str
    line: int


@dataclass
class FileAnalysis:
    """Pure result of analyzing one file; folded into the aggregator later."""

    file_path: str
    imports: List[ImportEvent] = field(default_factory=list)
    usages: List[UsageEvent] = field(default_factory=list)


@dataclass(frozen=True)
class FileFailure:
    """A file that was skipped, with the reason."""

    file_path: str
    kind: str
    message: str


class OrderedFileSet:
    """Insertion-ordered collection of unique file paths."""

    def __init__(self, paths: Iterable[str] = ()):
        self._paths: Dict[str, None] = {}
        for path in paths:
            self.add(path)

    def add(self, path: str) -> bool:
        """Add a path. Returns False if it was already present."""
        if path in self._paths:
            return False
        self._paths[path] = None
        return True

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedFileSet):
            return set(self._paths) == set(other._paths)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedFileSet({list(self._paths)!r})"


@dataclass
class ComponentStat:
    """Mutable aggregate for one (library, component) pair."""

    library: str
    component: str
    import_count: int = 0
    usage_count: int = 0
    files: OrderedFileSet = field(default_factory=OrderedFileSet)


@dataclass(frozen=True)
class ComponentRow:
    """Immutable report row."""

    library: str
    component: str
    import_count: int
    usage_count: int
    files: Tuple[str, ...]

    @property
    def is_used(self) -> bool:
        return self.usage_count > 0

    def to_record(self) -> dict:
        """Serialize to the JSON record shape."""
        return {
            'library': self.library,
            'component': self.component,
            'import_count': self.import_count,
            'usage_count': self.usage_count,
            'is_used': 'Yes' if self.is_used else 'No',
            'files': list(self.files),
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Final snapshot of all component stats for a run."""

    rows: Tuple[ComponentRow, ...] = ()

    def get(self, library: str, component: str) -> Optional[ComponentRow]:
        for row in self.rows:
            if row.library == library and row.component == component:
                return row
        return None

    @property
    def unused(self) -> List[ComponentRow]:
        return [row for row in self.rows if not row.is_used]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ComponentRow]:
        return iter(self.rows)
