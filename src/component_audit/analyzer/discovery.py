"""Candidate file discovery with extension and glob filtering."""
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from ..errors import DiscoveryError


DEFAULT_EXTENSIONS = ('.js', '.jsx', '.ts', '.tsx')

DEFAULT_EXCLUDES = (
    '**/node_modules/**',
    '**/*.d.ts',
    '**/*.spec.*',
    '**/*.test.*',
)

# Dependency trees are never scanned; dot-directories and dotfiles are skipped separately
EXCLUDED_DIRS = {'node_modules'}

# This package's own directory, skipped if it lives under the scanned root
TOOL_DIR = Path(__file__).resolve().parent.parent


class FileDiscovery:
    """Enumerate source files under a root."""

    def __init__(self, project_root: str | Path = ".",
                 extensions: Iterable[str] = DEFAULT_EXTENSIONS,
                 exclude_patterns: Optional[Iterable[str]] = None):
        """Initialize discovery.

        Args:
            project_root: Root directory to scan
            extensions: File suffixes to include (with leading dot)
            exclude_patterns: gitignore-style globs matched against root-relative paths.
                              Defaults to DEFAULT_EXCLUDES.
        """
        self.project_root = Path(project_root).resolve()
        self.extensions = tuple(ext.lower() if ext.startswith('.') else f'.{ext.lower()}' for ext in extensions)
        patterns = list(DEFAULT_EXCLUDES if exclude_patterns is None else exclude_patterns)
        self.exclude_spec = pathspec.GitIgnoreSpec.from_lines(patterns)
        self.excluded_count = 0

    def discover(self) -> List[Path]:
        """Return matching files sorted by path.

        Raises:
            DiscoveryError: If the root does not exist or cannot be listed
        """
        if not self.project_root.exists():
            raise DiscoveryError(f"Project path does not exist: {self.project_root}")
        if not self.project_root.is_dir():
            raise DiscoveryError(f"Project path is not a directory: {self.project_root}")

        self.excluded_count = 0
        files = set()
        try:
            for ext in self.extensions:
                for file_path in self.project_root.rglob(f'*{ext}'):
                    if self._accept(file_path):
                        files.add(file_path)
        except PermissionError as e:
            raise DiscoveryError(f"Permission denied while scanning {self.project_root}: {e}") from e

        return sorted(files)

    def _accept(self, file_path: Path) -> bool:
        if not file_path.is_file():
            return False

        rel = file_path.relative_to(self.project_root)
        if any(part.startswith('.') for part in rel.parts):
            self.excluded_count += 1
            return False
        if any(part in EXCLUDED_DIRS for part in rel.parts[:-1]):
            self.excluded_count += 1
            return False
        if TOOL_DIR in file_path.parents:
            self.excluded_count += 1
            return False
        if self.exclude_spec.match_file(rel.as_posix()):
            self.excluded_count += 1
            return False
        return True


def discover_files(project_root: str | Path = ".",
                   extensions: Iterable[str] = DEFAULT_EXTENSIONS,
                   exclude_patterns: Optional[Iterable[str]] = None) -> List[Path]:
    """Convenience wrapper around FileDiscovery.discover()."""
    return FileDiscovery(project_root, extensions, exclude_patterns).discover()
