"""Configuration management for Component Audit.

Settings come from, in increasing priority: built-in defaults, a `.env` file
in the scanned project, environment variables, and explicit overrides.
"""
import os
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import dotenv_values

from .analyzer.discovery import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS

__version__ = "1.0.0"

DEFAULT_LIBRARIES = ("@vetsource/kibble", "@mui/material")


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, project_root: str | Path = ".",
                 tracked_libraries: Optional[Iterable[str]] = None,
                 extra_excludes: Optional[Iterable[str]] = None,
                 csv_path: Optional[str | Path] = None,
                 json_path: Optional[str | Path] = None,
                 workers: Optional[int] = None):
        """Initialize config, reading `.env` from the project root if present.

        The `.env` values are kept on this instance and never written to
        os.environ. Explicit arguments win over environment variables.
        """
        self.project_root = Path(project_root)
        env_path = self.project_root / ".env"
        self._dotenv = dotenv_values(env_path) if env_path.is_file() else {}

        self._tracked_libraries = list(tracked_libraries) if tracked_libraries else None
        self._extra_excludes = list(extra_excludes) if extra_excludes else []
        self._csv_path = csv_path
        self._json_path = json_path
        self._workers = workers

        self._validate()

    def _getenv(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Process environment first, then the project `.env`, then default."""
        value = os.environ.get(name)
        if value is None:
            value = self._dotenv.get(name)
        return default if value is None else value

    def _validate(self):
        """Raises ValueError on unusable settings."""
        if not self.tracked_libraries:
            raise ValueError(
                "No tracked libraries configured. "
                "Pass --library or set COMPONENT_AUDIT_LIBRARIES."
            )
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")

    @property
    def tracked_libraries(self) -> tuple[str, ...]:
        """Ordered, de-duplicated library identifiers to audit.

        Priority:
        1. Explicit override
        2. COMPONENT_AUDIT_LIBRARIES (comma-separated)
        3. DEFAULT_LIBRARIES
        """
        if self._tracked_libraries:
            libraries = self._tracked_libraries
        else:
            libraries = _split_list(self._getenv("COMPONENT_AUDIT_LIBRARIES")) or DEFAULT_LIBRARIES
        return tuple(dict.fromkeys(libraries))

    @property
    def extensions(self) -> tuple[str, ...]:
        return DEFAULT_EXTENSIONS

    @property
    def exclude_patterns(self) -> List[str]:
        """Default exclusions plus COMPONENT_AUDIT_EXCLUDE plus explicit extras."""
        return [
            *DEFAULT_EXCLUDES,
            *_split_list(self._getenv("COMPONENT_AUDIT_EXCLUDE")),
            *self._extra_excludes,
        ]

    @property
    def csv_path(self) -> Path:
        return Path(self._csv_path or self._getenv("COMPONENT_AUDIT_CSV", "component_report.csv"))

    @property
    def json_path(self) -> Path:
        return Path(self._json_path or self._getenv("COMPONENT_AUDIT_JSON", "report.json"))

    @property
    def workers(self) -> int:
        if self._workers is not None:
            return self._workers
        raw = self._getenv("COMPONENT_AUDIT_WORKERS", "1")
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"COMPONENT_AUDIT_WORKERS must be an integer, got {raw!r}")
