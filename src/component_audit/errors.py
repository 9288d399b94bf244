"""Exception hierarchy for Component Audit.

Per-file failures (ReadFailure, ParseFailure) are isolated by the engine and
never abort a run. DiscoveryError is the only fatal condition.
"""
from pathlib import Path
from typing import Optional


class AuditError(Exception):
    """Base class for all audit errors."""


class DiscoveryError(AuditError):
    """Raised when the set of candidate files cannot be enumerated at all."""


class FileError(AuditError):
    """An error tied to a single scanned file."""

    kind = "error"

    def __init__(self, file_path: str | Path, message: str):
        self.file_path = str(file_path)
        self.message = message
        super().__init__(f"{self.file_path}: {message}")


class ReadFailure(FileError):
    """File could not be read or decoded."""

    kind = "read"


class ParseFailure(FileError):
    """File content is not valid source for its language."""

    kind = "parse"

    def __init__(self, file_path: str | Path, message: str,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(file_path, message)


class WriteFailure(AuditError):
    """A report could not be persisted."""

    def __init__(self, target: str | Path, reason: str):
        self.target = str(target)
        self.reason = reason
        super().__init__(f"Could not write {self.target}: {reason}")
