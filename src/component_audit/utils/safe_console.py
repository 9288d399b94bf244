"""Windows-safe Console wrapper for Rich library.

Wraps Rich's Console to sanitize Unicode glyphs on terminals that don't
support UTF-8, and adds the warning/error helpers the audit reports through.
"""
from typing import Any

from rich.console import Console
from rich.markup import escape

from .logger import is_utf8_capable, sanitize_for_terminal


class SafeConsole(Console):
    """Console that sanitizes output and offers leveled message helpers."""

    def __init__(self, *args, **kwargs):
        """All arguments are passed through to Rich's Console."""
        super().__init__(*args, **kwargs)
        self._needs_sanitization = not is_utf8_capable(self.file)

    def print(self, *objects: Any, **kwargs) -> None:
        if self._needs_sanitization:
            objects = tuple(
                sanitize_for_terminal(obj, self.file) if isinstance(obj, str) else obj
                for obj in objects
            )
        super().print(*objects, **kwargs)

    def warning(self, message: str) -> None:
        """Print a warning. The message is escaped, not parsed as markup."""
        self.print(f"[bold yellow]⚠ Warning:[/bold yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self.print(f"[bold red]✗ Error:[/bold red] {escape(message)}")

    def success(self, message: str) -> None:
        self.print(f"[green]✓ {escape(message)}[/green]")
