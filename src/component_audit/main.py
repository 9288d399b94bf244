"""Component Audit CLI - Tracked-library import and JSX usage report."""
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .analyzer.discovery import FileDiscovery
from .analyzer.engine import AuditResult, UsageAuditor
from .analyzer.manifest import read_manifest, namespaces_for
from .config import Config, __version__
from .errors import DiscoveryError, WriteFailure
from .report.csv_report import render_csv
from .report.json_report import render_json
from .report.writer import write_report
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="component-audit",
    help="Audit imports and JSX usage of tracked component libraries",
    add_completion=False
)
console = SafeConsole()
err_console = SafeConsole(stderr=True)

EXIT_WRITE_FAILURE = 1
EXIT_DISCOVERY_FAILURE = 2


def _load_config(project_path: Path, **overrides) -> Config:
    try:
        return Config(project_path, **overrides)
    except ValueError as e:
        err_console.error(str(e))
        raise typer.Exit(EXIT_DISCOVERY_FAILURE)


def _run_audit(auditor: UsageAuditor, files: List[Path], show_progress: bool) -> AuditResult:
    if not show_progress:
        return auditor.run(files)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=err_console,
        transient=True
    ) as progress:
        task = progress.add_task("[cyan]Analyzing files...", total=len(files))
        return auditor.run(files, on_file_done=lambda _: progress.advance(task))


def _print_report(result: AuditResult):
    report = result.report

    if not len(report):
        console.print("[bold yellow]No imports from tracked libraries found.[/bold yellow]")
    else:
        table = Table(title="Tracked Component Usage")
        table.add_column("Library", style="cyan")
        table.add_column("Component", style="bold")
        table.add_column("Imports", justify="right", style="yellow")
        table.add_column("Usages", justify="right", style="yellow")
        table.add_column("Used", justify="center")
        table.add_column("Files", justify="right", style="magenta")

        for row in report:
            used = "[green]Yes[/green]" if row.is_used else "[red]No[/red]"
            table.add_row(
                escape(row.library),
                escape(row.component),
                str(row.import_count),
                str(row.usage_count),
                used,
                str(len(row.files)),
            )
        console.print(table)

    console.print("\n[bold yellow]Summary:[/bold yellow]")
    console.print(f"  Files scanned: {result.files_scanned}")
    if result.failures:
        console.print(f"  Files skipped: [red]{len(result.failures)}[/red]")
    console.print(f"  Components imported: {len(report)}")
    console.print(f"  Never rendered: {len(report.unused)}")


@app.command()
def scan(
    project_path: str = typer.Argument(".", help="Project root path to scan"),
    library: Optional[List[str]] = typer.Option(None, "--library", "-L", help="Tracked library (repeatable). Overrides COMPONENT_AUDIT_LIBRARIES."),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-x", help="Extra exclusion glob (repeatable)"),
    csv_path: Optional[str] = typer.Option(None, "--csv", help="CSV report path (default: component_report.csv)"),
    json_path: Optional[str] = typer.Option(None, "--json", help="JSON report path (default: report.json)"),
    with_manifest: bool = typer.Option(False, "--with-manifest", help="Wrap the JSON report with package.json project metadata"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Analyze files on N threads"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No progress bar or summary table"),
):
    """Scan a project and write CSV and JSON usage reports."""

    project_path = Path(project_path).resolve()
    config = _load_config(
        project_path,
        tracked_libraries=library,
        extra_excludes=exclude,
        csv_path=csv_path,
        json_path=json_path,
        workers=workers,
    )

    discovery = FileDiscovery(project_path, config.extensions, config.exclude_patterns)
    try:
        files = discovery.discover()
    except DiscoveryError as e:
        err_console.error(str(e))
        raise typer.Exit(EXIT_DISCOVERY_FAILURE)

    if not quiet:
        console.print(f"[bold blue]Analyzing project:[/bold blue] {escape(str(project_path))}")
        console.print(f"[dim]Tracking: {escape(', '.join(config.tracked_libraries))}[/dim]")
        console.print(f"[dim]{len(files)} files to analyze ({discovery.excluded_count} excluded)[/dim]\n")

    auditor = UsageAuditor(
        config.tracked_libraries,
        project_root=project_path,
        console=err_console,
        workers=config.workers,
    )
    result = _run_audit(auditor, files, show_progress=not quiet)

    if not quiet:
        _print_report(result)

    manifest = None
    if with_manifest:
        manifest = read_manifest(project_path, namespaces_for(config.tracked_libraries))
        if not manifest.found:
            err_console.warning(f"No readable package.json in {project_path}; project recorded as '{manifest.name}'")

    write_failed = False
    outputs = (
        (config.csv_path, lambda: render_csv(result.report)),
        (config.json_path, lambda: render_json(result.report, manifest)),
    )
    for target, render in outputs:
        try:
            written = write_report(target, render())
        except WriteFailure as e:
            err_console.error(str(e))
            write_failed = True
            continue
        if not quiet:
            console.success(f"Report written: {written}")

    if write_failed:
        raise typer.Exit(EXIT_WRITE_FAILURE)


@app.command()
def deps(
    project_path: str = typer.Argument(".", help="Project root containing package.json"),
    library: Optional[List[str]] = typer.Option(None, "--library", "-L", help="Tracked library (repeatable)"),
):
    """List tracked-namespace dependencies declared in package.json."""

    project_path = Path(project_path).resolve()
    config = _load_config(project_path, tracked_libraries=library)
    namespaces = namespaces_for(config.tracked_libraries)
    manifest = read_manifest(project_path, namespaces)

    if not manifest.found:
        err_console.warning(f"No readable package.json in {project_path}")

    console.print(f"[bold blue]Project:[/bold blue] {escape(manifest.name)} {escape(manifest.version)}")

    if not manifest.dependencies:
        console.print(f"[dim]No dependencies declared under {escape(', '.join(namespaces))}[/dim]")
        return

    table = Table(title="Declared Dependencies")
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="yellow")
    for package, spec in manifest.dependencies.items():
        table.add_row(escape(package), escape(spec))
    console.print(table)


def _version_callback(value: bool):
    if value:
        console.print(f"component-audit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """Component Audit - Which tracked library components are imported, and which are rendered."""
    pass


if __name__ == "__main__":
    app()
