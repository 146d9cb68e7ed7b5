"""
importgraph CLI

Command-line interface for the import dependency graph builder.
Provides commands for scanning a source tree, inspecting one module,
and listing the imports found in a single file.

Commands:
    importgraph scan [path]           Build the graph and report import counts
    importgraph explain <id> [path]   Show importers and dependencies of a module
    importgraph levels [path]         Group modules by import count
    importgraph imports <file>        List the import occurrences in one file

Usage:
    $ importgraph scan ./my-project
    $ importgraph explain graph/graph
    $ importgraph imports src/main.zig
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box
from rich.markup import escape

from importgraph import __version__
from importgraph.errors import ImportGraphError, NormalizationError
from importgraph.graph import build_graph_from_directory, read_source
from importgraph.models import ScanResult
from importgraph.parser import IMPORT_MARKER, ImportExtractor
from importgraph.paths import normalize_path

# Initialize Typer app and Rich console
app = typer.Typer(
    name="importgraph",
    help="importgraph: build a module dependency graph from @import declarations",
    add_completion=False,
)
console = Console()


DEFAULT_TOP = 10


def _build(
    path: Path,
    extensions: Optional[List[str]],
    exclude: Optional[List[str]],
    marker: str,
    fail_fast: bool,
) -> ScanResult:
    """Run a scan behind a spinner, turning failures into exit code 1."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning source files...", total=None)

        try:
            result = build_graph_from_directory(
                path,
                extensions=set(extensions) if extensions else None,
                exclude_dirs=set(exclude) if exclude else None,
                marker=marker.encode("utf-8"),
                fail_fast=fail_fast,
            )
        except (ImportGraphError, ValueError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

        progress.update(task, description="Done!")

    return result


def _path_argument():
    return typer.Argument(
        None,
        help="Root of the source tree (default: current directory)",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    )


def _ext_option():
    return typer.Option(
        None,
        "--ext",
        "-e",
        help="File suffix to scan, repeatable (default: .zig)",
    )


def _exclude_option():
    return typer.Option(
        None,
        "--exclude",
        "-x",
        help="Directory name to skip, repeatable",
    )


def _marker_option():
    return typer.Option(
        IMPORT_MARKER.decode("utf-8"),
        "--marker",
        help="Text that precedes a quoted import target",
    )


def _fail_fast_option():
    return typer.Option(
        False,
        "--fail-fast",
        help="Abort on the first unreadable or malformed file",
    )


@app.command()
def scan(
    path: Optional[Path] = _path_argument(),
    extensions: Optional[List[str]] = _ext_option(),
    exclude: Optional[List[str]] = _exclude_option(),
    marker: str = _marker_option(),
    fail_fast: bool = _fail_fast_option(),
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show every module, not just the most imported",
    ),
    top: int = typer.Option(
        DEFAULT_TOP,
        "--top",
        "-n",
        help="Number of modules to list",
    ),
) -> None:
    """
    Scan a source tree and build the import graph.

    This command:
    1. Recursively finds all source files under the path
    2. Extracts @import targets from each file
    3. Normalizes files and imports into module ids
    4. Reports how many files import each module
    """
    if path is None:
        path = Path.cwd()

    console.print(f"\n[bold blue]📂 Scanning:[/bold blue] {path}\n")
    result = _build(path, extensions, exclude, marker, fail_fast)

    _print_scan_summary(result)

    if result.node_count:
        _print_import_counts(result, None if show_all else top)

    # Show errors if any
    if result.errors:
        console.print(f"\n[yellow]⚠️  {result.error_count} problem(s) were skipped:[/yellow]")
        for file_path, error in result.errors[:5]:
            console.print(f"   • {escape(file_path)}: {escape(error)}")
        if result.error_count > 5:
            console.print(f"   ... and {result.error_count - 5} more")


@app.command()
def explain(
    node_id: str = typer.Argument(
        ...,
        help="Module id to explain (e.g., graph/graph or std)",
    ),
    path: Optional[Path] = _path_argument(),
    extensions: Optional[List[str]] = _ext_option(),
    exclude: Optional[List[str]] = _exclude_option(),
    marker: str = _marker_option(),
) -> None:
    """
    Show which modules import a module and which modules it imports.
    """
    if path is None:
        path = Path.cwd()

    result = _build(path, extensions, exclude, marker, fail_fast=False)
    graph = result.graph

    if not graph.has_node(node_id):
        matches = sorted(n for n in graph.get_all_nodes() if node_id in n)
        if matches:
            console.print(f"[yellow]Module '{escape(node_id)}' not found. Did you mean:[/yellow]")
            for m in matches[:5]:
                console.print(f"   • {escape(m)}")
        else:
            console.print(f"[red]Module '{escape(node_id)}' not found.[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Module:[/bold] {escape(node_id)}")
    console.print(f"[bold]Imported by:[/bold] {graph.get_import_count(node_id)} file(s)")

    importers = sorted(graph.get_importers(node_id))
    console.print(f"\n[bold]Importers:[/bold]")
    for name in importers:
        console.print(f"   • [cyan]{escape(name)}[/cyan]")
    if not importers:
        console.print("   [dim]none[/dim]")

    dependencies = sorted(graph.get_dependencies(node_id))
    console.print(f"\n[bold]Imports:[/bold]")
    for name in dependencies:
        console.print(f"   • [cyan]{escape(name)}[/cyan]")
    if not dependencies:
        console.print("   [dim]none[/dim]")


@app.command()
def levels(
    path: Optional[Path] = _path_argument(),
    extensions: Optional[List[str]] = _ext_option(),
    exclude: Optional[List[str]] = _exclude_option(),
    marker: str = _marker_option(),
) -> None:
    """
    Group modules by how many files import them.
    """
    if path is None:
        path = Path.cwd()

    result = _build(path, extensions, exclude, marker, fail_fast=False)
    banding = result.graph.dependency_levels()

    if not banding:
        console.print("[yellow]No modules found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title="Dependency Levels", box=box.ROUNDED)
    table.add_column("Imported by", justify="right", style="bold")
    table.add_column("Modules")

    for level in sorted(banding, reverse=True):
        table.add_row(str(level), escape(", ".join(banding[level])))

    console.print(table)


@app.command()
def imports(
    file: Path = typer.Argument(
        ...,
        help="Source file to inspect",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    marker: str = _marker_option(),
) -> None:
    """
    List the import occurrences found in a single file.
    """
    try:
        content = read_source(file)
    except ImportGraphError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    extractor = ImportExtractor(marker=marker.encode("utf-8"), strict=False)
    records = list(
        extractor.extract_records(content, importer=normalize_path(str(file)), path=str(file))
    )

    if not records:
        console.print(f"[yellow]No imports found in {file}.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Imports in {file.name}", box=box.ROUNDED)
    table.add_column("Offset", justify="right", style="dim")
    table.add_column("Raw", style="cyan")
    table.add_column("Module", style="bold")

    for record in records:
        try:
            target = escape(normalize_path(record.raw))
        except NormalizationError:
            target = "[red]<invalid>[/red]"
        table.add_row(str(record.offset), escape(record.raw), target)

    console.print(table)


# Helper functions for output formatting

def _print_scan_summary(result: ScanResult) -> None:
    """Print a summary panel after scanning."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Files scanned", str(result.files_scanned))
    table.add_row("Empty files skipped", str(result.files_skipped))
    table.add_row("Modules", str(result.node_count))
    table.add_row("Import edges", str(result.edge_count))
    table.add_row("Errors", str(result.error_count))
    table.add_row("Scan time", f"{result.scan_time_seconds:.2f}s")

    panel = Panel(table, title="[bold green]✓ Scan Complete[/bold green]", border_style="green")
    console.print(panel)


def _print_import_counts(result: ScanResult, limit: Optional[int]) -> None:
    """Print modules ordered by import count, most imported first."""
    counts = result.graph.import_counts()
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    shown = ranked[:limit] if limit else ranked

    table = Table(title="Import Counts", box=box.ROUNDED)
    table.add_column("Module", style="cyan")
    table.add_column("Imported by", justify="right")

    for node_id, count in shown:
        table.add_row(escape(node_id), str(count))

    console.print(table)

    if limit and len(ranked) > limit:
        console.print(f"   [dim]... and {len(ranked) - limit} more (use --all)[/dim]")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]importgraph[/bold] version {__version__}")
        raise typer.Exit()


# Version and logging options
@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every file read and import edge",
    ),
) -> None:
    """
    importgraph: build a module dependency graph from @import declarations.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
