"""Rich terminal display for reclaim."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from reclaim.errors import ScanIOError
from reclaim.models import AggregateReport, ReclaimResult

console = Console()
err_console = Console(stderr=True)

SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units, capped at GB)."""
    value = float(size_bytes)
    for unit in SIZE_UNITS:
        if value < 1024 or unit == SIZE_UNITS[-1]:
            break
        value /= 1024
    return f"{value:.1f} {unit}"


def setup_logging(verbosity: int) -> None:
    """Route log records to stderr; -v for INFO, -vv for DEBUG."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logger = logging.getLogger("reclaim")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.propagate = False


def show_nothing_found(root: Path, target_name: str) -> None:
    """Tell the user there is nothing to do."""
    console.print(f"[yellow]No {target_name} directories found inside {escape(str(root))}.[/yellow]")


def show_scan_error(error: ScanIOError) -> None:
    """Display a fatal scan failure."""
    console.print(f"[red]Error: failed to read directory {escape(str(error.path))}: {escape(error.describe_cause())}[/red]")
    console.print("[dim]Nothing was deleted.[/dim]")


def show_targets(rows: list[tuple[Path, Optional[int]]], target_name: str) -> None:
    """
    Display matched directories with their sizes and a running total.

    Args:
        rows: (path, size) pairs; size is None when it could not be measured
        target_name: Name the directories were matched on
    """
    table = Table(title=f"Found {len(rows)} {target_name} directories", show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    table.add_column("Running total", justify="right")

    total = 0
    for path, size in rows:
        if size is None:
            table.add_row(escape(str(path)), "[red]unreadable[/red]", format_size(total))
            continue
        total += size
        table.add_row(escape(str(path)), format_size(size), format_size(total))

    console.print(table)
    console.print(f"\n[bold]Total: {format_size(total)}[/bold]")


def show_reclaim_preview(targets: list[Path], target_name: str) -> None:
    """List what is about to be deleted."""
    console.print(f"[bold]Deleting {len(targets)} {target_name} directories:[/bold]")
    for target in targets:
        console.print(f"  • {escape(str(target))}")
    console.print()


def show_reclaim_progress() -> Progress:
    """Create progress bar for deletion."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def show_reclaim_result(result: ReclaimResult) -> None:
    """Display result of a single deletion."""
    if result.success:
        console.print(f"  [green]✓[/green] {escape(str(result.path))}: {format_size(result.size_bytes)}")
    else:
        console.print(f"  [red]✗[/red] {escape(str(result.path))}: {escape(result.reason or '')}")


def show_report(report: AggregateReport) -> None:
    """Display the summary of a reclaim run, then any failures."""
    table = Table(show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Space freed", f"[bold green]{format_size(report.total_bytes_freed)}[/bold green]")
    table.add_row("Directories deleted", str(report.deleted_count))
    if report.failure_count:
        table.add_row("[red]Failed[/red]", str(report.failure_count))

    console.print()
    console.print("[bold green]Reclaim complete![/bold green]")
    console.print(table)

    if report.failures:
        lines = "\n".join(
            f"• {escape(str(failure.path))}: {escape(failure.reason)}" for failure in report.failures
        )
        console.print(
            Panel(
                lines,
                title="[bold yellow]Could not delete[/bold yellow]",
                border_style="yellow",
            )
        )
