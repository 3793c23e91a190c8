"""CLI interface for reclaim."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from reclaim import __version__
from reclaim.display import (
    console,
    setup_logging,
    show_nothing_found,
    show_reclaim_preview,
    show_reclaim_progress,
    show_reclaim_result,
    show_report,
    show_scan_error,
    show_targets,
)
from reclaim.errors import MetadataError, ScanIOError
from reclaim.models import (
    DEFAULT_TARGET_NAME,
    FailedSizePolicy,
    MatchPolicy,
    ReclaimOptions,
    ReclaimResult,
)
from reclaim.reclaimer import drop_nested, measure_size, reclaim
from reclaim.scanner import scan

log = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="reclaim",
    help="Find node_modules (or any named) directories below the current directory and delete them",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"reclaim version {__version__}")
        raise typer.Exit()


def _scan_cwd(options: ReclaimOptions) -> tuple[Path, list[Path]]:
    """Scan the working directory, exiting with code 1 if it can't be read."""
    try:
        cwd = Path.cwd()
    except OSError as e:
        console.print(f"[red]Error: failed to read current working directory: {e}[/red]")
        raise typer.Exit(1)

    try:
        targets = scan(cwd, options.target_name, options.match_policy)
    except ScanIOError as e:
        log.debug("Scan aborted", exc_info=e.cause)
        show_scan_error(e)
        raise typer.Exit(1)

    return cwd, targets


def run_reclaim(options: ReclaimOptions) -> None:
    """Default mode: scan, delete everything found, print the report."""
    cwd, targets = _scan_cwd(options)

    if not targets:
        show_nothing_found(cwd, options.target_name)
        raise typer.Exit(0)

    # Under --match-all, anything below a match goes with it
    targets = drop_nested(targets)
    show_reclaim_preview(targets, options.target_name)

    with show_reclaim_progress() as progress:
        task = progress.add_task("Deleting...", total=len(targets))

        def on_result(result: ReclaimResult) -> None:
            show_reclaim_result(result)
            progress.advance(task)

        report = reclaim(
            targets,
            max_workers=options.max_workers,
            failed_size_policy=options.failed_size_policy,
            on_result=on_result,
        )

    show_report(report)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    target: str = typer.Option(
        DEFAULT_TARGET_NAME,
        "--target",
        "-t",
        help="Delete directories whose path contains this name.",
    ),
    match_all: bool = typer.Option(
        False,
        "--match-all",
        help="Keep searching inside matched directories and report nested matches too.",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Maximum concurrent deletions (default: one per directory).",
    ),
    count_failed: bool = typer.Option(
        False,
        "--count-failed",
        help="Count the size of directories that could not be deleted in the total.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v info, -vv debug).",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """reclaim - delete node_modules directories and report the space freed."""
    setup_logging(verbose)

    try:
        options = ReclaimOptions(
            target_name=target,
            match_policy=MatchPolicy.MATCH_ALL if match_all else MatchPolicy.STOP_AT_MATCH,
            max_workers=workers,
            failed_size_policy=FailedSizePolicy.INCLUDE if count_failed else FailedSizePolicy.EXCLUDE,
        )
    except ValidationError as e:
        console.print(f"[red]Error: invalid options: {e.errors()[0]['msg']}[/red]")
        raise typer.Exit(2)

    ctx.obj = options

    # If no command specified, delete
    if ctx.invoked_subcommand is None:
        run_reclaim(options)


@app.command(name="list")
def list_targets(ctx: typer.Context) -> None:
    """List matching directories and their sizes without deleting anything."""
    options: ReclaimOptions = ctx.obj
    cwd, targets = _scan_cwd(options)

    if not targets:
        show_nothing_found(cwd, options.target_name)
        return

    rows: list[tuple[Path, Optional[int]]] = []
    for path in targets:
        try:
            size = measure_size(path)
        except MetadataError as e:
            log.warning("Could not measure %s: %s", path, e.describe_cause())
            size = None
        rows.append((path, size))

    show_targets(rows, options.target_name)


if __name__ == "__main__":
    app()
