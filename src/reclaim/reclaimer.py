"""Concurrent deletion of target directories."""

import logging
import os
import shutil
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Iterable, Optional

from reclaim.errors import DeletionError, MetadataError
from reclaim.models import (
    AggregateReport,
    Failure,
    FailedSizePolicy,
    Outcome,
    ReclaimResult,
)

log = logging.getLogger(__name__)

ResultCallback = Callable[[ReclaimResult], None]


def measure_size(path: Path) -> int:
    """
    Read the metadata size of a directory.

    This is the st_size the filesystem reports for the directory entry
    itself, not the sum of the files inside it.

    Raises:
        MetadataError: If the path cannot be stat'ed
    """
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise MetadataError(path, e) from e


def delete_target(path: Path) -> None:
    """
    Recursively delete a directory.

    Raises:
        DeletionError: If anything under path cannot be removed
    """
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise DeletionError(path, e) from e


def reclaim_target(path: Path) -> ReclaimResult:
    """
    Measure then delete one target.

    Never raises for filesystem errors; they become a FAILED result. A failed
    deletion keeps the size measured before the attempt.
    """
    log.debug("Reclaiming %s", path)

    try:
        size = measure_size(path)
    except MetadataError as e:
        log.warning("Could not measure %s: %s", path, e.describe_cause())
        return ReclaimResult(
            path=path,
            size_bytes=0,
            outcome=Outcome.FAILED,
            reason=f"Could not read metadata: {e.describe_cause()}",
        )

    try:
        delete_target(path)
    except DeletionError as e:
        log.warning("Failed to remove %s: %s", path, e.describe_cause())
        return ReclaimResult(
            path=path,
            size_bytes=size,
            outcome=Outcome.FAILED,
            reason=e.describe_cause(),
        )

    log.debug("Removed %s (%d bytes)", path, size)
    return ReclaimResult(path=path, size_bytes=size, outcome=Outcome.SUCCESS)


def aggregate(
    results: Iterable[ReclaimResult],
    failed_size_policy: FailedSizePolicy = FailedSizePolicy.EXCLUDE,
) -> AggregateReport:
    """
    Fold per-target results into one report.

    The fold is a commutative sum plus a list of failures in input order, so
    completion order does not change the totals.

    Args:
        results: Results in any order
        failed_size_policy: INCLUDE also counts the measured size of targets
            that could not be deleted

    Returns:
        AggregateReport for the run
    """
    total_bytes = 0
    deleted = 0
    failures: list[Failure] = []

    for result in results:
        if result.success:
            total_bytes += result.size_bytes
            deleted += 1
            continue

        failures.append(Failure(path=result.path, reason=result.reason))
        if failed_size_policy == FailedSizePolicy.INCLUDE:
            total_bytes += result.size_bytes

    return AggregateReport(
        total_bytes_freed=total_bytes,
        deleted_count=deleted,
        failures=failures,
    )


def drop_nested(targets: Iterable[Path]) -> list[Path]:
    """
    Keep only the outermost targets.

    A target below another target is removed along with it, so giving it a
    task of its own would race two deletions over the same tree. Duplicates
    are dropped too; order is otherwise preserved.
    """
    targets = list(targets)
    selected = set(targets)
    kept: list[Path] = []
    seen: set[Path] = set()

    for path in targets:
        if path in seen or any(parent in selected for parent in path.parents):
            continue
        seen.add(path)
        kept.append(path)

    if len(kept) < len(targets):
        log.debug("Dropped %d nested or duplicate target(s)", len(targets) - len(kept))
    return kept


def reclaim(
    targets: Iterable[Path],
    max_workers: Optional[int] = None,
    failed_size_policy: FailedSizePolicy = FailedSizePolicy.EXCLUDE,
    on_result: ResultCallback | None = None,
) -> AggregateReport:
    """
    Delete every target concurrently and report the space freed.

    Nested targets are folded into their outermost ancestor first, then one
    task is submitted per remaining target. Results are gathered by this thread
    only, after each task finishes, and folded once all of them are in.

    Args:
        targets: Directories to delete; nested ones are deleted with their ancestor
        max_workers: Pool size; None starts one worker per target
        failed_size_policy: See aggregate()
        on_result: Optional callback(result), called as each task completes

    Returns:
        AggregateReport once every task has finished
    """
    targets = drop_nested(targets)
    results: list[ReclaimResult] = []

    if targets:
        workers = max_workers or len(targets)
        log.info("Reclaiming %d target(s) with %d worker(s)", len(targets), workers)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reclaim") as executor:
            future_to_path = {executor.submit(reclaim_target, path): path for path in targets}

            for future in as_completed(future_to_path):
                path = future_to_path[future]
                try:
                    result = future.result()
                except Exception as e:
                    log.exception("Reclaim task for %s crashed", path)
                    result = ReclaimResult(
                        path=path,
                        size_bytes=0,
                        outcome=Outcome.FAILED,
                        reason=str(e) or type(e).__name__,
                    )

                results.append(result)
                if on_result:
                    on_result(result)

    return aggregate(results, failed_size_policy)
