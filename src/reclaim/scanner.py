"""Depth-first discovery of target directories.

The walk is all-or-nothing: if any directory under the root cannot be read,
the whole scan fails with ScanIOError instead of returning a partial list.
"""

import logging
import os
from pathlib import Path
from typing import Iterator

from reclaim.errors import ScanIOError
from reclaim.models import DEFAULT_TARGET_NAME, DirEntry, MatchPolicy

log = logging.getLogger(__name__)


def is_match(path: Path, target_name: str) -> bool:
    """Check whether a directory path contains the target name."""
    return target_name in str(path)


def iter_entries(path: Path) -> list[DirEntry]:
    """
    List one directory.

    Symlinks are reported as non-directories so the walk never follows them.

    Args:
        path: Directory to list

    Returns:
        Entries in the order the OS yields them

    Raises:
        ScanIOError: If the directory cannot be opened or read
    """
    try:
        with os.scandir(path) as entries:
            return [
                DirEntry(
                    path=Path(entry.path),
                    is_directory=entry.is_dir(follow_symlinks=False),
                )
                for entry in entries
            ]
    except OSError as e:
        raise ScanIOError(path, e) from e


def scan(
    root: Path,
    target_name: str = DEFAULT_TARGET_NAME,
    match_policy: MatchPolicy = MatchPolicy.STOP_AT_MATCH,
) -> list[Path]:
    """
    Find directories under root whose path contains target_name.

    Entries are visited depth-first, pre-order, in listing order. An explicit
    stack of directory iterators replaces recursion so deep trees are safe.

    Args:
        root: Directory to start from (not itself a candidate)
        target_name: Substring to look for in directory paths
        match_policy: STOP_AT_MATCH skips the inside of a matched directory,
            MATCH_ALL keeps descending and may return nested matches

    Returns:
        Matching directories in discovery order

    Raises:
        ScanIOError: If root or any directory below it cannot be read
        ValueError: If target_name is empty
    """
    if not target_name:
        raise ValueError("target_name must not be empty")

    root = Path(root)
    matches: list[Path] = []
    stack: list[Iterator[DirEntry]] = [iter(iter_entries(root))]

    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        # Files are never candidates
        if not entry.is_directory:
            continue

        if is_match(entry.path, target_name):
            log.debug("Matched %s", entry.path)
            matches.append(entry.path)
            if match_policy == MatchPolicy.STOP_AT_MATCH:
                continue

        stack.append(iter(iter_entries(entry.path)))

    log.info("Found %d match(es) for %r under %s", len(matches), target_name, root)
    return matches
