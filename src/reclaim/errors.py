"""Exceptions raised by the scanner and reclaimer."""

from pathlib import Path


class ReclaimError(Exception):
    """Base class for reclaim errors."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{self.path}: {self.describe_cause()}")

    def describe_cause(self) -> str:
        """Text of the underlying error, never empty."""
        return str(self.cause) or type(self.cause).__name__


class ScanIOError(ReclaimError):
    """A directory could not be read during the walk. Aborts the scan."""


class DeletionError(ReclaimError):
    """A target could not be deleted. Local to that target."""


class MetadataError(DeletionError):
    """A target's size could not be measured before deletion."""
