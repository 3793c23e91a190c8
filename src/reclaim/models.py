"""Data models for reclaim."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TARGET_NAME = "node_modules"


class MatchPolicy(str, Enum):
    """What the scanner does once a directory matches."""

    STOP_AT_MATCH = "stop_at_match"  # Record it, don't descend
    MATCH_ALL = "match_all"  # Record it and keep descending


class FailedSizePolicy(str, Enum):
    """Whether a failed deletion's measured size counts toward the total."""

    EXCLUDE = "exclude"
    INCLUDE = "include"


class Outcome(str, Enum):
    """Outcome of a single deletion task."""

    SUCCESS = "success"
    FAILED = "failed"


class DirEntry(BaseModel):
    """A filesystem object seen while walking a directory."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Path of the entry")
    is_directory: bool = Field(..., description="Whether the entry is a real directory")


class ReclaimResult(BaseModel):
    """Per-target outcome of a reclaim run."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Target directory")
    size_bytes: int = Field(0, ge=0, description="Metadata size measured before deletion")
    outcome: Outcome = Field(..., description="Whether the deletion succeeded")
    reason: Optional[str] = Field(None, description="Why the deletion failed")

    @model_validator(mode="after")
    def _check_reason(self) -> "ReclaimResult":
        if self.outcome == Outcome.FAILED and not self.reason:
            raise ValueError("failed results need a reason")
        if self.outcome == Outcome.SUCCESS and self.reason is not None:
            raise ValueError("successful results carry no reason")
        return self

    @property
    def success(self) -> bool:
        return self.outcome == Outcome.SUCCESS


class Failure(BaseModel):
    """A target that could not be reclaimed."""

    model_config = ConfigDict(frozen=True)

    path: Path
    reason: str


class AggregateReport(BaseModel):
    """Order-independent summary of a reclaim run."""

    model_config = ConfigDict(frozen=True)

    total_bytes_freed: int = Field(0, ge=0, description="Sum of counted sizes")
    deleted_count: int = Field(0, ge=0, description="Number of targets deleted")
    failures: list[Failure] = Field(default_factory=list)

    @property
    def failure_count(self) -> int:
        """Number of targets that could not be deleted."""
        return len(self.failures)

    @property
    def ok(self) -> bool:
        """True when every target was deleted."""
        return not self.failures


class ReclaimOptions(BaseModel):
    """Tunables for one invocation, built by the CLI."""

    model_config = ConfigDict(frozen=True)

    target_name: str = Field(
        DEFAULT_TARGET_NAME,
        min_length=1,
        description="Substring a directory path must contain to be a target",
    )
    match_policy: MatchPolicy = Field(
        MatchPolicy.STOP_AT_MATCH,
        description="Whether matched directories are descended into",
    )
    max_workers: Optional[int] = Field(
        None,
        ge=1,
        description="Deletion worker cap (None runs one worker per target)",
    )
    failed_size_policy: FailedSizePolicy = Field(
        FailedSizePolicy.EXCLUDE,
        description="Whether failed deletions count toward bytes freed",
    )
