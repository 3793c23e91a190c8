"""Tests for data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from reclaim.models import (
    AggregateReport,
    DirEntry,
    Failure,
    FailedSizePolicy,
    MatchPolicy,
    Outcome,
    ReclaimOptions,
    ReclaimResult,
)


class TestReclaimResult:
    def test_success(self):
        result = ReclaimResult(path=Path("/x"), size_bytes=4096, outcome=Outcome.SUCCESS)
        assert result.success
        assert result.reason is None

    def test_failed_requires_reason(self):
        with pytest.raises(ValidationError):
            ReclaimResult(path=Path("/x"), size_bytes=0, outcome=Outcome.FAILED)

    def test_success_rejects_reason(self):
        with pytest.raises(ValidationError):
            ReclaimResult(path=Path("/x"), outcome=Outcome.SUCCESS, reason="oops")

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            ReclaimResult(path=Path("/x"), size_bytes=-1, outcome=Outcome.SUCCESS)

    def test_frozen(self):
        result = ReclaimResult(path=Path("/x"), size_bytes=1, outcome=Outcome.SUCCESS)
        with pytest.raises(ValidationError):
            result.size_bytes = 2


class TestAggregateReport:
    def test_defaults(self):
        report = AggregateReport()
        assert report.total_bytes_freed == 0
        assert report.failures == []
        assert report.ok
        assert report.failure_count == 0

    def test_failure_count(self):
        report = AggregateReport(
            total_bytes_freed=10,
            deleted_count=1,
            failures=[Failure(path=Path("/a"), reason="busy")],
        )
        assert report.failure_count == 1
        assert not report.ok


class TestDirEntry:
    def test_fields(self):
        entry = DirEntry(path=Path("/a/b"), is_directory=True)
        assert entry.path.name == "b"
        assert entry.is_directory


class TestReclaimOptions:
    def test_defaults(self):
        options = ReclaimOptions()
        assert options.target_name == "node_modules"
        assert options.match_policy == MatchPolicy.STOP_AT_MATCH
        assert options.max_workers is None
        assert options.failed_size_policy == FailedSizePolicy.EXCLUDE

    def test_empty_target_rejected(self):
        with pytest.raises(ValidationError):
            ReclaimOptions(target_name="")

    def test_zero_workers_rejected(self):
        with pytest.raises(ValidationError):
            ReclaimOptions(max_workers=0)

    def test_policies_from_strings(self):
        options = ReclaimOptions(match_policy="match_all", failed_size_policy="include")
        assert options.match_policy == MatchPolicy.MATCH_ALL
        assert options.failed_size_policy == FailedSizePolicy.INCLUDE
