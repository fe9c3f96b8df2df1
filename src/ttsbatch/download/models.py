"""Data models for download runs."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class LineStatus(str, Enum):
    """Lifecycle state of one line within a run."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED_EXISTING = "skipped_existing"
    SKIPPED_DUPLICATE = "skipped_duplicate"


@dataclass
class RunSummary:
    """Outcome of one orchestrator run.

    Attributes:
        total: Number of non-empty lines received from the source
        succeeded: New artifacts written
        skipped_existing: Lines whose artifact was already in the store
        skipped_duplicate: Lines sharing a cache key with an earlier line
        failed: Texts of permanently failed lines, in failure order
        retries: Number of retry waits taken across all lines
        elapsed: Wall-clock duration of the run in seconds
        failure_log: Path of the failure log written by the run
        statuses: Final LineStatus per source position (index into the
            lines passed to run, blank lines have no entry)
    """

    total: int = 0
    succeeded: int = 0
    skipped_existing: int = 0
    skipped_duplicate: int = 0
    failed: list[str] = field(default_factory=list)
    retries: int = 0
    elapsed: float = 0.0
    failure_log: Path | None = None
    statuses: dict[int, LineStatus] = field(default_factory=dict)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def dispatched(self) -> int:
        """Lines that were handed to the fetch pool."""
        return self.succeeded + self.failed_count
