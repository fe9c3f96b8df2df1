"""Download orchestration: retry policy, failure log and the bounded-concurrency runner."""

from .failures import FailureLog
from .models import LineStatus, RunSummary
from .orchestrator import DownloadOrchestrator
from .retry import RetryPolicy

__all__ = [
    "DownloadOrchestrator",
    "FailureLog",
    "LineStatus",
    "RetryPolicy",
    "RunSummary",
]
