"""Core functionality for ttsbatch - wires sources, store, client and orchestrator."""

import logging
from collections.abc import Iterable
from pathlib import Path

from .cache.storage import ArtifactStore
from .config import TtsbatchConfig
from .download.failures import FailureLog
from .download.models import RunSummary
from .download.orchestrator import DownloadOrchestrator
from .download.retry import RetryPolicy
from .sources import load_lines
from .tts.base import TTSProvider
from .tts.client import TTSClient

logger = logging.getLogger(__name__)


async def download_lines(
    lines: Iterable[str],
    provider: TTSProvider,
    output_dir: Path,
    failure_log: Path,
    *,
    concurrency: int = 3,
    pace_every: int = 15,
    pace_delay: float = 8.0,
    retry_policy: RetryPolicy | None = None,
) -> RunSummary:
    """Download every missing line through ``provider``.

    Args:
        lines: Lines to synthesize, in order
        provider: Audio source to fetch from
        output_dir: Artifact directory
        failure_log: Path of the failure log (truncated first)
        concurrency: Maximum lines in flight
        pace_every: Pause after this many dispatches (0 disables)
        pace_delay: Seconds per pause
        retry_policy: Backoff policy for 429 and 5xx

    Returns:
        RunSummary for the run
    """
    store = ArtifactStore(output_dir)
    orchestrator = DownloadOrchestrator(
        provider,
        store,
        FailureLog(failure_log),
        concurrency=concurrency,
        pace_every=pace_every,
        pace_delay=pace_delay,
        retry_policy=retry_policy,
    )
    return await orchestrator.run(lines)


async def run_from_config(config: TtsbatchConfig) -> RunSummary:
    """Run a full download pass as described by ``config``.

    Lines are loaded before anything touches the network, so a missing
    source aborts the run without a single request.

    Raises:
        SourceError: If a configured source file is missing or unreadable
    """
    lines = load_lines(
        config.source.files,
        extra_lines=config.source.lines,
        min_length=config.source.min_length,
    )
    logger.debug(f"Loaded {len(lines)} unique lines from configured sources")

    download = config.download
    retry_policy = RetryPolicy(
        rate_limit_backoff=download.rate_limit_backoff,
        scale_rate_limit_backoff=download.scale_rate_limit_backoff,
        server_error_backoff=download.server_error_backoff,
        max_server_error_retries=download.max_server_error_retries,
    )

    async with TTSClient(
        config.endpoint.base_url,
        config.endpoint.voice,
        timeout=download.request_timeout,
    ) as client:
        return await download_lines(
            lines,
            client,
            config.paths.output_dir,
            config.paths.failure_log,
            concurrency=download.concurrency,
            pace_every=download.pace_every,
            pace_delay=download.pace_delay,
            retry_policy=retry_policy,
        )
