"""Bounded-concurrency download orchestrator.

Drives every source line to a terminal state: the dispatch loop filters
duplicates and already-stored clips, admits at most ``concurrency`` lines at a
time, paces bursts of dispatches, and each admitted line runs an explicit
retry loop until it is saved or permanently failed.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable

from ..cache.keys import cache_key, normalize_line
from ..cache.storage import ArtifactStore
from ..tts.base import TTSProvider
from ..tts.errors import RateLimitedError, ServerError, TTSError
from .failures import FailureLog
from .models import LineStatus, RunSummary
from .retry import RetryPolicy

logger = logging.getLogger(__name__)


def format_wait(seconds: float) -> str:
    """Render a wait duration for log messages."""
    if seconds >= 60:
        return f"{seconds / 60:g} min"
    return f"{seconds:g}s"


class DownloadOrchestrator:
    """Downloads missing audio clips for a list of lines.

    Example:
        store = ArtifactStore(Path("audio"))
        failures = FailureLog(Path("failed_lines.txt"))
        async with TTSClient(base_url, "sage") as client:
            orchestrator = DownloadOrchestrator(client, store, failures)
            summary = await orchestrator.run(["Hello world.", "Goodbye."])
    """

    def __init__(
        self,
        provider: TTSProvider,
        store: ArtifactStore,
        failure_log: FailureLog,
        *,
        concurrency: int = 3,
        pace_every: int = 15,
        pace_delay: float = 8.0,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize orchestrator.

        Args:
            provider: Audio source each line is fetched from
            store: Artifact store checked before and written after each fetch
            failure_log: Log receiving permanently failed lines
            concurrency: Maximum number of lines in flight at once
            pace_every: Pause after this many dispatches (0 disables pacing)
            pace_delay: Seconds to pause between dispatch bursts
            retry_policy: Backoff policy for 429 and 5xx responses
            sleep: Awaitable sleep used for every wait
            clock: Monotonic clock used for the elapsed time

        Raises:
            ValueError: If concurrency is below 1 or a pacing value is negative
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        if pace_every < 0:
            raise ValueError(f"pace_every cannot be negative, got {pace_every}")
        if pace_delay < 0:
            raise ValueError(f"pace_delay cannot be negative, got {pace_delay}")

        self.provider = provider
        self.store = store
        self.failure_log = failure_log
        self.concurrency = concurrency
        self.pace_every = pace_every
        self.pace_delay = pace_delay
        self.retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._clock = clock

        self._completed = 0

    def plan(
        self, lines: Iterable[str], summary: RunSummary
    ) -> list[tuple[int, str, str]]:
        """Filter lines down to the ones that need a fetch.

        Runs in the single dispatching coroutine, so the seen-key set is never
        touched by concurrent tasks. Skipped lines get their status recorded
        under their source position here.

        Returns:
            (source position, text, cache key) triples in source order
        """
        seen: set[str] = set()
        queued: list[tuple[int, str, str]] = []

        for position, raw in enumerate(lines):
            text = normalize_line(raw)
            if not text:
                continue
            summary.total += 1

            key = cache_key(text)
            if key in seen:
                summary.skipped_duplicate += 1
                summary.statuses[position] = LineStatus.SKIPPED_DUPLICATE
                logger.debug(f"Duplicate of an earlier line ({key}): {text}")
                continue
            seen.add(key)

            if self.store.exists(key):
                summary.skipped_existing += 1
                summary.statuses[position] = LineStatus.SKIPPED_EXISTING
                logger.info(f"✅ Exists: {text}")
                continue

            queued.append((position, text, key))

        return queued

    async def run(self, lines: Iterable[str]) -> RunSummary:
        """Download every missing line and wait for all of them to finish.

        Args:
            lines: Source lines in order

        Returns:
            RunSummary with counts, failed texts and elapsed time
        """
        started = self._clock()
        summary = RunSummary(failure_log=self.failure_log.path)
        self.failure_log.reset()
        self._completed = 0

        queued = self.plan(lines, summary)
        logger.info(
            f"🪄 {summary.total} lines, {len(queued)} to download "
            f"({summary.skipped_existing} cached, {summary.skipped_duplicate} duplicates)"
        )

        semaphore = asyncio.Semaphore(self.concurrency)
        async with asyncio.TaskGroup() as group:
            for dispatched, (position, text, key) in enumerate(queued, start=1):
                await semaphore.acquire()
                summary.statuses[position] = LineStatus.PENDING
                group.create_task(
                    self._run_line(
                        position, text, key, semaphore, summary, len(queued)
                    )
                )

                if (
                    self.pace_every
                    and dispatched % self.pace_every == 0
                    and dispatched < len(queued)
                ):
                    logger.info(
                        f"⏳ Waiting {format_wait(self.pace_delay)} before next batch..."
                    )
                    await self._sleep(self.pace_delay)

        summary.elapsed = self._clock() - started
        return summary

    async def _run_line(
        self,
        position: int,
        text: str,
        key: str,
        semaphore: asyncio.Semaphore,
        summary: RunSummary,
        total: int,
    ) -> None:
        """Run one line to a terminal state, then free its slot."""
        try:
            status = await self._download(text, key, summary)
        finally:
            semaphore.release()

        summary.statuses[position] = status
        self._completed += 1
        percent = self._completed / total * 100 if total else 100.0
        progress = f"[{self._completed}/{total}] {percent:.0f}%"
        if status is LineStatus.SUCCEEDED:
            logger.info(f"🎧 {progress} Saved: {text}")
        else:
            logger.info(f"❌ {progress} Failed: {text}")

    async def _download(self, text: str, key: str, summary: RunSummary) -> LineStatus:
        """Fetch one line, retrying while the policy allows.

        Attempts are counted per error class, so a 429 after several 5xx
        responses starts its backoff from the first step.
        """
        attempts: dict[type[Exception], int] = {}

        while True:
            try:
                async with self.provider.stream(text) as chunks:
                    await self.store.write(key, chunks, text=text)
                summary.succeeded += 1
                return LineStatus.SUCCEEDED
            except (TTSError, OSError) as e:
                kind = type(e)
                attempts[kind] = attempts.get(kind, 0) + 1
                delay = self.retry_policy.delay_for(e, attempts[kind])

                if delay is None:
                    logger.error(f"❌ Failed: {text} → {e}")
                    self.failure_log.record(text)
                    summary.failed.append(text)
                    return LineStatus.FAILED

                summary.retries += 1
                if isinstance(e, RateLimitedError):
                    reason = "429 Too Many Requests"
                elif isinstance(e, ServerError):
                    reason = f"Server error {e.status_code}"
                else:
                    reason = str(e)
                logger.warning(
                    f"⏳ {reason} → waiting {format_wait(delay)} for {text}"
                )
                await self._sleep(delay)
