"""High-level API for ttsbatch library usage."""

from collections.abc import Iterable
from pathlib import Path

from .core import download_lines
from .download.models import RunSummary
from .download.retry import RetryPolicy
from .tts.client import TTSClient


async def download(
    lines: Iterable[str],
    output_dir: str | Path = "audio",
    base_url: str = "https://bryanharper.tokyo/_functions/tts",
    voice: str = "sage",
    failure_log: str | Path = "failed_lines.txt",
    concurrency: int = 3,
    pace_every: int = 15,
    pace_delay: float = 8.0,
    request_timeout: float = 60.0,
    retry_policy: RetryPolicy | None = None,
) -> RunSummary:
    """Download audio clips for lines not yet in ``output_dir``.

    Args:
        lines: Text lines to synthesize
        output_dir: Directory holding one audio file per cache key
        base_url: TTS endpoint URL
        voice: Voice identifier
        failure_log: Path of the failure log (truncated first)
        concurrency: Maximum lines in flight
        pace_every: Pause after this many dispatches (0 disables)
        pace_delay: Seconds per pause
        request_timeout: Per-request timeout in seconds
        retry_policy: Backoff policy for 429 and 5xx

    Returns:
        RunSummary with counts, failed texts and elapsed time

    Raises:
        ValueError: If an argument is out of range
    """
    async with TTSClient(base_url, voice, timeout=request_timeout) as client:
        return await download_lines(
            lines,
            client,
            Path(output_dir),
            Path(failure_log),
            concurrency=concurrency,
            pace_every=pace_every,
            pace_delay=pace_delay,
            retry_policy=retry_policy,
        )
