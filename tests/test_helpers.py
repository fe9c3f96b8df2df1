"""Test helpers: scripted audio providers and a recording sleep."""

import asyncio
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ttsbatch.tts.base import TTSProvider

AUDIO = b"ID3\x04\x00fake-mp3-payload"


class BrokenStream:
    """Outcome that yields some bytes, then fails mid-stream."""

    def __init__(self, payload: bytes, error: Exception) -> None:
        self.payload = payload
        self.error = error


async def _chunks(outcome: bytes | BrokenStream) -> AsyncIterator[bytes]:
    if isinstance(outcome, BrokenStream):
        yield outcome.payload
        raise outcome.error
    # Two chunks so the store really streams
    half = len(outcome) // 2
    yield outcome[:half]
    yield outcome[half:]


class ScriptedProvider(TTSProvider):
    """Audio source whose outcomes are scripted per text.

    Each text maps to a list of outcomes consumed one per call: bytes for a
    successful stream, an Exception to raise on open, or a BrokenStream.
    Texts without a script (or with an exhausted one) get ``default``.
    Tracks how many streams are open at once.
    """

    def __init__(
        self,
        outcomes: dict[str, list] | None = None,
        default: bytes | Exception = AUDIO,
        delay: float = 0.0,
    ) -> None:
        self.outcomes = {text: list(script) for text, script in (outcomes or {}).items()}
        self.default = default
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @asynccontextmanager
    async def stream(self, text: str) -> AsyncIterator[AsyncIterator[bytes]]:
        self.calls.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            script = self.outcomes.get(text)
            outcome = script.pop(0) if script else self.default
            if isinstance(outcome, Exception):
                raise outcome
            yield _chunks(outcome)
        finally:
            self.in_flight -= 1


class RecordingSleep:
    """Stand-in for asyncio.sleep that records durations without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)
