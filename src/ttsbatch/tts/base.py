"""Abstract base class for text-to-speech audio sources.

This module defines the interface the download orchestrator fetches through,
so the HTTP client can be swapped for a scripted source in tests.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager


class TTSProvider(ABC):
    """Abstract base class for text-to-speech audio sources.

    Usage:
        async with provider.stream("Hello world.") as chunks:
            async for chunk in chunks:
                ...
    """

    @abstractmethod
    def stream(
        self, text: str
    ) -> AbstractAsyncContextManager[AsyncIterator[bytes]]:
        """Open an audio stream for one line of text.

        Args:
            text: The text to convert to speech

        Returns:
            Async context manager yielding an async iterator of audio chunks

        Raises:
            RateLimitedError: On HTTP 429
            ServerError: On HTTP 5xx
            ClientError: On any other non-200 status
            NetworkError: On connection failure or timeout
        """
        pass
