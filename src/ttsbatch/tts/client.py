"""HTTP client for the templated TTS endpoint."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import quote

import httpx

from .base import TTSProvider
from .errors import ClientError, NetworkError, RateLimitedError, ServerError

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone, so URLs match the ones the
# lesson page itself requests.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def raise_for_status(status_code: int, text: str) -> None:
    """Map a response status onto the TTS error taxonomy.

    Args:
        status_code: HTTP status returned by the endpoint
        text: Line being synthesized (used in the error message)

    Raises:
        RateLimitedError: On 429
        ServerError: On 500-599
        ClientError: On any other non-200 status
    """
    if status_code == 200:
        return
    if status_code == 429:
        raise RateLimitedError(f"Rate limit exceeded (429): {text}", 429)
    if 500 <= status_code < 600:
        raise ServerError(f"Server error ({status_code}): {text}", status_code)
    raise ClientError(f"Request rejected ({status_code}): {text}", status_code)


class TTSClient(TTSProvider):
    """Client for a GET-based text-to-speech endpoint.

    Each line is requested as ``{base_url}?voice={voice}&text={text}`` and the
    response body is streamed back to the caller in chunks.
    """

    def __init__(
        self,
        base_url: str,
        voice: str,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize TTS client.

        Args:
            base_url: Endpoint URL without query string
            voice: Voice identifier sent with every request
            timeout: Per-request timeout in seconds
            client: Optional pre-built httpx client (not closed by aclose)

        Raises:
            ValueError: If base_url or voice is empty, or timeout is not positive
        """
        if not base_url or not base_url.strip():
            raise ValueError("base_url cannot be empty")
        if not voice or not voice.strip():
            raise ValueError("voice cannot be empty")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.base_url = base_url
        self.voice = voice
        self.timeout = timeout

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(follow_redirects=True)

    def build_url(self, text: str) -> str:
        """Build the request URL for one line of text."""
        voice = quote(self.voice, safe=_URI_COMPONENT_SAFE)
        encoded = quote(text, safe=_URI_COMPONENT_SAFE)
        return f"{self.base_url}?voice={voice}&text={encoded}"

    @asynccontextmanager
    async def stream(self, text: str) -> AsyncIterator[AsyncIterator[bytes]]:
        """Open the audio stream for ``text``.

        ``timeout`` bounds the whole request, including the time the caller
        spends reading the body. httpx errors raised while the caller
        consumes the stream are converted to NetworkError as well.
        """
        url = self.build_url(text)
        logger.debug(f"GET {url}")

        try:
            async with asyncio.timeout(self.timeout):
                async with self._client.stream(
                    "GET", url, timeout=self.timeout
                ) as response:
                    raise_for_status(response.status_code, text)
                    yield response.aiter_bytes()
        except (httpx.TimeoutException, TimeoutError) as e:
            raise NetworkError(
                f"Request timed out after {self.timeout}s: {text}", e
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Network error: {e!r}", e) from e
        except httpx.HTTPError as e:
            # Redirect loops, undecodable bodies and similar protocol failures
            raise NetworkError(f"Request failed: {e!r}", e) from e

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TTSClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
