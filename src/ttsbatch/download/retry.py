"""Backoff policy for retryable TTS errors."""

from dataclasses import dataclass

from ..tts.errors import RateLimitedError, ServerError


@dataclass(frozen=True)
class RetryPolicy:
    """Decides whether and how long to wait before retrying a line.

    Attributes:
        rate_limit_backoff: Seconds to wait after a 429
        scale_rate_limit_backoff: Multiply the 429 wait by the attempt number
        server_error_backoff: Seconds to wait after a 5xx
        max_server_error_retries: Cap on 5xx retries per line, None for unbounded
    """

    rate_limit_backoff: float = 300.0
    scale_rate_limit_backoff: bool = True
    server_error_backoff: float = 120.0
    max_server_error_retries: int | None = None

    def __post_init__(self) -> None:
        """Validate backoff settings."""
        if self.rate_limit_backoff < 0:
            raise ValueError("rate_limit_backoff cannot be negative")
        if self.server_error_backoff < 0:
            raise ValueError("server_error_backoff cannot be negative")
        if self.max_server_error_retries is not None and self.max_server_error_retries < 0:
            raise ValueError("max_server_error_retries cannot be negative")

    def delay_for(self, error: Exception, attempt: int) -> float | None:
        """Return the wait before the next attempt, or None if the error is terminal.

        Args:
            error: Error raised by the attempt that just failed
            attempt: 1-based number of attempts of this error class so far

        Returns:
            Seconds to wait, or None to give up on the line
        """
        if isinstance(error, RateLimitedError):
            if self.scale_rate_limit_backoff:
                return self.rate_limit_backoff * attempt
            return self.rate_limit_backoff

        if isinstance(error, ServerError):
            if (
                self.max_server_error_retries is not None
                and attempt > self.max_server_error_retries
            ):
                return None
            return self.server_error_backoff

        return None
