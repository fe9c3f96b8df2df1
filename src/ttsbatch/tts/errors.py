"""Custom TTS exceptions."""


class TTSError(Exception):
    """Base exception for TTS-related errors."""

    def __init__(
        self, message: str, original_error: Exception | None = None
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class TTSAPIError(TTSError):
    """Exception raised when the endpoint answers with a non-200 status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class RateLimitedError(TTSAPIError):
    """HTTP 429. Always retried after a backoff."""


class ServerError(TTSAPIError):
    """HTTP 5xx. Retried after a fixed backoff."""


class ClientError(TTSAPIError):
    """Any other non-200 status. Never retried.

    This typically occurs when:
    - The text is rejected by the endpoint (400)
    - The endpoint path or voice does not exist (404)
    """


class NetworkError(TTSError):
    """Connection failure or timeout before the audio was fully received."""


class EmptyAudioError(TTSError):
    """The endpoint answered 200 with an empty body."""
