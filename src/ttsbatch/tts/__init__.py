"""TTS (Text-to-Speech) package for ttsbatch.

This package provides the remote fetch side: an HTTP client for the TTS
endpoint and the error taxonomy the orchestrator retries on.
"""

from .base import TTSProvider
from .client import TTSClient
from .errors import (
    ClientError,
    EmptyAudioError,
    NetworkError,
    RateLimitedError,
    ServerError,
    TTSAPIError,
    TTSError,
)

__all__ = [
    "ClientError",
    "EmptyAudioError",
    "NetworkError",
    "RateLimitedError",
    "ServerError",
    "TTSAPIError",
    "TTSClient",
    "TTSError",
    "TTSProvider",
]
