"""Filesystem artifact store for downloaded audio clips."""

import logging
from collections.abc import AsyncIterator
from pathlib import Path

from ..tts.errors import EmptyAudioError
from .models import Artifact

logger = logging.getLogger(__name__)


class ArtifactStore:
    """Directory of audio files named by cache key.

    A key counts as present only when its file exists and is non-empty, so a
    zero-byte file left by an interrupted run is fetched again.
    """

    def __init__(self, directory: Path):
        """Initialize artifact store, creating the directory if needed.

        Args:
            directory: Directory holding one audio file per cache key
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Return the file path for a cache key."""
        return self.directory / key

    def exists(self, key: str) -> bool:
        """Check whether a non-empty artifact is stored under ``key``."""
        path = self.path_for(key)
        try:
            return path.is_file() and path.stat().st_size > 0
        except OSError:
            return False

    async def write(
        self, key: str, chunks: AsyncIterator[bytes], text: str = ""
    ) -> Artifact:
        """Stream audio chunks into the artifact file.

        The artifact is only valid once the stream finishes cleanly. If the
        stream or the write fails part way (cancellation included), the
        partial file is removed before the error propagates.

        Args:
            key: Cache key to store under
            chunks: Async iterator of audio bytes
            text: Source line, recorded on the returned Artifact

        Returns:
            The written Artifact

        Raises:
            EmptyAudioError: If the stream produced no bytes
            OSError: If the file cannot be written
        """
        path = self.path_for(key)
        size = 0
        try:
            with open(path, "wb") as f:
                async for chunk in chunks:
                    if chunk:
                        f.write(chunk)
                        size += len(chunk)
            if size == 0:
                raise EmptyAudioError(f"No audio data received: {text or key}")
        except BaseException:
            self.remove(key)
            raise

        logger.debug(f"Saved artifact {path} ({size} bytes)")
        return Artifact(key=key, path=path, size=size, text=text)

    def remove(self, key: str) -> None:
        """Delete the artifact for ``key`` if it exists."""
        path = self.path_for(key)
        if not path.exists():
            return
        try:
            path.unlink()
            logger.debug(f"Removed audio file: {path}")
        except OSError as cleanup_error:
            logger.warning(
                f"Failed to clean up partial audio file {path}: {cleanup_error}"
            )
