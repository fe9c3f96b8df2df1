"""Data models for the artifact store."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Artifact:
    """A downloaded audio clip on disk.

    Attributes:
        key: Cache key (also the filename)
        path: Full path to the audio file
        size: File size in bytes
        text: Source line the clip was synthesized from
    """

    key: str
    path: Path
    size: int
    text: str = ""
