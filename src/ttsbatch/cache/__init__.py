"""Artifact cache for ttsbatch: cache keys and the on-disk audio store."""

from .keys import AUDIO_EXTENSION, MAX_KEY_LENGTH, cache_key, normalize_line
from .models import Artifact
from .storage import ArtifactStore

__all__ = [
    "AUDIO_EXTENSION",
    "MAX_KEY_LENGTH",
    "Artifact",
    "ArtifactStore",
    "cache_key",
    "normalize_line",
]
