"""Cache key derivation for audio artifacts.

The key doubles as the artifact filename and as the de-duplication key for a
run, so the naming scheme must stay stable: the lesson page requests clips by
exactly these names.
"""

import re

AUDIO_EXTENSION = ".mp3"
MAX_KEY_LENGTH = 100

# ASCII word characters, hiragana, katakana, CJK ideographs, fullwidth digits.
_DISALLOWED = re.compile(
    r"[^\w\u3041-\u309f\u30a1-\u30fc\u4e00-\u9faf\uff10-\uff19]",
    re.ASCII,
)


def normalize_line(text: str) -> str:
    """Return the cleaned form of a source line (surrounding whitespace trimmed)."""
    return text.strip()


def cache_key(text: str) -> str:
    """Derive the artifact filename for a line of text.

    Lowercases, strips every character outside the allow-set, truncates to
    MAX_KEY_LENGTH characters and appends the audio extension. Distinct texts
    may map to the same key (punctuation-only differences, or a shared
    100-character prefix); those lines are treated as the same clip.

    Args:
        text: Line of text, any Unicode

    Returns:
        Filename such as ``"helloworld.mp3"``; ``".mp3"`` if nothing survives
    """
    stripped = _DISALLOWED.sub("", text.lower())
    return stripped[:MAX_KEY_LENGTH] + AUDIO_EXTENSION
