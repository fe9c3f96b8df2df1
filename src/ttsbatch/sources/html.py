"""Pattern-based extraction of spoken lines from lesson HTML."""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

# "greeting.mp3" -> the clip name itself is the line to speak
_MP3_NAME = re.compile(r'"([^"]+\.mp3)"')
# q:"How are you?" -> quiz question text
_QUESTION = re.compile(r'q:"([^"]+)"')
# "Nice to meet you." -> any quoted sentence ending with a period
_SENTENCE = re.compile(r'"([^"]+?\.)"')


class SourceError(Exception):
    """A configured line source is missing or unreadable."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def extract_lines(html: str) -> list[str]:
    """Extract candidate lines from an HTML document.

    Results are concatenated in pattern order: MP3 clip names, quiz
    questions, then quoted sentences. Sentences have their quotes and every
    period removed and are kept only when longer than two characters.

    Args:
        html: Raw document text

    Returns:
        Candidate lines, possibly with duplicates
    """
    lines: list[str] = []

    for name in _MP3_NAME.findall(html):
        lines.append(name.replace(".mp3", "", 1))

    lines.extend(_QUESTION.findall(html))

    for sentence in _SENTENCE.findall(html):
        text = sentence.replace('"', "").replace(".", "").strip()
        if len(text) > 2:
            lines.append(text)

    return lines


def clean_lines(lines: Iterable[str], min_length: int = 1) -> list[str]:
    """Trim lines, drop exact duplicates and lines too short to speak.

    Args:
        lines: Raw candidate lines
        min_length: Lines of this length or shorter are dropped

    Returns:
        Unique trimmed lines in first-seen order
    """
    seen: set[str] = set()
    cleaned: list[str] = []
    for line in lines:
        text = line.strip()
        if len(text) <= min_length or text in seen:
            continue
        seen.add(text)
        cleaned.append(text)
    return cleaned


def read_source(path: Path) -> str:
    """Read one source document.

    Raises:
        SourceError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceError(f"Missing {path}", path) from e
    except PermissionError as e:
        raise SourceError(f"Permission denied reading {path}", path) from e
    except UnicodeDecodeError as e:
        raise SourceError(f"Unable to decode {path} as UTF-8", path) from e
    except OSError as e:
        raise SourceError(f"Unable to read {path}: {e}", path) from e


def load_lines(
    files: Iterable[Path],
    extra_lines: Iterable[str] = (),
    min_length: int = 1,
) -> list[str]:
    """Collect the lines to synthesize from HTML files and literal lines.

    Every file is read before anything is returned, so a missing source
    aborts the run before any download starts.

    Args:
        files: HTML documents to scan
        extra_lines: Literal lines appended after the extracted ones
        min_length: Passed to clean_lines

    Returns:
        Unique cleaned lines

    Raises:
        SourceError: If any file is missing or unreadable
    """
    collected: list[str] = []
    for path in files:
        html = read_source(Path(path))
        found = extract_lines(html)
        logger.debug(f"Extracted {len(found)} candidate lines from {path}")
        collected.extend(found)

    collected.extend(extra_lines)
    return clean_lines(collected, min_length=min_length)
