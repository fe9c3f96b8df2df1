"""Flat failure log: one permanently failed source line per line of text."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FailureLog:
    """Append-only record of lines that could not be downloaded.

    Each record is a single ``write`` on a file opened in append mode, so
    concurrent completions never interleave within a line.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def reset(self) -> None:
        """Truncate the log at the start of a run."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")

    def record(self, text: str) -> None:
        """Append one failed line."""
        # Newlines inside a line would split it into two records.
        entry = " ".join(text.splitlines()) + "\n"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry)
        logger.debug(f"Recorded failure in {self.path}: {text}")

    def entries(self) -> list[str]:
        """Read back all recorded lines."""
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8").splitlines()
