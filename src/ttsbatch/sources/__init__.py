"""Line sources: where the text to synthesize comes from."""

from .html import SourceError, clean_lines, extract_lines, load_lines, read_source

__all__ = [
    "SourceError",
    "clean_lines",
    "extract_lines",
    "load_lines",
    "read_source",
]
