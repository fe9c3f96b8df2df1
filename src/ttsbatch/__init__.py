"""ttsbatch - incremental batch downloader for text-to-speech audio clips.

Scans lesson pages for spoken lines and fetches one MP3 per line from a
templated TTS endpoint, skipping clips already on disk. Library use::

    import asyncio
    from ttsbatch import download

    summary = asyncio.run(download(["Good morning.", "See you later."]))
    print(summary.succeeded, summary.failed)

``download`` is resolved lazily, so importing ``ttsbatch`` alone does not load httpx.
"""

__version__ = "0.1.0"
__all__ = ["download"]


def __getattr__(name: str):  # type: ignore[no-untyped-def]
    if name == "download":
        from .api import download

        return download
    raise AttributeError(f"module 'ttsbatch' has no attribute {name!r}")
