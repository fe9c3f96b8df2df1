"""Typer CLI definition for ttsbatch."""

import asyncio
import logging

import typer

from .config import generate_config, get_config_path, load_config
from .core import run_from_config
from .download.models import RunSummary
from .sources import SourceError

app = typer.Typer(help="Download missing text-to-speech clips for lesson pages")


def format_elapsed(seconds: float) -> str:
    """Render elapsed wall-clock time as ``1h 02m 03s`` / ``2m 03s`` / ``4.2s``."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(round(seconds)), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    return f"{minutes}m {secs:02d}s"


def summary_lines(summary: RunSummary) -> list[str]:
    """Build the end-of-run report."""
    lines = [
        f"✨ Saved {summary.succeeded} new clips in {format_elapsed(summary.elapsed)}",
        f"   {summary.skipped_existing} already cached, "
        f"{summary.skipped_duplicate} duplicates skipped",
    ]
    if summary.failed:
        lines.append(
            f"✗ {summary.failed_count} lines failed, see {summary.failure_log}"
        )
    return lines


@app.command()
def run(
    debug: bool = typer.Option(
        False, "--debug", help="Show verbose logging and error details"
    ),
    init_config: bool = typer.Option(
        False, "--init-config", help="Write the default config file and exit"
    ),
) -> None:
    """Download every missing audio clip for the configured lesson files."""
    # Configure logging
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
        logging.getLogger("httpx").setLevel(logging.WARNING)

    if init_config:
        path = get_config_path()
        if path.exists():
            typer.echo(f"Config already exists: {path}")
        else:
            typer.echo(f"Wrote {generate_config(path)}")
        raise typer.Exit(0)

    config = load_config()

    try:
        summary = asyncio.run(run_from_config(config))
    except SourceError as e:
        if debug:
            typer.echo(f"Debug - Source error: {e!r}", err=True)
        else:
            typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1) from None

    for line in summary_lines(summary):
        typer.echo(line)
