"""Entry point for ``python -m ttsbatch`` and the ``ttsbatch`` console script.

Reads ./ttsbatch.toml (or $TTSBATCH_CONFIG), downloads the missing clips and
prints a run summary. Exits 1 when a lesson file is missing or the config is
invalid.
"""

from .cli import app


def main() -> None:
    """Run the ttsbatch CLI."""
    app(prog_name="ttsbatch")


if __name__ == "__main__":
    main()
