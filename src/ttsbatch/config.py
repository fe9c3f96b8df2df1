"""Configuration management for ttsbatch.

Loads configuration from ./ttsbatch.toml (or $TTSBATCH_CONFIG).
Priority chain: env vars > config file > built-in defaults.
"""

import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "ttsbatch.toml"

DEFAULT_CONFIG = """\
# ttsbatch configuration

[endpoint]
# TTS endpoint, requested as {base_url}?voice={voice}&text={text}
base_url = "https://bryanharper.tokyo/_functions/tts"
voice = "sage"

[download]
# Maximum number of lines downloading at once
concurrency = 3

# Pause for pace_delay seconds after every pace_every dispatched lines (0 = never)
pace_every = 15
pace_delay = 8.0

# Wait before retrying a 429; multiplied by the attempt number when scaled
rate_limit_backoff = 300.0
scale_rate_limit_backoff = true

# Wait before retrying a 5xx, and how many times to retry (0 = forever)
server_error_backoff = 120.0
max_server_error_retries = 0

# Limit in seconds for one request, including reading the audio body
request_timeout = 60.0

[paths]
output_dir = "audio"
failure_log = "failed_lines.txt"

[source]
# HTML lesson files to scan for lines
files = ["game4.html"]

# Extra literal lines to synthesize
lines = []

# Drop cleaned lines this long or shorter
min_length = 1
"""


@dataclass(frozen=True)
class EndpointConfig:
    """Remote TTS endpoint configuration."""

    base_url: str
    voice: str


@dataclass(frozen=True)
class DownloadConfig:
    """Concurrency, pacing and retry configuration."""

    concurrency: int
    pace_every: int
    pace_delay: float
    rate_limit_backoff: float
    scale_rate_limit_backoff: bool
    server_error_backoff: float
    max_server_error_retries: int | None
    request_timeout: float


@dataclass(frozen=True)
class PathsConfig:
    """Output locations."""

    output_dir: Path
    failure_log: Path


@dataclass(frozen=True)
class SourceConfig:
    """Where the lines to synthesize come from."""

    files: tuple[Path, ...]
    lines: tuple[str, ...]
    min_length: int


@dataclass(frozen=True)
class TtsbatchConfig:
    """Top-level ttsbatch configuration."""

    endpoint: EndpointConfig
    download: DownloadConfig
    paths: PathsConfig
    source: SourceConfig


_cached_config: TtsbatchConfig | None = None


def get_config_path() -> Path:
    """Return the config file location ($TTSBATCH_CONFIG or ./ttsbatch.toml)."""
    override = os.getenv("TTSBATCH_CONFIG")
    if override:
        return Path(override)
    return Path.cwd() / CONFIG_FILENAME


def generate_config(path: Path | None = None) -> Path:
    """Write the default config file for editing."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG)
    return path


def parse_config(data: dict) -> TtsbatchConfig:
    """Build a validated config from parsed TOML, applying env overrides.

    Values missing from ``data`` fall back to DEFAULT_CONFIG. Env overrides
    are resolved before validation, so they are checked like file values.

    Raises:
        ValueError: If a value is out of range or of the wrong type
    """
    defaults = tomllib.loads(DEFAULT_CONFIG)

    def section(name: str) -> dict:
        table = data.get(name, {})
        if not isinstance(table, dict):
            raise ValueError(f"[{name}] must be a table, got {table!r}")
        merged = dict(defaults[name])
        merged.update(table)
        return merged

    endpoint = section("endpoint")
    download = section("download")
    paths = section("paths")
    source = section("source")

    base_url = str(os.getenv("TTSBATCH_BASE_URL", endpoint["base_url"]))
    voice = str(os.getenv("TTSBATCH_VOICE", endpoint["voice"]))
    output_dir = str(os.getenv("TTSBATCH_OUTPUT_DIR", paths["output_dir"]))
    failure_log = str(os.getenv("TTSBATCH_FAILURE_LOG", paths["failure_log"]))

    try:
        concurrency = int(os.getenv("TTSBATCH_CONCURRENCY", download["concurrency"]))
        pace_every = int(download["pace_every"])
        max_retries = int(download["max_server_error_retries"])
        files = tuple(Path(f) for f in source["files"])
        lines = tuple(str(line) for line in source["lines"])
        min_length = int(source["min_length"])
        timings = {
            name: float(download[name])
            for name in (
                "pace_delay",
                "rate_limit_backoff",
                "server_error_backoff",
                "request_timeout",
            )
        }
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid config value: {e}") from e

    # Validate ranges
    problems = []
    if concurrency < 1:
        problems.append("download.concurrency must be at least 1")
    if pace_every < 0:
        problems.append("download.pace_every cannot be negative")
    if max_retries < 0:
        problems.append("download.max_server_error_retries cannot be negative")
    if timings["request_timeout"] <= 0:
        problems.append("download.request_timeout must be positive")
    for name in ("pace_delay", "rate_limit_backoff", "server_error_backoff"):
        if timings[name] < 0:
            problems.append(f"download.{name} cannot be negative")
    for name, value in (
        ("endpoint.base_url", base_url),
        ("endpoint.voice", voice),
        ("paths.output_dir", output_dir),
        ("paths.failure_log", failure_log),
    ):
        if not value.strip():
            problems.append(f"{name} cannot be empty")
    if problems:
        raise ValueError("; ".join(problems))

    return TtsbatchConfig(
        endpoint=EndpointConfig(base_url=base_url, voice=voice),
        download=DownloadConfig(
            concurrency=concurrency,
            pace_every=pace_every,
            pace_delay=timings["pace_delay"],
            rate_limit_backoff=timings["rate_limit_backoff"],
            scale_rate_limit_backoff=bool(download["scale_rate_limit_backoff"]),
            server_error_backoff=timings["server_error_backoff"],
            max_server_error_retries=max_retries or None,
            request_timeout=timings["request_timeout"],
        ),
        paths=PathsConfig(output_dir=Path(output_dir), failure_log=Path(failure_log)),
        source=SourceConfig(files=files, lines=lines, min_length=min_length),
    )


def load_config() -> TtsbatchConfig:
    """Load configuration from the config file with env var overrides.

    Uses built-in defaults when no config file exists.

    Returns:
        Loaded and validated TtsbatchConfig.

    Raises:
        SystemExit: If the config file cannot be parsed or is invalid.
    """
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    config_path = get_config_path()
    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            print(f"Invalid TOML in {config_path}: {e}", file=sys.stderr)
            raise SystemExit(1) from None

    try:
        _cached_config = parse_config(data)
    except ValueError as e:
        print(f"Invalid config: {e}", file=sys.stderr)
        print(f"Edit {config_path} or delete it to use defaults.", file=sys.stderr)
        raise SystemExit(1) from None

    return _cached_config


def reset_config_cache() -> None:
    """Forget the memoised config (used by tests)."""
    global _cached_config
    _cached_config = None
