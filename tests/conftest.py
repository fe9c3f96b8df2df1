"""Pytest configuration and fixtures for ttsbatch tests."""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src and tests to path so helpers import the same way everywhere
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from test_helpers import RecordingSleep


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path) -> Generator[None]:
    """Keep every test away from the real config file and env overrides."""
    from ttsbatch.config import reset_config_cache

    for name in (
        "TTSBATCH_BASE_URL",
        "TTSBATCH_VOICE",
        "TTSBATCH_CONCURRENCY",
        "TTSBATCH_OUTPUT_DIR",
        "TTSBATCH_FAILURE_LOG",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TTSBATCH_CONFIG", str(tmp_path / "ttsbatch.toml"))

    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Sleep replacement that records requested waits."""
    return RecordingSleep()


@pytest.fixture
def audio_dir(tmp_path) -> Path:
    """Empty artifact directory."""
    return tmp_path / "audio"


@pytest.fixture
def failure_log_path(tmp_path) -> Path:
    """Failure log location inside the test's temp dir."""
    return tmp_path / "failed_lines.txt"
