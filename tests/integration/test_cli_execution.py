"""Integration tests for CLI execution."""

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import httpx
from typer.testing import CliRunner

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from ttsbatch.cli import app
from ttsbatch.config import get_config_path
from ttsbatch.tts.client import TTSClient

# Project root for running tests
PROJECT_ROOT = Path(__file__).parent.parent.parent

runner = CliRunner()


def mock_client(base_url: str, voice: str, timeout: float) -> TTSClient:
    """TTSClient answering every request with a small MP3 body."""
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, content=b"ID3audio")
        )
    )
    return TTSClient(base_url, voice, timeout=timeout, client=http)


def test_cli_shows_help() -> None:
    """Test that CLI shows help when --help flag used."""
    cmd = [sys.executable, "-m", "ttsbatch", "--help"]

    result = subprocess.run(
        cmd,
        cwd=PROJECT_ROOT,
        env={**os.environ, "PYTHONPATH": str(PROJECT_ROOT / "src")},
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "Download every missing audio clip" in result.stdout


def test_missing_source_exits_non_zero(tmp_path, monkeypatch) -> None:
    """Test that a missing lesson file exits 1 before any download."""
    monkeypatch.chdir(tmp_path)

    with patch("ttsbatch.core.TTSClient", side_effect=mock_client) as client_cls:
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Missing game4.html" in result.output
    client_cls.assert_not_called()
    assert not (tmp_path / "audio").exists()


def test_empty_endpoint_override_is_config_error(tmp_path, monkeypatch) -> None:
    """Test that an empty TTSBATCH_BASE_URL is reported, not raised."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TTSBATCH_BASE_URL", "")
    (tmp_path / "game4.html").write_text('"Hello there."', encoding="utf-8")

    with patch("ttsbatch.core.TTSClient", side_effect=mock_client) as client_cls:
        result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Invalid config: endpoint.base_url cannot be empty" in result.output
    assert not isinstance(result.exception, ValueError)
    client_cls.assert_not_called()


def test_run_downloads_and_reports_summary(tmp_path, monkeypatch) -> None:
    """Test that a full run saves clips and prints the summary."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "game4.html").write_text(
        '<script>const qs = [{ q:"How are you", a:"I am fine." }];</script>',
        encoding="utf-8",
    )
    get_config_path().write_text("[download]\npace_every = 0\n")

    with patch("ttsbatch.core.TTSClient", side_effect=mock_client):
        result = runner.invoke(app, [])

    assert result.exit_code == 0, result.output
    assert "Saved 2 new clips" in result.output
    assert (tmp_path / "audio" / "howareyou.mp3").exists()
    assert (tmp_path / "audio" / "iamfine.mp3").exists()
    assert (tmp_path / "failed_lines.txt").read_text(encoding="utf-8") == ""


def test_init_config_writes_default_file() -> None:
    """Test that --init-config writes the config and exits 0."""
    result = runner.invoke(app, ["--init-config"])

    assert result.exit_code == 0
    assert get_config_path().exists()
    assert "[download]" in get_config_path().read_text()

    again = runner.invoke(app, ["--init-config"])
    assert "Config already exists" in again.output
