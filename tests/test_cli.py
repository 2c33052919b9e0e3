"""Tests for the ``linkcheck`` command.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer, so the real engine and
  prober run against canned responses.
- ``settings`` fields are monkeypatched so the host environment never leaks
  into a test.
"""

from __future__ import annotations

import httpx
import pytest
import respx
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Blank out env-derived settings for each test."""
    monkeypatch.setattr("linkcheck.config.settings.file_path", "")
    monkeypatch.setattr("linkcheck.config.settings.concurrent_workers", "")
    monkeypatch.setattr("linkcheck.config.settings.timeout_seconds", "")
    monkeypatch.setattr("linkcheck.config.settings.max_redirects", "")


@pytest.fixture
def doc(tmp_path):
    path = tmp_path / "README.md"
    path.write_text(
        "Start at https://ok.example.com/ and read [the docs](https://ok.example.com/docs).\n"
        "The old mirror https://down.example.com/files is gone.\n",
        encoding="utf-8",
    )
    return path


def test_reports_both_sections_and_fails_on_dead_link(doc) -> None:
    with respx.mock:
        respx.route(host="ok.example.com").mock(return_value=httpx.Response(200))
        respx.route(host="down.example.com").mock(side_effect=httpx.ConnectError("refused"))
        result = runner.invoke(app, [str(doc), "--workers", "2"])

    assert result.exit_code == 1
    working, invalid = result.stdout.split("❌ Invalid URLs:")
    assert "✅ Working URLs:" in working
    assert "- https://ok.example.com/\n" in working
    assert "- https://ok.example.com/docs\n" in working
    assert "- https://down.example.com/files" in invalid
    assert "Checked 3 link(s): 2 reachable, 1 unreachable." in result.stdout


def test_all_reachable_exits_zero(doc) -> None:
    with respx.mock:
        respx.route(host="ok.example.com").mock(return_value=httpx.Response(200))
        respx.route(host="down.example.com").mock(return_value=httpx.Response(200))
        result = runner.invoke(app, [str(doc)])

    assert result.exit_code == 0
    assert "0 unreachable" in result.stdout


def test_all_links_failing(tmp_path) -> None:
    path = tmp_path / "notes.md"
    path.write_text(
        "https://a.dead.example https://b.dead.example https://c.dead.example",
        encoding="utf-8",
    )
    with respx.mock:
        respx.route().mock(side_effect=httpx.ConnectError("refused"))
        result = runner.invoke(app, [str(path)])

    assert result.exit_code == 1
    assert "Checked 3 link(s): 0 reachable, 3 unreachable." in result.stdout


def test_file_path_from_settings(doc, monkeypatch) -> None:
    monkeypatch.setattr("linkcheck.config.settings.file_path", str(doc))
    with respx.mock:
        respx.route(host="ok.example.com").mock(return_value=httpx.Response(200))
        respx.route(host="down.example.com").mock(return_value=httpx.Response(200))
        result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "https://down.example.com/files" in result.stdout


def test_missing_path_is_usage_error() -> None:
    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Error: file_path value is required" in result.stdout
    assert "Working URLs" not in result.stdout


def test_unreadable_file(tmp_path) -> None:
    result = runner.invoke(app, [str(tmp_path / "missing.md")])

    assert result.exit_code == 1
    assert "Error reading file:" in result.stdout
    assert "Working URLs" not in result.stdout


def test_invalid_workers_warn_and_continue(tmp_path) -> None:
    path = tmp_path / "empty.md"
    path.write_text("No links here.", encoding="utf-8")

    result = runner.invoke(app, [str(path), "--workers", "zero", "--timeout=-1"])

    assert result.exit_code == 0
    assert "⚠️ Invalid concurrent_workers: zero" in result.stdout
    assert "ℹ️ Using default value of 30 for concurrent workers." in result.stdout
    assert "⚠️ Invalid timeout_seconds: -1" in result.stdout
    assert "Checked 0 link(s)" in result.stdout


def test_extraction_error_aborts(doc, monkeypatch) -> None:
    monkeypatch.setattr("linkcheck.extractor._LINK_PATTERN", "(broken")

    result = runner.invoke(app, [str(doc)])

    assert result.exit_code == 1
    assert result.stdout.startswith("Error: failed to compile link pattern")
    assert "Invalid URLs" not in result.stdout
