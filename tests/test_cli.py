"""Tests for the command-line interface."""

import tempfile
from pathlib import Path

from click.testing import CliRunner

from strikeguard.cli import main


def _run(tmpdir: str, *args: str):
    runner = CliRunner()
    return runner.invoke(main, ["--data-dir", tmpdir, *args])


def test_scan_and_status():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "scan", "u1", "you're stupid")
        assert result.exit_code == 0, result.output
        assert "Harmful content detected" in result.output
        assert "Blocked" in result.output

        result = _run(tmpdir, "status", "u1")
        assert result.exit_code == 0, result.output
        assert "Strike points: 3 / 12" in result.output
        assert "Strikes (1)" in result.output


def test_dry_run_records_nothing():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "scan", "--dry-run", "u1", "malware")
        assert result.exit_code == 0, result.output
        assert "Preview" in result.output

        result = _run(tmpdir, "status", "u1")
        assert "No strikes or warnings" in result.output


def test_oversized_content_is_rejected():
    with tempfile.TemporaryDirectory() as tmpdir:
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["--data-dir", tmpdir, "scan", "u1", "x" * 50],
            env={"STRIKEGUARD_MAX_CONTENT_LENGTH": "10"},
        )
        assert result.exit_code == 1
        assert "Content rejected" in result.output


def test_sweep_with_nothing_to_lift():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "sweep", "u1")
        assert result.exit_code == 0
        assert "Nothing to lift" in result.output


def test_rules_and_guidelines():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "rules")
        assert result.exit_code == 0, result.output
        assert "cybercrime" in result.output

        result = _run(tmpdir, "guidelines")
        assert result.exit_code == 0
        assert "Community Guidelines" in result.output


def test_tier_command():
    with tempfile.TemporaryDirectory() as tmpdir:
        result = _run(tmpdir, "tier", "6")
        assert result.exit_code == 0
        assert "restriction" in result.output


def test_audit_json_export():
    with tempfile.TemporaryDirectory() as tmpdir:
        _run(tmpdir, "scan", "u1", "flat earth")
        result = _run(tmpdir, "audit", "--format", "json")
        assert result.exit_code == 0, result.output
        assert "moderation.warning" in result.output


def test_missing_catalog_fails_closed():
    with tempfile.TemporaryDirectory() as tmpdir:
        missing = Path(tmpdir) / "missing.yaml"
        (Path(tmpdir) / "settings.yaml").write_text(f"catalog: {missing}\n")

        result = _run(tmpdir, "scan", "u1", "hello")
        assert result.exit_code == 1
        assert "could not be verified" in result.output

        result = _run(tmpdir, "status", "u1")
        assert result.exit_code == 1
        assert "Cannot read account" in result.output
