"""Tests for the check CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from littag.cli import cli


@pytest.fixture
def _age_config(tmp_path: Path) -> None:
    (tmp_path / "littag.toml").write_text(
        '[engine]\nunits = ["year"]\n'
        '[concepts]\nAge = ["Integer", "Nonnegative", "Unit<year>"]\n'
    )


@pytest.mark.usefixtures("_isolated_dir")
class TestCheckCommand:
    def test_trusted(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "Integer", "Nonnegative", "--value", "42"])
        assert result.exit_code == 0
        assert result.stdout.startswith("OK: check")
        assert "  trusted: True" in result.stdout

    def test_rejected_lists_every_failure(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "Integer", "Nonnegative", "--value=-3.5"])
        assert result.exit_code == 1
        assert result.stderr.splitlines() == [
            "REJECTED: check",
            "  Integer: expected integer, got -3.5",
            "  Nonnegative: expected >= 0, got -3.5",
        ]

    def test_fast_reports_one(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["check", "Integer", "Nonnegative", "--value=-3.5", "--fast"]
        )
        assert result.exit_code == 1
        assert "Integer" in result.stderr
        assert "Nonnegative" not in result.stderr

    def test_skipped_line(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "Positive", "--value", "abc"])
        assert result.exit_code == 1
        assert "  Number: expected number, got str" in result.stderr
        assert "  skipped: Positive" in result.stderr

    def test_huge_integer_literal(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "Finite", "Integer", "--value", "9" * 400])
        assert result.exit_code == 0
        assert "  trusted: True" in result.stdout

    def test_fast_and_all_conflict(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli, ["check", "Integer", "--value", "1", "--fast", "--all"]
        )
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "Integer", "--value", "3"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "check"
        assert data["data"]["value"] == 3
        assert data["data"]["concept"] == ["Finite", "Integer", "Number"]

    def test_json_rejection(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "check", "Integer", "--value", "3.5"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "REJECTED"
        assert data["error"]["detail"]["failures"] == [
            {"constraint": "Integer", "reason": "expected integer, got 3.5"}
        ]

    def test_unknown_constraint(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "Prime", "--value", "7"])
        assert result.exit_code == 1
        assert "ERROR: check - Constraint 'Prime' is not registered" in result.stderr

    @pytest.mark.usefixtures("_age_config")
    def test_concept_from_config(self, cli_runner: CliRunner) -> None:
        ok = cli_runner.invoke(cli, ["check", "Age", "--value", "42"])
        assert ok.exit_code == 0
        bad = cli_runner.invoke(cli, ["check", "Age", "--value", "3.5"])
        assert bad.exit_code == 1
        assert "  Integer: expected integer, got 3.5" in bad.stderr

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "--examples"])
        assert result.exit_code == 0
        assert "littag check Age --value -3.5" in result.output
