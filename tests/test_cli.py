"""CLI integration tests for cubetimer."""

import importlib
import json
from collections.abc import AsyncIterator, Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cubetimer.cli import app

# ``cubetimer.commands`` re-exports the ``attempt`` function, which shadows the
# submodule of the same name for dotted-string lookups, so patch the module object.
attempt_module = importlib.import_module("cubetimer.commands.attempt")


def fake_stdin(*lines: str) -> Callable[[], AsyncIterator[str]]:
    """Build a replacement for stdin_lines that yields ``lines`` then EOF."""

    async def _lines() -> AsyncIterator[str]:
        for line in lines:
            yield line

    return _lines


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "cubetimer" / "config.toml"


class TestVersionCommand:
    """Tests for --version flag."""

    def test_version_shows_version(self, runner: CliRunner) -> None:
        """--version should display version string."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "cubetimer" in result.stdout
        assert "0.1.0" in result.stdout

    def test_version_short_flag(self, runner: CliRunner) -> None:
        """-V should also display version."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "cubetimer" in result.stdout


class TestHelpCommand:
    """Tests for --help flag."""

    def test_help_shows_commands(self, runner: CliRunner) -> None:
        """--help should list all available commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "init" in result.stdout
        assert "show-config" in result.stdout
        assert "attempt" in result.stdout

    def test_attempt_help_lists_options(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["attempt", "--help"])
        assert result.exit_code == 0
        assert "--no-inspect" in result.stdout
        assert "--time-limit" in result.stdout


class TestGlobalOptions:
    """Tests for global CLI options."""

    def test_verbose_flag_accepted(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-v", "--help"])
        assert result.exit_code == 0

    def test_quiet_flag_accepted(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["-q", "--help"])
        assert result.exit_code == 0

    def test_json_flag_accepted(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--json", "--help"])
        assert result.exit_code == 0


class TestInitCommand:
    """Tests for the init command."""

    def test_creates_config(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["--no-color", "init", "--config", str(config_path)])
        assert result.exit_code == 0
        assert config_path.exists()
        assert "interval = 100" in config_path.read_text()

    def test_existing_config_is_kept(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[timer]\ninterval = 50\n")

        result = runner.invoke(app, ["--no-color", "init", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "already exists" in result.output
        assert "interval = 50" in config_path.read_text()

    def test_force_overwrites(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[timer]\ninterval = 50\n")

        result = runner.invoke(
            app, ["--no-color", "init", "--config", str(config_path), "--force"]
        )
        assert result.exit_code == 0
        assert "interval = 100" in config_path.read_text()

    def test_json_output(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["--json", "init", "--config", str(config_path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["config"] == str(config_path)
        assert data["created"] is True


class TestShowConfigCommand:
    """Tests for the show-config command."""

    def test_defaults_when_missing(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["--json", "show-config", "--config", str(config_path)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["source"] == "defaults"
        assert data["timer"] == {"interval": 100, "no_inspect": False, "time_limit": 600}
        assert data["display"] == {"decimals": 2}

    def test_reads_file(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[timer]\nno_inspect = true\n\n[display]\ndecimals = 3\n")

        result = runner.invoke(app, ["--no-color", "show-config", "--config", str(config_path)])
        assert result.exit_code == 0
        assert "Inspection: off" in result.output
        assert "Decimals: 3" in result.output

    def test_invalid_config_fails(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[display]\ndecimals = 7\n")

        result = runner.invoke(app, ["--no-color", "show-config", "--config", str(config_path)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestAttemptCommand:
    """Tests for the attempt command with scripted stdin."""

    def _invoke(self, runner: CliRunner, config_path: Path, *args: str):
        return runner.invoke(
            app,
            ["--json", "--quiet", "--no-color", "attempt", "--config", str(config_path), *args],
        )

    def test_no_inspect_solve(
        self, runner: CliRunner, config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(attempt_module, "stdin_lines", fake_stdin("\n", "\n"))

        result = self._invoke(runner, config_path, "--no-inspect", "--interval", "10")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["isDNF"] is False
        assert data["aborted"] is False
        assert data["inspectionTime"] is None
        assert data["solveTime"] >= 0

    def test_inspection_then_solve(
        self, runner: CliRunner, config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            attempt_module, "stdin_lines", fake_stdin("\n", "\n", "\n")
        )

        result = self._invoke(runner, config_path)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["isDNF"] is False
        assert data["penalized"] is False
        assert 0 <= data["inspectionTime"] < 17_000

    def test_abort_word(
        self, runner: CliRunner, config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(attempt_module, "stdin_lines", fake_stdin("\n", "a\n"))

        result = self._invoke(runner, config_path, "--no-inspect")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["aborted"] is True
        assert data["isDNF"] is True

    def test_no_input(
        self, runner: CliRunner, config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(attempt_module, "stdin_lines", fake_stdin())

        result = runner.invoke(
            app, ["--no-color", "attempt", "--config", str(config_path), "--no-inspect"]
        )
        assert result.exit_code == 0
        assert "No attempt started" in result.output

    def test_text_result(
        self, runner: CliRunner, config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(attempt_module, "stdin_lines", fake_stdin("\n", "\n"))

        result = runner.invoke(
            app,
            ["--quiet", "--no-color", "attempt", "--config", str(config_path), "--no-inspect"],
        )
        assert result.exit_code == 0
        assert "Result:" in result.output

    def test_invalid_config(self, runner: CliRunner, config_path: Path) -> None:
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[timer]\ninterval = 0\n")

        result = self._invoke(runner, config_path)
        assert result.exit_code == 1
        assert "Invalid configuration" in json.loads(result.stdout)["error"]

    def test_rejects_bad_interval_option(self, runner: CliRunner, config_path: Path) -> None:
        result = self._invoke(runner, config_path, "--interval", "0")
        assert result.exit_code == 2
