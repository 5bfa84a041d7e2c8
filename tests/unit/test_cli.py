"""Unit tests for the command-line interface."""

import json
import logging

import pytest
from click.testing import CliRunner

from flyfit_coordination.cli import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Commands reconfigure logging; put the root logger back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def parse_output(output: str) -> dict:
    """Parse the JSON document printed by a demo command, skipping log lines."""
    start = output.index("{\n")
    end = output.index("\n}", start) + 2
    return json.loads(output[start:end])


class TestQueueDemoCommand:
    """Test queue-demo command."""

    def test_completion_order(self, runner):
        """Test the printed completion order."""
        result = runner.invoke(cli, ["--no-metrics", "queue-demo", "--operations", "3", "--delay", "0.005"])

        assert result.exit_code == 0, result.output
        data = parse_output(result.output)
        assert data["completed"] == [1, 2, 3]

    def test_abort_after(self, runner):
        """Test --abort-after reports aborted operations."""
        result = runner.invoke(
            cli,
            ["--no-metrics", "queue-demo", "--operations", "4", "--delay", "0.005", "--abort-after", "1"],
        )

        assert result.exit_code == 0, result.output
        data = parse_output(result.output)
        assert data["completed"] == [1]
        assert data["aborted"] == [2, 3, 4]

    def test_show_metrics(self, runner):
        """Test --show-metrics prints the Prometheus exposition."""
        result = runner.invoke(
            cli, ["queue-demo", "--operations", "2", "--delay", "0.001", "--show-metrics"]
        )

        assert result.exit_code == 0, result.output
        assert "flyfit_coordination_operations_total" in result.output


class TestDebounceDemoCommand:
    """Test debounce-demo command."""

    def test_single_execution(self, runner):
        """Test a burst prints a single execution."""
        result = runner.invoke(
            cli, ["--no-metrics", "debounce-demo", "--calls", "4", "--debounce-delay", "0.02"]
        )

        assert result.exit_code == 0, result.output
        assert parse_output(result.output) == {"calls": 4, "executed": [4]}


class TestGuardDemoCommand:
    """Test guard-demo command."""

    @pytest.mark.parametrize(
        "mode,executed",
        [("drop", [1]), ("latest", [1, 3]), ("queue", [1, 2, 3])],
    )
    def test_modes(self, runner, mode, executed):
        """Test each mode's executed calls."""
        result = runner.invoke(
            cli,
            ["--no-metrics", "guard-demo", "--mode", mode, "--calls", "3", "--delay", "0.005"],
        )

        assert result.exit_code == 0, result.output
        assert parse_output(result.output)["executed"] == executed

    def test_invalid_mode(self, runner):
        """Test click rejects unknown modes."""
        result = runner.invoke(cli, ["guard-demo", "--mode", "parallel"])
        assert result.exit_code != 0


class TestConfigCommand:
    """Test config command."""

    def test_display(self, runner, monkeypatch):
        """Test the resolved configuration is printed."""
        monkeypatch.setenv("FLYFIT_GUARD_MODE", "queue")

        result = runner.invoke(cli, ["--log-format", "text", "config"])

        assert result.exit_code == 0, result.output
        assert "Mode: queue" in result.output
        assert "Format: text" in result.output

    def test_invalid_env_value(self, runner, monkeypatch):
        """Test an invalid environment value exits with an error."""
        monkeypatch.setenv("FLYFIT_LOG_FORMAT", "xml")

        result = runner.invoke(cli, ["config"])

        assert result.exit_code == 1
        assert "Invalid log format" in result.output
