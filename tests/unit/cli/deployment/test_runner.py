"""Tests for the command executors."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from meshstack.cli.deployment.shell_commands import CommandResult, CommandRunner, RecordingRunner, Tool
from meshstack.errors import ToolUnavailable


@patch("meshstack.cli.deployment.shell_commands.runner.subprocess.run")
def test_command_runner_captures_output(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(
        args=["helm", "version"], returncode=0, stdout="v3.14.0\n", stderr=""
    )

    result = CommandRunner(Path("/proj")).run(["helm", "version"])

    assert result == CommandResult(success=True, stdout="v3.14.0\n", stderr="", returncode=0)
    mock_run.assert_called_once_with(
        ["helm", "version"],
        cwd=Path("/proj"),
        capture_output=True,
        text=True,
        check=False,
    )


@patch("meshstack.cli.deployment.shell_commands.runner.subprocess.run")
def test_command_runner_reports_nonzero_exit(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(
        args=["helm"], returncode=2, stdout="", stderr="Error: nope"
    )

    result = CommandRunner(Path("/proj")).run(["helm", "install", "x", "y"])

    assert not result.success
    assert result.returncode == 2
    assert result.stderr == "Error: nope"


@patch("meshstack.cli.deployment.shell_commands.runner.subprocess.run")
def test_command_runner_missing_executable(mock_run):
    mock_run.side_effect = FileNotFoundError("helm")

    with pytest.raises(ToolUnavailable) as excinfo:
        CommandRunner(Path("/proj")).run(["helm", "version"])

    assert excinfo.value.message.startswith(
        "Helm is not installed or not found in PATH. Please install Helm to proceed."
    )


@patch("meshstack.cli.deployment.shell_commands.runner.shutil.which")
def test_ensure_available_uses_path_lookup(mock_which):
    mock_which.return_value = None

    with pytest.raises(ToolUnavailable) as excinfo:
        CommandRunner(Path("/proj")).ensure_available(Tool.DOCKER)

    assert excinfo.value.tool == "docker"
    mock_which.assert_called_once_with("docker")


@patch("meshstack.cli.deployment.shell_commands.runner.shutil.which")
def test_ensure_available_passes_when_found(mock_which):
    mock_which.return_value = "/usr/local/bin/helm"

    CommandRunner(Path("/proj")).ensure_available(Tool.HELM)


def test_recording_runner_longest_prefix_wins():
    runner = RecordingRunner(
        {
            ("helm",): CommandResult(True, "generic"),
            ("helm", "list"): CommandResult(True, "listing"),
        }
    )

    assert runner.run(["helm", "list", "--filter", "x"]).stdout == "listing"
    assert runner.run(["helm", "version"]).stdout == "generic"
    assert runner.run(["docker", "push", "x"]) == CommandResult(success=True)


def test_recording_runner_records_calls_and_missing_tools():
    runner = RecordingRunner(missing_tools=[Tool.KIND])
    runner.respond(["docker"], MagicMock(success=True))

    runner.run(["docker", "build", "-t", "a", "b"])
    runner.run(["helm", "version"])

    assert runner.calls_to("docker") == [("docker", "build", "-t", "a", "b")]
    assert len(runner.calls) == 2
    runner.ensure_available(Tool.HELM)
    with pytest.raises(ToolUnavailable):
        runner.ensure_available(Tool.KIND)
