import pytest
import typer

from meshstack.cli.shared.console import CLIConsole, with_error_handling
from meshstack.errors import ToolInvocationFailed, UnknownTarget


def test_with_error_handling_handles_meshstack_error():
    @with_error_handling
    def _command() -> None:
        raise UnknownTarget("component", "nonexistent", ["istio"])

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_lets_other_errors_propagate():
    @with_error_handling
    def _command() -> None:
        raise ValueError("bug")

    with pytest.raises(ValueError):
        _command()


def test_handle_error_prints_to_stderr_without_markup(capsys):
    cli_console = CLIConsole()
    error = ToolInvocationFailed(
        target="grafana",
        category="Helm",
        argv=["helm", "install", "grafana", "grafana/grafana"],
        returncode=1,
        stdout="",
        stderr="Error: [repo] not found",
    )

    with pytest.raises(typer.Exit):
        cli_console.handle_error(error.message, error.details)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Helm command failed for grafana" in captured.err
    assert "[repo] not found" in captured.err


def test_plain_prints_command_lines_verbatim(capsys):
    CLIConsole().plain("DRY RUN: Would execute helm command: helm install [x] --values a.yaml")

    assert capsys.readouterr().out == (
        "DRY RUN: Would execute helm command: helm install [x] --values a.yaml\n"
    )
