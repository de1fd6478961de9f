"""Tests for the console fallback used outside the CLI."""

from dataclasses import replace

from meshstack.cli.deployment import InstallRequest, Orchestrator
from meshstack.utils.console_like import StdoutConsole, coalesce_console


def test_coalesce_keeps_given_console():
    console = StdoutConsole()

    assert coalesce_console(console) is console
    assert isinstance(coalesce_console(None), StdoutConsole)


def test_stdout_console_splits_streams(capsys):
    console = StdoutConsole()

    console.info("Installing istio...")
    console.warn("Values file prod-values.yaml not found")

    captured = capsys.readouterr()
    assert captured.out == "Installing istio...\n"
    assert captured.err == "warning: Values file prod-values.yaml not found\n"


def test_orchestrator_without_console_prints_dry_run_lines(exec_ctx, capsys):
    Orchestrator().run(
        "install", InstallRequest(component="istio"), replace(exec_ctx, dry_run=True)
    )

    assert (
        "DRY RUN: Would execute helm command: helm install istio istio/istio --dry-run"
        in capsys.readouterr().out
    )
