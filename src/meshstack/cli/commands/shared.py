"""Shared utilities for CLI commands.

This module provides the option declarations reused by the operation
commands and their `plan` counterparts, plus small helpers for running
or previewing an operation from a command.
"""

from typing import Annotated, Any

import typer

from meshstack.cli.context import CLIContext, get_cli_context
from meshstack.cli.deployment import ExecutionReport, Orchestrator, Planner
from meshstack.cli.shared.console import console, with_error_handling
from meshstack.infra.constants import DEFAULT_CONSTANTS

__all__ = [
    "console",
    "get_cli_context",
    "run_operation",
    "preview_operation",
    "with_error_handling",
]

# ---------------------------------------------------------------------------
# Common options
# ---------------------------------------------------------------------------

KubeContextOpt = Annotated[
    str | None,
    typer.Option(
        "--context",
        "--kube-context",
        help="Kubernetes context to target",
    ),
]
DryRunOpt = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Print the commands that would run instead of running them",
    ),
]

# install / bootstrap
ComponentOpt = Annotated[
    str | None,
    typer.Option(
        "--component",
        "-c",
        help="Component to act on (istio, prometheus, grafana, cert-manager, nginx-ingress, vault)",
    ),
]
InstallProfileOpt = Annotated[
    str | None,
    typer.Option(
        "--profile",
        "-p",
        help="Values profile to apply (dev, prod)",
    ),
]

# deploy / destroy
ServiceOpt = Annotated[
    str | None,
    typer.Option(
        "--service",
        "-s",
        help="Service under services/ to act on (default: all)",
    ),
]
EnvOpt = Annotated[
    str | None,
    typer.Option(
        "--env",
        "-e",
        help="Environment profile to apply (dev, staging, prod)",
    ),
]
BuildOpt = Annotated[
    bool,
    typer.Option("--build", help="Build the Docker image before deploying"),
]
PushOpt = Annotated[
    bool,
    typer.Option("--push", help="Push the Docker image before deploying"),
]
RegistryOpt = Annotated[
    str,
    typer.Option(
        "--registry",
        "-r",
        envvar="MESHSTACK_REGISTRY",
        help="Image registry prefix for build and push",
    ),
]
FullOpt = Annotated[
    bool,
    typer.Option(
        "--full",
        "--all",
        help="Destroy every discovered service and all infrastructure components",
    ),
]
ConfirmOpt = Annotated[
    bool,
    typer.Option(
        "--confirm",
        "-y",
        help="Confirm destruction; without it nothing is uninstalled",
    ),
]

# update
CheckOpt = Annotated[
    bool,
    typer.Option("--check", help="Only report available updates (default)"),
]
ApplyOpt = Annotated[
    bool,
    typer.Option("--apply", help="Apply available updates"),
]
TemplateOpt = Annotated[
    bool,
    typer.Option("--template", help="Only check project templates"),
]
InfraOpt = Annotated[
    bool,
    typer.Option("--infra", help="Only check infrastructure charts"),
]

# status
ComponentsFlag = Annotated[
    bool,
    typer.Option("--components", help="Show infrastructure components"),
]
ServicesFlag = Annotated[
    bool,
    typer.Option("--services", help="Show application services"),
]

# bootstrap
ProviderOpt = Annotated[
    str,
    typer.Option("--provider", help="Local cluster provisioner (kind, k3d)"),
]
ClusterNameOpt = Annotated[
    str | None,
    typer.Option("--name", "-n", help="Cluster name (default: project name)"),
]
SkipInstallOpt = Annotated[
    bool,
    typer.Option("--skip-install", help="Create the cluster only"),
]

DEFAULT_REGISTRY = DEFAULT_CONSTANTS.DEFAULT_REGISTRY


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def run_operation(
    cli_ctx: CLIContext,
    operation: str,
    request: Any,
    *,
    kube_context: str | None = None,
    dry_run: bool = False,
) -> ExecutionReport:
    """Resolve and execute an operation with the CLI's executor."""
    exec_ctx = cli_ctx.execution_context(kube_context=kube_context, dry_run=dry_run)
    return Orchestrator(cli_ctx.console).run(operation, request, exec_ctx)


def preview_operation(
    cli_ctx: CLIContext,
    operation: str,
    request: Any,
    *,
    kube_context: str | None = None,
    dry_run: bool = False,
) -> list[str]:
    """Resolve an operation and print its plan without executing anything."""
    exec_ctx = cli_ctx.execution_context(kube_context=kube_context, dry_run=dry_run)
    lines = Planner().preview(operation, request, exec_ctx)
    for line in lines:
        cli_ctx.console.plain(line)
    return lines
