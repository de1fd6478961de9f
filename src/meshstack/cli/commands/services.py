"""Service and release commands.

This module provides commands for deploying application services,
tearing down services and components, and showing release status.
"""

import typer
from rich.table import Table

from meshstack.cli.deployment import (
    DeployRequest,
    DestroyRequest,
    ExecutionReport,
    ReleaseStatus,
    StatusRequest,
)

from .shared import (
    DEFAULT_REGISTRY,
    BuildOpt,
    ComponentOpt,
    ComponentsFlag,
    ConfirmOpt,
    DryRunOpt,
    EnvOpt,
    FullOpt,
    KubeContextOpt,
    PushOpt,
    RegistryOpt,
    ServiceOpt,
    ServicesFlag,
    console,
    get_cli_context,
    run_operation,
    with_error_handling,
)

_STATE_STYLES = {
    "deployed": "green",
    "not installed": "dim",
    "unknown": "yellow",
}


def _state(status: ReleaseStatus) -> str:
    style = _STATE_STYLES.get(status.state, "red")
    return f"[{style}]{status.state}[/{style}]"


def _flag(value: bool | None) -> str:
    return "[green]✓[/green]" if value else "[red]✗[/red]"


def render_status(report: ExecutionReport) -> None:
    """Print component and service release states as tables."""
    components = [s for s in report.statuses if s.kind == "component"]
    services = [s for s in report.statuses if s.kind == "service"]

    if components:
        table = Table(title="Infrastructure components", show_header=True, header_style="bold")
        table.add_column("Component")
        table.add_column("State")
        table.add_column("Chart")
        table.add_column("Revision", justify="right")
        table.add_column("Namespace")
        for status in components:
            release = status.release
            table.add_row(
                status.target,
                _state(status),
                release.chart if release else "-",
                release.revision if release else "-",
                release.namespace if release else "-",
            )
        console.print(table)

    if services:
        table = Table(title="Application services", show_header=True, header_style="bold")
        table.add_column("Service")
        table.add_column("Release")
        table.add_column("Dockerfile", justify="center")
        table.add_column("Chart", justify="center")
        table.add_column("State")
        for status in services:
            table.add_row(
                status.target,
                status.release_name,
                _flag(status.buildable),
                _flag(status.deployable),
                _state(status),
            )
        console.print(table)


@with_error_handling
def deploy(
    ctx: typer.Context,
    service: ServiceOpt = None,
    env: EnvOpt = None,
    build: BuildOpt = False,
    push: PushOpt = False,
    registry: RegistryOpt = DEFAULT_REGISTRY,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Deploy application services with Helm.

    Each service under services/ is optionally built and pushed, then
    installed or upgraded as release meshstack-<service>.

    Examples:
        meshstack deploy
        meshstack deploy --service api --build --push --env prod
        meshstack deploy --registry ghcr.io/acme --dry-run
    """
    cli_ctx = get_cli_context(ctx)
    report = run_operation(
        cli_ctx,
        "deploy",
        DeployRequest(service=service, env=env, build=build, push=push, registry=registry),
        kube_context=kube_context,
        dry_run=dry_run,
    )
    if report.targets and not dry_run:
        console.ok("Deployment process completed.")


@with_error_handling
def destroy(
    ctx: typer.Context,
    service: ServiceOpt = None,
    component: ComponentOpt = None,
    full: FullOpt = False,
    kube_context: KubeContextOpt = None,
    confirm: ConfirmOpt = False,
    dry_run: DryRunOpt = False,
) -> None:
    """Uninstall services and infrastructure components.

    Nothing is uninstalled without --confirm; the targets are listed instead.

    Examples:
        meshstack destroy --service api --confirm
        meshstack destroy --component vault --confirm
        meshstack destroy --full --confirm
    """
    cli_ctx = get_cli_context(ctx)
    report = run_operation(
        cli_ctx,
        "destroy",
        DestroyRequest(service=service, component=component, full=full, confirm=confirm),
        kube_context=kube_context,
        dry_run=dry_run,
    )
    if report.confirmed and report.applied:
        console.ok(f"Destroyed {len(report.applied)} release(s).")


@with_error_handling
def status(
    ctx: typer.Context,
    components: ComponentsFlag = False,
    services: ServicesFlag = False,
    kube_context: KubeContextOpt = None,
) -> None:
    """Show installed components and deployed services.

    Examples:
        meshstack status
        meshstack status --services --context prod-ctx
    """
    cli_ctx = get_cli_context(ctx)
    console.print_header("meshstack status")
    report = run_operation(
        cli_ctx,
        "status",
        StatusRequest(components=components, services=services),
        kube_context=kube_context,
    )
    render_status(report)
