"""Infrastructure commands.

This module provides commands for installing and updating the platform
components (service mesh, monitoring, ingress, certificates, secrets) and
for bootstrapping a local cluster to run them on.
"""

import typer
from rich.table import Table

from meshstack.cli.deployment import (
    BootstrapRequest,
    ExecutionReport,
    InstallRequest,
    UpdateRequest,
)

from .shared import (
    ApplyOpt,
    CheckOpt,
    ClusterNameOpt,
    ComponentOpt,
    DryRunOpt,
    InfraOpt,
    InstallProfileOpt,
    KubeContextOpt,
    ProviderOpt,
    SkipInstallOpt,
    TemplateOpt,
    console,
    get_cli_context,
    run_operation,
    with_error_handling,
)


def render_updates(report: ExecutionReport) -> None:
    """Print the updates found by an update run as a table."""
    if not report.updates:
        console.ok("Everything is up to date.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Current")
    table.add_column("Latest")
    for info in report.updates:
        table.add_row(info.name, info.kind.value, info.current_version, info.latest_version)
    console.print(table)


@with_error_handling
def install(
    ctx: typer.Context,
    component: ComponentOpt = None,
    profile: InstallProfileOpt = None,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Install infrastructure components with Helm.

    Without --component the default set is installed: istio, prometheus,
    grafana, cert-manager and nginx-ingress.

    Examples:
        meshstack install
        meshstack install --component istio
        meshstack install --profile prod --context prod-ctx
        meshstack install --dry-run
    """
    cli_ctx = get_cli_context(ctx)
    report = run_operation(
        cli_ctx,
        "install",
        InstallRequest(component=component, profile=profile),
        kube_context=kube_context,
        dry_run=dry_run,
    )
    if not dry_run:
        console.ok(f"Installed {len(report.applied)} component(s).")


@with_error_handling
def update(
    ctx: typer.Context,
    check: CheckOpt = False,
    apply: ApplyOpt = False,
    component: ComponentOpt = None,
    template: TemplateOpt = False,
    infra: InfraOpt = False,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Check for (and optionally apply) chart and template updates.

    Without --apply updates are only reported. Without --template or
    --infra both kinds are checked.

    Examples:
        meshstack update
        meshstack update --infra --component grafana --apply
        meshstack update --template --apply
    """
    cli_ctx = get_cli_context(ctx)
    if check and apply:
        console.warn("--check and --apply given; applying updates.")

    report = run_operation(
        cli_ctx,
        "update",
        UpdateRequest(component=component, apply=apply, template=template, infra=infra),
        kube_context=kube_context,
        dry_run=dry_run,
    )
    render_updates(report)
    if report.updates and not apply:
        console.print("[dim]Run with --apply to apply these updates.[/dim]")


@with_error_handling
def bootstrap(
    ctx: typer.Context,
    provider: ProviderOpt = "kind",
    name: ClusterNameOpt = None,
    skip_install: SkipInstallOpt = False,
    profile: InstallProfileOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Create a local Kubernetes cluster and install the default components.

    Examples:
        meshstack bootstrap
        meshstack bootstrap --provider k3d --name dev
        meshstack bootstrap --skip-install --dry-run
    """
    cli_ctx = get_cli_context(ctx)
    report = run_operation(
        cli_ctx,
        "bootstrap",
        BootstrapRequest(
            provider=provider, name=name, profile=profile, skip_install=skip_install
        ),
        dry_run=dry_run,
    )
    if not dry_run:
        console.ok(f"Cluster {report.targets[0]} is ready.")
