"""Plan preview commands.

Each subcommand takes the same options as the operation it previews and
prints the resolved plan, one ``PLAN:`` line per decision. Nothing is
executed.
"""

import typer

from meshstack.cli.deployment import (
    BootstrapRequest,
    DeployRequest,
    DestroyRequest,
    InstallRequest,
    StatusRequest,
    UpdateRequest,
)

from .shared import (
    DEFAULT_REGISTRY,
    ApplyOpt,
    BuildOpt,
    ClusterNameOpt,
    ComponentOpt,
    ComponentsFlag,
    ConfirmOpt,
    DryRunOpt,
    EnvOpt,
    FullOpt,
    InfraOpt,
    InstallProfileOpt,
    KubeContextOpt,
    ProviderOpt,
    PushOpt,
    RegistryOpt,
    ServiceOpt,
    ServicesFlag,
    SkipInstallOpt,
    TemplateOpt,
    get_cli_context,
    preview_operation,
    with_error_handling,
)

plan_app = typer.Typer(
    help="Preview what an operation would do without running anything",
    no_args_is_help=True,
)


@plan_app.command("install")
@with_error_handling
def plan_install(
    ctx: typer.Context,
    component: ComponentOpt = None,
    profile: InstallProfileOpt = None,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Preview `meshstack install`."""
    preview_operation(
        get_cli_context(ctx),
        "install",
        InstallRequest(component=component, profile=profile),
        kube_context=kube_context,
        dry_run=dry_run,
    )


@plan_app.command("deploy")
@with_error_handling
def plan_deploy(
    ctx: typer.Context,
    service: ServiceOpt = None,
    env: EnvOpt = None,
    build: BuildOpt = False,
    push: PushOpt = False,
    registry: RegistryOpt = DEFAULT_REGISTRY,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Preview `meshstack deploy`."""
    preview_operation(
        get_cli_context(ctx),
        "deploy",
        DeployRequest(service=service, env=env, build=build, push=push, registry=registry),
        kube_context=kube_context,
        dry_run=dry_run,
    )


@plan_app.command("destroy")
@with_error_handling
def plan_destroy(
    ctx: typer.Context,
    service: ServiceOpt = None,
    component: ComponentOpt = None,
    full: FullOpt = False,
    kube_context: KubeContextOpt = None,
    confirm: ConfirmOpt = False,
    dry_run: DryRunOpt = False,
) -> None:
    """Preview `meshstack destroy`."""
    preview_operation(
        get_cli_context(ctx),
        "destroy",
        DestroyRequest(service=service, component=component, full=full, confirm=confirm),
        kube_context=kube_context,
        dry_run=dry_run,
    )


@plan_app.command("update")
@with_error_handling
def plan_update(
    ctx: typer.Context,
    apply: ApplyOpt = False,
    component: ComponentOpt = None,
    template: TemplateOpt = False,
    infra: InfraOpt = False,
    kube_context: KubeContextOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Preview `meshstack update`."""
    preview_operation(
        get_cli_context(ctx),
        "update",
        UpdateRequest(component=component, apply=apply, template=template, infra=infra),
        kube_context=kube_context,
        dry_run=dry_run,
    )


@plan_app.command("status")
@with_error_handling
def plan_status(
    ctx: typer.Context,
    components: ComponentsFlag = False,
    services: ServicesFlag = False,
    kube_context: KubeContextOpt = None,
) -> None:
    """Preview `meshstack status`."""
    preview_operation(
        get_cli_context(ctx),
        "status",
        StatusRequest(components=components, services=services),
        kube_context=kube_context,
    )


@plan_app.command("bootstrap")
@with_error_handling
def plan_bootstrap(
    ctx: typer.Context,
    provider: ProviderOpt = "kind",
    name: ClusterNameOpt = None,
    skip_install: SkipInstallOpt = False,
    profile: InstallProfileOpt = None,
    dry_run: DryRunOpt = False,
) -> None:
    """Preview `meshstack bootstrap`."""
    preview_operation(
        get_cli_context(ctx),
        "bootstrap",
        BootstrapRequest(
            provider=provider, name=name, profile=profile, skip_install=skip_install
        ),
        dry_run=dry_run,
    )
