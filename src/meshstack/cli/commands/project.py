"""Project lifecycle commands.

This module provides commands for creating a meshstack project,
validating it, and generating service and CI scaffolds.
"""

from pathlib import Path
from typing import Annotated

import typer

from meshstack.cli.deployment.shell_commands import CommandOptions, Tool, build
from meshstack.cli.scaffold import (
    create_overlays,
    create_project_dirs,
    generate_ci,
    generate_service,
    write_template_marker,
)
from meshstack.errors import ConfigMissing, PreconditionFailed, ToolInvocationFailed
from meshstack.infra.constants import DEFAULT_CONSTANTS
from meshstack.runtime.config.config_loader import build_config, load_config, save_config

from .shared import KubeContextOpt, get_cli_context, with_error_handling

# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value


@with_error_handling
def init(
    ctx: typer.Context,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Project name"),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", help="App language (rust, go, python, node)"),
    ] = None,
    mesh: Annotated[
        str | None,
        typer.Option("--mesh", help="Service mesh (istio, linkerd)"),
    ] = None,
    ci: Annotated[
        str | None,
        typer.Option("--ci", help="CI/CD flavour (github, gitlab, argo)"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Existing meshstack.yaml to copy into the project",
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """Initialize a new meshstack project.

    Writes meshstack.yaml, creates services/ and provision/, and adds empty
    dev/staging/prod values overlays.

    Examples:
        meshstack init --name acme --mesh linkerd
        meshstack init --config ./team-defaults.yaml
    """
    cli_ctx = get_cli_context(ctx)
    console = cli_ctx.console
    paths = cli_ctx.paths

    console.info("Initializing new meshstack project...")

    if config is not None:
        console.info(f"Using config from: {config}")
        if not config.is_file():
            raise ConfigMissing(f"{config} not found.")
        project = load_config(config)
    else:
        project = build_config(
            {
                "project_name": _or_default(name, DEFAULT_CONSTANTS.DEFAULT_PROJECT_NAME),
                "language": _or_default(language, DEFAULT_CONSTANTS.DEFAULT_LANGUAGE),
                "service_mesh": _or_default(mesh, DEFAULT_CONSTANTS.DEFAULT_SERVICE_MESH),
                "ci_cd": _or_default(ci, DEFAULT_CONSTANTS.DEFAULT_CI_CD),
            },
            source="init options",
        )

    if paths.config_yaml.is_file():
        console.warn(f"Overwriting existing {paths.config_yaml.name} at {paths.project_root}")
    paths.project_root.mkdir(parents=True, exist_ok=True)
    save_config(project, paths.config_yaml)
    console.ok(f"Created {paths.config_yaml.name}")

    for directory in create_project_dirs(paths):
        console.ok(f"Created directory: {directory.name}")
    for overlay in create_overlays(paths):
        console.ok(f"Created values overlay: {overlay.name}")
    write_template_marker(paths)

    console.print(
        f"\n[bold]{project.project_name}[/bold] is ready "
        f"(language={project.language}, mesh={project.service_mesh}, ci={project.ci_cd})."
    )
    console.print("[dim]Next: meshstack install, then meshstack generate service <name>[/dim]")


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


@with_error_handling
def validate(
    ctx: typer.Context,
    config: Annotated[
        bool,
        typer.Option("--config", help="Validate meshstack.yaml"),
    ] = False,
    cluster: Annotated[
        bool,
        typer.Option("--cluster", help="Check Kubernetes cluster connectivity"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Check the CI/CD manifest exists"),
    ] = False,
    full: Annotated[
        bool,
        typer.Option("--full", help="Run every check"),
    ] = False,
    kube_context: KubeContextOpt = None,
) -> None:
    """Validate project configuration, cluster access and CI manifests.

    Without flags only meshstack.yaml is checked.

    Examples:
        meshstack validate
        meshstack validate --cluster --context prod-ctx
        meshstack validate --full
    """
    cli_ctx = get_cli_context(ctx)
    console = cli_ctx.console
    paths = cli_ctx.paths

    check_config = config or full or not (cluster or ci)
    check_cluster = cluster or full
    check_ci = ci or full

    console.info("Validating project...")

    if check_config:
        console.info(f"Validating {paths.config_yaml.name}...")
        cli_ctx.load_config()
        console.ok(f"{paths.config_yaml.name} is valid.")

    if check_cluster:
        console.info("Checking Kubernetes cluster connectivity...")
        cli_ctx.executor.ensure_available(Tool.KUBECTL)
        argv = build(
            Tool.KUBECTL, "cluster-info", options=CommandOptions(kube_context=kube_context)
        )
        result = cli_ctx.executor.run(argv)
        if not result.success:
            raise ToolInvocationFailed(
                target=kube_context or "current context",
                category=Tool.KUBECTL.category,
                argv=argv,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        console.ok("Connected to Kubernetes cluster successfully.")

    if check_ci:
        console.info("Validating CI/CD manifests...")
        project = cli_ctx.load_config()
        manifest = paths.ci_manifest(project.ci_cd)
        if manifest is None:
            console.warn(f"No manifest location known for ci_cd '{project.ci_cd}'; skipping.")
        elif not manifest.is_file():
            relative = manifest.relative_to(paths.project_root).as_posix()
            raise PreconditionFailed(
                f"CI/CD manifest not found: {relative}",
                details="Run `meshstack generate ci` to create it.",
            )
        else:
            relative = manifest.relative_to(paths.project_root).as_posix()
            console.ok(f"CI/CD manifest present: {relative}")

    console.ok("Validation complete.")


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

generate_app = typer.Typer(
    help="Generate service and CI/CD scaffolds",
    no_args_is_help=True,
)


@generate_app.command("service")
@with_error_handling
def generate_service_cmd(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Service name (lowercase, dashes allowed)")],
) -> None:
    """Scaffold a service with a Dockerfile and Helm chart.

    Examples:
        meshstack generate service payments
    """
    cli_ctx = get_cli_context(ctx)
    project = cli_ctx.load_config()

    files = generate_service(cli_ctx.paths, project, name)
    cli_ctx.console.ok(f"Generated service '{name}' ({project.language}, {project.service_mesh}):")
    for path in files:
        cli_ctx.console.plain(f"  {path.relative_to(cli_ctx.paths.project_root).as_posix()}")


@generate_app.command("ci")
@with_error_handling
def generate_ci_cmd(ctx: typer.Context) -> None:
    """Generate the CI/CD manifest for the project's ci_cd setting.

    Examples:
        meshstack generate ci
    """
    cli_ctx = get_cli_context(ctx)
    project = cli_ctx.load_config()

    manifest = generate_ci(cli_ctx.paths, project)
    relative = manifest.relative_to(cli_ctx.paths.project_root).as_posix()
    cli_ctx.console.ok(f"Generated {project.ci_cd} manifest: {relative}")
