"""Target resolution and command planning.

One resolver per operation turns a request plus an ExecutionContext into
an OperationPlan. Resolvers read the filesystem (services, descriptors,
overlay files, config) but never spawn processes, and they raise every
validation error before a plan exists. The orchestrator and the planner
both go through :func:`resolve_plan`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from meshstack.errors import PreconditionFailed, ServiceArtifactMissing
from meshstack.infra import catalog, profiles
from meshstack.infra.constants import DEFAULT_CONSTANTS
from meshstack.infra.services import describe_service, discover, list_services, select_services

from .execution import ExecutionContext
from .plan import (
    EnsureClusterStep,
    NoticeStep,
    OperationPlan,
    PlanStep,
    ReleaseStatusStep,
    TemplateUpdateStep,
    ToolStep,
    UpdateCheckStep,
    WarningStep,
)
from .shell_commands import Tool, build, get_provider

# =============================================================================
# Requests
# =============================================================================


@dataclass(frozen=True)
class InstallRequest:
    component: str | None = None
    profile: str | None = None


@dataclass(frozen=True)
class DeployRequest:
    service: str | None = None
    env: str | None = None
    build: bool = False
    push: bool = False
    registry: str = DEFAULT_CONSTANTS.DEFAULT_REGISTRY


@dataclass(frozen=True)
class DestroyRequest:
    service: str | None = None
    component: str | None = None
    full: bool = False
    confirm: bool = False


@dataclass(frozen=True)
class UpdateRequest:
    component: str | None = None
    apply: bool = False
    template: bool = False
    infra: bool = False


@dataclass(frozen=True)
class StatusRequest:
    components: bool = False
    services: bool = False


@dataclass(frozen=True)
class BootstrapRequest:
    provider: str = "kind"
    name: str | None = None
    profile: str | None = None
    skip_install: bool = False


# =============================================================================
# Helpers
# =============================================================================


def _overlay_or_warning(
    values_file: str | None, ctx: ExecutionContext, steps: list[PlanStep]
) -> str | None:
    """Keep a resolved overlay only if it exists on disk.

    A missing overlay is reported and the --values flag is omitted.
    """
    if values_file is None:
        return None
    if ctx.paths.overlay(values_file).is_file():
        return values_file
    message = f"Values file {values_file} not found; continuing without --values"
    logger.debug(message)
    steps.append(WarningStep(message))
    return None


def _relative(ctx: ExecutionContext, service: str) -> str:
    path = ctx.paths.service_dir(service)
    return path.relative_to(ctx.paths.project_root).as_posix()


# =============================================================================
# Resolvers
# =============================================================================


def resolve_install(request: InstallRequest, ctx: ExecutionContext) -> OperationPlan:
    steps: list[PlanStep] = [NoticeStep("Installing components...")]

    if request.component:
        components = [catalog.get_component(request.component)]
    else:
        steps.append(NoticeStep("No component specified, installing default set."))
        components = catalog.default_install_set()

    values_file = None
    if request.profile:
        values_file = profiles.resolve_install_profile(request.profile)
        steps.append(NoticeStep(f"Applying profile: {request.profile}"))
        values_file = _overlay_or_warning(values_file, ctx, steps)

    options = ctx.command_options(values_file)
    for component in components:
        argv = build(Tool.HELM, "install", component.release, component.chart, options)
        steps.append(ToolStep(Tool.HELM, "install", component.key, tuple(argv)))

    return OperationPlan(
        operation="install",
        targets=tuple(c.key for c in components),
        steps=tuple(steps),
    )


def resolve_deploy(request: DeployRequest, ctx: ExecutionContext) -> OperationPlan:
    config = ctx.require_config()
    steps: list[PlanStep] = [NoticeStep("Deploying service...")]

    values_file = None
    if request.env:
        values_file = profiles.resolve_deploy_environment(request.env)
        steps.append(NoticeStep(f"Applying environment profile: {request.env}"))
    if ctx.kube_context:
        steps.append(NoticeStep(f"Targeting Kubernetes context: {ctx.kube_context}"))

    services = select_services(ctx.paths, request.service)
    if not services:
        steps.append(NoticeStep("No services found to deploy."))
        return OperationPlan(operation="deploy", targets=(), steps=tuple(steps))

    steps.append(
        NoticeStep(
            f"Deploying specific service: {request.service}"
            if request.service
            else "Deploying all services."
        )
    )
    values_file = _overlay_or_warning(values_file, ctx, steps)
    options = ctx.command_options(values_file, registry=request.registry)

    for service in services:
        info = describe_service(ctx.paths, service)
        path = _relative(ctx, service)
        steps.append(NoticeStep(f"--- Deploying service: {service} ---"))

        if request.build:
            if not info.buildable:
                raise ServiceArtifactMissing(
                    f"{DEFAULT_CONSTANTS.BUILD_DESCRIPTOR} not found in {path}.",
                    details=f"Run `meshstack generate service {service}` or add one by hand.",
                )
            steps.append(
                NoticeStep(
                    f"Building Docker image for {service} (language: {config.language})..."
                )
            )
            argv = build(Tool.DOCKER, "build", service, path, options)
            steps.append(ToolStep(Tool.DOCKER, "build", service, tuple(argv), terminal=False))

        if request.push:
            argv = build(Tool.DOCKER, "push", service, None, options)
            steps.append(ToolStep(Tool.DOCKER, "push", service, tuple(argv), terminal=False))

        if not info.deployable:
            raise ServiceArtifactMissing(
                f"{DEFAULT_CONSTANTS.CHART_DESCRIPTOR} not found in {path}.",
                details=f"Run `meshstack generate service {service}` to scaffold a chart.",
            )
        release = DEFAULT_CONSTANTS.release_name(service)
        argv = build(Tool.HELM, "upgrade", release, path, options)
        steps.append(ToolStep(Tool.HELM, "deploy", service, tuple(argv)))

    return OperationPlan(operation="deploy", targets=tuple(services), steps=tuple(steps))


def resolve_destroy(request: DestroyRequest, ctx: ExecutionContext) -> OperationPlan:
    steps: list[PlanStep] = [NoticeStep("Destroying project...")]
    releases: list[str] = []

    def add(release: str) -> None:
        if release not in releases:
            releases.append(release)

    if request.service:
        steps.append(NoticeStep(f"Destroying service: {request.service}"))
        for service in select_services(ctx.paths, request.service):
            add(DEFAULT_CONSTANTS.release_name(service))

    if request.component:
        steps.append(NoticeStep(f"Destroying component: {request.component}"))
        add(catalog.get_component(request.component).release)

    if request.full:
        steps.append(NoticeStep("Destroying all resources."))
        try:
            services = list_services(ctx.paths.services)
        except PreconditionFailed:
            services = []
            steps.append(
                WarningStep("Services directory not found; destroying components only.")
            )
        for service in services:
            add(DEFAULT_CONSTANTS.release_name(service))
        for component in catalog.default_destroy_set():
            add(component.release)

    if ctx.kube_context:
        steps.append(NoticeStep(f"Using Kubernetes context: {ctx.kube_context}"))

    selected = bool(request.service or request.component or request.full)
    if not selected:
        steps.append(
            NoticeStep("Nothing selected. Use --service, --component or --full.")
        )
    elif request.confirm:
        steps.append(NoticeStep("Confirmation received. Proceeding with destruction."))

    options = ctx.command_options()
    for release in releases:
        argv = build(Tool.HELM, "uninstall", release, None, options)
        steps.append(ToolStep(Tool.HELM, "uninstall", release, tuple(argv)))

    return OperationPlan(
        operation="destroy",
        targets=tuple(releases),
        steps=tuple(steps),
        requires_confirmation=selected,
        confirmed=request.confirm,
    )


def resolve_update(request: UpdateRequest, ctx: ExecutionContext) -> OperationPlan:
    check_infra = request.infra or not request.template
    check_templates = request.template or not request.infra

    steps: list[PlanStep] = [NoticeStep("Updating project...")]
    steps.append(
        NoticeStep(
            "Applying all updates automatically..."
            if request.apply
            else "Checking for available updates..."
        )
    )
    targets: list[str] = []

    if check_infra:
        if request.component:
            steps.append(NoticeStep(f"Updating component: {request.component}"))
            components = [catalog.get_component(request.component)]
        else:
            components = list(catalog.COMPONENTS)
        options = ctx.command_options()
        for component in components:
            steps.append(
                UpdateCheckStep(
                    component=component.key,
                    release=component.release,
                    chart=component.chart,
                    list_argv=tuple(build(Tool.HELM, "list", component.release, None, options)),
                    search_argv=tuple(build(Tool.HELM, "search", None, component.chart)),
                    upgrade_argv=tuple(
                        build(Tool.HELM, "upgrade", component.release, component.chart, options)
                    ),
                    apply=request.apply,
                )
            )
            targets.append(component.key)

    if check_templates:
        if ctx.config is None and not request.template:
            steps.append(
                WarningStep("No meshstack.yaml found; skipping project template check.")
            )
        else:
            config = ctx.require_config()
            services = [
                s
                for s in list_services(ctx.paths.services)
                if describe_service(ctx.paths, s).deployable
            ]
            steps.append(
                TemplateUpdateStep(
                    apply=request.apply, services=tuple(services), ci_cd=config.ci_cd
                )
            )
            targets.append("templates")

    return OperationPlan(operation="update", targets=tuple(targets), steps=tuple(steps))


def resolve_status(request: StatusRequest, ctx: ExecutionContext) -> OperationPlan:
    show_components = request.components or not request.services
    show_services = request.services or not request.components

    steps: list[PlanStep] = [NoticeStep("Showing project status...")]
    if ctx.kube_context:
        steps.append(NoticeStep(f"Showing per-kube-context state for: {ctx.kube_context}"))
    targets: list[str] = []
    options = ctx.command_options()

    if show_components:
        for component in catalog.COMPONENTS:
            argv = build(Tool.HELM, "list", component.release, None, options)
            steps.append(
                ReleaseStatusStep(
                    target=component.key,
                    kind="component",
                    release=component.release,
                    argv=tuple(argv),
                )
            )
            targets.append(component.key)

    if show_services:
        try:
            services = discover(ctx.paths)
        except PreconditionFailed:
            if request.services:
                raise
            services = []
            steps.append(WarningStep("Services directory not found; skipping services."))
        for info in services:
            release = DEFAULT_CONSTANTS.release_name(info.name)
            argv = build(Tool.HELM, "list", release, None, options)
            steps.append(
                ReleaseStatusStep(
                    target=info.name,
                    kind="service",
                    release=release,
                    argv=tuple(argv),
                    buildable=info.buildable,
                    deployable=info.deployable,
                )
            )
            targets.append(info.name)

    return OperationPlan(operation="status", targets=tuple(targets), steps=tuple(steps))


def resolve_bootstrap(request: BootstrapRequest, ctx: ExecutionContext) -> OperationPlan:
    provider = get_provider(request.provider)
    cluster = request.name or ctx.require_config().project_name

    steps: list[PlanStep] = [
        NoticeStep(f"Bootstrapping local {provider.name} cluster '{cluster}'...")
    ]

    values_file = None
    if request.profile and not request.skip_install:
        values_file = profiles.resolve_install_profile(request.profile)
        steps.append(NoticeStep(f"Applying profile: {request.profile}"))

    steps.append(
        EnsureClusterStep(
            tool=provider.tool,
            cluster=cluster,
            list_argv=tuple(provider.list_clusters()),
            create_argv=tuple(
                build(provider.tool, "create", cluster, None, ctx.command_options())
            ),
        )
    )

    kube_context = provider.context_name(cluster)
    switch = build(Tool.KUBECTL, "use-context", options=ctx.command_options(kube_context=kube_context))
    steps.append(ToolStep(Tool.KUBECTL, "use-context", cluster, tuple(switch), terminal=False))

    targets = [cluster]
    if request.skip_install:
        steps.append(NoticeStep("Skipping component installation."))
    else:
        values_file = _overlay_or_warning(values_file, ctx, steps)
        options = ctx.command_options(values_file, kube_context=kube_context)
        for component in catalog.default_install_set():
            argv = build(Tool.HELM, "install", component.release, component.chart, options)
            steps.append(ToolStep(Tool.HELM, "install", component.key, tuple(argv)))
            targets.append(component.key)

    return OperationPlan(operation="bootstrap", targets=tuple(targets), steps=tuple(steps))


RESOLVERS: dict[str, Callable[[Any, ExecutionContext], OperationPlan]] = {
    "install": resolve_install,
    "deploy": resolve_deploy,
    "destroy": resolve_destroy,
    "update": resolve_update,
    "status": resolve_status,
    "bootstrap": resolve_bootstrap,
}


def resolve_plan(operation: str, request: Any, ctx: ExecutionContext) -> OperationPlan:
    """Resolve an operation request into a plan.

    Raises:
        ValueError: If the operation is unknown
        MeshstackError: Any resolution failure (unknown target, missing
            config, missing services root, missing descriptor)
    """
    try:
        resolver = RESOLVERS[operation]
    except KeyError:
        raise ValueError(
            f"Unknown operation '{operation}'. Expected one of: {', '.join(RESOLVERS)}"
        ) from None
    plan = resolver(request, ctx)
    logger.debug(f"Resolved {operation} targets: {list(plan.targets)}")
    return plan
