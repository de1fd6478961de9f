"""Single entry point for building tool argument vectors.

Both the orchestrator and the planner obtain every command through
:func:`build`, so execution and preview always see the same vector.
"""

from __future__ import annotations

from collections.abc import Callable

from .cluster import PROVIDERS
from .docker import DockerCommands
from .helm import HelmCommands
from .kubectl import KubectlCommands
from .types import CommandOptions, Tool

_Builder = Callable[[str | None, str | None, CommandOptions], list[str]]


def _need(value: str | None, what: str, tool: Tool, operation: str) -> str:
    if not value:
        raise ValueError(f"{tool.value} {operation} requires a {what}")
    return value


def _helm(operation: str) -> _Builder:
    def build_helm(release: str | None, source: str | None, options: CommandOptions) -> list[str]:
        if operation == "install":
            return HelmCommands.install(
                _need(release, "release", Tool.HELM, operation),
                _need(source, "chart", Tool.HELM, operation),
                options,
            )
        if operation == "upgrade":
            return HelmCommands.upgrade_install(
                _need(release, "release", Tool.HELM, operation),
                _need(source, "chart path", Tool.HELM, operation),
                options,
            )
        if operation == "uninstall":
            return HelmCommands.uninstall(_need(release, "release", Tool.HELM, operation), options)
        if operation == "list":
            return HelmCommands.list_filter(_need(release, "release", Tool.HELM, operation), options)
        if operation == "search":
            return HelmCommands.search_repo(_need(source, "chart", Tool.HELM, operation))
        return HelmCommands.version()

    return build_helm


def _docker(operation: str) -> _Builder:
    def build_docker(name: str | None, source: str | None, options: CommandOptions) -> list[str]:
        service = _need(name, "service name", Tool.DOCKER, operation)
        if operation == "build":
            return DockerCommands.build_image(
                service, _need(source, "build path", Tool.DOCKER, operation), options
            )
        return DockerCommands.push_image(service, options)

    return build_docker


def _kubectl(operation: str) -> _Builder:
    def build_kubectl(_: str | None, __: str | None, options: CommandOptions) -> list[str]:
        if operation == "cluster-info":
            return KubectlCommands.cluster_info(options)
        return KubectlCommands.use_context(
            _need(options.kube_context, "context", Tool.KUBECTL, operation)
        )

    return build_kubectl


def _provisioner(tool: Tool, operation: str) -> _Builder:
    provider = PROVIDERS[tool.value]

    def build_cluster(name: str | None, _: str | None, options: CommandOptions) -> list[str]:
        if operation == "create":
            return provider.create_cluster(_need(name, "cluster name", tool, operation), options)
        return provider.list_clusters()

    return build_cluster


_OPERATIONS: dict[tuple[Tool, str], _Builder] = {
    **{(Tool.HELM, op): _helm(op) for op in ("install", "upgrade", "uninstall", "list", "search", "version")},
    **{(Tool.DOCKER, op): _docker(op) for op in ("build", "push")},
    **{(Tool.KUBECTL, op): _kubectl(op) for op in ("cluster-info", "use-context")},
    **{(t, op): _provisioner(t, op) for t in (Tool.KIND, Tool.K3D) for op in ("create", "list")},
}


def supported_operations(tool: Tool) -> list[str]:
    return [op for (t, op) in _OPERATIONS if t is tool]


def build(
    tool: Tool,
    operation: str,
    release: str | None = None,
    source: str | None = None,
    options: CommandOptions | None = None,
) -> list[str]:
    """Build the argument vector for one tool invocation.

    Pure: never spawns a process and never touches the filesystem.

    Args:
        tool: External tool to invoke
        operation: Tool operation, e.g. "install", "build", "create"
        release: Release, service or cluster name the command acts on
        source: Chart coordinate, chart path or build context path
        options: Overlay file, cluster context, dry-run and registry settings

    Returns:
        Full command including the executable, in the tool's fixed order

    Raises:
        ValueError: If the tool/operation pair is unknown or an argument is missing
    """
    try:
        builder = _OPERATIONS[(tool, operation)]
    except KeyError:
        raise ValueError(
            f"Unsupported {tool.value} operation '{operation}'. "
            f"Supported: {', '.join(supported_operations(tool))}"
        ) from None
    return builder(release, source, options or CommandOptions())
