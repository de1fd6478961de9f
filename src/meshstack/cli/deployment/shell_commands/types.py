"""Data types for shell command results.

This module contains the dataclasses and enums shared across the shell
command modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

__all__ = [
    "CommandResult",
    "CommandOptions",
    "HelmRelease",
    "Tool",
]


class Tool(str, Enum):
    """External tools meshstack drives."""

    HELM = "helm"
    DOCKER = "docker"
    KUBECTL = "kubectl"
    KIND = "kind"
    K3D = "k3d"

    @property
    def category(self) -> str:
        """Human-readable tool category used in messages."""
        return _CATEGORIES[self]

    @property
    def install_hint(self) -> str:
        return _INSTALL_HINTS[self]


_CATEGORIES = {
    Tool.HELM: "Helm",
    Tool.DOCKER: "Docker",
    Tool.KUBECTL: "kubectl",
    Tool.KIND: "kind",
    Tool.K3D: "k3d",
}

_INSTALL_HINTS = {
    Tool.HELM: "https://helm.sh/docs/intro/install/",
    Tool.DOCKER: "https://docs.docker.com/get-docker/",
    Tool.KUBECTL: "https://kubernetes.io/docs/tasks/tools/",
    Tool.KIND: "https://kind.sigs.k8s.io/docs/user/quick-start/#installation",
    Tool.K3D: "https://k3d.io/#installation",
}


@dataclass(frozen=True)
class CommandResult:
    """Outcome of an external command.

    Attributes:
        success: Whether the command exited with status 0
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Process exit status
    """

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


@dataclass(frozen=True)
class CommandOptions:
    """Per-call options that shape an argument vector.

    Attributes:
        values_file: Resolved overlay file to pass with --values, if any
        kube_context: Cluster context to target, if any
        dry_run: Whether to ask the tool itself for a dry run (helm install only)
        registry: Image registry prefix for build/push
        ports: Port mappings for local cluster provisioners that take them
    """

    values_file: str | None = None
    kube_context: str | None = None
    dry_run: bool = False
    registry: str = "meshstack"
    ports: tuple[str, ...] = field(default_factory=tuple)


@dataclass
class HelmRelease:
    """Information about a Helm release.

    Attributes:
        name: Release name
        namespace: Kubernetes namespace
        status: Release status (deployed, failed, pending-install, ...)
        revision: Release revision number
        chart: Chart name and version, e.g. "grafana-7.3.0"
        app_version: Application version reported by the chart
    """

    name: str
    namespace: str
    status: str
    revision: str
    chart: str = ""
    app_version: str = ""
