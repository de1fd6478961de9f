"""Local cluster provisioner command abstractions.

Supports kind and k3d. Each provider knows how to list clusters, create
one, and which kubeconfig context name the new cluster gets.

    kind get clusters
    kind create cluster --name <n>
    k3d cluster list --output json
    k3d cluster create <n> [-p <port mapping> ...]
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from meshstack.errors import UnknownTarget

from .types import CommandOptions, Tool

K3D_DEFAULT_PORTS: tuple[str, ...] = ("80:80@loadbalancer", "443:443@loadbalancer")


@dataclass(frozen=True)
class ClusterProvider:
    """A local Kubernetes cluster provisioner.

    Attributes:
        tool: Provisioner executable
        context_prefix: Prefix the provisioner puts on kubeconfig context names
    """

    tool: Tool
    context_prefix: str

    @property
    def name(self) -> str:
        return self.tool.value

    def list_clusters(self) -> list[str]:
        if self.tool is Tool.KIND:
            return [self.name, "get", "clusters"]
        return [self.name, "cluster", "list", "--output", "json"]

    def create_cluster(self, cluster: str, options: CommandOptions) -> list[str]:
        if self.tool is Tool.KIND:
            return [self.name, "create", "cluster", "--name", cluster]
        cmd = [self.name, "cluster", "create", cluster]
        for mapping in options.ports or K3D_DEFAULT_PORTS:
            cmd.extend(["-p", mapping])
        return cmd

    def context_name(self, cluster: str) -> str:
        return f"{self.context_prefix}{cluster}"

    def parse_clusters(self, stdout: str) -> list[str]:
        """Parse the output of :meth:`list_clusters` into cluster names."""
        if self.tool is Tool.KIND:
            # kind prints "No kind clusters found." on stderr when empty
            return [line.strip() for line in stdout.splitlines() if line.strip()]
        try:
            data = json.loads(stdout or "[]")
        except json.JSONDecodeError:
            return []
        return [c.get("name", "") for c in data if c.get("name")]


PROVIDERS: dict[str, ClusterProvider] = {
    "kind": ClusterProvider(Tool.KIND, "kind-"),
    "k3d": ClusterProvider(Tool.K3D, "k3d-"),
}


def get_provider(name: str) -> ClusterProvider:
    """Look up a provisioner by name.

    Raises:
        UnknownTarget: If the provider is not supported
    """
    try:
        return PROVIDERS[name]
    except KeyError:
        raise UnknownTarget("provider", name, list(PROVIDERS)) from None
