"""Kubectl command abstractions.

This module builds argument vectors for cluster connectivity checks and
context switching:

    kubectl cluster-info [--context <ctx>]
    kubectl config use-context <ctx>
"""

from __future__ import annotations

from .types import CommandOptions, Tool

KUBECTL = Tool.KUBECTL.value


class KubectlCommands:
    """Kubectl-related shell commands.

    Provides operations for:
    - Cluster reachability checks
    - Switching the active context
    """

    @staticmethod
    def cluster_info(options: CommandOptions) -> list[str]:
        """Build a ``kubectl cluster-info`` command.

        Without a context the current kubeconfig context is used.
        """
        cmd = [KUBECTL, "cluster-info"]
        if options.kube_context:
            cmd.extend(["--context", options.kube_context])
        return cmd

    @staticmethod
    def use_context(context: str) -> list[str]:
        return [KUBECTL, "config", "use-context", context]
