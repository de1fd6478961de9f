"""Shell command abstractions for meshstack operations.

This package provides a clean interface for the external tools meshstack
drives. It is organized into specialized modules for each tool:

- helm: Helm release management and queries
- docker: Image build and push
- kubectl: Cluster connectivity and context switching
- cluster: Local cluster provisioners (kind, k3d)
- builder: Single entry point that dispatches to the modules above
- runner: Executors (real subprocess, recording)

Design Principles:
- Argument vectors are built by pure functions with a fixed flag order
- Execution is a separate, injectable concern
- Read-only queries parse tool JSON into typed results

Usage:
    from meshstack.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(CommandRunner(Path(".")))
    release = commands.helm.find_release("istio", CommandOptions())
"""

from __future__ import annotations

from .builder import build
from .cluster import PROVIDERS, ClusterProvider, get_provider
from .docker import DockerCommands
from .helm import HelmCommands
from .kubectl import KubectlCommands
from .runner import CommandExecutor, CommandRunner, RecordingRunner
from .types import CommandOptions, CommandResult, HelmRelease, Tool


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        helm: Helm commands (queries use the executor)
        docker: Docker commands
        kubectl: Kubernetes kubectl commands
        runner: The executor queries are sent through

    Example:
        >>> commands = ShellCommands(RecordingRunner())
        >>> commands.build(Tool.HELM, "uninstall", "grafana")
        ['helm', 'uninstall', 'grafana']
    """

    def __init__(self, runner: CommandExecutor) -> None:
        """Initialize the shell commands facade.

        Args:
            runner: Executor used for read-only queries
        """
        self.runner = runner
        self.helm = HelmCommands(runner)
        self.docker = DockerCommands()
        self.kubectl = KubectlCommands()

    @staticmethod
    def build(
        tool: Tool,
        operation: str,
        release: str | None = None,
        source: str | None = None,
        options: CommandOptions | None = None,
    ) -> list[str]:
        """Build an argument vector. See builder.build."""
        return build(tool, operation, release, source, options)


__all__ = [
    "ShellCommands",
    "CommandExecutor",
    "CommandOptions",
    "CommandResult",
    "CommandRunner",
    "ClusterProvider",
    "HelmRelease",
    "RecordingRunner",
    "Tool",
    "build",
    "get_provider",
    "PROVIDERS",
    # Specialized command classes for direct usage
    "DockerCommands",
    "HelmCommands",
    "KubectlCommands",
]
