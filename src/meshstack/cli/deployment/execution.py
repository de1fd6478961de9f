"""Per-invocation execution context."""

from __future__ import annotations

from dataclasses import dataclass, replace

from meshstack.errors import ConfigMissing
from meshstack.infra.constants import DEFAULT_CONSTANTS, ProjectPaths
from meshstack.runtime.config.config_data import ProjectConfig

from .shell_commands import CommandExecutor, CommandOptions


@dataclass(frozen=True)
class ExecutionContext:
    """Immutable bundle shared by every target of one invocation.

    Attributes:
        paths: Project path resolver
        kube_context: Cluster context override, if any
        dry_run: Whether mutating tool invocations are suppressed
        config: Loaded project configuration, if the project has one
        executor: Executor for external tools; None for previews
    """

    paths: ProjectPaths
    kube_context: str | None = None
    dry_run: bool = False
    config: ProjectConfig | None = None
    executor: CommandExecutor | None = None

    def for_preview(self) -> ExecutionContext:
        """Copy of this context that cannot spawn processes."""
        return replace(self, executor=None)

    def require_config(self) -> ProjectConfig:
        """Return the project configuration or fail if there is none.

        Raises:
            ConfigMissing: If no meshstack.yaml was loaded
        """
        if self.config is None:
            raise ConfigMissing(
                f"{self.paths.config_yaml.name} not found.",
                details="Run `meshstack init` to create a project configuration.",
            )
        return self.config

    def command_options(
        self,
        values_file: str | None = None,
        *,
        kube_context: str | None = None,
        registry: str = DEFAULT_CONSTANTS.DEFAULT_REGISTRY,
    ) -> CommandOptions:
        """Options for building argument vectors in this context."""
        return CommandOptions(
            values_file=values_file,
            kube_context=kube_context or self.kube_context,
            dry_run=self.dry_run,
            registry=registry,
        )
