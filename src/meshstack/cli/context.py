"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer
from dotenv import load_dotenv
from loguru import logger

from meshstack.cli.deployment import ExecutionContext
from meshstack.cli.deployment.shell_commands import CommandExecutor, CommandRunner
from meshstack.cli.shared.console import CLIConsole, console
from meshstack.infra.constants import ProjectPaths
from meshstack.runtime.config.config_data import ProjectConfig
from meshstack.runtime.config.config_loader import load_config, load_config_if_present
from meshstack.utils.paths import get_project_root


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    project_root: Path
    paths: ProjectPaths
    executor: CommandExecutor

    def load_config(self) -> ProjectConfig:
        return load_config(self.paths.config_yaml)

    def execution_context(
        self,
        *,
        kube_context: str | None = None,
        dry_run: bool = False,
        require_config: bool = False,
    ) -> ExecutionContext:
        """Build the immutable per-invocation execution context."""
        config = (
            self.load_config()
            if require_config
            else load_config_if_present(self.paths.config_yaml)
        )
        return ExecutionContext(
            paths=self.paths,
            kube_context=kube_context,
            dry_run=dry_run,
            config=config,
            executor=self.executor,
        )


def build_cli_context(project_root: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext."""
    project_root = project_root or get_project_root()
    env_file = project_root / ".env"
    if env_file.is_file():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded environment from {env_file}")

    return CLIContext(
        console=console,
        project_root=project_root,
        paths=ProjectPaths(project_root),
        executor=CommandRunner(project_root),
    )


def get_cli_context(ctx: typer.Context | None) -> CLIContext:
    """Return the CLIContext stored on the Typer context, or build a new one."""
    if ctx is not None and isinstance(ctx.obj, CLIContext):
        return ctx.obj
    return build_cli_context()
