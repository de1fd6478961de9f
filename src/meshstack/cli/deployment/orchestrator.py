"""Plan execution.

The Orchestrator interprets an OperationPlan step by step through the
executor carried by the ExecutionContext. It makes no target decisions
of its own; those all happen in the resolver.

Policies applied here:
- Availability of every tool the plan will spawn is checked before the
  first step runs.
- Batches are fail-fast. The first failing step aborts the rest and
  already-applied targets stay applied.
- A plan that needs confirmation and lacks it runs no mutating step.
- In dry-run, mutating steps print a ``DRY RUN:`` line instead of
  spawning; read-only queries still run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from meshstack.errors import ToolInvocationFailed
from meshstack.infra.catalog import get_component
from meshstack.utils.console_like import ConsoleLike, coalesce_console

from ..scaffold import apply_template_update
from .execution import ExecutionContext
from .plan import (
    EnsureClusterStep,
    NoticeStep,
    OperationPlan,
    ReleaseStatusStep,
    TemplateUpdateStep,
    ToolStep,
    UpdateCheckStep,
    WarningStep,
)
from .resolver import resolve_plan
from .shell_commands import PROVIDERS, CommandExecutor, HelmRelease, Tool
from .shell_commands.helm import parse_releases
from .updates import HelmVersionSource, UpdateInfo, VersionDiffChecker, VersionSource

DRY_RUN_PREFIX = "DRY RUN: Would execute"

# (before, after) messages per tool step action
_ACTION_MESSAGES: dict[str, tuple[str, str]] = {
    "install": ("Installing {target}...", "Installation of {target} successful."),
    "upgrade": ("Upgrading {target}...", "Upgrade of {target} successful."),
    "deploy": ("Deploying {target} with Helm...", "Deployment of {target} successful."),
    "uninstall": ("Uninstalling {target}...", "Uninstalled {target}."),
    "build": ("Building Docker image for {target}...", "Successfully built Docker image for {target}."),
    "push": ("Pushing Docker image for {target} to registry...", "Successfully pushed Docker image for {target}."),
    "create": ("Creating cluster {target}...", "Cluster {target} created."),
    "use-context": ("Switching kubectl context to {target}...", "Now using cluster {target}."),
}


@dataclass(frozen=True)
class ReleaseStatus:
    """Observed state of one component or service release."""

    target: str
    kind: str
    release_name: str
    release: HelmRelease | None
    query_failed: bool = False
    buildable: bool | None = None
    deployable: bool | None = None

    @property
    def state(self) -> str:
        if self.query_failed:
            return "unknown"
        if self.release is None:
            return "not installed"
        return self.release.status or "installed"


@dataclass
class ExecutionReport:
    """What an executed plan did."""

    operation: str
    targets: tuple[str, ...]
    confirmed: bool = True
    applied: list[str] = field(default_factory=list)
    dry_run_commands: list[str] = field(default_factory=list)
    statuses: list[ReleaseStatus] = field(default_factory=list)
    updates: list[UpdateInfo] = field(default_factory=list)

    def mark_applied(self, target: str) -> None:
        if target not in self.applied:
            self.applied.append(target)


class Orchestrator:
    """Runs operation plans against real (or recording) executors."""

    def __init__(
        self,
        console: ConsoleLike | None = None,
        version_source: Callable[[CommandExecutor], VersionSource] = HelmVersionSource,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            console: Where progress is reported
            version_source: Factory for the update check's version source
        """
        self.console = coalesce_console(console)
        self._version_source = version_source

    def run(self, operation: str, request: Any, ctx: ExecutionContext) -> ExecutionReport:
        """Resolve and execute one operation."""
        plan = resolve_plan(operation, request, ctx)
        return self.execute(plan, ctx)

    def execute(self, plan: OperationPlan, ctx: ExecutionContext) -> ExecutionReport:
        """Execute a resolved plan.

        Raises:
            ToolUnavailable: If a tool the plan spawns is not installed
            ToolInvocationFailed: On the first step whose tool exits non-zero
        """
        executor = ctx.executor
        if executor is None:
            raise RuntimeError("Cannot execute a plan with a preview context")

        self._preflight(plan, ctx, executor)
        report = ExecutionReport(plan.operation, plan.targets, confirmed=not plan.blocked)

        for step in plan.steps:
            if isinstance(step, NoticeStep):
                self.console.info(step.message)
            elif isinstance(step, WarningStep):
                self.console.warn(step.message)
            elif isinstance(step, ToolStep):
                if plan.blocked and step.mutating:
                    continue
                self._run_tool(step, ctx, executor, report)
            elif isinstance(step, ReleaseStatusStep):
                report.statuses.append(self._query_status(step, executor))
            elif isinstance(step, UpdateCheckStep):
                self._check_update(step, ctx, executor, report)
            elif isinstance(step, TemplateUpdateStep):
                self._check_templates(step, ctx, executor, report)
            elif isinstance(step, EnsureClusterStep):
                self._ensure_cluster(step, ctx, executor, report)

        if plan.blocked:
            self.console.warn(
                f"Would destroy {', '.join(plan.targets) or 'nothing'}, not confirmed. "
                "No resources were destroyed; re-run with --confirm to proceed."
            )
        elif ctx.dry_run:
            self.console.info(
                f"Dry run complete. {len(report.dry_run_commands)} command(s) not executed."
            )
        return report

    # =========================================================================
    # Step handlers
    # =========================================================================

    def _preflight(
        self, plan: OperationPlan, ctx: ExecutionContext, executor: CommandExecutor
    ) -> None:
        tools = plan.tools(mutating=False)
        if not ctx.dry_run and not plan.blocked:
            tools += [t for t in plan.tools(mutating=True) if t not in tools]
        for tool in tools:
            executor.ensure_available(tool)

    def _run_tool(
        self,
        step: ToolStep,
        ctx: ExecutionContext,
        executor: CommandExecutor,
        report: ExecutionReport,
    ) -> None:
        if ctx.dry_run and step.mutating:
            self.console.plain(
                f"{DRY_RUN_PREFIX} {step.tool.value} command: {step.command_line}"
            )
            report.dry_run_commands.append(step.command_line)
            return

        before, after = _ACTION_MESSAGES.get(
            step.action, ("Running {target}...", "Finished {target}.")
        )
        self.console.info(before.format(target=step.target))
        result = executor.run(step.argv)
        if not result.success:
            raise ToolInvocationFailed(
                target=step.target,
                category=step.tool.category,
                argv=step.argv,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
                applied=report.applied,
            )
        if result.stdout.strip():
            logger.debug(f"{step.tool.value} output for {step.target}:\n{result.stdout.rstrip()}")
        self.console.ok(after.format(target=step.target))
        if step.mutating and step.terminal:
            report.mark_applied(step.target)

    def _query_status(self, step: ReleaseStatusStep, executor: CommandExecutor) -> ReleaseStatus:
        result = executor.run(step.argv)
        release = None
        if result.success:
            release = next(
                (r for r in parse_releases(result.stdout) if r.name == step.release), None
            )
        else:
            logger.debug(f"Status query for {step.release} failed: {result.stderr.strip()}")
        return ReleaseStatus(
            target=step.target,
            kind=step.kind,
            release_name=step.release,
            release=release,
            query_failed=not result.success,
            buildable=step.buildable,
            deployable=step.deployable,
        )

    def _checker(self, executor: CommandExecutor) -> VersionDiffChecker:
        return VersionDiffChecker(self._version_source(executor), self.console)

    def _check_update(
        self,
        step: UpdateCheckStep,
        ctx: ExecutionContext,
        executor: CommandExecutor,
        report: ExecutionReport,
    ) -> None:
        info = self._checker(executor).check(
            get_component(step.component), ctx.command_options()
        )
        if info is None:
            self.console.info(f"{step.component}: no chart update available.")
            return

        report.updates.append(info)
        self.console.info(
            f"Update available for {info.name}: {info.current_version} -> {info.latest_version}"
        )
        if step.apply:
            upgrade = ToolStep(Tool.HELM, "upgrade", step.component, step.upgrade_argv)
            self._run_tool(upgrade, ctx, executor, report)

    def _check_templates(
        self,
        step: TemplateUpdateStep,
        ctx: ExecutionContext,
        executor: CommandExecutor,
        report: ExecutionReport,
    ) -> None:
        info = self._checker(executor).check_templates(ctx.paths)
        if info is None:
            self.console.info("Project templates are up to date.")
            return

        report.updates.append(info)
        self.console.info(
            f"Template update available: {info.current_version} -> {info.latest_version}"
        )
        if not step.apply:
            return

        scope = ", ".join(step.services) or "no services"
        if ctx.dry_run:
            self.console.plain(
                f"DRY RUN: Would regenerate chart templates ({scope}) "
                f"and the {step.ci_cd} CI manifest"
            )
            report.dry_run_commands.append("regenerate templates")
            return

        written = apply_template_update(ctx.paths, ctx.require_config())
        for path in written:
            logger.debug(f"Wrote {path}")
        self.console.ok(f"Project templates updated to {info.latest_version} ({scope}).")
        report.mark_applied("templates")

    def _ensure_cluster(
        self,
        step: EnsureClusterStep,
        ctx: ExecutionContext,
        executor: CommandExecutor,
        report: ExecutionReport,
    ) -> None:
        provider = PROVIDERS[step.tool.value]
        result = executor.run(step.list_argv)
        if not result.success:
            raise ToolInvocationFailed(
                target=step.cluster,
                category=step.tool.category,
                argv=step.list_argv,
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
                applied=report.applied,
            )

        if step.cluster in provider.parse_clusters(result.stdout):
            self.console.info(f"Cluster {step.cluster} already exists, skipping creation.")
            return
        create = ToolStep(step.tool, "create", step.cluster, step.create_argv)
        self._run_tool(create, ctx, executor, report)
