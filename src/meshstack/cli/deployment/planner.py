"""Read-only plan previews.

The Planner resolves an operation with exactly the resolver the
Orchestrator uses, in a context that has no executor, and renders the
resulting plan as text. Resolution errors (unknown names, missing config
or services root) therefore surface identically in both modes.
"""

from __future__ import annotations

from typing import Any

from ..scaffold import TEMPLATE_VERSION
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

PLAN_PREFIX = "PLAN: "


def _join(argv: tuple[str, ...]) -> str:
    return " ".join(argv)


class Planner:
    """Renders operation plans without executing anything."""

    def resolve(self, operation: str, request: Any, ctx: ExecutionContext) -> OperationPlan:
        return resolve_plan(operation, request, ctx.for_preview())

    def preview(self, operation: str, request: Any, ctx: ExecutionContext) -> list[str]:
        """Resolve an operation and render its plan.

        Returns:
            Lines, each starting with ``PLAN: ``
        """
        plan = self.resolve(operation, request, ctx)
        return self.render(plan, ctx)

    @staticmethod
    def render(plan: OperationPlan, ctx: ExecutionContext) -> list[str]:
        body: list[str] = []
        targets = ", ".join(plan.targets) if plan.targets else "none"
        body.append(f"operation: {plan.operation}")
        body.append(f"targets ({len(plan.targets)}): {targets}")
        if ctx.kube_context:
            body.append(f"kube context: {ctx.kube_context}")
        if ctx.dry_run:
            body.append("dry run: mutating commands would be printed, not executed")

        for step in plan.steps:
            if isinstance(step, NoticeStep):
                body.append(step.message)
            elif isinstance(step, WarningStep):
                body.append(f"warning: {step.message}")
            elif isinstance(step, ToolStep):
                body.append(f"{step.action} {step.target}: {step.command_line}")
            elif isinstance(step, ReleaseStatusStep):
                body.append(f"query {step.kind} {step.target}: {_join(step.argv)}")
            elif isinstance(step, UpdateCheckStep):
                body.append(f"query installed {step.component}: {_join(step.list_argv)}")
                body.append(f"query latest {step.component}: {_join(step.search_argv)}")
                if step.apply:
                    body.append(f"upgrade {step.component} if newer: {_join(step.upgrade_argv)}")
            elif isinstance(step, TemplateUpdateStep):
                services = ", ".join(step.services) or "none"
                body.append(f"compare template marker with version {TEMPLATE_VERSION}")
                if step.apply:
                    body.append(
                        f"regenerate chart templates if stale (services: {services}) "
                        f"and the {step.ci_cd} CI manifest"
                    )
            elif isinstance(step, EnsureClusterStep):
                body.append(f"list clusters: {_join(step.list_argv)}")
                body.append(f"create {step.cluster} if absent: {_join(step.create_argv)}")

        if plan.blocked:
            body.append("not confirmed: no uninstall command would run without --confirm")
        return [f"{PLAN_PREFIX}{line}" for line in body]
