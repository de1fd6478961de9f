"""Structured operation plans.

A plan is an ordered list of steps produced by a resolver. The
orchestrator interprets the steps; the planner renders them. Neither
makes decisions of its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .shell_commands import Tool


@dataclass(frozen=True)
class NoticeStep:
    """Informational line."""

    message: str


@dataclass(frozen=True)
class WarningStep:
    """Non-fatal problem found while resolving."""

    message: str


@dataclass(frozen=True)
class ToolStep:
    """One external tool invocation for a target.

    Attributes:
        tool: Tool to invoke
        action: What the step does to the target ("install", "build", ...)
        target: Component, service or cluster the step acts on
        argv: Full argument vector
        mutating: Whether the invocation changes cluster or registry state
        terminal: Whether success means the target itself has been applied
    """

    tool: Tool
    action: str
    target: str
    argv: tuple[str, ...]
    mutating: bool = True
    terminal: bool = True

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class ReleaseStatusStep:
    """Read-only query of a release's state."""

    target: str
    kind: Literal["component", "service"]
    release: str
    argv: tuple[str, ...]
    buildable: bool | None = None
    deployable: bool | None = None


@dataclass(frozen=True)
class UpdateCheckStep:
    """Compare installed and available chart versions, optionally upgrading."""

    component: str
    release: str
    chart: str
    list_argv: tuple[str, ...]
    search_argv: tuple[str, ...]
    upgrade_argv: tuple[str, ...]
    apply: bool


@dataclass(frozen=True)
class TemplateUpdateStep:
    """Compare the scaffold template marker, optionally regenerating."""

    apply: bool
    services: tuple[str, ...]
    ci_cd: str


@dataclass(frozen=True)
class EnsureClusterStep:
    """Create a local cluster unless one with the same name exists."""

    tool: Tool
    cluster: str
    list_argv: tuple[str, ...]
    create_argv: tuple[str, ...]


PlanStep = (
    NoticeStep
    | WarningStep
    | ToolStep
    | ReleaseStatusStep
    | UpdateCheckStep
    | TemplateUpdateStep
    | EnsureClusterStep
)


@dataclass(frozen=True)
class OperationPlan:
    """Resolved decisions for one operation.

    Attributes:
        operation: Operation name ("install", "deploy", ...)
        targets: Resolved targets in processing order
        steps: Steps in execution order
        requires_confirmation: Whether mutating steps need explicit confirmation
        confirmed: Whether confirmation was supplied
    """

    operation: str
    targets: tuple[str, ...]
    steps: tuple[PlanStep, ...]
    requires_confirmation: bool = False
    confirmed: bool = True

    @property
    def blocked(self) -> bool:
        """True when mutating steps must not run for lack of confirmation."""
        return self.requires_confirmation and not self.confirmed

    @property
    def tool_steps(self) -> list[ToolStep]:
        return [s for s in self.steps if isinstance(s, ToolStep)]

    def tools(self, *, mutating: bool | None = None) -> list[Tool]:
        """Tools the plan invokes, in first-use order.

        Args:
            mutating: Restrict to mutating (True) or read-only (False)
                      invocations; None for both
        """
        found: list[Tool] = []

        def add(tool: Tool, is_mutating: bool) -> None:
            if (mutating is None or mutating == is_mutating) and tool not in found:
                found.append(tool)

        for step in self.steps:
            if isinstance(step, ToolStep):
                add(step.tool, step.mutating)
            elif isinstance(step, ReleaseStatusStep):
                add(Tool.HELM, False)
            elif isinstance(step, UpdateCheckStep):
                add(Tool.HELM, False)
                if step.apply:
                    add(Tool.HELM, True)
            elif isinstance(step, EnsureClusterStep):
                add(step.tool, False)
                add(step.tool, True)
        return found
