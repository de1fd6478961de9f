"""Operation orchestration for meshstack.

This package turns operation requests into plans and plans into external
tool invocations:
- resolver: One resolver per operation; all target decisions live here
- plan: Step types shared by execution and preview
- orchestrator: Executes plans through an injected executor
- planner: Renders plans without executing them
- updates: Chart and template version diffs for `update`
- shell_commands: Argument vector builders and executors

Execution and preview both call resolve_plan, so they cannot disagree
about targets, profiles or commands.
"""

from .execution import ExecutionContext
from .orchestrator import ExecutionReport, Orchestrator, ReleaseStatus
from .plan import OperationPlan
from .planner import PLAN_PREFIX, Planner
from .resolver import (
    BootstrapRequest,
    DeployRequest,
    DestroyRequest,
    InstallRequest,
    StatusRequest,
    UpdateRequest,
    resolve_plan,
)
from .updates import UpdateInfo, UpdateKind, VersionDiffChecker

__all__ = [
    "BootstrapRequest",
    "DeployRequest",
    "DestroyRequest",
    "ExecutionContext",
    "ExecutionReport",
    "InstallRequest",
    "OperationPlan",
    "Orchestrator",
    "PLAN_PREFIX",
    "Planner",
    "ReleaseStatus",
    "StatusRequest",
    "UpdateInfo",
    "UpdateKind",
    "UpdateRequest",
    "VersionDiffChecker",
    "resolve_plan",
]
