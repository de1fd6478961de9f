"""Command executors.

This module provides the execution seam used by the orchestrator:
- CommandRunner runs argument vectors as real subprocesses
- RecordingRunner records argument vectors and returns scripted results

Both implement the CommandExecutor protocol, so the orchestrator never
knows which one it is driving.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from loguru import logger

from meshstack.errors import ToolUnavailable

from .types import CommandResult, Tool


def tool_unavailable(tool: Tool) -> ToolUnavailable:
    category = tool.category
    return ToolUnavailable(
        tool.value,
        f"{category} is not installed or not found in PATH. "
        f"Please install {category} to proceed. "
        f"Refer to {tool.install_hint} for instructions.",
    )


class CommandExecutor(Protocol):
    """Capability to run external tools."""

    def ensure_available(self, tool: Tool) -> None: ...

    def run(self, cmd: Sequence[str]) -> CommandResult: ...


class CommandRunner:
    """Low-level command executor with consistent result handling.

    Every call blocks until the process exits; stdout and stderr are
    captured and returned in a CommandResult.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize the command runner.

        Args:
            project_root: Path to the project root directory.
                         Commands will be executed from this directory.
        """
        self.project_root = project_root

    def ensure_available(self, tool: Tool) -> None:
        """Check that a tool's executable is on PATH.

        Raises:
            ToolUnavailable: If the executable cannot be found
        """
        if shutil.which(tool.value) is None:
            raise tool_unavailable(tool)

    def run(self, cmd: Sequence[str]) -> CommandResult:
        """Execute a command and return structured result.

        Args:
            cmd: Command and arguments as a sequence

        Returns:
            CommandResult with success status, output, and return code

        Raises:
            ToolUnavailable: If the executable does not exist
        """
        logger.debug(f"Executing: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                list(cmd),
                cwd=self.project_root,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise tool_unavailable(Tool(cmd[0])) from e

        logger.debug(f"{cmd[0]} exited with status {result.returncode}")
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )


class RecordingRunner:
    """Executor that records commands instead of running them.

    Results are scripted by argument prefix: the longest registered prefix
    matching a command wins, and unmatched commands succeed with empty
    output.

    Example:
        >>> runner = RecordingRunner({("helm", "list"): CommandResult(True, "[]")})
        >>> runner.run(["helm", "list", "--filter", "istio"]).stdout
        '[]'
        >>> runner.calls
        [('helm', 'list', '--filter', 'istio')]
    """

    def __init__(
        self,
        responses: Mapping[tuple[str, ...], CommandResult] | None = None,
        *,
        missing_tools: Sequence[Tool] = (),
    ) -> None:
        self.responses: dict[tuple[str, ...], CommandResult] = dict(responses or {})
        self.missing_tools = set(missing_tools)
        self.calls: list[tuple[str, ...]] = []

    def respond(self, prefix: Sequence[str], result: CommandResult) -> None:
        self.responses[tuple(prefix)] = result

    def ensure_available(self, tool: Tool) -> None:
        if tool in self.missing_tools:
            raise tool_unavailable(tool)

    def run(self, cmd: Sequence[str]) -> CommandResult:
        argv = tuple(cmd)
        self.calls.append(argv)

        best: tuple[str, ...] | None = None
        for prefix in self.responses:
            if argv[: len(prefix)] == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        if best is None:
            return CommandResult(success=True)
        return self.responses[best]

    def calls_to(self, *prefix: str) -> list[tuple[str, ...]]:
        """Recorded calls starting with the given prefix."""
        return [call for call in self.calls if call[: len(prefix)] == prefix]
