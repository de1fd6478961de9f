"""Error taxonomy for meshstack operations.

Every failure that should end an invocation is raised as a subclass of
MeshstackError. The CLI error handler prints ``message`` on standard error,
shows ``details`` in a panel when present, and exits non-zero.
"""

from __future__ import annotations

from collections.abc import Sequence


class MeshstackError(Exception):
    """Raised when a meshstack operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigMissing(MeshstackError):
    """meshstack.yaml does not exist."""


class ConfigInvalid(MeshstackError):
    """meshstack.yaml exists but fails structural checks."""


class UnknownTarget(MeshstackError):
    """A component, profile, environment or service name is outside the allowed set."""

    def __init__(
        self,
        kind: str,
        name: str,
        valid_choices: Sequence[str],
        details: str | None = None,
    ):
        self.kind = kind
        self.name = name
        self.valid_choices = tuple(valid_choices)
        plural = f"{kind}s"
        if self.valid_choices:
            message = (
                f"Unknown {kind}: {name}. "
                f"Valid {plural} are: {', '.join(self.valid_choices)}"
            )
        else:
            message = f"Unknown {kind}: {name}. No {plural} are available."
        super().__init__(message, details)


class ToolUnavailable(MeshstackError):
    """A required external tool is not installed."""

    def __init__(self, tool: str, message: str, details: str | None = None):
        self.tool = tool
        super().__init__(message, details)


class ToolInvocationFailed(MeshstackError):
    """An external tool ran and exited non-zero."""

    def __init__(
        self,
        *,
        target: str,
        category: str,
        argv: Sequence[str],
        returncode: int,
        stdout: str,
        stderr: str,
        applied: Sequence[str] = (),
    ):
        self.target = target
        self.category = category
        self.argv = tuple(argv)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.applied = tuple(applied)

        sections = [f"Command: {' '.join(self.argv)} (exit {returncode})"]
        if stdout.strip():
            sections.append(f"Stdout:\n{stdout.rstrip()}")
        if stderr.strip():
            sections.append(f"Stderr:\n{stderr.rstrip()}")
        if self.applied:
            sections.append(
                "Already applied (not rolled back): " + ", ".join(self.applied)
            )
        super().__init__(
            f"{category} command failed for {target}", "\n\n".join(sections)
        )


class ServiceArtifactMissing(MeshstackError):
    """A service lacks the descriptor file the requested operation needs."""


class PreconditionFailed(MeshstackError):
    """The project is not in a state that allows the operation."""


class ProfileNotImplemented(PreconditionFailed):
    """The ``custom`` profile was requested."""

    def __init__(self) -> None:
        super().__init__("Custom profile not yet implemented.")
