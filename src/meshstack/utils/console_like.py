"""Console protocol for code that reports progress outside the CLI.

The orchestrator and the update checker take any ConsoleLike. The CLI
passes its rich CLIConsole; library callers and scripts that pass
nothing get StdoutConsole.
"""

from __future__ import annotations

import sys
from typing import Protocol

from rich.console import ConsoleRenderable


class ConsoleLike(Protocol):
    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def plain(self, msg: str) -> None: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


class StdoutConsole:
    """Unstyled console: progress on stdout, warnings and errors on stderr."""

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        print("" if msg is None else msg)

    def plain(self, msg: str) -> None:
        print(msg)

    def info(self, msg: str) -> None:
        print(msg)

    def ok(self, msg: str) -> None:
        print(msg)

    def warn(self, msg: str) -> None:
        print(f"warning: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        print(f"error: {msg}", file=sys.stderr)


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    return console if console is not None else StdoutConsole()
