"""Version diff checks for the update operation.

Compares what is installed with what is available, for infrastructure
charts and for the project's scaffold templates. Version lookups go
through a pluggable VersionSource so the checker can be driven by live
Helm queries or by fixed tables in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from loguru import logger

from meshstack.cli.scaffold import TEMPLATE_VERSION, read_template_marker
from meshstack.infra.catalog import Component
from meshstack.infra.constants import ProjectPaths
from meshstack.utils.console_like import ConsoleLike, coalesce_console

from .shell_commands import CommandExecutor, CommandOptions, ShellCommands
from .shell_commands.helm import chart_version


class UpdateKind(str, Enum):
    CHART = "chart"
    TEMPLATE = "template"


@dataclass(frozen=True)
class UpdateInfo:
    """An available update.

    Attributes:
        name: Component key, or "templates"
        current_version: Installed version
        latest_version: Available version
        kind: What is out of date
    """

    name: str
    current_version: str
    latest_version: str
    kind: UpdateKind


class VersionLookupFailed(Exception):
    """A version source could not answer a query."""


class VersionSource(Protocol):
    """Where installed and available chart versions come from."""

    def installed_version(self, release: str, options: CommandOptions) -> str | None:
        """Version of an installed release, or None if not installed.

        Raises:
            VersionLookupFailed: If the release exists but its version is unreadable
        """
        ...

    def latest_version(self, chart: str) -> str:
        """Newest available chart version.

        Raises:
            VersionLookupFailed: If the repository query failed
        """
        ...


class HelmVersionSource:
    """Version source backed by live ``helm list`` and ``helm search repo``."""

    def __init__(self, runner: CommandExecutor) -> None:
        self.commands = ShellCommands(runner)

    def installed_version(self, release: str, options: CommandOptions) -> str | None:
        found = self.commands.helm.find_release(release, options)
        if found is None:
            return None
        version = chart_version(found.chart)
        if version is None:
            raise VersionLookupFailed(
                f"Could not read the installed version of {release} from chart '{found.chart}'"
            )
        return version

    def latest_version(self, chart: str) -> str:
        version = self.commands.helm.latest_chart_version(chart)
        if version is None:
            raise VersionLookupFailed(
                f"Could not query the chart repository for {chart}. "
                "Is the repository added (`helm repo add`)?"
            )
        return version


class StaticVersionSource:
    """Version source answering from fixed tables.

    Example:
        >>> source = StaticVersionSource(installed={"grafana": "7.0.0"},
        ...                              latest={"grafana/grafana": "7.3.0"})
        >>> source.latest_version("grafana/grafana")
        '7.3.0'
    """

    def __init__(
        self,
        installed: dict[str, str] | None = None,
        latest: dict[str, str] | None = None,
    ) -> None:
        self.installed = dict(installed or {})
        self.latest = dict(latest or {})

    def installed_version(self, release: str, options: CommandOptions) -> str | None:
        return self.installed.get(release)

    def latest_version(self, chart: str) -> str:
        try:
            return self.latest[chart]
        except KeyError:
            raise VersionLookupFailed(f"No version known for {chart}") from None


class VersionDiffChecker:
    """Classifies chart and template deltas."""

    def __init__(
        self,
        source: VersionSource,
        console: ConsoleLike | None = None,
        *,
        template_version: str | None = None,
    ) -> None:
        self.source = source
        self.console = coalesce_console(console)
        self.template_version = template_version or TEMPLATE_VERSION

    def check(
        self, component: Component, options: CommandOptions | None = None
    ) -> UpdateInfo | None:
        """Check one component for a newer chart.

        An uninstalled component and a failed version lookup both yield
        None; the latter is reported as a warning.
        """
        try:
            current = self.source.installed_version(
                component.release, options or CommandOptions()
            )
            if current is None:
                logger.debug(f"{component.key} is not installed; no update to report")
                return None
            latest = self.source.latest_version(component.chart)
        except VersionLookupFailed as e:
            logger.debug(f"Update check for {component.key} skipped: {e}")
            self.console.warn(f"Could not check {component.key} for updates: {e}")
            return None

        if current == latest:
            return None
        return UpdateInfo(component.key, current, latest, UpdateKind.CHART)

    def check_templates(self, paths: ProjectPaths) -> UpdateInfo | None:
        """Compare the project's template marker with the bundled templates."""
        current = read_template_marker(paths) or "none"
        if current == self.template_version:
            return None
        return UpdateInfo("templates", current, self.template_version, UpdateKind.TEMPLATE)
