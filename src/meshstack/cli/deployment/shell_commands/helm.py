"""Helm command abstractions.

This module builds Helm argument vectors for release management and runs
the read-only Helm queries (release listing, chart repository search).

Argument order is fixed so that an executed command and its preview
rendering are byte-identical:

    helm install <release> <chart> [--dry-run] [--kube-context <ctx>] [--values <file>]
    helm upgrade --install <release> <path> [--kube-context <ctx>] [--values <file>]
    helm uninstall <release> [--kube-context <ctx>]
    helm list --filter <name> --output json [--kube-context <ctx>]
    helm search repo <chart> --output json
    helm version
"""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING

from loguru import logger

from .types import CommandOptions, HelmRelease, Tool

if TYPE_CHECKING:
    from .runner import CommandExecutor

HELM = Tool.HELM.value

_CHART_VERSION = re.compile(r"-(v?\d[\w.+-]*)$")


def _context_args(options: CommandOptions) -> list[str]:
    return ["--kube-context", options.kube_context] if options.kube_context else []


def _values_args(options: CommandOptions) -> list[str]:
    return ["--values", options.values_file] if options.values_file else []


def chart_version(chart: str) -> str | None:
    """Extract the version from a ``helm list`` chart field.

    Example:
        >>> chart_version("cert-manager-v1.14.4")
        'v1.14.4'
    """
    match = _CHART_VERSION.search(chart)
    return match.group(1) if match else None


class HelmCommands:
    """Helm-related shell commands.

    Provides:
    - Argument vectors for release management (install, upgrade, uninstall)
    - Status queries (list releases, search chart repositories)
    """

    def __init__(self, runner: CommandExecutor | None = None) -> None:
        """Initialize Helm commands.

        Args:
            runner: Executor for read-only queries. Argument builders work
                    without one.
        """
        self._runner = runner

    # =========================================================================
    # Release Management
    # =========================================================================

    @staticmethod
    def install(release: str, chart: str, options: CommandOptions) -> list[str]:
        """Build a ``helm install`` command.

        Example:
            >>> HelmCommands.install(
            ...     "istio", "istio/istio", CommandOptions(values_file="dev-values.yaml")
            ... )
            ['helm', 'install', 'istio', 'istio/istio', '--values', 'dev-values.yaml']
        """
        cmd = [HELM, "install", release, chart]
        if options.dry_run:
            cmd.append("--dry-run")
        return cmd + _context_args(options) + _values_args(options)

    @staticmethod
    def upgrade_install(release: str, chart_path: str, options: CommandOptions) -> list[str]:
        """Build a ``helm upgrade --install`` command.

        Installs the release if it doesn't exist, upgrades it otherwise.
        """
        cmd = [HELM, "upgrade", "--install", release, chart_path]
        return cmd + _context_args(options) + _values_args(options)

    @staticmethod
    def uninstall(release: str, options: CommandOptions) -> list[str]:
        return [HELM, "uninstall", release] + _context_args(options)

    # =========================================================================
    # Queries
    # =========================================================================

    @staticmethod
    def list_filter(name: str, options: CommandOptions) -> list[str]:
        return [HELM, "list", "--filter", name, "--output", "json"] + _context_args(options)

    @staticmethod
    def search_repo(chart: str) -> list[str]:
        return [HELM, "search", "repo", chart, "--output", "json"]

    @staticmethod
    def version() -> list[str]:
        return [HELM, "version"]

    def _require_runner(self) -> CommandExecutor:
        if self._runner is None:
            raise RuntimeError("HelmCommands was created without an executor")
        return self._runner

    def list_releases(self, name: str, options: CommandOptions) -> list[HelmRelease] | None:
        """List releases whose name matches ``name``.

        ``helm list --filter`` matches by regular expression, so callers
        compare names exactly themselves.

        Returns:
            List of HelmRelease objects, or None if the query failed
        """
        result = self._require_runner().run(self.list_filter(name, options))
        if not result.success:
            logger.debug(f"helm list failed for {name}: {result.stderr.strip()}")
            return None
        return parse_releases(result.stdout)

    def find_release(self, name: str, options: CommandOptions) -> HelmRelease | None:
        """Return the release named exactly ``name``, if installed."""
        for release in self.list_releases(name, options) or []:
            if release.name == name:
                return release
        return None

    def latest_chart_version(self, chart: str) -> str | None:
        """Query the configured chart repositories for the newest version.

        Returns:
            The latest version, or None if the search failed or found nothing
        """
        result = self._require_runner().run(self.search_repo(chart))
        if not result.success or not result.stdout.strip():
            logger.debug(f"helm search repo failed for {chart}: {result.stderr.strip()}")
            return None

        try:
            entries = json.loads(result.stdout)
        except json.JSONDecodeError:
            return None

        if not entries:
            return None
        exact = [e for e in entries if e.get("name") == chart]
        entry = (exact or entries)[0]
        return entry.get("version") or None


def parse_releases(stdout: str) -> list[HelmRelease]:
    """Parse ``helm list --output json`` output."""
    if not stdout.strip():
        return []
    try:
        releases_data = json.loads(stdout)
    except json.JSONDecodeError:
        return []
    return [
        HelmRelease(
            name=r.get("name", ""),
            namespace=r.get("namespace", ""),
            status=r.get("status", ""),
            revision=str(r.get("revision", "")),
            chart=r.get("chart", ""),
            app_version=r.get("app_version", ""),
        )
        for r in releases_data or []
    ]
