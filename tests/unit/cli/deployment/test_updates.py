"""Tests for chart and template version diffing."""

import json
from unittest.mock import MagicMock

import pytest

from meshstack.cli.deployment.shell_commands import CommandOptions, CommandResult, RecordingRunner
from meshstack.cli.deployment.updates import (
    HelmVersionSource,
    StaticVersionSource,
    UpdateInfo,
    UpdateKind,
    VersionDiffChecker,
    VersionLookupFailed,
)
from meshstack.cli.scaffold import write_template_marker
from meshstack.infra.catalog import get_component

GRAFANA = get_component("grafana")


class TestChartCheck:
    def test_newer_chart_is_reported(self):
        checker = VersionDiffChecker(
            StaticVersionSource({"grafana": "7.0.0"}, {"grafana/grafana": "7.3.0"})
        )

        assert checker.check(GRAFANA) == UpdateInfo("grafana", "7.0.0", "7.3.0", UpdateKind.CHART)

    def test_equal_versions_yield_nothing(self):
        checker = VersionDiffChecker(
            StaticVersionSource({"grafana": "7.3.0"}, {"grafana/grafana": "7.3.0"})
        )

        assert checker.check(GRAFANA) is None

    def test_uninstalled_component_yields_nothing(self):
        checker = VersionDiffChecker(StaticVersionSource(latest={"grafana/grafana": "7.3.0"}))

        assert checker.check(GRAFANA) is None

    def test_failed_lookup_warns_and_continues(self):
        console = MagicMock()
        checker = VersionDiffChecker(StaticVersionSource({"grafana": "7.0.0"}), console)

        assert checker.check(GRAFANA) is None
        console.warn.assert_called_once()
        assert "Could not check grafana for updates" in console.warn.call_args.args[0]


class TestHelmVersionSource:
    def test_installed_version_from_chart_field(self):
        releases = [{"name": "grafana", "namespace": "monitoring", "status": "deployed",
                     "revision": 4, "chart": "grafana-7.0.0"}]
        runner = RecordingRunner({("helm", "list"): CommandResult(True, json.dumps(releases))})

        assert HelmVersionSource(runner).installed_version("grafana", CommandOptions()) == "7.0.0"

    def test_unreadable_chart_version_raises(self):
        releases = [{"name": "grafana", "namespace": "monitoring", "status": "deployed",
                     "revision": 4, "chart": "grafana"}]
        runner = RecordingRunner({("helm", "list"): CommandResult(True, json.dumps(releases))})

        with pytest.raises(VersionLookupFailed, match="chart 'grafana'"):
            HelmVersionSource(runner).installed_version("grafana", CommandOptions())

    def test_unreadable_chart_version_is_skipped_not_reported(self):
        releases = [{"name": "grafana", "namespace": "monitoring", "status": "deployed",
                     "revision": 4, "chart": "grafana"}]
        runner = RecordingRunner({
            ("helm", "list"): CommandResult(True, json.dumps(releases)),
            ("helm", "search"): CommandResult(
                True, json.dumps([{"name": "grafana/grafana", "version": "7.3.0"}])
            ),
        })
        console = MagicMock()

        assert VersionDiffChecker(HelmVersionSource(runner), console).check(GRAFANA) is None
        console.warn.assert_called_once()
        assert not runner.calls_to("helm", "search")

    def test_queries_go_through_the_given_runner(self):
        runner = RecordingRunner()

        assert HelmVersionSource(runner).commands.runner is runner

    def test_latest_version_failure_raises(self):
        runner = RecordingRunner({("helm", "search"): CommandResult(False, returncode=1)})

        with pytest.raises(VersionLookupFailed, match="helm repo add"):
            HelmVersionSource(runner).latest_version("grafana/grafana")


class TestTemplateCheck:
    def test_missing_marker_is_outdated(self, paths):
        info = VersionDiffChecker(StaticVersionSource(), template_version="3").check_templates(paths)

        assert info == UpdateInfo("templates", "none", "3", UpdateKind.TEMPLATE)

    def test_current_marker_is_up_to_date(self, paths):
        write_template_marker(paths, "3")

        assert VersionDiffChecker(StaticVersionSource(), template_version="3").check_templates(paths) is None

    def test_old_marker_is_outdated(self, paths):
        write_template_marker(paths, "2")

        info = VersionDiffChecker(StaticVersionSource(), template_version="3").check_templates(paths)

        assert info is not None
        assert info.current_version == "2"
