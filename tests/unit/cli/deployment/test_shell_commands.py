"""Tests for argument vector builders and tool output parsing."""

import json

import pytest

from meshstack.cli.deployment.shell_commands import (
    CommandOptions,
    CommandResult,
    HelmCommands,
    RecordingRunner,
    ShellCommands,
    Tool,
    build,
    get_provider,
)
from meshstack.cli.deployment.shell_commands.builder import supported_operations
from meshstack.cli.deployment.shell_commands.helm import chart_version, parse_releases
from meshstack.errors import UnknownTarget


class TestHelmVectors:
    def test_install_flag_order(self):
        options = CommandOptions(
            values_file="prod-values.yaml", kube_context="prod-ctx", dry_run=True
        )

        assert build(Tool.HELM, "install", "istio", "istio/istio", options) == [
            "helm", "install", "istio", "istio/istio",
            "--dry-run", "--kube-context", "prod-ctx", "--values", "prod-values.yaml",
        ]

    def test_install_without_options_is_bare(self):
        assert build(Tool.HELM, "install", "grafana", "grafana/grafana") == [
            "helm", "install", "grafana", "grafana/grafana",
        ]

    def test_upgrade_install(self):
        options = CommandOptions(values_file="dev-values.yaml", kube_context="ctx")

        assert build(Tool.HELM, "upgrade", "meshstack-api", "services/api", options) == [
            "helm", "upgrade", "--install", "meshstack-api", "services/api",
            "--kube-context", "ctx", "--values", "dev-values.yaml",
        ]

    def test_uninstall_ignores_values_file(self):
        options = CommandOptions(values_file="dev-values.yaml", kube_context="ctx")

        assert build(Tool.HELM, "uninstall", "vault", None, options) == [
            "helm", "uninstall", "vault", "--kube-context", "ctx",
        ]

    def test_queries(self):
        assert build(Tool.HELM, "list", "istio") == [
            "helm", "list", "--filter", "istio", "--output", "json",
        ]
        assert build(Tool.HELM, "search", None, "grafana/grafana") == [
            "helm", "search", "repo", "grafana/grafana", "--output", "json",
        ]
        assert build(Tool.HELM, "version") == ["helm", "version"]

    def test_missing_release_is_rejected(self):
        with pytest.raises(ValueError, match="requires a release"):
            build(Tool.HELM, "install", None, "istio/istio")


class TestOtherToolVectors:
    def test_docker_build_and_push(self):
        options = CommandOptions(registry="ghcr.io/acme")

        assert build(Tool.DOCKER, "build", "api", "services/api", options) == [
            "docker", "build", "-t", "ghcr.io/acme/api:latest", "services/api",
        ]
        assert build(Tool.DOCKER, "push", "api", None, options) == [
            "docker", "push", "ghcr.io/acme/api:latest",
        ]

    def test_kubectl(self):
        assert build(Tool.KUBECTL, "cluster-info", options=CommandOptions(kube_context="c")) == [
            "kubectl", "cluster-info", "--context", "c",
        ]
        assert build(Tool.KUBECTL, "use-context", options=CommandOptions(kube_context="kind-x")) == [
            "kubectl", "config", "use-context", "kind-x",
        ]

    def test_kind_and_k3d(self):
        assert build(Tool.KIND, "create", "acme") == ["kind", "create", "cluster", "--name", "acme"]
        assert build(Tool.KIND, "list") == ["kind", "get", "clusters"]
        assert build(Tool.K3D, "create", "acme") == [
            "k3d", "cluster", "create", "acme",
            "-p", "80:80@loadbalancer", "-p", "443:443@loadbalancer",
        ]
        assert build(Tool.K3D, "list") == ["k3d", "cluster", "list", "--output", "json"]

    def test_unsupported_operation_lists_supported_ones(self):
        with pytest.raises(ValueError, match="Supported: build, push"):
            build(Tool.DOCKER, "tag", "api")

    def test_supported_operations(self):
        assert supported_operations(Tool.KUBECTL) == ["cluster-info", "use-context"]

    def test_facade_build_matches_builder(self):
        commands = ShellCommands(RecordingRunner())

        assert commands.build(Tool.HELM, "uninstall", "grafana") == ["helm", "uninstall", "grafana"]


class TestClusterProviders:
    def test_context_names(self):
        assert get_provider("kind").context_name("acme") == "kind-acme"
        assert get_provider("k3d").context_name("acme") == "k3d-acme"

    def test_unknown_provider(self):
        with pytest.raises(UnknownTarget) as excinfo:
            get_provider("minikube")

        assert excinfo.value.valid_choices == ("kind", "k3d")

    def test_parse_kind_clusters(self):
        assert get_provider("kind").parse_clusters("acme\nother\n\n") == ["acme", "other"]

    def test_parse_k3d_clusters(self):
        stdout = json.dumps([{"name": "acme"}, {"name": "dev"}])

        assert get_provider("k3d").parse_clusters(stdout) == ["acme", "dev"]
        assert get_provider("k3d").parse_clusters("not json") == []


class TestHelmQueries:
    RELEASES = json.dumps(
        [
            {"name": "istio-base", "namespace": "istio-system", "status": "deployed",
             "revision": 1, "chart": "base-1.21.0", "app_version": "1.21.0"},
            {"name": "istio", "namespace": "istio-system", "status": "deployed",
             "revision": 3, "chart": "istio-1.20.2", "app_version": "1.20.2"},
        ]
    )

    def test_parse_releases(self):
        releases = parse_releases(self.RELEASES)

        assert [r.name for r in releases] == ["istio-base", "istio"]
        assert releases[1].revision == "3"

    def test_find_release_matches_name_exactly(self):
        runner = RecordingRunner({("helm", "list"): CommandResult(True, self.RELEASES)})

        release = HelmCommands(runner).find_release("istio", CommandOptions())

        assert release is not None
        assert release.chart == "istio-1.20.2"

    def test_list_releases_failure_returns_none(self):
        runner = RecordingRunner({("helm", "list"): CommandResult(False, stderr="boom", returncode=1)})

        assert HelmCommands(runner).list_releases("istio", CommandOptions()) is None

    def test_latest_chart_version_prefers_exact_name(self):
        search = json.dumps(
            [
                {"name": "grafana/grafana-agent", "version": "0.9.0"},
                {"name": "grafana/grafana", "version": "7.3.0"},
            ]
        )
        runner = RecordingRunner({("helm", "search"): CommandResult(True, search)})

        assert HelmCommands(runner).latest_chart_version("grafana/grafana") == "7.3.0"

    def test_latest_chart_version_empty_result(self):
        runner = RecordingRunner({("helm", "search"): CommandResult(True, "[]")})

        assert HelmCommands(runner).latest_chart_version("grafana/grafana") is None

    @pytest.mark.parametrize(
        ("chart", "version"),
        [
            ("cert-manager-v1.14.4", "v1.14.4"),
            ("ingress-nginx-4.10.0", "4.10.0"),
            ("vault", None),
        ],
    )
    def test_chart_version(self, chart, version):
        assert chart_version(chart) == version
