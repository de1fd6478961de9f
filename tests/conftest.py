"""Shared fixtures: a temporary meshstack project and a recording executor."""

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner, Result

from meshstack.cli import app
from meshstack.cli.context import CLIContext
from meshstack.cli.deployment import ExecutionContext
from meshstack.cli.deployment.shell_commands import RecordingRunner
from meshstack.cli.shared.console import console
from meshstack.infra.constants import ProjectPaths
from meshstack.runtime.config.config_data import ProjectConfig
from meshstack.runtime.config.config_loader import save_config

ACME = ProjectConfig(
    project_name="acme",
    language="go",
    service_mesh="linkerd",
    ci_cd="github",
)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def project_config() -> ProjectConfig:
    return ACME


@pytest.fixture
def project_root(tmp_path: Path, project_config: ProjectConfig) -> Path:
    """An initialized project: config, services/, provision/ and overlays."""
    root = tmp_path / "project"
    root.mkdir()
    save_config(project_config, root / "meshstack.yaml")
    (root / "services").mkdir()
    (root / "provision").mkdir()
    for profile in ("dev", "staging", "prod"):
        (root / f"{profile}-values.yaml").write_text("# overlay\n")
    return root


@pytest.fixture
def paths(project_root: Path) -> ProjectPaths:
    return ProjectPaths(project_root)


@pytest.fixture
def make_service(paths: ProjectPaths) -> Callable[..., Path]:
    """Create services/<name> with the requested descriptor files."""

    def _make(name: str, *, dockerfile: bool = True, chart: bool = True) -> Path:
        service_dir = paths.service_dir(name)
        service_dir.mkdir(parents=True)
        if dockerfile:
            (service_dir / "Dockerfile").write_text("FROM alpine\n")
        if chart:
            (service_dir / "Chart.yaml").write_text(f"apiVersion: v2\nname: {name}\n")
        return service_dir

    return _make


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def exec_ctx(paths: ProjectPaths, runner: RecordingRunner, project_config: ProjectConfig) -> ExecutionContext:
    return ExecutionContext(paths=paths, config=project_config, executor=runner)


@pytest.fixture
def cli_context(paths: ProjectPaths, runner: RecordingRunner) -> CLIContext:
    return CLIContext(
        console=console,
        project_root=paths.project_root,
        paths=paths,
        executor=runner,
    )


@pytest.fixture
def invoke(cli_context: CLIContext) -> Callable[..., Result]:
    """Run the CLI against the temporary project with the recording executor."""
    cli = CliRunner()

    def _invoke(*args: str) -> Result:
        return cli.invoke(app, list(args), obj=cli_context)

    return _invoke
