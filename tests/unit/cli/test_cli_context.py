"""Tests for CLI context dependency injection."""

import os
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from meshstack.cli.context import CLIContext, build_cli_context, get_cli_context
from meshstack.cli.deployment.shell_commands import CommandRunner
from meshstack.errors import ConfigMissing


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = CLIContext(
        console=Mock(),
        project_root=Path("/test"),
        paths=Mock(),
        executor=Mock(),
    )

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


@patch("meshstack.cli.context.get_project_root")
def test_build_cli_context_creates_all_dependencies(mock_get_root, tmp_path):
    """Test that build_cli_context wires paths and a real executor."""
    mock_get_root.return_value = tmp_path

    ctx = build_cli_context()

    assert ctx.project_root == tmp_path
    assert ctx.paths.project_root == tmp_path
    assert isinstance(ctx.executor, CommandRunner)
    assert ctx.executor.project_root == tmp_path


def test_build_cli_context_loads_dotenv_without_override(tmp_path, monkeypatch):
    """Test that .env fills missing variables but never replaces set ones."""
    (tmp_path / ".env").write_text(
        "MESHSTACK_TEST_FRESH=from-file\nMESHSTACK_TEST_SET=from-file\n"
    )
    monkeypatch.delenv("MESHSTACK_TEST_FRESH", raising=False)
    monkeypatch.setenv("MESHSTACK_TEST_SET", "from-shell")

    build_cli_context(tmp_path)

    assert os.environ["MESHSTACK_TEST_FRESH"] == "from-file"
    assert os.environ["MESHSTACK_TEST_SET"] == "from-shell"
    monkeypatch.delenv("MESHSTACK_TEST_FRESH", raising=False)


def test_get_cli_context_from_typer_context(cli_context):
    """Test that get_cli_context retrieves from Typer context."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = cli_context

    assert get_cli_context(typer_ctx) is cli_context


def test_get_cli_context_with_invalid_obj_falls_back():
    """Test that get_cli_context falls back when ctx.obj is not CLIContext."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"

    with patch("meshstack.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(typer_ctx)

        mock_build.assert_called_once()


def test_get_cli_context_without_typer_context_builds_one():
    """Test that get_cli_context builds a context when none is passed."""
    with patch("meshstack.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        assert get_cli_context(None) is mock_build.return_value


def test_execution_context_loads_config_when_present(cli_context, project_config):
    exec_ctx = cli_context.execution_context(kube_context="prod-ctx", dry_run=True)

    assert exec_ctx.config == project_config
    assert exec_ctx.kube_context == "prod-ctx"
    assert exec_ctx.dry_run is True
    assert exec_ctx.executor is cli_context.executor


def test_execution_context_tolerates_missing_config(cli_context, paths):
    paths.config_yaml.unlink()

    assert cli_context.execution_context().config is None
    with pytest.raises(ConfigMissing):
        cli_context.execution_context(require_config=True)
