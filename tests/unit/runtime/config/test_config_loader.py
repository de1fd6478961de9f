"""Tests for meshstack.yaml loading and saving."""

import pytest

from meshstack.errors import ConfigInvalid, ConfigMissing
from meshstack.runtime.config.config_data import ProjectConfig
from meshstack.runtime.config.config_loader import (
    load_config,
    load_config_if_present,
    parse_config,
    save_config,
)


def test_save_then_load_round_trips_all_fields(tmp_path):
    config = ProjectConfig(
        project_name="my-test-app", language="go", service_mesh="linkerd", ci_cd="argo"
    )
    path = tmp_path / "meshstack.yaml"

    save_config(config, path)
    loaded = load_config(path)

    assert loaded == config
    assert not path.with_suffix(".tmp").exists()


def test_saved_file_is_plain_yaml_in_field_order(tmp_path):
    path = tmp_path / "meshstack.yaml"
    save_config(
        ProjectConfig(project_name="acme", language="rust", service_mesh="istio", ci_cd="github"),
        path,
    )

    assert path.read_text().splitlines() == [
        "project_name: acme",
        "language: rust",
        "service_mesh: istio",
        "ci_cd: github",
    ]


def test_missing_file_raises_config_missing(tmp_path):
    with pytest.raises(ConfigMissing) as excinfo:
        load_config(tmp_path / "meshstack.yaml")

    assert "meshstack init" in (excinfo.value.details or "")


def test_load_config_if_present_returns_none_for_missing_file(tmp_path):
    assert load_config_if_present(tmp_path / "meshstack.yaml") is None


def test_empty_field_is_invalid():
    with pytest.raises(ConfigInvalid) as excinfo:
        parse_config("project_name: ''\nlanguage: go\nservice_mesh: istio\nci_cd: github\n")

    assert "project_name" in (excinfo.value.details or "")


def test_missing_field_is_invalid():
    with pytest.raises(ConfigInvalid) as excinfo:
        parse_config("project_name: acme\nlanguage: go\nservice_mesh: istio\n")

    assert "ci_cd" in (excinfo.value.details or "")


@pytest.mark.parametrize("content", ["- a\n- b\n", "just a string\n", ""])
def test_non_mapping_document_is_invalid(content):
    with pytest.raises(ConfigInvalid):
        parse_config(content)


def test_malformed_yaml_is_invalid():
    with pytest.raises(ConfigInvalid):
        parse_config("project_name: [unclosed\n")


def test_unknown_keys_are_ignored():
    config = parse_config(
        "project_name: acme\nlanguage: go\nservice_mesh: istio\nci_cd: github\nextra: 1\n"
    )

    assert config.project_name == "acme"
