"""Tests for profile and environment resolution."""

import pytest

from meshstack.errors import PreconditionFailed, ProfileNotImplemented, UnknownTarget
from meshstack.infra import profiles


@pytest.mark.parametrize("name", ["dev", "prod"])
def test_install_profiles_map_to_values_files(name):
    assert profiles.resolve_install_profile(name) == f"{name}-values.yaml"


@pytest.mark.parametrize("name", ["dev", "prod", "staging"])
def test_deploy_environments_map_to_values_files(name):
    assert profiles.resolve_deploy_environment(name) == f"{name}-values.yaml"


def test_staging_is_not_an_install_profile():
    with pytest.raises(UnknownTarget) as excinfo:
        profiles.resolve_install_profile("staging")

    assert str(excinfo.value) == "Unknown profile: staging. Valid profiles are: dev, prod, custom"


def test_unknown_environment_lists_deploy_choices():
    with pytest.raises(UnknownTarget) as excinfo:
        profiles.resolve_deploy_environment("qa")

    assert excinfo.value.kind == "environment"
    assert excinfo.value.valid_choices == ("dev", "prod", "staging", "custom")


@pytest.mark.parametrize(
    "resolve", [profiles.resolve_install_profile, profiles.resolve_deploy_environment]
)
def test_custom_is_always_not_implemented(resolve):
    with pytest.raises(ProfileNotImplemented) as excinfo:
        resolve("custom")

    assert isinstance(excinfo.value, PreconditionFailed)
    assert excinfo.value.message == "Custom profile not yet implemented."
