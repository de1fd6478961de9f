"""Project constants and path layout.

This module centralizes the magic strings and paths used across
meshstack operations.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from meshstack.utils.paths import CONFIG_FILE_NAME


@dataclass(frozen=True)
class MeshstackConstants:
    """Constants for meshstack-managed projects.

    All attributes are class-level and immutable.
    """

    # Release naming
    SERVICE_RELEASE_PREFIX: str = "meshstack-"

    # Image defaults
    DEFAULT_REGISTRY: str = "meshstack"
    IMAGE_TAG: str = "latest"

    # Descriptor files inside services/<name>/
    BUILD_DESCRIPTOR: str = "Dockerfile"
    CHART_DESCRIPTOR: str = "Chart.yaml"
    CHART_VALUES: str = "values.yaml"
    CHART_TEMPLATES_DIR: str = "templates"

    # Relative path fragments for project structure
    SERVICES_DIR: str = "services"
    PROVISION_DIR: str = "provision"
    STATE_DIR: str = ".meshstack"
    TEMPLATE_MARKER: str = "template-version"
    VALUES_SUFFIX: str = "-values.yaml"

    # Config defaults used by `init`
    DEFAULT_PROJECT_NAME: str = "my-app"
    DEFAULT_LANGUAGE: str = "rust"
    DEFAULT_SERVICE_MESH: str = "istio"
    DEFAULT_CI_CD: str = "github"

    # Overlay files created by `init`
    OVERLAY_PROFILES: tuple[str, ...] = ("dev", "staging", "prod")

    def release_name(self, service: str) -> str:
        """Release name for an application service."""
        return f"{self.SERVICE_RELEASE_PREFIX}{service}"

    def image_name(self, registry: str, service: str) -> str:
        """Fully qualified image reference for a service."""
        return f"{registry}/{service}:{self.IMAGE_TAG}"


# CI manifest locations keyed by the `ci_cd` config value
CI_MANIFEST_PATHS: dict[str, str] = {
    "github": ".github/workflows/meshstack.yaml",
    "gitlab": ".gitlab-ci.yml",
    "argo": "argocd/application.yaml",
}


class ProjectPaths:
    """Path resolver for project directories and files.

    All paths are derived from the project root.
    """

    def __init__(self, project_root: Path) -> None:
        """Initialize project paths.

        Args:
            project_root: Path to the project root directory
        """
        self._project_root = project_root
        self._constants = DEFAULT_CONSTANTS

        self.services = project_root / self._constants.SERVICES_DIR
        self.provision = project_root / self._constants.PROVISION_DIR
        self.state = project_root / self._constants.STATE_DIR

    @property
    def project_root(self) -> Path:
        """Get path to project root."""
        return self._project_root

    @property
    def config_yaml(self) -> Path:
        """Get path to meshstack.yaml."""
        return self._project_root / CONFIG_FILE_NAME

    @property
    def template_marker(self) -> Path:
        """Get path to the scaffold template version marker."""
        return self.state / self._constants.TEMPLATE_MARKER

    def service_dir(self, service: str) -> Path:
        return self.services / service

    def build_descriptor(self, service: str) -> Path:
        return self.service_dir(service) / self._constants.BUILD_DESCRIPTOR

    def chart_descriptor(self, service: str) -> Path:
        return self.service_dir(service) / self._constants.CHART_DESCRIPTOR

    def chart_templates(self, service: str) -> Path:
        return self.service_dir(service) / self._constants.CHART_TEMPLATES_DIR

    def overlay(self, values_file: str) -> Path:
        """Get path to a profile overlay file at the project root."""
        return self._project_root / values_file

    def ci_manifest(self, ci_cd: str) -> Path | None:
        """Get path to the CI manifest for a CI/CD flavour, if it is known."""
        relative = CI_MANIFEST_PATHS.get(ci_cd)
        return self._project_root / relative if relative else None


DEFAULT_CONSTANTS = MeshstackConstants()
