"""Project and service scaffolding.

Creates the on-disk layout `meshstack init` promises and renders service
and CI scaffolds from the bundled Jinja2 templates. The template version
marker under ``.meshstack/`` records which template release a project was
last rendered with, so `meshstack update --template` can tell when the
bundled templates are newer.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from loguru import logger

from meshstack.errors import PreconditionFailed, UnknownTarget
from meshstack.infra.constants import CI_MANIFEST_PATHS, DEFAULT_CONSTANTS, ProjectPaths
from meshstack.infra.services import SERVICES_ROOT_MISSING, list_services
from meshstack.runtime.config.config_data import ProjectConfig

from .templates import render_template_to_file, template_exists

# Bump when anything under cli/templates changes
TEMPLATE_VERSION = "3"

_SERVICE_NAME = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")

_CHART_TEMPLATES = ("deployment.yaml", "service.yaml")

_MESH_ANNOTATIONS: dict[str, dict[str, str]] = {
    "istio": {"sidecar.istio.io/inject": "true"},
    "linkerd": {"linkerd.io/inject": "enabled"},
}

_CONTAINER_PORTS: dict[str, int] = {
    "rust": 8080,
    "go": 8080,
    "python": 8000,
    "node": 3000,
}


def validate_service_name(name: str) -> str:
    """Check a service name is usable as a directory, image and release name.

    Raises:
        PreconditionFailed: If the name is not a lowercase DNS label
    """
    if not _SERVICE_NAME.match(name):
        raise PreconditionFailed(
            f"Invalid service name: {name}",
            details="Use lowercase letters, digits and '-', starting and ending "
            "with a letter or digit.",
        )
    return name


def _context(config: ProjectConfig, service: str | None = None) -> dict[str, Any]:
    return {
        "project_name": config.project_name,
        "language": config.language,
        "service_mesh": config.service_mesh,
        "ci_cd": config.ci_cd,
        "service_name": service,
        "release_name": DEFAULT_CONSTANTS.release_name(service) if service else None,
        "mesh_annotations": _MESH_ANNOTATIONS.get(config.service_mesh, {}),
        "container_port": _CONTAINER_PORTS.get(config.language, 8080),
        "template_version": TEMPLATE_VERSION,
    }


def _dockerfile_template(language: str) -> str:
    name = f"service/Dockerfile.{language}.j2"
    return name if template_exists(name) else "service/Dockerfile.generic.j2"


# =============================================================================
# Project layout
# =============================================================================


def create_project_dirs(paths: ProjectPaths) -> list[Path]:
    """Create services/ and provision/; return the ones that were new."""
    created = []
    for directory in (paths.services, paths.provision):
        if not directory.exists():
            directory.mkdir(parents=True)
            created.append(directory)
    return created


def create_overlays(paths: ProjectPaths) -> list[Path]:
    """Create empty profile overlay files that don't exist yet."""
    created = []
    for profile in DEFAULT_CONSTANTS.OVERLAY_PROFILES:
        overlay = paths.overlay(f"{profile}{DEFAULT_CONSTANTS.VALUES_SUFFIX}")
        if not overlay.exists():
            overlay.write_text(f"# Helm values overlay for the {profile} profile\n")
            created.append(overlay)
    return created


def read_template_marker(paths: ProjectPaths) -> str | None:
    """Template version the project was last rendered with, if recorded."""
    marker = paths.template_marker
    if not marker.is_file():
        return None
    return marker.read_text().strip() or None


def write_template_marker(paths: ProjectPaths, version: str = TEMPLATE_VERSION) -> Path:
    paths.state.mkdir(parents=True, exist_ok=True)
    paths.template_marker.write_text(f"{version}\n")
    logger.debug(f"Template marker set to {version}")
    return paths.template_marker


# =============================================================================
# Services
# =============================================================================


def regenerate_chart_templates(
    paths: ProjectPaths, config: ProjectConfig, service: str
) -> list[Path]:
    """Re-render a service's chart templates, leaving Chart.yaml and values alone."""
    context = _context(config, service)
    target = paths.chart_templates(service)
    return [
        render_template_to_file(f"service/templates/{name}.j2", target / name, context)
        for name in _CHART_TEMPLATES
    ]


def generate_service(paths: ProjectPaths, config: ProjectConfig, name: str) -> list[Path]:
    """Scaffold a buildable, deployable service under services/<name>.

    Raises:
        PreconditionFailed: If the services root is missing, the name is
            invalid, or the service already exists
    """
    validate_service_name(name)
    if not paths.services.is_dir():
        raise PreconditionFailed(SERVICES_ROOT_MISSING)

    service_dir = paths.service_dir(name)
    if service_dir.exists():
        raise PreconditionFailed(
            f"Service '{name}' already exists at {service_dir}",
            details="Remove the directory first or pick another name.",
        )

    context = _context(config, name)
    files = [
        render_template_to_file(
            _dockerfile_template(config.language),
            paths.build_descriptor(name),
            context,
        ),
        render_template_to_file(
            "service/Chart.yaml.j2", paths.chart_descriptor(name), context
        ),
        render_template_to_file(
            "service/values.yaml.j2",
            service_dir / DEFAULT_CONSTANTS.CHART_VALUES,
            context,
        ),
    ]
    files.extend(regenerate_chart_templates(paths, config, name))
    logger.debug(f"Scaffolded service {name}: {[str(f) for f in files]}")
    return files


# =============================================================================
# CI/CD
# =============================================================================


def generate_ci(paths: ProjectPaths, config: ProjectConfig) -> Path:
    """Render the CI manifest for the project's CI/CD flavour.

    Raises:
        UnknownTarget: If ``ci_cd`` names an unsupported flavour
    """
    manifest = paths.ci_manifest(config.ci_cd)
    if manifest is None:
        raise UnknownTarget("CI provider", config.ci_cd, list(CI_MANIFEST_PATHS))
    return render_template_to_file(f"ci/{config.ci_cd}.yaml.j2", manifest, _context(config))


def apply_template_update(paths: ProjectPaths, config: ProjectConfig) -> list[Path]:
    """Bring a project up to the bundled template version.

    Regenerates the chart templates of every deployable service and the CI
    manifest, then rewrites the version marker.
    """
    written: list[Path] = []
    if paths.services.is_dir():
        for service in list_services(paths.services):
            if paths.chart_descriptor(service).is_file():
                written.extend(regenerate_chart_templates(paths, config, service))
    if paths.ci_manifest(config.ci_cd) is not None:
        written.append(generate_ci(paths, config))
    written.append(write_template_marker(paths))
    return written
