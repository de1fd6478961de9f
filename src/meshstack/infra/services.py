"""On-disk service discovery.

A service is any directory directly under ``services/``. Nothing is cached:
every call rescans the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from meshstack.errors import PreconditionFailed, UnknownTarget
from meshstack.infra.constants import ProjectPaths

SERVICES_ROOT_MISSING = (
    "Services directory not found. Please run `meshstack init` first."
)


@dataclass(frozen=True)
class ServiceInfo:
    """A discovered application service.

    Attributes:
        name: Directory name under services/
        path: Path to the service directory
        buildable: Whether a build descriptor (Dockerfile) is present
        deployable: Whether a chart descriptor (Chart.yaml) is present
    """

    name: str
    path: Path
    buildable: bool
    deployable: bool


def list_services(root: Path) -> list[str]:
    """List service names under ``root``, sorted by name.

    Non-directory entries are ignored. An existing but empty root yields an
    empty list.

    Raises:
        PreconditionFailed: If ``root`` does not exist
    """
    if not root.is_dir():
        raise PreconditionFailed(SERVICES_ROOT_MISSING)
    names = sorted(entry.name for entry in root.iterdir() if entry.is_dir())
    logger.debug(f"Discovered {len(names)} service(s) under {root}: {names}")
    return names


def describe_service(paths: ProjectPaths, name: str) -> ServiceInfo:
    return ServiceInfo(
        name=name,
        path=paths.service_dir(name),
        buildable=paths.build_descriptor(name).is_file(),
        deployable=paths.chart_descriptor(name).is_file(),
    )


def discover(paths: ProjectPaths) -> list[ServiceInfo]:
    """Describe every service under the project's services root."""
    return [describe_service(paths, name) for name in list_services(paths.services)]


def select_services(paths: ProjectPaths, service: str | None) -> list[str]:
    """Resolve a service selection to an ordered list of names.

    Args:
        paths: Project paths
        service: A single service name, or None for every discovered service

    Raises:
        PreconditionFailed: If the services root is missing
        UnknownTarget: If the named service has no directory
    """
    available = list_services(paths.services)
    if service is None:
        return available
    if service not in available:
        raise UnknownTarget("service", service, available)
    return [service]
