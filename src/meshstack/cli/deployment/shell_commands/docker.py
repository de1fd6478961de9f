"""Docker command abstractions.

This module builds argument vectors for building and pushing service
images:

    docker build -t <registry>/<name>:latest <path>
    docker push <registry>/<name>:latest
"""

from __future__ import annotations

from meshstack.infra.constants import DEFAULT_CONSTANTS

from .types import CommandOptions, Tool

DOCKER = Tool.DOCKER.value


class DockerCommands:
    """Docker-related shell commands.

    Provides operations for:
    - Image builds from a service directory
    - Image pushes to the configured registry
    """

    @staticmethod
    def image_tag(service: str, options: CommandOptions) -> str:
        """Image reference for a service, e.g. "meshstack/orders:latest"."""
        return DEFAULT_CONSTANTS.image_name(options.registry, service)

    @classmethod
    def build_image(cls, service: str, path: str, options: CommandOptions) -> list[str]:
        """Build a ``docker build`` command for a service directory.

        Example:
            >>> DockerCommands.build_image("orders", "services/orders", CommandOptions())
            ['docker', 'build', '-t', 'meshstack/orders:latest', 'services/orders']
        """
        return [DOCKER, "build", "-t", cls.image_tag(service, options), path]

    @classmethod
    def push_image(cls, service: str, options: CommandOptions) -> list[str]:
        """Build a ``docker push`` command for a service image."""
        return [DOCKER, "push", cls.image_tag(service, options)]
