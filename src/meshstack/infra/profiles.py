"""Profile and environment name resolution.

A profile selects a values overlay named ``<profile>-values.yaml`` at the
project root. Each operation accepts its own fixed set of names; ``custom``
is reserved and always rejected.
"""

from __future__ import annotations

from collections.abc import Sequence

from meshstack.errors import ProfileNotImplemented, UnknownTarget
from meshstack.infra.constants import DEFAULT_CONSTANTS

CUSTOM_PROFILE = "custom"

INSTALL_PROFILES: tuple[str, ...] = ("dev", "prod")
DEPLOY_ENVIRONMENTS: tuple[str, ...] = ("dev", "prod", "staging")


def values_file_name(name: str) -> str:
    return f"{name}{DEFAULT_CONSTANTS.VALUES_SUFFIX}"


def resolve(name: str, allowed: Sequence[str], *, kind: str = "profile") -> str:
    """Resolve a profile name to its overlay file name.

    Does not check that the file exists; callers decide what to do about
    a missing overlay.

    Args:
        name: Profile or environment name
        allowed: Names accepted by the calling operation
        kind: Noun used in the error message ("profile" or "environment")

    Returns:
        Overlay file name, e.g. "prod-values.yaml"

    Raises:
        ProfileNotImplemented: For the reserved "custom" profile
        UnknownTarget: For any other name outside ``allowed``
    """
    if name == CUSTOM_PROFILE:
        raise ProfileNotImplemented()
    if name not in allowed:
        raise UnknownTarget(kind, name, [*allowed, CUSTOM_PROFILE])
    return values_file_name(name)


def resolve_install_profile(name: str) -> str:
    return resolve(name, INSTALL_PROFILES, kind="profile")


def resolve_deploy_environment(name: str) -> str:
    return resolve(name, DEPLOY_ENVIRONMENTS, kind="environment")
