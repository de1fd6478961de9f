"""Registry of installable infrastructure components.

The catalog is an ordered, immutable table of component key to chart
coordinate. Lookups, default target sets and error messages are all
derived from the same table.
"""

from __future__ import annotations

from dataclasses import dataclass

from meshstack.errors import UnknownTarget


@dataclass(frozen=True)
class Component:
    """An infrastructure component installable via Helm.

    Attributes:
        key: Component key, also used as the Helm release name
        chart: Chart coordinate in ``<repo>/<chart>`` form
        default_install: Whether the component is part of the default install set
    """

    key: str
    chart: str
    default_install: bool = True

    @property
    def release(self) -> str:
        """Release name used for install/upgrade/uninstall."""
        return self.key


COMPONENTS: tuple[Component, ...] = (
    Component("istio", "istio/istio"),
    Component("prometheus", "prometheus-community/prometheus"),
    Component("grafana", "grafana/grafana"),
    Component("cert-manager", "cert-manager/cert-manager"),
    Component("nginx-ingress", "ingress-nginx/ingress-nginx"),
    Component("vault", "hashicorp/vault", default_install=False),
)


def component_keys() -> tuple[str, ...]:
    """All component keys in catalog order."""
    return tuple(c.key for c in COMPONENTS)


def get_component(key: str) -> Component:
    """Look up a component by key.

    Raises:
        UnknownTarget: If the key is not in the catalog
    """
    for component in COMPONENTS:
        if component.key == key:
            return component
    raise UnknownTarget("component", key, component_keys())


def lookup(key: str) -> str:
    """Return the chart coordinate for a component key."""
    return get_component(key).chart


def default_install_set() -> list[Component]:
    """Components installed when no component is named (vault excluded)."""
    return [c for c in COMPONENTS if c.default_install]


def default_destroy_set() -> list[Component]:
    """Components removed by a full teardown (all of them)."""
    return list(COMPONENTS)
