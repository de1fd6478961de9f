"""Tests for the component catalog."""

import pytest

from meshstack.errors import UnknownTarget
from meshstack.infra import catalog

ALL_KEYS = ["istio", "prometheus", "grafana", "cert-manager", "nginx-ingress", "vault"]


def test_default_install_set_excludes_vault_in_catalog_order():
    keys = [c.key for c in catalog.default_install_set()]

    assert keys == ["istio", "prometheus", "grafana", "cert-manager", "nginx-ingress"]


def test_default_destroy_set_is_all_six_components():
    assert [c.key for c in catalog.default_destroy_set()] == ALL_KEYS


def test_default_sets_are_stable_across_calls():
    assert catalog.default_install_set() == catalog.default_install_set()
    assert catalog.default_destroy_set() == catalog.default_destroy_set()


@pytest.mark.parametrize(
    ("key", "chart"),
    [
        ("istio", "istio/istio"),
        ("prometheus", "prometheus-community/prometheus"),
        ("grafana", "grafana/grafana"),
        ("cert-manager", "cert-manager/cert-manager"),
        ("nginx-ingress", "ingress-nginx/ingress-nginx"),
        ("vault", "hashicorp/vault"),
    ],
)
def test_lookup_returns_chart_coordinate(key, chart):
    assert catalog.lookup(key) == chart


def test_component_release_is_bare_key():
    assert catalog.get_component("cert-manager").release == "cert-manager"


def test_unknown_component_lists_valid_keys():
    with pytest.raises(UnknownTarget) as excinfo:
        catalog.lookup("nonexistent")

    assert excinfo.value.valid_choices == tuple(ALL_KEYS)
    assert str(excinfo.value) == (
        "Unknown component: nonexistent. Valid components are: "
        "istio, prometheus, grafana, cert-manager, nginx-ingress, vault"
    )
