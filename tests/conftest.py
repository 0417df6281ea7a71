"""Pytest configuration and shared fixtures."""
import os
import sys
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from kubemap.discovery import APIResource, APIResourceList  # noqa: E402
from kubemap.registry import ResourceRegistry  # noqa: E402

VERBS = ["create", "delete", "get", "list", "patch", "update", "watch"]


def make_list(group_version, *resources):
    """Build an APIResourceList from (name, namespaced) or (name, namespaced, verbs) tuples."""
    api_resources = []
    for entry in resources:
        name, namespaced = entry[0], entry[1]
        verbs = entry[2] if len(entry) > 2 else VERBS
        api_resources.append(APIResource(name=name, namespaced=namespaced, verbs=verbs))
    return APIResourceList(group_version, api_resources)


@pytest.fixture
def snapshot():
    """A small discovery snapshot with core, apps, rbac and metrics resources."""
    return [
        make_list("v1", ("pods", True), ("namespaces", False), ("bindings", True, [])),
        make_list("apps/v1", ("deployments", True), ("replicasets", True)),
        make_list("rbac.authorization.k8s.io/v1", ("clusterroles", False), ("roles", True)),
        make_list("networking.k8s.io/v1", ("networkpolicies", True)),
        make_list("metrics.k8s.io/v1beta1", ("nodes", False), ("pods", True)),
    ]


@pytest.fixture
def registry(snapshot, monkeypatch):
    """Registry populated from the small snapshot."""
    monkeypatch.delenv("KUBEMAP_IGNORED_GROUPS", raising=False)
    reg = ResourceRegistry()
    reg.populate(snapshot)
    return reg


@pytest.fixture
def builtin_registry(monkeypatch):
    """Registry populated from the built-in snapshot."""
    monkeypatch.delenv("KUBEMAP_IGNORED_GROUPS", raising=False)
    reg = ResourceRegistry()
    reg.populate_fallback()
    return reg
