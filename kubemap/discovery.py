"""
API discovery snapshot types and sources.

A discovery snapshot is an ordered list of APIResourceList entries, one per
group/version, as returned by the cluster's discovery endpoint. Snapshots come
either from a live cluster (KubectlDiscovery) or from the built-in fallback
shipped with the package.
"""

import json
import logging
import subprocess
import importlib.resources
from typing import Any, Dict, List, Optional

import yaml

from kubemap.config import Config
from kubemap.executor import CommandExecutor, get_executor

logger = logging.getLogger(__name__)

BUILTIN_SNAPSHOT = "builtin_resources.yaml"


class DiscoveryError(RuntimeError):
    """Raised when the discovery snapshot cannot be fetched from the cluster."""


class APIResource:
    """A resource descriptor as reported by the discovery endpoint."""

    def __init__(
        self,
        name: str,
        namespaced: bool = False,
        verbs: Optional[List[str]] = None,
        kind: str = "",
        short_names: Optional[List[str]] = None,
    ):
        self.name = name
        self.namespaced = namespaced
        self.verbs = list(verbs or [])
        self.kind = kind
        self.short_names = list(short_names or [])

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "APIResource":
        return cls(
            name=obj["name"],
            namespaced=bool(obj.get("namespaced", False)),
            verbs=obj.get("verbs") or [],
            kind=obj.get("kind", ""),
            short_names=obj.get("shortNames") or [],
        )

    def __repr__(self) -> str:
        return f"APIResource(name={self.name!r}, namespaced={self.namespaced!r}, verbs={self.verbs!r})"


class APIResourceList:
    """The resources served under one group/version."""

    def __init__(self, group_version: str, resources: Optional[List[APIResource]] = None):
        self.group_version = group_version
        self.resources = list(resources or [])

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> "APIResourceList":
        """
        Build a resource list from a decoded discovery document.

        Args:
            obj: Document with "groupVersion" and "resources" keys

        Returns:
            APIResourceList instance
        """
        return cls(
            group_version=obj.get("groupVersion", ""),
            resources=[APIResource.from_dict(r) for r in obj.get("resources") or []],
        )

    def __repr__(self) -> str:
        return f"APIResourceList(group_version={self.group_version!r}, resources={len(self.resources)})"


def load_builtin_snapshot() -> List[APIResourceList]:
    """
    Load the fallback discovery snapshot shipped with the package.

    Returns:
        List of APIResourceList covering the common built-in resource kinds
    """
    text = importlib.resources.files("kubemap.data").joinpath(BUILTIN_SNAPSHOT).read_text()
    documents = yaml.safe_load(text) or []
    return [APIResourceList.from_dict(doc) for doc in documents]


class KubectlDiscovery:
    """
    Discovery client backed by `kubectl get --raw`.

    Mirrors the preferred-resources walk of the Kubernetes discovery client:
    the core versions under /api and the preferred version of every group
    under /apis.
    """

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        kubectl: Optional[str] = None,
        context: Optional[str] = None,
        kubeconfig: Optional[str] = None,
    ):
        self.executor = executor or get_executor()
        self.kubectl = kubectl or Config.kubectl_binary()
        self.context = context if context is not None else Config.kube_context()
        self.kubeconfig = kubeconfig if kubeconfig is not None else Config.kubeconfig()

    def _command(self, path: str) -> List[str]:
        cmd = [self.kubectl]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(["get", "--raw", path])
        return cmd

    def get_raw(self, path: str) -> Dict[str, Any]:
        """
        Fetch and decode one discovery document.

        Raises:
            DiscoveryError: If kubectl fails or the response is not JSON
        """
        try:
            result = self.executor.run(self._command(path), capture_output=True, check=True)
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            raise DiscoveryError(f"Failed to fetch {path}: {e}") from e
        try:
            return json.loads(result.stdout)
        except (TypeError, ValueError) as e:
            raise DiscoveryError(f"Invalid discovery response for {path}: {e}") from e

    def preferred_group_versions(self) -> List[str]:
        """Return the core versions followed by every group's preferred version."""
        group_versions = list(self.get_raw("/api").get("versions") or [])
        for group in self.get_raw("/apis").get("groups") or []:
            preferred = group.get("preferredVersion") or {}
            group_version = preferred.get("groupVersion")
            if not group_version:
                versions = group.get("versions") or []
                if not versions:
                    continue
                group_version = versions[0].get("groupVersion")
            if group_version:
                group_versions.append(group_version)
        return group_versions

    def server_preferred_resources(self) -> List[APIResourceList]:
        """
        Fetch the resource lists for every preferred group/version.

        A group/version that fails to load is logged and left out of the
        snapshot, so aggregated APIs that are down do not hide the rest.
        Subresources are dropped, as in `kubectl api-resources`.

        Returns:
            Ordered list of APIResourceList
        """
        snapshot: List[APIResourceList] = []
        for group_version in self.preferred_group_versions():
            path = f"/api/{group_version}" if "/" not in group_version else f"/apis/{group_version}"
            try:
                resource_list = APIResourceList.from_dict(self.get_raw(path))
            except DiscoveryError as e:
                logger.warning(f"Skipping {group_version}: {e}")
                continue
            # subresources such as pods/log are not addressable kinds
            resource_list.resources = [r for r in resource_list.resources if "/" not in r.name]
            snapshot.append(resource_list)
        logger.info(f"Discovered {len(snapshot)} group versions")
        return snapshot
