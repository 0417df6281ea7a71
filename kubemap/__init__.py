"""
Kubemap - A Python library mapping Kubernetes kind names to their API group, version and resource.
"""

from kubemap.gvr import (
    GroupVersionResource,
    MalformedGroupVersion,
    join_group_version,
    split_api_version,
    join_resource_triplet,
    split_resource_triplet,
    parse_group_version,
)
from kubemap.discovery import (
    APIResource,
    APIResourceList,
    DiscoveryError,
    KubectlDiscovery,
    load_builtin_snapshot,
)
from kubemap.registry import (
    IGNORED_GROUPS,
    ResourceRegistry,
    UnknownResource,
    load_registry,
    normalize,
)
from kubemap.manifest import is_workload_like, load_manifests, classify_manifests
from kubemap.config import Config

__all__ = [
    "GroupVersionResource",
    "MalformedGroupVersion",
    "join_group_version",
    "split_api_version",
    "join_resource_triplet",
    "split_resource_triplet",
    "parse_group_version",
    "APIResource",
    "APIResourceList",
    "DiscoveryError",
    "KubectlDiscovery",
    "load_builtin_snapshot",
    "IGNORED_GROUPS",
    "ResourceRegistry",
    "UnknownResource",
    "load_registry",
    "normalize",
    "is_workload_like",
    "load_manifests",
    "classify_manifests",
    "Config",
]

__version__ = "0.1.0"
