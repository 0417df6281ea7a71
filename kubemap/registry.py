import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple, Union

from kubemap.config import Config
from kubemap.discovery import (
    APIResourceList,
    DiscoveryError,
    KubectlDiscovery,
    load_builtin_snapshot,
)
from kubemap.gvr import (
    GroupVersionResource,
    MalformedGroupVersion,
    join_group_version,
    join_resource_triplet,
    parse_group_version,
)
from kubemap.manifest import is_workload_like

logger = logging.getLogger(__name__)

# API groups whose resources never enter the registry
IGNORED_GROUPS = ("metrics.k8s.io",)

WILDCARD = "*"

Snapshot = Iterable[Union[APIResourceList, Dict[str, Any], None]]


class UnknownResource(LookupError):
    """Raised when a resource name is not found in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"resource '{name}' unknown. Make sure the resource is found at "
            "`kubectl api-resources`, the resources supported by a live cluster may differ"
        )


def normalize(name: str) -> str:
    """
    Turn a kind or resource name into its lower-case plural resource name.

    A three-rule heuristic: names ending in "s" are kept, a trailing "y"
    becomes "ies", anything else gets an "s". Irregular plurals are not
    handled (e.g. "Endpoints" is fine, "ingress" stays "ingress").

    Examples:
        "pod" -> "pods"
        "Deployment" -> "deployments"
        "NetworkPolicy" -> "networkpolicies"

    Args:
        name: Kind or resource name

    Returns:
        Canonical resource name, or "" for empty input
    """
    name = name.lower()
    if not name or name.endswith("s"):
        return name
    if name.endswith("y"):
        return name[:-1] + "ies"
    return name + "s"


class ResourceRegistry:
    """
    Registry of the resources served by a cluster.

    Maps resource names to their group/version and records which
    group/version/resource triples are namespaced. Populate it once
    (populate(), populate_fallback() or initialize()) before querying;
    after that it is only read and can be shared between threads.

    Re-populating merges: names already registered keep their first
    group/version.
    """

    def __init__(self, ignored_groups: Optional[Iterable[str]] = None):
        """
        Initialize an empty registry.

        Args:
            ignored_groups: API groups to leave out. Defaults to IGNORED_GROUPS
                plus any listed in KUBEMAP_IGNORED_GROUPS.
        """
        if ignored_groups is None:
            ignored_groups = list(IGNORED_GROUPS) + Config.extra_ignored_groups()
        self.ignored_groups: Tuple[str, ...] = tuple(ignored_groups)
        self.group_version_by_name: Dict[str, str] = {}
        self.namespaced_triples: Set[str] = set()
        # Deprecated: only kept for callers asking for cluster scope directly
        self.cluster_scoped_triples: Set[str] = set()

    def __len__(self) -> int:
        return len(self.group_version_by_name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize(name) in self.group_version_by_name

    def populate(self, snapshot: Snapshot) -> int:
        """
        Add the resources of a discovery snapshot.

        Entries with a malformed group/version or an ignored group are skipped
        whole; resources without verbs or with an already registered name are
        skipped one by one.

        Args:
            snapshot: Ordered APIResourceList entries (decoded discovery
                documents are accepted too)

        Returns:
            Number of resource names added
        """
        added = 0
        for entry in snapshot:
            if entry is None:
                continue
            if isinstance(entry, dict):
                entry = APIResourceList.from_dict(entry)
            if not entry.resources:
                continue

            try:
                group, version = parse_group_version(entry.group_version)
            except MalformedGroupVersion as e:
                logger.warning(f"Skipping discovery entry: {e}")
                continue

            if group in self.ignored_groups:
                logger.debug(f"Ignoring API group {group!r}")
                continue

            group_version = join_group_version(group, version)
            for api_resource in entry.resources:
                if not api_resource.verbs:
                    continue
                if api_resource.name in self.group_version_by_name:
                    logger.debug(
                        f"{api_resource.name} already registered as "
                        f"{self.group_version_by_name[api_resource.name]}, skipping {group_version}"
                    )
                    continue
                self.group_version_by_name[api_resource.name] = group_version
                triplet = join_resource_triplet(group, version, api_resource.name)
                if api_resource.namespaced:
                    self.namespaced_triples.add(triplet)
                else:
                    self.cluster_scoped_triples.add(triplet)
                added += 1

        logger.info(f"Registered {added} resources ({len(self)} total)")
        return added

    def populate_fallback(self) -> int:
        """Add the built-in snapshot of common Kubernetes resources."""
        return self.populate(load_builtin_snapshot())

    def initialize(self, discovery: Optional[Any] = None) -> "ResourceRegistry":
        """
        Populate the registry from a discovery client, then add the built-in
        snapshot for any names discovery did not report.

        Args:
            discovery: Object with a server_preferred_resources() method, or
                None to use the built-in snapshot only

        Returns:
            The registry itself
        """
        if discovery is not None:
            try:
                self.populate(discovery.server_preferred_resources())
            except DiscoveryError as e:
                logger.warning(f"Discovery failed, using built-in resources: {e}")

        # fills in whatever discovery did not report; discovered entries win
        logger.info("Loading built-in resource snapshot")
        self.populate_fallback()
        return self

    def resolve(self, name: str) -> GroupVersionResource:
        """
        Get the group/version/resource for a kind or resource name.

        Args:
            name: Kind or resource name, singular or plural, any case

        Returns:
            GroupVersionResource; the empty triple for "" and "*"

        Raises:
            UnknownResource: If the name is not registered
        """
        resource = normalize(name)
        group_version = self.group_version_by_name.get(resource)
        if group_version is not None:
            parts = group_version.split("/")
            if len(parts) >= 2:
                return GroupVersionResource(parts[0], parts[1], resource)
        if name in ("", WILDCARD):
            return GroupVersionResource()
        raise UnknownResource(name)

    def is_known_kind(self, name: str) -> bool:
        """Check whether the kind is a known Kubernetes kind. The apiVersion is not checked."""
        try:
            self.resolve(name)
        except UnknownResource:
            return False
        return True

    def is_namespace_scoped(self, gvr: GroupVersionResource) -> bool:
        """
        Check whether a group/version/resource is namespaced.

        Unknown and cluster-scoped resources both return False.
        """
        return self._in_scope_set(gvr, self.namespaced_triples)

    def is_namespace_scoped_by_name(self, name: str) -> bool:
        """Check whether the kind or resource name is a namespaced resource."""
        try:
            gvr = self.resolve(name)
        except UnknownResource:
            return False
        return self.is_namespace_scoped(gvr)

    def is_cluster_scoped(self, gvr: GroupVersionResource) -> bool:
        """Deprecated: check membership in the cluster-scoped set. Prefer is_namespace_scoped()."""
        return self._in_scope_set(gvr, self.cluster_scoped_triples)

    def _in_scope_set(self, gvr: GroupVersionResource, triplets: Set[str]) -> bool:
        # registered names are taken as given, kind names are normalized
        if gvr.to_triplet() in triplets:
            return True
        return join_resource_triplet(gvr.group, gvr.version, normalize(gvr.resource)) in triplets

    def resources(self) -> List[GroupVersionResource]:
        """Return every registered resource in registration order."""
        resources = []
        for name, group_version in self.group_version_by_name.items():
            group, _, version = group_version.partition("/")
            resources.append(GroupVersionResource(group, version, name))
        return resources

    def expand_triples(self, group: str, version: str, resource: str) -> List[str]:
        """
        Complete a partly defined group/version/resource from the registry.

        Empty fields are unspecified. Examples:
            ("", "", "pods") -> ["/v1/pods"]
            ("apps", "v1", "") -> ["apps/v1/deployments", "apps/v1/replicasets", ...]

        Args:
            group: API group or ""
            version: API version or ""
            resource: Resource name or ""

        Returns:
            Matching "group/version/resource" strings
        """
        if not resource:
            triplets = []
            for name, group_version in self.group_version_by_name.items():
                parts = group_version.split("/")
                if len(parts) < 2:
                    continue
                if group and parts[0] != group:
                    continue
                if version and parts[1] != version:
                    continue
                triplets.append(join_resource_triplet(parts[0], parts[1], name))
            return triplets

        if group and version:
            return [join_resource_triplet(group, version, resource)]

        group_version = self.group_version_by_name.get(resource)
        if group_version is None:
            logger.debug(f"Resource {resource!r} unknown")
            return []
        parts = group_version.split("/")

        if not version:
            if len(parts) < 2:
                return []
            return [join_resource_triplet(group or parts[0], parts[1], resource)]

        return [join_resource_triplet(parts[0], version, resource)]

    def expand_wildcard_triple(self, group: str, version: str, resource: str) -> List[str]:
        """
        Like expand_triples() but "*" means unspecified, and resources that are
        not known Kubernetes kinds are passed through as given.

        Examples:
            ("*", "*", "pods") -> ["/v1/pods"]
            ("example.com", "v1", "widgets") -> ["example.com/v1/widgets"]
        """
        if group == WILDCARD:
            group = ""
        if version == WILDCARD:
            version = ""
        if resource == WILDCARD:
            resource = ""

        if not self.is_known_kind(resource):
            return [join_resource_triplet(group, version, resource)]
        return self.expand_triples(group, version, normalize(resource))

    def is_workload_like(self, obj: Any) -> bool:
        """Check whether a decoded manifest looks like a Kubernetes object this registry knows."""
        return is_workload_like(obj, self)


def load_registry(discovery: Optional[Any] = None) -> ResourceRegistry:
    """
    Build a populated registry.

    When no discovery client is given and KUBEMAP_DISCOVERY is set, a
    KubectlDiscovery client is used.

    Args:
        discovery: Discovery client, or None

    Returns:
        Populated ResourceRegistry
    """
    if discovery is None and Config.use_discovery():
        discovery = KubectlDiscovery()
    return ResourceRegistry().initialize(discovery)
