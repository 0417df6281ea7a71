"""
Group/version/resource helpers.

Pure string transforms for the "group/version" and "group/version/resource"
notations used by the Kubernetes API, plus the GroupVersionResource tuple.
"""

from typing import NamedTuple, Tuple


class MalformedGroupVersion(ValueError):
    """Raised when a "group/version" string cannot be split into two segments."""

    def __init__(self, group_version: str):
        self.group_version = group_version
        super().__init__(f"unexpected GroupVersion string: {group_version!r}")


class GroupVersionResource(NamedTuple):
    """Address of a resource type on a cluster. The zero value matches anything."""

    group: str = ""
    version: str = ""
    resource: str = ""

    def to_triplet(self) -> str:
        return join_resource_triplet(self.group, self.version, self.resource)

    @classmethod
    def from_triplet(cls, triplet: str) -> "GroupVersionResource":
        return cls(*split_resource_triplet(triplet))

    def is_empty(self) -> bool:
        return not (self.group or self.version or self.resource)


def join_group_version(group: str, version: str) -> str:
    """
    Join a group and version with the '/' separator.

    The core group is the empty string, so ("", "v1") becomes "/v1".
    """
    return f"{group}/{version}"


def split_api_version(api_version: str) -> Tuple[str, str]:
    """
    Split an apiVersion ("group/version") into its group and version.

    Args:
        api_version: apiVersion string

    Returns:
        Tuple of (group, version). A single segment is returned as the group
        with an empty version; missing segments are empty strings.
    """
    parts = api_version.split("/")
    group = parts[0] if len(parts) >= 1 else ""
    version = parts[1] if len(parts) >= 2 else ""
    return group, version


def join_resource_triplet(group: str, version: str, resource: str) -> str:
    """Join group, version and resource with the '/' separator."""
    return f"{group}/{version}/{resource}"


def split_resource_triplet(triplet: str) -> Tuple[str, str, str]:
    """
    Split a "group/version/resource" string back into its parts.

    Examples:
        "apps/v1/deployments" -> ("apps", "v1", "deployments")
        "/v1/pods" -> ("", "v1", "pods")
        "v1/pods" -> ("", "", "")

    Args:
        triplet: Joined triple

    Returns:
        Tuple of (group, version, resource), or three empty strings when the
        input does not have exactly three segments
    """
    parts = triplet.split("/")
    if len(parts) == 3:
        return parts[0], parts[1], parts[2]
    return "", "", ""


def parse_group_version(group_version: str) -> Tuple[str, str]:
    """
    Parse a discovery "group/version" string.

    A bare version ("v1") belongs to the core group. "" and "/" parse to an
    empty group and version.

    Raises:
        MalformedGroupVersion: If the string has more than two segments
    """
    if group_version in ("", "/"):
        return "", ""
    parts = group_version.split("/")
    if len(parts) == 1:
        return "", parts[0]
    if len(parts) == 2:
        return parts[0], parts[1]
    raise MalformedGroupVersion(group_version)
