#!/usr/bin/env python3
"""
Command-line interface for kubemap.

Provides commands to resolve resource names, list the registry, expand
partial group/version/resource triples and classify manifest files.
"""

import argparse
import sys
from typing import List

import yaml

from kubemap.discovery import KubectlDiscovery
from kubemap.gvr import join_group_version, split_resource_triplet
from kubemap.manifest import classify_manifests, load_manifests
from kubemap.output import OutputManager, Verbosity, get_output, set_output
from kubemap.registry import ResourceRegistry, UnknownResource, load_registry


def build_registry(args: argparse.Namespace) -> ResourceRegistry:
    """
    Build the registry for a command.

    Uses the live cluster when --discover is given (or KUBEMAP_DISCOVERY is
    set), the built-in snapshot otherwise.
    """
    output = get_output()
    discovery = KubectlDiscovery() if getattr(args, "discover", False) else None
    with output.spinner("Loading API resources..."):
        registry = load_registry(discovery)
    output.verbose(f"Registry holds {len(registry)} resources")
    return registry


def cmd_resolve(args: argparse.Namespace) -> None:
    """Print the group/version/resource of each name."""
    output = get_output()
    registry = build_registry(args)

    failed = False
    for name in args.names:
        try:
            gvr = registry.resolve(name)
        except UnknownResource as e:
            output.error(str(e))
            failed = True
            continue
        output.result(gvr.to_triplet())

    if failed:
        sys.exit(1)


def cmd_api_resources(args: argparse.Namespace) -> None:
    """Print the registered resources as a table."""
    output = get_output()
    registry = build_registry(args)

    rows: List[List[str]] = []
    for gvr in registry.resources():
        namespaced = registry.is_namespace_scoped(gvr)
        if args.namespaced and not namespaced:
            continue
        if args.cluster and namespaced:
            continue
        rows.append(
            [gvr.resource, join_group_version(gvr.group, gvr.version), str(namespaced).lower()]
        )

    rows.sort()
    output.table("API resources", ["NAME", "APIVERSION", "NAMESPACED"], rows)


def cmd_expand(args: argparse.Namespace) -> None:
    """Print every concrete triple matching a partial group/version/resource."""
    output = get_output()
    if args.triplet.count("/") != 2:
        output.error(
            f"Invalid triplet: {args.triplet}",
            suggestion="Use GROUP/VERSION/RESOURCE, e.g. apps/v1/* or */*/pods",
        )
        sys.exit(1)

    registry = build_registry(args)
    group, version, resource = split_resource_triplet(args.triplet)
    for triplet in sorted(registry.expand_wildcard_triple(group, version, resource)):
        output.result(triplet)


def cmd_classify(args: argparse.Namespace) -> None:
    """Report which documents of a manifest file are Kubernetes objects."""
    output = get_output()
    try:
        documents = load_manifests(args.file)
    except (FileNotFoundError, yaml.YAMLError) as e:
        output.error(f"Error: {e}")
        sys.exit(1)

    registry = build_registry(args)
    workloads, other = classify_manifests(documents, registry)

    rows: List[List[str]] = []
    for doc in documents:
        metadata = doc.get("metadata") if isinstance(doc.get("metadata"), dict) else {}
        rows.append(
            [
                str(doc.get("kind", "")),
                str(metadata.get("name", "")),
                str(doc.get("apiVersion", "")),
                "yes" if registry.is_workload_like(doc) else "no",
            ]
        )
    output.table(str(args.file), ["KIND", "NAME", "APIVERSION", "KUBERNETES"], rows)

    if other:
        output.warning(f"{len(other)} of {len(documents)} documents are not known Kubernetes kinds")
    else:
        output.success(f"All {len(workloads)} documents are known Kubernetes kinds")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--discover",
        action="store_true",
        help="Load API resources from the current cluster with kubectl instead of the built-in list",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only show errors and final results",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed output including kubectl calls",
    )


def main() -> None:
    """Main entry point for kubemap CLI."""
    parser = argparse.ArgumentParser(
        description="Kubemap - Map Kubernetes kind names to group/version/resource",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kubemap resolve pod Deployment networkpolicy
  kubemap api-resources --namespaced
  kubemap expand 'apps/v1/*'
  kubemap expand '*/*/pods' --discover
  kubemap classify manifests/app.yaml
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the group/version/resource for kind or resource names",
    )
    resolve_parser.add_argument("names", nargs="+", help="Kind or resource names")
    _add_common_arguments(resolve_parser)
    resolve_parser.set_defaults(func=cmd_resolve)

    api_resources_parser = subparsers.add_parser(
        "api-resources",
        help="List the known API resources",
    )
    scope_group = api_resources_parser.add_mutually_exclusive_group()
    scope_group.add_argument(
        "--namespaced",
        action="store_true",
        help="Only list namespaced resources",
    )
    scope_group.add_argument(
        "--cluster",
        action="store_true",
        help="Only list resources that are not namespaced",
    )
    _add_common_arguments(api_resources_parser)
    api_resources_parser.set_defaults(func=cmd_api_resources)

    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand a partial GROUP/VERSION/RESOURCE ('*' or empty for any)",
    )
    expand_parser.add_argument("triplet", help="GROUP/VERSION/RESOURCE")
    _add_common_arguments(expand_parser)
    expand_parser.set_defaults(func=cmd_expand)

    classify_parser = subparsers.add_parser(
        "classify",
        help="Report which documents of a YAML manifest are known Kubernetes kinds",
    )
    classify_parser.add_argument("file", help="Path to a YAML manifest")
    _add_common_arguments(classify_parser)
    classify_parser.set_defaults(func=cmd_classify)

    args = parser.parse_args()

    # Set up verbosity
    if getattr(args, "quiet", False):
        verbosity = Verbosity.QUIET
    elif getattr(args, "verbose", False):
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    output_manager = OutputManager(verbosity=verbosity)
    set_output(output_manager)

    args.func(args)


if __name__ == "__main__":
    main()
