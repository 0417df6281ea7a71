"""
Manifest classification.

Loads decoded manifest documents from YAML files and sorts them by whether
their kind is a Kubernetes kind the registry knows about.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple, Union

import yaml


def is_workload_like(obj: Any, registry: Any) -> bool:
    """
    Check whether a decoded manifest is a Kubernetes object.

    Only the presence of apiVersion and a kind known to the registry are
    checked; the rest of the document is not validated.

    Args:
        obj: Decoded manifest document
        registry: ResourceRegistry used to look up the kind

    Returns:
        True if the document has an apiVersion and a known string kind
    """
    if not isinstance(obj, dict):
        return False
    if "apiVersion" not in obj:
        return False
    kind = obj.get("kind")
    if not isinstance(kind, str):
        return False
    return registry.is_known_kind(kind)


def load_manifests(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load every mapping document from a single or multi-document YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        List of decoded documents, empty documents and scalars dropped

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is not valid YAML
    """
    with open(path, "r") as f:
        documents = list(yaml.safe_load_all(f))
    return [doc for doc in documents if isinstance(doc, dict)]


def classify_manifests(
    documents: Iterable[Any], registry: Any
) -> Tuple[List[Dict[str, Any]], List[Any]]:
    """
    Split documents into Kubernetes objects and everything else.

    Returns:
        Tuple of (workload_like, other)
    """
    workloads: List[Dict[str, Any]] = []
    other: List[Any] = []
    for doc in documents:
        if is_workload_like(doc, registry):
            workloads.append(doc)
        else:
            other.append(doc)
    return workloads, other
