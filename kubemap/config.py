"""
Centralized configuration management for kubemap.

Provides a unified interface for accessing environment variables and
configuration with defaults.
"""

import os
from typing import List, Optional


class Config:
    """
    Centralized configuration management.

    Provides access to environment variables and configuration with
    sensible defaults.
    """

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get an environment variable with optional default.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Environment variable value, default, or ""
        """
        return os.getenv(key, default) or ""

    @staticmethod
    def get_bool(key: str, default: bool = False) -> bool:
        """
        Get a boolean environment variable.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Boolean value
        """
        value = os.getenv(key, "").lower()
        if value in ("true", "1", "yes", "on"):
            return True
        elif value in ("false", "0", "no", "off"):
            return False
        return default

    @staticmethod
    def get_list(key: str) -> List[str]:
        """
        Get a comma-separated environment variable as a list.

        Empty items are dropped, so an unset variable yields an empty list.
        """
        return [item.strip() for item in Config.get(key).split(",") if item.strip()]

    @staticmethod
    def use_discovery() -> bool:
        """
        Whether the registry should be loaded from the live cluster.

        Returns:
            Value of KUBEMAP_DISCOVERY (defaults to False, the built-in snapshot)
        """
        return Config.get_bool("KUBEMAP_DISCOVERY", False)

    @staticmethod
    def kubectl_binary() -> str:
        """
        Get the kubectl executable used for discovery.

        Returns:
            Executable name or path (defaults to "kubectl")
        """
        return Config.get("KUBECTL_BINARY", "kubectl")

    @staticmethod
    def kube_context() -> Optional[str]:
        """Get the kubeconfig context to discover against, or None for the current one."""
        return Config.get("KUBECTL_CONTEXT") or None

    @staticmethod
    def kubeconfig() -> Optional[str]:
        """Get the kubeconfig path, or None to let kubectl decide."""
        return Config.get("KUBECONFIG") or None

    @staticmethod
    def extra_ignored_groups() -> List[str]:
        """
        Get additional API groups to leave out of the registry.

        Returns:
            Groups listed in KUBEMAP_IGNORED_GROUPS
        """
        return Config.get_list("KUBEMAP_IGNORED_GROUPS")
