"""Kubectl command abstractions.

This module provides commands for Kubernetes resource management,
delegating to a KubernetesController for the actual operations.

This is a sync wrapper around the async controllers so the sequential
reconciliation steps can stay synchronous.
"""

from __future__ import annotations

from src.infra.k8s import KubectlController, run_sync
from src.infra.k8s.controller import CommandResult, KubernetesController, PodListing


class KubectlCommands:
    """Kubectl-related shell commands.

    All methods delegate to the async controller using run_sync().

    Provides operations for:
    - Namespace management (existence check, create)
    - Manifest application (in-memory YAML on stdin)
    - Resource existence checks
    - Pod readiness listing
    """

    def __init__(
        self,
        controller: KubernetesController | None = None,
    ) -> None:
        """Initialize kubectl commands.

        Args:
            controller: Backend controller (default: kubectl subprocess)
        """
        self._controller = controller or KubectlController()

    # =========================================================================
    # Namespace Management
    # =========================================================================

    def namespace_exists(self, namespace: str) -> bool:
        """Check if a namespace exists. Raises ClusterAccessError if unknown."""
        return run_sync(self._controller.namespace_exists(namespace))

    def create_namespace(self, namespace: str) -> CommandResult:
        """Create a Kubernetes namespace."""
        return run_sync(self._controller.create_namespace(namespace))

    # =========================================================================
    # Resource Operations
    # =========================================================================

    def apply_yaml(self, manifest: str, namespace: str | None = None) -> CommandResult:
        """Apply an in-memory YAML manifest."""
        return run_sync(self._controller.apply_yaml(manifest, namespace))

    def resource_exists(self, resource_type: str, name: str, namespace: str) -> bool:
        """Check if a namespaced resource exists."""
        return run_sync(
            self._controller.resource_exists(resource_type, name, namespace)
        )

    # =========================================================================
    # Pod Operations
    # =========================================================================

    def get_pods(self, namespace: str) -> PodListing:
        """Get all pods in a namespace with their container readiness."""
        return run_sync(self._controller.get_pods(namespace))
