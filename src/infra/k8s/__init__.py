"""Kubernetes infrastructure abstraction layer.

This module provides a clean abstraction over Kubernetes operations,
supporting multiple backends (kubectl subprocess, kr8s library).

Example:
    from src.infra.k8s import get_k8s_controller, run_sync

    controller = get_k8s_controller("kubectl")
    exists = run_sync(controller.namespace_exists("observability"))
    listing = run_sync(controller.get_pods("observability"))
"""

from .controller import (
    ClusterAccessError,
    CommandResult,
    KubernetesController,
    PodInfo,
    PodListing,
)
from .kubectl_controller import KubectlController
from .utils import run_sync

K8S_BACKENDS = ("kubectl", "kr8s")


def get_k8s_controller(backend: str = "kubectl") -> KubernetesController:
    """Create the Kubernetes controller for the requested backend.

    Args:
        backend: "kubectl" (subprocess) or "kr8s" (native async client)

    Returns:
        KubernetesController implementation

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "kubectl":
        return KubectlController()
    if backend == "kr8s":
        # Imported lazily so the kubectl backend works without kube config
        from .kr8s_controller import Kr8sController

        return Kr8sController()
    raise ValueError(
        f"Unknown Kubernetes backend '{backend}' (expected one of: "
        f"{', '.join(K8S_BACKENDS)})"
    )


__all__ = [
    # Controller classes
    "KubernetesController",
    "KubectlController",
    "get_k8s_controller",
    "K8S_BACKENDS",
    # Data classes
    "CommandResult",
    "PodInfo",
    "PodListing",
    "ClusterAccessError",
    # Utilities
    "run_sync",
]
