"""Abstract Kubernetes controller interface.

Defines the contract for the Kubernetes operations the monitoring stack
installer needs, implemented by different backends (kubectl subprocess,
kr8s library).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

# =============================================================================
# Data Types
# =============================================================================


@dataclass
class CommandResult:
    """Result of a command execution."""

    success: bool
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


@dataclass
class PodInfo:
    """Readiness information about a Kubernetes pod."""

    name: str
    phase: str = "Unknown"
    ready_containers: int = 0
    total_containers: int = 0

    @property
    def is_ready(self) -> bool:
        """A pod is ready when every one of its containers reports ready."""
        return self.ready_containers == self.total_containers

    @property
    def ready_ratio(self) -> str:
        """Ready/total string as shown by ``kubectl get pods``."""
        return f"{self.ready_containers}/{self.total_containers}"


@dataclass
class PodListing:
    """Result of listing pods in a namespace.

    ``success`` is False when the cluster could not be queried, in which
    case ``pods`` is empty and ``error`` holds the reason.
    """

    success: bool
    pods: list[PodInfo] = field(default_factory=list)
    error: str = ""


class ClusterAccessError(Exception):
    """Raised when the cluster cannot be queried (permissions, connectivity)."""


def pod_info_from_manifest(pod: dict) -> PodInfo:
    """Build a PodInfo from a pod object as returned by the API server."""
    metadata = pod.get("metadata") or {}
    status = pod.get("status") or {}
    spec = pod.get("spec") or {}

    container_statuses = status.get("containerStatuses") or []
    # Pods that have not been scheduled yet report no container statuses
    total = len(spec.get("containers") or []) or len(container_statuses)
    ready = sum(1 for cs in container_statuses if cs.get("ready"))

    return PodInfo(
        name=metadata.get("name", ""),
        phase=status.get("phase", "Unknown"),
        ready_containers=ready,
        total_containers=total,
    )


# =============================================================================
# Abstract Controller
# =============================================================================


class KubernetesController(ABC):
    """Abstract base class for Kubernetes operations.

    All methods are async to support both sync (kubectl) and async (kr8s)
    implementations. Use `run_sync()` to call from synchronous code.

    Example:
        from src.infra.k8s import KubectlController, run_sync

        controller = KubectlController()
        listing = run_sync(controller.get_pods("observability"))
    """

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    @abstractmethod
    async def namespace_exists(self, namespace: str) -> bool:
        """Check if a namespace exists.

        Args:
            namespace: Namespace to check

        Returns:
            True if the namespace exists, False if it is not found

        Raises:
            ClusterAccessError: If existence cannot be determined
        """
        ...

    @abstractmethod
    async def create_namespace(self, namespace: str) -> CommandResult:
        """Create a namespace.

        Args:
            namespace: Namespace to create

        Returns:
            CommandResult with creation status
        """
        ...

    # =========================================================================
    # Resource Operations
    # =========================================================================

    @abstractmethod
    async def apply_yaml(
        self, manifest: str, namespace: str | None = None
    ) -> CommandResult:
        """Apply an in-memory YAML manifest.

        Args:
            manifest: YAML document(s) to apply
            namespace: Default namespace for namespaced resources

        Returns:
            CommandResult with apply status
        """
        ...

    @abstractmethod
    async def resource_exists(
        self,
        resource_type: str,
        name: str,
        namespace: str,
    ) -> bool:
        """Check if a namespaced Kubernetes resource exists.

        Args:
            resource_type: Resource kind (e.g., "secret", "service")
            name: Resource name
            namespace: Kubernetes namespace

        Returns:
            True if the resource exists, False otherwise
        """
        ...

    # =========================================================================
    # Pod Operations
    # =========================================================================

    @abstractmethod
    async def get_pods(self, namespace: str) -> PodListing:
        """Get all pods in a namespace with their container readiness.

        Args:
            namespace: Kubernetes namespace

        Returns:
            PodListing; ``success`` is False if the query failed
        """
        ...
