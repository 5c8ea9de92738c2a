"""Kr8s-based implementation of KubernetesController.

Uses the kr8s library for native async Kubernetes operations.
"""

from __future__ import annotations

import asyncio
import subprocess
from typing import Any

import kr8s
from kr8s.asyncio.objects import Namespace, Pod, Secret, Service

from .controller import (
    ClusterAccessError,
    CommandResult,
    KubernetesController,
    PodListing,
    pod_info_from_manifest,
)

_RESOURCE_CLASSES: dict[str, Any] = {
    "secret": Secret,
    "service": Service,
    "svc": Service,
    "pod": Pod,
}


class Kr8sController(KubernetesController):
    """Kubernetes controller using kr8s library.

    All methods are natively async, leveraging kr8s's async API.

    Note: The kr8s API client is NOT cached because it's tied to the event loop
    that was running when created. When using run_sync() which calls asyncio.run(),
    each call creates a new event loop, making the cached API unusable.
    """

    async def _get_api(self) -> Any:  # Returns kr8s._api.Api
        """Create a kr8s API client bound to the current event loop."""
        return await kr8s.asyncio.api()

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    async def namespace_exists(self, namespace: str) -> bool:
        """Check if a namespace exists."""
        try:
            api = await self._get_api()
            ns = await Namespace.get(namespace, api=api)
            return ns is not None
        except kr8s.NotFoundError:
            return False
        except Exception as e:
            raise ClusterAccessError(str(e)) from e

    async def create_namespace(self, namespace: str) -> CommandResult:
        """Create a namespace."""
        try:
            api = await self._get_api()
            ns = Namespace({"metadata": {"name": namespace}}, api=api)
            await ns.create()
            return CommandResult(success=True, stdout=f"namespace/{namespace} created")
        except Exception as e:
            return CommandResult(success=False, stderr=str(e), returncode=1)

    # =========================================================================
    # Resource Operations
    # =========================================================================

    async def apply_yaml(
        self, manifest: str, namespace: str | None = None
    ) -> CommandResult:
        """Apply YAML passed on stdin.

        Note: kr8s doesn't have a direct 'apply' equivalent, so we use
        kubectl subprocess for this operation.
        """
        cmd = ["kubectl", "apply", "-f", "-"]
        if namespace:
            cmd.extend(["-n", namespace])
        return await asyncio.to_thread(self._run_kubectl, cmd, manifest)

    @staticmethod
    def _run_kubectl(cmd: list[str], input_data: str | None) -> CommandResult:
        result = subprocess.run(cmd, capture_output=True, text=True, input=input_data)
        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )

    async def resource_exists(
        self,
        resource_type: str,
        name: str,
        namespace: str,
    ) -> bool:
        """Check if a Kubernetes resource exists."""
        resource_class = _RESOURCE_CLASSES.get(resource_type.lower())
        if resource_class is None:
            raise ValueError(f"Unsupported resource type: {resource_type}")
        try:
            api = await self._get_api()
            await resource_class.get(name, namespace=namespace, api=api)
            return True
        except kr8s.NotFoundError:
            return False
        except Exception:
            return False

    # =========================================================================
    # Pod Operations
    # =========================================================================

    async def get_pods(self, namespace: str) -> PodListing:
        """Get all pods in a namespace with their container readiness."""
        try:
            api = await self._get_api()
            pods = [
                pod_info_from_manifest(pod.raw)
                async for pod in Pod.list(namespace=namespace, api=api)
            ]
            return PodListing(success=True, pods=pods)
        except Exception as e:
            return PodListing(success=False, error=str(e))
