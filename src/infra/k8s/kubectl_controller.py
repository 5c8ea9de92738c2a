"""Kubectl-based implementation of KubernetesController.

Uses subprocess calls to kubectl for all operations.
"""

from __future__ import annotations

import asyncio
import json
import subprocess

from loguru import logger

from .controller import (
    ClusterAccessError,
    CommandResult,
    KubernetesController,
    PodListing,
    pod_info_from_manifest,
)


def _is_not_found(stderr: str) -> bool:
    return "NotFound" in stderr or "not found" in stderr


class KubectlController(KubernetesController):
    """Kubernetes controller using kubectl subprocess calls.

    All methods are async but internally use asyncio.to_thread()
    to run blocking subprocess calls without blocking the event loop.
    """

    async def _run_kubectl(
        self,
        args: list[str],
        *,
        input_data: str | None = None,
    ) -> CommandResult:
        """Run a kubectl command asynchronously.

        Args:
            args: Command arguments (without 'kubectl' prefix)
            input_data: Optional input to send to stdin

        Returns:
            CommandResult with execution results
        """
        cmd = ["kubectl", *args]
        logger.debug("Running {}", " ".join(cmd))

        def _run() -> CommandResult:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                input=input_data,
            )
            return CommandResult(
                success=result.returncode == 0,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                returncode=result.returncode,
            )

        return await asyncio.to_thread(_run)

    # =========================================================================
    # Namespace Operations
    # =========================================================================

    async def namespace_exists(self, namespace: str) -> bool:
        """Check if a namespace exists."""
        result = await self._run_kubectl(["get", "namespace", namespace])
        if result.success:
            return True
        if _is_not_found(result.stderr):
            return False
        raise ClusterAccessError(
            result.stderr.strip() or f"kubectl exited with code {result.returncode}"
        )

    async def create_namespace(self, namespace: str) -> CommandResult:
        """Create a namespace."""
        return await self._run_kubectl(["create", "namespace", namespace])

    # =========================================================================
    # Resource Operations
    # =========================================================================

    async def apply_yaml(
        self, manifest: str, namespace: str | None = None
    ) -> CommandResult:
        """Apply YAML passed on stdin."""
        args = ["apply", "-f", "-"]
        if namespace:
            args = ["-n", namespace, *args]
        return await self._run_kubectl(args, input_data=manifest)

    async def resource_exists(
        self,
        resource_type: str,
        name: str,
        namespace: str,
    ) -> bool:
        """Check if a Kubernetes resource exists."""
        result = await self._run_kubectl(["get", resource_type, name, "-n", namespace])
        return result.success

    # =========================================================================
    # Pod Operations
    # =========================================================================

    async def get_pods(self, namespace: str) -> PodListing:
        """Get all pods in a namespace with their container readiness."""
        result = await self._run_kubectl(["get", "pods", "-n", namespace, "-o", "json"])
        if not result.success:
            return PodListing(success=False, error=result.stderr.strip())

        try:
            data = json.loads(result.stdout or "{}")
        except json.JSONDecodeError as e:
            return PodListing(success=False, error=f"Invalid kubectl output: {e}")

        pods = [pod_info_from_manifest(item) for item in data.get("items", [])]
        return PodListing(success=True, pods=pods)
