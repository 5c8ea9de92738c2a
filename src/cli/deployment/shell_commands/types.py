"""Data types for shell command results.

This module contains all dataclasses and type definitions used across
the shell command modules.

Note: CommandResult and PodInfo are re-exported from src.infra.k8s.controller
so callers only need one import location for command results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.infra.k8s.controller import CommandResult, PodInfo, PodListing

__all__ = [
    "CommandResult",
    "PodInfo",
    "PodListing",
    "HelmRelease",
    "HelmRepository",
]


@dataclass
class HelmRelease:
    """Information about a Helm release.

    Attributes:
        name: Release name
        namespace: Kubernetes namespace
        status: Release status (deployed, failed, pending-install, ...)
        revision: Release revision number
        chart: Chart name and version (e.g., "grafana-7.3.0")
    """

    name: str
    namespace: str
    status: str
    revision: str
    chart: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HelmRelease:
        """Create a HelmRelease from a ``helm list -o json`` entry."""
        return cls(
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace", "")),
            status=str(data.get("status", "")),
            revision=str(data.get("revision", "")),
            chart=str(data.get("chart", "")),
        )


@dataclass(frozen=True)
class HelmRepository:
    """A Helm chart repository registration.

    Attributes:
        name: Local alias used in chart references (e.g., "grafana")
        url: Repository index URL
    """

    name: str
    url: str
