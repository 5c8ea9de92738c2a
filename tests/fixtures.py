"""Shared test fixtures: an in-memory cluster behind the command facades."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import yaml  # type: ignore[import-untyped]

from src.cli.deployment.shell_commands.types import (
    CommandResult,
    HelmRelease,
    PodInfo,
    PodListing,
)


@dataclass
class FakeCluster:
    """Cluster state mutated by the fake helm/kubectl commands."""

    namespaces: set[str] = field(default_factory=set)
    releases: dict[tuple[str, str], HelmRelease] = field(default_factory=dict)
    repos: dict[str, str] = field(default_factory=dict)
    resources: dict[tuple[str, str, str], dict[str, Any]] = field(
        default_factory=dict
    )
    pods: list[PodInfo] = field(default_factory=list)
    rejected_names: set[str] = field(default_factory=set)
    failing_releases: set[str] = field(default_factory=set)
    missing_tools: set[str] = field(default_factory=set)
    repo_update_fails: bool = False
    helm_calls: list[list[str]] = field(default_factory=list)
    mutations: int = 0

    def resources_of_kind(self, namespace: str, kind: str) -> list[dict[str, Any]]:
        return [
            body
            for (ns, k, _), body in self.resources.items()
            if ns == namespace and k == kind
        ]


class FakeHelm:
    def __init__(self, cluster: FakeCluster) -> None:
        self.cluster = cluster

    def repo_add(self, name: str, url: str) -> CommandResult:
        if name in self.cluster.repos:
            return CommandResult(
                success=False,
                stderr=f'Error: repository name ({name}) already exists',
                returncode=1,
            )
        self.cluster.repos[name] = url
        return CommandResult(success=True, stdout=f'"{name}" has been added')

    def repo_update(self) -> CommandResult:
        if self.cluster.repo_update_fails:
            return CommandResult(success=False, stderr="Error: no network", returncode=1)
        return CommandResult(success=True, stdout="Update Complete.")

    def upgrade_install(
        self,
        release_name: str,
        chart: str | Path,
        namespace: str,
        **kwargs: Any,
    ) -> CommandResult:
        self.cluster.helm_calls.append([release_name, str(chart), namespace])
        if release_name in self.cluster.failing_releases:
            return CommandResult(
                success=False,
                stdout="Error: release failed, rolled back due to atomic being set",
                returncode=1,
            )
        key = (namespace, release_name)
        current = self.cluster.releases.get(key)
        revision = int(current.revision) + 1 if current else 1
        self.cluster.releases[key] = HelmRelease(
            name=release_name,
            namespace=namespace,
            status="deployed",
            revision=str(revision),
            chart=str(chart),
        )
        return CommandResult(success=True, stdout=f"Release {release_name} deployed")

    def get_release(self, release_name: str, namespace: str) -> HelmRelease | None:
        return self.cluster.releases.get((namespace, release_name))


class FakeKubectl:
    def __init__(self, cluster: FakeCluster) -> None:
        self.cluster = cluster

    def namespace_exists(self, namespace: str) -> bool:
        return namespace in self.cluster.namespaces

    def create_namespace(self, namespace: str) -> CommandResult:
        if namespace in self.cluster.namespaces:
            return CommandResult(
                success=False,
                stderr=f'namespaces "{namespace}" already exists (AlreadyExists)',
                returncode=1,
            )
        self.cluster.namespaces.add(namespace)
        self.cluster.mutations += 1
        return CommandResult(success=True)

    def apply_yaml(self, manifest: str, namespace: str | None = None) -> CommandResult:
        body = yaml.safe_load(manifest)
        kind = body["kind"]
        name = body["metadata"]["name"]
        if name in self.cluster.rejected_names:
            return CommandResult(
                success=False,
                stderr=f'The {kind} "{name}" is invalid: spec: Required value',
                returncode=1,
            )
        ns = body["metadata"].get("namespace") or namespace or "default"
        self.cluster.resources[(ns, kind, name)] = body
        self.cluster.mutations += 1
        return CommandResult(success=True, stdout=f"{kind.lower()}/{name} configured")

    def resource_exists(self, resource_type: str, name: str, namespace: str) -> bool:
        kind = {"secret": "Secret", "service": "Service"}[resource_type]
        return (namespace, kind, name) in self.cluster.resources

    def get_pods(self, namespace: str) -> PodListing:
        return PodListing(success=True, pods=list(self.cluster.pods))


class FakeShellCommands:
    """Stand-in for ShellCommands backed by a FakeCluster."""

    def __init__(self, cluster: FakeCluster) -> None:
        self.cluster = cluster
        self.helm = FakeHelm(cluster)
        self.kubectl = FakeKubectl(cluster)

    def tool_available(self, name: str) -> bool:
        return name not in self.cluster.missing_tools


@pytest.fixture
def cluster() -> FakeCluster:
    """An empty in-memory cluster."""
    return FakeCluster()


@pytest.fixture
def fake_commands(cluster: FakeCluster) -> FakeShellCommands:
    """Command facade operating on the in-memory cluster."""
    return FakeShellCommands(cluster)


@pytest.fixture
def mock_console() -> MagicMock:
    """Console that records output calls."""
    return MagicMock()


@pytest.fixture
def mock_commands() -> MagicMock:
    """Create a mock shell commands instance."""
    commands = MagicMock()
    commands.kubectl = MagicMock()
    commands.helm = MagicMock()
    return commands


class FakeClock:
    """Monotonic clock advanced only by the fake sleep."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
