"""Namespace management for the monitoring stack."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from src.infra.k8s import ClusterAccessError

from .errors import DeploymentError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands


class NamespaceOutcome(str, Enum):
    """What ensure() did to the namespace."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class NamespaceManager:
    """Guarantees the target namespace exists."""

    def __init__(self, commands: ShellCommands, console: ConsoleLike) -> None:
        """Initialize the namespace manager.

        Args:
            commands: Shell command executor
            console: Console for output
        """
        self.commands = commands
        self.console = console

    def ensure(self, namespace: str) -> NamespaceOutcome:
        """Create the namespace unless it already exists.

        Args:
            namespace: Target Kubernetes namespace

        Returns:
            NamespaceOutcome.CREATED or NamespaceOutcome.ALREADY_EXISTS

        Raises:
            DeploymentError: If existence cannot be checked or creation fails
        """
        self.console.print(f"[bold cyan]==> Ensuring namespace: {namespace}[/bold cyan]")

        try:
            exists = self.commands.kubectl.namespace_exists(namespace)
        except ClusterAccessError as e:
            raise DeploymentError(
                f"Cannot check namespace '{namespace}'",
                details=(
                    f"{e}\n\n"
                    "The cluster could not be queried. Check that:\n"
                    "  • kubectl points at the right context: kubectl config current-context\n"
                    "  • the cluster is reachable: kubectl cluster-info\n"
                    "  • you are allowed to read namespaces: kubectl auth can-i get namespaces"
                ),
            ) from e

        if exists:
            self.console.info(f"Namespace '{namespace}' already exists")
            return NamespaceOutcome.ALREADY_EXISTS

        result = self.commands.kubectl.create_namespace(namespace)
        if not result.success:
            # Lost a race with another creator: the namespace is there now
            if "AlreadyExists" in result.stderr or "already exists" in result.stderr:
                self.console.info(f"Namespace '{namespace}' already exists")
                return NamespaceOutcome.ALREADY_EXISTS
            raise DeploymentError(
                f"Failed to create namespace '{namespace}'",
                details=result.stderr.strip() or None,
            )

        self.console.ok(f"Created namespace '{namespace}'")
        return NamespaceOutcome.CREATED
