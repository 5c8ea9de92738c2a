"""Secret management for the Alertmanager Slack webhook.

The secret is written with `kubectl apply`, so repeated runs with the same
webhook converge on a single secret instead of failing or duplicating.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]

from .errors import DeploymentError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands
    from .config import SecretSpec


class SecretOutcome(str, Enum):
    """What provision() did to the secret."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


def render_secret_manifest(spec: SecretSpec, namespace: str) -> str:
    """Render an Opaque Secret holding the webhook under the configured key."""
    manifest: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {"name": spec.name, "namespace": namespace},
        "type": "Opaque",
        "stringData": {spec.key: spec.value or ""},
    }
    return yaml.safe_dump(manifest, default_flow_style=False)


class SecretManager:
    """Creates or updates the Alertmanager Slack secret when a webhook is set."""

    def __init__(self, commands: ShellCommands, console: ConsoleLike) -> None:
        """Initialize the secret manager.

        Args:
            commands: Shell command executor
            console: Console for output
        """
        self.commands = commands
        self.console = console

    def provision(self, spec: SecretSpec, namespace: str) -> SecretOutcome:
        """Upsert the secret, or skip without touching the cluster.

        Args:
            spec: Secret name, key and optional value
            namespace: Target Kubernetes namespace

        Returns:
            SecretOutcome describing what happened

        Raises:
            DeploymentError: If the secret cannot be applied
        """
        if not spec.is_set:
            self.console.info(
                "SLACK_WEBHOOK not set. Skipping creation of alertmanager secret."
            )
            return SecretOutcome.SKIPPED

        self.console.print(
            "[bold cyan]==> Creating Kubernetes secret for Alertmanager Slack webhook"
            "[/bold cyan]"
        )
        existed = self.commands.kubectl.resource_exists("secret", spec.name, namespace)

        result = self.commands.kubectl.apply_yaml(
            render_secret_manifest(spec, namespace), namespace
        )
        if not result.success:
            raise DeploymentError(
                f"Failed to apply secret '{spec.name}'",
                details=result.stderr.strip() or None,
            )

        outcome = SecretOutcome.UPDATED if existed else SecretOutcome.CREATED
        self.console.ok(
            f"{outcome.value.capitalize()} secret '{spec.name}' in namespace {namespace}"
        )
        return outcome
