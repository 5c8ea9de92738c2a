"""Helm release management.

This module handles install-or-upgrade of the stack's Helm releases. Every
release is applied atomically and waited on, so a failed upgrade is rolled
back by Helm instead of leaving a half-applied release behind.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from .errors import DeploymentError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands
    from .config import DeploymentTarget, ReleaseSpec


class HelmReleaseManager:
    """Manages Helm releases for the observability stack.

    Handles:
    - Idempotent install/upgrade via `helm upgrade --install --atomic --wait`
    - Optional per-release values files (missing file means chart defaults)
    - Streaming Helm output while the release becomes ready
    """

    def __init__(self, commands: ShellCommands, console: ConsoleLike) -> None:
        """Initialize the Helm release manager.

        Args:
            commands: Shell command executor
            console: Console for output
        """
        self.commands = commands
        self.console = console

    def install_all(
        self, releases: Iterable[ReleaseSpec], target: DeploymentTarget
    ) -> None:
        """Install or upgrade releases one after another, in the given order."""
        for spec in releases:
            self.install_or_upgrade(spec, target)

    def install_or_upgrade(self, spec: ReleaseSpec, target: DeploymentTarget) -> None:
        """Converge a single release to the desired chart and values.

        Blocks until Helm reports the release ready.

        Args:
            spec: Release to install or upgrade
            target: Namespace and timeout to deploy with

        Raises:
            DeploymentError: If Helm fails; the release has been rolled back
        """
        existing = self.commands.helm.get_release(spec.release_name, target.namespace)
        action = "Upgrading" if existing else "Installing"
        self.console.print(
            f"[bold cyan]==> {action} {spec.release_name} ({spec.chart_reference})"
            "[/bold cyan]"
        )

        value_files = spec.effective_values_files
        if spec.values_file is not None and not value_files:
            self.console.print(
                f"  [dim]Values file {spec.values_file} not found, using chart defaults[/dim]"
            )
        logger.debug(
            "Release {} revision before upgrade: {}",
            spec.release_name,
            existing.revision if existing else "none",
        )

        def print_helm_output(line: str) -> None:
            """Print Helm output in real-time, filtering noise."""
            line = line.strip()
            if not line:
                return
            # Skip noisy warning lines about table values
            if "warning:" in line.lower() and "table" in line.lower():
                return
            self.console.print(f"  [dim]{line}[/dim]")

        result = self.commands.helm.upgrade_install(
            release_name=spec.release_name,
            chart=spec.chart_reference,
            namespace=target.namespace,
            value_files=value_files or None,
            timeout=target.helm_timeout,
            atomic=True,
            wait=True,
            on_output=print_helm_output,
        )

        if not result.success:
            self.console.print(f"[red]✗ Helm release {spec.release_name} failed[/red]")
            output = (result.stdout or result.stderr).strip()
            raise DeploymentError(
                f"Helm install/upgrade of '{spec.release_name}' failed",
                details=(
                    (f"{output}\n\n" if output else "")
                    + "The release was rolled back to its previous state.\n\n"
                    "Recovery steps:\n"
                    f"  1. Check release history: helm history {spec.release_name} "
                    f"-n {target.namespace}\n"
                    f"  2. Check pod status: kubectl get pods -n {target.namespace}\n"
                    "  3. Fix the values file or cluster issue and re-run; "
                    "completed steps are skipped or upgraded in place"
                ),
            )

        self.console.ok(f"Release {spec.release_name} deployed to {target.namespace}")
