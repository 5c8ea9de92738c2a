"""Helm chart repository registration."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from loguru import logger

from .errors import DeploymentError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import HelmRepository, ShellCommands


class RepositoryRegistrar:
    """Registers chart repositories and refreshes their indices.

    Adding a repository is best-effort: an alias that is already registered
    is not an error. The final refresh is required because every install
    that follows resolves charts from the local index.
    """

    def __init__(self, commands: ShellCommands, console: ConsoleLike) -> None:
        self.commands = commands
        self.console = console

    def register(self, repositories: Iterable[HelmRepository]) -> None:
        """Add each repository, then update all indices.

        Raises:
            DeploymentError: If `helm repo update` fails
        """
        self.console.print("[bold cyan]==> Adding Helm repos[/bold cyan]")

        for repo in repositories:
            result = self.commands.helm.repo_add(repo.name, repo.url)
            if result.success:
                self.console.print(f"  [dim]{repo.name} -> {repo.url}[/dim]")
            else:
                logger.info(
                    "helm repo add {} ignored: {}", repo.name, result.stderr.strip()
                )
                self.console.print(
                    f"  [dim]{repo.name} already registered or unavailable, continuing[/dim]"
                )

        result = self.commands.helm.repo_update()
        if not result.success:
            raise DeploymentError(
                "Failed to update Helm repositories",
                details=(
                    f"{result.stderr.strip()}\n\n"
                    "Releases cannot be installed without up-to-date chart indices.\n"
                    "Check network access to the chart repositories and retry."
                ).lstrip(),
            )
        self.console.ok("Helm repositories up to date")
