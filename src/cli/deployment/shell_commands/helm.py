"""Helm command abstractions.

This module provides commands for Helm repository registration and
release management, including atomic install/upgrade and status queries.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult, HelmRelease

if TYPE_CHECKING:
    from .runner import CommandRunner


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Repository management (add, update)
    - Release management (atomic install or upgrade)
    - Status queries (list releases)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Repository Management
    # =========================================================================

    def repo_add(self, name: str, url: str) -> CommandResult:
        """Register a chart repository under a local alias.

        Args:
            name: Repository alias (e.g., "grafana")
            url: Repository URL

        Returns:
            CommandResult; fails when the alias is already registered
            with a different URL or the URL is unreachable
        """
        return self._runner.run(["helm", "repo", "add", name, url])

    def repo_update(self) -> CommandResult:
        """Refresh the local index of every registered repository."""
        return self._runner.run(["helm", "repo", "update"])

    # =========================================================================
    # Release Management
    # =========================================================================

    def upgrade_install(
        self,
        release_name: str,
        chart: str | Path,
        namespace: str,
        *,
        value_files: list[Path] | None = None,
        timeout: str = "10m",
        atomic: bool = True,
        wait: bool = True,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Deploy or upgrade a Helm release.

        Uses `helm upgrade --install` to idempotently deploy a chart.
        If the release doesn't exist, it will be installed. If it exists,
        it will be upgraded.

        Args:
            release_name: Name for the Helm release (e.g., "grafana")
            chart: Chart reference ("repo/chart") or path to a chart directory
            namespace: Kubernetes namespace for deployment
            value_files: Optional list of values.yaml override files
            timeout: Maximum time to wait for deployment
            atomic: Roll the release back if the install/upgrade fails
            wait: Whether to wait for resources to be ready
            on_output: Optional callback for real-time output streaming.
                      If provided, each line of output is passed to this function.

        Returns:
            CommandResult with deployment status

        Example:
            >>> helm.upgrade_install(
            ...     "grafana",
            ...     "grafana/grafana",
            ...     "observability",
            ...     value_files=[Path("helm/grafana-values.yaml")],
            ... )
        """
        cmd = [
            "helm",
            "upgrade",
            "--install",
            release_name,
            str(chart),
            "--namespace",
            namespace,
        ]

        if atomic:
            cmd.append("--atomic")
        if wait:
            cmd.append("--wait")
        cmd.extend(["--timeout", timeout])

        for vf in value_files or []:
            cmd.extend(["--values", str(vf)])

        if on_output:
            return self._runner.run_streaming(cmd, on_output=on_output)
        return self._runner.run(cmd)

    # =========================================================================
    # Status Queries
    # =========================================================================

    def list_releases(self, namespace: str) -> list[HelmRelease]:
        """List Helm releases in a namespace, in any state.

        Args:
            namespace: Kubernetes namespace to query

        Returns:
            List of releases; empty if the query fails
        """
        cmd = ["helm", "list", "-n", namespace, "--all", "-o", "json"]

        result = self._runner.run(cmd)
        if not result.success or not result.stdout:
            return []

        try:
            releases_data = json.loads(result.stdout)
        except json.JSONDecodeError:
            return []
        return [HelmRelease.from_json(r) for r in releases_data or []]

    def get_release(self, release_name: str, namespace: str) -> HelmRelease | None:
        """Find a single release by name.

        Args:
            release_name: Release to look up
            namespace: Kubernetes namespace

        Returns:
            The release, or None if it is not installed
        """
        for release in self.list_releases(namespace):
            if release.name == release_name:
                return release
        return None
