"""Observability stack reconciliation.

This module provides the Reconciler which converges a cluster to the
desired monitoring stack state. It coordinates specialized components for:
- Pre-flight tool checks
- Namespace creation
- Helm repository registration
- Helm release install/upgrade (metrics, dashboards, logs)
- Alertmanager Slack secret
- Custom manifest application
- Readiness polling and post-deploy checks

Each step is idempotent, so re-running against a deployed cluster upgrades
in place instead of duplicating anything. A fatal step raises
DeploymentError and stops the run; earlier steps are left as applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from src.utils.console_like import coalesce_console

from .constants import StackConstants
from .helm_release import HelmReleaseManager
from .manifests import ManifestApplier, ManifestApplyReport
from .namespace import NamespaceManager, NamespaceOutcome
from .post_deploy import PostDeployChecker
from .preflight import PreflightChecker
from .readiness import ReadinessResult, ReadinessWaiter
from .repositories import RepositoryRegistrar
from .secret_manager import SecretManager, SecretOutcome

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands
    from .config import ReconcileConfig


@dataclass
class ReconcileSummary:
    """What a reconciliation run did, step by step."""

    namespace: NamespaceOutcome
    releases: list[str]
    secret: SecretOutcome
    manifests: ManifestApplyReport
    readiness: ReadinessResult
    prometheus_service_found: bool

    @property
    def warnings(self) -> list[str]:
        """Soft failures that did not change the exit code."""
        found: list[str] = []
        if not self.readiness.ready:
            found.append("pods not ready before timeout")
        if not self.prometheus_service_found:
            found.append("prometheus service missing")
        return found


class Reconciler:
    """Runs the deployment steps in dependency order.

    Attributes:
        preflight: Required tool checks
        namespaces: Namespace creation
        repositories: Helm repository registration
        helm_release: Helm release manager
        secret_manager: Alertmanager secret handler
        manifests: Manifest directory applier
        readiness: Pod readiness waiter
        post_deploy: Post-deploy checks
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike | None = None,
        constants: StackConstants | None = None,
        readiness: ReadinessWaiter | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            commands: Shell command executor
            console: Console for output (default: plain stdout)
            constants: Optional stack constants
            readiness: Optional pre-built waiter (e.g. with a fake clock)
        """
        console = coalesce_console(console)
        self.commands = commands
        self.console = console
        self.constants = constants or StackConstants()

        self.preflight = PreflightChecker(commands, console, self.constants)
        self.namespaces = NamespaceManager(commands, console)
        self.repositories = RepositoryRegistrar(commands, console)
        self.helm_release = HelmReleaseManager(commands, console)
        self.secret_manager = SecretManager(commands, console)
        self.manifests = ManifestApplier(commands, console)
        self.readiness = readiness or ReadinessWaiter(
            commands,
            console,
            poll_interval=self.constants.POD_POLL_INTERVAL_SECONDS,
        )
        self.post_deploy = PostDeployChecker(commands, console, self.constants)

    def reconcile(self, config: ReconcileConfig) -> ReconcileSummary:
        """Converge the cluster to the configured monitoring stack.

        Args:
            config: Immutable run configuration

        Returns:
            ReconcileSummary of every step

        Raises:
            DeploymentError: On the first fatal step
        """
        target = config.target
        logger.debug("Reconciling monitoring stack into {}", target.namespace)

        # Phase 0: Fail before mutating anything if tools are missing
        self.preflight.check_tools()

        # Phase 1: Namespace and chart repositories
        namespace_outcome = self.namespaces.ensure(target.namespace)
        self.repositories.register(config.repositories)

        # Phase 2: Releases, in order: metrics, dashboards, logs
        self.helm_release.install_all(config.releases, target)

        # Phase 3: Alertmanager secret and custom manifests
        secret_outcome = self.secret_manager.provision(config.secret, target.namespace)
        manifest_report = self.manifests.apply(config.manifests, target.namespace)

        # Phase 4: Soft checks
        readiness = self.readiness.wait(target.namespace, target.wait_timeout)
        if not readiness.ready:
            self.console.warn(
                f"Some pods failed to become ready within {target.wait_timeout}s. "
                f"Check 'kubectl -n {target.namespace} get pods'"
            )
        service_found = self.post_deploy.run(config)

        summary = ReconcileSummary(
            namespace=namespace_outcome,
            releases=[r.release_name for r in config.releases],
            secret=secret_outcome,
            manifests=manifest_report,
            readiness=readiness,
            prometheus_service_found=service_found,
        )
        logger.debug("Reconcile finished with warnings: {}", summary.warnings)
        return summary
