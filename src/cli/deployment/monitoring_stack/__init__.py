"""Monitoring stack deployment package.

This package installs the observability stack (kube-prometheus-stack,
Grafana, Loki) with each concern separated into its own module:

- preflight: Required external tool checks
- namespace: Target namespace creation
- repositories: Helm repository registration and refresh
- helm_release: Atomic Helm install/upgrade of each release
- secret_manager: Alertmanager Slack webhook secret
- manifests: Custom manifest directory application
- readiness: Pod readiness polling
- post_deploy: Post-deploy checks and hints

The Reconciler class in reconciler.py runs these components in order.

Usage:
    from src.cli.deployment.monitoring_stack import Reconciler, build_config

    reconciler = Reconciler(commands, console)
    reconciler.reconcile(build_config(namespace="observability"))
"""

from .config import (
    DeploymentTarget,
    ManifestSet,
    ReconcileConfig,
    ReleaseSpec,
    SecretSpec,
    build_config,
)
from .constants import StackConstants
from .errors import DeploymentError, MissingToolError
from .helm_release import HelmReleaseManager
from .manifests import ManifestApplier, ManifestApplyReport, ManifestOutcome
from .namespace import NamespaceManager, NamespaceOutcome
from .post_deploy import PostDeployChecker
from .preflight import PreflightChecker
from .readiness import ReadinessOutcome, ReadinessResult, ReadinessWaiter
from .reconciler import ReconcileSummary, Reconciler
from .repositories import RepositoryRegistrar
from .secret_manager import SecretManager, SecretOutcome

__all__ = [
    "Reconciler",
    "ReconcileSummary",
    "DeploymentError",
    "MissingToolError",
    # Configuration
    "StackConstants",
    "DeploymentTarget",
    "ReleaseSpec",
    "SecretSpec",
    "ManifestSet",
    "ReconcileConfig",
    "build_config",
    # Component classes for testing/extension
    "PreflightChecker",
    "NamespaceManager",
    "NamespaceOutcome",
    "RepositoryRegistrar",
    "HelmReleaseManager",
    "SecretManager",
    "SecretOutcome",
    "ManifestApplier",
    "ManifestApplyReport",
    "ManifestOutcome",
    "ReadinessWaiter",
    "ReadinessResult",
    "ReadinessOutcome",
    "PostDeployChecker",
]
