"""Run configuration for the monitoring stack reconciliation.

Every descriptor is immutable. A single ReconcileConfig is built at startup
and passed read-only into each step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..shell_commands.types import HelmRepository
from .constants import StackConstants


@dataclass(frozen=True)
class DeploymentTarget:
    """Where the stack is deployed and how long to wait for readiness."""

    namespace: str
    wait_timeout: int

    def __post_init__(self) -> None:
        if not self.namespace.strip():
            raise ValueError("namespace must not be empty")
        if self.wait_timeout <= 0:
            raise ValueError("wait_timeout must be greater than zero")

    @property
    def helm_timeout(self) -> str:
        """Wait timeout in Helm duration syntax."""
        return f"{self.wait_timeout}s"


@dataclass(frozen=True)
class ReleaseSpec:
    """A Helm release to install or upgrade.

    A values file that does not exist on disk means chart defaults.
    """

    release_name: str
    chart_reference: str
    values_file: Path | None = None

    @property
    def effective_values_files(self) -> list[Path]:
        if self.values_file is not None and self.values_file.is_file():
            return [self.values_file]
        return []


@dataclass(frozen=True)
class SecretSpec:
    """The Alertmanager Slack webhook secret."""

    name: str
    key: str
    value: str | None = None

    @property
    def is_set(self) -> bool:
        return bool(self.value)


@dataclass(frozen=True)
class ManifestSet:
    """A directory of resource definitions applied as one bundle."""

    source_directory: Path


@dataclass(frozen=True)
class ReconcileConfig:
    """Everything a reconciliation run needs, resolved once at startup."""

    target: DeploymentTarget
    releases: tuple[ReleaseSpec, ...]
    secret: SecretSpec
    manifests: ManifestSet
    repositories: tuple[HelmRepository, ...] = field(
        default_factory=lambda: StackConstants().helm_repositories
    )

    def __post_init__(self) -> None:
        names = [r.release_name for r in self.releases]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate release names: {', '.join(duplicates)}")
        if any(not n.strip() for n in names):
            raise ValueError("release names must not be empty")


def build_config(
    *,
    namespace: str | None = None,
    prom_release: str | None = None,
    grafana_release: str | None = None,
    loki_release: str | None = None,
    values_dir: Path | None = None,
    manifests_dir: Path | None = None,
    wait_timeout: int | None = None,
    slack_webhook: str | None = None,
    constants: StackConstants | None = None,
) -> ReconcileConfig:
    """Build the run configuration, falling back to defaults for unset values.

    Releases are listed in install order: metrics stack, dashboard tool,
    log stack.

    Raises:
        ValueError: If the resulting configuration is invalid
    """
    c = constants or StackConstants()
    values_root = values_dir if values_dir is not None else Path(c.DEFAULT_VALUES_DIR)

    target = DeploymentTarget(
        namespace=namespace if namespace is not None else c.DEFAULT_NAMESPACE,
        wait_timeout=(
            wait_timeout if wait_timeout is not None else c.DEFAULT_WAIT_TIMEOUT_SECONDS
        ),
    )
    releases = (
        ReleaseSpec(
            prom_release if prom_release is not None else c.PROM_RELEASE_NAME,
            c.PROM_CHART,
            values_root / c.PROM_VALUES_FILE,
        ),
        ReleaseSpec(
            (
                grafana_release
                if grafana_release is not None
                else c.GRAFANA_RELEASE_NAME
            ),
            c.GRAFANA_CHART,
            values_root / c.GRAFANA_VALUES_FILE,
        ),
        ReleaseSpec(
            loki_release if loki_release is not None else c.LOKI_RELEASE_NAME,
            c.LOKI_CHART,
            values_root / c.LOKI_VALUES_FILE,
        ),
    )
    return ReconcileConfig(
        target=target,
        releases=releases,
        secret=SecretSpec(c.SLACK_SECRET_NAME, c.SLACK_SECRET_KEY, slack_webhook),
        manifests=ManifestSet(
            manifests_dir
            if manifests_dir is not None
            else Path(c.DEFAULT_MANIFESTS_DIR)
        ),
        repositories=c.helm_repositories,
    )
