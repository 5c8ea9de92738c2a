"""Deployment constants and configuration.

This module centralizes all magic strings, chart references and timing
values used throughout the monitoring stack installation.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..shell_commands.types import HelmRepository


@dataclass(frozen=True)
class StackConstants:
    """Constants for the observability stack deployment.

    This class provides a centralized location for all deployment-related
    constants, making them easy to find, update, and test.

    All attributes are class-level and immutable.
    """

    # Kubernetes/Helm identifiers
    DEFAULT_NAMESPACE: str = "observability"
    PROM_RELEASE_NAME: str = "prometheus-stack"
    GRAFANA_RELEASE_NAME: str = "grafana"
    LOKI_RELEASE_NAME: str = "loki"

    # Chart references (repo alias / chart name)
    PROM_CHART: str = "prometheus-community/kube-prometheus-stack"
    GRAFANA_CHART: str = "grafana/grafana"
    LOKI_CHART: str = "grafana/loki-stack"

    # Values files, relative to the values directory
    PROM_VALUES_FILE: str = "prometheus-values.yaml"
    GRAFANA_VALUES_FILE: str = "grafana-values.yaml"
    LOKI_VALUES_FILE: str = "loki-values.yaml"

    # Directories, relative to the working directory
    DEFAULT_VALUES_DIR: str = "helm"
    DEFAULT_MANIFESTS_DIR: str = "k8s"
    MANIFEST_SUFFIXES: tuple[str, ...] = (".yaml", ".yml", ".json")

    # Alertmanager Slack secret
    SLACK_SECRET_NAME: str = "alertmanager-slack"
    SLACK_SECRET_KEY: str = "slack_url"

    # Timeouts
    DEFAULT_WAIT_TIMEOUT_SECONDS: int = 300
    POD_POLL_INTERVAL_SECONDS: float = 10.0

    # Post-deploy checks
    PROMETHEUS_SERVICE: str = "prometheus-operated"
    PROMETHEUS_PORT: int = 9090
    GRAFANA_PORT: int = 3000
    LOKI_PORT: int = 3100

    # Tools that must be on PATH before anything is mutated
    REQUIRED_TOOLS: tuple[str, ...] = ("kubectl", "helm")

    @property
    def helm_repositories(self) -> tuple[HelmRepository, ...]:
        """Chart repositories registered before any release is installed."""
        return (
            HelmRepository(
                "prometheus-community",
                "https://prometheus-community.github.io/helm-charts",
            ),
            HelmRepository("grafana", "https://grafana.github.io/helm-charts"),
            HelmRepository("grafana-labs", "https://grafana.github.io/loki/charts"),
        )
