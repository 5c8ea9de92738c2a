"""Monitoring stack deploy command.

Installs or upgrades kube-prometheus-stack, Grafana and Loki into a
namespace, then applies the custom manifests and waits for readiness.
Every option can also be set through the environment variable named in
its help text.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from src.cli.deployment.monitoring_stack import (
    Reconciler,
    ReconcileSummary,
    StackConstants,
    build_config,
)
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import console, with_error_handling
from src.cli.shared.log_config import configure_logging
from src.infra.k8s import get_k8s_controller

_DEFAULTS = StackConstants()


class K8sBackend(str, Enum):
    """Kubernetes access backend options."""

    KUBECTL = "kubectl"
    KR8S = "kr8s"


@with_error_handling
def deploy(
    namespace: Annotated[
        str,
        typer.Option(
            "--namespace", "-n", envvar="NAMESPACE", help="Kubernetes namespace"
        ),
    ] = _DEFAULTS.DEFAULT_NAMESPACE,
    prom_release: Annotated[
        str,
        typer.Option(
            "--prom-release",
            envvar="HELM_PROM_RELEASE",
            help="Helm release name for kube-prometheus-stack",
        ),
    ] = _DEFAULTS.PROM_RELEASE_NAME,
    grafana_release: Annotated[
        str,
        typer.Option(
            "--grafana-release",
            envvar="HELM_GRAFANA_RELEASE",
            help="Helm release name for Grafana",
        ),
    ] = _DEFAULTS.GRAFANA_RELEASE_NAME,
    loki_release: Annotated[
        str,
        typer.Option(
            "--loki-release",
            envvar="HELM_LOKI_RELEASE",
            help="Helm release name for Loki",
        ),
    ] = _DEFAULTS.LOKI_RELEASE_NAME,
    values_dir: Annotated[
        Path,
        typer.Option(
            "--values-dir",
            envvar="HELM_VALUES_DIR",
            help="Directory with helm values files",
        ),
    ] = Path(_DEFAULTS.DEFAULT_VALUES_DIR),
    manifests_dir: Annotated[
        Path,
        typer.Option(
            "--manifests-dir",
            envvar="K8S_MANIFEST_DIR",
            help="Directory with kubernetes manifests",
        ),
    ] = Path(_DEFAULTS.DEFAULT_MANIFESTS_DIR),
    wait_timeout: Annotated[
        int,
        typer.Option(
            "--wait-timeout",
            envvar="WAIT_TIMEOUT",
            min=1,
            help="Seconds to wait for pods to become ready",
        ),
    ] = _DEFAULTS.DEFAULT_WAIT_TIMEOUT_SECONDS,
    slack_webhook: Annotated[
        str | None,
        typer.Option(
            "--slack-webhook",
            envvar="SLACK_WEBHOOK",
            hidden=True,
            show_envvar=False,
            help="Slack webhook URL stored in the 'alertmanager-slack' secret",
        ),
    ] = None,
    k8s_backend: Annotated[
        K8sBackend,
        typer.Option(
            "--k8s-backend",
            envvar="K8S_BACKEND",
            help="How to talk to the cluster: kubectl subprocess or kr8s client",
        ),
    ] = K8sBackend.KUBECTL,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every command that is run"),
    ] = False,
) -> None:
    """
    📈 Deploy the monitoring stack (Prometheus, Grafana, Loki).

    Safe to re-run: existing releases are upgraded in place and existing
    resources are updated, never duplicated.

    If SLACK_WEBHOOK is set, a secret named 'alertmanager-slack' is
    created or updated in the namespace.
    """
    configure_logging(verbose)

    try:
        config = build_config(
            namespace=namespace,
            prom_release=prom_release,
            grafana_release=grafana_release,
            loki_release=loki_release,
            values_dir=values_dir,
            manifests_dir=manifests_dir,
            wait_timeout=wait_timeout,
            slack_webhook=slack_webhook,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    console.print_header(f"Deploying monitoring stack to '{config.target.namespace}'")

    commands = ShellCommands(Path.cwd(), get_k8s_controller(k8s_backend.value))
    summary = Reconciler(commands, console).reconcile(config)
    _print_summary(summary)

    if summary.warnings:
        console.warn("Deployment finished with warnings: " + ", ".join(summary.warnings))
    else:
        console.print("\n[bold green]🎉 Deployment finished![/bold green]")


def _print_summary(summary: ReconcileSummary) -> None:
    """Print one row per reconciliation step."""
    manifests = summary.manifests
    readiness = summary.readiness

    table = Table(title="Deployment summary", show_header=True, header_style="bold")
    table.add_column("Step", style="cyan")
    table.add_column("Result")
    table.add_row("Namespace", summary.namespace.value)
    table.add_row("Releases", ", ".join(summary.releases))
    table.add_row("Slack secret", summary.secret.value)
    table.add_row(
        "Manifests", f"{manifests.outcome.value} ({len(manifests.applied)} resources)"
    )
    table.add_row(
        "Readiness", f"{readiness.outcome.value} after {int(readiness.elapsed)}s"
    )
    console.print(table)
