"""Post-deployment checks and follow-up hints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel

from .constants import StackConstants

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands
    from .config import ReconcileConfig


class PostDeployChecker:
    """Verifies the Prometheus service and prints useful commands."""

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike,
        constants: StackConstants | None = None,
    ) -> None:
        self.commands = commands
        self.console = console
        self.constants = constants or StackConstants()

    def check_prometheus_service(self, namespace: str) -> bool:
        """Warn (without failing) when the Prometheus service is missing.

        Returns:
            True if the service was found
        """
        service = self.constants.PROMETHEUS_SERVICE
        if self.commands.kubectl.resource_exists("service", service, namespace):
            self.console.info(f"Prometheus service found: {service}.{namespace}")
            return True
        self.console.warn(
            f"Prometheus service '{service}' not found. "
            "Verify kube-prometheus-stack installation."
        )
        return False

    def useful_commands(self, config: ReconcileConfig) -> list[str]:
        """Follow-up commands for inspecting the deployed stack."""
        c = self.constants
        ns = config.target.namespace
        grafana = next(
            (
                r.release_name
                for r in config.releases
                if r.chart_reference == c.GRAFANA_CHART
            ),
            c.GRAFANA_RELEASE_NAME,
        )
        return [
            f"kubectl -n {ns} get pods",
            f"kubectl -n {ns} get svc",
            f"kubectl -n {ns} port-forward svc/{c.PROMETHEUS_SERVICE} "
            f"{c.PROMETHEUS_PORT}:{c.PROMETHEUS_PORT} &",
            f"kubectl -n {ns} port-forward svc/{grafana} {c.GRAFANA_PORT}:80 &",
            f"kubectl -n {ns} port-forward svc/loki {c.LOKI_PORT}:{c.LOKI_PORT} &",
        ]

    def run(self, config: ReconcileConfig) -> bool:
        """Run the checks and print the follow-up commands."""
        self.console.print("[bold cyan]==> Post-deploy checks[/bold cyan]")
        found = self.check_prometheus_service(config.target.namespace)
        self.console.print(
            Panel(
                "\n".join(f"- {cmd}" for cmd in self.useful_commands(config)),
                title="Useful commands",
                border_style="blue",
            )
        )
        return found
