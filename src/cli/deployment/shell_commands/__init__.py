"""Shell command abstractions for Kubernetes/Helm deployment operations.

The monitoring stack steps reach helm and the cluster only through
ShellCommands, so tests can swap in a fake with the same two attributes:

- helm: chart repositories and atomic release install/upgrade
- kubectl: namespaces, applied YAML, resource lookups and pod readiness

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands(working_dir=Path("."))
    if not commands.kubectl.namespace_exists("observability"):
        commands.kubectl.create_namespace("observability")
"""

from pathlib import Path

from src.infra.k8s import KubernetesController

from .helm import HelmCommands
from .kubectl import KubectlCommands
from .runner import CommandRunner
from .types import CommandResult, HelmRelease, HelmRepository, PodInfo, PodListing


class ShellCommands:
    """Unified interface for all shell command operations.

    This class provides a facade over the specialized command modules,
    offering a single point of access for deployment operations while
    maintaining separation of concerns internally.

    Attributes:
        helm: Helm-related commands
        kubectl: Kubernetes kubectl commands

    Example:
        >>> commands = ShellCommands(Path("."))
        >>> commands.helm.upgrade_install("grafana", "grafana/grafana", "observability")
    """

    def __init__(
        self,
        working_dir: Path,
        k8s_controller: KubernetesController | None = None,
    ) -> None:
        """Initialize the shell commands executor.

        Args:
            working_dir: Directory commands are executed from by default.
            k8s_controller: Kubernetes backend (default: kubectl subprocess)
        """
        self._working_dir = Path(working_dir)
        self._runner = CommandRunner(self._working_dir)

        self.helm = HelmCommands(self._runner)
        self.kubectl = KubectlCommands(k8s_controller)

    @property
    def working_dir(self) -> Path:
        """Get the working directory path."""
        return self._working_dir

    def tool_available(self, name: str) -> bool:
        """Check if an external tool is on PATH. See CommandRunner.tool_available."""
        return self._runner.tool_available(name)


__all__ = [
    "ShellCommands",
    "CommandResult",
    "HelmRelease",
    "HelmRepository",
    "PodInfo",
    "PodListing",
    # Specialized command classes for direct usage
    "HelmCommands",
    "KubectlCommands",
    "CommandRunner",
]
