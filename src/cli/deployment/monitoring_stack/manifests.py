"""Application of the custom manifest directory.

The directory holds PrometheusRules, ServiceMonitors, the Promtail
DaemonSet and Grafana provisioning config. Every resource document is
applied on its own so one invalid resource does not stop the rest; the
failures are collected and reported together at the end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]
from loguru import logger

from .constants import StackConstants
from .errors import DeploymentError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands
    from .config import ManifestSet


class ManifestOutcome(str, Enum):
    """What apply() did with the manifest directory."""

    APPLIED = "applied"
    SKIPPED = "skipped"


@dataclass
class ManifestResource:
    """One resource document loaded from the manifest directory."""

    source: Path
    index: int
    body: dict[str, Any]

    @property
    def kind(self) -> str:
        return str(self.body.get("kind", ""))

    @property
    def name(self) -> str:
        return str((self.body.get("metadata") or {}).get("name", ""))

    @property
    def label(self) -> str:
        """Human-readable reference, e.g. ``rules.yaml#1 PrometheusRule/node``."""
        ref = f"{self.source.name}#{self.index}"
        if self.kind or self.name:
            ref += f" {self.kind or '?'}/{self.name or '?'}"
        return ref


@dataclass
class ManifestFailure:
    """A resource (or whole file) that could not be applied."""

    reference: str
    error: str


@dataclass
class ManifestApplyReport:
    """Outcome of applying a manifest directory."""

    outcome: ManifestOutcome
    applied: list[str] = field(default_factory=list)
    failures: list[ManifestFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


def load_resources(
    directory: Path,
    suffixes: tuple[str, ...] = StackConstants.MANIFEST_SUFFIXES,
) -> tuple[list[ManifestResource], list[ManifestFailure]]:
    """Parse every resource document directly inside ``directory``.

    Files are read in name order and documents keep their order within a
    file. Empty documents are ignored.

    Returns:
        (resources, failures) where failures are unreadable files and
        documents that are not Kubernetes resources
    """
    resources: list[ManifestResource] = []
    failures: list[ManifestFailure] = []

    files = sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in suffixes
    )
    for path in files:
        try:
            documents = list(yaml.safe_load_all(path.read_text()))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            failures.append(ManifestFailure(path.name, f"cannot parse file: {e}"))
            continue

        for index, document in enumerate(documents):
            if document is None:
                continue
            resource = ManifestResource(
                path, index, document if isinstance(document, dict) else {}
            )
            if not isinstance(document, dict) or not (
                document.get("apiVersion") and document.get("kind")
            ):
                failures.append(
                    ManifestFailure(
                        resource.label,
                        "not a Kubernetes resource (apiVersion and kind are required)",
                    )
                )
                continue
            resources.append(resource)

    return resources, failures


class ManifestApplier:
    """Applies the manifest directory into the target namespace."""

    def __init__(self, commands: ShellCommands, console: ConsoleLike) -> None:
        """Initialize the manifest applier.

        Args:
            commands: Shell command executor
            console: Console for output
        """
        self.commands = commands
        self.console = console

    def apply(self, manifests: ManifestSet, namespace: str) -> ManifestApplyReport:
        """Apply every resource in the manifest directory.

        A missing directory is skipped without touching the cluster.

        Args:
            manifests: Directory to apply
            namespace: Default namespace for namespaced resources

        Returns:
            ManifestApplyReport listing applied resources

        Raises:
            DeploymentError: If any resource failed, after all were attempted
        """
        directory = manifests.source_directory
        if not directory.is_dir():
            self.console.info(f"Manifests dir '{directory}' not found; skipping")
            return ManifestApplyReport(outcome=ManifestOutcome.SKIPPED)

        self.console.print(
            f"[bold cyan]==> Applying Kubernetes manifests from {directory}[/bold cyan]"
        )

        try:
            resources, failures = load_resources(directory)
        except OSError as e:
            raise DeploymentError(
                f"Cannot read manifests directory '{directory}'", details=str(e)
            ) from e

        report = ManifestApplyReport(
            outcome=ManifestOutcome.APPLIED, failures=list(failures)
        )

        for resource in resources:
            document = yaml.safe_dump(resource.body, default_flow_style=False)
            result = self.commands.kubectl.apply_yaml(document, namespace)
            if result.success:
                line = result.stdout.strip() or resource.label
                self.console.print(f"  [dim]{line}[/dim]")
                report.applied.append(resource.label)
            else:
                logger.debug("Apply of {} failed: {}", resource.label, result.stderr)
                self.console.print(f"  [red]✗ {resource.label}[/red]")
                report.failures.append(
                    ManifestFailure(
                        resource.label,
                        result.stderr.strip() or f"exit code {result.returncode}",
                    )
                )

        if not report.success:
            raise DeploymentError(
                f"{len(report.failures)} manifest resource(s) in '{directory}' "
                "could not be applied",
                details="\n".join(f"• {f.reference}: {f.error}" for f in report.failures)
                + f"\n\nApplied successfully: {len(report.applied)}",
            )

        self.console.ok(
            f"Applied {len(report.applied)} resource(s) from {directory} "
            f"to namespace {namespace}"
        )
        return report
