"""Cluster-wide pod readiness polling.

Helm already waits for each release on its own. This is a second check over
everything in the namespace, including pods created by the custom manifests.
A timeout here is a warning, not a failure.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger
from rich.table import Table

from .constants import StackConstants

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import PodInfo, ShellCommands


class ReadinessOutcome(str, Enum):
    """Terminal states of the readiness wait."""

    READY = "ready"
    TIMED_OUT = "timed_out"


@dataclass
class ReadinessSnapshot:
    """Pod readiness at one poll cycle."""

    pods: list[PodInfo] = field(default_factory=list)
    query_error: str = ""

    @property
    def not_ready(self) -> list[PodInfo]:
        return [p for p in self.pods if not p.is_ready]

    @property
    def all_ready(self) -> bool:
        """True when the query worked and no pod has a container mismatch."""
        return not self.query_error and not self.not_ready


@dataclass
class ReadinessResult:
    """Final state of a readiness wait."""

    outcome: ReadinessOutcome
    elapsed: float
    polls: int
    last_snapshot: ReadinessSnapshot | None = None

    @property
    def ready(self) -> bool:
        return self.outcome is ReadinessOutcome.READY


class ReadinessWaiter:
    """Polls pods in a namespace at a fixed interval until ready or timeout.

    Clock and sleep are injectable so tests never sleep for real.
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike,
        *,
        poll_interval: float = StackConstants.POD_POLL_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.commands = commands
        self.console = console
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def snapshot(self, namespace: str) -> ReadinessSnapshot:
        """Take one readiness snapshot of the namespace."""
        listing = self.commands.kubectl.get_pods(namespace)
        if not listing.success:
            return ReadinessSnapshot(query_error=listing.error or "pod query failed")
        return ReadinessSnapshot(pods=listing.pods)

    def wait(self, namespace: str, timeout: float) -> ReadinessResult:
        """Block until every pod is ready or ``timeout`` seconds have elapsed.

        The deadline is checked before each poll, so a timeout of zero
        returns TIMED_OUT without querying the cluster.

        Args:
            namespace: Kubernetes namespace to watch
            timeout: Seconds to wait

        Returns:
            ReadinessResult with the terminal outcome
        """
        self.console.print(
            f"[bold cyan]==> Waiting up to {timeout:g}s for pods in namespace "
            f"'{namespace}' to be ready[/bold cyan]"
        )
        start = self._clock()
        polls = 0
        last: ReadinessSnapshot | None = None

        while True:
            elapsed = self._clock() - start
            if elapsed >= timeout:
                self._report_timeout(namespace, last)
                return ReadinessResult(ReadinessOutcome.TIMED_OUT, elapsed, polls, last)

            last = self.snapshot(namespace)
            polls += 1

            if last.all_ready:
                self.console.ok(f"All pods appear ready in namespace {namespace}")
                return ReadinessResult(
                    ReadinessOutcome.READY, self._clock() - start, polls, last
                )

            if last.query_error:
                logger.debug("Pod query failed: {}", last.query_error)
                self.console.print(
                    f"  [dim]Could not list pods ({last.query_error}), "
                    f"retrying in {self.poll_interval:g}s...[/dim]"
                )
            else:
                self.console.print(
                    f"  [dim]{len(last.not_ready)} pod(s) not ready yet, "
                    f"sleeping {self.poll_interval:g}s...[/dim]"
                )
            self._sleep(self.poll_interval)

    def _report_timeout(
        self, namespace: str, snapshot: ReadinessSnapshot | None
    ) -> None:
        self.console.warn(
            f"Timeout: some pods are still not ready in namespace '{namespace}'"
        )
        if snapshot is None or not snapshot.not_ready:
            return

        table = Table(title=f"Pods not ready in {namespace}")
        table.add_column("Pod", style="cyan")
        table.add_column("Ready", justify="right")
        table.add_column("Phase")
        for pod in snapshot.not_ready:
            table.add_row(pod.name, pod.ready_ratio, pod.phase)
        self.console.print(table)
