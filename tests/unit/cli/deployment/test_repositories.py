"""Tests for Helm repository registration."""

from unittest.mock import MagicMock

import pytest

from src.cli.deployment.monitoring_stack.constants import StackConstants
from src.cli.deployment.monitoring_stack.errors import DeploymentError
from src.cli.deployment.monitoring_stack.repositories import RepositoryRegistrar
from src.cli.deployment.shell_commands.types import CommandResult, HelmRepository


def test_registers_every_default_repository(
    mock_commands: MagicMock, mock_console: MagicMock
) -> None:
    mock_commands.helm.repo_add.return_value = CommandResult(success=True)
    mock_commands.helm.repo_update.return_value = CommandResult(success=True)

    RepositoryRegistrar(mock_commands, mock_console).register(
        StackConstants().helm_repositories
    )

    added = [c.args[0] for c in mock_commands.helm.repo_add.call_args_list]
    assert added == ["prometheus-community", "grafana", "grafana-labs"]
    mock_commands.helm.repo_update.assert_called_once()


def test_add_failure_is_ignored(
    mock_commands: MagicMock, mock_console: MagicMock
) -> None:
    """An already-registered alias must not stop the run."""
    mock_commands.helm.repo_add.side_effect = [
        CommandResult(success=False, stderr="already exists", returncode=1),
        CommandResult(success=True),
    ]
    mock_commands.helm.repo_update.return_value = CommandResult(success=True)

    RepositoryRegistrar(mock_commands, mock_console).register(
        [HelmRepository("a", "https://a"), HelmRepository("b", "https://b")]
    )

    assert mock_commands.helm.repo_add.call_count == 2
    mock_commands.helm.repo_update.assert_called_once()


def test_update_failure_is_fatal(
    mock_commands: MagicMock, mock_console: MagicMock
) -> None:
    mock_commands.helm.repo_add.return_value = CommandResult(success=True)
    mock_commands.helm.repo_update.return_value = CommandResult(
        success=False, stderr="Error: looks like the repo is unreachable", returncode=1
    )

    with pytest.raises(DeploymentError) as excinfo:
        RepositoryRegistrar(mock_commands, mock_console).register(
            [HelmRepository("a", "https://a")]
        )

    assert "unreachable" in (excinfo.value.details or "")
