"""Tests for namespace creation."""

from unittest.mock import MagicMock

import pytest

from src.cli.deployment.monitoring_stack.errors import DeploymentError
from src.cli.deployment.monitoring_stack.namespace import (
    NamespaceManager,
    NamespaceOutcome,
)
from src.cli.deployment.shell_commands.types import CommandResult
from src.infra.k8s import ClusterAccessError


class TestNamespaceManager:
    @pytest.fixture
    def manager(
        self, mock_commands: MagicMock, mock_console: MagicMock
    ) -> NamespaceManager:
        return NamespaceManager(mock_commands, mock_console)

    def test_creates_missing_namespace(
        self, manager: NamespaceManager, mock_commands: MagicMock
    ) -> None:
        mock_commands.kubectl.namespace_exists.return_value = False
        mock_commands.kubectl.create_namespace.return_value = CommandResult(
            success=True
        )

        assert manager.ensure("test-obs") == NamespaceOutcome.CREATED
        mock_commands.kubectl.create_namespace.assert_called_once_with("test-obs")

    def test_existing_namespace_is_not_recreated(
        self, manager: NamespaceManager, mock_commands: MagicMock
    ) -> None:
        mock_commands.kubectl.namespace_exists.return_value = True

        assert manager.ensure("observability") == NamespaceOutcome.ALREADY_EXISTS
        mock_commands.kubectl.create_namespace.assert_not_called()

    def test_already_exists_race_is_success(
        self, manager: NamespaceManager, mock_commands: MagicMock
    ) -> None:
        mock_commands.kubectl.namespace_exists.return_value = False
        mock_commands.kubectl.create_namespace.return_value = CommandResult(
            success=False,
            stderr='Error from server (AlreadyExists): namespaces "obs" already exists',
            returncode=1,
        )

        assert manager.ensure("obs") == NamespaceOutcome.ALREADY_EXISTS

    def test_failed_existence_check_is_fatal(
        self, manager: NamespaceManager, mock_commands: MagicMock
    ) -> None:
        mock_commands.kubectl.namespace_exists.side_effect = ClusterAccessError(
            "Unable to connect to the server"
        )

        with pytest.raises(DeploymentError) as excinfo:
            manager.ensure("obs")

        assert "Unable to connect" in (excinfo.value.details or "")
        mock_commands.kubectl.create_namespace.assert_not_called()

    def test_failed_create_is_fatal(
        self, manager: NamespaceManager, mock_commands: MagicMock
    ) -> None:
        mock_commands.kubectl.namespace_exists.return_value = False
        mock_commands.kubectl.create_namespace.return_value = CommandResult(
            success=False, stderr="forbidden", returncode=1
        )

        with pytest.raises(DeploymentError, match="Failed to create namespace"):
            manager.ensure("obs")
