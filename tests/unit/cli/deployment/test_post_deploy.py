"""Tests for post-deploy checks."""

from unittest.mock import MagicMock

from src.cli.deployment.monitoring_stack.config import build_config
from src.cli.deployment.monitoring_stack.post_deploy import PostDeployChecker


def test_missing_service_warns_without_failing(
    mock_commands: MagicMock, mock_console: MagicMock
) -> None:
    mock_commands.kubectl.resource_exists.return_value = False

    found = PostDeployChecker(mock_commands, mock_console).run(build_config())

    assert found is False
    mock_commands.kubectl.resource_exists.assert_called_once_with(
        "service", "prometheus-operated", "observability"
    )
    mock_console.warn.assert_called_once()


def test_service_found(mock_commands: MagicMock, mock_console: MagicMock) -> None:
    mock_commands.kubectl.resource_exists.return_value = True

    assert PostDeployChecker(mock_commands, mock_console).run(build_config())
    mock_console.warn.assert_not_called()


def test_useful_commands_follow_release_names(
    mock_commands: MagicMock, mock_console: MagicMock
) -> None:
    config = build_config(namespace="mon", grafana_release="dashboards")

    commands = PostDeployChecker(mock_commands, mock_console).useful_commands(config)

    assert "kubectl -n mon get pods" in commands
    assert "kubectl -n mon port-forward svc/dashboards 3000:80 &" in commands
    assert (
        "kubectl -n mon port-forward svc/prometheus-operated 9090:9090 &" in commands
    )
