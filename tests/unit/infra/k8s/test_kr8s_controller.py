"""Tests for the kr8s backend."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import kr8s
import pytest

from src.cli.deployment.monitoring_stack.config import build_config
from src.cli.deployment.monitoring_stack.post_deploy import PostDeployChecker
from src.cli.deployment.shell_commands import ShellCommands
from src.infra.k8s import ClusterAccessError, run_sync
from src.infra.k8s.kr8s_controller import Kr8sController

MODULE = "src.infra.k8s.kr8s_controller"


def _pod(name: str, phase: str, ready: list[bool]) -> MagicMock:
    return MagicMock(
        raw={
            "metadata": {"name": name},
            "spec": {"containers": [{"name": f"c{i}"} for i in range(len(ready))]},
            "status": {
                "phase": phase,
                "containerStatuses": [{"ready": r} for r in ready],
            },
        }
    )


def _listing(*pods: MagicMock, error: Exception | None = None):
    async def fake_list(**kwargs: Any):
        if error is not None:
            raise error
        for pod in pods:
            yield pod

    return fake_list


@pytest.fixture
def mock_api() -> Iterator[AsyncMock]:
    with patch.object(
        Kr8sController, "_get_api", new_callable=AsyncMock
    ) as get_api:
        get_api.return_value = MagicMock()
        yield get_api


class TestNamespaceExists:
    def test_found(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Namespace.get", new_callable=AsyncMock) as get:
            get.return_value = MagicMock()

            assert run_sync(Kr8sController().namespace_exists("observability"))

        assert get.call_args.args == ("observability",)
        assert get.call_args.kwargs["api"] is mock_api.return_value

    def test_not_found(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Namespace.get", new_callable=AsyncMock) as get:
            get.side_effect = kr8s.NotFoundError("namespace obs not found")

            assert not run_sync(Kr8sController().namespace_exists("obs"))

    def test_other_failures_raise(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Namespace.get", new_callable=AsyncMock) as get:
            get.side_effect = ConnectionError("connection refused")

            with pytest.raises(ClusterAccessError, match="refused"):
                run_sync(Kr8sController().namespace_exists("obs"))


class TestCreateNamespace:
    def test_created(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Namespace") as namespace_cls:
            namespace_cls.return_value.create = AsyncMock()

            result = run_sync(Kr8sController().create_namespace("obs"))

        assert result.success
        assert namespace_cls.call_args.args[0] == {"metadata": {"name": "obs"}}

    def test_api_error_is_reported(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Namespace") as namespace_cls:
            namespace_cls.return_value.create = AsyncMock(
                side_effect=RuntimeError("forbidden")
            )

            result = run_sync(Kr8sController().create_namespace("obs"))

        assert not result.success
        assert result.stderr == "forbidden"


class TestResourceExists:
    @pytest.mark.parametrize(
        ("resource_type", "cls_name"),
        [("service", "Service"), ("svc", "Service"), ("secret", "Secret")],
    )
    def test_found(
        self, mock_api: AsyncMock, resource_type: str, cls_name: str
    ) -> None:
        with patch(f"{MODULE}.{cls_name}.get", new_callable=AsyncMock) as get:
            assert run_sync(
                Kr8sController().resource_exists(resource_type, "x", "obs")
            )

        assert get.call_args.kwargs["namespace"] == "obs"

    def test_not_found(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Service.get", new_callable=AsyncMock) as get:
            get.side_effect = kr8s.NotFoundError("not found")

            assert not run_sync(
                Kr8sController().resource_exists(
                    "service", "prometheus-operated", "obs"
                )
            )

    def test_lookup_error_counts_as_missing(self, mock_api: AsyncMock) -> None:
        with patch(f"{MODULE}.Secret.get", new_callable=AsyncMock) as get:
            get.side_effect = RuntimeError("Unauthorized")

            assert not run_sync(
                Kr8sController().resource_exists("secret", "alertmanager-slack", "obs")
            )

    def test_unreachable_api_counts_as_missing(self, mock_api: AsyncMock) -> None:
        mock_api.side_effect = ConnectionError("dial tcp: connection refused")

        assert not run_sync(
            Kr8sController().resource_exists("service", "prometheus-operated", "obs")
        )

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported resource type"):
            run_sync(Kr8sController().resource_exists("deployment", "x", "obs"))


class TestGetPods:
    def test_parses_container_readiness(self, mock_api: AsyncMock) -> None:
        pods = [
            _pod("grafana-0", "Running", [True, False]),
            _pod("loki-0", "Running", [True]),
        ]
        with patch(f"{MODULE}.Pod.list", _listing(*pods)):
            listing = run_sync(Kr8sController().get_pods("obs"))

        assert listing.success
        assert [(p.name, p.ready_ratio, p.is_ready) for p in listing.pods] == [
            ("grafana-0", "1/2", False),
            ("loki-0", "1/1", True),
        ]

    def test_query_failure(self, mock_api: AsyncMock) -> None:
        with patch(
            f"{MODULE}.Pod.list", _listing(error=RuntimeError("forbidden"))
        ):
            listing = run_sync(Kr8sController().get_pods("obs"))

        assert not listing.success
        assert listing.error == "forbidden"
        assert listing.pods == []


def test_post_deploy_check_survives_unreachable_api(
    mock_api: AsyncMock, mock_console: MagicMock, tmp_path: Path
) -> None:
    mock_api.side_effect = ConnectionError("dial tcp: connection refused")
    commands = ShellCommands(tmp_path, k8s_controller=Kr8sController())

    found = PostDeployChecker(commands, mock_console).run(
        build_config(namespace="obs")
    )

    assert found is False
    mock_console.warn.assert_called_once()
