import pytest
import typer

from src.cli.deployment.monitoring_stack.errors import DeploymentError, MissingToolError
from src.cli.shared.console import with_error_handling


def test_with_error_handling_handles_deployment_error():
    @with_error_handling
    def _command() -> None:
        raise DeploymentError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_uses_error_exit_code():
    @with_error_handling
    def _command() -> None:
        raise MissingToolError("helm")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 2


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_passes_through_success():
    calls = []

    @with_error_handling
    def _command(value: int) -> None:
        calls.append(value)

    _command(3)

    assert calls == [3]
