"""Pre-flight checks run before any cluster mutation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .constants import StackConstants
from .errors import MissingToolError

if TYPE_CHECKING:
    from src.utils.console_like import ConsoleLike

    from ..shell_commands import ShellCommands


class PreflightChecker:
    """Verifies the external tools the reconciliation shells out to."""

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike,
        constants: StackConstants | None = None,
    ) -> None:
        self.commands = commands
        self.console = console
        self.constants = constants or StackConstants()

    def check_tools(self) -> None:
        """Ensure every required tool is on PATH.

        Raises:
            MissingToolError: For the first tool that cannot be found
        """
        for tool in self.constants.REQUIRED_TOOLS:
            if not self.commands.tool_available(tool):
                raise MissingToolError(tool)
            logger.debug("Found required tool {}", tool)
