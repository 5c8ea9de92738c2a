"""Exceptions raised by the monitoring stack deployment."""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None, exit_code: int = 1):
        self.message = message
        self.details = details
        self.exit_code = exit_code
        super().__init__(message)


class MissingToolError(DeploymentError):
    """Raised when a required external tool is not on PATH.

    Exits with code 2, before any cluster mutation happens.
    """

    def __init__(self, tool: str):
        super().__init__(
            f"Required command '{tool}' not found in PATH",
            details=f"Install '{tool}' and make sure it is on your PATH, then retry.",
            exit_code=2,
        )
        self.tool = tool
