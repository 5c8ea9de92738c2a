"""CLI command modules.

Commands:
- deploy: Install or upgrade the monitoring stack in a namespace
"""

from .deploy import deploy

__all__ = ["deploy"]
