"""Loguru sink configuration for the CLI."""

import sys

from loguru import logger


def configure_logging(verbose: bool = False) -> None:
    """Route diagnostic logs to stderr.

    Console output is the user-facing channel; loguru only carries command
    traces and ignored errors, shown at DEBUG with ``--verbose``.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        format="<dim>{time:HH:mm:ss}</dim> <level>{level: <7}</level> {message}",
    )
