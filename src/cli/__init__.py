"""Main CLI application module.

This module provides the main entry point for the monitoring-deploy CLI,
an idempotent installer for the Prometheus / Grafana / Loki stack.
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from .commands import deploy

# Create the main CLI application
app = typer.Typer(
    help="📈 Monitoring stack installer (kube-prometheus-stack, Grafana, Loki)",
    rich_markup_mode="rich",
    add_completion=False,
)

app.command()(deploy)


def main() -> None:
    """Main entry point for the CLI."""
    # Values from .env are picked up by option envvars; real env wins
    load_dotenv(Path.cwd() / ".env", override=False)
    app()


if __name__ == "__main__":
    main()
