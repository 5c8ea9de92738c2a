"""Deployment module for the monitoring stack.

The package is organized into subpackages for modularity:
- shell_commands: Abstractions for helm and kubectl execution
- monitoring_stack: Reconciliation steps and the Reconciler orchestrator
"""

from .monitoring_stack import DeploymentError, Reconciler

__all__ = ["Reconciler", "DeploymentError"]
