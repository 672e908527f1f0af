"""Command line utilities for vessel telemetry cleanup."""

from vessel_cleanup.cli.app import main, run_cli

__all__ = ["main", "run_cli"]
