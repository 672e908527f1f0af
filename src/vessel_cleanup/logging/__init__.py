"""Logging utilities for vessel telemetry cleanup."""

from vessel_cleanup.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
