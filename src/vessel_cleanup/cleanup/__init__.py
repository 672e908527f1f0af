"""Conditional, time-bounded corrections for vessel telemetry samples."""

from vessel_cleanup.cleanup.rules import (
    CatalogError,
    CleanupGuard,
    CorrectionRule,
    Stage,
    compile_guards,
    run_guards,
    utc_now,
    validate_catalog,
)
from vessel_cleanup.cleanup.catalog import CATALOG, parse_time

__all__ = [
    "CATALOG",
    "CatalogError",
    "CleanupGuard",
    "CorrectionRule",
    "Stage",
    "compile_guards",
    "parse_time",
    "run_guards",
    "utc_now",
    "validate_catalog",
]
