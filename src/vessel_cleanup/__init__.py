"""Top-level package for vessel telemetry cleanup.

This package compiles a catalog of known sensor faults into per-sample guards
that patch historical telemetry in place before derived fuel, speed, position
and power calculations run.
"""

from ._version import __version__
from .cleanup import (
    CATALOG,
    CatalogError,
    CleanupGuard,
    CorrectionRule,
    Stage,
    compile_guards,
    parse_time,
    run_guards,
)
from .configuration import CleanupSettings, load_settings
from .samples import FrameSample, TelemetryFrame

__all__ = [
    "CATALOG",
    "CatalogError",
    "CleanupGuard",
    "CleanupSettings",
    "CorrectionRule",
    "FrameSample",
    "Stage",
    "TelemetryFrame",
    "compile_guards",
    "load_settings",
    "parse_time",
    "run_guards",
    "__version__",
]
