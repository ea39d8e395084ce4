"""Stable diagnostic codes, the emitter and the structural validator."""

from .codes import Code, Codes, Severity, codes
from .diagnostics import (
    Diagnostics,
    DiagnosticsConfig,
    logging_sink,
    null_sink,
)
from .validator import GraphValidator, lint_connections

__all__ = [
    "Code",
    "Codes",
    "Severity",
    "codes",
    "Diagnostics",
    "DiagnosticsConfig",
    "logging_sink",
    "null_sink",
    "GraphValidator",
    "lint_connections",
]
