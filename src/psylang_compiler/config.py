"""
Compiler configuration.

To be set by the compiler frontend (CLI, editor bridge) before generation.
The defaults reproduce the fixed PsyLang text layout.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .diagnostics.diagnostics import DiagnosticsConfig

DEFAULT_HEADER: Tuple[str, ...] = (
    "# PsyLang Generated Code",
    "# Generated by PsyLang Visual Builder",
)


@dataclass
class CompilerConfig:
    """
    Attributes:
        indent: Text of one block indentation level
        header_lines: Comment lines opening every generated file
        assignments_header: Comment introducing the flat Output assignments
        conditions_header: Comment introducing the condition chains and labels
        diagnostics: Formatter/sink used for warnings and errors
    """
    indent: str = "    "
    header_lines: Tuple[str, ...] = DEFAULT_HEADER
    assignments_header: str = "# Calculate scores"
    conditions_header: str = "# Classification logic"
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
