from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto

class Severity(Enum):
    INFO = auto()
    WARN = auto()
    ERROR = auto()

@dataclass(frozen=True)      # immutable
class Code:
    id: str                  # e.g., "GEN001"
    severity: Severity       # default severity
    template: str            # default message template (format kwargs allowed)

class Codes:
    # Generation (fatal)
    CYCLE_DETECTED     = Code("GEN001", Severity.ERROR,
                              "Circular dependency detected, code cannot be generated ({cycle}).")

    # Structural validation (advisory)
    NO_INPUTS          = Code("VAL001", Severity.WARN,
                              "No input nodes (Answer/Score).")
    NO_OUTPUTS         = Code("VAL002", Severity.WARN,
                              "No output nodes (Output).")
    UNCONNECTED_NODES  = Code("VAL003", Severity.WARN,
                              "Found {count} unconnected node(s).")

    # Connections (lint only)
    INCOMPATIBLE_EDGE  = Code("CON001", Severity.WARN,
                              "Edge '{edge}' is incompatible: {reason}.")
    DANGLING_EDGE      = Code("CON002", Severity.INFO,
                              "Edge '{edge}' references a missing node and was ignored.")
    EXTRA_CONNECTION   = Code("CON003", Severity.WARN,
                              "Edge '{edge}' is a second wire into single-connection port '{port}' and is ignored.")

codes = Codes()
