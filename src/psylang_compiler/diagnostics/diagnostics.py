from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Any, Optional, List
import logging

from .codes import Code, Severity, codes as default_codes

logger = logging.getLogger("psylang_compiler.diagnostics")

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}

def _format_human(evt: Dict[str, Any]) -> str:
    """Human-friendly single-line format."""
    node = evt.get("node")
    node_str = f" @ {node}" if node else ""
    return f"[{evt['ts']}] {evt['severity']} {evt['code']}{node_str}: {evt['message']}"


# Sinks receive the formatted line and the event's severity
Sink = Callable[[str, Severity], None]

def logging_sink(line: str, level: Severity) -> None:
    logger.log(_LOG_LEVELS[level], line)

def null_sink(line: str, level: Severity) -> None:
    return None

"""
To be set by the compiler frontend (CLI, editor bridge) during initialization
"""
@dataclass
class DiagnosticsConfig:
    formatter: Callable[[Dict[str, Any]], str] = _format_human
    sink: Sink = logging_sink
    codes = default_codes


class Diagnostics:
    """Structured diagnostics with stable codes and pluggable sinks."""
    def __init__(self, config: Optional[DiagnosticsConfig] = None):
        self.config = config or DiagnosticsConfig()
        self.codes = self.config.codes  # expose as diag.codes
        self.events: List[Dict[str, Any]] = []

    # public API
    def info(self, code: Code, *, msg: Optional[str] = None, **kwargs):
        self._emit(code, Severity.INFO, msg, kwargs)

    def warn(self, code: Code, *, msg: Optional[str] = None, **kwargs):
        self._emit(code, Severity.WARN, msg, kwargs)

    def error(self, code: Code, *, msg: Optional[str] = None, **kwargs):
        self._emit(code, Severity.ERROR, msg, kwargs)

    # collected results
    def messages(self, level: Severity) -> List[str]:
        return [e["message"] for e in self.events if e["severity"] == level.name]

    @property
    def errors(self) -> List[str]:
        return self.messages(Severity.ERROR)

    @property
    def warnings(self) -> List[str]:
        return self.messages(Severity.WARN)

    @property
    def has_errors(self) -> bool:
        return any(e["severity"] == Severity.ERROR.name for e in self.events)

    # core emit
    def _emit(self, code: Code, level: Severity, msg: Optional[str], kv: Dict[str, Any]):
        try:
            message = msg if msg is not None else code.template.format(**kv)
        except KeyError as e:
            # if template placeholders missing, degrade gracefully
            missing = str(e).strip("'")
            message = f"{code.template} (missing: {missing})"

        evt = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "code": code.id,
            "severity": level.name,
            "message": message,
        }

        # common structured fields
        for field in ("node", "edge", "port", "count", "cycle", "expected", "actual",
                      "reason", "extra"):
            if field in kv and kv[field] is not None:
                evt[field] = kv[field]

        self.events.append(evt)
        line = self.config.formatter(evt)
        self.config.sink(line, level)
