"""
GenerationResult - Return type for PsyLangCodeGenerator.generate().

Provides generated code, fatal errors and advisory warnings for the
editor bridge and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GenerationResult:
    """
    Result of one compilation.

    Attributes:
        code: Newline-joined PsyLang text, "" when a fatal error occurred
        errors: Fatal diagnostics (non-empty only for dependency cycles)
        warnings: Structural diagnostics, never block ``code``
        events: Structured diagnostic events (code id, severity, fields)

    Example usage:
        result = generate_code(snapshot)
        if result:
            print(result.code)
        else:
            print(f"Error: {result.errors[0]}")
    """
    code: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def failure(cls, errors: List[str], events: List[Dict[str, Any]]):
        """Create a fatal result: no code at all."""
        return cls(code="", errors=list(errors), warnings=[], events=list(events))

    @property
    def success(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        """The editor-facing ``{code, errors, warnings}`` contract."""
        return {
            "code": self.code,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }

    def __bool__(self):
        """Allow result to be used in boolean context."""
        return self.success

    def __str__(self):
        if self.success:
            return f"GenerationResult(success=True, lines={len(self.code.splitlines())}, warnings={len(self.warnings)})"
        else:
            return f"GenerationResult(success=False, error={self.errors[0]})"
