"""Expression synthesis, control-flow reconstruction and code emission."""

from .expression import ExpressionSynthesizer
from .control_flow import BranchStatementGenerator, ChainMode, ConditionChainBuilder
from .result import GenerationResult
from .backends.CodeGenerator import PsyLangCodeGenerator, generate_code

__all__ = [
    "ExpressionSynthesizer",
    "BranchStatementGenerator",
    "ChainMode",
    "ConditionChainBuilder",
    "GenerationResult",
    "PsyLangCodeGenerator",
    "generate_code",
]
