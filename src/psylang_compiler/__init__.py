"""
PsyLang Graph Compiler

Compiles the visual builder's node/edge graph into linear PsyLang
pseudocode. This package provides:
- Immutable graph snapshot model with typed node configurations
- Dependency graph construction and cycle detection
- Expression synthesis and if/else-if/else chain reconstruction
- Structured diagnostics (fatal errors and advisory warnings)

Example usage:
    from psylang_compiler import Edge, GraphSnapshot, Node, generate_code

    snapshot = GraphSnapshot(
        nodes=[
            Node.create("n1", "number", {"value": 7}),
            Node.create("out", "output", {"outputId": 1}),
        ],
        edges=[Edge("e1", source="n1", target="out")],
    )

    result = generate_code(snapshot)
    print(result.code)        # ... Output[1] = 7 ...
    print(result.warnings)    # ['No input nodes (Answer/Score).']
"""

from .model import (
    ConditionType,
    Edge,
    GraphFormatError,
    GraphSnapshot,
    HandleDataType,
    Node,
    NodeType,
    check_connections,
)
from .config import CompilerConfig
from .diagnostics import Diagnostics, DiagnosticsConfig, Severity
from .graph_builder import build_dependency_graph, load_snapshot, snapshot_from_dict
from .codegen import GenerationResult, PsyLangCodeGenerator, generate_code

__all__ = [
    # Model
    "Node",
    "Edge",
    "GraphSnapshot",
    "GraphFormatError",
    "NodeType",
    "ConditionType",
    "HandleDataType",
    "check_connections",

    # Config & diagnostics
    "CompilerConfig",
    "Diagnostics",
    "DiagnosticsConfig",
    "Severity",

    # Graph
    "build_dependency_graph",
    "load_snapshot",
    "snapshot_from_dict",

    # Generation
    "GenerationResult",
    "PsyLangCodeGenerator",
    "generate_code",
]

__version__ = "1.0.0"
