#!/usr/bin/env python3
"""
CodeGenerator.py — Generate PsyLang pseudocode from a node/edge snapshot

This module compiles the visual builder's graph into linear PsyLang text.
The graph has no inherent statement order; ordering, expressions and
control flow are all reconstructed from its structure.

Architecture:
- Dependency Graph: forward/backward adjacency (graph_builder.GraphDriver)
- Cycle Gate: three-color topological sort, aborts on any cycle
- Expression Synthesizer: value subgraph -> infix expression
- Condition Chains: condition nodes -> if / else if / else blocks
- Validator: advisory structural warnings
- Code Emitter: header, assignment section, classification section

Every call to generate() rebuilds all derived structures from the snapshot;
nothing is cached between calls.
"""

import logging
from typing import List, Optional

from ...config import CompilerConfig
from ...diagnostics.diagnostics import Diagnostics
from ...diagnostics.validator import GraphValidator
from ...graph_builder.GraphDriver import DependencyGraph, build_dependency_graph
from ...graph_builder.topology import find_cycle_path, topological_sort
from ...model.core import GraphSnapshot
from ...model.types import NodeType, format_scalar
from ..control_flow import ConditionChainBuilder
from ..expression import ExpressionSynthesizer
from ..result import GenerationResult

logger = logging.getLogger(__name__)


class PsyLangCodeGenerator:
    """
    Generates PsyLang code by traversing the snapshot's dependency structure.

    Process:
    1. Build dependency graph
    2. Gate on acyclicity (fatal error, no code)
    3. Emit header
    4. Emit flat Output assignments
    5. Emit condition chains and standalone labels
    6. Run structural validation (warnings only)
    """

    def __init__(self, snapshot: GraphSnapshot, config: Optional[CompilerConfig] = None):
        self.snapshot = snapshot
        self.config = config or CompilerConfig()
        self.code_lines: List[str] = []

    # ===================================================================
    # SECTION 1: Code Emission
    # ===================================================================

    def _emit(self, line: str = ""):
        self.code_lines.append(line)

    def _emit_section(self, header: str, lines: List[str]):
        """Emit ``header`` followed by ``lines``; nothing at all when ``lines`` is empty."""
        if not lines:
            return
        self._emit(header)
        self.code_lines.extend(lines)

    # ===================================================================
    # SECTION 2: Main Code Generation Entry Point
    # ===================================================================

    def generate(self) -> GenerationResult:
        """
        Main entry point to compile the snapshot.

        Returns:
            GenerationResult: code plus diagnostics; ``code`` is "" and
            ``errors`` holds one message when the graph contains a cycle
        """
        diag = Diagnostics(self.config.diagnostics)
        self.code_lines = []

        deps = build_dependency_graph(self.snapshot)

        order = topological_sort(deps, [n.id for n in self.snapshot.nodes])
        if not order and len(self.snapshot) > 0:
            cycle = find_cycle_path(deps)
            diag.error(diag.codes.CYCLE_DETECTED,
                       cycle=" -> ".join(cycle) if cycle else "unknown",
                       node=cycle[0] if cycle else None)
            logger.info("Generation aborted: dependency cycle")
            return GenerationResult.failure(diag.errors, diag.events)

        expressions = ExpressionSynthesizer(self.snapshot, deps)

        for line in self.config.header_lines:
            self._emit(line)
        self._emit()

        assignments = self._generate_assignments(deps, expressions)
        if assignments:
            self._emit_section(self.config.assignments_header, assignments)
            self._emit()

        chains = ConditionChainBuilder(self.snapshot, deps, expressions,
                                       indent=self.config.indent)
        self._emit_section(self.config.conditions_header, chains.build())

        GraphValidator(self.snapshot, diag).validate()

        code = "\n".join(self.code_lines)
        logger.debug("Generated %d line(s), %d warning(s)",
                     len(self.code_lines), len(diag.warnings))
        return GenerationResult(code=code, errors=diag.errors,
                                warnings=diag.warnings, events=diag.events)

    # ===================================================================
    # SECTION 3: Flat Output Assignments
    # ===================================================================

    def _generate_assignments(self, deps: DependencyGraph,
                              expressions: ExpressionSynthesizer) -> List[str]:
        """
        One ``Output[<id>] = <expr>`` per output node with a dependency.

        Uses the output's first upstream node; this covers outputs driven
        directly by arithmetic, independently of any condition chain.
        """
        assignments = []
        for node in self.snapshot.nodes_of_type(NodeType.OUTPUT):
            source = deps.first_dependency(node.id)
            if source is None:
                continue
            expr = expressions.synthesize(source)
            assignments.append(f"Output[{format_scalar(node.config.output_id)}] = {expr}")
        return assignments


def generate_code(snapshot: GraphSnapshot, config: Optional[CompilerConfig] = None) -> GenerationResult:
    """Compile ``snapshot`` with a fresh generator."""
    return PsyLangCodeGenerator(snapshot, config).generate()

