"""
Expression synthesis.

Renders the value produced by a node as an infix PsyLang expression by
recursively consuming its value dependencies.
"""

from typing import FrozenSet, Optional

from ..graph_builder.GraphDriver import DependencyGraph, NodeId, connected_node
from ..model.core import GraphSnapshot
from ..model.handles import INPUT_A, INPUT_B, VALUE
from ..model.types import MULTI_INPUT_OPERATORS, NodeType, format_scalar

# Literals used when a port has no producer
ZERO = "0"
TRUE = "true"


def circular_marker(node_id: NodeId) -> str:
    return f"[circular reference: {node_id}]"


def unknown_node_marker(node_id: NodeId) -> str:
    return f"[unknown node: {node_id}]"


def unknown_expression_marker(node_type) -> str:
    return f"[unknown expression: {node_type}]"


class ExpressionSynthesizer:
    """
    Rebuilds expressions from value-producing subgraphs.

    ``path`` holds the ids on the current recursion path only. It is an
    immutable set, so each operand of a fan-out starts from its parent's
    path and one branch can never mark a node circular for its sibling.
    """

    def __init__(self, snapshot: GraphSnapshot, deps: DependencyGraph):
        self.snapshot = snapshot
        self.deps = deps

    def synthesize(self, node_id: NodeId, path: FrozenSet[NodeId] = frozenset()) -> str:
        """
        Reconstruct the expression for ``node_id``.

        Handles:
        - Leaves: Answer[q], Score[q], numeric literals
        - math: pass-through, commutative fold, or ported binary operator
        - comparison: ported binary operator
        - logical: fold over every input
        - assign: pass-through of its ``value`` port

        Returns:
            str: PsyLang expression; never raises for odd graphs, inline
            bracketed markers are produced instead
        """
        if node_id in path:
            return circular_marker(node_id)
        path = path | {node_id}

        node = self.snapshot.get(node_id)
        if node is None:
            return unknown_node_marker(node_id)

        kind = node.node_type
        config = node.config

        if kind == NodeType.ANSWER:
            return f"Answer[{format_scalar(config.question_id)}]"

        elif kind == NodeType.SCORE:
            return f"Score[{format_scalar(config.question_id)}]"

        elif kind == NodeType.NUMBER:
            return format_scalar(config.value)

        elif kind == NodeType.MATH:
            return self._synthesize_math(node_id, config.operator, path)

        elif kind == NodeType.COMPARISON:
            return self._synthesize_ported(node_id, config.operator, path)

        elif kind == NodeType.LOGICAL:
            dependencies = self.deps.dependencies(node_id)
            if len(dependencies) < 2:
                return TRUE
            return self._fold(dependencies, config.operator, path)

        elif kind == NodeType.ASSIGN:
            return self._synthesize_port(node_id, VALUE, path)

        return unknown_expression_marker(kind)

    def synthesize_port(self, node_id: NodeId, handle_id: Optional[str],
                        default: str = ZERO) -> Optional[str]:
        """
        Expression for whatever feeds ``handle_id`` of ``node_id``.

        Returns ``default`` when the port is unconnected (None if default is None).
        """
        producer = connected_node(self.snapshot, node_id, handle_id)
        if producer is None:
            return default
        return self.synthesize(producer)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _synthesize_math(self, node_id: NodeId, operator: str, path: FrozenSet[NodeId]) -> str:
        dependencies = self.deps.dependencies(node_id)
        if not dependencies:
            return ZERO
        if len(dependencies) == 1:
            return self.synthesize(dependencies[0], path)
        if operator in MULTI_INPUT_OPERATORS:
            return self._fold(dependencies, operator, path)
        return self._synthesize_ported(node_id, operator, path)

    def _synthesize_ported(self, node_id: NodeId, operator: str, path: FrozenSet[NodeId]) -> str:
        # Order must follow the A/B ports, not dependency order
        left = self._synthesize_port(node_id, INPUT_A, path)
        right = self._synthesize_port(node_id, INPUT_B, path)
        return f"({left} {operator} {right})"

    def _synthesize_port(self, node_id: NodeId, handle_id: str, path: FrozenSet[NodeId]) -> str:
        producer = connected_node(self.snapshot, node_id, handle_id)
        if producer is None:
            return ZERO
        return self.synthesize(producer, path)

    def _fold(self, dependencies, operator: str, path: FrozenSet[NodeId]) -> str:
        parts = [self.synthesize(dep, path) for dep in dependencies]
        return "(" + f" {operator} ".join(parts) + ")"
