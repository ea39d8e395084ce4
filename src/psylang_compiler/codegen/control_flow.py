"""
Control-flow reconstruction.

Walks ``condition`` nodes and their ``true`` / ``false`` execution branches to
emit nested ``if`` / ``else if`` / ``else`` blocks. Branches terminate in
effectful nodes (output, label, assign) which become branch statements.
"""

from enum import Enum
from typing import List, Optional, Set

from ..graph_builder.GraphDriver import DependencyGraph, NodeId, connected_nodes_from_handle
from ..model.core import GraphSnapshot, Node
from ..model.handles import CONDITION, FALSE_BRANCH, TRUE_BRANCH, VALUE
from ..model.types import ConditionType, NodeType, format_scalar
from .expression import TRUE, ExpressionSynthesizer


class ChainMode(Enum):
    """How a condition node opens its block."""
    BLOCK = "block"                # fresh ``if (...) {``
    CONTINUATION = "continuation"  # ``} else if (...) {`` closing the parent's true block


def _quote(value) -> str:
    # Inserted verbatim; the value is not escaped
    return f'"{format_scalar(value)}"'


def label_statement(node: Node) -> str:
    """``Label[<id>] = "<value>";`` - the value is a literal, never synthesized."""
    return f"Label[{format_scalar(node.config.label_id)}] = {_quote(node.config.value)};"


class BranchStatementGenerator:
    """Turns the nodes reached from one branch handle into statements."""

    def __init__(self, snapshot: GraphSnapshot, deps: DependencyGraph,
                 expressions: ExpressionSynthesizer):
        self.snapshot = snapshot
        self.deps = deps
        self.expressions = expressions

    def statement(self, node_id: NodeId) -> Optional[str]:
        """
        One statement for a branch target, or None when the node has nothing to emit.

        Non-effectful node types inside a branch are skipped silently.
        """
        node = self.snapshot.get(node_id)
        if node is None:
            return None

        if node.node_type == NodeType.OUTPUT:
            source = self.deps.first_dependency(node_id)
            if source is None:
                return None
            expr = self.expressions.synthesize(source)
            return f"Output[{format_scalar(node.config.output_id)}] = {expr};"

        if node.node_type == NodeType.LABEL:
            return label_statement(node)

        if node.node_type == NodeType.ASSIGN:
            expr = self.expressions.synthesize_port(node_id, VALUE, default=None)
            if expr is None:
                return None
            return f"Output[{format_scalar(node.config.target_output)}] = {expr};"

        return None

    def statements(self, node_ids: List[NodeId]) -> List[str]:
        result = []
        for node_id in node_ids:
            stmt = self.statement(node_id)
            if stmt is not None:
                result.append(stmt)
        return result


class ConditionChainBuilder:
    """
    Emits one ``if / else if / ... / else`` block per chain root.

    A chain root is an ``if`` condition that no other condition node feeds.
    ``elseif`` nodes reached through a ``false`` handle continue their
    parent's chain at the same indentation level.
    """

    def __init__(self, snapshot: GraphSnapshot, deps: DependencyGraph,
                 expressions: ExpressionSynthesizer, indent: str = "    "):
        self.snapshot = snapshot
        self.deps = deps
        self.expressions = expressions
        self.branches = BranchStatementGenerator(snapshot, deps, expressions)
        self.indent_unit = indent
        self.code_lines: List[str] = []
        self.indent_level = 0

    def _indent(self) -> str:
        return self.indent_unit * self.indent_level

    def _emit(self, line: str = ""):
        if line:
            self.code_lines.append(self._indent() + line)
        else:
            self.code_lines.append("")

    def _is_condition(self, node_id: NodeId) -> bool:
        node = self.snapshot.get(node_id)
        return node is not None and node.node_type == NodeType.CONDITION

    # ------------------------------------------------------------------
    # Chain roots and standalone labels
    # ------------------------------------------------------------------
    def chain_roots(self) -> List[Node]:
        fed_by_condition = {
            e.target for e in self.snapshot.usable_edges if self._is_condition(e.source)
        }
        return [
            n for n in self.snapshot.nodes_of_type(NodeType.CONDITION)
            if n.config.condition_type == ConditionType.IF and n.id not in fed_by_condition
        ]

    def standalone_labels(self) -> List[Node]:
        fed_by_condition = {
            e.target for e in self.snapshot.usable_edges if self._is_condition(e.source)
        }
        return [n for n in self.snapshot.nodes_of_type(NodeType.LABEL) if n.id not in fed_by_condition]

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def build(self) -> List[str]:
        """
        Generate every chain (each followed by a blank line), then the
        standalone label assignments in node order.
        """
        self.code_lines = []
        self.indent_level = 0

        for root in self.chain_roots():
            self._build_chain(root.id, ChainMode.BLOCK, set())
            self._emit()

        for label in self.standalone_labels():
            self._emit(label_statement(label))

        return list(self.code_lines)

    def _build_chain(self, node_id: NodeId, mode: ChainMode, chain: Set[NodeId]):
        """
        Emit one condition node and, through its false branch, the rest of its chain.

        Generates:
        if (cond) {              <- BLOCK
            true statements
        } else if (cond2) {      <- CONTINUATION, same level as the parent
            ...
        } else {
            false statements
        }
        """
        chain.add(node_id)
        expr = self.expressions.synthesize_port(node_id, CONDITION, default=TRUE)

        if mode == ChainMode.BLOCK:
            self._emit(f"if ({expr}) {{")
        else:
            self._emit(f"}} else if ({expr}) {{")

        self.indent_level += 1
        true_targets = connected_nodes_from_handle(self.snapshot, node_id, TRUE_BRANCH)
        for stmt in self.branches.statements(true_targets):
            self._emit(stmt)
        self.indent_level -= 1

        false_targets = connected_nodes_from_handle(self.snapshot, node_id, FALSE_BRANCH)
        next_conditions = [t for t in false_targets if self._is_condition(t)]
        if len(next_conditions) == 1 and next_conditions[0] not in chain:
            self._build_chain(next_conditions[0], ChainMode.CONTINUATION, chain)
            return

        false_statements = self.branches.statements(false_targets)
        if false_statements:
            self._emit("} else {")
            self.indent_level += 1
            for stmt in false_statements:
                self._emit(stmt)
            self.indent_level -= 1
        self._emit("}")
