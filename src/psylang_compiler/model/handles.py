"""
Port data kinds and connection compatibility.

Every handle carries an implied data kind derived from the owning node type
and the port role. The editor refuses wires between incompatible kinds; the
compiler does not enforce this itself but exposes the same rules so that
snapshots produced elsewhere can be linted.
"""

from enum import Enum
from typing import List, Optional

from .core import Edge, GraphSnapshot, Node
from .types import ConditionType, NodeType


class HandleDataType(Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    EXECUTION = "execution"

    def __str__(self):
        return self.value


class HandleRole(Enum):
    SOURCE = "source"
    TARGET = "target"


# Handle ids the compiler consults
CONDITION = "condition"
EXECUTION = "execution"
TRUE_BRANCH = "true"
FALSE_BRANCH = "false"
VALUE = "value"
INPUT_A = "input-a"
INPUT_B = "input-b"
MULTI_INPUT = "multi-input"

_SOURCE_KINDS = {
    NodeType.ANSWER: HandleDataType.NUMBER,
    NodeType.SCORE: HandleDataType.NUMBER,
    NodeType.SUM: HandleDataType.NUMBER,
    NodeType.NUMBER: HandleDataType.NUMBER,
    NodeType.MATH: HandleDataType.NUMBER,
    NodeType.ASSIGN: HandleDataType.NUMBER,
    NodeType.COMPARISON: HandleDataType.BOOLEAN,
    NodeType.LOGICAL: HandleDataType.BOOLEAN,
    NodeType.CONDITION: HandleDataType.EXECUTION,
}

_TARGET_KINDS = {
    NodeType.MATH: HandleDataType.NUMBER,
    NodeType.COMPARISON: HandleDataType.NUMBER,
    NodeType.OUTPUT: HandleDataType.NUMBER,
    NodeType.LOGICAL: HandleDataType.BOOLEAN,
    NodeType.LABEL: HandleDataType.EXECUTION,
}


def handle_data_type(node: Optional[Node], handle_id: Optional[str],
                     role: HandleRole) -> Optional[HandleDataType]:
    """
    Resolve the data kind of one port.

    Args:
        node: Node owning the port (None for an unknown node)
        handle_id: Port identifier, None for the default port
        role: Whether the port emits (SOURCE) or receives (TARGET) the wire

    Returns:
        The port's HandleDataType, or None when the node has no such port
    """
    if node is None:
        return None

    if role == HandleRole.SOURCE:
        return _SOURCE_KINDS.get(node.node_type)

    if node.node_type == NodeType.CONDITION:
        if (node.config.condition_type == ConditionType.ELSEIF
                and handle_id == EXECUTION):
            return HandleDataType.EXECUTION
        return HandleDataType.BOOLEAN

    if node.node_type == NodeType.ASSIGN:
        if handle_id == VALUE:
            return HandleDataType.NUMBER
        if handle_id == EXECUTION:
            return HandleDataType.EXECUTION
        return None

    return _TARGET_KINDS.get(node.node_type)


def are_handle_types_compatible(source_type: Optional[HandleDataType],
                                target_type: Optional[HandleDataType]) -> bool:
    """Two ports may be wired only when both kinds are known and equal."""
    if source_type is None or target_type is None:
        return False
    return source_type == target_type


def is_valid_connection(snapshot: GraphSnapshot, edge: Edge) -> bool:
    source_type = handle_data_type(snapshot.get(edge.source), edge.source_handle, HandleRole.SOURCE)
    target_type = handle_data_type(snapshot.get(edge.target), edge.target_handle, HandleRole.TARGET)
    return are_handle_types_compatible(source_type, target_type)


def check_connections(snapshot: GraphSnapshot) -> List[Edge]:
    """Return the usable edges whose port kinds do not match, in edge order."""
    return [e for e in snapshot.usable_edges if not is_valid_connection(snapshot, e)]


# Node kinds whose every input port accepts a single wire
_SINGLE_INPUT_NODES = (NodeType.OUTPUT, NodeType.LABEL, NodeType.CONDITION, NodeType.ASSIGN)

# Math operators read through input-a / input-b instead of folding
_PORTED_MATH_OPERATORS = ("-", "/")


def is_single_connection(node: Optional[Node], handle_id: Optional[str]) -> bool:
    """
    True if input port ``handle_id`` of ``node`` accepts at most one wire.

    - output, label, condition, assign: every input port
    - math with ``-`` or ``/``: ``input-a`` and ``input-b``
    - comparison: ``input-a`` and ``input-b``
    """
    if node is None:
        return False
    if node.node_type in _SINGLE_INPUT_NODES:
        return True
    if handle_id not in (INPUT_A, INPUT_B):
        return False
    if node.node_type == NodeType.MATH:
        return node.config.operator in _PORTED_MATH_OPERATORS
    return node.node_type == NodeType.COMPARISON


def extra_connections(snapshot: GraphSnapshot) -> List[Edge]:
    """
    Usable edges wired into an already occupied single-connection port.

    The first wire into a port (in edge order) is the one the compiler reads;
    every later wire into the same port is returned, in edge order.
    """
    occupied = set()
    extras = []
    for edge in snapshot.usable_edges:
        if not is_single_connection(snapshot.get(edge.target), edge.target_handle):
            continue
        port = (edge.target, edge.target_handle or None)
        if port in occupied:
            extras.append(edge)
        else:
            occupied.add(port)
    return extras
