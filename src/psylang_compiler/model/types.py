"""
Type system for PsyLang graphs.

Provides the closed node-type enumeration, the per-variant configuration
payloads and the helpers that turn an editor's open ``config`` mapping into
one of them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union
from enum import Enum


class NodeType(Enum):
    """Node kinds offered by the visual builder."""

    # Inputs
    ANSWER = "answer"
    SCORE = "score"
    SUM = "sum"
    NUMBER = "number"

    # Operators
    MATH = "math"
    COMPARISON = "comparison"
    LOGICAL = "logical"

    # Effects / control flow
    OUTPUT = "output"
    LABEL = "label"
    CONDITION = "condition"
    ASSIGN = "assign"

    def __str__(self):
        return self.value


class ConditionType(Enum):
    """Position of a condition node inside an if/else-if chain."""
    IF = "if"
    ELSEIF = "elseif"

    def __str__(self):
        return self.value


Scalar = Union[int, float, str, bool]


@dataclass(frozen=True)
class EmptyConfig:
    """Configuration for node kinds that carry no settings (``sum``)."""


@dataclass(frozen=True)
class QuestionConfig:
    """``answer`` / ``score`` nodes: which questionnaire item is read."""
    question_id: Scalar = 1


@dataclass(frozen=True)
class NumberConfig:
    value: Scalar = 0


@dataclass(frozen=True)
class OperatorConfig:
    """``math``, ``comparison`` and ``logical`` nodes."""
    operator: str


@dataclass(frozen=True)
class OutputConfig:
    output_id: Scalar = 0


@dataclass(frozen=True)
class LabelConfig:
    label_id: Scalar = 0
    value: Scalar = "Unknown"


@dataclass(frozen=True)
class ConditionConfig:
    condition_type: ConditionType = ConditionType.IF

    def __post_init__(self):
        if isinstance(self.condition_type, str):
            object.__setattr__(self, 'condition_type', ConditionType(self.condition_type))


@dataclass(frozen=True)
class AssignConfig:
    target_output: Scalar = 1


NodeConfig = Union[
    EmptyConfig,
    QuestionConfig,
    NumberConfig,
    OperatorConfig,
    OutputConfig,
    LabelConfig,
    ConditionConfig,
    AssignConfig,
]

# Default operator per operator-carrying node type
DEFAULT_OPERATORS: Dict[NodeType, str] = {
    NodeType.MATH: "+",
    NodeType.COMPARISON: ">",
    NodeType.LOGICAL: "&&",
}

# Commutative math operators folded over every upstream input
MULTI_INPUT_OPERATORS = frozenset({"+", "*"})


def parse_node_type(type_str: str) -> NodeType:
    """
    Parse a node type string to NodeType enum.

    Args:
        type_str: String like "math", "condition", etc.

    Returns:
        NodeType enum value

    Raises:
        ValueError: If type_str is not recognized
    """
    try:
        return NodeType(str(type_str).lower())
    except ValueError:
        valid = ", ".join(nt.value for nt in NodeType)
        raise ValueError(f"Unknown node type '{type_str}'. Valid types: {valid}")


def _pick(raw: Mapping[str, Any], key: str, default: Any) -> Any:
    # The editor treats every falsy setting as "not configured"
    value = raw.get(key)
    return value if value else default


def make_config(node_type: NodeType, raw: Optional[Mapping[str, Any]]) -> NodeConfig:
    """
    Build the typed configuration payload for a node.

    Args:
        node_type: Kind of the node owning the configuration
        raw: Open key/value mapping as exported by the editor (may be None)

    Returns:
        The config dataclass matching ``node_type``; unrecognized keys are ignored

    Example:
        >>> make_config(NodeType.MATH, {"operator": "-"})
        OperatorConfig(operator='-')
    """
    raw = raw or {}

    if node_type in (NodeType.ANSWER, NodeType.SCORE):
        return QuestionConfig(question_id=_pick(raw, "questionId", 1))
    if node_type == NodeType.NUMBER:
        return NumberConfig(value=_pick(raw, "value", 0))
    if node_type in DEFAULT_OPERATORS:
        return OperatorConfig(operator=str(_pick(raw, "operator", DEFAULT_OPERATORS[node_type])))
    if node_type == NodeType.OUTPUT:
        return OutputConfig(output_id=_pick(raw, "outputId", 0))
    if node_type == NodeType.LABEL:
        return LabelConfig(
            label_id=_pick(raw, "labelId", 0),
            value=_pick(raw, "value", "Unknown"),
        )
    if node_type == NodeType.CONDITION:
        condition_type = str(_pick(raw, "conditionType", "if")).lower()
        try:
            return ConditionConfig(condition_type=ConditionType(condition_type))
        except ValueError:
            return ConditionConfig()
    if node_type == NodeType.ASSIGN:
        return AssignConfig(target_output=_pick(raw, "targetOutput", 1))
    return EmptyConfig()


def format_scalar(value: Scalar) -> str:
    """Render a config scalar the way the editor displays it (``7.0`` -> ``7``)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
