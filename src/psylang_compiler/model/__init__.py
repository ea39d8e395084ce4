"""
PsyLang graph model.

Immutable node/edge snapshot, the typed per-node configuration payloads and
the port data-kind rules shared by the compiler and the connection linter.
"""

from .types import (
    AssignConfig,
    ConditionConfig,
    ConditionType,
    EmptyConfig,
    LabelConfig,
    NodeConfig,
    NodeType,
    NumberConfig,
    OperatorConfig,
    OutputConfig,
    QuestionConfig,
    format_scalar,
    make_config,
    parse_node_type,
)
from .core import Edge, GraphFormatError, GraphSnapshot, Node, handle_matches
from .handles import (
    HandleDataType,
    HandleRole,
    are_handle_types_compatible,
    check_connections,
    extra_connections,
    handle_data_type,
    is_single_connection,
    is_valid_connection,
)

__all__ = [
    # Types
    "NodeType",
    "ConditionType",
    "NodeConfig",
    "EmptyConfig",
    "QuestionConfig",
    "NumberConfig",
    "OperatorConfig",
    "OutputConfig",
    "LabelConfig",
    "ConditionConfig",
    "AssignConfig",
    "parse_node_type",
    "make_config",
    "format_scalar",

    # Core
    "Node",
    "Edge",
    "GraphSnapshot",
    "GraphFormatError",
    "handle_matches",

    # Handles
    "HandleDataType",
    "HandleRole",
    "handle_data_type",
    "are_handle_types_compatible",
    "is_valid_connection",
    "check_connections",
    "is_single_connection",
    "extra_connections",
]
