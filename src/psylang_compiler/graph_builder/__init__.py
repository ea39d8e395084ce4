"""Snapshot loading and dependency analysis."""

from .GraphDriver import (
    DependencyGraph,
    DependencyGraphBuilder,
    build_dependency_graph,
    connected_node,
    connected_nodes_from_handle,
)
from .topology import find_cycle_path, topological_sort
from .loader import load_snapshot, snapshot_from_dict

__all__ = [
    "DependencyGraph",
    "DependencyGraphBuilder",
    "build_dependency_graph",
    "connected_node",
    "connected_nodes_from_handle",
    "topological_sort",
    "find_cycle_path",
    "load_snapshot",
    "snapshot_from_dict",
]
