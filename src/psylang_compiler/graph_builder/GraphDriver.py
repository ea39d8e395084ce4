#!/usr/bin/env python3
"""
GraphDriver.py — Dependency graph construction for PsyLang snapshots

This module derives the dependency structure the compiler walks from a
node/edge snapshot. The structure is rebuilt from scratch for every
compilation and never updated incrementally.

Architecture:
- Graph Builder: Creates a NetworkX DiGraph (edge source -> target)
- Coarse lookup: "which upstream nodes feed this node" (set semantics)
- Handle lookup: "which node is wired to this exact port" (edge scan)

The coarse path loses edge identity (handle, parallel wires); ported nodes
(two-input math/comparison, assign's value/execution split) must resolve
through the handle path.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Set

import networkx as nx

from ..model.core import GraphSnapshot, handle_matches

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
# Type Definitions
# ----------------------------------------------------------------------
NodeId = str
Graph = nx.DiGraph


# ----------------------------------------------------------------------
# DependencyGraph - derived forward/backward adjacency
# ----------------------------------------------------------------------
class DependencyGraph:
    """
    Forward ("depends-on") and backward ("feeds-into") adjacency.

    Every node id of the snapshot has an entry, so lookups never fail.
    Parallel edges collapse into one dependency. Iteration order of
    ``dependencies()`` is the order in which each distinct upstream node
    was first connected in the edge list.
    """

    def __init__(self, graph: Graph):
        self.graph = graph

    def dependencies(self, node_id: NodeId) -> List[NodeId]:
        """Upstream nodes feeding ``node_id`` (empty for unknown ids)."""
        if node_id not in self.graph:
            return []
        return list(self.graph.predecessors(node_id))

    def consumers(self, node_id: NodeId) -> List[NodeId]:
        """Downstream nodes consuming ``node_id`` (empty for unknown ids)."""
        if node_id not in self.graph:
            return []
        return list(self.graph.successors(node_id))

    def first_dependency(self, node_id: NodeId) -> Optional[NodeId]:
        deps = self.dependencies(node_id)
        return deps[0] if deps else None

    @property
    def forward(self) -> Dict[NodeId, Set[NodeId]]:
        return {n: set(self.graph.predecessors(n)) for n in self.graph.nodes}

    @property
    def backward(self) -> Dict[NodeId, Set[NodeId]]:
        return {n: set(self.graph.successors(n)) for n in self.graph.nodes}

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def to_graphml(self, path: Path):
        """
        Write the graph to GraphML for inspection in yEd or similar tools.

        Node attributes: ``kind`` (node type). Edge attributes:
        ``source_handle`` / ``target_handle`` of the first wire between the pair.
        """
        nx.write_graphml(self.graph, str(path))


# ----------------------------------------------------------------------
# DependencyGraphBuilder - snapshot to DiGraph converter
# ----------------------------------------------------------------------
class DependencyGraphBuilder:
    """
    Converts a GraphSnapshot into a DependencyGraph.

    The graph uses:
    - Nodes: one per snapshot node, attribute ``kind`` = node type
    - Edges: one per connected (source, target) pair; dangling wires are skipped
    """

    def __init__(self, snapshot: GraphSnapshot):
        self.snapshot = snapshot
        self.graph: Graph = nx.DiGraph()

    def _add_node(self, node_id: NodeId, kind: str):
        self.graph.add_node(node_id, kind=kind)

    def _link(self, src: NodeId, dst: NodeId, **attrs):
        """Create the dependency ``dst`` depends on ``src``; repeated wires keep the first."""
        if self.graph.has_edge(src, dst):
            return
        clean_attrs = {k: v for k, v in attrs.items() if v}
        self.graph.add_edge(src, dst, **clean_attrs)

    def build(self) -> DependencyGraph:
        for node in self.snapshot.nodes:
            self._add_node(node.id, node.node_type.value)

        for edge in self.snapshot.usable_edges:
            self._link(edge.source, edge.target,
                       source_handle=edge.source_handle,
                       target_handle=edge.target_handle)

        skipped = len(self.snapshot.edges) - len(self.snapshot.usable_edges)
        if skipped:
            logger.debug("Ignored %d dangling edge(s)", skipped)
        logger.debug("Dependency graph: %d nodes, %d edges",
                     self.graph.number_of_nodes(), self.graph.number_of_edges())
        return DependencyGraph(self.graph)


def build_dependency_graph(snapshot: GraphSnapshot) -> DependencyGraph:
    return DependencyGraphBuilder(snapshot).build()


# ----------------------------------------------------------------------
# Handle-specific lookups
# ----------------------------------------------------------------------
# Scan the edge list directly: O(E) per lookup, at most one producer is
# expected per single-connection port.

def connected_node(snapshot: GraphSnapshot, node_id: NodeId,
                   handle_id: Optional[str] = None) -> Optional[NodeId]:
    """
    Find the node wired into ``node_id`` at input port ``handle_id``.

    Returns the source of the first matching usable edge, or None.
    """
    for edge in snapshot.usable_edges:
        if edge.target == node_id and handle_matches(edge.target_handle, handle_id):
            return edge.source
    return None


def connected_nodes_from_handle(snapshot: GraphSnapshot, node_id: NodeId,
                                handle_id: Optional[str] = None) -> List[NodeId]:
    """Targets wired from output port ``handle_id`` of ``node_id``, in edge order."""
    targets = [
        e.target for e in snapshot.usable_edges
        if e.source == node_id and handle_matches(e.source_handle, handle_id)
    ]
    return list(dict.fromkeys(targets))
