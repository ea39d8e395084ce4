"""
Cycle detection and topological ordering of a dependency graph.
"""

from enum import Enum, auto
from typing import Dict, Iterable, List, Optional

import networkx as nx

from .GraphDriver import DependencyGraph, NodeId


class VisitState(Enum):
    UNVISITED = auto()
    IN_PROGRESS = auto()
    DONE = auto()


class CycleDetected(Exception):
    """Internal signal unwinding the depth-first search."""


def topological_sort(deps: DependencyGraph, order: Optional[Iterable[NodeId]] = None) -> List[NodeId]:
    """
    Order nodes so that every node follows all of its dependencies.

    Classic three-color depth-first search. Roots are visited in ``order``
    (defaults to graph insertion order, i.e. snapshot order).

    Returns:
        The sorted node ids, or an empty list if any cycle exists
    """
    state: Dict[NodeId, VisitState] = {n: VisitState.UNVISITED for n in deps.graph.nodes}
    result: List[NodeId] = []

    def visit(node_id: NodeId):
        current = state[node_id]
        if current == VisitState.IN_PROGRESS:
            raise CycleDetected(node_id)
        if current == VisitState.DONE:
            return
        state[node_id] = VisitState.IN_PROGRESS
        for dep in deps.dependencies(node_id):
            visit(dep)
        state[node_id] = VisitState.DONE
        result.append(node_id)

    roots = list(order) if order is not None else list(deps.graph.nodes)
    try:
        for node_id in roots:
            if node_id in state and state[node_id] == VisitState.UNVISITED:
                visit(node_id)
    except CycleDetected:
        return []
    return result


def find_cycle_path(deps: DependencyGraph) -> List[NodeId]:
    """
    Return one directed cycle as a closed path ``[a, b, ..., a]``.

    Empty when the graph is acyclic.
    """
    try:
        cycle = nx.find_cycle(deps.graph, orientation="original")
    except nx.NetworkXNoCycle:
        return []
    path = [u for u, _v, _direction in cycle]
    path.append(path[0])
    return path
