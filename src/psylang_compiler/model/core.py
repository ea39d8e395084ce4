"""
Core semantic classes for PsyLang graphs.

These classes represent the immutable snapshot a compilation works on,
completely independent of the editor that produced it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .types import NodeConfig, NodeType, make_config, parse_node_type


class GraphFormatError(ValueError):
    """Raised when a graph snapshot violates the node/edge input contract."""


@dataclass(frozen=True)
class Node:
    """
    A typed node of the visual program.

    Attributes:
        id: Unique identifier inside one snapshot
        node_type: Closed node kind
        config: Typed configuration payload matching ``node_type``
        raw_config: The editor's original key/value settings
    """
    id: str
    node_type: NodeType
    config: NodeConfig
    raw_config: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def create(cls, node_id: str, node_type, config: Optional[Mapping[str, Any]] = None) -> "Node":
        """
        Convenience constructor taking the editor's plain values.

        Example:
            >>> Node.create("n1", "number", {"value": 7})
        """
        if not isinstance(node_type, NodeType):
            node_type = parse_node_type(node_type)
        raw = dict(config or {})
        return cls(id=str(node_id), node_type=node_type,
                   config=make_config(node_type, raw), raw_config=raw)

    def __str__(self):
        return f"Node({self.id}<{self.node_type}>)"


@dataclass(frozen=True)
class Edge:
    """
    A wire between two node ports.

    ``source_handle`` / ``target_handle`` name the output and input port on
    multi-port nodes; ``None`` (or an empty string) means the default port.
    """
    id: str
    source: str
    target: str
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None

    def __str__(self):
        src = f"{self.source}.{self.source_handle}" if self.source_handle else self.source
        dst = f"{self.target}.{self.target_handle}" if self.target_handle else self.target
        return f"Edge({self.id}: {src} -> {dst})"


def handle_matches(edge_handle: Optional[str], wanted: Optional[str]) -> bool:
    """True if ``edge_handle`` is ``wanted``, treating None and "" as the same unset port."""
    if not edge_handle and not wanted:
        return True
    return edge_handle == wanted


class GraphSnapshot:
    """
    Immutable node/edge snapshot handed to the compiler per invocation.

    Keeps both collections in input order. Edges whose endpoints are not
    nodes of the snapshot are kept in ``edges`` but excluded from
    ``usable_edges``, which is what every graph walk consumes.
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge] = ()):
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        self._edges: Tuple[Edge, ...] = tuple(edges)

        index: Dict[str, Node] = {}
        for node in self._nodes:
            if node.id in index:
                raise GraphFormatError(f"Duplicate node id '{node.id}'")
            index[node.id] = node
        self._index = index

        self._usable: Tuple[Edge, ...] = tuple(
            e for e in self._edges if e.source in index and e.target in index
        )

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    @property
    def usable_edges(self) -> Tuple[Edge, ...]:
        return self._usable

    @property
    def dangling_edges(self) -> List[Edge]:
        return [e for e in self._edges if e not in self._usable]

    def get(self, node_id: str) -> Optional[Node]:
        return self._index.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def __len__(self) -> int:
        return len(self._nodes)

    def nodes_of_type(self, *node_types: NodeType) -> List[Node]:
        """All nodes whose type is one of ``node_types``, in snapshot order."""
        return [n for n in self._nodes if n.node_type in node_types]

    def __str__(self):
        return f"GraphSnapshot({len(self._nodes)} nodes, {len(self._edges)} edges)"
