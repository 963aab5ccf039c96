"""
Subgraph extraction.

Merges a collection of paths into one renderable node/edge set.
"""

from dataclasses import dataclass, field
from typing import Iterable


@dataclass
class Subgraph:
    """Nodes and undirected edges selected from the full topology."""
    nodes: list[str] = field(default_factory=list)
    edges: list[tuple[str, str]] = field(default_factory=list)
    no_core: bool = False
    _node_keys: set = field(default_factory=set, init=False, repr=False, compare=False)
    _edge_keys: set = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._node_keys = set(self.nodes)
        self._edge_keys = {frozenset(e) for e in self.edges}

    @classmethod
    def no_core_sentinel(cls, start: str) -> "Subgraph":
        """Result for a start node with no reachable core."""
        return cls(nodes=[start], edges=[], no_core=True)

    def add_node(self, node: str) -> None:
        if node not in self._node_keys:
            self._node_keys.add(node)
            self.nodes.append(node)

    def add_edge(self, u: str, v: str) -> None:
        key = frozenset((u, v))
        if key not in self._edge_keys:
            self._edge_keys.add(key)
            self.edges.append((u, v))


def extract_subgraph(paths: Iterable[list[str]]) -> Subgraph:
    """
    Union of all path nodes (first-appearance order) and all consecutive
    pairs, with A-B and B-A counted as one edge.
    """
    nodes: dict[str, None] = {}
    edges: dict[frozenset, tuple[str, str]] = {}

    for path in paths:
        for node in path:
            nodes.setdefault(node)
        for u, v in zip(path, path[1:]):
            edges.setdefault(frozenset((u, v)), (u, v))

    return Subgraph(nodes=list(nodes), edges=list(edges.values()))
