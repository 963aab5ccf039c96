"""
Topology assembly for rendering.

Assigns each node of a result subgraph a layer (hop distance from a core
node) and formats nodes and edges as the JSON-ready dicts the front end
draws.
"""

import networkx as nx

from ..graph.builder import is_core
from ..graph.subgraph import Subgraph
from .convergence import ConvergenceResult


def assign_levels(
    nodes: list[str], edges: list[tuple[str, str]]
) -> dict[str, int]:
    """
    Hop distance of each node from the first core node in ``nodes``.

    Without a core node, levels fall back to list position. Nodes the
    root cannot reach get no level.
    """
    root = next((n for n in nodes if is_core(n)), None)
    if root is None:
        return {n: i for i, n in enumerate(nodes)}

    H = nx.Graph()
    H.add_nodes_from(nodes)
    H.add_edges_from(edges)
    return dict(nx.single_source_shortest_path_length(H, root))


def node_type(node: str) -> str:
    return "CORE" if is_core(node) else "ROUTER"


def _edge_list(edges: list[tuple[str, str]]) -> list[dict]:
    return [{"source": u, "target": v} for u, v in edges]


def build_topology(sub: Subgraph) -> dict:
    """Format a path-to-core subgraph."""
    levels = assign_levels(sub.nodes, sub.edges)
    return {
        "noCore": bool(sub.no_core),
        "nodes": [
            {"id": n, "type": node_type(n), "level": levels.get(n)}
            for n in sub.nodes
        ],
        "edges": _edge_list(sub.edges),
    }


def build_convergence_graph(result: ConvergenceResult) -> dict:
    """Format a convergence subgraph, flagging sources and the meeting node."""
    sub = result.subgraph
    sources = set(result.resolved)
    levels = assign_levels(sub.nodes, sub.edges)
    return {
        "nodes": [
            {
                "id": n,
                "source": n in sources,
                "convergence": n == result.convergence,
                "type": node_type(n),
                "level": levels.get(n),
            }
            for n in sub.nodes
        ],
        "edges": _edge_list(sub.edges),
    }
