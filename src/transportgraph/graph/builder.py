"""
LLDP adjacency graph builder.

Turns inventory rows into an undirected NetworkX graph. A peer declared
from only one side still yields a symmetric link, and peers that have no
row of their own still become nodes.
"""

import re
import logging
from typing import Iterable, Mapping, Union

import networkx as nx

from ..config import InventoryConfig
from ..ingest.inventory import InventoryRow

logger = logging.getLogger(__name__)

_CORE_PATTERN = re.compile(r"-CN\d+-", re.IGNORECASE)

RowLike = Union[InventoryRow, Mapping]


def is_core(node: str) -> bool:
    """True if the NE name carries the ``-CN<n>-`` core marker."""
    return bool(_CORE_PATTERN.search(node))


def build_graph(rows: Iterable[RowLike]) -> nx.Graph:
    """
    Build the adjacency graph.

    Neighbor order in ``G.adj[n]`` follows first declaration in the
    inventory, which makes it the tie-break order for every BFS below.
    """
    G = nx.Graph()
    skipped = 0

    for row in rows:
        if not isinstance(row, InventoryRow):
            row = InventoryRow.from_record(row, InventoryConfig())

        ne = row.ne_name.strip()
        if not ne:
            skipped += 1
            continue

        if ne not in G:
            G.add_node(ne)
        if row.site_id:
            G.nodes[ne]["site_id"] = row.site_id
        if row.site_deps:
            G.nodes[ne]["site_deps"] = list(row.site_deps)

        for peer in row.lldp:
            peer = peer.strip()
            if peer:
                G.add_edge(ne, peer)

    if skipped:
        logger.debug("Skipped %d inventory rows without an NE name", skipped)
    logger.debug(
        "Built graph: %d nodes, %d edges",
        G.number_of_nodes(), G.number_of_edges(),
    )
    return G


def neighbors(G: nx.Graph, node: str) -> list[str]:
    """Declared LLDP neighbors of ``node`` (empty for unknown nodes)."""
    if node not in G:
        return []
    return list(G.adj[node])


def core_nodes(G: nx.Graph) -> list[str]:
    """All core NEs in the graph, in insertion order."""
    return [n for n in G.nodes() if is_core(n)]
