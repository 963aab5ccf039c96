"""
Shortest-path search over the LLDP graph.

All links are unit cost, so every search here is a breadth-first walk.
Ties between equally short routes are broken by adjacency order, i.e. the
order in which the inventory first declared each link.
"""

import logging
from collections import deque
from typing import Optional

import networkx as nx

from .builder import is_core, neighbors
from .subgraph import Subgraph, extract_subgraph

logger = logging.getLogger(__name__)


def shortest_paths(G: nx.Graph, start: str) -> list[list[str]]:
    """
    One shortest path from ``start`` to every node it can reach.

    Paths come back in BFS discovery order, beginning with ``[start]``.
    """
    if start not in G:
        return [[start]]
    return list(nx.single_source_shortest_path(G, start).values())


def path_to_core(G: nx.Graph, start: str) -> Subgraph:
    """
    Every shortest path from ``start`` to its nearest core node(s), merged.

    A node is entered again only by another path of the same length, so
    ties are enumerated while longer detours are never queued. Once a core
    is reached at depth d, paths longer than d are dropped.

    Returns the no-core sentinel when no core is reachable.
    """
    queue = deque([[start]])
    depth = {start: 1}
    found: list[list[str]] = []
    bound = float("inf")

    while queue:
        path = queue.popleft()
        if len(path) > bound:
            continue

        last = path[-1]
        if is_core(last):
            bound = len(path)
            found.append(path)
            continue

        next_len = len(path) + 1
        for n in neighbors(G, last):
            if depth.setdefault(n, next_len) == next_len:
                queue.append(path + [n])

    if not found:
        logger.debug("No core reachable from %s", start)
        return Subgraph.no_core_sentinel(start)

    logger.debug(
        "%d shortest core path(s) of %d hops from %s",
        len(found), bound - 1, start,
    )
    return extract_subgraph(found)


def path_to_core_via(G: nx.Graph, start: str, next_hop: str) -> Subgraph:
    """
    Route from ``start`` to the core, forced to leave through ``next_hop``.

    ``next_hop`` must be a direct neighbor of ``start``. The onward search
    from ``next_hop`` is unrestricted and may lead back through ``start``;
    the forced edge and ``start`` itself then appear once in the result.
    """
    if next_hop == start or next_hop not in neighbors(G, start):
        logger.debug("%s is not a neighbor of %s", next_hop, start)
        return Subgraph.no_core_sentinel(start)

    onward = path_to_core(G, next_hop)
    if onward.no_core:
        return Subgraph(
            nodes=[start, next_hop], edges=[(start, next_hop)], no_core=True
        )

    sub = Subgraph(nodes=[start], edges=[(start, next_hop)])
    for node in onward.nodes:
        sub.add_node(node)
    for u, v in onward.edges:
        sub.add_edge(u, v)
    return sub


def path_from_node_to_core(G: nx.Graph, start: str) -> Optional[list[str]]:
    """First shortest path from ``start`` to any core node, or None."""
    queue = deque([[start]])
    visited = {start}

    while queue:
        path = queue.popleft()
        last = path[-1]
        if is_core(last):
            return path

        for n in neighbors(G, last):
            if n not in visited:
                visited.add(n)
                queue.append(path + [n])

    return None
