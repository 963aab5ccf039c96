"""
Multi-NE convergence analysis.

Given several source NEs, find the one node their shortest paths have in
common on the way to the core, and build the subgraph that shows each
source reaching it plus the onward tail from it to the nearest core.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import networkx as nx

from ..graph.builder import core_nodes, is_core
from ..graph.paths import path_from_node_to_core, shortest_paths
from ..graph.subgraph import Subgraph

logger = logging.getLogger(__name__)


@dataclass
class ConvergenceResult:
    """Outcome of a convergence analysis."""
    resolved: list[str]
    convergence: Optional[str] = None
    scores: dict[str, int] = field(default_factory=dict)
    source_paths: dict[str, list[str]] = field(default_factory=dict)
    core_tail: Optional[list[str]] = None
    subgraph: Subgraph = field(default_factory=Subgraph)

    @property
    def found(self) -> bool:
        return self.convergence is not None


class ConvergenceSelector:
    """
    Pick the convergence node for a set of sources.

    Selection:
      - candidates are nodes reachable from every source
      - score = sum of hop distances from each source
      - non-core candidates win over core ones
      - ties: lowest score, then lowest worst-case distance from any one
        source, then fewest hops to a core, then NE name
    """

    def __init__(self, G: nx.Graph):
        self.G = G

    def trees(self, sources: list[str]) -> dict[str, dict[str, list[str]]]:
        """Per source, its shortest path to every reachable node."""
        return {
            src: {path[-1]: path for path in shortest_paths(self.G, src)}
            for src in sources
        }

    @staticmethod
    def candidates(
        trees: dict[str, dict[str, list[str]]]
    ) -> dict[str, list[int]]:
        """Nodes present in every tree, with their depth in each."""
        if not trees:
            return {}
        per_source = list(trees.values())
        return {
            node: [len(tree[node]) - 1 for tree in per_source]
            for node in per_source[0]
            if all(node in tree for tree in per_source[1:])
        }

    def select(self, candidates: dict[str, list[int]]) -> Optional[str]:
        """Best candidate under the non-core-first policy, or None."""
        if not candidates:
            return None

        core_dist = self._core_distances()

        def rank(node: str) -> tuple:
            depths = candidates[node]
            return (
                sum(depths),
                max(depths),
                core_dist.get(node, float("inf")),
                node,
            )

        non_core = [n for n in candidates if not is_core(n)]
        pool = non_core or list(candidates)
        return min(pool, key=rank)

    def analyze(self, sources: list[str]) -> ConvergenceResult:
        """Run the full analysis for already-resolved source NEs."""
        result = ConvergenceResult(resolved=list(sources))
        if len(sources) < 2:
            logger.debug("Convergence needs two sources, got %d", len(sources))
            return result

        trees = self.trees(sources)
        candidates = self.candidates(trees)
        result.scores = {n: sum(d) for n, d in candidates.items()}
        best = self.select(candidates)
        if best is None:
            logger.info("No node is reachable from all of %s", sources)
            return result

        result.convergence = best
        logger.debug(
            "Convergence at %s (score %d) among %d candidates",
            best, result.scores[best], len(candidates),
        )

        sub = Subgraph()
        for src in sources:
            path = trees[src][best]
            result.source_paths[src] = path
            self._merge(sub, path)

        tail = path_from_node_to_core(self.G, best)
        result.core_tail = tail
        if tail:
            self._merge(sub, tail)

        result.subgraph = sub
        return result

    def _core_distances(self) -> dict[str, int]:
        cores = core_nodes(self.G)
        if not cores:
            return {}
        return nx.multi_source_dijkstra_path_length(self.G, set(cores))

    @staticmethod
    def _merge(sub: Subgraph, path: list[str]) -> None:
        for node in path:
            sub.add_node(node)
        for u, v in zip(path, path[1:]):
            sub.add_edge(u, v)
