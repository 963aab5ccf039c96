"""
Public topology analyses.

Each call loads the inventory once, builds a fresh graph and discards it
when done; nothing is shared or cached between calls.
"""

import logging

import networkx as nx

from ..graph.builder import build_graph, neighbors
from ..graph.paths import path_to_core, path_to_core_via
from ..ingest.inventory import InventoryLoader, InventoryRow
from ..ingest.resolver import lookup as lookup_rows, resolve_all
from .convergence import ConvergenceSelector
from .topology import build_convergence_graph, build_topology

logger = logging.getLogger(__name__)


class TopologyAnalyzer:
    """
    Core-path analysis engine.

    Provides:
      - Primary analysis (all shortest routes from an NE to the core)
      - Via analysis (route forced through one LLDP neighbor)
      - Convergence analysis (common meeting node of several NEs)
      - NE lookup by name fragment, Site ID or Site DEPS
    """

    def __init__(self, loader=None):
        # Anything with a load() -> rows method will do
        self.loader = loader or InventoryLoader()

    def _snapshot(self) -> tuple[list[InventoryRow], nx.Graph]:
        rows = self.loader.load()
        return rows, build_graph(rows)

    def analyze_primary(self, target: str) -> dict:
        """Shortest route(s) from ``target`` to the nearest core."""
        target = target.strip()
        _, G = self._snapshot()
        sub = path_to_core(G, target)
        logger.info(
            "Primary analysis for %s: %d nodes, no_core=%s",
            target, len(sub.nodes), sub.no_core,
        )
        return {"topo": build_topology(sub), "neighbors": neighbors(G, target)}

    def analyze_via(self, target: str, via: str) -> dict:
        """Route from ``target`` to the core leaving through ``via``."""
        target, via = target.strip(), via.strip()
        _, G = self._snapshot()
        sub = path_to_core_via(G, target, via)
        logger.info(
            "Via analysis %s -> %s: %d nodes, no_core=%s",
            target, via, len(sub.nodes), sub.no_core,
        )
        return build_topology(sub)

    def analyze_convergence(self, inputs: list[str]) -> dict:
        """Resolve ``inputs`` to NEs and find where their paths converge."""
        rows, G = self._snapshot()
        resolved = [n for n in resolve_all(rows, inputs) if n in G]
        result = ConvergenceSelector(G).analyze(resolved)
        return {
            "resolved": result.resolved,
            "convergence": result.convergence,
            "graph": build_convergence_graph(result),
        }

    def lookup(self, query: str) -> list[str]:
        """NE names matching a free-text query."""
        rows = self.loader.load()
        return lookup_rows(rows, query)


def analyze_primary(target: str, loader=None) -> dict:
    """Convenience: primary analysis against the configured inventory."""
    return TopologyAnalyzer(loader).analyze_primary(target)


def analyze_via(target: str, via: str, loader=None) -> dict:
    """Convenience: forced-next-hop analysis against the configured inventory."""
    return TopologyAnalyzer(loader).analyze_via(target, via)


def analyze_convergence(inputs: list[str], loader=None) -> dict:
    """Convenience: convergence analysis against the configured inventory."""
    return TopologyAnalyzer(loader).analyze_convergence(inputs)
