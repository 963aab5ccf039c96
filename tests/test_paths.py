"""Tests for shortest-path and path-to-core search."""

import pytest
import networkx as nx
from transportgraph.graph.builder import build_graph
from transportgraph.graph.paths import (
    shortest_paths,
    path_to_core,
    path_to_core_via,
    path_from_node_to_core,
)


def _graph(adjacency):
    return build_graph(
        [{"NE Name": ne, "LLDP List": lldp} for ne, lldp in adjacency.items()]
    )


def _chain():
    return _graph({"A": "B", "B": "C", "C": "X-CN1-Y"})


def _two_routes():
    # A reaches the core over two equally long routes
    return _graph({
        "A": "B,E",
        "B": "C",
        "C": "SITE-CN2-RTR",
        "E": "F",
        "F": "SITE-CN2-RTR",
    })


def _mesh():
    return _graph({
        "N1": "N2,N4",
        "N2": "N3,N5",
        "N3": "N6",
        "N4": "N5,N7",
        "N5": "N6,N8",
        "N6": "N9",
        "N7": "N8",
        "N8": "N9",
    })


class TestShortestPaths:
    def test_chain(self):
        paths = shortest_paths(_chain(), "A")
        assert paths == [
            ["A"],
            ["A", "B"],
            ["A", "B", "C"],
            ["A", "B", "C", "X-CN1-Y"],
        ]

    def test_one_path_per_reachable_node(self):
        G = _two_routes()
        paths = shortest_paths(G, "A")
        assert len(paths) == G.number_of_nodes()
        assert len({p[-1] for p in paths}) == len(paths)

    def test_tie_goes_to_first_declared_neighbor(self):
        paths = shortest_paths(_two_routes(), "A")
        by_end = {p[-1]: p for p in paths}
        assert by_end["SITE-CN2-RTR"] == ["A", "B", "C", "SITE-CN2-RTR"]

    def test_optimality(self):
        G = _mesh()
        for path in shortest_paths(G, "N1"):
            assert len(path) - 1 == nx.shortest_path_length(G, "N1", path[-1])
            assert len(set(path)) == len(path)

    def test_unknown_start(self):
        assert shortest_paths(_chain(), "Z") == [["Z"]]

    def test_unreachable_nodes_absent(self):
        G = _graph({"A": "B", "C": "D"})
        ends = {p[-1] for p in shortest_paths(G, "A")}
        assert ends == {"A", "B"}


class TestPathToCore:
    def test_chain(self):
        sub = path_to_core(_chain(), "A")
        assert not sub.no_core
        assert sub.nodes == ["A", "B", "C", "X-CN1-Y"]
        assert sub.edges == [("A", "B"), ("B", "C"), ("C", "X-CN1-Y")]

    def test_collects_tied_paths(self):
        sub = path_to_core(_two_routes(), "A")
        assert sub.nodes == ["A", "B", "C", "SITE-CN2-RTR", "E", "F"]
        assert len(sub.edges) == 6

    def test_tied_paths_through_shared_node(self):
        G = _graph({"A": "B,C", "B": "D", "C": "D", "D": "X-CN1-Y"})
        sub = path_to_core(G, "A")
        assert set(sub.nodes) == {"A", "B", "C", "D", "X-CN1-Y"}
        assert len(sub.edges) == 5

    def test_longer_paths_pruned(self):
        G = _graph({"A": "B,C", "B": "X-CN1-Y", "C": "D", "D": "X-CN2-Y"})
        sub = path_to_core(G, "A")
        assert sub.nodes == ["A", "B", "X-CN1-Y"]

    def test_equidistant_cores(self):
        G = _graph({"A": "P-CN1-Q, R-CN2-S"})
        sub = path_to_core(G, "A")
        assert sub.nodes == ["A", "P-CN1-Q", "R-CN2-S"]
        assert len(sub.edges) == 2

    def test_start_is_core(self):
        sub = path_to_core(_chain(), "X-CN1-Y")
        assert not sub.no_core
        assert sub.nodes == ["X-CN1-Y"]
        assert sub.edges == []

    def test_no_core_sentinel(self):
        G = _graph({"A": "B", "B": "C", "C": "A"})
        sub = path_to_core(G, "A")
        assert sub.no_core
        assert sub.nodes == ["A"]
        assert sub.edges == []

    def test_unknown_start(self):
        sub = path_to_core(_chain(), "Z")
        assert sub.no_core
        assert sub.nodes == ["Z"]

    def test_edges_deduplicated(self):
        sub = path_to_core(_two_routes(), "A")
        keys = [frozenset(e) for e in sub.edges]
        assert len(keys) == len(set(keys))


class TestPathToCoreVia:
    def _graph(self):
        return _graph({
            "A": "B,E",
            "B": "C",
            "C": "X-CN1-Y",
            "E": "F",
            "F": "G",
            "G": "X-CN1-Y",
        })

    def test_forced_next_hop(self):
        sub = path_to_core_via(self._graph(), "A", "E")
        assert not sub.no_core
        assert sub.nodes == ["A", "E", "F", "G", "X-CN1-Y"]
        assert sub.edges[0] == ("A", "E")
        assert len(sub.edges) == 4

    def test_not_a_neighbor(self):
        sub = path_to_core_via(self._graph(), "A", "C")
        assert sub.no_core
        assert sub.nodes == ["A"]
        assert sub.edges == []

    def test_unknown_start(self):
        sub = path_to_core_via(self._graph(), "Z", "A")
        assert sub.no_core
        assert sub.nodes == ["Z"]

    def test_next_hop_without_onward_core(self):
        G = _graph({"A": "B,E", "B": "C"})
        sub = path_to_core_via(G, "A", "E")
        assert sub.no_core
        assert sub.nodes == ["A", "E"]
        assert sub.edges == [("A", "E")]

    def test_onward_route_back_through_start(self):
        G = _graph({"A": "B,E", "B": "X-CN1-Y", "E": ""})
        sub = path_to_core_via(G, "A", "E")
        # E only reaches the core back through A
        assert not sub.no_core
        assert sub.nodes == ["A", "E", "B", "X-CN1-Y"]
        assert sub.edges == [("A", "E"), ("A", "B"), ("B", "X-CN1-Y")]

    def test_core_start(self):
        G = _graph({"X-CN1-Y": "B"})
        sub = path_to_core_via(G, "X-CN1-Y", "B")
        assert not sub.no_core
        assert sub.nodes == ["X-CN1-Y", "B"]
        assert sub.edges == [("X-CN1-Y", "B")]

    def test_shorter_onward_route_preferred(self):
        G = _graph({"A": "B,E", "B": "X-CN1-Y", "E": "F", "F": "X-CN1-Y"})
        sub = path_to_core_via(G, "A", "E")
        assert sub.nodes == ["A", "E", "F", "X-CN1-Y"]
        assert ("A", "B") not in sub.edges


class TestPathFromNodeToCore:
    def test_first_path_only(self):
        path = path_from_node_to_core(_two_routes(), "A")
        assert path == ["A", "B", "C", "SITE-CN2-RTR"]

    def test_core_start(self):
        assert path_from_node_to_core(_chain(), "X-CN1-Y") == ["X-CN1-Y"]

    def test_no_core(self):
        G = _graph({"A": "B"})
        assert path_from_node_to_core(G, "A") is None
