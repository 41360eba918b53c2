"""
Unit tests for the adjacency view and compaction layer.

Covers normalization (self-loops, parallel edges, asymmetric listings),
deterministic vertex ordering, and the bitset index space.
"""

import os
import subprocess
import sys

import networkx as nx
import pytest

from cliquegraph import Graph, InvalidGraphKind
from cliquegraph.cliques.adjacency import AdjacencyView, CompactGraph, iter_bits, popcount


class _EdgeModel:
    """Minimal third-party graph model exposing the engine protocol."""

    is_directed = False

    def __init__(self, adjacency):
        self._adjacency = adjacency

    def vertex_ids(self):
        return list(self._adjacency)

    def neighbors(self, v):
        return set(self._adjacency[v])


class TestAdjacencyViewInputs:
    """Test the supported graph kinds."""

    def test_from_graph_model(self, triangle):
        view = AdjacencyView.from_graph(triangle)
        assert view.vertices() == (1, 2, 3)
        assert view.neighbors(1) == frozenset({2, 3})

    def test_from_networkx(self):
        view = AdjacencyView.from_graph(nx.path_graph(3))
        assert view.vertices() == (0, 1, 2)
        assert view.neighbors(1) == frozenset({0, 2})

    def test_from_mapping(self):
        view = AdjacencyView.from_graph({1: [2, 3], 2: [3], 4: []})
        assert view.vertices() == (1, 2, 3, 4)
        assert view.neighbors(3) == frozenset({1, 2})
        assert view.neighbors(4) == frozenset()

    def test_from_protocol_object(self):
        view = AdjacencyView.from_graph(_EdgeModel({"a": ["b"], "b": ["a"]}))
        assert view.vertices() == ("a", "b")

    def test_view_passthrough(self, triangle):
        view = AdjacencyView.from_graph(triangle)
        assert AdjacencyView.from_graph(view) is view

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            AdjacencyView.from_graph(42)


class TestNormalization:
    """Self-loops, parallel edges and one-sided listings."""

    def test_self_loops_dropped(self):
        view = AdjacencyView.from_graph(Graph.from_edges([(1, 1), (1, 2)]))
        assert view.neighbors(1) == frozenset({2})
        assert view.number_of_edges() == 1

    def test_self_loop_only_vertex_is_isolated(self):
        view = AdjacencyView.from_graph(Graph.from_edges([(7, 7)]))
        assert view.vertices() == (7,)
        assert view.neighbors(7) == frozenset()

    def test_parallel_edges_collapsed(self):
        G = nx.MultiGraph([(1, 2), (1, 2), (2, 3)])
        view = AdjacencyView.from_graph(G)
        assert view.degree(2) == 2
        assert view.number_of_edges() == 2

    def test_asymmetric_mapping_is_symmetrized(self):
        view = AdjacencyView.from_graph({1: [2], 2: []})
        assert view.neighbors(2) == frozenset({1})

    def test_neighbor_only_vertex_is_added(self):
        view = AdjacencyView.from_graph({1: [2]})
        assert view.vertices() == (1, 2)
        assert view.neighbors(2) == frozenset({1})

    def test_unknown_vertex(self, triangle):
        view = AdjacencyView.from_graph(triangle)
        with pytest.raises(KeyError):
            view.neighbors(99)


class TestDirectedRejection:
    """Directed graphs are a contract violation."""

    def test_directed_model(self, directed_graph):
        with pytest.raises(InvalidGraphKind):
            AdjacencyView.from_graph(directed_graph)

    def test_directed_networkx(self):
        with pytest.raises(InvalidGraphKind):
            AdjacencyView.from_graph(nx.DiGraph([(1, 2)]))

    def test_invalid_graph_kind_is_value_error(self):
        assert issubclass(InvalidGraphKind, ValueError)

    def test_symmetrized_model_is_accepted(self, directed_graph):
        view = AdjacencyView.from_graph(directed_graph.to_undirected())
        assert view.neighbors(1) == frozenset({2, 3})


class TestVertexOrdering:
    """Ordering must be deterministic."""

    def test_sorted_by_id(self):
        view = AdjacencyView.from_graph(Graph.from_edges([(5, 3), (9, 1)]))
        assert view.vertices() == (1, 3, 5, 9)

    def test_mixed_types_keep_graph_order(self):
        G = Graph.from_edges([("b", 2), (1, "a")])
        view = AdjacencyView.from_graph(G)
        assert view.vertices() == ("b", 2, 1, "a")

    def test_neighbor_only_vertices_follow_repr_order(self):
        """Mixed ids listed only as neighbors in a set do not depend on set order."""
        view = AdjacencyView.from_graph({0: {"e", "c", "a", "d", "b"}})
        assert view.vertices() == (0, "a", "b", "c", "d", "e")

    def test_order_independent_of_hash_seed(self):
        """Tie-break results agree across interpreters with different hash seeds."""
        script = (
            "from cliquegraph import max_clique, all_maximal_cliques\n"
            "G = {0: {'a', 'b', 'c', 'd', 'e'}, (1, 2): {'x', 3.5, 'y'}}\n"
            "print(sorted(max_clique(G), key=repr))\n"
            "print([sorted(c, key=repr) for c in all_maximal_cliques(G)])\n"
        )
        outputs = set()
        for seed in range(6):
            env = dict(os.environ, PYTHONHASHSEED=str(seed))
            result = subprocess.run(
                [sys.executable, "-c", script],
                env=env, capture_output=True, text=True, check=True,
            )
            outputs.add(result.stdout)
        assert len(outputs) == 1
        assert outputs.pop().splitlines()[0] == "['a', 0]"

    def test_restrict_keeps_order(self):
        view = AdjacencyView.from_graph(nx.complete_graph(5))
        sub = view.restrict([4, 0, 2])
        assert sub.vertices() == (0, 2, 4)
        assert sub.neighbors(0) == frozenset({2, 4})

    def test_to_networkx(self, path4):
        G = AdjacencyView.from_graph(path4).to_networkx()
        assert set(G.edges()) == {(1, 2), (2, 3), (3, 4)}


class TestCompactGraph:
    """Dense index space and bitsets."""

    def test_indices_follow_vertex_order(self):
        compact = CompactGraph.from_graph(Graph.from_edges([(30, 10), (20, 10)]))
        assert compact.vertex_ids == (10, 20, 30)
        assert compact.index_of(10) == 0
        assert compact.index_of(30) == 2

    def test_neighbor_masks(self, path4):
        compact = CompactGraph.from_graph(path4)
        assert compact.neighbor_masks == [0b0010, 0b0101, 0b1010, 0b0100]
        assert compact.all_mask == 0b1111

    def test_decode(self, path4):
        compact = CompactGraph.from_graph(path4)
        assert compact.decode(0b1001) == {1, 4}
        assert compact.decode_indices([1, 2]) == {2, 3}
        assert compact.mask_of([2, 3]) == 0b0110

    def test_empty(self, empty_graph):
        compact = CompactGraph.from_graph(empty_graph)
        assert compact.n == 0
        assert compact.all_mask == 0


class TestBitHelpers:
    """iter_bits and popcount."""

    def test_iter_bits_ascending(self):
        assert list(iter_bits(0b101101)) == [0, 2, 3, 5]
        assert list(iter_bits(0)) == []

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0b1011) == 3
        assert popcount(1 << 200) == 1
