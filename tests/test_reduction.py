"""
Unit tests for graph reduction and complexity estimation.

Tests the pruning helpers in the reduction module:
- K-core reduction
- Degeneracy ordering computation
- Clique complexity estimation

Validation:
    - Soundness: no false cliques created by pruning
    - Completeness: no valid cliques lost by pruning
"""

import networkx as nx
import pytest

from cliquegraph import Graph, InvalidGraphKind, all_maximal_cliques
from cliquegraph.cliques.adjacency import AdjacencyView
from cliquegraph.cliques.reduction import (
    compute_degeneracy_ordering,
    estimate_clique_complexity,
    kcore_reduction,
)


def _cliques_at_least(G, min_size):
    return set(frozenset(c) for c in all_maximal_cliques(G) if len(c) >= min_size)


class TestKCoreReduction:
    """Test k-core decomposition for clique enumeration."""

    def test_returns_adjacency_view(self, triangle):
        assert isinstance(kcore_reduction(triangle, min_clique_size=3), AdjacencyView)

    def test_empty_graph(self, empty_graph):
        H = kcore_reduction(empty_graph, min_clique_size=3)
        assert len(H) == 0
        assert H.number_of_edges() == 0

    def test_single_node(self):
        """Single node is removed for min_clique_size > 1 and kept otherwise."""
        G = Graph.from_edges([], nodes=[1])
        assert len(kcore_reduction(G, min_clique_size=2)) == 0
        assert len(kcore_reduction(G, min_clique_size=1)) == 1

    def test_triangle(self, triangle):
        """Triangle survives for min_clique_size <= 3."""
        H = kcore_reduction(triangle, min_clique_size=3)
        assert H.vertices() == (1, 2, 3)
        assert H.number_of_edges() == 3

        # Degree >= 3 is required for 4-cliques
        assert len(kcore_reduction(triangle, min_clique_size=4)) == 0

    def test_triangle_with_pendant(self):
        G = Graph.from_edges([(1, 2), (2, 3), (3, 1), (3, 4)])
        H = kcore_reduction(G, min_clique_size=3)
        assert H.vertices() == (1, 2, 3)
        assert H.neighbors(3) == frozenset({1, 2})

    def test_iterative_pruning(self):
        """Path 0-1-2-3-4 peels away entirely for k=2."""
        assert len(kcore_reduction(nx.path_graph(5), min_clique_size=3)) == 0

    def test_complete_graph(self, k5):
        H = kcore_reduction(k5, min_clique_size=5)
        assert len(H) == 5
        assert H.number_of_edges() == 10
        assert len(kcore_reduction(k5, min_clique_size=6)) == 0

    def test_self_loops_do_not_count_toward_degree(self):
        """nx.k_core rejects self-loops; the normalized view has none."""
        G = Graph.from_edges([(1, 1), (1, 2), (2, 2)])
        assert len(kcore_reduction(G, min_clique_size=3)) == 0
        assert kcore_reduction(G, min_clique_size=2).vertices() == (1, 2)

    def test_sparse_graph_heavy_pruning(self):
        G = nx.erdos_renyi_graph(n=100, p=0.03, seed=42)
        H = kcore_reduction(G, min_clique_size=5)
        assert len(H) / G.number_of_nodes() < 0.5

    def test_soundness_no_false_cliques(self):
        G = nx.erdos_renyi_graph(n=50, p=0.1, seed=42)
        H = kcore_reduction(G, min_clique_size=4)
        assert _cliques_at_least(H, 4) <= _cliques_at_least(G, 4)

    def test_completeness_no_lost_cliques(self):
        G = nx.complete_graph(range(1, 6))
        G.add_edges_from(nx.complete_graph(range(6, 10)).edges())
        G.add_edges_from([(1, 6), (2, 7), (3, 8)])

        for min_size in (3, 4, 5):
            H = kcore_reduction(G, min_clique_size=min_size)
            assert _cliques_at_least(H, min_size) == _cliques_at_least(G, min_size)

    def test_directed_rejected(self, directed_graph):
        with pytest.raises(InvalidGraphKind):
            kcore_reduction(directed_graph, min_clique_size=3)


class TestDegeneracyOrdering:
    """Test degeneracy ordering computation."""

    def test_empty_graph(self, empty_graph):
        assert compute_degeneracy_ordering(empty_graph) == ([], 0)

    def test_single_node(self):
        ordering, d = compute_degeneracy_ordering({1: []})
        assert ordering == [1]
        assert d == 0

    def test_complete_graph(self):
        for n in [3, 5, 7]:
            ordering, d = compute_degeneracy_ordering(nx.complete_graph(n))
            assert len(ordering) == n
            assert d == n - 1

    def test_tree(self):
        for G in (nx.path_graph(10), nx.balanced_tree(2, 3), nx.star_graph(10)):
            assert compute_degeneracy_ordering(G)[1] == 1

    def test_cycle(self):
        for n in [3, 5, 10, 20]:
            assert compute_degeneracy_ordering(nx.cycle_graph(n))[1] == 2

    def test_ordering_is_permutation(self):
        G = nx.erdos_renyi_graph(50, 0.1, seed=42)
        ordering, _ = compute_degeneracy_ordering(G)
        assert sorted(ordering) == sorted(G.nodes())

    def test_ordering_by_core_number(self):
        """Pendant vertex (core 1) comes before the triangle (core 2)."""
        G = Graph.from_edges([(1, 2), (2, 3), (3, 1), (3, 4)])
        ordering, d = compute_degeneracy_ordering(G)
        assert ordering == [4, 1, 2, 3]
        assert d == 2


class TestComplexityEstimation:
    """Test clique complexity estimation."""

    def test_empty_graph(self, empty_graph):
        stats = estimate_clique_complexity(empty_graph)
        assert stats['n'] == 0
        assert stats['m'] == 0
        assert stats['degeneracy'] == 0
        assert stats['difficulty'] == 'trivial'

    def test_sparse_graph(self):
        stats = estimate_clique_complexity(nx.erdos_renyi_graph(100, 0.03, seed=42))
        assert stats['n'] == 100
        assert stats['density'] < 0.1
        assert stats['degeneracy'] < 20

    def test_dense_graph(self):
        stats = estimate_clique_complexity(nx.erdos_renyi_graph(50, 0.4, seed=42))
        assert stats['density'] > 0.3
        assert stats['degeneracy'] > 5

    def test_complete_graph(self):
        stats = estimate_clique_complexity(nx.complete_graph(20))
        assert stats['n'] == 20
        assert stats['m'] == 190
        assert stats['density'] == 1.0
        assert stats['degeneracy'] == 19
        assert stats['difficulty'] == 'hard'

    def test_estimate_bounds_actual_count(self):
        """n * 3^(d/3) is an upper bound on the number of maximal cliques."""
        G = nx.erdos_renyi_graph(50, 0.1, seed=42)
        stats = estimate_clique_complexity(G)
        assert stats['estimated_cliques'] >= len(all_maximal_cliques(G))

    def test_parallel_edges_counted_once(self):
        stats = estimate_clique_complexity(nx.MultiGraph([(1, 2), (1, 2), (2, 3)]))
        assert stats['m'] == 2
