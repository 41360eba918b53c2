"""
Tests for clique checks and size summaries.
"""

from cliquegraph import Graph
from cliquegraph.cliques.verify import clique_size_distribution, is_clique, is_maximal_clique


class TestIsClique:

    def test_pairwise_adjacent(self, triangle):
        assert is_clique(triangle, {1, 2, 3})
        assert is_clique(triangle, [1, 2])

    def test_missing_edge(self, path4):
        assert not is_clique(path4, {1, 2, 3})

    def test_empty_set_is_not_a_clique(self, triangle):
        assert not is_clique(triangle, set())

    def test_unknown_vertex(self, triangle):
        assert not is_clique(triangle, {1, 99})

    def test_singleton(self, path4):
        assert is_clique(path4, {4})

    def test_self_loop_is_not_adjacency(self):
        G = Graph.from_edges([(1, 1)], nodes=[2])
        assert not is_clique(G, {1, 2})


class TestIsMaximalClique:

    def test_maximal(self, triangle):
        assert is_maximal_clique(triangle, {1, 2, 3})

    def test_extendable(self, triangle):
        assert not is_maximal_clique(triangle, {1, 2})

    def test_isolated_vertex(self):
        assert is_maximal_clique(Graph.from_edges([(1, 2)], nodes=[3]), {3})

    def test_not_a_clique(self, path4):
        assert not is_maximal_clique(path4, {1, 3})


class TestSizeDistribution:

    def test_counts(self):
        assert clique_size_distribution([{1, 2}, {2, 3}, {4}, {5, 6, 7}]) == {1: 1, 2: 2, 3: 1}

    def test_empty(self):
        assert clique_size_distribution([]) == {}

    def test_sizes_ascending(self):
        assert list(clique_size_distribution([{1, 2, 3}, {4}])) == [1, 3]
