"""
Pytest configuration and shared fixtures.

Provides the small reference graphs used across the clique test suites.
"""

import networkx as nx
import pytest

from cliquegraph import Graph


@pytest.fixture
def triangle():
    """Triangle 1-2-3."""
    return Graph.from_edges([(1, 2), (2, 3), (1, 3)])


@pytest.fixture
def path4():
    """Path 1-2-3-4."""
    return Graph.from_edges([(1, 2), (2, 3), (3, 4)])


@pytest.fixture
def k5():
    """Complete graph on vertices 0..4."""
    return nx.complete_graph(5)


@pytest.fixture
def empty_graph():
    """Graph with no vertices."""
    return Graph()


@pytest.fixture
def directed_graph():
    """Directed triangle."""
    return Graph.from_edges([(1, 2), (2, 3), (3, 1)], directed=True)


@pytest.fixture
def random_graphs():
    """Seeded G(n, p) graphs spanning sparse to dense."""
    return [
        nx.gnp_random_graph(n, p, seed=seed)
        for seed, (n, p) in enumerate([(12, 0.3), (20, 0.2), (25, 0.5), (30, 0.4), (18, 0.8)])
    ]
