"""Clique checks and result summaries."""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, Sequence, Set
import itertools

import numpy as np

from cliquegraph.cliques.adjacency import AdjacencyView

__all__ = ['is_clique', 'is_maximal_clique', 'clique_size_distribution']


def is_clique(graph, vertices: Iterable[Hashable]) -> bool:
    """
    True if `vertices` is a non-empty set of graph vertices, pairwise adjacent.

    Self-loops never count as adjacency.
    """
    view = AdjacencyView.from_graph(graph)
    members = set(vertices)
    if not members or any(v not in view for v in members):
        return False
    return all(v in view.neighbors(u) for u, v in itertools.combinations(members, 2))


def is_maximal_clique(graph, vertices: Iterable[Hashable]) -> bool:
    """True if `vertices` is a clique that no other vertex extends."""
    view = AdjacencyView.from_graph(graph)
    members = set(vertices)
    if not is_clique(view, members):
        return False
    common = set(view.vertices())
    for v in members:
        common &= view.neighbors(v)
    return not common


def clique_size_distribution(cliques: Sequence[Set[Hashable]]) -> Dict[int, int]:
    """
    Histogram of clique sizes.

    Returns:
        Mapping size → number of cliques, only for sizes that occur,
        in ascending size order.

    Examples:
        >>> clique_size_distribution([{1, 2}, {2, 3}, {4}])
        {1: 1, 2: 2}
    """
    if not cliques:
        return {}
    sizes = np.fromiter((len(c) for c in cliques), dtype=np.int64, count=len(cliques))
    counts = np.bincount(sizes)
    return {int(size): int(count) for size, count in enumerate(counts) if count > 0}
