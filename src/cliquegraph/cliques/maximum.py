"""
Maximum clique selection by branch-and-bound over the maximal clique search.

The selector runs the pivoted Bron-Kerbosch search from bron_kerbosch.py and
keeps the largest clique seen. A running lower bound prunes every frame whose
|R| + |P| cannot reach the incumbent size.

Tie-Breaking:
    Among several maximum cliques the selector returns the one whose sorted
    index tuple is lexicographically smallest (indices follow ascending
    vertex id). Frames that could only tie the incumbent are deliberately not
    pruned, so every maximum clique is seen and the choice does not depend on
    discovery order.

Initial Bound:
    A greedy clique (highest degree first, then greedy extension) seeds the
    bound before the exact search starts. It only tightens pruning; the
    result is the same with or without it.

Examples:
    >>> import networkx as nx
    >>> from cliquegraph import max_clique
    >>> sorted(max_clique(nx.complete_graph(5)))
    [0, 1, 2, 3, 4]
    >>> max_clique(nx.Graph())
    set()
"""

from __future__ import annotations

from typing import Hashable, Optional, Set, Tuple
import logging

from cliquegraph.cliques.adjacency import CompactGraph, iter_bits, popcount
from cliquegraph.cliques.bron_kerbosch import search_maximal
from cliquegraph.cliques.limits import SearchBudget, SearchLimits

logger = logging.getLogger(__name__)

__all__ = ['max_clique', 'greedy_clique']


def greedy_clique(compact: CompactGraph) -> Tuple[int, ...]:
    """
    Quick lower bound: start from the highest-degree vertex, then repeatedly add
    the candidate with most neighbors among the remaining candidates.

    Ties go to the smallest index, so the result is deterministic.
    """
    if compact.n == 0:
        return ()

    masks = compact.neighbor_masks
    start = max(range(compact.n), key=lambda i: (popcount(masks[i]), -i))
    clique = [start]
    candidates = masks[start]

    while candidates:
        best_v = -1
        best_score = -1
        for v in iter_bits(candidates):
            score = popcount(masks[v] & candidates)
            if score > best_score:
                best_score = score
                best_v = v
        clique.append(best_v)
        candidates &= masks[best_v]

    return tuple(sorted(clique))


class _Incumbent:
    """Best clique so far, as a sorted index tuple."""

    def __init__(self, members: Tuple[int, ...]):
        self.members = members

    @property
    def size(self) -> int:
        return len(self.members)

    def offer(self, members: Tuple[int, ...]) -> None:
        if len(members) > self.size or (len(members) == self.size and members < self.members):
            self.members = members


def max_clique(graph, limits: Optional[SearchLimits] = None) -> Set[Hashable]:
    """
    Return one clique of maximum cardinality.

    Args:
        graph: Graph, networkx graph, graph-model object, or adjacency mapping
        limits: Optional time/frame/depth bounds

    Returns:
        Set of vertex ids. Empty set for an empty graph; a single vertex for
        an edgeless graph with vertices.

    Raises:
        InvalidGraphKind: If the graph is directed
        ResourceExhausted: If a limit is exceeded (no partial result)
    """
    compact = CompactGraph.from_graph(graph)
    if compact.n == 0:
        return set()

    budget = SearchBudget(limits)
    incumbent = _Incumbent(greedy_clique(compact))
    seed_size = incumbent.size

    for r in search_maximal(compact, budget, floor=lambda: incumbent.size):
        incumbent.offer(tuple(sorted(r)))

    logger.debug(
        f"Maximum clique: size {incumbent.size} (greedy seed {seed_size}) over "
        f"{compact.n} vertices, {budget.frames} frames in {budget.elapsed:.3f}s"
    )
    return compact.decode_indices(incumbent.members)
