"""
Enumeration of all cliques of an exact size k.

Unlike the maximal clique search, every k-vertex clique is reported whether
or not it extends to a larger clique. A triangle has three 2-cliques even
though none of them is maximal.

Algorithm:
    Depth-bounded backtracking over the CompactGraph with an explicit stack of
    (R, P) frames:
        - P only holds candidates whose index is greater than the last member
          of R, so each k-subset is built in strictly increasing index order
          and discovered exactly once
        - a frame is pruned when |R| + |P| < k
        - a frame is reported exactly when |R| = k

    Before searching, vertices outside the (k-1)-core are dropped; they
    cannot be in any k-clique.

Contract:
    - k <= 0 → [] (a normal result, never an exception)
    - k == 1 → one singleton per vertex, isolated vertices included
    - k above the clique number → []

Examples:
    >>> import networkx as nx
    >>> from cliquegraph import k_cliques
    >>> len(k_cliques(nx.complete_graph(5), 3))
    10
    >>> k_cliques(nx.path_graph(4), 3)
    []
"""

from __future__ import annotations

from typing import Hashable, Iterator, List, Optional, Set, Tuple
import logging

from cliquegraph.cliques.adjacency import CompactGraph, iter_bits, popcount
from cliquegraph.cliques.limits import SearchBudget, SearchLimits
from cliquegraph.cliques.reduction import kcore_reduction

logger = logging.getLogger(__name__)

__all__ = ['search_k_cliques', 'iter_k_cliques', 'k_cliques', 'count_k_cliques']


def search_k_cliques(
    compact: CompactGraph,
    k: int,
    budget: SearchBudget,
) -> Iterator[Tuple[int, ...]]:
    """Yield k-cliques of `compact` as ascending index tuples, in lexicographic order."""
    if k <= 0 or compact.n < k:
        return

    masks = compact.neighbor_masks
    stack: List[Tuple[Tuple[int, ...], int]] = [((), compact.all_mask)]

    while stack:
        r, p = stack.pop()
        budget.charge(len(r))

        if len(r) == k:
            yield r
            continue

        if len(r) + popcount(p) < k:
            continue

        children = []
        for v in iter_bits(p):
            later = (p >> (v + 1)) << (v + 1)
            children.append((r + (v,), later & masks[v]))
        children.reverse()
        stack.extend(children)


def iter_k_cliques(
    graph,
    k: int,
    limits: Optional[SearchLimits] = None,
) -> Iterator[Set[Hashable]]:
    """
    Lazily enumerate all cliques with exactly `k` vertices.

    The graph is validated, reduced and compacted immediately; cliques are
    produced on demand.

    The timeout clock starts on the first next(); time the caller spends
    between items counts against timeout_seconds.

    Raises:
        InvalidGraphKind: If the graph is directed (raised on call)
        ResourceExhausted: During iteration, if a limit is exceeded
    """
    compact = _prepare(graph, k)
    budget = SearchBudget(limits)

    def generate() -> Iterator[Set[Hashable]]:
        budget.start()
        for r in search_k_cliques(compact, k, budget):
            yield compact.decode_indices(r)

    return generate()


def k_cliques(
    graph,
    k: int,
    limits: Optional[SearchLimits] = None,
) -> List[Set[Hashable]]:
    """
    Return every distinct clique with exactly `k` vertices.

    Args:
        graph: Graph, networkx graph, graph-model object, or adjacency mapping
        k: Clique size. Values <= 0 yield an empty list.
        limits: Optional time/frame/depth bounds

    Returns:
        List of vertex-id sets, ordered lexicographically by ascending vertex
        order. No vertex subset appears twice.

    Raises:
        InvalidGraphKind: If the graph is directed
        ResourceExhausted: If a limit is exceeded (no partial result)
    """
    compact = _prepare(graph, k)
    budget = SearchBudget(limits)

    cliques = [compact.decode_indices(r) for r in search_k_cliques(compact, k, budget)]
    logger.debug(
        f"{k}-clique search: {compact.n} vertices after reduction → {len(cliques)} cliques, "
        f"{budget.frames} frames in {budget.elapsed:.3f}s"
    )
    return cliques


def count_k_cliques(
    graph,
    k: int,
    limits: Optional[SearchLimits] = None,
) -> int:
    """Number of k-cliques, without materializing them as vertex-id sets."""
    compact = _prepare(graph, k)
    budget = SearchBudget(limits)
    return sum(1 for _ in search_k_cliques(compact, k, budget))


def _prepare(graph, k: int) -> CompactGraph:
    # Validation (directedness) happens even when k rules out any result
    view = kcore_reduction(graph, min_clique_size=max(k, 1))
    return CompactGraph.from_view(view)
