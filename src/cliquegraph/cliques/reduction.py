"""
Graph reduction and complexity estimation for clique searches.

Key Tools:
    1. K-core reduction: drop vertices that cannot be in any clique of a given size
    2. Degeneracy ordering: peeling order and the degeneracy d(G)
    3. Complexity estimation: bound on the number of maximal cliques

Theoretical Foundation:
    The k-core of a graph is the maximal subgraph where every vertex has degree ≥ k.
    Every member of an m-clique has at least m-1 neighbors inside the clique, so
    vertices outside the (m-1)-core cannot be in any m-clique. The pruning is
    sound (no false cliques) and complete (no missed cliques).

All functions take the same inputs as the engine (Graph, networkx graph,
graph-model object, adjacency mapping or AdjacencyView) and work on the
normalized simple graph, which is what networkx's core routines expect
(nx.core_number rejects self-loops).

References:
    - Batagelj & Zaversnik (2003): "An O(m) Algorithm for Cores Decomposition of Networks"
    - Eppstein et al. (2010): "Listing All Maximal Cliques in Sparse Graphs in Near-Optimal Time"
    - Matula & Beck (1983): "Smallest-last ordering and clustering and graph coloring algorithms"

Examples:
    >>> from cliquegraph.cliques.adjacency import AdjacencyView
    >>> view = AdjacencyView.from_graph({1: [2, 3], 2: [3], 3: [4]})
    >>> reduced = kcore_reduction(view, min_clique_size=3)
    >>> reduced.vertices()  # 4 has degree 1 < 2
    (1, 2, 3)
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Tuple
import logging

import networkx as nx

from cliquegraph.cliques.adjacency import AdjacencyView

logger = logging.getLogger(__name__)

__all__ = [
    'kcore_reduction',
    'compute_degeneracy_ordering',
    'estimate_clique_complexity',
]


def kcore_reduction(graph, min_clique_size: int) -> AdjacencyView:
    """
    Restrict a graph to its (min_clique_size-1)-core.

    Args:
        graph: Any engine input, or an AdjacencyView
        min_clique_size: Smallest clique size of interest (m)

    Returns:
        AdjacencyView induced on the (m-1)-core, in the original vertex order.
        The input view itself is returned when m <= 1 (nothing can be pruned).

    Examples:
        >>> import networkx as nx
        >>> kcore_reduction(nx.path_graph(5), min_clique_size=3).vertices()
        ()
    """
    view = AdjacencyView.from_graph(graph)
    k = min_clique_size - 1

    if k <= 0 or len(view) == 0:
        return view

    core = nx.k_core(view.to_networkx(), k=k)
    reduced = view.restrict(core.nodes())

    n_removed = len(view) - len(reduced)
    if n_removed > 0:
        pct_removed = 100 * n_removed / len(view)
        logger.debug(
            f"K-core reduction (k={k}): removed {n_removed}/{len(view)} "
            f"vertices ({pct_removed:.1f}%) → {len(reduced)} vertices, "
            f"{reduced.number_of_edges()} edges"
        )
    else:
        logger.debug(f"K-core reduction (k={k}): no vertices removed ({len(view)} vertices)")

    return reduced


def compute_degeneracy_ordering(graph) -> Tuple[List[Hashable], int]:
    """
    Compute a degeneracy ordering and the degeneracy d(G).

    Degeneracy is the smallest k such that every subgraph has a vertex of
    degree ≤ k; it equals the maximum core number. The number of maximal
    cliques is at most n * 3^(d/3).

    Returns:
        (ordering, degeneracy): vertices sorted by core number (ascending, ties
        in the view's vertex order) and d(G)

    Examples:
        >>> import networkx as nx
        >>> compute_degeneracy_ordering(nx.complete_graph(5))[1]
        4
    """
    view = AdjacencyView.from_graph(graph)
    if len(view) == 0:
        return [], 0

    core_numbers: Dict[Hashable, int] = nx.core_number(view.to_networkx())
    degeneracy = max(core_numbers.values()) if core_numbers else 0
    # sorted() is stable, so ties keep the view's deterministic order
    ordering = sorted(view.vertices(), key=lambda v: core_numbers.get(v, 0))

    logger.debug(f"Degeneracy ordering: {len(ordering)} vertices, degeneracy d={degeneracy}")
    return ordering, degeneracy


def estimate_clique_complexity(graph) -> Dict:
    """
    Estimate how expensive maximal clique enumeration will be.

    Returns:
        Dictionary with:
            - 'n': Number of vertices
            - 'm': Number of edges (after normalization)
            - 'density': Edge density (0 to 1)
            - 'degeneracy': Graph degeneracy
            - 'estimated_cliques': Upper bound n * 3^(d/3) on maximal cliques
            - 'difficulty': 'trivial', 'easy', 'moderate', 'hard' or 'very_hard'

    Decision Heuristics:
        - degeneracy ≤ 5: easy
        - degeneracy ≤ 15: moderate
        - degeneracy ≤ 25: hard (consider --workers and a --timeout)
        - degeneracy > 25: very_hard (set limits before enumerating)
    """
    view = AdjacencyView.from_graph(graph)
    n = len(view)
    m = view.number_of_edges()

    if n == 0:
        return {
            'n': 0,
            'm': 0,
            'density': 0.0,
            'degeneracy': 0,
            'estimated_cliques': 0,
            'difficulty': 'trivial',
        }

    density = 2 * m / (n * (n - 1)) if n > 1 else 0.0
    _, degeneracy = compute_degeneracy_ordering(view)
    estimated_cliques = n * (3 ** (degeneracy / 3))

    if degeneracy <= 5:
        difficulty = 'easy'
    elif degeneracy <= 15:
        difficulty = 'moderate'
    elif degeneracy <= 25:
        difficulty = 'hard'
    else:
        difficulty = 'very_hard'

    result = {
        'n': n,
        'm': m,
        'density': round(density, 4),
        'degeneracy': degeneracy,
        'estimated_cliques': int(estimated_cliques),
        'difficulty': difficulty,
    }

    logger.debug(
        f"Complexity estimate: n={n}, m={m}, density={density:.3f}, "
        f"degeneracy={degeneracy}, est_cliques={int(estimated_cliques)}, "
        f"difficulty={difficulty}"
    )
    return result
