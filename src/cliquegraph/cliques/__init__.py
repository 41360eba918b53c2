"""
Clique enumeration engine.

Modules:
    adjacency      - Read-only adjacency view and dense bitset compaction
    bron_kerbosch  - Maximal clique enumeration (pivoted Bron-Kerbosch)
    maximum        - Maximum clique selection (branch-and-bound)
    kcliques       - Exact-size clique enumeration
    reduction      - K-core reduction, degeneracy, complexity estimates
    limits         - Time/frame/depth bounds
    verify         - Clique checks and size summaries
"""

from cliquegraph.cliques.adjacency import AdjacencyView, CompactGraph
from cliquegraph.cliques.bron_kerbosch import all_maximal_cliques, iter_maximal_cliques
from cliquegraph.cliques.errors import InvalidGraphKind, ResourceExhausted
from cliquegraph.cliques.kcliques import count_k_cliques, iter_k_cliques, k_cliques
from cliquegraph.cliques.limits import SearchLimits
from cliquegraph.cliques.maximum import max_clique
from cliquegraph.cliques.reduction import (
    compute_degeneracy_ordering,
    estimate_clique_complexity,
    kcore_reduction,
)
from cliquegraph.cliques.verify import clique_size_distribution, is_clique, is_maximal_clique

__all__ = [
    # Engine
    'max_clique',
    'all_maximal_cliques',
    'iter_maximal_cliques',
    'k_cliques',
    'iter_k_cliques',
    'count_k_cliques',
    # Views and limits
    'AdjacencyView',
    'CompactGraph',
    'SearchLimits',
    # Errors
    'InvalidGraphKind',
    'ResourceExhausted',
    # Reduction
    'kcore_reduction',
    'compute_degeneracy_ordering',
    'estimate_clique_complexity',
    # Checks
    'is_clique',
    'is_maximal_clique',
    'clique_size_distribution',
]
