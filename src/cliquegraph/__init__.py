"""
cliquegraph - Clique enumeration for simple undirected graphs

Finds a maximum clique, all maximal cliques, or all cliques of an exact size,
over the library's Graph model, networkx graphs, or plain adjacency mappings.
"""

__version__ = "0.1.0"

from cliquegraph.core.graph import Graph
from cliquegraph.cliques import (
    InvalidGraphKind,
    ResourceExhausted,
    SearchLimits,
    all_maximal_cliques,
    count_k_cliques,
    iter_k_cliques,
    iter_maximal_cliques,
    k_cliques,
    max_clique,
)

__all__ = [
    "Graph",
    "SearchLimits",
    "InvalidGraphKind",
    "ResourceExhausted",
    "max_clique",
    "all_maximal_cliques",
    "iter_maximal_cliques",
    "k_cliques",
    "iter_k_cliques",
    "count_k_cliques",
]
